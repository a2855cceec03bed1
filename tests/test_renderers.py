from __future__ import annotations

import unittest

from xychart.dataset import XYDataset
from xychart.geometry import Rectangle
from xychart.plot import XYPlot
from xychart.renderers import SELECTION_ID, BarRenderer, BaseXYRenderer, ColorSource, LineRenderer, ScatterRenderer
from xychart.scheduler import RenderJob, draw_all_items
from xychart.svg import SvgSurface


AREA = Rectangle(0.0, 0.0, 100.0, 100.0)


def _render(plot: XYPlot) -> SvgSurface:
    surface = SvgSurface(100.0, 100.0)
    draw_all_items(RenderJob(surface, plot, plot.renderer, plot.dataset, AREA))
    return surface


class ColorSourceTests(unittest.TestCase):
    def test_default_palette_cycles_by_series(self) -> None:
        source = ColorSource()
        self.assertEqual(source.color(0), (100, 225, 213, 255))
        self.assertEqual(source.color(10), source.color(0))
        self.assertEqual(source.color(3, item_index=7), source.color(3))

    def test_custom_palette(self) -> None:
        source = ColorSource.of(["#000", (1, 2, 3)])
        self.assertEqual(source.color(1), (1, 2, 3, 255))
        with self.assertRaises(ValueError):
            ColorSource(())


class BaseRendererTests(unittest.TestCase):
    def test_y_range_from_dataset(self) -> None:
        renderer = BaseXYRenderer()
        self.assertIsNone(renderer.calc_y_range(XYDataset()))
        dataset = XYDataset().add("a", 0.0, -4.0).add("a", 1.0, 9.0)
        self.assertEqual(renderer.calc_y_range(dataset), (-4.0, 9.0))

    def test_draw_item_is_abstract(self) -> None:
        with self.assertRaises(NotImplementedError):
            BaseXYRenderer().draw_item(SvgSurface(10, 10), AREA, None, XYDataset(), 0, 0, 0)

    def test_colour_change_notifies_plot(self) -> None:
        renderer = ScatterRenderer()
        plot = XYPlot(XYDataset().add("a", 0.0, 0.0), renderer)
        seen: list[XYPlot] = []
        plot.add_listener(seen.append)
        renderer.set_fill_colors(ColorSource.of(["#123456"]))
        self.assertEqual(seen, [plot])


class ScatterRendererTests(unittest.TestCase):
    def test_one_circle_per_item(self) -> None:
        dataset = XYDataset().add("a", 0.0, 0.0).add("a", 1.0, 1.0).add("b", 0.5, 0.5)
        surface = _render(XYPlot(dataset, ScatterRenderer()))
        circles = list(surface.root.iter("circle"))
        self.assertEqual(len(circles), 3)
        self.assertTrue(all(c.get("r") == "3" for c in circles))
        self.assertTrue(all(c.get("stroke") == "#000000" for c in circles))

    def test_selected_items_double_radius(self) -> None:
        dataset = XYDataset().add("a", 0.0, 0.0).add("a", 1.0, 1.0)
        dataset.select(SELECTION_ID, "a", "a-1")
        surface = _render(XYPlot(dataset, ScatterRenderer()))
        self.assertEqual([c.get("r") for c in surface.root.iter("circle")], ["3", "6"])

    def test_item_color_property_overrides_palette(self) -> None:
        dataset = XYDataset().add("a", 0.0, 0.0, item_key="hot").add("a", 1.0, 1.0)
        dataset.set_item_property("a", "hot", "color", "#ff0000")
        surface = _render(XYPlot(dataset, ScatterRenderer()))
        fills = [c.get("fill") for c in surface.root.iter("circle")]
        self.assertEqual(fills, ["#ff0000", "#64e1d5"])

    def test_points_map_into_data_area(self) -> None:
        dataset = XYDataset().add("a", 0.0, 0.0).add("a", 10.0, 10.0)
        plot = XYPlot(dataset, ScatterRenderer())
        plot.x_axis.set_bounds(0.0, 10.0)
        plot.y_axis.set_bounds(0.0, 10.0)
        circles = list(_render(plot).root.iter("circle"))
        self.assertEqual((circles[0].get("cx"), circles[0].get("cy")), ("0", "100"))
        self.assertEqual((circles[1].get("cx"), circles[1].get("cy")), ("100", "0"))

    def test_radius_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            ScatterRenderer(radius=0.0)


class LineRendererTests(unittest.TestCase):
    def _dataset(self) -> XYDataset:
        dataset = XYDataset()
        dataset.add_series("a", [1.0, 2.0, 3.0])
        dataset.add_series("b", [3.0, 1.0])
        return dataset

    def test_series_drawn_as_one_path_each(self) -> None:
        surface = _render(XYPlot(self._dataset(), LineRenderer()))
        paths = list(surface.root.iter("path"))
        self.assertEqual(len(paths), 2)
        self.assertEqual(paths[0].get("d").count("L"), 2)
        self.assertEqual(paths[0].get("fill"), "none")
        self.assertEqual(list(surface.root.iter("circle")), [])

    def test_segments_when_not_drawing_paths(self) -> None:
        surface = _render(XYPlot(self._dataset(), LineRenderer(draw_series_as_path=False)))
        self.assertEqual(len(list(surface.root.iter("line"))), 3)
        self.assertEqual(list(surface.root.iter("path")), [])

    def test_markers_on_second_pass(self) -> None:
        renderer = LineRenderer(marker_radius=2.0)
        self.assertEqual(renderer.pass_count(), 2)
        surface = _render(XYPlot(self._dataset(), renderer))
        self.assertEqual(len(list(surface.root.iter("circle"))), 5)

    def test_invalid_configuration(self) -> None:
        with self.assertRaises(ValueError):
            LineRenderer(line_width=0.0)
        with self.assertRaises(ValueError):
            LineRenderer(marker_radius=-1.0)


class BarRendererTests(unittest.TestCase):
    def _dataset(self) -> XYDataset:
        dataset = XYDataset()
        dataset.add_interval("a", 1.0, 0.5, 1.5, 4.0)
        dataset.add_interval("a", 3.0, 2.5, 3.5, -2.0)
        return dataset

    def test_bars_span_interval_from_base(self) -> None:
        renderer = BarRenderer()
        self.assertEqual(renderer.pass_count(), 1)
        plot = XYPlot(self._dataset(), renderer)
        plot.x_axis.set_bounds(0.0, 4.0)
        plot.y_axis.set_bounds(-4.0, 4.0)

        surface = _render(plot)

        filled = [r for r in surface.root.iter("rect") if r.get("fill") != "none"]
        boxes = [tuple(float(r.get(k)) for k in ("x", "y", "width", "height")) for r in filled]
        self.assertEqual(boxes, [(12.5, 0.0, 25.0, 50.0), (62.5, 50.0, 25.0, 25.0)])
        self.assertEqual(filled[0].get("fill"), "#64e1d5")
        outlines = [r for r in surface.root.iter("rect") if r.get("fill") == "none"]
        self.assertEqual(len(outlines), 2)

    def test_y_range_includes_base(self) -> None:
        dataset = XYDataset().add("a", 0.0, 2.0).add("a", 1.0, 5.0)
        self.assertEqual(BarRenderer().calc_y_range(dataset), (0.0, 5.0))
        self.assertEqual(BarRenderer(base=8.0).calc_y_range(dataset), (2.0, 8.0))
        self.assertIsNone(BarRenderer().calc_y_range(XYDataset()))

        plot = XYPlot(dataset, BarRenderer())
        self.assertAlmostEqual(plot.y_axis.lower_bound, -0.25)

    def test_plain_items_draw_zero_width_bars(self) -> None:
        plot = XYPlot(XYDataset().add("a", 2.0, 3.0), BarRenderer(outline_width=0.0))
        plot.x_axis.set_bounds(0.0, 4.0)
        plot.y_axis.set_bounds(0.0, 4.0)
        rects = list(_render(plot).root.iter("rect"))
        self.assertEqual(len(rects), 1)
        self.assertEqual(float(rects[0].get("width")), 0.0)
        with self.assertRaises(ValueError):
            BarRenderer(outline_width=-1.0)


if __name__ == "__main__":
    unittest.main()
