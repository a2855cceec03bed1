from __future__ import annotations

import unittest

import numpy as np

from xychart.chart import Chart, bar_chart, line_chart, scatter_chart
from xychart.dataset import XYDataset
from xychart.geometry import Rectangle
from xychart.plot import XYPlot
from xychart.svg import SvgSurface


def _dataset() -> XYDataset:
    dataset = XYDataset()
    dataset.add_series("temperature", [3.0, 5.0, 4.0, 8.0, 6.0])
    return dataset


class ChartTests(unittest.TestCase):
    def test_to_rgba_renders_white_background(self) -> None:
        chart = scatter_chart(_dataset(), "Readings")
        rgba = chart.to_rgba(160, 120)
        self.assertEqual(rgba.shape, (120, 160, 4))
        self.assertEqual(rgba.dtype, np.uint8)
        self.assertEqual(tuple(rgba[0, 159]), (255, 255, 255, 255))
        # Data background shows somewhere inside the plot.
        self.assertTrue(np.any(np.all(rgba[..., :3] == 230, axis=-1)))

    def test_to_svg_contains_titles_and_items(self) -> None:
        chart = line_chart(_dataset(), "Readings", subtitle="daily", x_label="day", y_label="deg")
        markup = chart.to_svg(320, 200)
        self.assertTrue(markup.startswith("<svg"))
        for text in ("Readings", "daily", "day", "deg"):
            self.assertIn(f">{text}</text>", markup)
        self.assertIn("<path", markup)

    def test_bar_chart_draws_one_bar_per_item(self) -> None:
        dataset = XYDataset()
        for i, value in enumerate([3.0, 5.0, 4.0]):
            dataset.add_interval("count", float(i), i - 0.4, i + 0.4, value)
        chart = bar_chart(dataset, "Counts")
        surface = SvgSurface(300, 200)
        chart.draw(surface, Rectangle(0, 0, 300, 200))
        bars = [r for r in surface.root.iter("rect") if r.get("fill") == "#64e1d5"]
        self.assertEqual(len(bars), 3)
        self.assertLessEqual(chart.plot.x_axis.lower_bound, -0.4)

    def test_title_band_shrinks_plot_area(self) -> None:
        chart = Chart(XYPlot(_dataset()))
        surface = SvgSurface(300, 200)
        chart.draw(surface, Rectangle(0, 0, 300, 200))
        self.assertEqual(chart.plot_area, Rectangle(4, 4, 292, 192))

        chart.set_title("Title", "Sub")
        chart.draw(surface, Rectangle(0, 0, 300, 200))
        # 16px title plus 12px subtitle.
        self.assertEqual(chart.plot_area, Rectangle(4, 32, 292, 164))

    def test_redraw_replaces_previous_frame(self) -> None:
        chart = scatter_chart(_dataset())
        surface = SvgSurface(300, 200)
        bounds = Rectangle(0, 0, 300, 200)
        chart.draw(surface, bounds)
        chart.draw(surface, bounds)
        self.assertEqual(len(list(surface.root.iter("circle"))), 5)

    def test_title_alignment(self) -> None:
        chart = scatter_chart(_dataset(), "T")
        chart.title_align = "right"
        surface = SvgSurface(300, 200)
        chart.draw(surface, Rectangle(0, 0, 300, 200))
        title = next(t for t in surface.root.iter("text") if t.text == "T")
        self.assertEqual((title.get("x"), title.get("text-anchor")), ("296", "end"))

    def test_plot_changes_reach_chart_listeners(self) -> None:
        dataset = _dataset()
        chart = scatter_chart(dataset)
        seen: list[Chart] = []
        chart.add_listener(seen.append)

        dataset.add("temperature", 5.0, 1.0)
        chart.set_title("new")
        self.assertEqual(seen, [chart, chart])

        chart.dispose()
        dataset.add("temperature", 6.0, 1.0)
        self.assertEqual(len(seen), 2)


if __name__ == "__main__":
    unittest.main()
