from __future__ import annotations

import math
from pathlib import Path
import tempfile
import unittest
import xml.etree.ElementTree as ET

from xychart.geometry import Font, Rectangle
from xychart.svg import SvgSurface


def _layer(surface: SvgSurface, name: str) -> ET.Element:
    layer = surface.root.find(f"g[@class='layer-{name}']")
    assert layer is not None
    return layer


class SvgSurfaceTests(unittest.TestCase):
    def test_root_element(self) -> None:
        surface = SvgSurface(120, 80)
        self.assertEqual(surface.root.tag, "svg")
        self.assertEqual(surface.root.get("viewBox"), "0 0 120 80")
        with self.assertRaises(ValueError):
            SvgSurface(0, 10)

    def test_shapes_carry_colours(self) -> None:
        surface = SvgSurface(100, 100)
        surface.set_fill_color((255, 0, 0, 128))
        surface.fill_rect(1, 2, 3, 4)
        surface.set_line_color((0, 0, 255, 255))
        surface.set_line_width(2.5)
        surface.draw_line(0, 0, 10, 10)

        rect = _layer(surface, "default").find("rect")
        self.assertEqual((rect.get("x"), rect.get("y"), rect.get("width"), rect.get("height")), ("1", "2", "3", "4"))
        self.assertEqual(rect.get("fill"), "#ff0000")
        self.assertEqual(rect.get("fill-opacity"), "0.502")
        line = _layer(surface, "default").find("line")
        self.assertEqual(line.get("stroke"), "#0000ff")
        self.assertEqual(line.get("stroke-width"), "2.5")
        self.assertIsNone(line.get("stroke-opacity"))

    def test_outline_rect_has_no_fill(self) -> None:
        surface = SvgSurface(100, 100)
        surface.draw_rect(0, 0, 5, 5)
        self.assertEqual(_layer(surface, "default").find("rect").get("fill"), "none")

    def test_paths(self) -> None:
        surface = SvgSurface(100, 100)
        surface.begin_path()
        surface.move_to(0, 0)
        surface.line_to(10, 5)
        surface.close_path()
        surface.stroke()
        surface.fill()
        paths = _layer(surface, "default").findall("path")
        self.assertEqual([p.get("d") for p in paths], ["M0,0 L10,5 Z", "M0,0 L10,5 Z"])
        self.assertEqual((paths[0].get("fill"), paths[1].get("stroke")), ("none", "none"))

    def test_clip_references_clip_path(self) -> None:
        surface = SvgSurface(100, 100)
        surface.save()
        surface.set_clip(Rectangle(10, 10, 50, 50))
        surface.draw_circle(20, 20, 3)
        surface.restore()
        surface.draw_circle(30, 30, 3)

        circles = _layer(surface, "default").findall("circle")
        self.assertEqual(circles[0].get("clip-path"), "url(#clip-1)")
        self.assertIsNone(circles[1].get("clip-path"))
        clip = surface.root.find("defs/clipPath")
        self.assertEqual(clip.get("id"), "clip-1")
        self.assertEqual(clip.find("rect").get("width"), "50")

    def test_groups_nest_within_layer(self) -> None:
        surface = SvgSurface(100, 100)
        surface.begin_group("data-area")
        surface.fill_rect(0, 0, 1, 1)
        surface.end_group()
        group = _layer(surface, "default").find("g[@class='data-area']")
        self.assertEqual(len(group.findall("rect")), 1)
        with self.assertRaises(ValueError):
            surface.end_group()
        with self.assertRaises(ValueError):
            surface.restore()

    def test_clear_only_touches_current_layer(self) -> None:
        surface = SvgSurface(100, 100)
        surface.fill_rect(0, 0, 10, 10)
        surface.set_layer("progress")
        self.assertEqual(surface.layer, "progress")
        surface.fill_rect(0, 0, 5, 5)
        surface.clear()
        self.assertEqual(len(_layer(surface, "progress")), 0)
        self.assertEqual(len(_layer(surface, "default")), 1)

    def test_text_metrics_and_alignment(self) -> None:
        surface = SvgSurface(100, 100)
        surface.set_font(Font("serif", 10.0, bold=True))
        self.assertEqual(surface.text_dim("abcd"), (24.0, 10.0))

        dim = surface.draw_aligned_string("abcd", 50, 5, "top_center")
        self.assertEqual(dim, (24.0, 10.0))
        text = _layer(surface, "default").find("text")
        self.assertEqual(text.text, "abcd")
        self.assertEqual(text.get("text-anchor"), "middle")
        self.assertEqual(text.get("dominant-baseline"), "text-before-edge")
        self.assertEqual(text.get("font-weight"), "bold")
        self.assertEqual(text.get("font-family"), "serif")

    def test_rotated_text(self) -> None:
        surface = SvgSurface(100, 100)
        surface.draw_rotated_string("y", 10, 50, "bottom_center", -math.pi / 2)
        text = _layer(surface, "default").find("text")
        self.assertEqual(text.get("transform"), "rotate(-90 10 50)")
        self.assertEqual(text.get("dominant-baseline"), "text-after-edge")

    def test_non_finite_coordinates_rejected(self) -> None:
        surface = SvgSurface(100, 100)
        with self.assertRaises(ValueError):
            surface.draw_line(0, 0, math.nan, 1)

    def test_markup_round_trips_through_parser(self) -> None:
        surface = SvgSurface(100, 100)
        surface.draw_string("a < b", 5, 5)
        markup = surface.to_markup()
        self.assertIn('xmlns="http://www.w3.org/2000/svg"', markup)
        parsed = ET.fromstring(markup)
        self.assertEqual(parsed.tag, "{http://www.w3.org/2000/svg}svg")

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "chart.svg"
            surface.save_svg(path)
            self.assertEqual(path.read_text(encoding="utf-8"), markup)


if __name__ == "__main__":
    unittest.main()
