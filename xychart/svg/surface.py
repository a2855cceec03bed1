from __future__ import annotations

from dataclasses import dataclass, replace
import math
from pathlib import Path
import xml.etree.ElementTree as ET

from xychart.geometry import BLACK, RGBA, Font, Rectangle, color_to_hex, require_anchor
from xychart.surface import DEFAULT_LAYER


SVG_NS = "http://www.w3.org/2000/svg"
CHAR_WIDTH_FACTOR = 0.6

_BASELINES = {"top": "text-before-edge", "center": "central", "bottom": "text-after-edge"}
_TEXT_ANCHORS = {"left": "start", "center": "middle", "right": "end"}


@dataclass(frozen=True)
class _State:
    fill_color: RGBA = BLACK
    line_color: RGBA = BLACK
    line_width: float = 1.0
    font: Font = Font()
    clip_id: str | None = None


class SvgSurface:
    """Surface that builds an SVG element tree, one ``<g>`` per layer.

    Text is measured approximately (`CHAR_WIDTH_FACTOR` of the font size per
    character, one font size high) since no glyph metrics are available.
    """

    def __init__(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self.width = float(width)
        self.height = float(height)
        self.root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "width": _num(self.width),
                "height": _num(self.height),
                "viewBox": f"0 0 {_num(self.width)} {_num(self.height)}",
            },
        )
        self._defs = ET.SubElement(self.root, "defs")
        self._layers: dict[str, ET.Element] = {}
        self._stacks: dict[str, list[ET.Element]] = {}
        self._layer = DEFAULT_LAYER
        self._state = _State()
        self._saved: list[_State] = []
        self._clip_count = 0
        self._path: list[str] = []
        self.set_layer(DEFAULT_LAYER)

    # -- state --------------------------------------------------------------

    def set_fill_color(self, color: RGBA) -> None:
        self._state = replace(self._state, fill_color=color)

    def set_line_color(self, color: RGBA) -> None:
        self._state = replace(self._state, line_color=color)

    def set_line_width(self, width: float) -> None:
        if width < 0:
            raise ValueError("width must be >= 0")
        self._state = replace(self._state, line_width=float(width))

    def set_font(self, font: Font) -> None:
        self._state = replace(self._state, font=font)

    def set_clip(self, rect: Rectangle | None) -> None:
        if rect is None:
            self._state = replace(self._state, clip_id=None)
            return
        self._clip_count += 1
        clip_id = f"clip-{self._clip_count}"
        clip = ET.SubElement(self._defs, "clipPath", {"id": clip_id})
        ET.SubElement(
            clip,
            "rect",
            {"x": _num(rect.x), "y": _num(rect.y), "width": _num(rect.width), "height": _num(rect.height)},
        )
        self._state = replace(self._state, clip_id=clip_id)

    def save(self) -> None:
        self._saved.append(self._state)

    def restore(self) -> None:
        if not self._saved:
            raise ValueError("restore without matching save")
        self._state = self._saved.pop()

    def begin_group(self, name: str) -> None:
        stack = self._stacks[self._layer]
        stack.append(ET.SubElement(stack[-1], "g", {"class": name}))

    def end_group(self) -> None:
        stack = self._stacks[self._layer]
        if len(stack) <= 1:
            raise ValueError("end_group without begin_group")
        stack.pop()

    def set_layer(self, name: str) -> None:
        if name not in self._layers:
            layer = ET.SubElement(self.root, "g", {"class": f"layer-{name}"})
            self._layers[name] = layer
            self._stacks[name] = [layer]
        self._layer = name

    @property
    def layer(self) -> str:
        return self._layer

    def clear(self) -> None:
        layer = self._layers[self._layer]
        for child in list(layer):
            layer.remove(child)
        self._stacks[self._layer] = [layer]

    def _emit(self, tag: str, attrs: dict[str, str]) -> ET.Element:
        if self._state.clip_id is not None:
            attrs["clip-path"] = f"url(#{self._state.clip_id})"
        return ET.SubElement(self._stacks[self._layer][-1], tag, attrs)

    def _stroke_attrs(self) -> dict[str, str]:
        c = self._state.line_color
        attrs = {"stroke": color_to_hex(c), "stroke-width": _num(self._state.line_width)}
        if c[3] < 255:
            attrs["stroke-opacity"] = _num(c[3] / 255.0)
        return attrs

    def _fill_attrs(self) -> dict[str, str]:
        c = self._state.fill_color
        attrs = {"fill": color_to_hex(c)}
        if c[3] < 255:
            attrs["fill-opacity"] = _num(c[3] / 255.0)
        return attrs

    # -- shapes -------------------------------------------------------------

    def draw_line(self, x0: float, y0: float, x1: float, y1: float) -> None:
        self._emit("line", {"x1": _num(x0), "y1": _num(y0), "x2": _num(x1), "y2": _num(y1), **self._stroke_attrs()})

    def draw_rect(self, x: float, y: float, width: float, height: float) -> None:
        attrs = {"x": _num(x), "y": _num(y), "width": _num(width), "height": _num(height), "fill": "none"}
        self._emit("rect", {**attrs, **self._stroke_attrs()})

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        attrs = {"x": _num(x), "y": _num(y), "width": _num(width), "height": _num(height)}
        self._emit("rect", {**attrs, **self._fill_attrs()})

    def draw_circle(self, cx: float, cy: float, r: float) -> None:
        attrs = {"cx": _num(cx), "cy": _num(cy), "r": _num(r)}
        self._emit("circle", {**attrs, **self._fill_attrs(), **self._stroke_attrs()})

    # -- paths --------------------------------------------------------------

    def begin_path(self) -> None:
        self._path = []

    def move_to(self, x: float, y: float) -> None:
        self._path.append(f"M{_num(x)},{_num(y)}")

    def line_to(self, x: float, y: float) -> None:
        self._path.append(f"L{_num(x)},{_num(y)}")

    def close_path(self) -> None:
        self._path.append("Z")

    def stroke(self) -> None:
        if self._path:
            self._emit("path", {"d": " ".join(self._path), "fill": "none", **self._stroke_attrs()})

    def fill(self) -> None:
        if self._path:
            self._emit("path", {"d": " ".join(self._path), "stroke": "none", **self._fill_attrs()})

    # -- text ---------------------------------------------------------------

    def text_dim(self, text: str) -> tuple[float, float]:
        size = self._state.font.size_px
        return (CHAR_WIDTH_FACTOR * size * len(text), size)

    def draw_string(self, text: str, x: float, y: float) -> None:
        self._text(text, x, y, {})

    def draw_aligned_string(self, text: str, x: float, y: float, anchor: str) -> tuple[float, float]:
        self._text(text, x, y, _anchor_attrs(anchor))
        return self.text_dim(text)

    def draw_rotated_string(self, text: str, x: float, y: float, anchor: str, angle: float) -> None:
        attrs = _anchor_attrs(anchor)
        attrs["transform"] = f"rotate({_num(math.degrees(angle))} {_num(x)} {_num(y)})"
        self._text(text, x, y, attrs)

    def _text(self, text: str, x: float, y: float, extra: dict[str, str]) -> None:
        font = self._state.font
        attrs = {
            "x": _num(x),
            "y": _num(y),
            "font-family": font.family,
            "font-size": _num(font.size_px),
            **self._fill_attrs(),
            **extra,
        }
        if font.bold:
            attrs["font-weight"] = "bold"
        if font.italic:
            attrs["font-style"] = "italic"
        self._emit("text", attrs).text = text

    # -- output -------------------------------------------------------------

    def to_markup(self) -> str:
        return ET.tostring(self.root, encoding="unicode")

    def save_svg(self, path: str | Path) -> None:
        Path(path).write_text(self.to_markup(), encoding="utf-8")


def _anchor_attrs(anchor: str) -> dict[str, str]:
    anchor = require_anchor(anchor)
    if anchor == "center":
        vertical, horizontal = "center", "center"
    else:
        vertical, _, horizontal = anchor.partition("_")
    return {"text-anchor": _TEXT_ANCHORS[horizontal], "dominant-baseline": _BASELINES[vertical]}


def _num(value: float) -> str:
    if not math.isfinite(value):
        raise ValueError(f"non-finite coordinate: {value!r}")
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text
