from __future__ import annotations

from dataclasses import dataclass, replace
import math
from pathlib import Path

import numpy as np
from PIL import Image

from xychart.geometry import BLACK, RGBA, TRANSPARENT, Font, Rectangle
from xychart.raster.canvas import fill_rect
from xychart.raster.draw_lines import draw_polyline
from xychart.raster.draw_markers import draw_ring, fill_disc, fill_polygon
from xychart.raster.draw_text import draw_text, text_size
from xychart.raster.layers import LayerStack
from xychart.surface import DEFAULT_LAYER


@dataclass(frozen=True)
class _State:
    fill_color: RGBA = BLACK
    line_color: RGBA = BLACK
    line_width: float = 1.0
    font: Font = Font()
    clip: tuple[int, int, int, int] | None = None


class RasterSurface:
    """Surface backed by numpy RGBA layers; text comes from Pillow glyph masks."""

    def __init__(self, width: int, height: int, *, background: RGBA = TRANSPARENT) -> None:
        self.width = int(width)
        self.height = int(height)
        self.background = background
        self.layers = LayerStack(self.width, self.height)
        self.layers.get(DEFAULT_LAYER)
        self._layer = DEFAULT_LAYER
        self._state = _State()
        self._saved: list[_State] = []
        self._groups: list[str] = []
        self._path: list[list[tuple[float, float]]] = []
        self._closed: list[bool] = []

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
            self._state = replace(self._state, clip=None)
            return
        x0 = max(0, int(math.floor(rect.min_x)))
        y0 = max(0, int(math.floor(rect.min_y)))
        x1 = min(self.width, int(math.ceil(rect.max_x)))
        y1 = min(self.height, int(math.ceil(rect.max_y)))
        self._state = replace(self._state, clip=(x0, y0, max(x0, x1), max(y0, y1)))

    def save(self) -> None:
        self._saved.append(self._state)

    def restore(self) -> None:
        if not self._saved:
            raise ValueError("restore without matching save")
        self._state = self._saved.pop()

    def begin_group(self, name: str) -> None:
        self._groups.append(name)

    def end_group(self) -> None:
        if not self._groups:
            raise ValueError("end_group without begin_group")
        self._groups.pop()

    def set_layer(self, name: str) -> None:
        self.layers.get(name)
        self._layer = name

    @property
    def layer(self) -> str:
        return self._layer

    def clear(self) -> None:
        self.layers.clear(self._layer)

    def _target(self) -> tuple[np.ndarray, int, int]:
        """Current layer (or its clip view) and the offset to subtract from coordinates."""
        layer = self.layers.get(self._layer)
        clip = self._state.clip
        if clip is None:
            return (layer, 0, 0)
        x0, y0, x1, y1 = clip
        return (layer[y0:y1, x0:x1], x0, y0)

    def _stroke_width(self) -> int:
        return max(1, int(round(self._state.line_width)))

    # -- shapes -------------------------------------------------------------

    def draw_line(self, x0: float, y0: float, x1: float, y1: float) -> None:
        if self._state.line_width <= 0:
            return
        dst, ox, oy = self._target()
        draw_polyline(dst, [(x0 - ox, y0 - oy), (x1 - ox, y1 - oy)], self._state.line_color, width=self._stroke_width())

    def draw_rect(self, x: float, y: float, width: float, height: float) -> None:
        if self._state.line_width <= 0:
            return
        dst, ox, oy = self._target()
        pts = [(x, y), (x + width, y), (x + width, y + height), (x, y + height), (x, y)]
        draw_polyline(dst, [(px - ox, py - oy) for px, py in pts], self._state.line_color, width=self._stroke_width())

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        if not all(math.isfinite(v) for v in (x, y, width, height)):
            return
        dst, ox, oy = self._target()
        fill_rect(
            dst,
            int(round(x)) - ox,
            int(round(y)) - oy,
            int(round(x + width)) - ox,
            int(round(y + height)) - oy,
            self._state.fill_color,
        )

    def draw_circle(self, cx: float, cy: float, r: float) -> None:
        """Filled disc in the fill colour, outlined in the line colour."""
        dst, ox, oy = self._target()
        fill_disc(dst, cx - ox, cy - oy, r, self._state.fill_color)
        if self._state.line_width > 0:
            draw_ring(dst, cx - ox, cy - oy, r, self._state.line_color, width=self._state.line_width)

    # -- paths --------------------------------------------------------------

    def begin_path(self) -> None:
        self._path = []
        self._closed = []

    def move_to(self, x: float, y: float) -> None:
        self._path.append([(x, y)])
        self._closed.append(False)

    def line_to(self, x: float, y: float) -> None:
        if not self._path:
            self.move_to(x, y)
            return
        self._path[-1].append((x, y))

    def close_path(self) -> None:
        if self._closed:
            self._closed[-1] = True

    def stroke(self) -> None:
        if self._state.line_width <= 0:
            return
        dst, ox, oy = self._target()
        for points, closed in zip(self._path, self._closed):
            pts = points + [points[0]] if closed else points
            draw_polyline(dst, [(x - ox, y - oy) for x, y in pts], self._state.line_color, width=self._stroke_width())

    def fill(self) -> None:
        dst, ox, oy = self._target()
        for points in self._path:
            fill_polygon(dst, [(x - ox, y - oy) for x, y in points], self._state.fill_color)

    # -- text ---------------------------------------------------------------

    def text_dim(self, text: str) -> tuple[float, float]:
        w, h = text_size(text, self._state.font)
        return (float(w), float(h))

    def draw_string(self, text: str, x: float, y: float) -> None:
        self.draw_aligned_string(text, x, y, "bottom_left")

    def draw_aligned_string(self, text: str, x: float, y: float, anchor: str) -> tuple[float, float]:
        dst, ox, oy = self._target()
        w, h = draw_text(dst, text, x - ox, y - oy, self._state.font, self._state.fill_color, anchor=anchor)
        return (float(w), float(h))

    def draw_rotated_string(self, text: str, x: float, y: float, anchor: str, angle: float) -> None:
        dst, ox, oy = self._target()
        draw_text(dst, text, x - ox, y - oy, self._state.font, self._state.fill_color, anchor=anchor, angle=angle)

    # -- output -------------------------------------------------------------

    def to_rgba(self) -> np.ndarray:
        """All layers composited over the background, shape (height, width, 4)."""
        return self.layers.flatten(self.background)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.to_rgba())

    def save_png(self, path: str | Path) -> None:
        self.to_image().save(Path(path), format="PNG")
