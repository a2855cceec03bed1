from __future__ import annotations

from typing import Protocol

from xychart.geometry import RGBA, Font, Rectangle


DEFAULT_LAYER = "default"
PROGRESS_LAYER = "progress"


class Surface(Protocol):
    """Drawing operations shared by the raster and SVG surfaces.

    Layers are named; drawing goes to the current layer and `clear()` erases
    only that layer, which lets a progress overlay be removed without
    touching the chart underneath.
    """

    def set_fill_color(self, color: RGBA) -> None: ...

    def set_line_color(self, color: RGBA) -> None: ...

    def set_line_width(self, width: float) -> None: ...

    def set_font(self, font: Font) -> None: ...

    def draw_line(self, x0: float, y0: float, x1: float, y1: float) -> None: ...

    def draw_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def draw_circle(self, cx: float, cy: float, r: float) -> None: ...

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def close_path(self) -> None: ...

    def stroke(self) -> None: ...

    def fill(self) -> None: ...

    def text_dim(self, text: str) -> tuple[float, float]: ...

    def draw_string(self, text: str, x: float, y: float) -> None: ...

    def draw_aligned_string(self, text: str, x: float, y: float, anchor: str) -> tuple[float, float]: ...

    def draw_rotated_string(self, text: str, x: float, y: float, anchor: str, angle: float) -> None: ...

    def begin_group(self, name: str) -> None: ...

    def end_group(self) -> None: ...

    def set_layer(self, name: str) -> None: ...

    def clear(self) -> None: ...

    def set_clip(self, rect: Rectangle | None) -> None: ...

    def save(self) -> None: ...

    def restore(self) -> None: ...


def clear_layer(surface: Surface, layer: str, *, restore_to: str = DEFAULT_LAYER) -> None:
    surface.set_layer(layer)
    surface.clear()
    surface.set_layer(restore_to)
