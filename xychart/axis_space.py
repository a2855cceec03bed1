from __future__ import annotations

from dataclasses import dataclass
import math

from xychart.geometry import Rectangle, require_edge


@dataclass
class AxisSpace:
    """Pixel space reserved around the data area for axes, accumulated per draw."""

    top: float = 0.0
    left: float = 0.0
    bottom: float = 0.0
    right: float = 0.0

    def __post_init__(self) -> None:
        for name in ("top", "left", "bottom", "right"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite")

    def extend(self, pixels: float, edge: str) -> AxisSpace:
        if not math.isfinite(pixels):
            raise ValueError("pixels must be finite")
        edge = require_edge(edge)
        setattr(self, edge, getattr(self, edge) + pixels)
        return self

    def inner_rect(self, bounds: Rectangle) -> Rectangle:
        return Rectangle(
            x=bounds.x + self.left,
            y=bounds.y + self.top,
            width=bounds.width - self.left - self.right,
            height=bounds.height - self.top - self.bottom,
        )
