from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal


RGBA = tuple[int, int, int, int]

Edge = Literal["top", "left", "bottom", "right"]
EDGES: tuple[Edge, ...] = ("top", "left", "bottom", "right")

TextAnchor = Literal[
    "top_left",
    "top_center",
    "top_right",
    "center_left",
    "center",
    "center_right",
    "bottom_left",
    "bottom_center",
    "bottom_right",
]
TEXT_ANCHORS: tuple[TextAnchor, ...] = (
    "top_left",
    "top_center",
    "top_right",
    "center_left",
    "center",
    "center_right",
    "bottom_left",
    "bottom_center",
    "bottom_right",
)

BLACK: RGBA = (0, 0, 0, 255)
WHITE: RGBA = (255, 255, 255, 255)
TRANSPARENT: RGBA = (0, 0, 0, 0)


def require_edge(edge: str) -> Edge:
    if edge not in EDGES:
        raise ValueError(f"unrecognised edge code: {edge!r}")
    return edge  # type: ignore[return-value]


def is_top_or_bottom(edge: str) -> bool:
    return require_edge(edge) in ("top", "bottom")


def is_left_or_right(edge: str) -> bool:
    return require_edge(edge) in ("left", "right")


def require_anchor(anchor: str) -> TextAnchor:
    if anchor not in TEXT_ANCHORS:
        raise ValueError(f"unrecognised text anchor: {anchor!r}")
    return anchor  # type: ignore[return-value]


def anchor_offset(anchor: str, width: float, height: float) -> tuple[float, float]:
    """Offset from the anchor point to the top-left corner of a width x height box."""
    vertical, _, horizontal = require_anchor(anchor).partition("_")
    if anchor == "center":
        vertical, horizontal = "center", "center"
    if horizontal == "left":
        dx = 0.0
    elif horizontal == "right":
        dx = -width
    else:
        dx = -width / 2.0
    if vertical == "top":
        dy = 0.0
    elif vertical == "bottom":
        dy = -height
    else:
        dy = -height / 2.0
    return (dx, dy)


@dataclass(frozen=True)
class Rectangle:
    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2.0

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2.0

    def length(self, edge: str) -> float:
        """Pixels available along an axis placed on `edge`."""
        if is_top_or_bottom(edge):
            return self.width
        return self.height

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y


@dataclass(frozen=True)
class Insets:
    top: float = 0.0
    left: float = 0.0
    bottom: float = 0.0
    right: float = 0.0

    def value(self, edge: str) -> float:
        return float(getattr(self, require_edge(edge)))


@dataclass(frozen=True)
class Font:
    family: str = "sans-serif"
    size_px: float = 12.0
    bold: bool = False
    italic: bool = False

    def __post_init__(self) -> None:
        if self.size_px <= 0:
            raise ValueError("size_px must be > 0")


def parse_color(value: Any) -> RGBA:
    """Accept ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa`` or a 3/4-tuple."""
    if isinstance(value, str):
        raw = value.strip()
        if not raw.startswith("#"):
            raise ValueError(f"invalid color: {value}")
        h = raw[1:]
        if len(h) in (3, 4):
            h = "".join(c * 2 for c in h)
        if len(h) == 6:
            return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16), 255)
        if len(h) == 8:
            return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16), int(h[6:8], 16))
        raise ValueError(f"invalid color: {value}")
    channels = tuple(int(c) for c in value)
    if len(channels) == 3:
        return (channels[0], channels[1], channels[2], 255)
    if len(channels) == 4:
        return channels  # type: ignore[return-value]
    raise ValueError(f"invalid color: {value!r}")


def color_to_hex(color: RGBA) -> str:
    return f"#{color[0]:02x}{color[1]:02x}{color[2]:02x}"
