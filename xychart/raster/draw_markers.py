from __future__ import annotations

from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw

from xychart.geometry import RGBA
from xychart.raster.canvas import blend, blend_mask


def fill_disc(dst: np.ndarray, cx: float, cy: float, radius: float, color: RGBA) -> None:
    _blend_ring(dst, cx, cy, radius, 0.0, color)


def draw_ring(dst: np.ndarray, cx: float, cy: float, radius: float, color: RGBA, width: float = 1.0) -> None:
    _blend_ring(dst, cx, cy, radius + width / 2.0, max(0.0, radius - width / 2.0), color)


def draw_markers(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, radius: float = 1.0) -> None:
    for x, y in zip(xs.tolist(), ys.tolist()):
        fill_disc(dst, x, y, radius, color)


def _blend_ring(dst: np.ndarray, cx: float, cy: float, outer: float, inner: float, color: RGBA) -> None:
    if outer <= 0 or not (np.isfinite(cx) and np.isfinite(cy)):
        return
    h, w = dst.shape[:2]
    x0 = max(0, int(np.floor(cx - outer)))
    x1 = min(w, int(np.ceil(cx + outer)) + 1)
    y0 = max(0, int(np.floor(cy - outer)))
    y1 = min(h, int(np.ceil(cy + outer)) + 1)
    if x0 >= x1 or y0 >= y1:
        return
    yy, xx = np.mgrid[y0:y1, x0:x1]
    d2 = (xx + 0.5 - cx) ** 2 + (yy + 0.5 - cy) ** 2
    inside = d2 <= outer * outer
    if inner > 0:
        inside &= d2 >= inner * inner
    if not np.any(inside):
        return
    blend(dst[y0:y1, x0:x1], color, inside.astype(np.float32))


def fill_polygon(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA) -> None:
    """Rasterise a closed polygon through a Pillow mask sized to its bounding box."""
    pts = [(x, y) for x, y in points if np.isfinite(x) and np.isfinite(y)]
    if len(pts) < 3:
        return
    h, w = dst.shape[:2]
    x0 = max(0, int(np.floor(min(x for x, _ in pts))))
    y0 = max(0, int(np.floor(min(y for _, y in pts))))
    x1 = min(w, int(np.ceil(max(x for x, _ in pts))) + 1)
    y1 = min(h, int(np.ceil(max(y for _, y in pts))) + 1)
    if x0 >= x1 or y0 >= y1:
        return
    image = Image.new("L", (x1 - x0, y1 - y0), 0)
    ImageDraw.Draw(image).polygon([(x - x0, y - y0) for x, y in pts], fill=255)
    blend_mask(dst, x0, y0, np.asarray(image, dtype=np.uint8), color)
