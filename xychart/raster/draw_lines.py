from __future__ import annotations

from typing import Sequence

import numpy as np

from xychart.geometry import RGBA
from xychart.raster.canvas import blend


def draw_line(dst: np.ndarray, x0: float, y0: float, x1: float, y1: float, color: RGBA, width: int = 1) -> None:
    draw_polyline(dst, [(x0, y0), (x1, y1)], color, width=width)


def draw_polyline(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA, width: int = 1) -> None:
    """Stroke consecutive points with a square brush; shared joints are blended once."""
    if len(points) < 2:
        return
    h, w = dst.shape[:2]
    pad = float(width + 1)
    xs: list[int] = []
    ys: list[int] = []
    for (xa, ya), (xb, yb) in zip(points, points[1:]):
        if not np.all(np.isfinite((xa, ya, xb, yb))):
            continue
        clipped = clip_segment(xa, ya, xb, yb, -pad, -pad, w + pad, h + pad)
        if clipped is None:
            continue
        xa, ya, xb, yb = clipped
        _line_pixels(int(round(xa)), int(round(ya)), int(round(xb)), int(round(yb)), xs, ys)
    plot_pixels(dst, np.asarray(xs), np.asarray(ys), color, width=width)


def plot_pixels(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, width: int = 1) -> None:
    if xs.size == 0:
        return
    radius = max(0, (max(1, width) - 1) // 2)
    if radius:
        offsets = np.arange(-radius, radius + 1)
        ox, oy = np.meshgrid(offsets, offsets)
        xs = (xs[:, None] + ox.ravel()[None, :]).ravel()
        ys = (ys[:, None] + oy.ravel()[None, :]).ravel()
    h, w = dst.shape[:2]
    keep = (xs >= 0) & (xs < w) & (ys >= 0) & (ys < h)
    if not np.any(keep):
        return
    flat = np.unique(ys[keep] * w + xs[keep])
    ys_u, xs_u = np.divmod(flat, w)
    pixels = dst[ys_u, xs_u][None, ...]
    blend(pixels, color)
    dst[ys_u, xs_u] = pixels[0]


def _line_pixels(x0: int, y0: int, x1: int, y1: int, xs: list[int], ys: list[int]) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        xs.append(x0)
        ys.append(y0)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def clip_segment(
    x0: float, y0: float, x1: float, y1: float,
    xmin: float, ymin: float, xmax: float, ymax: float,
) -> tuple[float, float, float, float] | None:
    """Liang-Barsky clip of a segment to a box; None when nothing is inside."""
    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0 - xmin), (dx, xmax - x0), (-dy, y0 - ymin), (dy, ymax - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)
    return (x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy)
