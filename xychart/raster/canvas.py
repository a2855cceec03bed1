from __future__ import annotations

import numpy as np

from xychart.geometry import RGBA


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 0)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def blend(view: np.ndarray, color: RGBA, coverage: np.ndarray | None = None) -> None:
    """Source-over `color` onto an RGBA view, optionally weighted by 0-1 coverage."""
    if view.size == 0:
        return
    src_alpha = np.full(view.shape[:2], color[3] / 255.0, dtype=np.float32)
    if coverage is not None:
        src_alpha = src_alpha * coverage
    if not np.any(src_alpha > 0):
        return
    dst_rgb = view[..., :3].astype(np.float32)
    dst_alpha = view[..., 3].astype(np.float32) / 255.0
    src_rgb = np.asarray(color[:3], dtype=np.float32)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    num = src_rgb * src_alpha[..., None] + dst_rgb * (dst_alpha * (1.0 - src_alpha))[..., None]
    safe = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    view[..., :3] = np.clip(np.rint(num / safe[..., None]), 0, 255).astype(np.uint8)
    view[..., 3] = np.clip(np.rint(out_alpha * 255.0), 0, 255).astype(np.uint8)


def composite(dst: np.ndarray, src: np.ndarray) -> None:
    """Source-over an RGBA layer onto `dst` of the same shape."""
    if dst.shape != src.shape:
        raise ValueError(f"layer shape mismatch: {dst.shape} != {src.shape}")
    src_alpha = src[..., 3].astype(np.float32) / 255.0
    if not np.any(src_alpha > 0):
        return
    dst_rgb = dst[..., :3].astype(np.float32)
    dst_alpha = dst[..., 3].astype(np.float32) / 255.0
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    num = src[..., :3].astype(np.float32) * src_alpha[..., None] + dst_rgb * (dst_alpha * (1.0 - src_alpha))[..., None]
    safe = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    dst[..., :3] = np.clip(np.rint(num / safe[..., None]), 0, 255).astype(np.uint8)
    dst[..., 3] = np.clip(np.rint(out_alpha * 255.0), 0, 255).astype(np.uint8)


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    blend(dst[y : y + 1, x : x + 1], color)


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Fill the half-open box [x0, x1) x [y0, y1), clipped to `dst`."""
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1], max(x0, x1))
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0], max(y0, y1))
    if xa >= xb or ya >= yb:
        return
    blend(dst[ya:yb, xa:xb], color)


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA, width: int = 1) -> None:
    top = y - (width - 1) // 2
    fill_rect(dst, min(x0, x1), top, max(x0, x1) + 1, top + width, color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA, width: int = 1) -> None:
    left = x - (width - 1) // 2
    fill_rect(dst, left, min(y0, y1), left + width, max(y0, y1) + 1, color)


def blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    """Blend an 8-bit coverage mask whose top-left corner lands at (x, y)."""
    h, w = mask.shape
    if h <= 0 or w <= 0:
        return
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return
    sx0 = x0 - x
    sy0 = y0 - y
    cov = mask[sy0 : sy0 + (y1 - y0), sx0 : sx0 + (x1 - x0)].astype(np.float32) / 255.0
    blend(dst[y0:y1, x0:x1], color, cov)
