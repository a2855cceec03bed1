from __future__ import annotations

from functools import lru_cache
import math
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from xychart.geometry import RGBA, Font, anchor_offset
from xychart.raster.canvas import blend_mask


FONT_FAMILY_PATTERNS = {
    "sans-serif": ("dejavusans", "dejavu sans", "liberationsans", "arial", "helvetica"),
    "serif": ("dejavuserif", "liberationserif", "times new roman", "times"),
    "monospace": ("dejavusansmono", "liberationmono", "menlo", "monaco", "courier new", "courier"),
}
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)


def text_size(text: str, font: Font) -> tuple[int, int]:
    """Width and height of the rendered text box; empty text has zero width."""
    pil_font = _load_font(font.family, font.size_px, font.bold, font.italic)
    if not text:
        ascent, descent = pil_font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = pil_font.getbbox(text)
    return (max(0, int(math.ceil(right - left))), max(1, int(math.ceil(bottom - top))))


def draw_text(
    dst: np.ndarray,
    text: str,
    x: float,
    y: float,
    font: Font,
    color: RGBA,
    *,
    anchor: str = "top_left",
    angle: float = 0.0,
) -> tuple[int, int]:
    """Draw `text` so that `anchor` lands on (x, y), rotated clockwise by `angle` radians.

    Rotation is snapped to quarter turns. Returns the unrotated text size.
    """
    if not text:
        return (0, text_size(text, font)[1])
    pil_font = _load_font(font.family, font.size_px, font.bold, font.italic)
    mask = _render_mask(text, pil_font, font.bold)
    h, w = mask.shape
    dx, dy = anchor_offset(anchor, w, h)
    turns = quarter_turns(angle)
    if turns:
        corners = [_rotate(cx, cy, turns) for cx, cy in ((dx, dy), (dx + w, dy), (dx, dy + h), (dx + w, dy + h))]
        dx = min(c[0] for c in corners)
        dy = min(c[1] for c in corners)
        mask = np.rot90(mask, k=-turns)
    blend_mask(dst, int(round(x + dx)), int(round(y + dy)), mask, color)
    return (w, h)


def quarter_turns(angle: float) -> int:
    """Clockwise quarter turns nearest to `angle` (radians), in 0..3."""
    return int(round(angle / (math.pi / 2.0))) % 4


def _rotate(x: float, y: float, turns: int) -> tuple[float, float]:
    for _ in range(turns):
        x, y = -y, x
    return (x, y)


def _embolden(mask: np.ndarray) -> np.ndarray:
    out = mask.copy()
    np.maximum(out[:, 1:], mask[:, :-1], out=out[:, 1:])
    return out


@lru_cache(maxsize=256)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont, bold: bool) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(math.ceil(right - left)))
    height = max(1, int(math.ceil(bottom - top)))
    image = Image.new("L", (width, height), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    mask = np.asarray(image, dtype=np.uint8)
    return _embolden(mask) if bold else mask


@lru_cache(maxsize=64)
def _load_font(family: str, size_px: float, bold: bool, italic: bool) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(size_px)))
    path = _resolve_font_path(family, bold, italic)
    if path is None:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(str(path), size=size)
    except OSError:
        return ImageFont.load_default(size=size)


@lru_cache(maxsize=32)
def _resolve_font_path(family: str, bold: bool, italic: bool) -> Path | None:
    wanted = family.strip().lower()
    patterns = FONT_FAMILY_PATTERNS.get(wanted, (wanted,) + FONT_FAMILY_PATTERNS["sans-serif"])

    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf"):
            candidates.extend(sorted(base.rglob(ext)))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        matches = [path for path in candidates if p in path.stem.lower().replace(" ", "").replace("-", "")]
        if not matches:
            continue
        return _pick_style(matches, bold, italic)
    return None


def _pick_style(paths: list[Path], bold: bool, italic: bool) -> Path:
    def score(path: Path) -> tuple[int, int]:
        stem = path.stem.lower()
        has_bold = "bold" in stem
        has_italic = "italic" in stem or "oblique" in stem
        return (int(has_bold != bold) + int(has_italic != italic), len(stem))

    return min(paths, key=score)
