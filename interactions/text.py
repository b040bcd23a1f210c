"""Fixed-width bitmap text.

Glyphs come from the DejaVu Sans Mono outlines bundled with matplotlib. Each
character is rasterized once into a 7x13 one-bit cell by sampling the glyph
outline at pixel centres, then cached and stamped onto the canvas.
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np
from matplotlib.font_manager import FontProperties
from matplotlib.path import Path
from matplotlib.textpath import TextPath

from interactions.raster import Canvas, Color

CHAR_WIDTH = 7
LINE_HEIGHT = 14
ASCENT = 11
DESCENT = 2

# DejaVu Sans Mono advances 0.602 em, so this size gives a 7 px pitch
FONT_SIZE = 11.6
FONT_FAMILY = "DejaVu Sans Mono"


@lru_cache(maxsize=None)
def _font() -> FontProperties:
    return FontProperties(family=FONT_FAMILY)


@lru_cache(maxsize=None)
def glyph_mask(ch: str) -> np.ndarray:
    """Return the boolean ``(ASCENT + DESCENT, CHAR_WIDTH)`` bitmap for ``ch``.

    Row 0 is the top of the cell; the baseline sits below row ``ASCENT - 1``.
    """
    height = ASCENT + DESCENT
    if not ch or ch.isspace():
        return np.zeros((height, CHAR_WIDTH), dtype=bool)

    path = TextPath((0, 0), ch, size=FONT_SIZE, prop=_font())
    if len(path.vertices) == 0:
        return np.zeros((height, CHAR_WIDTH), dtype=bool)

    rows, cols = np.mgrid[0:height, 0:CHAR_WIDTH]
    centres = np.column_stack(
        [(cols + 0.5).ravel(), (ASCENT - rows - 0.5).ravel()]
    )
    # Each closed contour toggles coverage, so counters stay open
    polygons = path.to_polygons(closed_only=True)
    if not polygons:
        return np.zeros((height, CHAR_WIDTH), dtype=bool)
    inside = np.logical_xor.reduce(
        [Path(poly).contains_points(centres) for poly in polygons]
    )
    return inside.reshape(height, CHAR_WIDTH)


def text_width(text: str) -> int:
    return len(text) * CHAR_WIDTH


def draw_label(canvas: Canvas, text: str, x: int, y: int, color: Color) -> None:
    """Draw ``text`` with its left edge at ``x`` and baseline at ``y``."""
    for i, ch in enumerate(text):
        if ch.isspace():
            continue
        canvas.blit_mask(glyph_mask(ch), x + i * CHAR_WIDTH, y - ASCENT, color)


def draw_centered_label(
    canvas: Canvas, text: str, center_x: int, y: int, color: Color
) -> None:
    draw_label(canvas, text, center_x - text_width(text) // 2, y, color)


def wrap_text(text: str, max_width: int) -> list[str]:
    """Break ``text`` into lines no wider than ``max_width`` pixels.

    Words are packed greedily. A single word wider than the limit gets a line
    of its own rather than being split. Blank text yields no lines.
    """
    words = text.split()
    if not words:
        return []

    lines: list[str] = []
    line = words[0]
    for word in words[1:]:
        if (len(line) + 1 + len(word)) * CHAR_WIDTH <= max_width:
            line += " " + word
            continue
        lines.append(line)
        line = word
    lines.append(line)
    return lines


def draw_wrapped_label(
    canvas: Canvas, text: str, x: int, y: int, max_width: int, color: Color
) -> int:
    """Draw word-wrapped text starting at baseline ``y``.

    Returns:
        Total height used, so callers can shift whatever follows.
    """
    lines = wrap_text(text, max_width)
    for i, line in enumerate(lines):
        draw_label(canvas, line, x, y + i * LINE_HEIGHT, color)
    return len(lines) * LINE_HEIGHT
