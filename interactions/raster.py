"""Raster drawing primitives on an RGB pixel buffer.

Everything is drawn directly into a ``numpy`` array: rectangles, circle and
box nodes, Bresenham lines, barycentric triangle fill, and arrows whose ends
are clipped to the outline of the node they touch. Pixels outside the canvas
are silently dropped.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import matplotlib.image as mpimg
import numpy as np

from interactions.log_config import get_logger

logger = get_logger(__name__)

Color = tuple[int, int, int]

WHITE: Color = (255, 255, 255)

NODE_RADIUS = 20
ARROW_LENGTH = 10.0


class Canvas:
    """Fixed-size RGB image.

    Args:
        width: Width in pixels.
        height: Height in pixels.
        background: Initial fill colour.

    Raises:
        ValueError: If either dimension is not positive.
    """

    def __init__(self, width: int, height: int, background: Color = WHITE) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.pixels = np.empty((height, width, 3), dtype=np.uint8)
        self.pixels[:, :] = background

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set(self, x: int, y: int, color: Color) -> None:
        if self.in_bounds(x, y):
            self.pixels[y, x] = color

    def get(self, x: int, y: int) -> Color:
        r, g, b = self.pixels[y, x]
        return (int(r), int(g), int(b))

    def _clip_box(
        self, x0: int, y0: int, x1: int, y1: int
    ) -> tuple[int, int, int, int]:
        return (
            max(0, x0),
            max(0, y0),
            min(self.width, x1),
            min(self.height, y1),
        )

    def fill_rect(self, x0: int, y0: int, x1: int, y1: int, color: Color) -> None:
        """Fill the half-open box ``[x0, x1) × [y0, y1)``."""
        cx0, cy0, cx1, cy1 = self._clip_box(x0, y0, x1, y1)
        if cx0 < cx1 and cy0 < cy1:
            self.pixels[cy0:cy1, cx0:cx1] = color

    def blit_mask(self, mask: np.ndarray, x: int, y: int, color: Color) -> None:
        """Paint ``color`` wherever ``mask`` is true, mask origin at (x, y)."""
        h, w = mask.shape
        cx0, cy0, cx1, cy1 = self._clip_box(x, y, x + w, y + h)
        if cx0 >= cx1 or cy0 >= cy1:
            return
        sub = mask[cy0 - y : cy1 - y, cx0 - x : cx1 - x]
        self.pixels[cy0:cy1, cx0:cx1][sub] = color


def draw_rect_border(
    canvas: Canvas, x0: int, y0: int, x1: int, y1: int, color: Color
) -> None:
    """Draw a one-pixel outline along the inside edge of ``[x0, x1) × [y0, y1)``."""
    canvas.fill_rect(x0, y0, x1, y0 + 1, color)
    canvas.fill_rect(x0, y1 - 1, x1, y1, color)
    canvas.fill_rect(x0, y0, x0 + 1, y1, color)
    canvas.fill_rect(x1 - 1, y0, x1, y1, color)


def _disc_offsets(r: int) -> tuple[np.ndarray, np.ndarray]:
    ys, xs = np.mgrid[-r : r + 1, -r : r + 1]
    return xs, ys


def fill_circle(canvas: Canvas, cx: int, cy: int, r: int, color: Color) -> None:
    xs, ys = _disc_offsets(r)
    canvas.blit_mask(xs * xs + ys * ys <= r * r, cx - r, cy - r, color)


def draw_circle_node(
    canvas: Canvas, cx: int, cy: int, r: int, fill: Color, border: Color
) -> None:
    """Draw a filled disc with an outline ring about two pixels thick."""
    xs, ys = _disc_offsets(r)
    d = xs * xs + ys * ys
    r2 = r * r
    canvas.blit_mask(d <= r2, cx - r, cy - r, fill)
    canvas.blit_mask((d >= r2 - 2) & (d <= r2 + 2), cx - r, cy - r, border)


def draw_rect_node(
    canvas: Canvas,
    cx: int,
    cy: int,
    half_w: int,
    half_h: int,
    fill: Color,
    border: Color,
) -> None:
    x0, y0 = cx - half_w, cy - half_h
    x1, y1 = cx + half_w + 1, cy + half_h + 1
    canvas.fill_rect(x0, y0, x1, y1, fill)
    draw_rect_border(canvas, x0, y0, x1, y1, border)


def draw_line(canvas: Canvas, x0: int, y0: int, x1: int, y1: int, color: Color) -> None:
    """Draw a line with integer Bresenham; both endpoints are plotted."""
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        canvas.set(x0, y0, color)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _barycentric(px, py, x1, y1, x2, y2, x3, y3):
    """Return ``(u, v, denom)`` of point(s) p relative to triangle (1, 2, 3).

    Works element-wise when ``px``/``py`` are arrays.
    """
    v0x, v0y = x3 - x1, y3 - y1
    v1x, v1y = x2 - x1, y2 - y1
    v2x, v2y = px - x1, py - y1

    dot00 = v0x * v0x + v0y * v0y
    dot01 = v0x * v1x + v0y * v1y
    dot02 = v0x * v2x + v0y * v2y
    dot11 = v1x * v1x + v1y * v1y
    dot12 = v1x * v2x + v1y * v2y

    denom = float(dot00 * dot11 - dot01 * dot01)
    if denom == 0:
        return None, None, 0.0
    u = (dot11 * dot02 - dot01 * dot12) / denom
    v = (dot00 * dot12 - dot01 * dot02) / denom
    return u, v, denom


def point_in_triangle(
    px: int, py: int, x1: int, y1: int, x2: int, y2: int, x3: int, y3: int
) -> bool:
    """Return True if (px, py) lies inside or on the triangle.

    Degenerate (zero-area) triangles contain no points.
    """
    u, v, denom = _barycentric(
        float(px), float(py), float(x1), float(y1), float(x2), float(y2), float(x3), float(y3)
    )
    if denom == 0:
        return False
    return u >= 0 and v >= 0 and u + v <= 1


def fill_triangle(
    canvas: Canvas,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    x3: int,
    y3: int,
    color: Color,
) -> None:
    """Fill a triangle by testing every pixel of its bounding box."""
    min_x, max_x = min(x1, x2, x3), max(x1, x2, x3)
    min_y, max_y = min(y1, y2, y3), max(y1, y2, y3)

    ys, xs = np.mgrid[min_y : max_y + 1, min_x : max_x + 1].astype(float)
    u, v, denom = _barycentric(
        xs, ys, float(x1), float(y1), float(x2), float(y2), float(x3), float(y3)
    )
    if denom == 0:
        return
    canvas.blit_mask((u >= 0) & (v >= 0) & (u + v <= 1), min_x, min_y, color)


@dataclass(frozen=True, slots=True)
class Shape:
    """Outline of a node, used to clip arrows.

    Attributes:
        kind: ``"circle"`` or ``"rect"``.
        half_width: Radius for circles, half the box width for rectangles.
        half_height: Half the box height; equals the radius for circles.
    """

    kind: Literal["circle", "rect"]
    half_width: float
    half_height: float

    @classmethod
    def circle(cls, radius: float = NODE_RADIUS) -> Shape:
        return cls("circle", radius, radius)

    @classmethod
    def rect(cls, half_width: float, half_height: float) -> Shape:
        return cls("rect", half_width, half_height)


def clip_distance(shape: Shape, ux: float, uy: float) -> float:
    """Return the distance from a shape's centre to its outline along (ux, uy).

    ``(ux, uy)`` must be a unit vector. Circles return their radius; for
    rectangles the ray leaves through whichever side it meets first.
    """
    if shape.kind == "circle":
        return float(shape.half_width)
    limits = []
    if ux != 0:
        limits.append(shape.half_width / abs(ux))
    if uy != 0:
        limits.append(shape.half_height / abs(uy))
    return min(limits) if limits else 0.0


def _head_points(
    hx: float, hy: float, ux: float, uy: float
) -> tuple[int, int, int, int, int, int]:
    """Triangle for an arrowhead with its tip at (hx, hy) pointing along (ux, uy)."""
    perp_x, perp_y = -uy, ux
    half = ARROW_LENGTH / 2
    p2x = hx - ux * ARROW_LENGTH + perp_x * half
    p2y = hy - uy * ARROW_LENGTH + perp_y * half
    p3x = hx - ux * ARROW_LENGTH - perp_x * half
    p3y = hy - uy * ARROW_LENGTH - perp_y * half
    return int(hx), int(hy), int(p2x), int(p2y), int(p3x), int(p3y)


def _shaft(
    canvas: Canvas,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    color: Color,
    start: Shape,
    end: Shape,
):
    dx = float(x1 - x0)
    dy = float(y1 - y0)
    dist = math.hypot(dx, dy)
    if dist == 0:
        return None

    ux, uy = dx / dist, dy / dist
    # Shorten the line so it meets node edges
    tail_off = clip_distance(start, ux, uy)
    head_off = clip_distance(end, ux, uy)
    tail_x, tail_y = x0 + ux * tail_off, y0 + uy * tail_off
    head_x, head_y = x1 - ux * head_off, y1 - uy * head_off

    draw_line(canvas, int(tail_x), int(tail_y), int(head_x), int(head_y), color)
    return tail_x, tail_y, head_x, head_y, ux, uy


def draw_arrow(
    canvas: Canvas,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    color: Color,
    *,
    start: Shape | None = None,
    end: Shape | None = None,
) -> None:
    """Draw an arrow from (x0, y0) to (x1, y1) with a head at the target.

    Args:
        start: Outline around the source point; defaults to a node circle.
        end: Outline around the target point; defaults to a node circle.
    """
    geometry = _shaft(
        canvas, x0, y0, x1, y1, color, start or Shape.circle(), end or Shape.circle()
    )
    if geometry is None:
        return
    _, _, head_x, head_y, ux, uy = geometry
    fill_triangle(canvas, *_head_points(head_x, head_y, ux, uy), color)


def draw_bidirectional_arrow(
    canvas: Canvas,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    color: Color,
    *,
    start: Shape | None = None,
    end: Shape | None = None,
) -> None:
    """Draw a single shaft with arrowheads at both ends."""
    geometry = _shaft(
        canvas, x0, y0, x1, y1, color, start or Shape.circle(), end or Shape.circle()
    )
    if geometry is None:
        return
    tail_x, tail_y, head_x, head_y, ux, uy = geometry
    fill_triangle(canvas, *_head_points(head_x, head_y, ux, uy), color)
    fill_triangle(canvas, *_head_points(tail_x, tail_y, -ux, -uy), color)


def write_png(canvas: Canvas, path: Path) -> None:
    """Encode the canvas as PNG at one file pixel per canvas pixel.

    Raises:
        OSError: If the file cannot be created or written.
    """
    logger.debug(f"Encoding {canvas.width}x{canvas.height} PNG to {path}")
    mpimg.imsave(path, canvas.pixels, format="png")
