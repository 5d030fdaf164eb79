"""Integer line rasterization between two pin positions."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going towards +inf."""
    return math.floor(value + 0.5)


def rasterize_line(
    p0: tuple[float, float], p1: tuple[float, float]
) -> list[tuple[int, int]]:
    """Return the 8-connected pixels of the segment from *p0* to *p1*.

    Both endpoints are rounded first; the rounded start is the first pixel
    and the rounded end is the last. The walk is Bresenham's all-octant
    error-term loop, so consecutive pixels differ by exactly one step in x,
    in y, or in both. Swapping the endpoints yields a line of the same length.
    """
    x, y = round_half_up(p0[0]), round_half_up(p0[1])
    x1, y1 = round_half_up(p1[0]), round_half_up(p1[1])

    dx = abs(x1 - x)
    dy = abs(y1 - y)
    sx = 1 if x < x1 else -1
    sy = 1 if y < y1 else -1
    err = dx - dy

    pixels = [(x, y)]
    while x != x1 or y != y1:
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
        pixels.append((x, y))
    return pixels
