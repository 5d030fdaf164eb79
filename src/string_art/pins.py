"""Pin placement around a rectangular frame.

Pins are spaced evenly by arc length along the perimeter, numbered clockwise
from the top-left corner::

    0 ──────────────→ ┐
    ↑                 │
    │                 ↓
    └ ←────────────── ┘

Spacing is exact along each edge; across a corner the straight-line distance
between neighbours is shorter than the arc length.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import InvalidConfigurationError


@dataclass(frozen=True)
class Pin:
    """A fixed anchor point on the frame perimeter."""

    index: int
    x: float
    y: float

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)


def _perimeter_point(d: float, width: float, height: float) -> tuple[float, float]:
    """Map arc length *d* (clockwise from the top-left corner) to ``(x, y)``."""
    if d < width:
        return d, 0.0
    if d < width + height:
        return width, d - width
    if d < 2 * width + height:
        return width - (d - width - height), height
    return 0.0, height - (d - 2 * width - height)


def generate_pins(width: float, height: float, count: int) -> tuple[Pin, ...]:
    """Place *count* pins evenly around a ``width × height`` rectangle.

    Args:
        width: Rectangle width, in whatever units the caller works in
            (pixels for path building, scaled pixels for print overlays).
        height: Rectangle height, same units as *width*.
        count: Number of pins.

    Returns:
        Pins in clockwise order; pin 0 sits exactly at ``(0, 0)``.

    Raises:
        InvalidConfigurationError: If any argument is not positive.
    """
    if width <= 0 or height <= 0:
        raise InvalidConfigurationError(
            f"Frame dimensions must be positive, got {width}x{height}."
        )
    if count <= 0:
        raise InvalidConfigurationError(f"Pin count must be positive, got {count}.")

    spacing = 2 * (width + height) / count
    return tuple(
        Pin(i, *_perimeter_point(i * spacing, width, height)) for i in range(count)
    )


class PinLayoutCache:
    """Memoizes pin layouts by ``(width, height, count)``.

    Owned by the caller; a new cache starts empty, so there is no state
    shared between independent runs.
    """

    def __init__(self) -> None:
        self._layouts: dict[tuple[float, float, int], tuple[Pin, ...]] = {}

    def get(self, width: float, height: float, count: int) -> tuple[Pin, ...]:
        key = (width, height, count)
        layout = self._layouts.get(key)
        if layout is None:
            layout = generate_pins(width, height, count)
            self._layouts[key] = layout
        return layout

    def clear(self) -> None:
        self._layouts.clear()

    def __len__(self) -> int:
        return len(self._layouts)


def circular_distance(a: int, b: int, count: int) -> int:
    """Number of pins between *a* and *b* going the short way round."""
    diff = abs(a - b)
    return min(diff, count - diff)


def min_pin_gap(count: int, fraction: float) -> int:
    """Minimum circular distance a connection must span, as ``floor(count·fraction)``."""
    if not 0 <= fraction < math.inf:
        raise InvalidConfigurationError(
            f"Minimum gap fraction must be a non-negative number, got {fraction}."
        )
    return math.floor(count * fraction)
