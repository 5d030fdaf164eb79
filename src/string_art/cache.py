"""Per-run memo of rasterized pin-to-pin lines."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .pins import Pin
from .raster import rasterize_line


class LineCache:
    """Rasterized pixels for each unordered pin pair, computed at most once.

    Keys are canonical ``(low, high)`` index pairs and lines are always
    rasterized from the lower-index pin to the higher-index one, so the
    stored geometry does not depend on which direction was asked for first.
    Entries are ``(N, 2)`` int32 arrays of ``(x, y)`` pixels and are never
    evicted; geometry does not change as the darkness field is consumed.
    """

    def __init__(self, pins: Sequence[Pin]) -> None:
        self.pins = pins
        self._lines: dict[tuple[int, int], np.ndarray] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key(a: int, b: int) -> tuple[int, int]:
        return (a, b) if a <= b else (b, a)

    def get_or_compute(self, a: int, b: int) -> np.ndarray:
        key = self.key(a, b)
        line = self._lines.get(key)
        if line is not None:
            self.hits += 1
            return line

        self.misses += 1
        low, high = key
        line = np.asarray(
            rasterize_line(self.pins[low].position, self.pins[high].position),
            dtype=np.int32,
        )
        line.setflags(write=False)
        self._lines[key] = line
        return line

    def __contains__(self, pair: tuple[int, int]) -> bool:
        return self.key(*pair) in self._lines

    def __len__(self) -> int:
        return len(self._lines)
