"""Mutable grid of remaining ink demand."""

from __future__ import annotations

import numpy as np

from .constants import MAX_DARKNESS


def _as_pixel_array(pixels) -> np.ndarray:
    arr = np.asarray(pixels)
    if arr.size == 0:
        return np.empty((0, 2), dtype=np.int64)
    if arr.dtype.kind not in "iu":
        arr = arr.astype(np.int64)
    return arr.reshape(-1, 2)


class DarknessField:
    """Per-pixel darkness in ``[0, 255]``, indexed ``[y, x]``.

    Pixel sequences passed to :meth:`score` and :meth:`subtract` hold
    ``(x, y)`` pairs. Pixels outside the grid are skipped, since lines
    between pins on the far edges round to one past the last row or column.
    """

    def __init__(self, source: np.ndarray) -> None:
        values = np.array(source, dtype=np.float64)
        if values.ndim != 2:
            raise ValueError(f"Darkness field must be 2-D, got shape {values.shape}")
        np.clip(values, 0.0, MAX_DARKNESS, out=values)
        self._values = values

    @classmethod
    def from_array(cls, source: np.ndarray) -> DarknessField:
        return cls(source)

    @property
    def width(self) -> int:
        return self._values.shape[1]

    @property
    def height(self) -> int:
        return self._values.shape[0]

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the current grid."""
        view = self._values.view()
        view.setflags(write=False)
        return view

    def _in_bounds(self, pixels) -> tuple[np.ndarray, np.ndarray]:
        arr = _as_pixel_array(pixels)
        xs, ys = arr[:, 0], arr[:, 1]
        mask = (xs >= 0) & (xs < self.width) & (ys >= 0) & (ys < self.height)
        return xs[mask], ys[mask]

    def score(self, pixels) -> float:
        """Mean darkness over the in-bounds *pixels*, or ``0.0`` if there are none."""
        xs, ys = self._in_bounds(pixels)
        if xs.size == 0:
            return 0.0
        return float(self._values[ys, xs].mean())

    def subtract(self, pixels, amount: float) -> None:
        """Remove *amount* of darkness from each in-bounds pixel, flooring at 0."""
        xs, ys = self._in_bounds(pixels)
        if xs.size == 0:
            return
        # np.subtract.at so a pixel listed twice is reduced twice.
        np.subtract.at(self._values, (ys, xs), amount)
        self._values[ys, xs] = np.maximum(self._values[ys, xs], 0.0)

    def total(self) -> float:
        return float(self._values.sum())
