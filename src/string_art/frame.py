"""Physical frame geometry: units, pin spacing and the derived pin count."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .constants import (
    DEFAULT_PIN_SPACING_MM,
    MAX_PIN_SPACING_MM,
    MIN_PIN_SPACING_MM,
    MM_PER_UNIT,
    PREVIEW_WIDTH,
)
from .errors import InvalidConfigurationError


@dataclass(frozen=True)
class SpacingQuality:
    label: str
    description: str


def spacing_quality(spacing_mm: float) -> SpacingQuality:
    """Rate how practical a pin spacing is to build by hand."""
    if spacing_mm < 6:
        return SpacingQuality("Very Tight", "Difficult to work with")
    if spacing_mm < 8:
        return SpacingQuality("Tight", "High detail, challenging")
    if spacing_mm <= 12:
        return SpacingQuality("Optimal", "Best balance")
    if spacing_mm <= 18:
        return SpacingQuality("Relaxed", "Easier to work with")
    return SpacingQuality("Sparse", "Less detail")


@dataclass(frozen=True)
class FrameSpec:
    """A physical rectangular frame with pins along its edge.

    ``width`` and ``height`` are in ``unit`` (``"cm"`` or ``"in"``); pin
    spacing is always in millimetres.
    """

    width: float
    height: float
    unit: str = "cm"
    pin_spacing_mm: float = DEFAULT_PIN_SPACING_MM

    def __post_init__(self) -> None:
        if self.unit not in MM_PER_UNIT:
            raise InvalidConfigurationError(
                f"Unknown unit {self.unit!r}; expected one of {sorted(MM_PER_UNIT)}."
            )
        if self.width <= 0 or self.height <= 0:
            raise InvalidConfigurationError(
                f"Frame dimensions must be positive, got {self.width}x{self.height}."
            )
        if not MIN_PIN_SPACING_MM <= self.pin_spacing_mm <= MAX_PIN_SPACING_MM:
            raise InvalidConfigurationError(
                f"Pin spacing must be between {MIN_PIN_SPACING_MM:g} and "
                f"{MAX_PIN_SPACING_MM:g} mm, got {self.pin_spacing_mm:g}."
            )
        if self.pin_count <= 0:
            raise InvalidConfigurationError(
                f"A {self.perimeter_mm:g} mm perimeter has no room for pins "
                f"{self.pin_spacing_mm:g} mm apart."
            )

    @property
    def width_mm(self) -> float:
        return self.width * MM_PER_UNIT[self.unit]

    @property
    def height_mm(self) -> float:
        return self.height * MM_PER_UNIT[self.unit]

    @property
    def perimeter_mm(self) -> float:
        return 2 * (self.width_mm + self.height_mm)

    @property
    def pin_count(self) -> int:
        return math.floor(self.perimeter_mm / self.pin_spacing_mm)

    @property
    def actual_spacing_mm(self) -> float:
        """Spacing after rounding down to a whole number of pins."""
        return self.perimeter_mm / self.pin_count

    @property
    def pin_count_range(self) -> tuple[int, int]:
        """(fewest, most) pins allowed by the spacing limits."""
        return (
            math.floor(self.perimeter_mm / MAX_PIN_SPACING_MM),
            math.floor(self.perimeter_mm / MIN_PIN_SPACING_MM),
        )

    @property
    def recommended_pin_count(self) -> int:
        return math.floor(self.perimeter_mm / DEFAULT_PIN_SPACING_MM)

    @property
    def pins_per_edge(self) -> tuple[int, int]:
        """Approximate pins along one horizontal and one vertical edge."""
        return (
            round(self.width_mm / self.actual_spacing_mm),
            round(self.height_mm / self.actual_spacing_mm),
        )

    @property
    def quality(self) -> SpacingQuality:
        return spacing_quality(self.pin_spacing_mm)

    def canvas_size(self, preview_width: int = PREVIEW_WIDTH) -> tuple[int, int]:
        """Pixel ``(width, height)`` of the working canvas, keeping the frame's aspect."""
        return preview_width, round(preview_width * self.height / self.width)

    def describe(self) -> str:
        """Human-readable size, e.g. ``40cm x 40cm`` or ``16" x 20"``."""
        if self.unit == "cm":
            return f"{self.width:g}cm x {self.height:g}cm"
        return f'{self.width:g}" x {self.height:g}"'
