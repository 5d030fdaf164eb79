"""Full generation pipeline: load → fit → darkness → pins → build."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .builder import ProgressCallback, StopCheck, StringPath, build_path
from .cache import LineCache
from .constants import (
    DEFAULT_MIN_PIN_GAP_FRACTION,
    DEFAULT_PROGRESS_INTERVAL,
    DEFAULT_STROKE_DARKNESS,
    PREVIEW_WIDTH,
)
from .field import DarknessField
from .frame import FrameSpec
from .imaging import darkness_from_image, fit_to_canvas, load_image
from .pins import Pin, PinLayoutCache

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Everything an exporter needs to draw or describe the result."""

    frame: FrameSpec
    canvas_size: tuple[int, int]
    pins: tuple[Pin, ...]
    path: StringPath

    @property
    def pin_count(self) -> int:
        return len(self.pins)


def generate_from_image(
    image_path: Path,
    frame: FrameSpec,
    string_count: int,
    min_pin_gap_fraction: float = DEFAULT_MIN_PIN_GAP_FRACTION,
    stroke_darkness: float = DEFAULT_STROKE_DARKNESS,
    preview_width: int = PREVIEW_WIDTH,
    on_progress: ProgressCallback | None = None,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    should_stop: StopCheck | None = None,
    layouts: PinLayoutCache | None = None,
) -> GenerationResult:
    """Turn the image at *image_path* into a stringing path for *frame*.

    The image is letterboxed onto a canvas with the frame's aspect ratio,
    ``preview_width`` pixels wide; pins are laid out around that canvas.

    Args:
        image_path: Source picture.
        frame: Physical frame; determines pin count and canvas aspect.
        string_count: Number of connections to build.
        min_pin_gap_fraction: Minimum connection span as a fraction of pins.
        stroke_darkness: Darkness one string removes per pixel.
        preview_width: Working canvas width in pixels.
        on_progress: Forwarded to the builder.
        progress_interval: Forwarded to the builder.
        should_stop: Forwarded to the builder.
        layouts: Pin layout memo to reuse across calls.

    Raises:
        FileNotFoundError: If the image cannot be read.
        InvalidConfigurationError: For invalid build parameters.
    """
    image = load_image(image_path)
    canvas_size = frame.canvas_size(preview_width)
    canvas = fit_to_canvas(image, *canvas_size)
    darkness = DarknessField(darkness_from_image(canvas))

    if layouts is None:
        layouts = PinLayoutCache()
    pins = layouts.get(canvas_size[0], canvas_size[1], frame.pin_count)
    logger.info(
        "Generating %d strings on %d pins (%s, canvas %dx%d)",
        string_count, len(pins), frame.describe(), *canvas_size,
    )

    path = build_path(
        darkness,
        pins,
        string_count,
        min_pin_gap_fraction,
        stroke_darkness=stroke_darkness,
        line_cache=LineCache(pins),
        on_progress=on_progress,
        progress_interval=progress_interval,
        should_stop=should_stop,
    )
    return GenerationResult(frame=frame, canvas_size=canvas_size, pins=pins, path=path)
