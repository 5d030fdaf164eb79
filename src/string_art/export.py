"""Exporters: stringing instructions, printable nail overlay, preview render."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import cv2
import numpy as np

from .builder import START_PIN, Connection
from .constants import DEFAULT_LINE_OPACITY
from .frame import FrameSpec
from .pins import Pin, generate_pins
from .raster import rasterize_line, round_half_up

logger = logging.getLogger(__name__)

# BGR
PIN_COLOR = (60, 76, 231)
LABEL_COLOR = (80, 62, 44)
FOOTER_COLOR = (102, 102, 102)
BORDER_COLOR = (0, 0, 0)


def parse_hex_color(value: str) -> tuple[int, int, int]:
    """Convert ``#rrggbb`` (or ``#rgb``) to an OpenCV BGR tuple."""
    hex_str = value.strip().lstrip("#")
    if len(hex_str) == 3:
        hex_str = "".join(ch * 2 for ch in hex_str)
    if len(hex_str) != 6:
        raise ValueError(f"Not a hex colour: {value!r}")
    r, g, b = (int(hex_str[i : i + 2], 16) for i in (0, 2, 4))
    return (b, g, r)


def label_stride(pin_count: int) -> int:
    """Label every pin on small frames, every 5th or 10th on larger ones."""
    if pin_count > 100:
        return 10
    if pin_count > 50:
        return 5
    return 1


def format_instructions(path: Sequence[Connection], frame: FrameSpec) -> str:
    """Plain-text build sheet: frame summary, pin placement, numbered steps."""
    spacing = frame.actual_spacing_mm
    per_width, per_height = frame.pins_per_edge
    lines = [
        "STRING ART INSTRUCTIONS",
        "========================",
        "",
        f"Canvas Size: {frame.describe()}",
        f"Perimeter: {frame.perimeter_mm / 10:.1f}cm / {frame.perimeter_mm / 25.4:.1f}\"",
        f"Number of Nails: {frame.pin_count}",
        f"Nail Spacing: {spacing:.1f}mm",
        f"String Connections: {len(path)}",
        "",
        "NAIL PLACEMENT:",
        f"Place {frame.pin_count} nails evenly around the perimeter, "
        f"spaced {spacing:.1f}mm apart.",
        "Starting from the top-left corner (nail 0), number them clockwise.",
        "",
        "Nails per edge:",
        f"  - Top: ~{per_width}",
        f"  - Right: ~{per_height}",
        f"  - Bottom: ~{per_width}",
        f"  - Left: ~{per_height}",
        "",
        f"STRING ROUTING ({len(path)} steps):",
        f"Start at nail {path[0].from_pin if path else START_PIN}",
        "",
    ]
    lines.extend(f"{i}. {c.from_pin} → {c.to_pin}" for i, c in enumerate(path, start=1))
    return "\n".join(lines) + "\n"


def _label_position(
    pin: Pin, width: int, height: int, offset: float, margin: float
) -> tuple[float, float]:
    """Nudge a label inwards from whichever edge its pin sits on."""
    x, y = pin.x, pin.y
    if y < margin:
        return x, y + offset
    if y > height - margin:
        return x, y - offset
    if x > width - margin:
        return x - offset, y
    if x < margin:
        return x + offset, y
    return x, y


def _put_centered(
    image: np.ndarray,
    text: str,
    center: tuple[float, float],
    scale: float,
    color: tuple[int, int, int],
    thickness: int,
) -> None:
    (tw, th), _ = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, scale, thickness)
    origin = (round_half_up(center[0] - tw / 2), round_half_up(center[1] + th / 2))
    cv2.putText(
        image, text, origin, cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness, cv2.LINE_AA
    )


def render_nail_overlay(
    frame: FrameSpec,
    canvas_size: tuple[int, int],
    scale: int = 3,
) -> np.ndarray:
    """Draw a printable template of numbered pin positions.

    Pins are laid out on the canvas scaled up by *scale*, so the sheet can be
    printed at a higher resolution than the working canvas.

    Returns:
        BGR image of shape ``(height·scale, width·scale, 3)``.
    """
    width, height = canvas_size[0] * scale, canvas_size[1] * scale
    image = np.full((height, width, 3), 255, dtype=np.uint8)
    cv2.rectangle(image, (0, 0), (width - 1, height - 1), BORDER_COLOR, 2 * scale)

    pins = generate_pins(width, height, frame.pin_count)
    stride = label_stride(frame.pin_count)
    font_scale = 0.35 * scale
    for pin in pins:
        center = (round_half_up(pin.x), round_half_up(pin.y))
        cv2.circle(image, center, 4 * scale, PIN_COLOR, -1, cv2.LINE_AA)
        if pin.index % stride == 0:
            pos = _label_position(pin, width, height, 18 * scale, 10 * scale)
            _put_centered(image, str(pin.index), pos, font_scale, LABEL_COLOR, scale)

    footer = (
        f"{frame.describe()} | {frame.pin_count} nails | "
        f"{frame.actual_spacing_mm:.1f}mm spacing"
    )
    _put_centered(
        image, footer, (width / 2, height - 10 * scale), 0.3 * scale, FOOTER_COLOR, 1
    )
    logger.debug("Rendered nail overlay %dx%d with %d pins", width, height, len(pins))
    return image


def coverage_counts(
    path: Iterable[Connection], pins: Sequence[Pin], canvas_size: tuple[int, int]
) -> np.ndarray:
    """Number of strings crossing each canvas pixel, shape ``(height, width)``."""
    width, height = canvas_size
    counts = np.zeros((height, width), dtype=np.int32)
    for conn in path:
        pixels = np.asarray(
            rasterize_line(pins[conn.from_pin].position, pins[conn.to_pin].position)
        )
        xs, ys = pixels[:, 0], pixels[:, 1]
        mask = (xs >= 0) & (xs < width) & (ys >= 0) & (ys < height)
        np.add.at(counts, (ys[mask], xs[mask]), 1)
    return counts


def render_preview(
    path: Sequence[Connection],
    pins: Sequence[Pin],
    canvas_size: tuple[int, int],
    opacity: float = DEFAULT_LINE_OPACITY,
    string_color: str = "#000000",
    background_color: str = "#ffffff",
    upto: int | None = None,
) -> np.ndarray:
    """Render the first *upto* strings (all by default) as translucent lines.

    Every string is composited with the same *opacity*, so the result
    depends only on how many strings cross each pixel, not on their order.
    """
    if not 0.0 < opacity <= 1.0:
        raise ValueError(f"Opacity must be in (0, 1], got {opacity}")

    steps = path if upto is None else path[:upto]
    counts = coverage_counts(steps, pins, canvas_size)
    alpha = (1.0 - (1.0 - opacity) ** counts)[:, :, np.newaxis]

    background = np.array(parse_hex_color(background_color), dtype=np.float64)
    ink = np.array(parse_hex_color(string_color), dtype=np.float64)
    out = background * (1.0 - alpha) + ink * alpha
    return np.clip(np.rint(out), 0, 255).astype(np.uint8)
