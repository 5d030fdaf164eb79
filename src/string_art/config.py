"""Generation defaults, optionally overridden by a JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .constants import (
    DEFAULT_LINE_OPACITY,
    DEFAULT_MIN_PIN_GAP_FRACTION,
    DEFAULT_PIN_SPACING_MM,
    DEFAULT_PROGRESS_INTERVAL,
    DEFAULT_STRING_COUNT,
    DEFAULT_STROKE_DARKNESS,
)

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path("string_art.json")

DEFAULTS: dict[str, float | int | str] = {
    "width": 40.0,
    "height": 40.0,
    "unit": "cm",
    "pin_spacing_mm": DEFAULT_PIN_SPACING_MM,
    "strings": DEFAULT_STRING_COUNT,
    "min_gap_fraction": DEFAULT_MIN_PIN_GAP_FRACTION,
    "stroke_darkness": DEFAULT_STROKE_DARKNESS,
    "progress_interval": DEFAULT_PROGRESS_INTERVAL,
    "line_opacity": DEFAULT_LINE_OPACITY,
    "string_color": "#000000",
    "background_color": "#ffffff",
}


def load_defaults(path: Path | None = None) -> dict[str, float | int | str]:
    """Return generation defaults, preferring values saved in *path*.

    Falls back to ``string_art.json`` in the working directory. Keys the
    file does not mention keep their built-in value; unknown keys are
    dropped with a warning.
    """
    path = path or SETTINGS_PATH
    if not path.exists():
        return dict(DEFAULTS)

    saved = json.loads(path.read_text())
    unknown = sorted(set(saved) - set(DEFAULTS))
    if unknown:
        logger.warning("Ignoring unknown settings in %s: %s", path, ", ".join(unknown))
    logger.debug("Loaded settings from %s", path)
    return {**DEFAULTS, **{k: v for k, v in saved.items() if k in DEFAULTS}}


def save_defaults(settings: dict[str, float | int | str], path: Path | None = None) -> None:
    """Write *settings* to *path* (default ``string_art.json``) as indented JSON."""
    path = path or SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings, indent=2) + "\n")
