"""Shared constants for pin layout, path building and frame geometry."""

# Darkness scale: 0 is paper white, 255 is full ink.
MAX_DARKNESS: float = 255.0

# Darkness one string removes from every pixel it crosses.
DEFAULT_STROKE_DARKNESS: float = 25.0

# Fraction of the pin count a connection must skip around the frame.
DEFAULT_MIN_PIN_GAP_FRACTION: float = 0.1

# Builder iterations between progress reports.
DEFAULT_PROGRESS_INTERVAL: int = 50

DEFAULT_STRING_COUNT: int = 2000

# Physical pin spacing along the frame perimeter, in millimetres.
#
#   5 mm ── very tight ── 8 ── optimal ── 12 ── relaxed ── 18 ── sparse ── 30 mm
#
MIN_PIN_SPACING_MM: float = 5.0
MAX_PIN_SPACING_MM: float = 30.0
DEFAULT_PIN_SPACING_MM: float = 10.0

MM_PER_UNIT: dict[str, float] = {
    "cm": 10.0,
    "in": 25.4,
}

# Pixel width of the working canvas the image is fitted onto.
PREVIEW_WIDTH: int = 400

# Default string opacity for preview renders.
DEFAULT_LINE_OPACITY: float = 0.15
