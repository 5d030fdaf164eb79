"""Image decoding and conversion to a darkness grid.

Pipeline::

    file → decode (alpha over white) → letterbox onto canvas → 255 − mean(B, G, R)
"""

from __future__ import annotations

import logging
from pathlib import Path

import cv2
import numpy as np

from .constants import MAX_DARKNESS

logger = logging.getLogger(__name__)


def _flatten_alpha(image: np.ndarray) -> np.ndarray:
    """Composite a BGRA image over white and drop the alpha channel."""
    bgr = image[:, :, :3].astype(np.float32)
    alpha = image[:, :, 3:4].astype(np.float32) / 255.0
    out = bgr * alpha + 255.0 * (1.0 - alpha)
    return np.clip(np.rint(out), 0, 255).astype(np.uint8)


def load_image(path: Path) -> np.ndarray:
    """Read *path* as a BGR ``uint8`` image.

    Transparent pixels are composited over white, matching how the frame's
    background shows through.

    Raises:
        FileNotFoundError: If the file is missing or cannot be decoded.
    """
    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise FileNotFoundError(f"Could not load image: {path}")

    if image.dtype == np.uint16:
        image = (image // 257).astype(np.uint8)
    if image.ndim == 2:
        image = cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    elif image.shape[2] == 4:
        image = _flatten_alpha(image)

    logger.debug("Loaded %s (%dx%d)", path, image.shape[1], image.shape[0])
    return image


def fit_to_canvas(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """Scale *image* to fit inside ``width × height`` and centre it on white.

    Aspect ratio is preserved; the uncovered margin stays white, i.e. zero
    darkness.
    """
    src_h, src_w = image.shape[:2]
    scale = min(width / src_w, height / src_h)
    new_w = max(1, min(width, round(src_w * scale)))
    new_h = max(1, min(height, round(src_h * scale)))

    interpolation = cv2.INTER_AREA if scale < 1 else cv2.INTER_LINEAR
    resized = cv2.resize(image, (new_w, new_h), interpolation=interpolation)
    if resized.ndim == 2:
        resized = cv2.cvtColor(resized, cv2.COLOR_GRAY2BGR)

    canvas = np.full((height, width, 3), 255, dtype=np.uint8)
    x = (width - new_w) // 2
    y = (height - new_h) // 2
    canvas[y : y + new_h, x : x + new_w] = resized[:, :, :3]
    return canvas


def darkness_from_image(image: np.ndarray) -> np.ndarray:
    """Per-pixel darkness ``255 − mean of the colour channels`` as float64.

    Grayscale input is used directly; a fourth (alpha) channel is ignored.
    """
    if image.ndim == 2:
        brightness = image.astype(np.float64)
    else:
        brightness = image[:, :, :3].astype(np.float64).mean(axis=2)
    return MAX_DARKNESS - brightness
