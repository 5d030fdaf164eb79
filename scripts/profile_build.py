"""cProfile a full-size path build on a synthetic gradient, dump .prof + top stats."""

import cProfile
import pstats
import sys
from pathlib import Path

import numpy as np

from string_art.builder import build_path
from string_art.field import DarknessField
from string_art.frame import FrameSpec
from string_art.pins import generate_pins

ROOT = Path(__file__).parent.parent
PROF_OUT = ROOT / "profile.prof"

FRAME = FrameSpec(40, 40)
STRINGS = 500


def _gradient(width: int, height: int) -> np.ndarray:
    xs = np.linspace(0, 255, width)
    ys = np.linspace(255, 0, height)[:, np.newaxis]
    return (xs + ys) / 2


def main() -> None:
    width, height = FRAME.canvas_size()
    pins = generate_pins(width, height, FRAME.pin_count)

    pr = cProfile.Profile()
    pr.enable()
    path = build_path(DarknessField(_gradient(width, height)), pins, STRINGS)
    pr.disable()

    print(f"Built {len(path)} connections on {len(pins)} pins ({width}x{height})")
    pr.dump_stats(str(PROF_OUT))
    print(f"Profile saved → {PROF_OUT}")

    stats = pstats.Stats(str(PROF_OUT), stream=sys.stdout)
    stats.strip_dirs()
    stats.sort_stats("cumulative")
    stats.print_stats(25)


if __name__ == "__main__":
    main()
