"""Greedy path construction: pick the darkest line from the current pin, repeat.

Each iteration scores every legal connection out of the current pin by the
mean remaining darkness along its pixels, takes the best one, subtracts a
fixed stroke of darkness along it and moves to the far pin::

    score candidates → pick max → subtract stroke → append → move

Past choices are never revised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .cache import LineCache
from .constants import (
    DEFAULT_MIN_PIN_GAP_FRACTION,
    DEFAULT_PROGRESS_INTERVAL,
    DEFAULT_STROKE_DARKNESS,
)
from .errors import InvalidConfigurationError
from .field import DarknessField
from .pins import Pin, circular_distance, min_pin_gap

logger = logging.getLogger(__name__)

START_PIN = 0

STOP_COMPLETED = "completed"
STOP_NO_CANDIDATE = "no_candidate"
STOP_CANCELLED = "cancelled"


@dataclass(frozen=True)
class Connection:
    """One string segment, stretched from ``from_pin`` to ``to_pin``."""

    from_pin: int
    to_pin: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.from_pin, self.to_pin)


@dataclass
class StringPath:
    """Ordered stringing sequence produced by :func:`build`."""

    connections: list[Connection] = field(default_factory=list)
    requested: int = 0
    stop_reason: str = STOP_COMPLETED

    def __len__(self) -> int:
        return len(self.connections)

    def __iter__(self):
        return iter(self.connections)

    def __getitem__(self, index):
        return self.connections[index]

    @property
    def is_complete(self) -> bool:
        return len(self.connections) == self.requested

    def as_pairs(self) -> list[tuple[int, int]]:
        return [c.as_tuple() for c in self.connections]


@dataclass
class BuildProgress:
    """Snapshot emitted on the progress channel."""

    percent: int
    path: list[Connection] = field(default_factory=list)


ProgressCallback = Callable[[BuildProgress], None]
StopCheck = Callable[[], bool]


def _best_candidate(
    current: int,
    pin_count: int,
    gap: int,
    line_cache: LineCache,
    darkness: DarknessField,
) -> int:
    """Return the pin with the strictly highest line score, or -1 if none qualify.

    Candidates are visited in ascending index order, so ties go to the lowest
    index.
    """
    best_pin, best_score = -1, float("-inf")
    for candidate in range(pin_count):
        if candidate == current:
            continue
        if circular_distance(candidate, current, pin_count) < gap:
            continue
        score = darkness.score(line_cache.get_or_compute(current, candidate))
        if score > best_score:
            best_pin, best_score = candidate, score
    return best_pin


def build(
    darkness: DarknessField,
    pins: Sequence[Pin],
    iteration_budget: int,
    min_gap: int,
    *,
    stroke_darkness: float = DEFAULT_STROKE_DARKNESS,
    line_cache: LineCache | None = None,
    on_progress: ProgressCallback | None = None,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    should_stop: StopCheck | None = None,
) -> StringPath:
    """Greedily build a stringing path starting at pin 0.

    Args:
        darkness: Field to consume; mutated in place.
        pins: Pin layout in the same coordinate space as *darkness*.
        iteration_budget: Maximum number of connections to produce.
        min_gap: Minimum circular pin distance for a legal connection.
        stroke_darkness: Darkness removed along each chosen line.
        line_cache: Geometry cache for *pins*; a fresh one is made if omitted.
        on_progress: Called every *progress_interval* iterations and once
            when the run ends, with a copy of the path so far.
        progress_interval: Iterations between progress reports.
        should_stop: Polled before every iteration; returning true ends the
            run and keeps the partial path.

    Returns:
        The path built, shorter than *iteration_budget* only if the run was
        cancelled or no pin satisfied *min_gap*.

    Raises:
        InvalidConfigurationError: For an empty layout, a non-positive
            budget, stroke or interval, or a negative gap.
    """
    if not pins:
        raise InvalidConfigurationError("Pin layout is empty.")
    if iteration_budget <= 0:
        raise InvalidConfigurationError(
            f"Iteration budget must be positive, got {iteration_budget}."
        )
    if min_gap < 0:
        raise InvalidConfigurationError(f"Minimum pin gap must be >= 0, got {min_gap}.")
    if stroke_darkness <= 0:
        raise InvalidConfigurationError(
            f"Stroke darkness must be positive, got {stroke_darkness}."
        )
    if progress_interval <= 0:
        raise InvalidConfigurationError(
            f"Progress interval must be positive, got {progress_interval}."
        )

    if line_cache is None:
        line_cache = LineCache(pins)
    pin_count = len(pins)

    logger.debug(
        "Building path: %d pins, budget=%d, min_gap=%d, field=%dx%d",
        pin_count, iteration_budget, min_gap, darkness.width, darkness.height,
    )

    path = StringPath(requested=iteration_budget)
    current = START_PIN

    for iteration in range(iteration_budget):
        if should_stop is not None and should_stop():
            path.stop_reason = STOP_CANCELLED
            break

        winner = _best_candidate(current, pin_count, min_gap, line_cache, darkness)
        if winner < 0:
            path.stop_reason = STOP_NO_CANDIDATE
            logger.warning(
                "No pin is at least %d away from pin %d among %d pins; stopping",
                min_gap, current, pin_count,
            )
            break

        darkness.subtract(line_cache.get_or_compute(current, winner), stroke_darkness)
        path.connections.append(Connection(current, winner))
        current = winner

        if on_progress is not None and iteration % progress_interval == 0:
            on_progress(
                BuildProgress(
                    percent=round(100 * iteration / iteration_budget),
                    path=list(path.connections),
                )
            )

    if on_progress is not None:
        on_progress(BuildProgress(percent=100, path=list(path.connections)))

    logger.info(
        "Path finished: %d/%d connections (%s), %d cached lines",
        len(path), iteration_budget, path.stop_reason, len(line_cache),
    )
    return path


def build_path(
    darkness: DarknessField,
    pins: Sequence[Pin],
    string_count: int,
    min_pin_gap_fraction: float = DEFAULT_MIN_PIN_GAP_FRACTION,
    **kwargs,
) -> StringPath:
    """Build a path with the minimum gap given as a fraction of the pin count.

    Keyword arguments are forwarded to :func:`build`.
    """
    gap = min_pin_gap(len(pins), min_pin_gap_fraction)
    return build(darkness, pins, string_count, gap, **kwargs)
