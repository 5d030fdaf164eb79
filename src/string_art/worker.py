"""Run a path build on a background thread with progress and stop support."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

from .builder import BuildProgress, StringPath, build_path
from .constants import DEFAULT_MIN_PIN_GAP_FRACTION
from .field import DarknessField
from .pins import Pin

logger = logging.getLogger(__name__)


class BuildWorker:
    """Builds one path in a daemon thread.

    The latest progress snapshot is readable at any time through
    :attr:`progress`; :meth:`stop` asks the build to finish after the
    current iteration and keeps what was built so far. The worker owns the
    darkness field for the duration of the run.
    """

    def __init__(
        self,
        darkness: DarknessField,
        pins: Sequence[Pin],
        string_count: int,
        min_pin_gap_fraction: float = DEFAULT_MIN_PIN_GAP_FRACTION,
        **build_kwargs,
    ) -> None:
        self.darkness = darkness
        self.pins = pins
        self.string_count = string_count
        self.min_pin_gap_fraction = min_pin_gap_fraction
        self.build_kwargs = build_kwargs
        self.result: StringPath | None = None
        self.error: BaseException | None = None
        self._progress = BuildProgress(percent=0)
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def progress(self) -> BuildProgress:
        with self._lock:
            return self._progress

    def _on_progress(self, progress: BuildProgress) -> None:
        with self._lock:
            self._progress = progress

    def start(self) -> None:
        """Start the build. A worker runs once; its field is consumed by the run."""
        if self._thread and self._thread.is_alive():
            return
        if self._thread is not None:
            raise RuntimeError(
                "BuildWorker has already run; create a new worker with a fresh field."
            )
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> StringPath | None:
        self._stop_event.set()
        return self.wait(timeout)

    def wait(self, timeout: float | None = None) -> StringPath | None:
        if self._thread:
            self._thread.join(timeout=timeout)
        return self.result

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        logger.info("Build worker starting: %d strings", self.string_count)
        try:
            self.result = build_path(
                self.darkness,
                self.pins,
                self.string_count,
                self.min_pin_gap_fraction,
                on_progress=self._on_progress,
                should_stop=self._stop_event.is_set,
                **self.build_kwargs,
            )
        except Exception as e:
            logger.exception("Build worker failed")
            self.error = e
