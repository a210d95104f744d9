"""Wall-clock timing of capture stages and of every pixel.

GridTimer collects named events and a per-pixel grid of elapsed times
through :class:`CaptureHooks`. The grid can be turned into a heatmap that
shows where the render spent its time, and compared against the stage's
wall time to estimate how much a parallel render could gain.

Example:
    >>> from obscura.camera.timing import GridTimer
    >>> timer = GridTimer()
    >>> camera.hooks = timer.hooks()  # doctest: +SKIP
    >>> camera.capture(scene, rng)  # doctest: +SKIP
    >>> timer.log_events()  # doctest: +SKIP
    >>> heatmap = timer.heatmap()  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from obscura.camera.hooks import CaptureHooks

logger = logging.getLogger(__name__)

# Cube root curve makes intermediate heatmap colors look less grey
HEATMAP_CURVE = 1.0 / 3.0

HEATMAP_EVENT = "Generate Heatmap"


class TimerEventError(RuntimeError):
    """Raised when timer events are started or stopped out of order."""


@dataclass
class TimedEvent:
    """Start and stop times of one event, in nanoseconds.

    Attributes:
        name: Event name.
        start: Clock reading when the event started.
        stop: Clock reading when it stopped, or None while running.
    """

    name: str
    start: int
    stop: int | None = None

    @property
    def completed(self) -> bool:
        return self.stop is not None

    @property
    def elapsed(self) -> int:
        if self.stop is None:
            raise TimerEventError(f'Event "{self.name}" has not stopped.')
        return self.stop - self.start


class GridTimer:
    """Timer for named events and a grid of per-pixel events.

    Args:
        clock: Nanosecond clock, time.perf_counter_ns by default.
    """

    def __init__(self, clock: Callable[[], int] = time.perf_counter_ns) -> None:
        self._clock = clock
        self._events: dict[str, TimedEvent] = {}
        self._grid_start: npt.NDArray[np.int64] | None = None
        self._grid_elapsed: npt.NDArray[np.int64] | None = None

    def hooks(self) -> CaptureHooks:
        """Capture hooks that report into this timer."""
        return CaptureHooks(
            event_start=self.event_start,
            event_stop=self.event_stop,
            grid_size=self.set_grid_size,
            pixel_start=self.pixel_start,
            pixel_stop=self.pixel_stop,
        )

    # =========================================================================
    # Named events
    # =========================================================================

    def event_start(self, name: str) -> None:
        if name in self._events:
            raise TimerEventError(f'Event with the name "{name}" already exists.')
        self._events[name] = TimedEvent(name, self._clock())

    def event_stop(self, name: str) -> None:
        event = self._events.get(name)
        if event is None:
            raise TimerEventError(f'Event "{name}" is not found.')
        if event.completed:
            raise TimerEventError(f'Event "{name}" is already stopped.')
        event.stop = self._clock()
        logger.debug("%s: %.3g s", name, event.elapsed / 1e9)

    def elapsed(self, name: str) -> int:
        """Elapsed nanoseconds of a completed event."""
        event = self._events.get(name)
        if event is None:
            raise TimerEventError(f'Event "{name}" is not found.')
        return event.elapsed

    def events(self) -> list[TimedEvent]:
        """All events, in the order they started."""
        return sorted(self._events.values(), key=lambda event: event.start)

    def log_events(self, level: int = logging.INFO) -> None:
        """Log the duration of every completed event."""
        for event in self.events():
            if event.completed:
                logger.log(level, "%s: %.3g s", event.name, event.elapsed / 1e9)

    # =========================================================================
    # Pixel grid
    # =========================================================================

    def set_grid_size(self, width: int, height: int) -> None:
        """Allocate an empty grid. Previous pixel timings are discarded."""
        self._grid_start = np.full((height, width), -1, dtype=np.int64)
        self._grid_elapsed = np.full((height, width), -1, dtype=np.int64)

    def pixel_start(self, x: int, y: int) -> None:
        starts = self._require_grid()[0]
        if starts[y, x] >= 0:
            raise TimerEventError(f"Event at Grid[{x}][{y}] already exists.")
        starts[y, x] = self._clock()

    def pixel_stop(self, x: int, y: int) -> None:
        starts, elapsed = self._require_grid()
        if starts[y, x] < 0:
            raise TimerEventError(f"Event at Grid[{x}][{y}] was not started.")
        if elapsed[y, x] >= 0:
            raise TimerEventError(f"Event at Grid[{x}][{y}] is already stopped.")
        elapsed[y, x] = self._clock() - starts[y, x]

    @property
    def grid(self) -> npt.NDArray[np.int64]:
        """Elapsed nanoseconds per pixel, shape (height, width)."""
        elapsed = self._require_grid()[1]
        if (elapsed < 0).any():
            raise TimerEventError("Pixel grid has unfinished events.")
        return elapsed

    def heatmap(self) -> npt.NDArray[np.uint32]:
        """Color the pixel grid from cyan (fastest) to red (slowest).

        Returns:
            Packed 24-bit pixels, shape (height, width).
        """
        self.event_start(HEATMAP_EVENT)
        grid = self.grid.astype(np.float64)
        low, high = grid.min(), grid.max()
        span = high - low
        if span > 0:
            t = (grid - low) / span
        else:
            t = np.zeros_like(grid)

        red = np.clip((255.0 * t**HEATMAP_CURVE).astype(np.int64), 0, 255)
        cyan = np.clip((255.0 * (1.0 - t) ** HEATMAP_CURVE).astype(np.int64), 0, 255)
        heatmap = ((red << 16) | (cyan << 8) | cyan).astype(np.uint32)
        self.event_stop(HEATMAP_EVENT)
        return heatmap

    def calculate_speedup(self, name: str) -> float:
        """Ratio of summed pixel time to the wall time of an event.

        Close to 1.0 for a serial render; a parallel render scores higher.
        """
        wall = self.elapsed(name)
        if wall <= 0:
            raise TimerEventError(f'Event "{name}" has no measurable duration.')
        return float(self.grid.sum()) / wall

    def _require_grid(self) -> tuple[npt.NDArray[np.int64], npt.NDArray[np.int64]]:
        if self._grid_start is None or self._grid_elapsed is None:
            raise TimerEventError("Pixel grid not set up. Call set_grid_size() first.")
        return self._grid_start, self._grid_elapsed


__all__ = ["GridTimer", "HEATMAP_CURVE", "TimedEvent", "TimerEventError"]
