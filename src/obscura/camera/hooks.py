"""Instrumentation callbacks fired during a capture.

Every callback defaults to a no-op, so callers only supply the ones they
need. GridTimer.hooks() returns a fully populated set.

Event names used by the camera and the export helpers:
    - "Capture Scene": a full path traced capture
    - "Preview Scene": a flat-shaded preview
    - "Write Image": saving the result to disk
"""

from collections.abc import Callable
from dataclasses import dataclass

CAPTURE_EVENT = "Capture Scene"
PREVIEW_EVENT = "Preview Scene"
WRITE_EVENT = "Write Image"


def _ignore(*args: object) -> None:
    pass


@dataclass
class CaptureHooks:
    """Optional callbacks around capture work.

    Attributes:
        event_start: Called with an event name when a named stage begins.
        event_stop: Called with the same name when the stage ends.
        grid_size: Called with (width, height) before per-pixel work.
        pixel_start: Called with (x, y) before a pixel is rendered.
        pixel_stop: Called with (x, y) after a pixel is rendered.
    """

    event_start: Callable[[str], None] = _ignore
    event_stop: Callable[[str], None] = _ignore
    grid_size: Callable[[int, int], None] = _ignore
    pixel_start: Callable[[int, int], None] = _ignore
    pixel_stop: Callable[[int, int], None] = _ignore


__all__ = ["CAPTURE_EVENT", "CaptureHooks", "PREVIEW_EVENT", "WRITE_EVENT"]
