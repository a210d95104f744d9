"""Pinhole camera, capture hooks and render timing."""

from obscura.camera.hooks import CaptureHooks
from obscura.camera.pinhole import Camera
from obscura.camera.timing import GridTimer

__all__ = ["Camera", "CaptureHooks", "GridTimer"]
