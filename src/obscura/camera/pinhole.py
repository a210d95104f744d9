"""Pinhole camera model with per-pixel Monte Carlo sampling.

The camera keeps a screen frame one unit in front of its position:

- i_hat: step of one pixel to the right on the screen
- j_hat: step of one pixel down the screen
- origin: offset from the camera position to the top-left screen corner

The frame is built by :meth:`Camera.aim` from a horizontal field of view, a
viewing direction and an up vector. Pixel (x, y) is sampled by rays from the
camera position through origin + i_hat * (x + u) + j_hat * (y + v), with
u and v drawn uniformly from [0, 1).

Example:
    >>> import numpy as np
    >>> from obscura.camera.pinhole import Camera
    >>> from obscura.core.vector import Vector
    >>> camera = Camera(Vector(0.0, 0.0, 5.0), width=160, height=90, sampling=16)
    >>> camera.aim(90.0, Vector(1.0, 0.0, 0.0))
    >>> buffer = camera.capture(scene, np.random.default_rng(42))  # doctest: +SKIP
    >>> buffer.shape
    (90, 160)
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from obscura.camera.hooks import CAPTURE_EVENT, PREVIEW_EVENT, CaptureHooks
from obscura.config import (
    DEFAULT_DEPTH,
    DEFAULT_FRUSTUM,
    DEFAULT_HEIGHT,
    DEFAULT_SAMPLING,
    DEFAULT_WIDTH,
    RenderSettings,
)
from obscura.core.color import BLACK, Color
from obscura.core.ray import Range, Ray
from obscura.core.vector import Vector, cross, near_zero, normalize
from obscura.scene.manager import Scene

logger = logging.getLogger(__name__)

# Type alias for row progress callback: (rows_done, total_rows) -> None
ProgressCallback = Callable[[int, int], None]

DEFAULT_UP = Vector(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class ScreenFrame:
    """Screen-space basis of an aimed camera.

    Attributes:
        i_hat: One pixel step to the right.
        j_hat: One pixel step down.
        origin: Offset from the camera position to the top-left corner.
    """

    i_hat: Vector
    j_hat: Vector
    origin: Vector

    def offset(self, x: float, y: float) -> Vector:
        """Offset from the camera position to screen coordinates (x, y)."""
        return self.origin + self.i_hat * x + self.j_hat * y


class Camera:
    """A pinhole camera that renders a Scene into a packed RGB buffer.

    Attributes:
        position: Camera position in world space.
        width: Image width in pixels.
        height: Image height in pixels.
        sampling: Rays per pixel.
        depth: Maximum bounces per ray.
        frustum: Accepted hit distances for primary rays.
        hooks: Instrumentation callbacks.
    """

    def __init__(
        self,
        position: Vector,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        sampling: int = DEFAULT_SAMPLING,
        depth: int = DEFAULT_DEPTH,
        frustum: Range | None = None,
        hooks: CaptureHooks | None = None,
    ) -> None:
        if sampling <= 0:
            raise ValueError(f"sampling must be a positive integer, got {sampling}.")
        if depth < 0:
            raise ValueError(f"depth must be non-negative, got {depth}.")
        self.position = position
        self.sampling = sampling
        self.depth = depth
        self.frustum = frustum if frustum is not None else Range(*DEFAULT_FRUSTUM)
        self.hooks = hooks if hooks is not None else CaptureHooks()
        self._frame: ScreenFrame | None = None
        self.resize(width, height)

    @classmethod
    def from_settings(
        cls,
        position: Vector,
        settings: RenderSettings,
        hooks: CaptureHooks | None = None,
    ) -> Camera:
        """Create a camera with resolution and sampling from RenderSettings."""
        return cls(
            position,
            width=settings.width,
            height=settings.height,
            sampling=settings.sampling,
            depth=settings.depth,
            frustum=Range(*settings.frustum),
            hooks=hooks,
        )

    # =========================================================================
    # Setup
    # =========================================================================

    def resize(self, width: int, height: int) -> None:
        """Change the resolution. The camera must be aimed again afterwards."""
        if width <= 0 or height <= 0:
            raise ValueError(
                f"Resolution {width}x{height} is invalid. Width and height must be positive."
            )
        self.width = width
        self.height = height
        self._frame = None
        self._film = np.zeros((height, width, 3), dtype=np.float64)
        self._buffer = np.zeros((height, width), dtype=np.uint32)

    def aim(
        self,
        field_of_view: float,
        direction: Vector,
        up: Vector = DEFAULT_UP,
    ) -> None:
        """Build the screen frame for a viewing direction.

        Args:
            field_of_view: Horizontal field of view in degrees, in (0, 180).
            direction: Viewing direction. Need not be normalized.
            up: World up vector. Must not be parallel to direction.

        Raises:
            ValueError: If the field of view is out of range, the direction is
                zero, or up is parallel to the direction.
        """
        if not 0.0 < field_of_view < 180.0:
            raise ValueError(
                f"Field of view = {field_of_view} is outside (0, 180) degrees."
            )
        d = normalize(direction)
        right = cross(d, up)
        if near_zero(right):
            raise ValueError(
                f"Up vector {up} is parallel to the view direction {direction}."
            )

        half_width = math.tan(math.radians(field_of_view) / 2.0)
        half_height = half_width * self.height / self.width

        i_star = normalize(right)
        j_star = normalize(cross(i_star, d))

        self._frame = ScreenFrame(
            i_hat=i_star * (2.0 * half_width / self.width),
            j_hat=-j_star * (2.0 * half_height / self.height),
            origin=d - i_star * half_width + j_star * half_height,
        )
        self._film.fill(0.0)
        self._buffer.fill(0)
        logger.debug(
            "Camera aimed along %s, fov %.1f, screen %.3f x %.3f",
            d,
            field_of_view,
            2.0 * half_width,
            2.0 * half_height,
        )

    @property
    def frame(self) -> ScreenFrame:
        """The screen frame of the aimed camera.

        Raises:
            RuntimeError: If the camera has not been aimed.
        """
        if self._frame is None:
            raise RuntimeError("Camera frame not set up. Call aim() first.")
        return self._frame

    @property
    def film(self) -> npt.NDArray[np.float64]:
        """Linear colors of the last capture, shape (height, width, 3)."""
        return self._film

    @property
    def buffer(self) -> npt.NDArray[np.uint32]:
        """Packed 24-bit pixels of the last capture, shape (height, width)."""
        return self._buffer

    # =========================================================================
    # Rendering
    # =========================================================================

    def ray_through(self, x: float, y: float) -> Ray:
        """Primary ray through screen coordinates (x, y) in pixel units."""
        return Ray(self.position, self.frame.offset(x, y))

    def capture(
        self,
        scene: Scene,
        rng: np.random.Generator | None = None,
        progress: ProgressCallback | None = None,
    ) -> npt.NDArray[np.uint32]:
        """Path trace the scene.

        Args:
            scene: The scene to render.
            rng: Random generator for pixel jitter and scattering. A fresh
                unseeded generator is used if None.
            progress: Called with (rows_done, height) after each row.

        Returns:
            A copy of the packed pixel buffer, shape (height, width), row-major.

        Raises:
            RuntimeError: If the camera has not been aimed.
        """
        frame = self.frame
        if rng is None:
            rng = np.random.default_rng()

        logger.info(
            "Capturing %dx%d, %d samples per pixel, depth %d, %d surfaces",
            self.width,
            self.height,
            self.sampling,
            self.depth,
            len(scene),
        )
        self.hooks.event_start(CAPTURE_EVENT)
        self.hooks.grid_size(self.width, self.height)

        for y in range(self.height):
            for x in range(self.width):
                self.hooks.pixel_start(x, y)
                total = BLACK
                for _ in range(self.sampling):
                    u, v = rng.random(2).tolist()
                    ray = Ray(self.position, frame.offset(x + u, y + v))
                    total = total + scene.cast_ray(ray, self.frustum, self.depth, rng)
                self._store(x, y, total.reduce(self.sampling))
                self.hooks.pixel_stop(x, y)
            if progress is not None:
                progress(y + 1, self.height)

        self.hooks.event_stop(CAPTURE_EVENT)
        logger.info("Capture finished")
        return self._buffer.copy()

    def preview(self, scene: Scene) -> npt.NDArray[np.uint32]:
        """Render a flat-shaded preview with one ray through each pixel center.

        Returns:
            A copy of the packed pixel buffer, shape (height, width), row-major.

        Raises:
            RuntimeError: If the camera has not been aimed.
        """
        frame = self.frame
        self.hooks.event_start(PREVIEW_EVENT)
        self.hooks.grid_size(self.width, self.height)

        for y in range(self.height):
            for x in range(self.width):
                self.hooks.pixel_start(x, y)
                ray = Ray(self.position, frame.offset(x + 0.5, y + 0.5))
                self._store(x, y, scene.preview(ray, self.frustum))
                self.hooks.pixel_stop(x, y)

        self.hooks.event_stop(PREVIEW_EVENT)
        return self._buffer.copy()

    def _store(self, x: int, y: int, color: Color) -> None:
        self._film[y, x] = (color.r, color.g, color.b)
        self._buffer[y, x] = color.to_packed()


__all__ = ["Camera", "DEFAULT_UP", "ProgressCallback", "ScreenFrame"]
