"""Render settings shared by the scene loader, camera and command line.

Example:
    >>> from obscura.config import RenderSettings
    >>> settings = RenderSettings(width=320, height=160, sampling=16)
    >>> settings.aspect_ratio
    2.0
"""

from dataclasses import dataclass

# Render defaults used when settings are not given explicitly
DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 400
DEFAULT_SAMPLING = 100
DEFAULT_DEPTH = 10
DEFAULT_FRUSTUM = (0.1, 1000.0)


@dataclass
class RenderSettings:
    """Resolution and sampling parameters for a capture.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        sampling: Rays cast per pixel.
        depth: Maximum number of bounces per ray.
        seed: Seed for the random generator, or None for OS entropy.
        frustum: (near, far) distance window for primary rays.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    sampling: int = DEFAULT_SAMPLING
    depth: int = DEFAULT_DEPTH
    seed: int | None = None
    frustum: tuple[float, float] = DEFAULT_FRUSTUM

    def __post_init__(self) -> None:
        for name in ("width", "height", "sampling"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value}.")
        if self.depth < 0:
            raise ValueError(f"depth must be non-negative, got {self.depth}.")
        near, far = self.frustum
        if near < 0 or far <= near:
            raise ValueError(
                f"frustum {self.frustum} must satisfy 0 <= near < far."
            )

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height


__all__ = [
    "DEFAULT_DEPTH",
    "DEFAULT_FRUSTUM",
    "DEFAULT_HEIGHT",
    "DEFAULT_SAMPLING",
    "DEFAULT_WIDTH",
    "RenderSettings",
]
