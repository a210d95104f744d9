"""Image export utilities for captured buffers.

The camera produces a (height, width) uint32 buffer of packed 24-bit
pixels. These helpers unpack it to an (height, width, 3) uint8 RGB array
and write PNG files with Pillow.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from obscura.preview.export import save_png
    >>> buffer = camera.capture(scene, rng)  # doctest: +SKIP
    >>> save_png(buffer, "capture.png")  # doctest: +SKIP
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from obscura.camera.hooks import WRITE_EVENT, CaptureHooks

logger = logging.getLogger(__name__)


def unpack_buffer(buffer: npt.NDArray[np.uint32]) -> npt.NDArray[np.uint8]:
    """Split packed R << 16 | G << 8 | B pixels into RGB channels.

    Args:
        buffer: Packed pixel array of shape (H, W).

    Returns:
        8-bit image array of shape (H, W, 3).
    """
    packed = np.asarray(buffer, dtype=np.uint32)
    return np.stack(
        [(packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF],
        axis=-1,
    ).astype(np.uint8)


def film_to_uint8(
    film: npt.NDArray[np.floating],
    *,
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Quantize a linear (H, W, 3) film to 8 bits with optional gamma.

    With gamma 1.0 the result matches the camera's packed buffer.

    Args:
        film: Linear color array of shape (H, W, 3).
        gamma: Gamma correction value. Use 2.2 for sRGB-like output.

    Returns:
        8-bit image array of shape (H, W, 3).
    """
    if gamma <= 0.0:
        raise ValueError(f"Gamma = {gamma} must be positive.")
    image = np.maximum(np.nan_to_num(film, nan=0.0), 0.0)
    if gamma != 1.0:
        image = np.power(image, 1.0 / gamma)
    return np.clip((image * 255.0).astype(np.int64), 0, 255).astype(np.uint8)


def save_png(
    buffer: npt.NDArray[np.uint32],
    filepath: str | Path,
    *,
    hooks: CaptureHooks | None = None,
) -> None:
    """Save a packed pixel buffer as a PNG file.

    Args:
        buffer: Packed pixel array of shape (H, W).
        filepath: Output file path (should end in .png).
        hooks: Optional hooks; the write is reported as "Write Image".
    """
    save_png_from_array(unpack_buffer(buffer), filepath, hooks=hooks)


def save_png_from_array(
    image: npt.NDArray[np.uint8],
    filepath: str | Path,
    *,
    hooks: CaptureHooks | None = None,
) -> None:
    """Save an (H, W, 3) uint8 array as a PNG file."""
    hooks = hooks if hooks is not None else CaptureHooks()
    hooks.event_start(WRITE_EVENT)
    pil_image = PILImage.fromarray(np.ascontiguousarray(image, dtype=np.uint8))
    pil_image.save(filepath, format="PNG")
    hooks.event_stop(WRITE_EVENT)
    logger.info("Wrote %dx%d image to %s", image.shape[1], image.shape[0], filepath)


def load_png(filepath: str | Path) -> npt.NDArray[np.uint8]:
    """Read a PNG back as an (H, W, 3) uint8 array."""
    with PILImage.open(filepath) as pil_image:
        return np.asarray(pil_image.convert("RGB"), dtype=np.uint8)


__all__ = ["film_to_uint8", "load_png", "save_png", "save_png_from_array", "unpack_buffer"]
