"""Matplotlib-based display for captured images.

Example:
    >>> from obscura.preview.display import show_capture
    >>> show_capture(camera.capture(scene, rng), title="example.scene")  # doctest: +SKIP
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from obscura.preview.export import unpack_buffer


def show_capture(
    buffer: npt.NDArray[np.uint32],
    *,
    title: str | None = None,
    block: bool = True,
) -> None:
    """Display a packed pixel buffer in a Matplotlib window.

    Args:
        buffer: Packed pixel array of shape (H, W).
        title: Optional window title.
        block: Whether to block until the window is closed.
    """
    import matplotlib.pyplot as plt

    image = unpack_buffer(buffer)
    height, width = image.shape[:2]

    # Keep very small captures at a usable window size
    scale = max(1.0, 400.0 / width)
    fig, ax = plt.subplots(figsize=(width * scale / 100.0, height * scale / 100.0), dpi=100)
    ax.imshow(image, interpolation="nearest")
    ax.set_axis_off()
    if title is not None:
        ax.set_title(title)
    fig.tight_layout()
    plt.show(block=block)


def show_side_by_side(
    capture: npt.NDArray[np.uint32],
    heatmap: npt.NDArray[np.uint32],
    *,
    block: bool = True,
) -> None:
    """Display a capture next to its timing heatmap."""
    import matplotlib.pyplot as plt

    fig, (left, right) = plt.subplots(1, 2, figsize=(12, 4))
    left.imshow(unpack_buffer(capture), interpolation="nearest")
    left.set_title("Capture")
    right.imshow(unpack_buffer(heatmap), interpolation="nearest")
    right.set_title("Render time per pixel")
    for ax in (left, right):
        ax.set_axis_off()
    fig.tight_layout()
    plt.show(block=block)


__all__ = ["show_capture", "show_side_by_side"]
