"""Command line entry point: render a scene file to a PNG.

Usage:
    obscura SCENE [options]

Options:
    --output OUTPUT     Output file path (default: capture.png)
    --width WIDTH       Image width in pixels (default: 800)
    --height HEIGHT     Image height in pixels (default: 400)
    --samples SAMPLES   Rays per pixel (default: 100)
    --depth DEPTH       Maximum bounces per ray (default: 10)
    --seed SEED         Random seed for a reproducible capture
    --preview           Render a flat-shaded preview instead of path tracing
    --heatmap PATH      Also write a per-pixel render time heatmap
    --show              Display the result in a Matplotlib window
    --quiet             Suppress progress output
    --log-level LEVEL   Logging level (default: INFO)

Example:
    obscura examples/example.scene --width 320 --height 160 --samples 16 --seed 42
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence

import numpy as np

from obscura.camera.hooks import CAPTURE_EVENT, PREVIEW_EVENT
from obscura.camera.timing import GridTimer
from obscura.config import (
    DEFAULT_DEPTH,
    DEFAULT_HEIGHT,
    DEFAULT_SAMPLING,
    DEFAULT_WIDTH,
    RenderSettings,
)
from obscura.log import setup_logging
from obscura.preview.export import save_png
from obscura.scene.loader import load_scene

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="obscura",
        description="Render a scene description file with a path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("scene", help="Path to the scene description file")
    parser.add_argument(
        "--output",
        type=str,
        default="capture.png",
        help="Output file path (default: capture.png)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_WIDTH})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=DEFAULT_HEIGHT,
        help=f"Image height in pixels (default: {DEFAULT_HEIGHT})",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SAMPLING,
        help=f"Rays per pixel (default: {DEFAULT_SAMPLING})",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_DEPTH,
        help=f"Maximum bounces per ray (default: {DEFAULT_DEPTH})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible capture",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Render a flat-shaded preview instead of path tracing",
    )
    parser.add_argument(
        "--heatmap",
        type=str,
        default=None,
        help="Also write a per-pixel render time heatmap to this path",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Display the result in a Matplotlib window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    return parser.parse_args(argv)


def render(args: argparse.Namespace) -> None:
    """Load, render and write the scene named by the parsed arguments."""
    settings = RenderSettings(
        width=args.width,
        height=args.height,
        sampling=args.samples,
        depth=args.depth,
        seed=args.seed,
    )
    timer = GridTimer()
    loaded = load_scene(args.scene, settings, hooks=timer.hooks())
    camera = loaded.camera

    start_time = time.time()

    def progress_callback(rows: int, total: int) -> None:
        if not args.quiet:
            elapsed = time.time() - start_time
            print(
                f"\r  Progress: {rows}/{total} rows "
                f"({rows / total * 100:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    if args.preview:
        event = PREVIEW_EVENT
        buffer = camera.preview(loaded.scene)
    else:
        event = CAPTURE_EVENT
        rng = np.random.default_rng(settings.seed)
        buffer = camera.capture(loaded.scene, rng, progress=progress_callback)
        if not args.quiet:
            print()  # Newline after progress

    save_png(buffer, args.output, hooks=camera.hooks)

    heatmap = None
    if args.heatmap is not None:
        heatmap = timer.heatmap()
        save_png(heatmap, args.heatmap)
        logger.info("Speedup: %.2fx", timer.calculate_speedup(event))

    timer.log_events()

    if args.show:
        from obscura.preview.display import show_capture, show_side_by_side

        if heatmap is not None:
            show_side_by_side(buffer, heatmap)
        else:
            show_capture(buffer, title=args.scene)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        render(args)
        return 0
    except Exception:
        logger.exception("Rendering %s failed", args.scene)
        return 1


if __name__ == "__main__":
    sys.exit(main())
