"""Command-line entry point.

Renders a sphere scene as an ASCII pixel map (P3) on stdout, or to a file
with --output. Progress goes to stderr.

Usage:
    pathtracer WIDTH HEIGHT [SAMPLES] [WORKERS] [options]

Options:
    --max-depth N       Maximum bounces per path (default: 50)
    --seed N            Run seed for reproducible renders
    --scene NAME        "default" (four spheres) or "random" (sphere field)
    --png PATH          Also save the image as a PNG
    -o, --output PATH   Write the pixel map to PATH instead of stdout
    -q, --quiet         Suppress progress output
    -v, --verbose       Debug logging on stderr

Example:
    pathtracer 400 225 50 8 --seed 42 > spheres.ppm
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from contextlib import ExitStack

import numpy as np

from pathtracer.camera.pinhole import get_camera_info, setup_camera
from pathtracer.core.errors import RenderError, UsageError
from pathtracer.core.integrator import MAX_DEPTH
from pathtracer.core.scheduler import DEFAULT_SAMPLES, RenderSettings, render
from pathtracer.output.export import ImageCollector, save_png
from pathtracer.scene.presets import create_default_scene, create_random_scene

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render a sphere scene as an ASCII pixel map (P3).",
    )
    parser.add_argument("width", type=int, help="Image width in pixels (at least 2)")
    parser.add_argument("height", type=int, help="Image height in pixels (at least 2)")
    parser.add_argument(
        "samples",
        type=int,
        nargs="?",
        default=DEFAULT_SAMPLES,
        help=f"Samples per pixel (default: {DEFAULT_SAMPLES})",
    )
    parser.add_argument(
        "workers",
        type=int,
        nargs="?",
        default=1,
        help="Worker threads (default: 1)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=MAX_DEPTH,
        help=f"Maximum bounces per path (default: {MAX_DEPTH})",
    )
    parser.add_argument("--seed", type=int, default=None, help="Run seed")
    parser.add_argument(
        "--scene",
        choices=("default", "random"),
        default="default",
        help="Scene to render (default: default)",
    )
    parser.add_argument("--png", default=None, help="Also save the image as a PNG")
    parser.add_argument("-o", "--output", default=None, help="Pixel map output file")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def build_settings(args: argparse.Namespace) -> RenderSettings:
    """Turn parsed arguments into RenderSettings.

    Raises:
        UsageError: If the values are out of range.
    """
    try:
        return RenderSettings(
            width=args.width,
            height=args.height,
            samples=args.samples,
            workers=args.workers,
            max_depth=args.max_depth,
            seed=args.seed,
        )
    except ValueError as e:
        raise UsageError(str(e)) from e


def _print_progress(remaining: int, total: int) -> None:
    print(f"\rScanlines remaining: {remaining} ", end="", file=sys.stderr, flush=True)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = build_settings(args)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 2

    if args.scene == "random":
        scene_rng = np.random.default_rng(args.seed)
        scene, camera = create_random_scene(scene_rng, aspect_ratio=settings.aspect_ratio)
    else:
        scene, camera = create_default_scene(aspect_ratio=settings.aspect_ratio)
    camera_state = setup_camera(camera)
    logger.debug("Scene has %d spheres; camera %s", len(scene), get_camera_info(camera_state))

    collector = ImageCollector(settings.width, settings.height) if args.png else None
    progress = None if args.quiet else _print_progress

    start_time = time.time()
    try:
        with ExitStack() as stack:
            if args.output:
                channel = stack.enter_context(open(args.output, "w", encoding="ascii"))
            else:
                channel = sys.stdout
            seed = render(scene, camera_state, settings, channel, progress, collector)
    except (RenderError, OSError) as e:
        if progress is not None:
            print(file=sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if collector is not None:
        save_png(collector.image, args.png)

    if not args.quiet:
        print("\nDone.", file=sys.stderr)
    logger.info("Seed %d, %.2fs", seed, time.time() - start_time)
    return 0
