#!/usr/bin/env python3
"""Render the random sphere field to a PNG.

This script drives the library API directly instead of the pathtracer
command: it builds the random scene, renders it with a thread pool and
saves the streamed rows as a PNG. The pixel map itself is discarded.

Usage:
    python examples/render_spheres.py [options]

Options:
    --width WIDTH       Image width in pixels (default: 600)
    --height HEIGHT     Image height in pixels (default: 400)
    --samples SAMPLES   Number of samples per pixel (default: 20)
    --workers WORKERS   Worker threads (default: 8)
    --seed SEED         Seed for scene layout and sampling (default: 42)
    --output OUTPUT     Output file path (default: spheres.png)
    --quiet             Suppress progress output

Example:
    python examples/render_spheres.py --width 300 --height 200 --samples 10
"""

from __future__ import annotations

import argparse
import io
import sys
import time
from pathlib import Path

import numpy as np

from pathtracer.camera.pinhole import setup_camera
from pathtracer.core.errors import RenderError
from pathtracer.core.scheduler import RenderSettings, render
from pathtracer.output.export import ImageCollector, save_png
from pathtracer.scene.presets import create_random_scene


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the random sphere field to a PNG.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=600, help="Image width (default: 600)")
    parser.add_argument("--height", type=int, default=400, help="Image height (default: 400)")
    parser.add_argument(
        "--samples",
        type=int,
        default=20,
        help="Number of samples per pixel (default: 20)",
    )
    parser.add_argument("--workers", type=int, default=8, help="Worker threads (default: 8)")
    parser.add_argument("--seed", type=int, default=42, help="Seed (default: 42)")
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path (default: spheres.png)",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser.parse_args()


def render_spheres(
    width: int = 600,
    height: int = 400,
    num_samples: int = 20,
    workers: int = 8,
    seed: int = 42,
    output_path: str = "spheres.png",
    quiet: bool = False,
) -> Path:
    """Render the random sphere field and save it to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        num_samples: Number of samples per pixel.
        workers: Number of worker threads.
        seed: Seed for both the scene layout and the per-pixel streams.
        output_path: Output file path (PNG).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    settings = RenderSettings(
        width=width, height=height, samples=num_samples, workers=workers, seed=seed
    )
    scene, camera = create_random_scene(
        np.random.default_rng(seed), aspect_ratio=settings.aspect_ratio
    )
    if not quiet:
        print(f"Created scene with {len(scene)} spheres ({width}x{height})")

    collector = ImageCollector(width, height)
    start_time = time.time()

    def progress_callback(remaining: int, total: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            done = total - remaining
            print(
                f"\r  Progress: {done}/{total} rows ({elapsed:.1f}s)",
                end="",
                flush=True,
            )

    render(
        scene,
        setup_camera(camera),
        settings,
        io.StringIO(),
        progress=progress_callback,
        row_sink=collector,
    )

    if not quiet:
        print()

    output_file = Path(output_path)
    save_png(collector.image, str(output_file))

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    try:
        render_spheres(
            width=args.width,
            height=args.height,
            num_samples=args.samples,
            workers=args.workers,
            seed=args.seed,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (RenderError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
