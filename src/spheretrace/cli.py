"""Render the random-spheres scene from the command line.

Usage:
    spheretrace [options]
    python -m spheretrace [options]

Options:
    --width WIDTH             Image width in pixels (default: 600)
    --aspect-ratio RATIO      Width / height (default: 16/9)
    --samples SAMPLES         Total samples per pixel (default: 16)
    --workers WORKERS         Render threads; must divide SAMPLES (default: 16)
    --max-depth DEPTH         Maximum bounces per path (default: 10)
    --aperture APERTURE       Lens diameter (default: 0.1)
    --focus-distance DIST     Distance to the focus plane (default: 10)
    --vfov DEGREES            Vertical field of view (default: 20)
    --output OUTPUT           Output file, .png or .ppm (default: spheres.png)
    --quiet                   Suppress progress output
    --verbose                 Enable debug logging

Example:
    spheretrace --width 200 --samples 8 --workers 4 --output small.png
"""

from __future__ import annotations

import argparse
import contextlib
import logging
import os
import sys
import time
from collections.abc import Sequence
from pathlib import Path

from spheretrace.camera import ThinLensCamera
from spheretrace.config import CameraConfig, RenderConfig
from spheretrace.core.parallel import render
from spheretrace.core.progress import RenderProgress
from spheretrace.image.export import save_image
from spheretrace.scene import create_random_scene

logger = logging.getLogger(__name__)

_DEFAULTS = RenderConfig()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="spheretrace",
        description="Render the random-spheres scene with a multithreaded path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=_DEFAULTS.image_width,
        help=f"Image width in pixels (default: {_DEFAULTS.image_width})",
    )
    parser.add_argument(
        "--aspect-ratio",
        type=float,
        default=_DEFAULTS.aspect_ratio,
        help="Image width divided by height (default: 16/9)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=_DEFAULTS.samples_per_pixel_total,
        help=f"Total samples per pixel (default: {_DEFAULTS.samples_per_pixel_total})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=_DEFAULTS.worker_count,
        help=f"Number of render threads (default: {_DEFAULTS.worker_count})",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=_DEFAULTS.max_depth,
        help=f"Maximum bounces per path (default: {_DEFAULTS.max_depth})",
    )
    parser.add_argument(
        "--aperture",
        type=float,
        default=_DEFAULTS.camera.aperture,
        help=f"Lens diameter, 0 for a pinhole (default: {_DEFAULTS.camera.aperture})",
    )
    parser.add_argument(
        "--focus-distance",
        type=float,
        default=_DEFAULTS.camera.focus_distance,
        help=f"Distance to the plane in focus (default: {_DEFAULTS.camera.focus_distance})",
    )
    parser.add_argument(
        "--vfov",
        type=float,
        default=_DEFAULTS.camera.vfov,
        help=f"Vertical field of view in degrees (default: {_DEFAULTS.camera.vfov})",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path, .png or .ppm (default: spheres.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RenderConfig:
    """Build the render configuration from parsed arguments.

    Raises:
        ValueError: If the arguments describe an invalid configuration.
    """
    camera = CameraConfig(
        vfov=args.vfov,
        aperture=args.aperture,
        focus_distance=args.focus_distance,
    )
    return _DEFAULTS.replace(
        image_width=args.width,
        aspect_ratio=args.aspect_ratio,
        samples_per_pixel_total=args.samples,
        worker_count=args.workers,
        max_depth=args.max_depth,
        camera=camera,
    )


def render_random_scene(
    config: RenderConfig,
    output_path: str = "spheres.png",
    quiet: bool = False,
) -> Path:
    """Render the random-spheres scene and save it.

    Args:
        config: Render settings.
        output_path: Output file path (.png or .ppm).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    if not quiet:
        print(f"Creating random scene ({config.image_width}x{config.image_height})...")

    world = create_random_scene()
    camera = ThinLensCamera.from_config(config)
    logger.debug("Configuration: %s", config.to_dict())

    if not quiet:
        print(
            f"Rendering {config.samples_per_pixel_total} samples per pixel "
            f"on {config.worker_count} threads..."
        )

    start_time = time.time()
    status = open(os.devnull, "w") if quiet else contextlib.nullcontext(sys.stderr)
    with status as stream:
        progress = RenderProgress(config.worker_count, stream=stream)
        image = render(world, camera, config, progress)
        if not quiet:
            progress.finish()

    output_file = save_image(image, output_path)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = build_config(args)
        render_random_scene(config, output_path=args.output, quiet=args.quiet)
        return 0
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
