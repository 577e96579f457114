"""Render the default scene to a BMP file.

Usage:
    orthotrace [options]
    python -m orthotrace [options]

Options:
    --output OUTPUT         Output file path (default: output.bmp)
    --width WIDTH           Image width in pixels (default: 800)
    --height HEIGHT         Image height in pixels (default: 600)
    --exposure EXPOSURE     Exposure factor for tone mapping (default: 1.0)
    --camera-z CAMERA_Z     z coordinate of the camera plane (default: -1000)
    --rows-per-batch ROWS   Rows per progress update (default: 60)
    --arch {cpu,gpu}        Taichi backend (default: cpu)
    --quiet                 Suppress progress output

Example:
    orthotrace --width 400 --height 300 --output small.bmp
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path

import taichi as ti

from orthotrace.core.integrator import CAMERA_Z
from orthotrace.core.renderer import DEFAULT_EXPOSURE, Renderer, RenderSettings
from orthotrace.scene.default import DEFAULT_HEIGHT, DEFAULT_WIDTH, create_default_scene

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "output.bmp"
DEFAULT_ROWS_PER_BATCH = 60


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="orthotrace",
        description="Render the default sphere scene to a 24-bit BMP file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--output",
        type=str,
        default=DEFAULT_OUTPUT,
        help=f"Output file path (default: {DEFAULT_OUTPUT})",
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
        "--exposure",
        type=float,
        default=DEFAULT_EXPOSURE,
        help=f"Exposure factor for tone mapping (default: {DEFAULT_EXPOSURE})",
    )
    parser.add_argument(
        "--camera-z",
        type=float,
        default=CAMERA_Z,
        help=f"z coordinate of the camera plane (default: {CAMERA_Z:g})",
    )
    parser.add_argument(
        "--rows-per-batch",
        type=int,
        default=DEFAULT_ROWS_PER_BATCH,
        help=f"Rows per progress update (default: {DEFAULT_ROWS_PER_BATCH})",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend; gpu falls back to cpu when unavailable (default: cpu)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_default_scene(
    output_path: str | Path = DEFAULT_OUTPUT,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    exposure: float = DEFAULT_EXPOSURE,
    camera_z: float = CAMERA_Z,
    rows_per_batch: int = DEFAULT_ROWS_PER_BATCH,
) -> Path:
    """Render the default scene and save it as a BMP file.

    Taichi must already be initialized.

    Args:
        output_path: Output file path.
        width: Image width in pixels.
        height: Image height in pixels.
        exposure: Exposure factor for tone mapping.
        camera_z: z coordinate of the camera plane.
        rows_per_batch: Number of rows rendered between progress updates.

    Returns:
        Path to the saved image file.

    Raises:
        ValueError: If the scene or settings are invalid.
        OSError: If the output directory does not exist or the file cannot be
            written. The directory is checked before rendering.
    """
    output_dir = Path(output_path).absolute().parent
    if not output_dir.is_dir():
        raise FileNotFoundError(f"Output directory does not exist: {output_dir}")

    scene = create_default_scene(width=width, height=height)
    renderer = Renderer(scene, RenderSettings(exposure=exposure, camera_z=camera_z))

    start_time = time.perf_counter()

    def progress_callback(done: int, total: int) -> None:
        elapsed = time.perf_counter() - start_time
        logger.info("Progress: %d/%d rows (%.1f%%) - %.2fs", done, total, 100.0 * done / total, elapsed)

    renderer.render(rows_per_batch=rows_per_batch, callback=progress_callback)
    return renderer.save_bmp(output_path)


def _init_taichi(arch: str) -> None:
    """Initialize Taichi, falling back to the CPU backend."""
    if arch == "gpu":
        try:
            ti.init(arch=ti.gpu)
            logger.info("Using GPU backend")
            return
        except Exception:
            logger.warning("GPU backend unavailable, using CPU backend")
    ti.init(arch=ti.cpu)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(message)s",
    )

    try:
        _init_taichi(args.arch)
        output_file = render_default_scene(
            output_path=args.output,
            width=args.width,
            height=args.height,
            exposure=args.exposure,
            camera_z=args.camera_z,
            rows_per_batch=args.rows_per_batch,
        )
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info("Saved to: %s", output_file.absolute())
    return 0


if __name__ == "__main__":
    sys.exit(main())
