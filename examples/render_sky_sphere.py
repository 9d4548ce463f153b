#!/usr/bin/env python3
"""Render the normal-shaded sphere against the sky gradient.

This script runs the full pipeline once: it initializes Taichi, dispatches
the tracing kernel over a tile grid covering the image, waits for the frame
and writes it out as an RGBA PNG.

Usage:
    python -m examples.render_sky_sphere [options]

Options:
    --width WIDTH         Image width in pixels (default: 1024)
    --height HEIGHT       Image height in pixels (default: 1024)
    --tile-size SIZE      Tile edge length in invocations (default: 8)
    --output OUTPUT       Output file path (default: out.png)
    --cpu                 Force the CPU backend
    --quiet               Suppress progress output

Example:
    python -m examples.render_sky_sphere --width 400 --height 225 --output sphere.png
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the normal-shaded sphere against the sky gradient.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1024,
        help="Image width in pixels (default: 1024)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=1024,
        help="Image height in pixels (default: 1024)",
    )
    parser.add_argument(
        "--tile-size",
        type=int,
        default=8,
        help="Tile edge length in invocations (default: 8)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="out.png",
        help="Output file path (default: out.png)",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Force the CPU backend",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_sky_sphere(
    width: int = 1024,
    height: int = 1024,
    tile_size: int = 8,
    output_path: str = "out.png",
    quiet: bool = False,
) -> Path:
    """Render one frame and save it to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        tile_size: Tile edge length in invocations.
        output_path: Output file path (PNG).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.skytracer.config import RenderConfig
    from src.skytracer.core.renderer import RaytracingRenderer

    config = RenderConfig(
        width=width,
        height=height,
        tile_width=tile_size,
        tile_height=tile_size,
    )
    renderer = RaytracingRenderer(config)

    if not quiet:
        print(f"Rendering {width}x{height} with {tile_size}x{tile_size} tiles...")

    start_time = time.time()
    renderer.render()

    output_file = Path(output_path)
    renderer.save_png(str(output_file))

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    from src.skytracer.config import init_backend

    backend = init_backend("cpu" if args.cpu else "auto")
    if not args.quiet:
        print(f"Using {backend.upper()} backend")

    try:
        render_sky_sphere(
            width=args.width,
            height=args.height,
            tile_size=args.tile_size,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
