#!/usr/bin/env python3
"""Render the demo scene, or a scene described in a JSON file.

Usage:
    python examples/render_scene.py [options]

Options:
    --width WIDTH       Image width in pixels (default: 320)
    --height HEIGHT     Image height in pixels (default: 180)
    --scene PATH        JSON scene description (default: built-in demo scene)
    --depth DEPTH       Reflection/refraction recursion depth (default: 5)
    --workers N         Worker processes; 0 uses every CPU (default: 1)
    --gamma GAMMA       Gamma applied on export (default: 1.0)
    --output OUTPUT     Output file path (default: scene.png)
    --verbose           Enable debug logging
    --quiet             Suppress progress output

Example:
    python examples/render_scene.py --width 640 --height 360 --workers 0
    python examples/render_scene.py --scene examples/scenes/three_spheres.json
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from raytracer.camera.pinhole import PinholeCamera
from raytracer.preview.export import save_png
from raytracer.scene.config import build_camera, build_world, load_scene_config
from raytracer.scene.demo import create_demo_scene
from raytracer.scene.world import World


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a scene with the Whitted ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=320,
        help="Image width in pixels (default: 320)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=180,
        help="Image height in pixels (default: 180)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene description (default: built-in demo scene)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=5,
        help="Reflection/refraction recursion depth (default: 5)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker processes; 0 uses every CPU (default: 1)",
    )
    parser.add_argument(
        "--gamma",
        type=float,
        default=1.0,
        help="Gamma applied on export (default: 1.0)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="scene.png",
        help="Output file path (default: scene.png)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def load_scene(scene_path: str | None, width: int, height: int) -> tuple[World, PinholeCamera]:
    """Load a JSON scene, or build the demo scene when no path is given.

    The command-line size overrides any size stored in the file.
    """
    if scene_path is None:
        return create_demo_scene(width=width, height=height)

    config = load_scene_config(scene_path)
    config.camera["width"] = width
    config.camera["height"] = height
    return build_world(config), build_camera(config)


def render_scene(
    width: int = 320,
    height: int = 180,
    scene_path: str | None = None,
    max_depth: int = 5,
    workers: int | None = 1,
    gamma: float = 1.0,
    output_path: str = "scene.png",
    quiet: bool = False,
) -> Path:
    """Render a scene and save it to a PNG file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        scene_path: Optional JSON scene description.
        max_depth: Recursion budget for reflection and refraction.
        workers: Worker processes; None uses every CPU.
        gamma: Gamma correction applied on export.
        output_path: Output file path (PNG).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    if not quiet:
        source = scene_path or "demo scene"
        print(f"Loading {source} ({width}x{height})...")

    world, camera = load_scene(scene_path, width, height)

    if not quiet:
        print(f"Rendering {len(world.shapes)} top-level shape(s), depth {max_depth}...")

    start_time = time.time()

    def progress_callback(rows_done: int, total_rows: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (rows_done / total_rows) * 100 if total_rows > 0 else 0
            rows_per_sec = rows_done / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {rows_done}/{total_rows} rows "
                f"({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                flush=True,
            )

    image = camera.render(world, max_depth=max_depth, workers=workers, progress=progress_callback)

    if not quiet:
        print()

    output_file = Path(output_path)
    save_png(image, str(output_file), gamma=gamma)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        render_scene(
            width=args.width,
            height=args.height,
            scene_path=args.scene,
            max_depth=args.depth,
            workers=args.workers or None,
            gamma=args.gamma,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
