#!/usr/bin/env python3
"""Render the demo sphere scene.

This script renders the single yellow sphere demo scene (optionally with a
floor plane) and saves it as an image file.

Usage:
    python -m examples.render_sphere [options]

Options:
    --width WIDTH       Image width in pixels (default: 800)
    --height HEIGHT     Image height in pixels (default: 600)
    --fov FOV           Field of view in degrees (default: 90)
    --output OUTPUT     Output file path (default: sphere.png)
    --floor             Add a floor plane below the sphere
    --nearest-hit       Composite by nearest hit instead of last object
    --fix-blue          Use the light's blue channel for blue output
    --apply-fov         Scale the camera canvas by the field of view
    --scene FILE        Load the scene from a JSON file instead
    --cpu               Force the CPU backend
    --quiet             Suppress progress output

Example:
    python -m examples.render_sphere --width 320 --height 240 --floor --nearest-hit
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=800,
        help="Image width in pixels (default: 800)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=600,
        help="Image height in pixels (default: 600)",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=90.0,
        help="Field of view in degrees (default: 90)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="sphere.png",
        help="Output file path (default: sphere.png)",
    )
    parser.add_argument(
        "--floor",
        action="store_true",
        help="Add a floor plane below the sphere",
    )
    parser.add_argument(
        "--nearest-hit",
        action="store_true",
        help="Composite by nearest hit instead of last object",
    )
    parser.add_argument(
        "--fix-blue",
        action="store_true",
        help="Use the light's blue channel for blue output",
    )
    parser.add_argument(
        "--apply-fov",
        action="store_true",
        help="Scale the camera canvas by the field of view",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="Load the scene from a JSON file instead of the demo scene",
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


def render_sphere(
    width: int = 800,
    height: int = 600,
    fov: float = 90.0,
    output_path: str = "sphere.png",
    floor: bool = False,
    nearest_hit: bool = False,
    fix_blue: bool = False,
    apply_fov: bool = False,
    scene_file: str | None = None,
    quiet: bool = False,
) -> Path:
    """Render the demo scene and save it to a file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in degrees.
        output_path: Output file path.
        floor: If True, render the scene with a floor plane.
        nearest_hit: If True, composite by nearest hit.
        fix_blue: If True, correct the blue channel color product.
        apply_fov: If True, scale the camera canvas by the field of view.
        scene_file: Optional JSON scene description replacing the demo scene.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.raycaster.core.integrator import CompositingMode, RenderOptions
    from src.raycaster.preview.export import save_image
    from src.raycaster.scene.demo import DemoParams, create_demo_scene, create_floor_scene
    from src.raycaster.scene.scene import Scene

    if scene_file is not None:
        if not quiet:
            print(f"Loading scene from {scene_file}...")
        scene = Scene.from_dict(json.loads(Path(scene_file).read_text()))
    else:
        if not quiet:
            print(f"Creating demo scene ({width}x{height})...")
        params = DemoParams(width=width, height=height, fov=fov)
        scene = create_floor_scene(params) if floor else create_demo_scene(params)

    options = RenderOptions(
        compositing=CompositingMode.NEAREST_HIT if nearest_hit else CompositingMode.LAST_OBJECT,
        fix_blue_channel=fix_blue,
        apply_fov=apply_fov,
    )

    start_time = time.time()
    if not quiet:
        print(f"Rendering {len(scene.objects)} objects...")

    image = scene.render(options)

    output_file = save_image(image, output_path)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Initialize Taichi
    # Use GPU if available, fall back to CPU
    if args.cpu:
        ti.init(arch=ti.cpu)
    else:
        try:
            ti.init(arch=ti.gpu)
            if not args.quiet:
                print("Using GPU backend")
        except Exception:
            ti.init(arch=ti.cpu)
            if not args.quiet:
                print("Using CPU backend")

    try:
        render_sphere(
            width=args.width,
            height=args.height,
            fov=args.fov,
            output_path=args.output,
            floor=args.floor,
            nearest_hit=args.nearest_hit,
            fix_blue=args.fix_blue,
            apply_fov=args.apply_fov,
            scene_file=args.scene,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
