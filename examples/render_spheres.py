#!/usr/bin/env python3
"""Render the demo sphere scene.

This script renders the predefined demo scene (or a scene loaded from a JSON
file) with the parallel ray caster and saves the result as a PNG.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH          Image width in pixels (default: 500)
    --height HEIGHT        Image height in pixels (default: 500)
    --output OUTPUT        Output file path (default: spheres.png)
    --scene SCENE          JSON scene file (default: built-in demo scene)
    --single-threaded      Render in the calling thread only
    --workers N            Thread pool size (default: CPU count)
    --leaf-rows ROWS       Rows computed per leaf task (default: 16)
    --reference PATH       PNG to compare the render against (logs the RMSE)
    --quiet                Suppress progress output

Example:
    python -m examples.render_spheres --width 320 --height 320 --single-threaded
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import numpy as np


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=500,
        help="Image width in pixels (default: 500)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=500,
        help="Image height in pixels (default: 500)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="spheres.png",
        help="Output file path (default: spheres.png)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file with materials, spheres and lights (default: demo scene)",
    )
    parser.add_argument(
        "--single-threaded",
        action="store_true",
        help="Render in the calling thread only",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Thread pool size (default: CPU count)",
    )
    parser.add_argument(
        "--leaf-rows",
        type=int,
        default=16,
        help="Rows computed per leaf task (default: 16)",
    )
    parser.add_argument(
        "--reference",
        type=str,
        default=None,
        help="PNG image to compare the render against; logs the RMSE",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def compare_with_reference(image_path: str | Path, reference_path: str | Path) -> float:
    """Compute the RMSE between a rendered PNG and a reference PNG.

    Raises:
        ValueError: If the two images differ in size.
    """
    from PIL import Image as PILImage

    from src.raycaster.preview.export import compute_rmse

    with PILImage.open(image_path) as image, PILImage.open(reference_path) as reference:
        return compute_rmse(
            np.asarray(image.convert("RGB")),
            np.asarray(reference.convert("RGB")),
        )


def render_spheres(
    width: int = 500,
    height: int = 500,
    output_path: str = "spheres.png",
    scene_path: str | None = None,
    multithreading: bool = True,
    workers: int | None = None,
    leaf_rows: int = 16,
    reference_path: str | None = None,
) -> Path:
    """Render the demo scene (or a JSON scene) and save it to a PNG file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        output_path: Output file path (PNG).
        scene_path: Optional JSON scene file replacing the demo scene's objects.
        multithreading: If False, render in the calling thread only.
        workers: Thread pool size; None uses the CPU count.
        leaf_rows: Rows computed per leaf task.
        reference_path: Optional PNG to compare the result against.

    Returns:
        Path to the saved image file.
    """
    from src.raycaster.core.config import RenderConfig
    from src.raycaster.core.producer import RayCasterProducer
    from src.raycaster.preview.export import PngObserver
    from src.raycaster.scene.demo import create_demo_scene

    manager, camera = create_demo_scene()
    if scene_path is not None:
        with open(scene_path, encoding="utf-8") as f:
            manager.from_dict(json.load(f))

    config = RenderConfig(
        multithreading=multithreading,
        workers=workers,
        leaf_rows=leaf_rows,
    )

    output_file = Path(output_path)
    observer = PngObserver(output_file, width, height)

    with RayCasterProducer(manager.build(), config) as producer:
        producer.produce(
            camera.eye,
            camera.view,
            camera.view_up,
            camera.horizontal,
            camera.vertical,
            width,
            height,
            request_id=1,
            observer=observer,
        )

    logging.getLogger(__name__).info("Saved to: %s", output_file.absolute())
    if reference_path is not None:
        rmse = compare_with_reference(output_file, reference_path)
        logging.getLogger(__name__).info("RMSE against %s: %.4f", reference_path, rmse)
    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            output_path=args.output,
            scene_path=args.scene,
            multithreading=not args.single_threaded,
            workers=args.workers,
            leaf_rows=args.leaf_rows,
            reference_path=args.reference,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
