"""Command-line renderer.

Renders a built-in scene or a JSON scene file and writes the image as PPM
to stdout, or to a .ppm or .png file named with --output. Progress goes to
stderr as a countdown of the scanlines left.

Usage:
    rtweekend [options] > image.ppm
    python -m rtweekend [options] --output image.png

Example:
    rtweekend --width 200 --samples 20 --scene two-spheres --output spheres.png
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from loguru import logger

from rtweekend.camera.camera import Camera, CameraConfig
from rtweekend.config import RenderSettings, init_taichi
from rtweekend.core.renderer import Renderer
from rtweekend.output.export import save_png
from rtweekend.output.ppm import save_ppm, write_ppm
from rtweekend.scene.config import load_scene
from rtweekend.scene.hittable_list import HittableList
from rtweekend.scene.presets import PRESETS

OUTPUT_FORMATS = (".ppm", ".png")
DEFAULT_SCENE = "showcase"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    defaults = RenderSettings()
    parser = argparse.ArgumentParser(
        prog="rtweekend",
        description="Render spheres with a recursive path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=defaults.image_width,
        help=f"Image width in pixels (default: {defaults.image_width})",
    )
    parser.add_argument(
        "--aspect-ratio",
        type=float,
        default=defaults.aspect_ratio,
        help="Width divided by height (default: 16/9)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=defaults.samples_per_pixel,
        help=f"Samples per pixel (default: {defaults.samples_per_pixel})",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=defaults.max_depth,
        help=f"Maximum ray bounces (default: {defaults.max_depth})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=defaults.seed,
        help=f"Random seed (default: {defaults.seed})",
    )

    scene_group = parser.add_mutually_exclusive_group()
    scene_group.add_argument(
        "--scene",
        choices=sorted(PRESETS),
        default=None,
        help=f"Built-in scene (default: {DEFAULT_SCENE})",
    )
    scene_group.add_argument(
        "--scene-file",
        type=str,
        default=None,
        help="JSON scene description to render instead of a built-in scene",
    )

    camera_group = parser.add_argument_group("camera", "Override the scene's camera")
    camera_group.add_argument("--look-from", type=float, nargs=3, metavar=("X", "Y", "Z"))
    camera_group.add_argument("--look-at", type=float, nargs=3, metavar=("X", "Y", "Z"))
    camera_group.add_argument("--vup", type=float, nargs=3, metavar=("X", "Y", "Z"))
    camera_group.add_argument("--vfov", type=float, help="Vertical field of view in degrees")
    camera_group.add_argument("--aperture", type=float, help="Lens diameter (0 = pinhole)")
    camera_group.add_argument("--focus-dist", type=float, help="Distance to the plane in focus")

    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output file (.ppm or .png); PPM goes to stdout when omitted",
    )
    parser.add_argument(
        "--arch",
        choices=["cpu", "gpu", "cuda", "vulkan", "metal"],
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log scene and timing details to stderr",
    )
    return parser.parse_args(argv)


def load_world(args: argparse.Namespace) -> tuple[HittableList, CameraConfig]:
    """Build the scene and its camera settings from parsed arguments.

    Camera flags override the scene's camera; the aspect ratio always comes
    from --aspect-ratio.
    """
    if args.scene_file is not None:
        scene = load_scene(args.scene_file)
        world = scene.build()
        camera = scene.camera if scene.camera is not None else CameraConfig()
    else:
        factory, camera = PRESETS[args.scene or DEFAULT_SCENE]
        world = factory()

    overrides = {
        "look_from": args.look_from,
        "look_at": args.look_at,
        "view_up": args.vup,
        "vfov": args.vfov,
        "aperture": args.aperture,
        "focus_dist": args.focus_dist,
    }
    changes = {
        key: tuple(value) if isinstance(value, list) else value
        for key, value in overrides.items()
        if value is not None
    }
    camera = replace(camera, aspect_ratio=args.aspect_ratio, **changes)
    return world, camera


def check_output_path(output: str | None) -> None:
    """Reject output files whose format cannot be written.

    Raises:
        ValueError: If the suffix is not .ppm or .png.
    """
    if output is not None and Path(output).suffix.lower() not in OUTPUT_FORMATS:
        raise ValueError(f"Unsupported output format: {output} (use .ppm or .png)")


def settings_from_args(args: argparse.Namespace) -> RenderSettings:
    return RenderSettings(
        image_width=args.width,
        aspect_ratio=args.aspect_ratio,
        samples_per_pixel=args.samples,
        max_depth=args.max_depth,
        seed=args.seed,
    )


def render(
    args: argparse.Namespace,
    scene: tuple[HittableList, CameraConfig] | None = None,
) -> None:
    """Render according to parsed arguments and write the image.

    Taichi must already be initialized. The scene is loaded from the
    arguments unless an already loaded (world, camera) pair is given.
    """
    check_output_path(args.output)
    settings = settings_from_args(args)
    world, camera_config = scene if scene is not None else load_world(args)
    camera = Camera.from_config(camera_config)
    renderer = Renderer(world, camera, settings)

    def progress_callback(rows_left: int) -> None:
        print(f"\rScanlines remaining: {rows_left}", end="", file=sys.stderr, flush=True)

    renderer.render(callback=None if args.quiet else progress_callback)
    pixels = renderer.image()

    if args.output is None:
        write_ppm(sys.stdout, pixels)
        sys.stdout.flush()
    elif Path(args.output).suffix.lower() == ".png":
        save_png(pixels, args.output)
    else:
        save_ppm(pixels, args.output)

    if not args.quiet:
        print("\nDone.", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "WARNING")

    try:
        # Fail on bad arguments before starting the Taichi runtime
        check_output_path(args.output)
        settings_from_args(args)
        scene = load_world(args)

        init_taichi(arch=args.arch)
        render(args, scene)
        return 0
    except (ValueError, RuntimeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
