"""Command line entry point: render a Clifford attractor to an image file."""

from __future__ import annotations

import argparse

import numpy as np
from PIL import Image

from .manager import DEFAULT_COMPUTE_COUNT, Manager, ScalingMethod
from .utils import WINDOW_HEIGHT, WINDOW_WIDTH, make_rng

_SCALING_NAMES = {method.name.lower(): method for method in ScalingMethod}


def render_image(manager: Manager) -> Image.Image:
    """Turn the manager's float texture into an RGB image, top row first."""
    rgb = np.clip(manager.texture_data_gl[..., :3], 0.0, 1.0)
    pixels = (rgb * 255.0 + 0.5).astype(np.uint8)
    return Image.fromarray(np.ascontiguousarray(np.flipud(pixels)))


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a Clifford attractor density image.")
    parser.add_argument("-o", "--output", default="attractor.png", help="image file to write")
    parser.add_argument("--width", type=int, default=WINDOW_WIDTH)
    parser.add_argument("--height", type=int, default=WINDOW_HEIGHT)
    parser.add_argument("--seconds", type=float, default=1 / 60, help="time the workers run")
    parser.add_argument("--workers", type=int, default=DEFAULT_COMPUTE_COUNT)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--params", type=float, nargs=4, metavar=("A", "B", "C", "D"))
    parser.add_argument("--randomize", action="store_true", help="pick random chaotic parameters")
    parser.add_argument("--scaling", choices=sorted(_SCALING_NAMES), default="power")
    parser.add_argument("--power-exponent", type=float, default=None)
    parser.add_argument("--sigmoid-midpoint", type=float, default=None)
    parser.add_argument("--sigmoid-steepness", type=float, default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _parser()
    args = parser.parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        parser.error("width and height must be positive")
    if args.workers < 1:
        parser.error("at least one worker is needed")
    if args.seconds < 0:
        parser.error("seconds must not be negative")

    manager = Manager(args.width, args.height, compute_count=args.workers, rng=make_rng(args.seed))
    manager.scaling_method = _SCALING_NAMES[args.scaling]
    if args.power_exponent is not None:
        manager.power_exponent = args.power_exponent
    if args.sigmoid_midpoint is not None:
        manager.sigmoid_midpoint = args.sigmoid_midpoint
    if args.sigmoid_steepness is not None:
        manager.sigmoid_steepness = args.sigmoid_steepness

    if args.params is not None:
        manager.attractor.parameters = list(args.params)
    if args.randomize:
        manager.attractor.randomize_until_chaotic()
    manager.clean_attractor()

    with manager:
        manager.init_compute()
        manager.propagate_attractor()
        manager.compute_iterate_until_timeout(args.seconds)
        manager.blit_attractor_to_texture()

    render_image(manager).save(args.output)
    params = " ".join(f"{p:2.6f}" for p in manager.attractor.parameters)
    print(f"wrote {args.output} ({args.width}x{args.height}) parameters: {params}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())