"""CLI entry point for perlingrey."""

import argparse
import sys
from pathlib import Path

from . import generate
from .noise import resolve_seed


def _print_seed(seed):
    print(f"Your seed is: {seed}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate a square greyscale Perlin noise image"
    )
    parser.add_argument("width", help="Image width and height in pixels")
    parser.add_argument("output", help="Output PNG file path")
    parser.add_argument(
        "seed", nargs="?", default=None,
        help="Non-negative integer seed (a random one is printed if omitted)"
    )
    parser.add_argument(
        "--scale", type=float, default=None,
        help="Pixels per lattice cell (default: 16)"
    )

    args = parser.parse_args(argv)

    try:
        width = int(args.width)
    except ValueError:
        width = 0
    if width <= 0:
        print("Error while parsing input dimension: positive integer not entered.",
              file=sys.stderr)
        return 1

    try:
        seed = resolve_seed(args.seed, on_seed=_print_seed)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    kwargs = {}
    if args.scale is not None:
        kwargs["scale"] = args.scale

    try:
        image = generate(width, seed=seed, **kwargs)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    output = Path(args.output)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        image.save(str(output), format="PNG")
    except (OSError, ValueError):
        print("Error: output image could not be encoded.", file=sys.stderr)
        return 2

    print(f"Saved noise ({image.size[0]}x{image.size[1]}) to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
