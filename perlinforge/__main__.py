"""CLI entry point for PerlinForge."""

import argparse
import logging
from pathlib import Path

from . import generate
from .channels import LAYOUTS
from .errors import PerlinForgeError
from .renderer import export_bmp, export_data_url


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate Perlin noise textures"
    )
    parser.add_argument("width", type=int, help="Texture width in pixels")
    parser.add_argument("height", type=int, help="Texture height in pixels")
    parser.add_argument(
        "--type", "-t", choices=list(LAYOUTS), default="rgb",
        help="Channel layout (default: rgb)"
    )
    parser.add_argument(
        "--no-scale", action="store_true",
        help="Keep raw noise bytes instead of stretching to 0-255"
    )
    parser.add_argument(
        "--gradient", "-g", nargs="+", default=None, metavar="HEX",
        help="Gradient colour stops for --type gradient "
             "(default: #0057B7 #FFDD00)"
    )
    parser.add_argument(
        "--background", default=None, metavar="HEX",
        help="Background colour to blend over (requires --opacity)"
    )
    parser.add_argument(
        "--opacity", type=float, default=None,
        help="Texture opacity 0.0-1.0 when blending (requires --background)"
    )
    parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducible generation"
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--output", "-o", default="texture.png",
        help="Output file path, .bmp or any Pillow format "
             "(default: texture.png)"
    )
    output.add_argument(
        "--data-url", action="store_true",
        help="Print a data:image/bmp;base64 URL instead of writing a file"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log progress"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if (args.background is None) != (args.opacity is None):
        parser.error("--background and --opacity must be given together")

    kwargs = {"type": args.type, "scale": not args.no_scale}
    if args.gradient:
        kwargs["gradient"] = tuple(args.gradient)
    if args.background is not None:
        kwargs["blend"] = {"background": args.background,
                           "opacity": args.opacity}

    try:
        stack = generate(args.width, args.height, seed=args.seed, **kwargs)
        if args.data_url:
            print(export_data_url(stack))
            return

        path = Path(args.output)
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix.lower() == ".bmp":
            path.write_bytes(export_bmp(stack))
        else:
            stack.to_image().save(str(path))
    except PerlinForgeError as exc:
        parser.error(str(exc))

    print(f"Saved texture ({stack.width}x{stack.height}) to {path}")


if __name__ == "__main__":
    main()
