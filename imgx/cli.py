#!/usr/bin/env python3
"""imgx - single-shot image transformation CLI.

Each command loads one image (or synthesizes one), applies one operation,
and writes the result:

    imgx blur photo.png blurred.png 2.5
    imgx rotate photo.png turned.png 90
    imgx generate flag.png 300 200 vertical 0:85:164 255:255:255 239:65:53
    imgx fractal julia.png
"""

from __future__ import annotations

import argparse
import logging
import sys

from imgx import __version__
from imgx.codec import decode
from imgx.generate import (
    FRACTAL_SIZE,
    StripeOrientation,
    generate_stripes,
    parse_color,
    render_fractal,
)
from imgx.operations import DEFAULT_BLUR_SIGMA, DEFAULT_BRIGHTNESS, apply_operation
from imgx.output import configure_logging, handle_output, report_error

logger = logging.getLogger(__name__)


# =============================================================================
# Command handlers
# =============================================================================


def cmd_blur(args: argparse.Namespace) -> None:
    """Gaussian blur an image."""
    image = decode(args.infile)
    handle_output(apply_operation(image, "blur", args.sigma), args)


def cmd_brighten(args: argparse.Namespace) -> None:
    """Brighten (or darken) an image."""
    image = decode(args.infile)
    handle_output(apply_operation(image, "brighten", args.amount), args)


def cmd_rotate(args: argparse.Namespace) -> None:
    """Rotate an image clockwise."""
    image = decode(args.infile)
    handle_output(apply_operation(image, "rotate", args.degrees), args)


def cmd_invert(args: argparse.Namespace) -> None:
    """Invert image colors."""
    image = decode(args.infile)
    handle_output(apply_operation(image, "invert"), args)


def cmd_grayscale(args: argparse.Namespace) -> None:
    """Convert an image to grayscale."""
    image = decode(args.infile)
    handle_output(apply_operation(image, "grayscale"), args)


def cmd_crop(args: argparse.Namespace) -> None:
    """Crop an image."""
    image = decode(args.infile)
    handle_output(
        apply_operation(image, "crop", args.x, args.y, args.width, args.height),
        args,
    )


def cmd_generate(args: argparse.Namespace) -> None:
    """Generate a striped image."""
    orientation = StripeOrientation.parse(args.orientation)
    colors = [parse_color(c) for c in args.colors]
    image = generate_stripes(args.width, args.height, colors, orientation)
    handle_output(image, args)


def cmd_fractal(args: argparse.Namespace) -> None:
    """Render the fractal image."""
    handle_output(render_fractal(args.width, args.height), args)


# =============================================================================
# Parser
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="imgx",
        description="Single-shot image transformations and generators",
        epilog=(
            "Examples:\n"
            "  imgx blur photo.png blurred.png 2.5\n"
            "  imgx brighten photo.png bright.png -20\n"
            "  imgx crop photo.png face.png 40 30 200 200\n"
            "  imgx generate flag.png 300 200 vertical 0:85:164 255:255:255 239:65:53\n"
            "  imgx fractal julia.png\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log diagnostic detail to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # Parent parser for input/output transforms
    io_parent = argparse.ArgumentParser(add_help=False)
    io_parent.add_argument("infile", help="Input image path")
    io_parent.add_argument("outfile", help="Output image path (format from extension)")

    subparsers = parser.add_subparsers(dest="command", help="Operation to perform")

    # blur
    blur_parser = subparsers.add_parser("blur", help="Gaussian blur", parents=[io_parent])
    blur_parser.add_argument(
        "sigma", type=float, nargs="?", default=DEFAULT_BLUR_SIGMA,
        help=f"Blur amount (default: {DEFAULT_BLUR_SIGMA})",
    )

    # brighten
    brighten_parser = subparsers.add_parser("brighten", help="Brighten or darken", parents=[io_parent])
    brighten_parser.add_argument(
        "amount", type=int, nargs="?", default=DEFAULT_BRIGHTNESS,
        help=f"Value added to each channel, may be negative (default: {DEFAULT_BRIGHTNESS})",
    )

    # rotate
    rotate_parser = subparsers.add_parser("rotate", help="Rotate clockwise", parents=[io_parent])
    rotate_parser.add_argument("degrees", type=int, help="90, 180, or 270")

    # invert
    subparsers.add_parser("invert", help="Invert colors", parents=[io_parent])

    # grayscale
    subparsers.add_parser("grayscale", help="Convert to grayscale", parents=[io_parent])

    # crop
    crop_parser = subparsers.add_parser("crop", help="Crop image", parents=[io_parent])
    crop_parser.add_argument("x", type=int, help="Left edge")
    crop_parser.add_argument("y", type=int, help="Top edge")
    crop_parser.add_argument("width", type=int, help="Width")
    crop_parser.add_argument("height", type=int, help="Height")

    # generate
    generate_parser = subparsers.add_parser("generate", help="Generate a striped image")
    generate_parser.add_argument("outfile", help="Output image path (format from extension)")
    generate_parser.add_argument("width", type=int, help="Image width")
    generate_parser.add_argument("height", type=int, help="Image height")
    generate_parser.add_argument(
        "orientation", help="Stripe direction: vertical or horizontal",
    )
    generate_parser.add_argument("colors", nargs="*", help="Stripe colors as R:G:B (0-255 each)")

    # fractal
    fractal_parser = subparsers.add_parser("fractal", help="Render a fractal image")
    fractal_parser.add_argument("outfile", help="Output image path (format from extension)")
    fractal_parser.add_argument(
        "--width", type=int, default=FRACTAL_SIZE, help=f"Image width (default: {FRACTAL_SIZE})",
    )
    fractal_parser.add_argument(
        "--height", type=int, default=FRACTAL_SIZE, help=f"Image height (default: {FRACTAL_SIZE})",
    )

    return parser


HANDLERS = {
    "blur": cmd_blur,
    "brighten": cmd_brighten,
    "rotate": cmd_rotate,
    "invert": cmd_invert,
    "grayscale": cmd_grayscale,
    "crop": cmd_crop,
    "generate": cmd_generate,
    "fractal": cmd_fractal,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Process exit status (also raised via SystemExit on error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return 0

    handler = HANDLERS[args.command]

    try:
        logger.debug("Running %s", args.command)
        handler(args)
    except Exception as e:
        logger.debug("Command failed", exc_info=True)
        report_error(e)
        sys.exit(1)

    return 0


if __name__ == "__main__":
    main()
