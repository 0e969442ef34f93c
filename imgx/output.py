"""Centralized output handling for imgx CLI.

Status lines and errors are written to stderr. Diagnostic logging is off
unless -v/--verbose is given.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from imgx.codec import encode

if TYPE_CHECKING:
    import argparse
    from PIL import Image

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send imgx log records to stderr.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    logger = logging.getLogger("imgx")
    if logger.hasHandlers():
        logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def handle_output(image: Image.Image, args: argparse.Namespace) -> None:
    """Write the result image to ``args.outfile`` and report it.

    Args:
        image: Finished image.
        args: Parsed command-line arguments.
    """
    encode(image, args.outfile)
    w, h = image.size
    print(f"Saved to {args.outfile} ({w}x{h} {image.mode})", file=sys.stderr)


def report_error(error: BaseException) -> None:
    """Print an error message to stderr."""
    print(f"Error: {error}", file=sys.stderr)
