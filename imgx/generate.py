"""Pixel synthesizers for imgx.

Two generators build an RGB image from parameters alone:

    generate_stripes(400, 200, colors, StripeOrientation.VERTICAL)
    render_fractal()            # 800x800 Julia-style escape-time render

Both compute every pixel from its own coordinates, so the work is done as
whole-array numpy expressions.
"""

from __future__ import annotations

import enum
import logging
from typing import NamedTuple, Sequence

import numpy as np
from PIL import Image

from imgx.errors import ConfigurationError

logger = logging.getLogger(__name__)

FRACTAL_SIZE = 800
FRACTAL_CONSTANT = complex(-0.4, 0.6)
FRACTAL_MAX_ITERATIONS = 255
FRACTAL_ESCAPE_RADIUS = 2.0


class Color(NamedTuple):
    red: int
    green: int
    blue: int


class StripeOrientation(enum.Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"

    @classmethod
    def parse(cls, value: str) -> StripeOrientation:
        """Look up an orientation by name, ignoring case."""
        try:
            return cls(value.lower())
        except ValueError:
            choices = ", ".join(o.value for o in cls)
            raise ConfigurationError(
                f"Invalid orientation: {value!r} (choose from {choices})"
            ) from None


def parse_color(text: str) -> Color:
    """Parse an ``R:G:B`` color string.

    Each field must be a decimal integer in 0-255. Nothing is clamped.

    Args:
        text: Color string like "255:128:0"

    Returns:
        Color tuple

    Raises:
        ConfigurationError: If the string is malformed or a channel is out of range.

    Examples:
        >>> parse_color("255:128:0")
        Color(red=255, green=128, blue=0)
    """
    parts = text.split(":")
    if len(parts) != 3:
        raise ConfigurationError(f"Invalid color: {text!r} (expected R:G:B)")

    channels = []
    for part in parts:
        if not (part.isascii() and part.isdigit()):
            raise ConfigurationError(f"Invalid color: {text!r} (expected R:G:B)")
        value = int(part)
        if value > 255:
            raise ConfigurationError(
                f"Invalid color: {text!r} (channel {value} is outside 0-255)"
            )
        channels.append(value)

    return Color(*channels)


def _check_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ConfigurationError(
            f"Image size must be positive, got {width}x{height}"
        )


# =============================================================================
# Stripe generator
# =============================================================================


def stripe_indices(axis_length: int, count: int) -> np.ndarray:
    """Band index for every coordinate along the partitioned axis.

    Bands are ``axis_length // count`` pixels wide. Coordinates past the last
    full band belong to the final band.

    Examples:
        >>> stripe_indices(5, 2).tolist()
        [0, 0, 1, 1, 1]
    """
    band = axis_length // count
    return np.minimum(np.arange(axis_length) // band, count - 1)


def generate_stripes(
    width: int,
    height: int,
    colors: Sequence[Color],
    orientation: StripeOrientation,
) -> Image.Image:
    """Fill an image with solid color bands.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        colors: Band colors in order (left to right, or top to bottom)
        orientation: VERTICAL splits the x axis, HORIZONTAL splits the y axis

    Returns:
        RGB image of size (width, height)

    Raises:
        ConfigurationError: For a non-positive size, an empty palette, or more
            colors than pixels along the split axis.
    """
    _check_size(width, height)
    if not colors:
        raise ConfigurationError("At least one color is required")

    vertical = orientation is StripeOrientation.VERTICAL
    axis_length = width if vertical else height
    if len(colors) > axis_length:
        raise ConfigurationError(
            f"Cannot fit {len(colors)} stripes into {axis_length} pixels"
        )

    palette = np.array([tuple(c) for c in colors], dtype=np.uint8)
    band = palette[stripe_indices(axis_length, len(colors))]

    if vertical:
        pixels = np.broadcast_to(band[np.newaxis, :, :], (height, width, 3))
    else:
        pixels = np.broadcast_to(band[:, np.newaxis, :], (height, width, 3))

    logger.debug(
        "Generated %d %s stripes on %dx%d", len(colors), orientation.value, width, height
    )
    return Image.fromarray(np.ascontiguousarray(pixels))


# =============================================================================
# Fractal renderer
# =============================================================================


def escape_counts(z: np.ndarray, c: complex, max_iterations: int) -> np.ndarray:
    """Count iterations of z <- z*z + c before |z| exceeds the escape radius.

    The real and imaginary parts are updated as separate float32 arrays,
    rounding after every multiply and add:

        re' = re*re - im*im + c.re
        im' = re*im + im*re + c.im

    numpy's complex64 multiply may round differently, so it is not used.

    Args:
        z: Starting points (complex array, not modified)
        c: Constant added each step
        max_iterations: Upper bound on the count

    Returns:
        uint8 array of counts with the same shape as ``z``
    """
    zr = np.real(z).astype(np.float32)
    zi = np.imag(z).astype(np.float32)
    cr = np.float32(c.real)
    ci = np.float32(c.imag)
    counts = np.zeros(zr.shape, dtype=np.uint8)
    alive = np.ones(zr.shape, dtype=bool)
    radius = np.float32(FRACTAL_ESCAPE_RADIUS)

    for _ in range(max_iterations):
        alive &= np.hypot(zr, zi) <= radius
        if not alive.any():
            break
        re = zr[alive]
        im = zi[alive]
        zr[alive] = re * re - im * im + cr
        zi[alive] = re * im + im * re + ci
        counts[alive] += 1

    return counts


def render_fractal(width: int = FRACTAL_SIZE, height: int = FRACTAL_SIZE) -> Image.Image:
    """Render the gradient-plus-fractal image.

    Red and blue form a gradient of ``0.3 * x`` and ``0.3 * y``, wrapping
    modulo 256. Green is the escape count of the pixel's point under
    z <- z*z + (-0.4 + 0.6i). The pixel's y coordinate drives the real axis
    and x drives the imaginary axis.

    All arithmetic is 32-bit float.

    Args:
        width: Image width in pixels
        height: Image height in pixels

    Returns:
        RGB image of size (width, height)
    """
    _check_size(width, height)

    xs = np.arange(width, dtype=np.float32)[np.newaxis, :]
    ys = np.arange(height, dtype=np.float32)[:, np.newaxis]

    gradient = np.float32(0.3)
    red = (gradient * xs).astype(np.int64) % 256
    blue = (gradient * ys).astype(np.int64) % 256

    scale_x = np.float32(3.0) / np.float32(width)
    scale_y = np.float32(3.0) / np.float32(height)
    offset = np.float32(1.5)

    z = np.empty((height, width), dtype=np.complex64)
    z.real = ys * scale_x - offset
    z.imag = xs * scale_y - offset

    green = escape_counts(z, FRACTAL_CONSTANT, FRACTAL_MAX_ITERATIONS)

    pixels = np.empty((height, width, 3), dtype=np.uint8)
    pixels[:, :, 0] = red
    pixels[:, :, 1] = green
    pixels[:, :, 2] = blue

    logger.debug("Rendered %dx%d fractal", width, height)
    return Image.fromarray(pixels)
