"""Image operations for imgx CLI.

Each operation takes a PIL Image and returns a new PIL Image.
"""

from __future__ import annotations

from typing import Callable

from PIL import Image, ImageFilter

from imgx.errors import ConfigurationError

DEFAULT_BLUR_SIGMA = 2.0
DEFAULT_BRIGHTNESS = 10

# Clockwise rotation -> Pillow transpose (Pillow's ROTATE_* are counter-clockwise)
ROTATIONS = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}


def _map_color_bands(image: Image.Image, func: Callable[[int], int]) -> Image.Image:
    """Apply a per-value function to every band except alpha."""
    bands = image.split()
    if image.mode in ("RGBA", "LA"):
        color_bands, alpha = bands[:-1], bands[-1:]
    else:
        color_bands, alpha = bands, ()
    mapped = tuple(band.point(func) for band in color_bands)
    return Image.merge(image.mode, mapped + alpha)


def op_blur(image: Image.Image, sigma: float = DEFAULT_BLUR_SIGMA) -> Image.Image:
    """Gaussian blur.

    Args:
        image: Input image
        sigma: Blur radius (standard deviation of the Gaussian)

    Returns:
        Blurred image
    """
    if sigma < 0:
        raise ConfigurationError(f"Blur amount must not be negative, got {sigma}")
    return image.filter(ImageFilter.GaussianBlur(radius=sigma))


def op_brighten(image: Image.Image, amount: int = DEFAULT_BRIGHTNESS) -> Image.Image:
    """Add a constant to every color channel, clamping to 0-255.

    Alpha is left unchanged. Negative amounts darken.

    Args:
        image: Input image
        amount: Value added to each channel

    Returns:
        Brightened image
    """
    return _map_color_bands(image, lambda p: max(0, min(255, p + amount)))


def op_rotate(image: Image.Image, degrees: int) -> Image.Image:
    """Rotate clockwise by a multiple of 90 degrees.

    Args:
        image: Input image
        degrees: 90, 180, or 270

    Returns:
        Rotated image
    """
    if degrees not in ROTATIONS:
        raise ConfigurationError(
            f"{degrees} is not a valid rotation amount (use 90, 180, or 270)"
        )
    return image.transpose(ROTATIONS[degrees])


def op_invert(image: Image.Image) -> Image.Image:
    """Invert color channels, keeping alpha."""
    return _map_color_bands(image, lambda p: 255 - p)


def op_grayscale(image: Image.Image) -> Image.Image:
    """Convert to luminance, keeping alpha if present."""
    if image.mode in ("RGBA", "LA"):
        return image.convert("LA")
    return image.convert("L")


def op_crop(image: Image.Image, x: int, y: int, width: int, height: int) -> Image.Image:
    """Crop image.

    The rectangle is clamped to the image: a corner past the edge moves to
    the edge, and the size shrinks to what remains.

    Args:
        image: Input image
        x, y: Top-left corner
        width, height: Crop dimensions

    Returns:
        Cropped image
    """
    if min(x, y, width, height) < 0:
        raise ConfigurationError("Crop values must not be negative")

    w, h = image.size
    x = min(x, w)
    y = min(y, h)
    width = min(width, w - x)
    height = min(height, h - y)
    return image.crop((x, y, x + width, y + height))


# =============================================================================
# Operations Registry
# =============================================================================


OPERATIONS: dict[str, Callable[..., Image.Image]] = {
    "blur": op_blur,
    "brighten": op_brighten,
    "rotate": op_rotate,
    "invert": op_invert,
    "grayscale": op_grayscale,
    "crop": op_crop,
}


def apply_operation(image: Image.Image, op_name: str, *args, **kwargs) -> Image.Image:
    """Apply a named operation.

    Args:
        image: Input PIL Image
        op_name: Operation name (e.g., "blur", "rotate")
        *args: Positional arguments for the operation
        **kwargs: Keyword arguments for the operation

    Returns:
        Processed PIL Image

    Raises:
        ConfigurationError: If operation name is unknown
    """
    if op_name not in OPERATIONS:
        raise ConfigurationError(f"Unknown operation: {op_name}")

    op_func = OPERATIONS[op_name]
    return op_func(image, *args, **kwargs)
