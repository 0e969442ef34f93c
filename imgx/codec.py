"""Reading and writing image files.

``decode`` loads a file fully into memory. ``encode`` writes to a temporary
file beside the destination and renames it into place, so a failed write
never leaves a partial file at the requested path.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from imgx.errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)

# Modes every operation understands; anything else is converted on load.
NATIVE_MODES = {"L", "LA", "RGB", "RGBA"}

# Formats that cannot store an alpha channel.
OPAQUE_FORMATS = {"JPEG", "BMP", "PPM"}


def decode(path: str | Path) -> Image.Image:
    """Load an image from disk.

    Args:
        path: Image file path

    Returns:
        PIL Image in L, LA, RGB, or RGBA mode

    Raises:
        DecodeError: If the file is missing or not a readable image.
    """
    try:
        with Image.open(path) as opened:
            opened.load()
            image = opened.copy() if opened.mode in NATIVE_MODES else _to_native(opened)
    except FileNotFoundError as exc:
        raise DecodeError(f"Input file not found: {path}") from exc
    except UnidentifiedImageError as exc:
        raise DecodeError(f"Not an image file: {path}") from exc
    except OSError as exc:
        raise DecodeError(f"Failed to read {path}: {exc}") from exc

    logger.debug("Decoded %s: %dx%d %s", path, image.width, image.height, image.mode)
    return image


def _to_native(image: Image.Image) -> Image.Image:
    if image.mode == "P" and "transparency" in image.info:
        return image.convert("RGBA")
    if image.mode in ("PA", "RGBa", "La"):
        return image.convert("RGBA")
    if image.mode in ("1", "I", "I;16", "F"):
        return image.convert("L")
    return image.convert("RGB")


def format_for_path(path: str | Path) -> str:
    """Pillow format name for a path's extension.

    Raises:
        EncodeError: If the extension is missing or unknown, or Pillow can
            read the format but not write it.
    """
    suffix = Path(path).suffix.lower()
    fmt = Image.registered_extensions().get(suffix)
    if fmt is None:
        raise EncodeError(f"Unknown image format for output file: {path}")
    if fmt not in Image.SAVE:
        raise EncodeError(f"Cannot write {fmt} files: {path}")
    return fmt


def encode(image: Image.Image, path: str | Path) -> None:
    """Save an image, replacing the destination atomically.

    The format is taken from the file extension. Alpha is dropped for formats
    that cannot store it.

    Args:
        image: Image to write
        path: Destination file path

    Raises:
        EncodeError: If the format is unknown or the file cannot be written.
    """
    path = Path(path)
    fmt = format_for_path(path)

    if fmt in OPAQUE_FORMATS and image.mode in ("RGBA", "LA"):
        image = image.convert("RGB" if image.mode == "RGBA" else "L")

    try:
        fd, tmp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
    except OSError as exc:
        raise EncodeError(f"Failed writing {path}: {exc}") from exc

    written = False
    try:
        with os.fdopen(fd, "wb") as f:
            image.save(f, format=fmt)
        # mkstemp creates 0600; give the result the usual umask-based mode
        umask = os.umask(0)
        os.umask(umask)
        os.chmod(tmp_name, 0o666 & ~umask)
        os.replace(tmp_name, path)
        written = True
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(f"Failed writing {path}: {exc}") from exc
    finally:
        if not written:
            Path(tmp_name).unlink(missing_ok=True)

    logger.debug("Encoded %s as %s", path, fmt)
