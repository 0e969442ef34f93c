"""Error types for imgx.

Configuration errors are raised before any pixel is computed. Codec errors
wrap the underlying OS or Pillow failure.
"""

from __future__ import annotations


class ImgxError(Exception):
    """Base class for all imgx errors."""


class ConfigurationError(ImgxError, ValueError):
    """Invalid arguments: bad color, empty palette, zero size, bad rotation."""


class CodecError(ImgxError, OSError):
    """Reading or writing an image file failed."""


class DecodeError(CodecError):
    """Input file is missing or not a readable image."""


class EncodeError(CodecError):
    """Output file could not be written."""
