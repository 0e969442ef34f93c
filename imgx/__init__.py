"""imgx - single-shot image transformation CLI.

Load an image, apply one operation, save the result. Or synthesize one:

    imgx rotate photo.png turned.png 90
    imgx fractal julia.png
"""

__version__ = "0.1.0"

from imgx.cli import main  # noqa: E402

__all__ = ["main"]
