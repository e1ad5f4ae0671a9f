#!/usr/bin/env python3
# ansify/errors.py
"""
Exception hierarchy for ANSIfy.

Parsing helpers in colormath recover locally by returning None; everything
structural raises one of these and aborts the call.
"""

__all__ = [
    "AnsifyError",
    "ColorParseError",
    "PixelBufferError",
    "EmptyImageError",
    "SamplingError",
    "BlockOrderError",
    "ImageLoadError",
]


class AnsifyError(Exception):
    """Base class for all ANSIfy errors."""


class ColorParseError(AnsifyError, ValueError):
    """A hex color string was required but could not be parsed."""


class PixelBufferError(AnsifyError, ValueError):
    """Pixel data does not match the declared dimensions."""


class EmptyImageError(AnsifyError, ValueError):
    """Image has no pixels, or a sampled cell ended up empty."""


class SamplingError(AnsifyError):
    """A sampled channel fell outside [0, 255]."""


class BlockOrderError(AnsifyError, ValueError):
    """Blocks handed to the assembler were not in row-major order."""


class ImageLoadError(AnsifyError):
    """The source image could not be fetched or decoded."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"Error loading image {source!r}: {reason}")
        self.source = source
        self.reason = reason
