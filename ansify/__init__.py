#!/usr/bin/env python3
# ansify/__init__.py
"""
ANSIfy: turn raster images into grids of colored block glyphs.

    from ansify import ansify_image, make_art_config
    rows = ansify_image(img, {"shading": True})
"""

from ansify.version import __version__
from ansify.colormath import brightness, hex_to_rgb, lerp, rgb_to_hex
from ansify.config import ArtConfig, Config, make_art_config
from ansify.sampler import Block, Color, PixelBuffer, Position, grid_shape, sample_blocks
from ansify.classifier import ClassifiedBlock, GlyphClass, classify_block, classify_blocks
from ansify.assembler import Row, assemble_rows
from ansify.pipeline import ansify_buffer, ansify_image

__all__ = [
    "__version__",
    "ArtConfig",
    "Block",
    "ClassifiedBlock",
    "Color",
    "Config",
    "GlyphClass",
    "PixelBuffer",
    "Position",
    "Row",
    "ansify_buffer",
    "ansify_image",
    "assemble_rows",
    "brightness",
    "classify_block",
    "classify_blocks",
    "grid_shape",
    "hex_to_rgb",
    "lerp",
    "make_art_config",
    "rgb_to_hex",
    "sample_blocks",
]
