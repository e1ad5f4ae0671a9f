#!/usr/bin/env python3
# ansify/pipeline.py
"""
Sample -> classify -> assemble, end to end.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping, Optional, Union

from PIL import Image

from ansify.assembler import Row, assemble_rows
from ansify.classifier import classify_blocks
from ansify.config import ArtConfig, make_art_config
from ansify.sampler import PixelBuffer, sample_blocks

__all__ = ["ansify_buffer", "ansify_image"]

log = logging.getLogger(__name__)

ConfigLike = Union[ArtConfig, Mapping[str, Any], None]


def ansify_buffer(buffer: PixelBuffer, config: ConfigLike = None) -> Iterator[Row]:
    """
    Convert a decoded image into rows of classified blocks.

    Sampling runs eagerly so empty images fail here rather than on first
    iteration; classification and row grouping are lazy.
    """
    cfg = make_art_config(config)
    blocks = sample_blocks(buffer, cfg.cell_width, cfg.cell_height, workers=cfg.workers)
    log.debug("Sampled %d blocks", len(blocks))
    return assemble_rows(classify_blocks(blocks, cfg))


def ansify_image(img: Image.Image, config: ConfigLike = None) -> Iterator[Row]:
    return ansify_buffer(PixelBuffer.from_image(img), config)
