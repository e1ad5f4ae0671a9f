#!/usr/bin/env python3
# ansify/classifier.py
"""
Decide how each sampled block is drawn: solid, shaded or blank.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from ansify.colormath import Color, brightness, is_white, rgb_to_hex
from ansify.config import ArtConfig
from ansify.sampler import Block, Position

__all__ = ["GlyphClass", "ClassifiedBlock", "classify_block", "classify_blocks"]


class GlyphClass(Enum):
    SOLID = "solid"
    SHADED = "shaded"
    WHITESPACE = "whitespace"


@dataclass(frozen=True)
class ClassifiedBlock:
    position: Position
    color: Color
    glyph_class: GlyphClass

    @property
    def hex(self) -> str:
        return rgb_to_hex(*self.color)


def _glyph_class(color: Color, cfg: ArtConfig) -> GlyphClass:
    # Whitespace wins over both shading rules so white never turns into a dark shade.
    if cfg.ignore_whitespaces and is_white(color):
        return GlyphClass.WHITESPACE
    if cfg.shading and brightness(color) <= cfg.brightness_threshold:
        return GlyphClass.SHADED
    if cfg.legacy_style:
        return GlyphClass.SHADED
    return GlyphClass.SOLID


def classify_block(block: Block, cfg: ArtConfig) -> ClassifiedBlock:
    return ClassifiedBlock(block.position, block.color, _glyph_class(block.color, cfg))


def classify_blocks(blocks: Iterable[Block], cfg: ArtConfig) -> Iterator[ClassifiedBlock]:
    for block in blocks:
        yield classify_block(block, cfg)
