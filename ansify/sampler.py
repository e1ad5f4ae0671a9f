#!/usr/bin/env python3
# ansify/sampler.py
"""
Block sampler.

Splits an RGBA pixel buffer into a grid of fixed-size cells and reduces each
cell to one representative color using the quadratic mean (RMS) per channel.

Cells hanging over the right or bottom edge by more than half a cell are
dropped; cells hanging over by at most half are sampled over the pixels that
actually exist.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

import numpy as np
from PIL import Image

from ansify.colormath import Color
from ansify.config import DEFAULT_CELL_HEIGHT, DEFAULT_CELL_WIDTH
from ansify.errors import EmptyImageError, PixelBufferError, SamplingError

__all__ = [
    "Color",
    "Position",
    "Block",
    "PixelBuffer",
    "grid_shape",
    "block_count",
    "cell_origins",
    "sample_blocks",
]

log = logging.getLogger(__name__)


class Position(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class Block:
    position: Position
    color: Color


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded image: row-major RGBA bytes, four per pixel."""
    width: int
    height: int
    data: bytes

    def __post_init__(self):
        expected = max(self.width, 0) * max(self.height, 0) * 4
        if len(self.data) != expected:
            raise PixelBufferError(
                f"Expected {expected} bytes for {self.width}x{self.height} RGBA, got {len(self.data)}"
            )

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelBuffer":
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        return cls(img.width, img.height, img.tobytes())

    def as_array(self) -> np.ndarray:
        """(H, W, 4) uint8 view of the buffer."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, 4)

# -------------------------
# Grid geometry
# -------------------------

def _axis_cells(dimension: int, step: int) -> int:
    # origin k*step kept while 2*((k+1)*step - dimension) <= step
    return (2 * dimension + step) // (2 * step)


def grid_shape(width: int, height: int,
               cell_width: int = DEFAULT_CELL_WIDTH,
               cell_height: int = DEFAULT_CELL_HEIGHT) -> Tuple[int, int]:
    """Return (columns, rows) of retained cells for an image size."""
    if cell_width <= 0 or cell_height <= 0:
        raise ValueError(f"Cell size must be positive, got {cell_width}x{cell_height}")
    if width <= 0 or height <= 0:
        return 0, 0
    return _axis_cells(width, cell_width), _axis_cells(height, cell_height)


def block_count(width: int, height: int,
                cell_width: int = DEFAULT_CELL_WIDTH,
                cell_height: int = DEFAULT_CELL_HEIGHT) -> int:
    cols, rows = grid_shape(width, height, cell_width, cell_height)
    return cols * rows


def _retained(origin: int, step: int, dimension: int) -> bool:
    return 2 * (origin + step - dimension) <= step


def cell_origins(dimension: int, step: int) -> List[int]:
    """Origins along one axis whose cell is at most half cut off."""
    return [o for o in range(0, dimension, step) if _retained(o, step, dimension)]

# -------------------------
# Sampling
# -------------------------

def _rms_color(window: np.ndarray) -> Color:
    pixels = window.shape[0] * window.shape[1]
    if pixels == 0:
        raise EmptyImageError("Sampled cell contains no pixels")
    rgb = window[..., :3].astype(np.float64)
    sum_sq = (rgb * rgb).sum(axis=(0, 1))
    rms = np.floor(np.sqrt(sum_sq / pixels) + 0.5).astype(np.int64)
    # contract check; uint8 buffers always land in range
    if not np.all((rms >= 0) & (rms <= 255)):
        raise SamplingError(f"Channel out of range: {rms.tolist()}")
    r, g, b = (int(v) for v in rms)
    return Color(r, g, b)


def _sample_row(arr: np.ndarray, y: int, xs: List[int], cw: int, ch: int) -> List[Block]:
    band = arr[y:y + ch]
    return [Block(Position(x, y), _rms_color(band[:, x:x + cw])) for x in xs]


def sample_blocks(buffer: PixelBuffer,
                  cell_width: int = DEFAULT_CELL_WIDTH,
                  cell_height: int = DEFAULT_CELL_HEIGHT,
                  workers: int = 1) -> List[Block]:
    """
    Sample every retained cell of the buffer, row-major.

    workers > 1 samples rows on a thread pool; output order is unchanged.
    """
    if cell_width <= 0 or cell_height <= 0:
        raise ValueError(f"Cell size must be positive, got {cell_width}x{cell_height}")
    if buffer.width <= 0 or buffer.height <= 0:
        raise EmptyImageError(f"Image has no pixels ({buffer.width}x{buffer.height})")

    arr = buffer.as_array()
    xs = cell_origins(buffer.width, cell_width)
    ys = cell_origins(buffer.height, cell_height)
    log.debug("Sampling %dx%d image as %d cols x %d rows of %dx%d cells",
              buffer.width, buffer.height, len(xs), len(ys), cell_width, cell_height)

    if workers > 1 and len(ys) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            rows = list(pool.map(lambda y: _sample_row(arr, y, xs, cell_width, cell_height), ys))
    else:
        rows = [_sample_row(arr, y, xs, cell_width, cell_height) for y in ys]

    return [block for row in rows for block in row]
