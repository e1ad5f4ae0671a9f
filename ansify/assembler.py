#!/usr/bin/env python3
# ansify/assembler.py
"""
Group classified blocks into rows for a renderer.

Input must already be row-major (ascending y, then ascending x within a row),
which is the order sample_blocks emits. The assembler checks this as it goes
and raises BlockOrderError instead of producing scrambled rows.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List

from ansify.classifier import ClassifiedBlock
from ansify.errors import BlockOrderError

__all__ = ["Row", "assemble_rows"]

Row = List[ClassifiedBlock]


def assemble_rows(blocks: Iterable[ClassifiedBlock]) -> Iterator[Row]:
    """Yield one Row per distinct y. Single pass; re-create to iterate again."""
    row: Row = []
    for block in blocks:
        if row:
            last = row[-1].position
            cur = block.position
            if cur.y < last.y:
                raise BlockOrderError(f"Block at {tuple(cur)} follows row y={last.y}")
            if cur.y == last.y and cur.x <= last.x:
                raise BlockOrderError(f"Block at {tuple(cur)} follows x={last.x} in the same row")
            if cur.y > last.y:
                yield row
                row = []
        row.append(block)
    if row:
        yield row
