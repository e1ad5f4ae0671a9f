#!/usr/bin/env python3
# ansify/rendering/html_mode.py
"""
HTML renderer.
Emits one styled <span> per block, rows separated by <br/>, matching the
markup of the original web widget so existing stylesheets keep working.
"""

from __future__ import annotations

import html
from typing import Iterable, List

from ansify.assembler import Row
from ansify.classifier import ClassifiedBlock, GlyphClass
from ansify.rendering.renderer import GLYPHS, RenderBackend

WHITESPACE_HTML = "&nbsp;"


class HtmlBackend(RenderBackend):
    name = "html"

    @staticmethod
    def _span(block: ClassifiedBlock, use_color: bool) -> str:
        if block.glyph_class is GlyphClass.WHITESPACE:
            return f"<span>{WHITESPACE_HTML}</span>"
        glyph = GLYPHS[block.glyph_class]
        if not use_color:
            return f"<span>{glyph}</span>"
        return f"<span style='color: {block.hex}'>{glyph}</span>"

    def render(self, rows: Iterable[Row], use_color: bool = True) -> str:
        lines: List[str] = []
        for row in rows:
            lines.append("".join(self._span(b, use_color) for b in row))
        return "<br/>\n".join(lines)

    def render_document(self, rows: Iterable[Row], title: str = "ANSIfy", use_color: bool = True) -> str:
        body = self.render(rows, use_color)
        return (
            "<!DOCTYPE html>\n"
            f"<html><head><meta charset='utf-8'><title>{html.escape(title)}</title>"
            "<style>.output{font-family:monospace;line-height:1;white-space:pre;background:#000}</style>"
            f"</head><body><div class='output'>\n{body}\n</div></body></html>\n"
        )
