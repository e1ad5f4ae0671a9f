#!/usr/bin/env python3
# ansify/rendering/renderer.py
"""
Rendering dispatcher and built-in terminal/text backends.

- Common API: Renderer.render(rows, mode, use_color)
- Backends may register via Renderer.register(mode, backend)
- Terminal style format: list[list[tuple[str, str]]] suitable for prompt_toolkit
  FormattedText, where style strings use "fg:#RRGGBB".

Rendering only consumes rows; nothing flows back into sampling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ansify.assembler import Row
from ansify.classifier import ClassifiedBlock, GlyphClass

StyleRun = Tuple[str, str]                # (style, text)
LineFrag = List[StyleRun]                 # one terminal row as runs
FrameFrag = List[LineFrag]                # full frame as rows

__all__ = [
    "GLYPHS",
    "Renderer",
    "RenderBackend",
    "FragmentBackend",
    "TextBackend",
    "StyleRun",
    "LineFrag",
    "FrameFrag",
]

GLYPHS: Dict[GlyphClass, str] = {
    GlyphClass.SOLID: "█",
    GlyphClass.SHADED: "▓",
    GlyphClass.WHITESPACE: " ",
}

# -------------------------
# Backends
# -------------------------

class RenderBackend:
    """Interface for all renderers."""
    name: str = "base"

    def render(self, rows: Iterable[Row], use_color: bool) -> Union[FrameFrag, str]:
        raise NotImplementedError


class FragmentBackend(RenderBackend):
    """
    Terminal renderer.
    - One line per row, one glyph per block
    - Consecutive blocks with identical style merged into a single run
    - Whitespace blocks carry no color
    """

    name = "terminal"

    @staticmethod
    def _style(block: ClassifiedBlock, use_color: bool) -> str:
        if not use_color or block.glyph_class is GlyphClass.WHITESPACE:
            return ""
        # prompt_toolkit accepts "fg:#RRGGBB"
        return f"fg:{block.hex}"

    def render(self, rows: Iterable[Row], use_color: bool = True) -> FrameFrag:
        frame: FrameFrag = []
        for row in rows:
            line: LineFrag = []
            run_style = None
            run_text: List[str] = []
            for block in row:
                style = self._style(block, use_color)
                if style != run_style and run_text:
                    line.append((run_style, "".join(run_text)))
                    run_text = []
                run_style = style
                run_text.append(GLYPHS[block.glyph_class])
            if run_text:
                line.append((run_style, "".join(run_text)))
            frame.append(line if line else [("", "")])
        return frame


class TextBackend(RenderBackend):
    """Plain glyph lines, no color."""

    name = "text"

    def render(self, rows: Iterable[Row], use_color: bool = False) -> str:
        return "\n".join("".join(GLYPHS[b.glyph_class] for b in row) for row in rows)

# -------------------------
# Dispatcher
# -------------------------

@dataclass
class Renderer:
    """
    Rendering strategy holder.
    Use register() to add new modes.
    """
    default_mode: str = "terminal"
    _backends: Dict[str, RenderBackend] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        from ansify.rendering.html_mode import HtmlBackend

        self.register("terminal", FragmentBackend())
        self.register("text", TextBackend())
        self.register("html", HtmlBackend())

    def register(self, mode: str, backend: RenderBackend) -> None:
        self._backends[mode] = backend

    @property
    def modes(self) -> List[str]:
        return sorted(self._backends)

    def render(self, rows: Iterable[Row], mode: Optional[str] = None, use_color: bool = True) -> Union[FrameFrag, str]:
        mode = mode or self.default_mode
        backend = self._backends.get(mode)
        if backend is None:
            raise ValueError(f"Unknown render mode {mode!r}; expected one of {self.modes}")
        return backend.render(rows, use_color)
