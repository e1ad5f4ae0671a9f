from ansify.rendering.renderer import (
    FrameFrag,
    GLYPHS,
    LineFrag,
    RenderBackend,
    Renderer,
    StyleRun,
)

__all__ = ["FrameFrag", "GLYPHS", "LineFrag", "RenderBackend", "Renderer", "StyleRun"]
