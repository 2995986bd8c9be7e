"""Display model and rendering helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .font import FONT_HEIGHT, FONT_SET, FONT_WIDTH, GLYPH_BYTES
from .framebuffer import SCREEN_HEIGHT, SCREEN_WIDTH, FrameBuffer
from .palette import MONOCHROME, PALETTES, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "FrameBuffer",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "PALETTES",
    "validate_palette",
    "FONT_SET",
    "FONT_WIDTH",
    "FONT_HEIGHT",
    "GLYPH_BYTES",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
]
