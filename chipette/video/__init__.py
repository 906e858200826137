"""Video helpers for the Chipette emulator."""

from __future__ import annotations

from .font import FONT_DATA, FONT_START, GLYPH_BYTES, get_glyph, glyph_address
from .framebuffer import DISPLAY_HEIGHT, DISPLAY_WIDTH, FrameBuffer
from .renderer import DEFAULT_PALETTE, MONOCHROME, RGBColor, RenderResult, Renderer, validate_palette

__all__ = [
    "FONT_DATA",
    "FONT_START",
    "GLYPH_BYTES",
    "get_glyph",
    "glyph_address",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
    "FrameBuffer",
    "DEFAULT_PALETTE",
    "MONOCHROME",
    "validate_palette",
    "RGBColor",
    "Renderer",
    "RenderResult",
]
