"""Convert the framebuffer into scaled RGB images."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .framebuffer import FrameBuffer

RGBColor = Tuple[int, int, int]

# Background first, foreground second.
DEFAULT_PALETTE: Tuple[RGBColor, RGBColor] = ((20, 20, 20), (200, 200, 200))
MONOCHROME: Tuple[RGBColor, RGBColor] = ((0, 0, 0), (255, 255, 255))


def validate_palette(palette: Sequence[RGBColor]) -> Tuple[RGBColor, RGBColor]:
    """Return (background, foreground) clamped to byte channels."""

    if len(palette) != 2:
        raise ValueError(f"expected a background and a foreground colour, got {len(palette)} entries")
    background, foreground = palette
    for colour in (background, foreground):
        if len(colour) != 3:
            raise ValueError(f"colour {colour!r} is not an RGB triple")
    return (
        tuple(int(channel) & 0xFF for channel in background),
        tuple(int(channel) & 0xFF for channel in foreground),
    )  # type: ignore[return-value]


@dataclass
class RenderResult:
    """RGB24 image produced by :class:`Renderer`."""

    width: int
    height: int
    pixels: bytes

    def get_pixel(self, x: int, y: int) -> RGBColor:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        import pygame  # type: ignore

        return pygame.image.frombuffer(self.pixels, (self.width, self.height), "RGB")


class Renderer:
    """Scale framebuffer cells to blocks of ``scale`` x ``scale`` pixels."""

    def __init__(self, palette: Sequence[RGBColor] = DEFAULT_PALETTE) -> None:
        background, foreground = validate_palette(palette)
        self._background = bytes(background)
        self._foreground = bytes(foreground)

    def render(self, framebuffer: FrameBuffer, *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        width = framebuffer.width * scale
        height = framebuffer.height * scale
        image = bytearray()
        for row in framebuffer.rows():
            line = b"".join(
                (self._foreground if lit else self._background) * scale for lit in row
            )
            image += line * scale
        return RenderResult(width, height, bytes(image))
