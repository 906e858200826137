"""Monochrome framebuffer with XOR sprite drawing."""

from __future__ import annotations

from typing import Iterable, List

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32


class FrameBuffer:
    """Boolean pixel grid stored row-major, plus a dirty flag for the renderer."""

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("framebuffer dimensions must be positive")
        self.width = width
        self.height = height
        self._pixels: List[bool] = [False] * (width * height)
        self.dirty = False

    def clear(self) -> None:
        self._pixels = [False] * (self.width * self.height)
        self.dirty = True

    def get_pixel(self, x: int, y: int) -> bool:
        return self._pixels[self._index(x, y)]

    def set_pixel(self, x: int, y: int, value: bool) -> None:
        self._pixels[self._index(x, y)] = bool(value)
        self.dirty = True

    def draw_sprite(self, x: int, y: int, rows: Iterable[int]) -> bool:
        """XOR an 8-pixel-wide sprite onto the grid and report any collision.

        The origin wraps around the screen; the sprite body is clipped at the
        right and bottom edges.
        """

        origin_x = x % self.width
        origin_y = y % self.height
        collision = False
        pixels = self._pixels
        for row_offset, row in enumerate(rows):
            py = origin_y + row_offset
            if py >= self.height:
                break
            base = py * self.width
            for bit in range(8):
                px = origin_x + bit
                if px >= self.width:
                    break
                if not (row >> (7 - bit)) & 1:
                    continue
                index = base + px
                if pixels[index]:
                    collision = True
                pixels[index] = not pixels[index]
        self.dirty = True
        return collision

    def rows(self) -> list[tuple[bool, ...]]:
        """Return a copy of the grid as a list of row tuples."""

        return [
            tuple(self._pixels[y * self.width : (y + 1) * self.width])
            for y in range(self.height)
        ]

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._pixels)

    def lit_count(self) -> int:
        return sum(self._pixels)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} framebuffer")
        return y * self.width + x
