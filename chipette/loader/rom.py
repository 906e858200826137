"""Program image loading."""

from __future__ import annotations

from pathlib import Path

from chipette.bus import MEMORY_SIZE, PROGRAM_START, Memory
from chipette.utils import debug_enabled, debug_log
from chipette.video import FONT_DATA, FONT_START

MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START


class LoaderError(Exception):
    """Base error for program loading failures."""


class RomTooLargeError(LoaderError):
    """Raised when a program does not fit between ``0x200`` and the end of memory."""

    def __init__(self, max_size: int, actual_size: int) -> None:
        super().__init__(
            f"ROM too large: maximum allowable size is {max_size} bytes, got {actual_size} bytes"
        )
        self.max_size = max_size
        self.actual_size = actual_size


def check_rom_size(rom: bytes, *, max_size: int = MAX_ROM_SIZE) -> None:
    if len(rom) > max_size:
        raise RomTooLargeError(max_size, len(rom))


def load_rom(memory: Memory, rom: bytes) -> None:
    """Write the glyph font at ``0x000`` and ``rom`` at ``0x200``.

    Nothing is written when the image is too large.
    """

    check_rom_size(rom, max_size=memory.length - PROGRAM_START)
    memory.store_block(FONT_START, FONT_DATA)
    memory.store_block(PROGRAM_START, bytes(rom))
    if debug_enabled("loader"):
        debug_log("loader", "rom_loaded size=%d end=%04x", len(rom), PROGRAM_START + len(rom))


def load_rom_from_path(path: Path) -> bytes:
    """Read a ROM file and validate its size."""

    data = Path(path).read_bytes()
    check_rom_size(data)
    return data
