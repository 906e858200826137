"""Loaders for Chipette program images."""

from __future__ import annotations

from .rom import (
    MAX_ROM_SIZE,
    LoaderError,
    RomTooLargeError,
    check_rom_size,
    load_rom,
    load_rom_from_path,
)

__all__ = [
    "MAX_ROM_SIZE",
    "LoaderError",
    "RomTooLargeError",
    "check_rom_size",
    "load_rom",
    "load_rom_from_path",
]
