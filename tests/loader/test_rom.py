"""Tests for ROM loading and size validation."""

from __future__ import annotations

import pytest

from chipette.bus import Memory
from chipette.loader import MAX_ROM_SIZE, RomTooLargeError, load_rom, load_rom_from_path
from chipette.video import FONT_DATA


def test_max_size_is_3584() -> None:
    assert MAX_ROM_SIZE == 3584


def test_load_writes_font_and_program() -> None:
    memory = Memory()
    load_rom(memory, b"\x12\x34")

    assert memory.load_block(0, 80) == FONT_DATA
    assert memory.load8(0x200) == 0x12
    assert memory.load8(0x201) == 0x34


def test_exactly_full_rom_loads() -> None:
    memory = Memory()
    rom = bytes([0xAB]) * 3584
    load_rom(memory, rom)

    assert memory.load8(0xFFF) == 0xAB


def test_oversized_rom_is_rejected_without_writing() -> None:
    memory = Memory()

    with pytest.raises(RomTooLargeError) as info:
        load_rom(memory, bytes(3585))

    assert info.value.max_size == 3584
    assert info.value.actual_size == 3585
    assert "3584" in str(info.value)
    assert memory.snapshot() == bytes(0x1000)


def test_load_from_path(tmp_path) -> None:
    path = tmp_path / "game.ch8"
    path.write_bytes(b"\x00\xE0")

    assert load_rom_from_path(path) == b"\x00\xE0"


def test_load_from_path_checks_size(tmp_path) -> None:
    path = tmp_path / "huge.ch8"
    path.write_bytes(bytes(4000))

    with pytest.raises(RomTooLargeError):
        load_rom_from_path(path)


def test_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_rom_from_path(tmp_path / "missing.ch8")
