"""Machine assembly: memory, CPU, framebuffer, keypad and run state."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from chipette.bus import Memory
from chipette.cpu import Chip8CPU
from chipette.io import Keypad
from chipette.loader import check_rom_size, load_rom
from chipette.video import DISPLAY_HEIGHT, DISPLAY_WIDTH, FrameBuffer


class RunState(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    HALTED = "halted"


class DisplayMode(Enum):
    """Indicator cycled from the front end; opcode semantics are unaffected."""

    CLASSIC = "CHIP-8"
    EXTENDED_A = "SUPERCHIP"
    EXTENDED_B = "XO-CHIP"

    def next(self) -> "DisplayMode":
        members = list(DisplayMode)
        return members[(members.index(self) + 1) % len(members)]


@dataclass
class MachineConfig:
    """Runtime configuration for a machine."""

    rom_image: bytes = b""
    width: int = DISPLAY_WIDTH
    height: int = DISPLAY_HEIGHT
    rng_seed: Optional[int] = None
    strict_illegal: bool = False


@dataclass
class Machine:
    """Aggregates every piece of mutable emulator state."""

    memory: Memory
    cpu: Chip8CPU
    framebuffer: FrameBuffer
    keypad: Keypad
    rom_image: bytes
    run_state: RunState = RunState.RUNNING
    debug_enabled: bool = False
    display_mode: DisplayMode = DisplayMode.CLASSIC

    def restart(self) -> None:
        """Rebuild memory and registers from the original ROM image.

        ``run_state``, ``debug_enabled`` and ``display_mode`` are kept.
        """

        self.memory.clear()
        load_rom(self.memory, self.rom_image)
        self.cpu.reset()
        self.framebuffer.clear()
        self.keypad.reset()

    @property
    def halted(self) -> bool:
        return self.run_state is RunState.HALTED


def create_machine(config: MachineConfig) -> Machine:
    """Instantiate a machine with the font and ``config.rom_image`` loaded.

    Raises :class:`~chipette.loader.RomTooLargeError` before anything is built
    when the image does not fit.
    """

    rom_image = bytes(config.rom_image)
    check_rom_size(rom_image)

    memory = Memory()
    load_rom(memory, rom_image)

    framebuffer = FrameBuffer(config.width, config.height)
    keypad = Keypad()
    cpu = Chip8CPU(
        memory,
        framebuffer,
        keypad,
        rng=random.Random(config.rng_seed),
        strict_illegal=config.strict_illegal,
    )
    cpu.reset()

    return Machine(
        memory=memory,
        cpu=cpu,
        framebuffer=framebuffer,
        keypad=keypad,
        rom_image=rom_image,
    )
