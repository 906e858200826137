"""Chipette CPU: register file, fetch/decode/execute loop and opcode handlers."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from chipette.bus import PROGRAM_START, Memory
from chipette.io import Keypad
from chipette.utils import debug_enabled, debug_log
from chipette.video import FrameBuffer, glyph_address

from .errors import IllegalOpcodeError
from .opcodes import Instruction, decode
from .stack import CallStack

REGISTER_COUNT = 16
FLAG_REGISTER = 0xF


@dataclass
class CPUState:
    """Mutable register file of the virtual machine.

    ``pending_key_capture`` holds the key seen by an in-progress ``FX0A``
    until it is released; it survives across frames and is cleared on reset.
    """

    v: bytearray = field(default_factory=lambda: bytearray(REGISTER_COUNT))
    index: int = 0x000
    pc: int = PROGRAM_START
    stack: CallStack = field(default_factory=CallStack)
    delay_timer: int = 0
    sound_timer: int = 0
    pending_key_capture: int | None = None

    def clone(self) -> "CPUState":
        stack = CallStack(self.stack.capacity)
        for address in self.stack:
            stack.push(address)
        return CPUState(
            bytearray(self.v),
            self.index,
            self.pc,
            stack,
            self.delay_timer,
            self.sound_timer,
            self.pending_key_capture,
        )


@dataclass
class Chip8CPU:
    """Interpreter for the base instruction set.

    The CPU does not own memory, the framebuffer or the keypad; the machine
    wires them in. Keypad reads observe whatever sample the scheduler loaded
    at the start of the current frame.
    """

    memory: Memory
    framebuffer: FrameBuffer
    keypad: Keypad
    rng: random.Random = field(default_factory=random.Random)
    strict_illegal: bool = False

    state: CPUState = field(default_factory=CPUState)
    instruction_count: int = 0

    def reset(self) -> None:
        """Zero every register and point ``PC`` at the program start."""

        self.state = CPUState()
        self.instruction_count = 0

    def fetch(self) -> Instruction:
        """Decode the instruction at ``PC`` without executing it."""

        pc = self.state.pc
        return decode(self.memory.load8(pc), self.memory.load8(pc + 1))

    def step(self) -> Instruction:
        """Fetch, decode and execute one instruction and return it."""

        pc_before = self.state.pc
        instruction = self.fetch()
        self.state.pc = (pc_before + 2) & 0xFFFF
        if debug_enabled("cpu"):
            debug_log(
                "cpu",
                "pc=%04x opcode=%04x %s",
                pc_before,
                instruction.opcode,
                instruction.mnemonic,
            )
        handler = getattr(self, instruction.kind.handler)
        handler(instruction)
        self.instruction_count += 1
        return instruction

    # ------------------------------------------------------------------
    # Flow control

    def op_cls(self, _: Instruction) -> None:
        self.framebuffer.clear()

    def op_ret(self, _: Instruction) -> None:
        self.state.pc = self.state.stack.pop()

    def op_jp(self, instruction: Instruction) -> None:
        self.state.pc = instruction.nnn

    def op_call(self, instruction: Instruction) -> None:
        self.state.stack.push(self.state.pc)
        self.state.pc = instruction.nnn

    def op_jp_v0(self, instruction: Instruction) -> None:
        self.state.pc = self.state.v[0] + instruction.nnn

    def op_se_byte(self, instruction: Instruction) -> None:
        if self.state.v[instruction.x] == instruction.nn:
            self._skip()

    def op_sne_byte(self, instruction: Instruction) -> None:
        if self.state.v[instruction.x] != instruction.nn:
            self._skip()

    def op_se_reg(self, instruction: Instruction) -> None:
        if self.state.v[instruction.x] == self.state.v[instruction.y]:
            self._skip()

    def op_sne_reg(self, instruction: Instruction) -> None:
        if self.state.v[instruction.x] != self.state.v[instruction.y]:
            self._skip()

    # ------------------------------------------------------------------
    # Register arithmetic

    def op_ld_byte(self, instruction: Instruction) -> None:
        self.state.v[instruction.x] = instruction.nn

    def op_add_byte(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] = (v[instruction.x] + instruction.nn) & 0xFF

    def op_ld_reg(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] = v[instruction.y]

    def op_or(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] |= v[instruction.y]
        v[FLAG_REGISTER] = 0

    def op_and(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] &= v[instruction.y]
        v[FLAG_REGISTER] = 0

    def op_xor(self, instruction: Instruction) -> None:
        v = self.state.v
        v[instruction.x] ^= v[instruction.y]
        v[FLAG_REGISTER] = 0

    def op_add_reg(self, instruction: Instruction) -> None:
        v = self.state.v
        total = v[instruction.x] + v[instruction.y]
        v[instruction.x] = total & 0xFF
        v[FLAG_REGISTER] = 1 if total > 0xFF else 0

    def op_sub(self, instruction: Instruction) -> None:
        v = self.state.v
        vx, vy = v[instruction.x], v[instruction.y]
        v[instruction.x] = (vx - vy) & 0xFF
        v[FLAG_REGISTER] = 1 if vy <= vx else 0

    def op_subn(self, instruction: Instruction) -> None:
        v = self.state.v
        vx, vy = v[instruction.x], v[instruction.y]
        v[instruction.x] = (vy - vx) & 0xFF
        v[FLAG_REGISTER] = 1 if vx <= vy else 0

    def op_shr(self, instruction: Instruction) -> None:
        # Shifts read VY, not VX.
        v = self.state.v
        vy = v[instruction.y]
        v[instruction.x] = vy >> 1
        v[FLAG_REGISTER] = vy & 0x01

    def op_shl(self, instruction: Instruction) -> None:
        v = self.state.v
        vy = v[instruction.y]
        v[instruction.x] = (vy << 1) & 0xFF
        v[FLAG_REGISTER] = (vy >> 7) & 0x01

    def op_rnd(self, instruction: Instruction) -> None:
        self.state.v[instruction.x] = self.rng.randrange(0x100) & instruction.nn

    # ------------------------------------------------------------------
    # Index register, memory and display

    def op_ld_i(self, instruction: Instruction) -> None:
        self.state.index = instruction.nnn

    def op_add_i(self, instruction: Instruction) -> None:
        self.state.index = (self.state.index + self.state.v[instruction.x]) & 0xFFFF

    def op_ld_f(self, instruction: Instruction) -> None:
        self.state.index = glyph_address(self.state.v[instruction.x])

    def op_ld_b(self, instruction: Instruction) -> None:
        value = self.state.v[instruction.x]
        digits = bytes((value // 100, (value // 10) % 10, value % 10))
        self.memory.store_block(self.state.index, digits)

    def op_store_registers(self, instruction: Instruction) -> None:
        state = self.state
        count = instruction.x + 1
        self.memory.store_block(state.index, bytes(state.v[:count]))
        state.index = (state.index + count) & 0xFFFF

    def op_load_registers(self, instruction: Instruction) -> None:
        state = self.state
        count = instruction.x + 1
        state.v[:count] = self.memory.load_block(state.index, count)
        state.index = (state.index + count) & 0xFFFF

    def op_drw(self, instruction: Instruction) -> None:
        v = self.state.v
        x, y = v[instruction.x], v[instruction.y]
        rows = self.memory.load_block(self.state.index, instruction.n)
        v[FLAG_REGISTER] = 0
        if self.framebuffer.draw_sprite(x, y, rows):
            v[FLAG_REGISTER] = 1

    # ------------------------------------------------------------------
    # Timers and keypad

    def op_ld_vx_dt(self, instruction: Instruction) -> None:
        self.state.v[instruction.x] = self.state.delay_timer

    def op_ld_dt_vx(self, instruction: Instruction) -> None:
        self.state.delay_timer = self.state.v[instruction.x]

    def op_ld_st_vx(self, instruction: Instruction) -> None:
        self.state.sound_timer = self.state.v[instruction.x]

    def op_skp(self, instruction: Instruction) -> None:
        if self.keypad.is_down(self.state.v[instruction.x]):
            self._skip()

    def op_sknp(self, instruction: Instruction) -> None:
        if not self.keypad.is_down(self.state.v[instruction.x]):
            self._skip()

    def op_ld_vx_k(self, instruction: Instruction) -> None:
        """Block until a key is pressed and then released.

        The instruction re-executes every cycle (``PC`` rolled back) until the
        captured key is observed up; only then is ``VX`` written.
        """

        state = self.state
        captured = state.pending_key_capture
        if captured is None:
            key = self.keypad.first_down()
            if key is not None:
                state.pending_key_capture = key
                if debug_enabled("input"):
                    debug_log("input", "key_wait captured=%X", key)
            self._rewind()
            return
        if self.keypad.is_down(captured):
            self._rewind()
            return
        state.v[instruction.x] = captured
        state.pending_key_capture = None
        if debug_enabled("input"):
            debug_log("input", "key_wait released=%X", captured)

    # ------------------------------------------------------------------
    # Fallback

    def op_unknown(self, instruction: Instruction) -> None:
        if self.strict_illegal:
            raise IllegalOpcodeError(
                f"illegal opcode {instruction.opcode:#06x} at {(self.state.pc - 2) & 0xFFFF:#06x}"
            )
        if debug_enabled("cpu"):
            debug_log(
                "cpu",
                "unimplemented/invalid opcode %04x at %04x",
                instruction.opcode,
                (self.state.pc - 2) & 0xFFFF,
            )

    # ------------------------------------------------------------------
    # Helpers

    def _skip(self) -> None:
        self.state.pc = (self.state.pc + 2) & 0xFFFF

    def _rewind(self) -> None:
        self.state.pc = (self.state.pc - 2) & 0xFFFF
