"""Opcode metadata and instruction decoding for the Chipette CPU."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Mapping


class Opcode(Enum):
    """Closed set of operations understood by the interpreter.

    Each member carries its canonical pattern, the mnemonic used in traces and
    the name of the CPU handler method that executes it.
    """

    CLS = ("00E0", "CLS", "op_cls")
    RET = ("00EE", "RET", "op_ret")
    JP = ("1NNN", "JP", "op_jp")
    CALL = ("2NNN", "CALL", "op_call")
    SE_BYTE = ("3XNN", "SE Vx,NN", "op_se_byte")
    SNE_BYTE = ("4XNN", "SNE Vx,NN", "op_sne_byte")
    SE_REG = ("5XY0", "SE Vx,Vy", "op_se_reg")
    LD_BYTE = ("6XNN", "LD Vx,NN", "op_ld_byte")
    ADD_BYTE = ("7XNN", "ADD Vx,NN", "op_add_byte")
    LD_REG = ("8XY0", "LD Vx,Vy", "op_ld_reg")
    OR = ("8XY1", "OR Vx,Vy", "op_or")
    AND = ("8XY2", "AND Vx,Vy", "op_and")
    XOR = ("8XY3", "XOR Vx,Vy", "op_xor")
    ADD_REG = ("8XY4", "ADD Vx,Vy", "op_add_reg")
    SUB = ("8XY5", "SUB Vx,Vy", "op_sub")
    SHR = ("8XY6", "SHR Vx,Vy", "op_shr")
    SUBN = ("8XY7", "SUBN Vx,Vy", "op_subn")
    SHL = ("8XYE", "SHL Vx,Vy", "op_shl")
    SNE_REG = ("9XY0", "SNE Vx,Vy", "op_sne_reg")
    LD_I = ("ANNN", "LD I,NNN", "op_ld_i")
    JP_V0 = ("BNNN", "JP V0,NNN", "op_jp_v0")
    RND = ("CXNN", "RND Vx,NN", "op_rnd")
    DRW = ("DXYN", "DRW Vx,Vy,N", "op_drw")
    SKP = ("EX9E", "SKP Vx", "op_skp")
    SKNP = ("EXA1", "SKNP Vx", "op_sknp")
    LD_VX_DT = ("FX07", "LD Vx,DT", "op_ld_vx_dt")
    LD_VX_K = ("FX0A", "LD Vx,K", "op_ld_vx_k")
    LD_DT_VX = ("FX15", "LD DT,Vx", "op_ld_dt_vx")
    LD_ST_VX = ("FX18", "LD ST,Vx", "op_ld_st_vx")
    ADD_I = ("FX1E", "ADD I,Vx", "op_add_i")
    LD_F = ("FX29", "LD F,Vx", "op_ld_f")
    LD_B = ("FX33", "LD B,Vx", "op_ld_b")
    LD_MEM_VX = ("FX55", "LD [I],Vx", "op_store_registers")
    LD_VX_MEM = ("FX65", "LD Vx,[I]", "op_load_registers")
    UNKNOWN = ("????", "???", "op_unknown")

    def __init__(self, pattern: str, mnemonic: str, handler: str) -> None:
        self.pattern = pattern
        self.mnemonic = mnemonic
        self.handler = handler


DISPLAY_OPCODES: Final[frozenset[Opcode]] = frozenset({Opcode.CLS, Opcode.DRW})


@dataclass(frozen=True)
class Instruction:
    """A fetched instruction word with its operand fields extracted."""

    opcode: int
    kind: Opcode
    nnn: int
    nn: int
    n: int
    x: int
    y: int

    def __post_init__(self) -> None:
        if not 0 <= self.opcode <= 0xFFFF:
            raise ValueError(f"opcode out of range: {self.opcode}")

    @property
    def mnemonic(self) -> str:
        return self.kind.mnemonic

    @property
    def affects_display(self) -> bool:
        """True for instructions that change the framebuffer (``00E0``/``DXYN``)."""

        return self.kind in DISPLAY_OPCODES


_SYSTEM_OPCODES: Mapping[int, Opcode] = {
    0x00E0: Opcode.CLS,
    0x00EE: Opcode.RET,
}

_ARITHMETIC_OPCODES: Mapping[int, Opcode] = {
    0x0: Opcode.LD_REG,
    0x1: Opcode.OR,
    0x2: Opcode.AND,
    0x3: Opcode.XOR,
    0x4: Opcode.ADD_REG,
    0x5: Opcode.SUB,
    0x6: Opcode.SHR,
    0x7: Opcode.SUBN,
    0xE: Opcode.SHL,
}

_KEY_OPCODES: Mapping[int, Opcode] = {
    0x9E: Opcode.SKP,
    0xA1: Opcode.SKNP,
}

_MISC_OPCODES: Mapping[int, Opcode] = {
    0x07: Opcode.LD_VX_DT,
    0x0A: Opcode.LD_VX_K,
    0x15: Opcode.LD_DT_VX,
    0x18: Opcode.LD_ST_VX,
    0x1E: Opcode.ADD_I,
    0x29: Opcode.LD_F,
    0x33: Opcode.LD_B,
    0x55: Opcode.LD_MEM_VX,
    0x65: Opcode.LD_VX_MEM,
}

_DIRECT_OPCODES: Mapping[int, Opcode] = {
    0x1: Opcode.JP,
    0x2: Opcode.CALL,
    0x3: Opcode.SE_BYTE,
    0x4: Opcode.SNE_BYTE,
    0x6: Opcode.LD_BYTE,
    0x7: Opcode.ADD_BYTE,
    0xA: Opcode.LD_I,
    0xB: Opcode.JP_V0,
    0xC: Opcode.RND,
    0xD: Opcode.DRW,
}


def classify(word: int) -> Opcode:
    """Map a 16-bit instruction word onto its :class:`Opcode`."""

    group = (word >> 12) & 0xF
    n = word & 0x000F
    nn = word & 0x00FF

    if group == 0x0:
        return _SYSTEM_OPCODES.get(word, Opcode.UNKNOWN)
    if group == 0x5:
        return Opcode.SE_REG if n == 0 else Opcode.UNKNOWN
    if group == 0x8:
        return _ARITHMETIC_OPCODES.get(n, Opcode.UNKNOWN)
    if group == 0x9:
        return Opcode.SNE_REG if n == 0 else Opcode.UNKNOWN
    if group == 0xE:
        return _KEY_OPCODES.get(nn, Opcode.UNKNOWN)
    if group == 0xF:
        return _MISC_OPCODES.get(nn, Opcode.UNKNOWN)
    return _DIRECT_OPCODES[group]


def decode(high: int, low: int) -> Instruction:
    """Build an :class:`Instruction` from two fetched bytes (high byte first)."""

    word = ((high & 0xFF) << 8) | (low & 0xFF)
    return Instruction(
        opcode=word,
        kind=classify(word),
        nnn=word & 0x0FFF,
        nn=word & 0x00FF,
        n=word & 0x000F,
        x=(word >> 8) & 0x0F,
        y=(word >> 4) & 0x0F,
    )
