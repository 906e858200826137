"""CPU package for the Chipette emulator."""

from .core import FLAG_REGISTER, REGISTER_COUNT, CPUState, Chip8CPU
from .errors import CPUError, IllegalOpcodeError, StackOverflowError, StackUnderflowError
from .opcodes import Instruction, Opcode, decode
from .stack import STACK_DEPTH, CallStack
from . import opcodes

__all__ = [
    "Chip8CPU",
    "CPUState",
    "CallStack",
    "CPUError",
    "IllegalOpcodeError",
    "StackOverflowError",
    "StackUnderflowError",
    "Instruction",
    "Opcode",
    "decode",
    "opcodes",
    "FLAG_REGISTER",
    "REGISTER_COUNT",
    "STACK_DEPTH",
]
