"""Exception hierarchy for the Chipette CPU."""

from __future__ import annotations


class CPUError(Exception):
    """Base error for CPU-related failures."""


class IllegalOpcodeError(CPUError):
    """Raised when the CPU encounters an opcode outside the base instruction set."""


class StackOverflowError(CPUError):
    """Raised when a call would push past the last call-stack slot."""


class StackUnderflowError(CPUError):
    """Raised when a return is executed with an empty call stack."""
