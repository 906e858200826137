"""Bus-related helpers for the Chipette emulator."""

from .memory import MEMORY_SIZE, PROGRAM_START, Memory, MemoryAccessError, MemoryError

__all__ = [
    "MEMORY_SIZE",
    "PROGRAM_START",
    "Memory",
    "MemoryAccessError",
    "MemoryError",
]
