"""Memory for the Chipette virtual machine.

The machine has a flat 4 KiB byte-addressed RAM. Unlike the original
interpreter, which read and wrote past the end of its array, every access is
checked: addresses outside ``0x000-0xFFF`` raise :class:`MemoryAccessError`
and leave memory untouched. All in-range programs behave identically.
"""

from __future__ import annotations

from dataclasses import dataclass

MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200


class MemoryError(Exception):
    """Raised when memory is misconfigured or used incorrectly."""


class MemoryAccessError(MemoryError):
    """Raised when a load or store falls outside the mapped address range."""

    def __init__(self, address: int, length: int) -> None:
        super().__init__(f"address {address:#06x} outside memory 0x0000-{length - 1:#06x}")
        self.address = address


@dataclass
class Memory:
    """Simple byte-addressable memory region starting at address zero."""

    length: int = MEMORY_SIZE

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise MemoryError("memory must have a positive length")
        self._data = bytearray(self.length)

    def get_end_address(self) -> int:
        return self.length - 1

    def _offset(self, address: int) -> int:
        if not 0 <= address < self.length:
            raise MemoryAccessError(address, self.length)
        return address

    def load8(self, address: int) -> int:
        return self._data[self._offset(address)]

    def store8(self, address: int, value: int) -> None:
        self._data[self._offset(address)] = value & 0xFF

    def load16(self, address: int) -> int:
        """Read a big-endian word (high byte first)."""

        high = self.load8(address)
        low = self.load8(address + 1)
        return (high << 8) | low

    def load_block(self, address: int, length: int) -> bytes:
        if length < 0:
            raise MemoryError("block length must not be negative")
        if length == 0:
            return b""
        self._offset(address)
        self._offset(address + length - 1)
        return bytes(self._data[address : address + length])

    def store_block(self, address: int, data: bytes) -> None:
        if not data:
            return
        self._offset(address)
        self._offset(address + len(data) - 1)
        self._data[address : address + len(data)] = data

    def clear(self) -> None:
        self._data[:] = bytes(self.length)

    def snapshot(self) -> bytes:
        return bytes(self._data)
