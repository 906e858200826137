"""Input helpers for the Chipette emulator."""

from .keypad import KEY_COUNT, KEY_LAYOUT, Keypad

__all__ = [
    "KEY_COUNT",
    "KEY_LAYOUT",
    "Keypad",
]
