"""Sixteen-key hexadecimal keypad handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from chipette.utils import debug_enabled, debug_log

KEY_COUNT = 16

# Physical layout        Logical keypad
#   1 2 3 4                1 2 3 C
#   q w e r                4 5 6 D
#   a s d f                7 8 9 E
#   z x c v                A 0 B F
KEY_LAYOUT: Mapping[str, int] = {
    "x": 0x0,
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "z": 0xA,
    "c": 0xB,
    "4": 0xC,
    "r": 0xD,
    "f": 0xE,
    "v": 0xF,
}


@dataclass
class Keypad:
    """Key-down state of the sixteen logical keys."""

    _keys: list[bool] = field(default_factory=lambda: [False] * KEY_COUNT)

    def press(self, key_name: str) -> bool:
        """Press the key mapped to ``key_name``; return False if it is unmapped."""

        key = self.lookup(key_name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_press=%s", key_name)
            return False
        self.set_key(key, True)
        return True

    def release(self, key_name: str) -> bool:
        key = self.lookup(key_name)
        if key is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_release=%s", key_name)
            return False
        self.set_key(key, False)
        return True

    def set_key(self, key: int, pressed: bool) -> None:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"key index out of range: {key}")
        self._keys[key] = pressed
        if debug_enabled("input"):
            debug_log("input", "key=%X pressed=%s", key, pressed)

    def is_down(self, key: int) -> bool:
        return self._keys[key & 0x0F]

    def first_down(self) -> int | None:
        """Return the lowest-numbered key currently held, if any."""

        for key, pressed in enumerate(self._keys):
            if pressed:
                return key
        return None

    def load(self, keys: Sequence[bool]) -> None:
        """Replace the whole key state with a 16-element sample."""

        if len(keys) != KEY_COUNT:
            raise ValueError(f"keypad sample must have {KEY_COUNT} entries, got {len(keys)}")
        self._keys = [bool(value) for value in keys]

    def reset(self) -> None:
        self._keys = [False] * KEY_COUNT

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._keys)

    @staticmethod
    def lookup(key_name: str) -> int | None:
        return KEY_LAYOUT.get(key_name.lower())
