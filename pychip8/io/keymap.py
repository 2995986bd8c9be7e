"""Host keyboard to CHIP-8 keypad translation.

The classic COSMAC VIP hex keypad is laid out as::

    1 2 3 C
    4 5 6 D
    7 8 9 E
    A 0 B F

and is conventionally mapped onto the left-hand block of a QWERTY keyboard.
Key names follow ``pygame.key.name``.
"""

from __future__ import annotations

from typing import Mapping

KEYPAD_TEMPLATE: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


ALIAS_TABLE: Mapping[str, str] = {
    "[1]": "1",
    "[2]": "2",
    "[3]": "3",
    "[4]": "4",
}


def lookup_key(name: str, keymap: Mapping[str, int] = KEYPAD_TEMPLATE) -> int | None:
    """Return the keypad index for host key ``name`` or ``None`` if unmapped."""

    lowered = name.lower()
    lowered = ALIAS_TABLE.get(lowered, lowered)
    return keymap.get(lowered)
