"""Input handling for the CHIP-8 interpreter."""

from .keymap import KEYPAD_TEMPLATE, lookup_key
from .keypad import KEY_COUNT, Keypad

__all__ = [
    "Keypad",
    "KEY_COUNT",
    "KEYPAD_TEMPLATE",
    "lookup_key",
]
