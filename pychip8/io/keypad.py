"""Hex keypad state for the CHIP-8 interpreter."""

from __future__ import annotations

from dataclasses import dataclass, field

from pychip8.errors import AddressFaultError
from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16


@dataclass
class Keypad:
    """Sixteen key states indexed 0x0-0xF.

    The host's input adapter writes through ``set_key``; instructions read
    through ``is_pressed``. The most recent released-to-pressed transition is
    latched so the wait-for-key instruction can poll for a fresh press.
    """

    _keys: list[bool] = field(default_factory=lambda: [False] * KEY_COUNT)
    _press_edge: int | None = None

    def set_key(self, index: int, pressed: bool) -> None:
        self._check(index)
        before = self._keys[index]
        self._keys[index] = bool(pressed)
        if pressed and not before:
            self._press_edge = index
        if debug_enabled("input"):
            debug_log("input", "keypad key=%X pressed=%s", index, bool(pressed))

    def is_pressed(self, index: int) -> bool:
        self._check(index)
        return self._keys[index]

    def take_press_edge(self) -> int | None:
        """Return and clear the latched newly-pressed key, if any."""

        edge = self._press_edge
        self._press_edge = None
        return edge

    def clear_press_edge(self) -> None:
        self._press_edge = None

    def reset(self) -> None:
        self._keys[:] = [False] * KEY_COUNT
        self._press_edge = None

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._keys)

    @staticmethod
    def _check(index: int) -> None:
        if not 0 <= index < KEY_COUNT:
            raise AddressFaultError(f"key index {index} outside 0x0-0xF")
