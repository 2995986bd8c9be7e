"""Memory image for the CHIP-8 interpreter.

The CHIP-8 address space is a flat 4 KiB array. The first 80 bytes hold the
built-in hex font and programs are loaded from ``PROGRAM_START`` onward.
Every access is bounds-checked; an address outside the image raises
``AddressFaultError`` rather than wrapping or clamping.
"""

from __future__ import annotations

from typing import Iterable

from pychip8.errors import AddressFaultError, CapacityExceededError
from pychip8.video.font import FONT_SET, FONT_START

MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START


class Memory:
    """Byte-addressable 4096-byte memory image with the font preinstalled."""

    def __init__(self, size: int = MEMORY_SIZE) -> None:
        if size <= PROGRAM_START:
            raise ValueError(f"memory size {size} leaves no room for programs")
        self._size = size
        self._data = bytearray(size)
        self.reset()

    @property
    def size(self) -> int:
        return self._size

    def reset(self) -> None:
        """Zero the image and reinstall the font table."""

        self._data[:] = bytes(self._size)
        self._data[FONT_START : FONT_START + len(FONT_SET)] = FONT_SET

    def _check(self, address: int, length: int = 1) -> None:
        if address < 0 or length < 0 or address + length > self._size:
            end = address + max(length, 1) - 1
            raise AddressFaultError(
                f"address range {address:#05x}-{end:#05x} outside memory 0x000-{self._size - 1:#05x}"
            )

    def load8(self, address: int) -> int:
        self._check(address)
        return self._data[address]

    def store8(self, address: int, value: int) -> None:
        self._check(address)
        self._data[address] = value & 0xFF

    def load16(self, address: int) -> int:
        """Read a big-endian word, checking both bytes before reading."""

        self._check(address, 2)
        return (self._data[address] << 8) | self._data[address + 1]

    def load_block(self, address: int, length: int) -> bytes:
        self._check(address, length)
        return bytes(self._data[address : address + length])

    def store_block(self, address: int, values: Iterable[int]) -> None:
        """Write ``values`` starting at ``address``; nothing is written on a fault."""

        payload = bytes(value & 0xFF for value in values)
        self._check(address, len(payload))
        self._data[address : address + len(payload)] = payload

    def load_program(self, data: bytes) -> None:
        """Copy ``data`` to ``PROGRAM_START``; the image is untouched if it does not fit."""

        capacity = self._size - PROGRAM_START
        if len(data) > capacity:
            raise CapacityExceededError(
                f"program of {len(data)} bytes exceeds the {capacity} bytes available at {PROGRAM_START:#05x}"
            )
        self._data[PROGRAM_START : PROGRAM_START + len(data)] = data

    def snapshot(self) -> bytes:
        return bytes(self._data)
