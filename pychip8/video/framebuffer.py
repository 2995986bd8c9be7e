"""Monochrome 64x32 frame buffer with XOR sprite drawing."""

from __future__ import annotations

from typing import Sequence

from pychip8.errors import AddressFaultError

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SPRITE_WIDTH = 8


class FrameBuffer:
    """Row-major grid of binary cells plus a redraw-pending flag.

    Every display-mutating operation sets the flag; only
    ``take_redraw_flag`` clears it.
    """

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("frame buffer dimensions must be positive")
        self.width = width
        self.height = height
        self._cells = bytearray(width * height)
        self._redraw = True

    def reset(self) -> None:
        self._cells[:] = bytes(len(self._cells))
        self._redraw = True

    @property
    def pixels(self) -> memoryview:
        """Read-only view of the cells, index ``x + y * width``."""

        return memoryview(self._cells).toreadonly()

    @property
    def redraw_pending(self) -> bool:
        return self._redraw

    def take_redraw_flag(self) -> bool:
        pending = self._redraw
        self._redraw = False
        return pending

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise AddressFaultError(f"pixel ({x}, {y}) outside {self.width}x{self.height} display")
        return x + y * self.width

    def get_pixel(self, x: int, y: int) -> int:
        return self._cells[self._index(x, y)]

    def clear(self) -> None:
        self._cells[:] = bytes(len(self._cells))
        self._redraw = True

    def draw_sprite(self, x: int, y: int, rows: Sequence[int]) -> bool:
        """XOR ``rows`` onto the display at (``x``, ``y``) with wraparound.

        Each row byte is eight pixels wide, most significant bit on the left.
        Returns ``True`` when any lit cell was switched off.
        """

        origin_x = x % self.width
        origin_y = y % self.height
        collision = False
        for row_index, bits in enumerate(rows):
            target_y = (origin_y + row_index) % self.height
            for column in range(SPRITE_WIDTH):
                if not bits & (0x80 >> column):
                    continue
                target_x = (origin_x + column) % self.width
                index = self._index(target_x, target_y)
                if self._cells[index]:
                    collision = True
                self._cells[index] ^= 1
        self._redraw = True
        return collision

    def snapshot(self) -> bytes:
        return bytes(self._cells)

