"""ROM image metadata for CHIP-8 loaders."""

from __future__ import annotations

from dataclasses import dataclass

from pychip8.bus import PROGRAM_START


@dataclass(frozen=True)
class RomImage:
    """Raw program bytes plus where they came from."""

    data: bytes
    name: str = ""
    start: int = PROGRAM_START

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def end(self) -> int:
        """Last address written, or ``start - 1`` for an empty image."""

        return self.start + len(self.data) - 1
