"""Loader for raw CHIP-8 ROM images.

A ROM is the program bytes with no header; they are copied verbatim to
``PROGRAM_START``.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pychip8.bus import MAX_PROGRAM_SIZE
from pychip8.errors import CapacityExceededError, ResourceNotFoundError
from pychip8.system import Machine
from pychip8.utils import debug_enabled, debug_log

from .program import RomImage


def read_rom(stream: BinaryIO, name: str = "") -> RomImage:
    """Read at most one byte past the capacity so oversize images are rejected."""

    data = stream.read(MAX_PROGRAM_SIZE + 1)
    if len(data) > MAX_PROGRAM_SIZE:
        raise CapacityExceededError(
            f"ROM {name or '<stream>'} exceeds {MAX_PROGRAM_SIZE} bytes"
        )
    return RomImage(bytes(data), name)


def read_rom_from_path(path: Path) -> RomImage:
    path = Path(path)
    try:
        with path.open("rb") as handle:
            return read_rom(handle, path.name)
    except FileNotFoundError as exc:
        raise ResourceNotFoundError(f"ROM file not found: {path}") from exc
    except IsADirectoryError as exc:
        raise ResourceNotFoundError(f"ROM path is a directory: {path}") from exc


def load_rom(stream: BinaryIO, machine: Machine, name: str = "") -> RomImage:
    """Load a ROM from ``stream`` into ``machine`` and return its metadata."""

    image = read_rom(stream, name)
    machine.load_rom(image.data)
    if debug_enabled("loader"):
        debug_log("loader", "loaded %s size=%d end=%03x", image.name or "<stream>", image.size, image.end)
    return image


def load_rom_from_path(path: Path, machine: Machine) -> RomImage:
    """Load a ROM image from the filesystem."""

    image = read_rom_from_path(path)
    machine.load_rom(image.data)
    if debug_enabled("loader"):
        debug_log("loader", "loaded %s size=%d end=%03x", image.name, image.size, image.end)
    return image
