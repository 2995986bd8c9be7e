"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .program import RomImage
from .rom import load_rom, load_rom_from_path, read_rom, read_rom_from_path

__all__ = [
    "RomImage",
    "load_rom",
    "load_rom_from_path",
    "read_rom",
    "read_rom_from_path",
]
