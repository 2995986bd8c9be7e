"""Tests for the raw ROM loader."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from pychip8.bus import MAX_PROGRAM_SIZE, PROGRAM_START
from pychip8.errors import CapacityExceededError, ResourceNotFoundError
from pychip8.loader import load_rom, load_rom_from_path, read_rom_from_path
from pychip8.system import create_machine


def test_load_rom_from_path(tmp_path: Path) -> None:
    payload = bytes([0x00, 0xE0, 0x12, 0x00])
    rom_path = tmp_path / "game.ch8"
    rom_path.write_bytes(payload)
    machine = create_machine()

    image = load_rom_from_path(rom_path, machine)

    assert image.name == "game.ch8"
    assert image.size == 4
    assert image.start == PROGRAM_START
    assert image.end == PROGRAM_START + 3
    assert machine.memory.load_block(PROGRAM_START, 4) == payload


def test_missing_rom_raises_resource_not_found(tmp_path: Path) -> None:
    with pytest.raises(ResourceNotFoundError):
        read_rom_from_path(tmp_path / "missing.ch8")


def test_directory_is_not_a_rom(tmp_path: Path) -> None:
    with pytest.raises(ResourceNotFoundError):
        read_rom_from_path(tmp_path)


def test_oversize_stream_is_rejected_without_mutation() -> None:
    machine = create_machine()
    before = machine.memory.snapshot()

    with pytest.raises(CapacityExceededError):
        load_rom(io.BytesIO(bytes(MAX_PROGRAM_SIZE + 1)), machine)

    assert machine.memory.snapshot() == before


def test_maximum_size_fits() -> None:
    machine = create_machine()

    image = load_rom(io.BytesIO(b"\x01" * MAX_PROGRAM_SIZE), machine, "full")

    assert image.size == MAX_PROGRAM_SIZE
    assert machine.memory.load8(0xFFF) == 0x01
