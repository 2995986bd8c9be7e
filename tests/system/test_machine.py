"""Tests for the assembled CHIP-8 machine and its pull API."""

from __future__ import annotations

import pytest

from pychip8.bus import PROGRAM_START
from pychip8.errors import CapacityExceededError, UnknownOpcodeError
from pychip8.system import Fault, MachineConfig, create_machine
from pychip8.video.font import FONT_SET


def program(*words: int) -> bytes:
    return b"".join(word.to_bytes(2, "big") for word in words)


def assert_initial_state(machine) -> None:
    cpu = machine.cpu
    assert cpu.state.pc == 0x200
    assert cpu.state.i == 0
    assert cpu.state.sp == 0
    assert cpu.state.v == [0] * 16
    assert not any(machine.pixels)
    assert machine.framebuffer.redraw_pending
    assert machine.timers.delay == 0
    assert machine.timers.sound == 0
    assert machine.keypad.snapshot() == (False,) * 16
    assert machine.memory.load_block(0, 80) == FONT_SET


def test_create_machine_initial_state() -> None:
    assert_initial_state(create_machine())


def test_reset_restores_initial_state() -> None:
    machine = create_machine(
        MachineConfig(rom_image=program(0x6A05, 0xA300, 0xFA15, 0xFA18, 0xD001, 0x2200))
    )
    machine.set_key(0x2, True)
    machine.step(6)
    machine.take_redraw_flag()

    machine.reset()

    assert_initial_state(machine)
    assert machine.memory.load8(PROGRAM_START) == 0


def test_rom_image_in_config_is_loaded() -> None:
    machine = create_machine(MachineConfig(rom_image=b"\x12\x34"))
    assert machine.memory.load16(PROGRAM_START) == 0x1234


def test_step_runs_count_cycles() -> None:
    machine = create_machine(MachineConfig(rom_image=program(0x7001, 0x7001, 0x7001)))

    assert machine.step(3) == []

    assert machine.cpu.state.v[0] == 3
    assert machine.cpu.state.pc == 0x206
    assert machine.cpu.cycle_count == 3


def test_step_rejects_negative_count() -> None:
    with pytest.raises(ValueError):
        create_machine().step(-1)


def test_unknown_opcode_is_reported_and_skipped() -> None:
    machine = create_machine(MachineConfig(rom_image=program(0xFFFF, 0x6107)))

    faults = machine.step(2)

    assert faults == [Fault("unknown_opcode", 0x200, 0xFFFF, "unknown opcode 0xffff")]
    assert machine.last_fault == faults[0]
    assert machine.cpu.state.v[1] == 7
    assert machine.cpu.state.pc == 0x204


def test_address_fault_is_reported() -> None:
    machine = create_machine(MachineConfig(rom_image=program(0xAFFF, 0xF255)))

    faults = machine.step(2)

    assert len(faults) == 1
    assert faults[0].kind == "address_fault"
    assert faults[0].pc == 0x202
    assert faults[0].opcode is None
    assert machine.cpu.state.pc == 0x204


def test_strict_mode_raises_after_advancing() -> None:
    machine = create_machine(MachineConfig(rom_image=program(0x0000), strict_faults=True))

    with pytest.raises(UnknownOpcodeError):
        machine.step()

    assert machine.cpu.state.pc == 0x202


def test_stack_overflow_propagates() -> None:
    machine = create_machine(MachineConfig(rom_image=program(0x2200)))

    with pytest.raises(CapacityExceededError):
        machine.step(17)


def test_tick_timers_reports_sound_edge() -> None:
    machine = create_machine(MachineConfig(rom_image=program(0x6001, 0xF018)))
    machine.step(2)
    assert machine.sound_active

    assert machine.tick_timers() is True
    assert not machine.sound_active
    assert machine.tick_timers() is False


def test_collision_through_machine() -> None:
    machine = create_machine(MachineConfig(rom_image=program(0xA000, 0xD001, 0xD001)))

    machine.step(2)
    assert machine.cpu.state.v[0xF] == 0
    machine.step(1)
    assert machine.cpu.state.v[0xF] == 1
    assert not any(machine.pixels)


def test_take_redraw_flag() -> None:
    machine = create_machine(MachineConfig(rom_image=program(0x00E0)))

    assert machine.take_redraw_flag() is True
    assert machine.take_redraw_flag() is False
    machine.step()
    assert machine.take_redraw_flag() is True


def test_set_key_feeds_skip_instruction() -> None:
    machine = create_machine(MachineConfig(rom_image=program(0x6005, 0xE09E)))
    machine.set_key(0x5, True)

    machine.step(2)

    assert machine.cpu.state.pc == 0x206
    assert machine.get_pixel(0, 0) == 0
