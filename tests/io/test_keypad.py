"""Tests for the CHIP-8 hex keypad state."""

from __future__ import annotations

import pytest

from pychip8.errors import AddressFaultError
from pychip8.io import KEY_COUNT, Keypad


def test_keys_start_released() -> None:
    keypad = Keypad()
    assert keypad.snapshot() == (False,) * KEY_COUNT


def test_set_and_release_key() -> None:
    keypad = Keypad()

    keypad.set_key(0xA, True)
    assert keypad.is_pressed(0xA)

    keypad.set_key(0xA, False)
    assert not keypad.is_pressed(0xA)


@pytest.mark.parametrize("index", [-1, 16, 0xFF])
def test_out_of_range_index_faults(index: int) -> None:
    keypad = Keypad()

    with pytest.raises(AddressFaultError):
        keypad.set_key(index, True)
    with pytest.raises(AddressFaultError):
        keypad.is_pressed(index)


def test_press_edge_is_latched_once() -> None:
    keypad = Keypad()
    keypad.set_key(0x3, True)

    assert keypad.take_press_edge() == 0x3
    assert keypad.take_press_edge() is None


def test_repeated_press_does_not_latch_again() -> None:
    keypad = Keypad()
    keypad.set_key(0x3, True)
    keypad.clear_press_edge()

    keypad.set_key(0x3, True)

    assert keypad.take_press_edge() is None


def test_reset_releases_everything() -> None:
    keypad = Keypad()
    keypad.set_key(0x1, True)
    keypad.set_key(0xF, True)

    keypad.reset()

    assert not any(keypad.snapshot())
    assert keypad.take_press_edge() is None
