"""Tests for the delay and sound timers."""

from __future__ import annotations

from pychip8.cpu import Timers


def test_tick_decrements_both_timers() -> None:
    timers = Timers()
    timers.set_delay(5)
    timers.set_sound(3)

    assert timers.tick() is False

    assert timers.delay == 4
    assert timers.sound == 2


def test_sound_timer_edge_notifies_once() -> None:
    timers = Timers()
    timers.set_sound(1)

    assert timers.tick() is True
    assert timers.sound == 0
    assert timers.tick() is False
    assert timers.sound == 0


def test_counting_down_from_above_one_is_silent() -> None:
    timers = Timers()
    timers.set_sound(3)

    assert [timers.tick() for _ in range(4)] == [False, False, True, False]


def test_timers_never_go_negative() -> None:
    timers = Timers()

    for _ in range(3):
        timers.tick()

    assert timers.delay == 0
    assert timers.sound == 0
    assert not timers.sound_active


def test_values_are_masked_to_a_byte() -> None:
    timers = Timers()
    timers.set_delay(0x1FF)

    assert timers.delay == 0xFF
