"""Tests for host key name translation."""

from __future__ import annotations

from pychip8.io import KEYPAD_TEMPLATE, lookup_key


def test_layout_covers_every_keypad_index() -> None:
    assert sorted(KEYPAD_TEMPLATE.values()) == list(range(16))


def test_lookup_is_case_insensitive() -> None:
    assert lookup_key("Q") == 0x4
    assert lookup_key("v") == 0xF
    assert lookup_key("x") == 0x0


def test_keypad_numbers_alias_to_digits() -> None:
    assert lookup_key("[4]") == 0xC


def test_unmapped_key() -> None:
    assert lookup_key("space") is None
