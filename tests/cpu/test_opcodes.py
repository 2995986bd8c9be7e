"""Tests for the CHIP-8 opcode table and decoder."""

from __future__ import annotations

import pytest

from pychip8.cpu.opcodes import (
    DEFAULT_INSTRUCTIONS,
    Instruction,
    OperandForm,
    OpcodeTable,
    build_instruction_table,
    decode,
)


@pytest.mark.parametrize(
    ("word", "mnemonic", "handler"),
    [
        (0x00E0, "CLS", "op_cls"),
        (0x00EE, "RET", "op_ret"),
        (0x1ABC, "JP", "op_jp"),
        (0x2ABC, "CALL", "op_call"),
        (0x3A12, "SE", "op_se_immediate"),
        (0x4A12, "SNE", "op_sne_immediate"),
        (0x5AB0, "SE", "op_se_register"),
        (0x6A12, "LD", "op_ld_immediate"),
        (0x7A12, "ADD", "op_add_immediate"),
        (0x8AB0, "LD", "op_ld_register"),
        (0x8AB1, "OR", "op_or"),
        (0x8AB2, "AND", "op_and"),
        (0x8AB3, "XOR", "op_xor"),
        (0x8AB4, "ADD", "op_add_register"),
        (0x8AB5, "SUB", "op_sub"),
        (0x8AB6, "SHR", "op_shr"),
        (0x8AB7, "SUBN", "op_subn"),
        (0x8ABE, "SHL", "op_shl"),
        (0x9AB0, "SNE", "op_sne_register"),
        (0xAABC, "LD I", "op_ld_index"),
        (0xBABC, "JP V0", "op_jp_v0"),
        (0xCA12, "RND", "op_rnd"),
        (0xDAB5, "DRW", "op_drw"),
        (0xEA9E, "SKP", "op_skp"),
        (0xEAA1, "SKNP", "op_sknp"),
        (0xFA07, "LD DT", "op_ld_from_delay"),
        (0xFA0A, "LD K", "op_wait_key"),
        (0xFA15, "LD DT", "op_ld_delay"),
        (0xFA18, "LD ST", "op_ld_sound"),
        (0xFA1E, "ADD I", "op_add_index"),
        (0xFA29, "LD F", "op_ld_font"),
        (0xFA33, "BCD", "op_bcd"),
        (0xFA55, "LD [I]", "op_store_registers"),
        (0xFA65, "LD V", "op_load_registers"),
    ],
)
def test_decode_known_words(word: int, mnemonic: str, handler: str) -> None:
    decoded = decode(word)

    assert decoded is not None
    assert decoded.mnemonic == mnemonic
    assert decoded.instruction.handler == handler


@pytest.mark.parametrize("word", [0x0000, 0x00E1, 0x0123, 0x5AB1, 0x8AB8, 0x8ABF, 0x9AB1, 0xEA00, 0xFA00, 0xFAFF])
def test_decode_unknown_words(word: int) -> None:
    assert decode(word) is None


def test_operand_fields() -> None:
    decoded = decode(0xD4A7)

    assert decoded is not None
    assert decoded.x == 0x4
    assert decoded.y == 0xA
    assert decoded.n == 0x7
    assert decoded.nn == 0xA7
    assert decoded.nnn == 0x4A7


def test_default_table_has_no_overlaps() -> None:
    table = build_instruction_table(DEFAULT_INSTRUCTIONS)

    assert len(table) == 16
    assert sum(len(bucket) for bucket in table) == len(DEFAULT_INSTRUCTIONS)


def test_register_rejects_overlapping_patterns() -> None:
    table = OpcodeTable()
    table.register(Instruction(0x8001, 0xF00F, "OR", OperandForm.X_Y, "op_or"))

    with pytest.raises(ValueError):
        table.register(Instruction(0x8001, 0xF0FF, "DUP", OperandForm.X, "op_or"))


def test_instruction_validates_pattern_within_mask() -> None:
    with pytest.raises(ValueError):
        Instruction(0x1234, 0xF000, "BAD", OperandForm.NNN, "op_jp")
