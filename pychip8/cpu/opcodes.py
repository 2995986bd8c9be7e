"""Opcode metadata and decoder for the CHIP-8 instruction set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Final, Iterable, List, Sequence


class OperandForm(Enum):
    """Operand fields an instruction reads from its 16-bit word."""

    NONE = auto()
    NNN = auto()
    X_NN = auto()
    X_Y = auto()
    X_Y_N = auto()
    X = auto()


@dataclass(frozen=True)
class Instruction:
    """Metadata describing a single CHIP-8 opcode pattern.

    A word matches when ``word & mask == pattern``.
    """

    pattern: int
    mask: int
    mnemonic: str
    form: OperandForm
    handler: str

    def __post_init__(self) -> None:
        if not 0 <= self.pattern <= 0xFFFF or not 0 <= self.mask <= 0xFFFF:
            raise ValueError(f"pattern/mask out of range: {self.pattern:#x}/{self.mask:#x}")
        if self.pattern & ~self.mask:
            raise ValueError(f"pattern {self.pattern:#06x} has bits outside mask {self.mask:#06x}")
        if not self.mask & 0xF000:
            raise ValueError("mask must select the high nibble")

    def matches(self, word: int) -> bool:
        return (word & self.mask) == self.pattern

    def overlaps(self, other: "Instruction") -> bool:
        common = self.mask & other.mask
        return ((self.pattern ^ other.pattern) & common) == 0


@dataclass(frozen=True)
class Decoded:
    """A fetched word resolved to its instruction and operand fields."""

    word: int
    instruction: Instruction

    @property
    def x(self) -> int:
        return (self.word >> 8) & 0x0F

    @property
    def y(self) -> int:
        return (self.word >> 4) & 0x0F

    @property
    def n(self) -> int:
        return self.word & 0x000F

    @property
    def nn(self) -> int:
        return self.word & 0x00FF

    @property
    def nnn(self) -> int:
        return self.word & 0x0FFF

    @property
    def mnemonic(self) -> str:
        return self.instruction.mnemonic


class OpcodeTable:
    """Builder for the high-nibble bucketed instruction table."""

    _BUCKETS: Final[int] = 0x10

    def __init__(self) -> None:
        self._buckets: List[List[Instruction]] = [[] for _ in range(self._BUCKETS)]

    def register(self, instruction: Instruction) -> None:
        bucket = self._buckets[instruction.pattern >> 12]
        for existing in bucket:
            if existing.overlaps(instruction):
                raise ValueError(
                    f"opcode {instruction.pattern:#06x} overlaps {existing.mnemonic} {existing.pattern:#06x}"
                )
        bucket.append(instruction)

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Sequence[Sequence[Instruction]]:
        return tuple(tuple(bucket) for bucket in self._buckets)


def build_instruction_table(instructions: Iterable[Instruction]) -> Sequence[Sequence[Instruction]]:
    """Build a 16-bucket lookup table keyed by the high nibble."""

    table = OpcodeTable()
    table.register_all(instructions)
    return table.freeze()


def decode(word: int, table: Sequence[Sequence[Instruction]] | None = None) -> Decoded | None:
    """Resolve ``word`` against ``table``; ``None`` when nothing matches."""

    word &= 0xFFFF
    buckets = OPCODE_TABLE if table is None else table
    for instruction in buckets[word >> 12]:
        if instruction.matches(word):
            return Decoded(word, instruction)
    return None


_EXACT = 0xFFFF
_HIGH = 0xF000
_HIGH_LOW = 0xF00F
_HIGH_BYTE = 0xF0FF

DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    # System
    Instruction(0x00E0, _EXACT, "CLS", OperandForm.NONE, "op_cls"),
    Instruction(0x00EE, _EXACT, "RET", OperandForm.NONE, "op_ret"),
    # Flow control
    Instruction(0x1000, _HIGH, "JP", OperandForm.NNN, "op_jp"),
    Instruction(0x2000, _HIGH, "CALL", OperandForm.NNN, "op_call"),
    Instruction(0xB000, _HIGH, "JP V0", OperandForm.NNN, "op_jp_v0"),
    # Conditional skips
    Instruction(0x3000, _HIGH, "SE", OperandForm.X_NN, "op_se_immediate"),
    Instruction(0x4000, _HIGH, "SNE", OperandForm.X_NN, "op_sne_immediate"),
    Instruction(0x5000, _HIGH_LOW, "SE", OperandForm.X_Y, "op_se_register"),
    Instruction(0x9000, _HIGH_LOW, "SNE", OperandForm.X_Y, "op_sne_register"),
    # Immediate loads
    Instruction(0x6000, _HIGH, "LD", OperandForm.X_NN, "op_ld_immediate"),
    Instruction(0x7000, _HIGH, "ADD", OperandForm.X_NN, "op_add_immediate"),
    # Register ALU
    Instruction(0x8000, _HIGH_LOW, "LD", OperandForm.X_Y, "op_ld_register"),
    Instruction(0x8001, _HIGH_LOW, "OR", OperandForm.X_Y, "op_or"),
    Instruction(0x8002, _HIGH_LOW, "AND", OperandForm.X_Y, "op_and"),
    Instruction(0x8003, _HIGH_LOW, "XOR", OperandForm.X_Y, "op_xor"),
    Instruction(0x8004, _HIGH_LOW, "ADD", OperandForm.X_Y, "op_add_register"),
    Instruction(0x8005, _HIGH_LOW, "SUB", OperandForm.X_Y, "op_sub"),
    Instruction(0x8006, _HIGH_LOW, "SHR", OperandForm.X_Y, "op_shr"),
    Instruction(0x8007, _HIGH_LOW, "SUBN", OperandForm.X_Y, "op_subn"),
    Instruction(0x800E, _HIGH_LOW, "SHL", OperandForm.X_Y, "op_shl"),
    # Index register
    Instruction(0xA000, _HIGH, "LD I", OperandForm.NNN, "op_ld_index"),
    # Random
    Instruction(0xC000, _HIGH, "RND", OperandForm.X_NN, "op_rnd"),
    # Display
    Instruction(0xD000, _HIGH, "DRW", OperandForm.X_Y_N, "op_drw"),
    # Keypad
    Instruction(0xE09E, _HIGH_BYTE, "SKP", OperandForm.X, "op_skp"),
    Instruction(0xE0A1, _HIGH_BYTE, "SKNP", OperandForm.X, "op_sknp"),
    # Timers, memory and misc
    Instruction(0xF007, _HIGH_BYTE, "LD DT", OperandForm.X, "op_ld_from_delay"),
    Instruction(0xF00A, _HIGH_BYTE, "LD K", OperandForm.X, "op_wait_key"),
    Instruction(0xF015, _HIGH_BYTE, "LD DT", OperandForm.X, "op_ld_delay"),
    Instruction(0xF018, _HIGH_BYTE, "LD ST", OperandForm.X, "op_ld_sound"),
    Instruction(0xF01E, _HIGH_BYTE, "ADD I", OperandForm.X, "op_add_index"),
    Instruction(0xF029, _HIGH_BYTE, "LD F", OperandForm.X, "op_ld_font"),
    Instruction(0xF033, _HIGH_BYTE, "BCD", OperandForm.X, "op_bcd"),
    Instruction(0xF055, _HIGH_BYTE, "LD [I]", OperandForm.X, "op_store_registers"),
    Instruction(0xF065, _HIGH_BYTE, "LD V", OperandForm.X, "op_load_registers"),
)


OPCODE_TABLE: Sequence[Sequence[Instruction]] = build_instruction_table(DEFAULT_INSTRUCTIONS)
