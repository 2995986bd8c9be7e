"""Exception hierarchy shared by the CHIP-8 interpreter components."""

from __future__ import annotations


class Chip8Error(Exception):
    """Base error for interpreter failures."""


class CPUError(Chip8Error):
    """Raised when the execution engine is misconfigured."""


class ResourceNotFoundError(Chip8Error, FileNotFoundError):
    """Raised when a ROM source cannot be located."""


class CapacityExceededError(Chip8Error):
    """Raised when a ROM image or the call stack exceeds its fixed capacity."""


class StackUnderflowError(Chip8Error):
    """Raised when a subroutine return finds the call stack empty."""


class RecoverableFault(Chip8Error):
    """Mid-run fault after which execution may continue at PC + 2."""


class AddressFaultError(RecoverableFault):
    """Raised when a computed memory, frame-buffer or keypad index is out of range."""


class UnknownOpcodeError(RecoverableFault):
    """Raised when a fetched word does not match any known instruction."""

    def __init__(self, opcode: int) -> None:
        super().__init__(f"unknown opcode {opcode:#06x}")
        self.opcode = opcode


__all__ = [
    "Chip8Error",
    "CPUError",
    "ResourceNotFoundError",
    "CapacityExceededError",
    "StackUnderflowError",
    "RecoverableFault",
    "AddressFaultError",
    "UnknownOpcodeError",
]
