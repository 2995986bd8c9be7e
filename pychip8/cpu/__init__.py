"""CPU package for the CHIP-8 interpreter."""

from .core import Chip8CPU, CPUState
from .timers import TIMER_HZ, Timers
from . import opcodes

__all__ = [
    "Chip8CPU",
    "CPUState",
    "Timers",
    "TIMER_HZ",
    "opcodes",
]
