"""Python CHIP-8 interpreter.

The interpreter core lives in ``cpu``, ``bus``, ``io``, ``video`` and
``system``; ``ui`` and ``audio`` hold the pygame front end driven by
``run.py``.
"""

from __future__ import annotations

from . import audio, bus, cpu, io, loader, system, ui, utils, video
from .errors import (
    AddressFaultError,
    CapacityExceededError,
    Chip8Error,
    ResourceNotFoundError,
    StackUnderflowError,
    UnknownOpcodeError,
)

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
    "Chip8Error",
    "ResourceNotFoundError",
    "CapacityExceededError",
    "StackUnderflowError",
    "AddressFaultError",
    "UnknownOpcodeError",
]
