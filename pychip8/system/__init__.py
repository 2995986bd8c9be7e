"""CHIP-8 system assembly helpers."""

from __future__ import annotations

from .machine import Fault, Machine, MachineConfig, create_machine

__all__ = [
    "MachineConfig",
    "Machine",
    "Fault",
    "create_machine",
]
