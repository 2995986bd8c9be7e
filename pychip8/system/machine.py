"""CHIP-8 machine assembly and host-facing pull API."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from pychip8.bus import Memory
from pychip8.cpu import Chip8CPU, Timers
from pychip8.errors import AddressFaultError, RecoverableFault, UnknownOpcodeError
from pychip8.io import Keypad
from pychip8.utils import debug_enabled, debug_log
from pychip8.video.framebuffer import FrameBuffer


@dataclass
class MachineConfig:
    """Runtime configuration for the CHIP-8 machine."""

    seed: Optional[int] = None
    strict_faults: bool = False
    rom_image: Optional[bytes] = None


@dataclass(frozen=True)
class Fault:
    """A recoverable fault reported by ``Machine.step``."""

    kind: str
    pc: int
    opcode: int | None
    message: str


@dataclass
class Machine:
    """Owns every interpreter component and exposes the host pull API.

    The host calls ``step`` and ``tick_timers`` at its own cadence, feeds key
    changes through ``set_key`` and polls ``take_redraw_flag`` before
    reading ``pixels``. Nothing here blocks or registers callbacks.
    """

    memory: Memory
    cpu: Chip8CPU
    framebuffer: FrameBuffer
    keypad: Keypad
    timers: Timers
    strict_faults: bool = False
    last_fault: Fault | None = None

    def reset(self) -> None:
        """Re-initialise every component together."""

        self.memory.reset()
        self.framebuffer.reset()
        self.keypad.reset()
        self.timers.reset()
        self.cpu.reset()
        self.last_fault = None

    def load_rom(self, data: bytes) -> None:
        self.memory.load_program(bytes(data))

    def step(self, count: int = 1) -> list[Fault]:
        """Execute ``count`` cycles and return the recoverable faults they raised."""

        if count < 0:
            raise ValueError("cycle count must not be negative")
        reported: list[Fault] = []
        cpu = self.cpu
        for _ in range(count):
            pc_before = cpu.state.pc
            try:
                cpu.step()
            except RecoverableFault as exc:
                fault = _describe_fault(exc, pc_before)
                if debug_enabled("fault"):
                    debug_log("fault", "%s pc=%03x %s", fault.kind, fault.pc, fault.message)
                self.last_fault = fault
                if self.strict_faults:
                    raise
                reported.append(fault)
        return reported

    def tick_timers(self) -> bool:
        """Apply one 60 Hz timer decrement; ``True`` when the tone should stop."""

        return self.timers.tick()

    @property
    def sound_active(self) -> bool:
        return self.timers.sound_active

    def set_key(self, index: int, pressed: bool) -> None:
        self.keypad.set_key(index, pressed)

    @property
    def pixels(self) -> memoryview:
        return self.framebuffer.pixels

    def get_pixel(self, x: int, y: int) -> int:
        return self.framebuffer.get_pixel(x, y)

    def take_redraw_flag(self) -> bool:
        return self.framebuffer.take_redraw_flag()


def _describe_fault(exc: RecoverableFault, pc: int) -> Fault:
    if isinstance(exc, UnknownOpcodeError):
        return Fault("unknown_opcode", pc, exc.opcode, str(exc))
    kind = "address_fault" if isinstance(exc, AddressFaultError) else "fault"
    return Fault(kind, pc, None, str(exc))


def create_machine(config: MachineConfig | None = None) -> Machine:
    """Instantiate a CHIP-8 machine with the requested configuration."""

    config = config or MachineConfig()

    memory = Memory()
    framebuffer = FrameBuffer()
    keypad = Keypad()
    timers = Timers()
    cpu = Chip8CPU(
        memory,
        framebuffer,
        keypad,
        timers,
        rng=random.Random(config.seed),
    )

    machine = Machine(
        memory=memory,
        cpu=cpu,
        framebuffer=framebuffer,
        keypad=keypad,
        timers=timers,
        strict_faults=config.strict_faults,
    )
    if config.rom_image is not None:
        machine.load_rom(config.rom_image)
    return machine
