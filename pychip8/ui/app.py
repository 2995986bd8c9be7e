"""Pygame front end for the CHIP-8 interpreter."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from pychip8.audio import DEFAULT_FREQUENCY, SquareWaveBeeper
from pychip8.cpu import TIMER_HZ
from pychip8.errors import CapacityExceededError, ResourceNotFoundError, StackUnderflowError
from pychip8.io import lookup_key
from pychip8.loader import load_rom_from_path
from pychip8.system import Fault, Machine, MachineConfig, create_machine
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import MONOCHROME, SCREEN_HEIGHT, SCREEN_WIDTH, Renderer
from pychip8.video.palette import RGBColor


@dataclass
class AppConfig:
    """Configuration for the CHIP-8 emulator frontend."""

    rom_path: Optional[Path] = None
    scale: int = 10
    instructions_per_second: int = 540
    timer_hz: int = TIMER_HZ
    palette: Sequence[RGBColor] = field(default=MONOCHROME)
    fullscreen: bool = False
    enable_audio: bool = True
    tone_frequency: float = DEFAULT_FREQUENCY
    seed: Optional[int] = None


class Chip8App:
    """Thin wrapper around the pygame event loop.

    One loop iteration is one 60 Hz frame: drain input events, run a batch
    of instructions, tick the timers once, then present the display if the
    machine reports a pending redraw.
    """

    def __init__(self, config: AppConfig) -> None:
        if config.scale <= 0:
            raise ValueError("scale must be positive")
        if config.instructions_per_second <= 0 or config.timer_hz <= 0:
            raise ValueError("instruction and timer rates must be positive")
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._beeper: SquareWaveBeeper | None = None
        self._renderer = Renderer(config.palette)
        self._cycle_budget = 0.0
        self._perf_enabled = debug_enabled("perf")
        self._frame_counter = 0

    @property
    def machine(self) -> Machine | None:
        return self._machine

    def initialise_machine(self) -> Machine:
        """Create the machine and load the configured ROM into it."""

        rom_path = self._config.rom_path
        if rom_path is None:
            raise RuntimeError("ROM image is required; pass --rom <path>")

        machine = create_machine(MachineConfig(seed=self._config.seed))
        try:
            load_rom_from_path(rom_path, machine)
        except ResourceNotFoundError as exc:
            raise RuntimeError(str(exc)) from exc
        except CapacityExceededError as exc:
            raise RuntimeError(f"Failed to load ROM {rom_path}: {exc}") from exc
        self._machine = machine
        self._cycle_budget = 0.0
        return machine

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        machine = self.initialise_machine()

        if self._config.enable_audio:
            pygame.mixer.pre_init(44_100, -16, 1, 512)
        pygame.init()
        pygame.display.set_caption(f"CHIP-8 - {self._config.rom_path.name}")
        self._initialise_audio(pygame)

        surface_size = (SCREEN_WIDTH * self._config.scale, SCREEN_HEIGHT * self._config.scale)
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode(surface_size, flags)

        clock = pygame.time.Clock()
        self._running = True

        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(pygame, event.key, pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(pygame, event.key, pressed=False)

                frame_start = time.perf_counter()
                self.run_frame(machine)

                if machine.take_redraw_flag():
                    frame = self._renderer.render(machine.pixels, scale=self._config.scale)
                    screen.blit(frame.to_surface(), (0, 0))
                    pygame.display.flip()

                if self._perf_enabled:
                    debug_log(
                        "perf",
                        "frame=%d frame_ms=%.3f cycles=%d",
                        self._frame_counter,
                        (time.perf_counter() - frame_start) * 1000.0,
                        machine.cpu.cycle_count,
                    )

                clock.tick(self._config.timer_hz)
                self._frame_counter += 1
        finally:
            if self._beeper is not None:
                self._beeper.shutdown()
            pygame.quit()

    def run_frame(self, machine: Machine) -> list[Fault]:
        """Run one frame's worth of cycles and one timer tick."""

        self._cycle_budget += self._config.instructions_per_second / self._config.timer_hz
        count = int(self._cycle_budget)
        self._cycle_budget -= count

        try:
            faults = machine.step(count)
        except (CapacityExceededError, StackUnderflowError) as exc:
            self._running = False
            raise RuntimeError(f"Interpreter stopped: {exc}") from exc

        for fault in faults:
            if debug_enabled("fault"):
                debug_log("fault", "frame=%d %s", self._frame_counter, fault.message)

        if machine.tick_timers():
            self._set_tone(False)
        elif machine.sound_active:
            self._set_tone(True)
        return faults

    def _handle_key_event(self, pygame, key_code: int, *, pressed: bool) -> None:
        if self._machine is None:
            return
        name = pygame.key.name(key_code)
        index = lookup_key(name)
        if debug_enabled("input"):
            debug_log("input", "event=%s keypad=%s pressed=%s", name, index, pressed)
        if index is None:
            return
        self._machine.set_key(index, pressed)

    def _initialise_audio(self, pygame) -> None:
        if not self._config.enable_audio:
            return
        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init(44_100, -16, 1)
            except pygame.error as exc:  # pragma: no cover - hardware dependent
                if debug_enabled("audio"):
                    debug_log("audio", "mixer_init_failed=%s", exc)
                return
        mixer_state = pygame.mixer.get_init()
        if mixer_state is None:
            if debug_enabled("audio"):
                debug_log("audio", "mixer_unavailable")
            return
        try:
            self._beeper = SquareWaveBeeper(sample_rate=mixer_state[0])
        except RuntimeError as exc:
            self._beeper = None
            if debug_enabled("audio"):
                debug_log("audio", "beeper_init_failed=%s", exc)

    def _set_tone(self, enabled: bool) -> None:
        if self._beeper is not None:
            self._beeper.set_state(enabled, self._config.tone_frequency)
