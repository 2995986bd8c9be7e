"""Delay and sound timers decremented at 60 Hz."""

from __future__ import annotations

from dataclasses import dataclass

from pychip8.utils import debug_enabled, debug_log

TIMER_HZ = 60


@dataclass
class Timers:
    """Two independent 8-bit down-counters.

    Instructions only load and read the counters; ``tick`` is the sole way
    they count down.
    """

    delay: int = 0
    sound: int = 0

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0

    def set_delay(self, value: int) -> None:
        self.delay = value & 0xFF

    def set_sound(self, value: int) -> None:
        self.sound = value & 0xFF
        if self.sound and debug_enabled("audio"):
            debug_log("audio", "tone start sound=%d", self.sound)

    @property
    def sound_active(self) -> bool:
        return self.sound > 0

    def tick(self) -> bool:
        """Apply one 60 Hz decrement; return ``True`` when the tone should stop."""

        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1
            if self.sound == 0:
                if debug_enabled("audio"):
                    debug_log("audio", "tone stop")
                return True
        return False
