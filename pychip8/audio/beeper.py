"""Square-wave tone for the CHIP-8 sound timer."""

from __future__ import annotations

from array import array
from typing import Optional

DEFAULT_FREQUENCY = 440.0


class SquareWaveBeeper:
    """Start and stop a looping square wave on a pygame mixer channel."""

    def __init__(
        self,
        *,
        sample_rate: int = 44_100,
        volume: float = 0.25,
    ) -> None:
        try:
            import pygame  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required for audio output") from exc

        if pygame.mixer.get_init() is None:
            raise RuntimeError("pygame mixer must be initialised before creating SquareWaveBeeper")

        self._pygame = pygame
        self._sample_rate = max(1, sample_rate)
        self._volume = max(0.0, min(1.0, volume))
        self._channel: Optional["pygame.mixer.Channel"] = None
        self._sounds: dict[float, "pygame.mixer.Sound"] = {}
        self._playing = False

    @property
    def playing(self) -> bool:
        return self._playing

    # ------------------------------------------------------------------
    # Public API

    def set_state(self, enabled: bool, frequency: float = DEFAULT_FREQUENCY) -> None:
        """Play the tone at ``frequency`` Hertz while ``enabled``."""

        if not enabled or frequency <= 0.0:
            self._stop()
            return
        if self._playing:
            return

        sound = self._sounds.get(frequency)
        if sound is None:
            sound = self._build_sound(frequency)
            self._sounds[frequency] = sound

        channel = self._channel
        if channel is None:
            channel = self._pygame.mixer.find_channel(True)
            if channel is None:
                return
            self._channel = channel
        channel.play(sound, loops=-1)
        channel.set_volume(self._volume)
        self._playing = True

    def shutdown(self) -> None:
        """Stop any active tone and release resources."""

        self._stop()
        self._channel = None
        self._sounds.clear()

    # ------------------------------------------------------------------
    # Internals

    def _stop(self) -> None:
        if self._channel is not None and self._playing:
            self._channel.stop()
        self._playing = False

    def _build_sound(self, frequency: float):
        period = max(2, int(round(self._sample_rate / frequency)))
        half = period // 2
        amplitude = 12_000
        buffer = array("h", [amplitude] * half + [-amplitude] * (period - half))
        return self._pygame.mixer.Sound(buffer=buffer.tobytes())


__all__ = ["SquareWaveBeeper", "DEFAULT_FREQUENCY"]
