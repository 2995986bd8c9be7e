"""Audio output for the CHIP-8 interpreter."""

from .beeper import DEFAULT_FREQUENCY, SquareWaveBeeper

__all__ = ["SquareWaveBeeper", "DEFAULT_FREQUENCY"]
