"""Audio output for the Chipette emulator."""

from .beeper import TONE_FREQUENCY, SquareWaveBeeper, build_square_wave

__all__ = [
    "SquareWaveBeeper",
    "build_square_wave",
    "TONE_FREQUENCY",
]
