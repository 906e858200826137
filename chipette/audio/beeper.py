"""Square-wave tone driven by the sound timer."""

from __future__ import annotations

from array import array
from typing import Optional

TONE_FREQUENCY = 600.0
TONE_AMPLITUDE = 3_000


def build_square_wave(sample_rate: int, frequency: float, amplitude: int = TONE_AMPLITUDE) -> array:
    """Return one period of a signed 16-bit square wave."""

    if sample_rate <= 0 or frequency <= 0.0:
        raise ValueError("sample_rate and frequency must be positive")
    half_period = max(1, int(sample_rate / frequency) // 2)
    samples = array("h")
    for index in range(half_period * 2):
        samples.append(amplitude if (index // half_period) % 2 else -amplitude)
    return samples


class SquareWaveBeeper:
    """Manage a looping square-wave tone using pygame's mixer."""

    def __init__(
        self,
        *,
        sample_rate: int = 44_100,
        frequency: float = TONE_FREQUENCY,
        volume: float = 0.35,
    ) -> None:
        try:
            import pygame  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required for audio output") from exc

        if pygame.mixer.get_init() is None:
            raise RuntimeError("pygame mixer must be initialised before creating SquareWaveBeeper")

        self._pygame = pygame
        self._sample_rate = max(1, sample_rate)
        self._frequency = frequency
        self._volume = max(0.0, min(1.0, volume))
        self._channel: Optional[pygame.mixer.Channel] = None
        self._sound: Optional[pygame.mixer.Sound] = None
        self._enabled = False

    # ------------------------------------------------------------------
    # Public API

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_state(self, enabled: bool) -> None:
        """Start or stop the tone; repeated calls with the same value are cheap."""

        if enabled == self._enabled:
            return
        self._enabled = enabled
        if not enabled:
            self._stop()
            return

        if self._sound is None:
            self._sound = self._build_sound()

        channel = self._channel
        if channel is None:
            channel = self._pygame.mixer.find_channel(True)
            if channel is None:
                return
            self._channel = channel

        channel.play(self._sound, loops=-1)
        channel.set_volume(self._volume)

    def shutdown(self) -> None:
        """Stop any active tone and release resources."""

        self._stop()
        self._enabled = False
        self._channel = None
        self._sound = None

    # ------------------------------------------------------------------
    # Internals

    def _stop(self) -> None:
        if self._channel is not None:
            self._channel.stop()

    def _build_sound(self) -> "pygame.mixer.Sound":
        buffer = build_square_wave(self._sample_rate, self._frequency)
        return self._pygame.mixer.Sound(buffer=buffer.tobytes())


__all__ = ["SquareWaveBeeper", "build_square_wave", "TONE_FREQUENCY"]
