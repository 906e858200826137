"""Tests for the square-wave sample generator."""

from __future__ import annotations

import pytest

from chipette.audio import TONE_FREQUENCY, build_square_wave


def test_square_wave_period_and_levels() -> None:
    samples = build_square_wave(44_100, TONE_FREQUENCY, amplitude=3_000)

    # 44100 / 600 = 73 samples per period -> 36 per half.
    assert len(samples) == 72
    assert set(samples[:36]) == {-3_000}
    assert set(samples[36:]) == {3_000}
    assert samples.typecode == "h"


def test_square_wave_rejects_bad_arguments() -> None:
    with pytest.raises(ValueError):
        build_square_wave(0, 600.0)
    with pytest.raises(ValueError):
        build_square_wave(44_100, 0.0)
