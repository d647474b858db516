"""core.waveform.shape_wave をテスト。"""

from __future__ import annotations

import math

import numpy as np
import pytest

from ledgrid.core.waveform import SHAPE_SINE, SHAPE_SQUARE, SHAPE_TRIANGLE, shape_wave


@pytest.mark.parametrize("angle", [0.0, 0.3, 1.0, math.pi / 2, 2.5, -4.0, 12.0])
def test_shape_wave_at_half_is_sine(angle: float) -> None:
    assert shape_wave(angle, SHAPE_SINE) == pytest.approx(math.sin(angle), abs=1e-15)


def test_shape_wave_triangle_is_linear_in_phase() -> None:
    assert shape_wave(math.pi / 2, SHAPE_TRIANGLE) == pytest.approx(1.0)
    assert shape_wave(math.pi / 6, SHAPE_TRIANGLE) == pytest.approx(1.0 / 3.0)
    assert shape_wave(-math.pi / 4, SHAPE_TRIANGLE) == pytest.approx(-0.5)


def test_shape_wave_square_uses_positive_sign_at_zero() -> None:
    assert shape_wave(0.0, SHAPE_SQUARE) == 1.0
    assert shape_wave(0.1, SHAPE_SQUARE) == 1.0
    assert shape_wave(-math.pi / 2, SHAPE_SQUARE) == -1.0


def test_shape_wave_blends_between_sine_and_square() -> None:
    angle = math.pi / 6
    s = math.sin(angle)
    assert shape_wave(angle, 0.75) == pytest.approx(s * 0.5 + 1.0 * 0.5)
    tri = 2.0 / math.pi * math.asin(s)
    assert shape_wave(angle, 0.25) == pytest.approx(tri * 0.5 + s * 0.5)


def test_shape_wave_is_continuous_at_sine_point() -> None:
    for angle in np.linspace(-7.0, 7.0, 29):
        below = shape_wave(float(angle), 0.5 - 1e-9)
        above = shape_wave(float(angle), 0.5 + 1e-9)
        assert abs(below - above) < 1e-8


def test_shape_wave_stays_in_unit_range() -> None:
    rng = np.random.default_rng(0)
    angles = rng.uniform(-50.0, 50.0, size=500)
    shapes = rng.uniform(0.0, 1.0, size=500)
    for angle, shape in zip(angles, shapes):
        v = shape_wave(float(angle), float(shape))
        assert -1.0 - 1e-12 <= v <= 1.0 + 1e-12
