"""Tests for lightness.py"""
import math

import pytest

from color_space import Color, hex_to_oklch
from lightness import (
    bezier_easing, dark_easing, lightness_inversions, transpose_progression_start,
    transpose_scale,
)
from reference_scales import palettes_for
from scale_settings import DEFAULT_SETTINGS


# =============================================================================
# Easing
# =============================================================================

@pytest.mark.parametrize("curve", [
    DEFAULT_SETTINGS.light_easing,
    DEFAULT_SETTINGS.dark_easing,
    (0.25, 0.1, 0.25, 1.0),
    (0.0, 0.0, 0.0, 0.0),
])
def test_easing_endpoints(curve):
    ease = bezier_easing(*curve)
    assert ease(0) == 0
    assert ease(1) == 1


def test_css_ease_midpoint():
    assert bezier_easing(0.25, 0.1, 0.25, 1.0)(0.5) == pytest.approx(0.802403, abs=1e-5)


def test_linear_curve():
    ease = bezier_easing(0.3, 0.3, 0.7, 0.7)
    for x in (0.1, 0.5, 0.9):
        assert ease(x) == x


def test_light_curve_overshoots():
    ease = bezier_easing(*DEFAULT_SETTINGS.light_easing)
    assert ease(0.5) == pytest.approx(1.48244, abs=1e-4)


def test_easing_rejects_x_out_of_range():
    with pytest.raises(ValueError):
        bezier_easing(1.2, 0.0, 0.5, 1.0)


# =============================================================================
# Transposition
# =============================================================================

def test_progression_starts_at_target_and_keeps_last():
    values = [1.0, 0.99, 0.97, 0.9, 0.8, 0.6, 0.3]
    result = transpose_progression_start(0.9, values, DEFAULT_SETTINGS.light_easing)
    assert result[0] == pytest.approx(0.9)
    assert result[-1] == values[-1]


def test_shift_tapers_towards_the_end():
    values = [0.2, 0.25, 0.3, 0.4, 0.5, 0.7, 0.9]
    result = transpose_progression_start(0.1, values, DEFAULT_SETTINGS.dark_easing)
    shifts = [abs(new - old) for new, old in zip(result, values)]
    assert shifts[-1] <= shifts[0]
    assert shifts == sorted(shifts, reverse=True)


def test_progression_edge_lengths():
    assert transpose_progression_start(0.5, [], DEFAULT_SETTINGS.light_easing) == []
    assert transpose_progression_start(0.5, [0.9], DEFAULT_SETTINGS.light_easing) == [0.5]


def test_light_transpose_on_white_is_identity():
    scale = palettes_for('light').all_scales['blue']
    result = transpose_scale(scale, hex_to_oklch('#ffffff'), 'light')
    for before, after in zip(scale, result):
        assert after.lightness == pytest.approx(before.lightness, abs=1e-6)


def test_light_transpose_on_tinted_background():
    scale = palettes_for('light').all_scales['blue']
    background = hex_to_oklch('#eeeeee')
    result = transpose_scale(scale, background, 'light')
    assert result[0].lightness < scale[0].lightness
    assert result[11].lightness == pytest.approx(scale[11].lightness)
    assert [c.hue for c in result] == [c.hue for c in scale]


def test_dark_transpose_pulls_step_one_to_background():
    scale = palettes_for('dark').all_scales['blue']
    result = transpose_scale(scale, hex_to_oklch('#000000'), 'dark')
    assert result[0].lightness == pytest.approx(0.0, abs=1e-9)
    assert result[11].lightness == pytest.approx(scale[11].lightness)


def test_dark_transpose_never_nan_for_black_reference():
    scale = tuple(Color(0.0 if i == 0 else 0.1 * i / 2, 0.0, math.nan) for i in range(12))
    result = transpose_scale(scale, hex_to_oklch('#222222'), 'dark')
    assert all(math.isfinite(c.lightness) for c in result)


# =============================================================================
# Dark easing
# =============================================================================

def test_dark_easing_unchanged_for_darker_background():
    assert dark_easing((1, 0, 1, 0), 0.1, 0.2) == (1, 0, 1, 0)


def test_dark_easing_fades():
    assert dark_easing((1.0, 0.0, 1.0, 0.0), 0.22, 0.2) == pytest.approx((0.7, 0.0, 0.7, 0.0))


def test_dark_easing_linear_past_max_ratio():
    assert dark_easing((1.0, 0.0, 1.0, 0.0), 0.4, 0.2) == (0.0, 0.0, 0.0, 0.0)
    assert dark_easing((1.0, 0.0, 1.0, 0.0), 0.28, 0.2) == (0.0, 0.0, 0.0, 0.0)


def test_dark_easing_zero_reference():
    assert dark_easing((1.0, 0.0, 1.0, 0.0), 0.1, 0.0) == (0.0, 0.0, 0.0, 0.0)
    assert dark_easing((1.0, 0.0, 1.0, 0.0), 0.0, 0.0) == (1.0, 0.0, 1.0, 0.0)


# =============================================================================
# Inversions
# =============================================================================

def test_lightness_inversions_light():
    assert lightness_inversions(['#ffffff', '#eeeeee', '#f5f5f5', '#000000'], 'light') == [(2, 3)]


def test_lightness_inversions_dark():
    assert lightness_inversions(['#000000', '#333333', '#222222', '#ffffff'], 'dark') == [(2, 3)]


def test_monotonic_scale_has_no_inversions():
    assert lightness_inversions(['#ffffff', '#cccccc', '#888888', '#000000'], 'light') == []
