"""Tests for scale_matching.py"""
import math

import pytest

from color_space import Color, hex_to_oklch
from reference_scales import palettes_for
from scale_matching import (
    ScaleMatch, blend_closest_scales, blend_ratio, blend_scales, closest_color,
    closest_scale_matches, retint_scale,
)
from scale_settings import DEFAULT_SETTINGS

LIGHTNESS = [0.98, 0.95, 0.9, 0.85, 0.8, 0.75, 0.7, 0.65, 0.6, 0.5, 0.4, 0.2]


def _scale(chroma: float, hue: float) -> tuple:
    return tuple(Color(l, chroma, hue if chroma else math.nan) for l in LIGHTNESS)


@pytest.fixture
def toy_scales():
    return {
        'gray': _scale(0.0, 0.0),
        'slate': _scale(0.01, 260.0),
        'blue': _scale(0.15, 260.0),
    }


# =============================================================================
# Matching
# =============================================================================

def test_reference_color_matches_its_own_scale():
    scales = palettes_for('light').all_scales
    source = scales['blue'][8]
    matches = closest_scale_matches(source, scales, DEFAULT_SETTINGS.gray_family_names)
    assert matches[0].scale == 'blue'
    assert matches[0].step == 8
    assert matches[0].distance == pytest.approx(0.0, abs=1e-12)


def test_one_match_per_scale_sorted(toy_scales):
    source = Color(0.6, 0.12, 260.0)
    matches = closest_scale_matches(source, toy_scales)
    assert [m.scale for m in matches] == ['blue', 'slate', 'gray']
    distances = [m.distance for m in matches]
    assert distances == sorted(distances)


def test_gray_runner_up_is_skipped_for_a_hue(toy_scales):
    source = Color(0.6, 0.004, 260.0)
    matches = closest_scale_matches(source, toy_scales, ('gray', 'slate'))
    assert [m.scale for m in matches] == ['gray', 'blue']


def test_all_gray_candidates_are_kept(toy_scales):
    grays = {'gray': toy_scales['gray'], 'slate': toy_scales['slate']}
    matches = closest_scale_matches(Color(0.6, 0.004, 260.0), grays, ('gray', 'slate'))
    assert [m.scale for m in matches] == ['gray', 'slate']


def test_no_scales():
    with pytest.raises(ValueError):
        closest_scale_matches(Color(0.5, 0.1, 10.0), {})


def test_closest_color_prefers_first_on_tie():
    a = Color(0.5, 0.1, 10.0)
    assert closest_color(Color(0.5, 0.1, 10.0), [a, Color(0.5, 0.1, 10.0)]) is a


# =============================================================================
# Blend ratio
# =============================================================================

def _match(name, distance, lightness, chroma=0.0):
    return ScaleMatch(name, 0, distance, Color(lightness, chroma, math.nan if not chroma else 0.0))


def test_ratio_zero_when_source_on_a():
    assert blend_ratio(_match('a', 0.0, 0.5), _match('b', 0.2, 0.7)) == 0.0


def test_ratio_half_when_equidistant():
    distance = math.hypot(0.1, 0.05)
    ratio = blend_ratio(_match('a', distance, 0.5), _match('b', distance, 0.7))
    assert ratio == pytest.approx(0.5)


def test_ratio_for_collinear_source():
    # Source at L=0.55 on the segment between A (0.5) and B (0.7)
    ratio = blend_ratio(_match('a', 0.05, 0.5), _match('b', 0.15, 0.7))
    assert ratio == pytest.approx(0.5 * 0.05 / 0.15)
    assert not math.isnan(ratio)


def test_ratio_clamped_at_zero_when_source_is_beyond_a():
    # Source at L=0.45, outside the segment on A's side
    ratio = blend_ratio(_match('a', 0.05, 0.5), _match('b', 0.25, 0.7))
    assert ratio == 0.0


def test_ratio_for_identical_matches():
    assert blend_ratio(_match('a', 0.1, 0.5), _match('b', 0.1, 0.5)) == 0.0


def test_ratio_stays_in_range_for_real_inputs():
    scales = palettes_for('light').all_scales
    for hex_color in ('#3d63dd', '#e5484d', '#46a758', '#8e4ec6', '#2de665', '#999999'):
        matches = closest_scale_matches(hex_to_oklch(hex_color), scales,
                                        DEFAULT_SETTINGS.gray_family_names)
        ratio = blend_ratio(matches[0], matches[1])
        assert 0.0 <= ratio <= 0.5


# =============================================================================
# Blending and retinting
# =============================================================================

def test_blend_with_zero_ratio_returns_first_scale():
    scales = palettes_for('light').all_scales
    blended = blend_scales(scales['blue'], scales['red'], 0.0)
    for mixed, original in zip(blended, scales['blue']):
        assert mixed.lightness == pytest.approx(original.lightness)
        assert mixed.chroma == pytest.approx(original.chroma)


def test_blend_midpoint_lightness():
    scales = palettes_for('light').all_scales
    blended = blend_scales(scales['blue'], scales['green'], 0.5)
    for mixed, a, b in zip(blended, scales['blue'], scales['green']):
        assert mixed.lightness == pytest.approx((a.lightness + b.lightness) / 2)


def test_blend_requires_twelve_steps():
    with pytest.raises(ValueError):
        blend_scales(_scale(0.1, 10.0)[:11], _scale(0.1, 10.0)[:11], 0.5)


def test_blend_closest_scales_single_scale(toy_scales):
    only_blue = {'blue': toy_scales['blue']}
    assert blend_closest_scales(Color(0.6, 0.1, 250.0), only_blue) == only_blue['blue']


def test_retint_matches_source_hue_and_caps_chroma():
    source = hex_to_oklch('#3d63dd')
    scale = blend_closest_scales(source, palettes_for('light').all_scales,
                                 DEFAULT_SETTINGS.gray_family_names)
    retinted = retint_scale(scale, source, 1.5)
    assert len(retinted) == 12
    for before, after in zip(scale, retinted):
        assert after.hue == source.hue
        assert after.chroma <= source.chroma * 1.5 + 1e-12
        assert after.lightness == before.lightness


def test_retint_does_not_mutate_input(toy_scales):
    original = toy_scales['blue']
    retint_scale(original, Color(0.6, 0.05, 30.0))
    assert all(color.hue == 260.0 for color in original)


def test_retint_with_achromatic_base():
    retinted = retint_scale(_scale(0.0, 0.0), Color(0.6, 0.1, 30.0))
    assert all(color.chroma == 0.0 for color in retinted)
