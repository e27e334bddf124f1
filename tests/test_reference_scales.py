"""Tests for reference_scales.py"""
import pytest

from color_space import hex_to_oklch, oklch_to_hex
from reference_scales import (
    APPEARANCES, DARK_SCALES_P3, GRAY_SCALE_NAMES, LIGHT_SCALES_P3, STEP_COUNT,
    check_appearance, convert_scales, palettes_for,
)


@pytest.mark.parametrize("appearance", APPEARANCES)
def test_library_shape(appearance):
    library = palettes_for(appearance)
    assert len(library.all_scales) == 8
    assert set(library.gray_scales) == set(GRAY_SCALE_NAMES)
    for scale in library.all_scales.values():
        assert len(scale) == STEP_COUNT


def test_same_topology_across_appearances():
    assert list(LIGHT_SCALES_P3) == list(DARK_SCALES_P3)
    assert list(palettes_for('light').all_scales) == list(palettes_for('dark').all_scales)


def test_library_is_cached_and_read_only():
    library = palettes_for('light')
    assert palettes_for('light') is library
    with pytest.raises(TypeError):
        library.all_scales['teal'] = library.all_scales['blue']


def test_gray_scales_share_all_scale_colors():
    library = palettes_for('dark')
    assert library.gray_scales['slate'] == library.all_scales['slate']


def test_light_scales_darken_and_dark_scales_lighten():
    for scale in palettes_for('light').all_scales.values():
        assert scale[0].lightness > scale[11].lightness
    for scale in palettes_for('dark').all_scales.values():
        assert scale[0].lightness < scale[11].lightness


def test_gray_reference_is_neutral():
    for color in palettes_for('light').all_scales['gray']:
        assert color.chroma < 1e-3


@pytest.mark.parametrize("appearance", APPEARANCES)
def test_reference_colors_round_trip_through_hex(appearance):
    for color in palettes_for(appearance).all_colors():
        hex_color = oklch_to_hex(color)
        assert oklch_to_hex(hex_to_oklch(hex_color)) == hex_color


def test_unknown_appearance():
    with pytest.raises(ValueError):
        palettes_for('sepia')
    with pytest.raises(ValueError):
        check_appearance('Light')


def test_convert_scales_checks_step_count():
    with pytest.raises(ValueError):
        convert_scales({'short': ((0.5, 0.5, 0.5),) * 11})
