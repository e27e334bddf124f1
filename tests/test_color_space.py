"""Tests for color_space.py"""
import math

import numpy as np
import pytest

import color_space
from color_space import (
    Color, InvalidColorFormat, contrast_apca, delta_e_ok, hex_to_hsl, hex_to_oklch,
    hex_to_rgb, hsl_to_hex, mix_oklch, normalize_hex, oklab_to_oklch, oklch_to_hex,
    oklch_to_oklab, rgb_to_hex, srgb_to_oklab,
)


# =============================================================================
# Hex parsing
# =============================================================================

@pytest.mark.parametrize("value, expected", [
    ('#3D63DD', '#3d63dd'),
    ('3d63dd', '#3d63dd'),
    ('#FFF', '#ffffff'),
    ('abc', '#aabbcc'),
    ('#1234', '#11223344'),
    ('#3d63dd80', '#3d63dd80'),
    ('  #000000 ', '#000000'),
])
def test_normalize_hex(value, expected):
    assert normalize_hex(value) == expected


@pytest.mark.parametrize("value", ['zzzzzz', '#12345', '', '#', '#1234567', 'red', None, 123])
def test_normalize_hex_rejects(value):
    with pytest.raises(InvalidColorFormat):
        normalize_hex(value)


def test_invalid_color_names_field():
    with pytest.raises(InvalidColorFormat) as excinfo:
        normalize_hex('nope', field='accent')
    assert excinfo.value.field == 'accent'
    assert 'accent' in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)


def test_hex_to_rgb_ignores_alpha():
    assert hex_to_rgb('#3d63dd80') == (61, 99, 221)


def test_rgb_to_hex_clamps_and_formats_alpha():
    assert rgb_to_hex(-4, 300, 16) == '#00ff10'
    assert rgb_to_hex(0, 0, 0, 128) == '#00000080'


# =============================================================================
# OKLCH conversion
# =============================================================================

def test_white_and_black():
    white = hex_to_oklch('#ffffff')
    black = hex_to_oklch('#000000')
    assert white.lightness == pytest.approx(1.0, abs=1e-6)
    assert white.achromatic
    assert black.lightness == pytest.approx(0.0, abs=1e-9)
    assert black.achromatic


def test_gray_is_achromatic():
    gray = hex_to_oklch('#888888')
    assert gray.achromatic
    assert gray.chroma < 1e-4


def test_known_oklch_value():
    blue = hex_to_oklch('#3d63dd')
    assert blue.lightness == pytest.approx(0.5433, abs=1e-3)
    assert blue.chroma == pytest.approx(0.1913, abs=1e-3)
    assert blue.hue == pytest.approx(266.76, abs=0.1)


@pytest.mark.parametrize("hex_color", [
    '#3d63dd', '#e5484d', '#46a758', '#f76808', '#8e4ec6', '#ffe629',
    '#000000', '#ffffff', '#808080', '#010203', '#fefdfc',
])
def test_hex_round_trip(hex_color):
    assert oklch_to_hex(hex_to_oklch(hex_color)) == hex_color


def test_array_round_trip():
    rgb = np.array([[0.2, 0.4, 0.6], [1.0, 0.0, 0.5]])
    lch = oklab_to_oklch(srgb_to_oklab(rgb))
    lab = oklch_to_oklab(lch)
    np.testing.assert_allclose(lab, srgb_to_oklab(rgb), atol=1e-12)


def test_out_of_gamut_is_mapped():
    vivid = Color(0.7, 0.4, 150.0)
    hex_color = oklch_to_hex(vivid)
    assert len(hex_color) == 7
    mapped = hex_to_oklch(hex_color)
    assert mapped.chroma < vivid.chroma
    assert mapped.lightness == pytest.approx(0.7, abs=0.03)


def test_lightness_extremes_map_to_white_and_black():
    assert oklch_to_hex(Color(1.2, 0.1, 20.0)) == '#ffffff'
    assert oklch_to_hex(Color(-0.1, 0.1, 20.0)) == '#000000'


def test_color_rejects_nan():
    with pytest.raises(ValueError):
        Color(math.nan, 0.1, 10.0)
    with pytest.raises(ValueError):
        Color(0.5, -0.1, 10.0)


# =============================================================================
# Mixing and distance
# =============================================================================

def test_mix_takes_short_hue_arc():
    mixed = mix_oklch(Color(0.5, 0.1, 350.0), Color(0.5, 0.1, 10.0), 0.5)
    assert mixed.hue == pytest.approx(0.0, abs=1e-9) or mixed.hue == pytest.approx(360.0)


def test_mix_uses_defined_hue_when_one_side_is_gray():
    mixed = mix_oklch(Color(0.5, 0.0, math.nan), Color(0.7, 0.2, 120.0), 0.25)
    assert mixed.hue == 120.0
    assert mixed.lightness == pytest.approx(0.55)
    assert mixed.chroma == pytest.approx(0.05)


def test_delta_e_ok_properties():
    a = hex_to_oklch('#3d63dd')
    b = hex_to_oklch('#e5484d')
    assert delta_e_ok(a, a) == 0
    assert delta_e_ok(a, b) == pytest.approx(delta_e_ok(b, a))
    assert delta_e_ok(a, b) > 0


def test_delta_e_ok_black_white():
    assert delta_e_ok(hex_to_oklch('#000000'), hex_to_oklch('#ffffff')) == pytest.approx(1.0, abs=1e-6)


# =============================================================================
# Contrast
# =============================================================================

def test_apca_black_on_white():
    lc = contrast_apca(hex_to_oklch('#ffffff'), hex_to_oklch('#000000'))
    assert lc == pytest.approx(106.04, abs=0.1)


def test_apca_polarity():
    white = hex_to_oklch('#ffffff')
    black = hex_to_oklch('#000000')
    assert contrast_apca(black, white) < 0
    assert contrast_apca(white, black) > 0


def test_apca_same_color_is_zero():
    c = hex_to_oklch('#3d63dd')
    assert contrast_apca(c, c) == 0


def test_apca_low_contrast():
    lc = contrast_apca(hex_to_oklch('#ffffff'), hex_to_oklch('#ffe629'))
    assert abs(lc) < 40


def test_apca_negative_luminance_is_nan(monkeypatch):
    # Far out-of-gamut colors can keep a negative luminance after the soft clamp
    monkeypatch.setattr(color_space, '_apca_luminance',
                        lambda color: 1.0 if color.lightness > 0.5 else -0.05)
    lc = contrast_apca(Color(1.0, 0.0, math.nan), Color(0.2, 0.3, 20.0))
    assert math.isnan(lc)


# =============================================================================
# HSL
# =============================================================================

def test_hex_to_hsl():
    h, s, l = hex_to_hsl('#ff0000')
    assert (h, s, l) == pytest.approx((0.0, 100.0, 50.0))


def test_hsl_round_trip():
    assert hsl_to_hex(*hex_to_hsl('#3d63dd')) == '#3d63dd'
