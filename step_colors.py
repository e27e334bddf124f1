#!/usr/bin/env python3
"""
Fix-ups applied to the accent scale after matching and transposition:
the solid step 9, its hover step 10, text steps 11-12 and the foreground
color used on top of step 9.
"""

import logging
import math
from dataclasses import replace
from typing import Sequence

from color_space import Color, contrast_apca, delta_e_ok
from reference_scales import Scale
from scale_matching import closest_color
from scale_settings import DEFAULT_SETTINGS, ScaleSettings

logger = logging.getLogger(__name__)

WHITE = Color(1.0, 0.0, math.nan)

HOVER_PIVOT_LIGHTNESS = 0.4  # Above this, hover darkens; otherwise it lightens
HOVER_LIGHTNESS_SHIFT = 0.03
HOVER_CHROMA_FACTOR = 0.93
DARK_TEXT_LIGHTNESS = 0.25
DARK_TEXT_CHROMA_FACTOR = 0.08
DARK_TEXT_MIN_CHROMA = 0.04

SOLID_STEP = 8  # 0-based index of step 9
HOVER_STEP = 9
TEXT_STEPS = (10, 11)
BORDER_HOVER_STEP = 7


def text_color(background: Color, threshold: float = 40.0) -> Color:
    """
    Foreground color for text on top of background.

    White unless white text would have an APCA contrast below threshold,
    in which case a dark color tinted with the background's hue is used.
    A nan contrast (background far outside sRGB) also gives white.
    """
    if abs(contrast_apca(WHITE, background)) < threshold:
        chroma = max(DARK_TEXT_CHROMA_FACTOR * background.chroma, DARK_TEXT_MIN_CHROMA)
        return Color(DARK_TEXT_LIGHTNESS, chroma, background.hue)
    return WHITE


def step9_colors(scale: Scale, source: Color,
                 settings: ScaleSettings = DEFAULT_SETTINGS) -> tuple[Color, Color]:
    """
    Solid step color and its foreground color.

    The source itself is used unless it sits too close to the scale's
    step 1 (white on white, black on black), then the scale's own step 9.
    """
    distance = delta_e_ok(source, scale[0]) * 100
    if distance < settings.background_distance_threshold:
        logger.debug("Source is %.1f from step 1, keeping scale step 9", distance)
        solid = scale[SOLID_STEP]
    else:
        solid = source
    return solid, text_color(solid, settings.text_contrast_threshold)


def button_hover_color(source: Color, scales: Sequence[Scale]) -> Color:
    """
    Hover variant of a solid color.

    Lightness moves away from the pivot by a shift that shrinks for lighter
    colors. Chroma and hue are then taken from the closest color in scales
    so near-neutral scales keep their tint.
    """
    lightness, chroma, hue = source.lightness, source.chroma, source.hue
    if lightness > HOVER_PIVOT_LIGHTNESS:
        new_lightness = lightness - HOVER_LIGHTNESS_SHIFT / (lightness + 0.1)
    else:
        new_lightness = lightness + HOVER_LIGHTNESS_SHIFT / (lightness + 0.1)
    if lightness > HOVER_PIVOT_LIGHTNESS and not source.achromatic:
        new_chroma = chroma * HOVER_CHROMA_FACTOR
    else:
        new_chroma = chroma

    hover = Color(new_lightness, new_chroma, hue)
    candidates = [color for scale in scales for color in scale]
    if not candidates:
        return hover

    donor = closest_color(hover, candidates)
    return replace(hover, chroma=donor.chroma, hue=donor.hue)


def cap_text_chroma(scale: Scale) -> Scale:
    """Limit steps 11-12 chroma to the more saturated of steps 8 and 9."""
    cap = max(scale[BORDER_HOVER_STEP].chroma, scale[SOLID_STEP].chroma)
    return tuple(
        replace(color, chroma=min(cap, color.chroma)) if i in TEXT_STEPS else color
        for i, color in enumerate(scale)
    )


def finish_accent_scale(scale: Scale, source: Color,
                        settings: ScaleSettings = DEFAULT_SETTINGS) -> tuple[Scale, Color]:
    """
    Apply the step 9-12 fix-ups to a generated accent scale.

    Returns:
        Tuple of (finished scale, foreground color for step 9).
    """
    solid, contrast = step9_colors(scale, source, settings)
    steps = list(scale)
    steps[SOLID_STEP] = solid
    steps[HOVER_STEP] = button_hover_color(solid, [tuple(steps)])
    return cap_text_chroma(tuple(steps)), contrast
