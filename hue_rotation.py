#!/usr/bin/env python3
"""
Alternative generator: rotate one fixed base scale to the accent's hue.

Every hue gets the same lightness and chroma progression, taken from a
cyan base scale (a mauve one for neutrals). Chroma can instead be pushed
to the sRGB gamut edge at each step.
"""

import logging
import math
from dataclasses import replace
from functools import lru_cache

import numpy as np

from alpha_colors import alpha_scale
from color_space import Color, color_to_srgb, hex_to_oklch, normalize_hex, oklch_to_hex
from reference_scales import Scale, check_appearance, convert_scales

logger = logging.getLogger(__name__)

SOLID_STEP = 8
MAX_CHROMA_SEARCH = 0.4
MAX_CHROMA_ITERATIONS = 20


# =============================================================================
# Base Scales (Display P3)
# =============================================================================

HUE_BASE_P3 = {
    'light': (
        (0.982, 0.992, 0.996), (0.955, 0.981, 0.984), (0.888, 0.965, 0.975),
        (0.821, 0.941, 0.959), (0.751, 0.907, 0.935), (0.671, 0.862, 0.9),
        (0.564, 0.8, 0.854), (0.388, 0.715, 0.798), (0.282, 0.627, 0.765),
        (0.264, 0.583, 0.71), (0.08, 0.48, 0.63), (0.108, 0.232, 0.277),
    ),
    'dark': (
        (0.053, 0.085, 0.098), (0.072, 0.105, 0.122), (0.073, 0.168, 0.209),
        (0.063, 0.216, 0.277), (0.091, 0.267, 0.336), (0.137, 0.324, 0.4),
        (0.186, 0.398, 0.484), (0.23, 0.496, 0.6), (0.282, 0.627, 0.765),
        (0.331, 0.675, 0.801), (0.446, 0.79, 0.887), (0.757, 0.919, 0.962),
    ),
}

NEUTRAL_BASE_P3 = {
    'light': (
        (0.991, 0.988, 0.992), (0.98, 0.976, 0.984), (0.946, 0.938, 0.952),
        (0.915, 0.906, 0.925), (0.886, 0.876, 0.901), (0.856, 0.846, 0.875),
        (0.814, 0.804, 0.84), (0.735, 0.728, 0.777), (0.555, 0.549, 0.596),
        (0.514, 0.508, 0.552), (0.395, 0.388, 0.424), (0.128, 0.122, 0.147),
    ),
    'dark': (
        (0.07, 0.067, 0.074), (0.101, 0.098, 0.105), (0.138, 0.134, 0.144),
        (0.167, 0.161, 0.175), (0.196, 0.189, 0.206), (0.232, 0.225, 0.245),
        (0.286, 0.277, 0.302), (0.383, 0.373, 0.408), (0.434, 0.428, 0.467),
        (0.487, 0.48, 0.519), (0.707, 0.7, 0.735), (0.933, 0.933, 0.94),
    ),
}


@lru_cache(maxsize=None)
def base_scale(appearance: str, neutral: bool = False) -> Scale:
    """OKLCH base scale for an appearance."""
    check_appearance(appearance)
    source = NEUTRAL_BASE_P3 if neutral else HUE_BASE_P3
    return convert_scales({'base': source[appearance]})['base']


# =============================================================================
# Rotation
# =============================================================================

def max_srgb_chroma(lightness: float, hue: float,
                    iterations: int = MAX_CHROMA_ITERATIONS) -> float:
    """Largest chroma at this lightness and hue that stays inside sRGB."""
    low, high = 0.0, MAX_CHROMA_SEARCH
    for _ in range(iterations):
        mid = (low + high) / 2
        rgb = color_to_srgb(Color(lightness, mid, hue))
        if np.all((rgb >= 0) & (rgb <= 1)):
            low = mid
        else:
            high = mid
    return low


def rotate_scale(target_hue: float, appearance: str, neutral: bool = False,
                 max_chroma: bool = False) -> Scale:
    """
    Base scale with every step moved to target_hue.

    Args:
        target_hue: Hue in degrees
        appearance: 'light' or 'dark'
        neutral: Use the low-chroma neutral base
        max_chroma: Replace each step's chroma with the sRGB maximum.
            Ignored for neutral scales.
    """
    scale = base_scale(appearance, neutral)
    if max_chroma and not neutral:
        return tuple(
            replace(color, chroma=max_srgb_chroma(color.lightness, target_hue), hue=target_hue)
            for color in scale
        )
    return tuple(replace(color, hue=target_hue) for color in scale)


def hue_rotation_scale(color: str, appearance: str, background: str,
                       neutral: bool = False, max_chroma: bool = False,
                       lock_color: bool = True) -> dict[str, list[str]]:
    """
    Scale and alpha scale for a color's hue by base-scale rotation.

    Args:
        color: Hex color providing the hue (achromatic colors use hue 0)
        appearance: 'light' or 'dark'
        background: Background hex the alpha scale composites over
        neutral: Build a neutral scale tinted with the color's hue
        max_chroma: Push chroma to the sRGB edge (not for neutrals)
        lock_color: Keep the base step 9; otherwise step 9 is color itself

    Returns:
        {'scale': [...], 'alpha': [...]} with 12 hex colors each.
    """
    source = hex_to_oklch(color, field='color')
    background_hex = normalize_hex(background, field='background')
    target_hue = 0.0 if math.isnan(source.hue) else source.hue

    scale = list(rotate_scale(target_hue, appearance, neutral, max_chroma))
    if not lock_color:
        scale[SOLID_STEP] = source
    logger.debug("Rotated %s base scale to hue %.1f", 'neutral' if neutral else 'hue', target_hue)

    scale_hex = [oklch_to_hex(step) for step in scale]
    return {'scale': scale_hex, 'alpha': list(alpha_scale(scale_hex, background_hex))}
