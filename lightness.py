#!/usr/bin/env python3
"""
Lightness transposition: re-anchor a scale's lightness to a background.

A cubic Bezier easing curve tapers the shift so the first steps move
furthest and the last step barely moves.
"""

import logging
import math
from dataclasses import replace
from typing import Callable, Sequence

from scipy.optimize import brentq

from color_space import Color, hex_to_oklch
from reference_scales import Scale, check_appearance
from scale_settings import DEFAULT_SETTINGS, EasingCurve, ScaleSettings

logger = logging.getLogger(__name__)

SOLVE_TOLERANCE = 1e-12


# =============================================================================
# Easing
# =============================================================================

def _bezier(t: float, p1: float, p2: float) -> float:
    """One axis of a cubic Bezier from 0 to 1 with inner control values p1, p2."""
    return 3 * (1 - t) ** 2 * t * p1 + 3 * (1 - t) * t ** 2 * p2 + t ** 3


def bezier_easing(x1: float, y1: float, x2: float, y2: float) -> Callable[[float], float]:
    """
    CSS cubic-bezier() timing function.

    Returns:
        Function mapping progress x in [0, 1] to eased progress, with
        ease(0) == 0 and ease(1) == 1. y may overshoot [0, 1].

    Raises:
        ValueError: If x1 or x2 is outside [0, 1].
    """
    if not (0 <= x1 <= 1 and 0 <= x2 <= 1):
        raise ValueError(f"Bezier x values must be in [0, 1], got {x1}, {x2}")

    if x1 == y1 and x2 == y2:
        return lambda x: min(1.0, max(0.0, float(x)))

    def ease(x: float) -> float:
        if x <= 0:
            return 0.0
        if x >= 1:
            return 1.0
        t = brentq(lambda t: _bezier(t, x1, x2) - x, 0.0, 1.0, xtol=SOLVE_TOLERANCE)
        return _bezier(t, y1, y2)

    return ease


# =============================================================================
# Transposition
# =============================================================================

def transpose_progression_start(to: float, values: Sequence[float],
                                curve: EasingCurve) -> list[float]:
    """
    Shift a progression so it starts at `to`, tapering the shift with curve.

    Value i moves by (values[0] - to) * ease(1 - i / last).
    """
    if not values:
        return []
    if len(values) == 1:
        return [to]

    ease = bezier_easing(*curve)
    last = len(values) - 1
    diff = values[0] - to
    return [value - diff * ease(1 - i / last) for i, value in enumerate(values)]


def dark_easing(curve: EasingCurve, background_lightness: float,
                reference_lightness: float, max_ratio: float = 1.5) -> EasingCurve:
    """
    Flatten the dark-mode curve when the background is lighter than step 1.

    The curve fades towards linear as background / step-1 lightness grows
    and is fully linear from max_ratio on.
    """
    if reference_lightness <= 1e-9:
        ratio = math.inf if background_lightness > reference_lightness else 1.0
    else:
        ratio = background_lightness / reference_lightness

    if ratio <= 1:
        return tuple(curve)
    if ratio > max_ratio:
        return (0.0, 0.0, 0.0, 0.0)

    fade = (ratio - 1) * (max_ratio / (max_ratio - 1))
    return tuple(max(0.0, p * (1 - fade)) for p in curve)


def transpose_scale(scale: Scale, background: Color, appearance: str,
                    settings: ScaleSettings = DEFAULT_SETTINGS) -> Scale:
    """
    Re-anchor a scale's lightness progression to the background.

    Light: a virtual white step 0 is prepended and pulled onto the
    background lightness. Dark: step 1 is pulled onto the background with
    a curve that flattens for backgrounds lighter than step 1.
    """
    check_appearance(appearance)
    background_lightness = min(1.0, max(0.0, background.lightness))
    lightness = [color.lightness for color in scale]

    if appearance == 'light':
        transposed = transpose_progression_start(
            background_lightness, [1.0, *lightness], settings.light_easing
        )[1:]
    else:
        curve = dark_easing(
            settings.dark_easing, background_lightness, lightness[0],
            settings.dark_easing_max_ratio,
        )
        logger.debug("Dark easing curve %s", curve)
        transposed = transpose_progression_start(background_lightness, lightness, curve)

    return tuple(replace(color, lightness=value) for color, value in zip(scale, transposed))


# =============================================================================
# Inspection
# =============================================================================

def lightness_inversions(scale_hex: Sequence[str], appearance: str) -> list[tuple[int, int]]:
    """
    Adjacent steps whose lightness runs against the appearance's direction.

    Light scales should darken step by step and dark scales lighten. The
    generator does not enforce this, so saturated inputs can produce e.g. a
    step 9 lighter than step 8.

    Returns:
        1-based (step, next_step) pairs that invert.
    """
    check_appearance(appearance)
    values = [hex_to_oklch(h).lightness for h in scale_hex]
    inversions = []
    for i in range(len(values) - 1):
        if appearance == 'light' and values[i + 1] > values[i]:
            inversions.append((i + 1, i + 2))
        elif appearance == 'dark' and values[i + 1] < values[i]:
            inversions.append((i + 1, i + 2))
    return inversions
