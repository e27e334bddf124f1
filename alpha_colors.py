#!/usr/bin/env python3
"""
Translucent twins of opaque colors.

For a target color over a known background, find the RGBA color that
composites back to the target after browsers round to 8-bit channels.
"""

import math
from typing import Sequence

from color_space import hex_to_rgb, rgb_to_hex, round_half_up


def blend_alpha(foreground: float, alpha: float, background: float, rounded: bool = True) -> float:
    """Composite one channel the way browsers do (each term rounded)."""
    if rounded:
        return round_half_up(background * (1 - alpha)) + round_half_up(foreground * alpha)
    return background * (1 - alpha) + foreground * alpha


def _safe_ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator != 0 else 0.0


# =============================================================================
# Exact Solving
# =============================================================================

def _composites_exactly(rgb: Sequence[int], alpha: float,
                        background: Sequence[int], target: Sequence[int]) -> bool:
    return all(blend_alpha(c, alpha, b) == t for c, b, t in zip(rgb, background, target))


def _channel_for(needed: int, alpha: float, rgb_precision: int) -> int | None:
    """Foreground channel whose rounded contribution at alpha equals needed."""
    guess = round_half_up(needed / alpha)
    for value in (guess, guess - 1, guess + 1):
        if 0 <= value <= rgb_precision and round_half_up(value * alpha) == needed:
            return value
    return None


def _solve_from_alpha(target: Sequence[int], background: Sequence[int], first_step: int,
                      rgb_precision: int, alpha_precision: int) -> tuple[list[int], float]:
    """
    Walk up the alpha grid from first_step until every channel composites
    exactly. Alpha 1 with the target itself always does.
    """
    for step in range(max(1, first_step), alpha_precision):
        alpha = step / alpha_precision
        rgb = []
        for t, b in zip(target, background):
            value = _channel_for(t - round_half_up(b * (1 - alpha)), alpha, rgb_precision)
            if value is None:
                break
            rgb.append(value)
        else:
            return rgb, alpha
    return list(target), 1.0


# =============================================================================
# Alpha Colors
# =============================================================================

def alpha_color(target_rgb: Sequence[float], background_rgb: Sequence[float],
                rgb_precision: int = 255, alpha_precision: int = 255,
                target_alpha: float | None = None) -> tuple[float, float, float, float]:
    """
    Solve for an RGBA color reproducing target over background.

    Starts from the smallest alpha any channel needs. When clamping or
    rounding keeps that solution from compositing back to the target
    exactly (targets lighter than the background in one channel and
    darker in another), alpha is raised one grid step at a time.

    Args:
        target_rgb: Opaque target channels in [0, 1]
        background_rgb: Background channels in [0, 1]
        rgb_precision: Channel grid (255 for 8-bit sRGB, 1000 for wide gamut)
        alpha_precision: Alpha grid
        target_alpha: Start from this alpha instead of the smallest candidate

    Returns:
        (r, g, b, a) with every component in [0, 1].
    """
    target = [round_half_up(c * rgb_precision) for c in target_rgb]
    background = [round_half_up(c * rgb_precision) for c in background_rgb]
    tr, tg, tb = target
    br, bg, bb = background

    # Lighten towards white if any channel is above the background, else darken
    desired = rgb_precision if (tr > br or tg > bg or tb > bb) else 0

    alpha_r = _safe_ratio(tr - br, desired - br)
    alpha_g = _safe_ratio(tg - bg, desired - bg)
    alpha_b = _safe_ratio(tb - bb, desired - bb)

    # Pure shades of the endpoint, when they land exactly on the alpha grid
    if target_alpha is None and alpha_r == alpha_g == alpha_b:
        grid_alpha = round_half_up(alpha_r * alpha_precision) / alpha_precision
        if _composites_exactly([desired] * 3, grid_alpha, background, target):
            value = desired / rgb_precision
            return value, value, value, alpha_r

    def clamp_rgb(n: float) -> float:
        return min(rgb_precision, max(0, n))

    def clamp_alpha(n: float) -> float:
        return min(alpha_precision, max(0, n))

    max_alpha = target_alpha if target_alpha is not None else max(alpha_r, alpha_g, alpha_b)
    alpha_step = clamp_alpha(math.ceil(round(max_alpha * alpha_precision, 9)))
    a = alpha_step / alpha_precision

    r = math.ceil(clamp_rgb(_safe_ratio(tr - br * (1 - a), a)))
    g = math.ceil(clamp_rgb(_safe_ratio(tg - bg * (1 - a), a)))
    b = math.ceil(clamp_rgb(_safe_ratio(tb - bb * (1 - a), a)))

    blended_r = blend_alpha(r, a, br)
    blended_g = blend_alpha(g, a, bg)
    blended_b = blend_alpha(b, a, bb)

    # Correct rounding errors for the channels moving towards the endpoint
    if desired == 0:
        if tr <= br and tr != blended_r:
            r = r + 1 if tr > blended_r else r - 1
        if tg <= bg and tg != blended_g:
            g = g + 1 if tg > blended_g else g - 1
        if tb <= bb and tb != blended_b:
            b = b + 1 if tb > blended_b else b - 1
    else:
        if tr >= br and tr != blended_r:
            r = r + 1 if tr > blended_r else r - 1
        if tg >= bg and tg != blended_g:
            g = g + 1 if tg > blended_g else g - 1
        if tb >= bb and tb != blended_b:
            b = b + 1 if tb > blended_b else b - 1

    rgb = [clamp_rgb(r), clamp_rgb(g), clamp_rgb(b)]
    if not _composites_exactly(rgb, a, background, target):
        rgb, a = _solve_from_alpha(target, background, alpha_step + 1,
                                   rgb_precision, alpha_precision)

    return (
        rgb[0] / rgb_precision,
        rgb[1] / rgb_precision,
        rgb[2] / rgb_precision,
        a,
    )


def alpha_color_srgb(target_hex: str, background_hex: str,
                     target_alpha: float | None = None) -> str:
    """8-bit alpha twin of target over background as '#rrggbbaa'."""
    target = [c / 255 for c in hex_to_rgb(target_hex)]
    background = [c / 255 for c in hex_to_rgb(background_hex)]
    r, g, b, a = alpha_color(target, background, 255, 255, target_alpha)
    return rgb_to_hex(*(round_half_up(c * 255) for c in (r, g, b, a)))


def alpha_scale(scale_hex: Sequence[str], background_hex: str) -> tuple[str, ...]:
    """Alpha twin of every step in a scale."""
    return tuple(alpha_color_srgb(color, background_hex) for color in scale_hex)


def composite_hex(rgba_hex: str, background_hex: str) -> str:
    """Opaque color a browser shows for rgba_hex painted over background_hex."""
    digits = rgba_hex.lstrip('#')
    alpha = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
    foreground = hex_to_rgb(rgba_hex)
    background = hex_to_rgb(background_hex)
    return rgb_to_hex(*(blend_alpha(f, alpha, b) for f, b in zip(foreground, background)))
