#!/usr/bin/env python3
"""
Match a source color against reference scales and blend a scale around it.

Pipeline:
1. Find the closest step of every reference scale to the source
2. Keep the two closest scales, skipping extra neutrals when a hue exists
3. Derive a mix ratio from the triangle source / match A / match B
4. Blend the two scales step by step in OKLCH
5. Retint the blend to the source's hue and relative chroma
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Iterable, Mapping, Sequence

import numpy as np

from color_space import Color, delta_e_ok, mix_oklch
from reference_scales import STEP_COUNT, Scale

logger = logging.getLogger(__name__)

DEGENERATE_EPSILON = 1e-9  # Side lengths below this are treated as zero
COLLINEAR_SINE = 1e-6  # Angle sines below this mean source, A and B are collinear


@dataclass(frozen=True)
class ScaleMatch:
    """Closest step of one reference scale to the source."""
    scale: str
    step: int  # 0-based step index
    distance: float
    color: Color


def closest_color(source: Color, colors: Iterable[Color]) -> Color:
    """Perceptually closest color to source. Earlier colors win ties."""
    best, best_distance = None, math.inf
    for color in colors:
        distance = delta_e_ok(source, color)
        if distance < best_distance:
            best, best_distance = color, distance
    if best is None:
        raise ValueError("No candidate colors to match against")
    return best


def closest_scale_matches(source: Color, scales: Mapping[str, Scale],
                          gray_family_names: Sequence[str] = ()) -> list[ScaleMatch]:
    """
    Rank reference scales by the distance of their closest step to source.

    If the closest scale is a neutral but not every scale is, neutrals in
    second place are dropped so the runner-up is a hue family.

    Returns:
        One ScaleMatch per remaining scale, closest first.
    """
    matches = []
    for name, scale in scales.items():
        distances = [delta_e_ok(source, color) for color in scale]
        step = int(np.argmin(distances))
        matches.append(ScaleMatch(name, step, distances[step], scale[step]))

    if not matches:
        raise ValueError("No reference scales to match against")
    matches.sort(key=lambda m: m.distance)

    grays = set(gray_family_names)
    all_grays = all(m.scale in grays for m in matches)
    if not all_grays and matches[0].scale in grays:
        while len(matches) > 1 and matches[1].scale in grays:
            del matches[1]

    return matches


def blend_ratio(match_a: ScaleMatch, match_b: ScaleMatch) -> float:
    """
    How much of scale B to mix into scale A, in [0, 0.5].

    The source and the two matched colors form a triangle. The ratio is
    half the quotient of the cotangents of the angles at A and B, which is
    the ratio of the source's foot point distances from A and from B along
    the segment AB. A source sitting on A gives 0; one equidistant from both
    gives 0.5.
    """
    side_a = match_b.distance  # opposite A
    side_b = match_a.distance  # opposite B
    side_c = delta_e_ok(match_a.color, match_b.color)

    if side_b < DEGENERATE_EPSILON or side_c < DEGENERATE_EPSILON:
        return 0.0

    cos_a = np.clip((side_b ** 2 + side_c ** 2 - side_a ** 2) / (2 * side_b * side_c), -1.0, 1.0)
    cos_b = np.clip((side_a ** 2 + side_c ** 2 - side_b ** 2) / (2 * side_a * side_c), -1.0, 1.0)
    sin_a = math.sin(math.acos(cos_a))
    sin_b = math.sin(math.acos(cos_b))

    if sin_a < COLLINEAR_SINE or sin_b < COLLINEAR_SINE:
        # Collinear: fall back to the foot point distances directly
        from_a = (side_b ** 2 + side_c ** 2 - side_a ** 2) / (2 * side_c)
        from_b = side_c - from_a
        if from_b < DEGENERATE_EPSILON:
            return 0.0
        return max(0.0, from_a / from_b) * 0.5

    cot_a = cos_a / sin_a
    cot_b = cos_b / sin_b
    if cot_b < DEGENERATE_EPSILON:
        return 0.0
    return float(max(0.0, cot_a / cot_b) * 0.5)


def blend_scales(scale_a: Scale, scale_b: Scale, ratio: float) -> Scale:
    """Mix two scales step by step; ratio=0 returns scale A."""
    if len(scale_a) != STEP_COUNT or len(scale_b) != STEP_COUNT:
        raise ValueError(f"Scales must have {STEP_COUNT} steps")
    return tuple(mix_oklch(a, b, ratio) for a, b in zip(scale_a, scale_b))


def blend_closest_scales(source: Color, scales: Mapping[str, Scale],
                         gray_family_names: Sequence[str] = ()) -> Scale:
    """Blend the two reference scales closest to source."""
    matches = closest_scale_matches(source, scales, gray_family_names)
    match_a = matches[0]
    if len(matches) == 1:
        logger.debug("Single reference scale %r, no blending", match_a.scale)
        return tuple(scales[match_a.scale])

    match_b = matches[1]
    ratio = blend_ratio(match_a, match_b)
    logger.debug(
        "Closest scales %s[%d] (%.4f) and %s[%d] (%.4f), blend ratio %.4f",
        match_a.scale, match_a.step + 1, match_a.distance,
        match_b.scale, match_b.step + 1, match_b.distance, ratio,
    )
    return blend_scales(scales[match_a.scale], scales[match_b.scale], ratio)


def retint_scale(scale: Scale, source: Color, chroma_cap_ratio: float = 1.5) -> Scale:
    """
    Give every step the source's hue and rescale chroma relative to source.

    Chroma is scaled by source / closest-step chroma and capped at
    chroma_cap_ratio times the source chroma. Lightness is untouched.
    """
    base = closest_color(source, scale)
    chroma_ratio = source.chroma / base.chroma if base.chroma > DEGENERATE_EPSILON else 1.0
    chroma_cap = source.chroma * chroma_cap_ratio

    return tuple(
        replace(color, chroma=min(chroma_cap, color.chroma * chroma_ratio), hue=source.hue)
        for color in scale
    )
