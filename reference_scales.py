#!/usr/bin/env python3
"""
Reference 12-step scales used as shape donors for generated scales.

The values are Display P3 coordinates of the Radix Colors reference scales,
one set per appearance. They convert to OKLCH once per process and are
shared read-only afterwards.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

import numpy as np

from color_space import Color, display_p3_to_oklab, oklab_to_oklch

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

APPEARANCES = ('light', 'dark')
STEP_COUNT = 12
GRAY_SCALE_NAMES = ('gray', 'slate')  # Neutral scales matched against gray inputs

Scale = tuple[Color, ...]


# =============================================================================
# Display P3 Reference Data
# =============================================================================

LIGHT_SCALES_P3 = {
    'gray': (
        (0.988, 0.988, 0.988),
        (0.975, 0.975, 0.975),
        (0.939, 0.939, 0.939),
        (0.908, 0.908, 0.908),
        (0.88, 0.88, 0.88),
        (0.849, 0.849, 0.849),
        (0.807, 0.807, 0.807),
        (0.732, 0.732, 0.732),
        (0.553, 0.553, 0.553),
        (0.512, 0.512, 0.512),
        (0.392, 0.392, 0.392),
        (0.125, 0.125, 0.125),
    ),
    'slate': (
        (0.988, 0.988, 0.992),
        (0.976, 0.976, 0.984),
        (0.94, 0.941, 0.953),
        (0.908, 0.909, 0.925),
        (0.88, 0.881, 0.901),
        (0.85, 0.852, 0.876),
        (0.805, 0.808, 0.838),
        (0.727, 0.733, 0.773),
        (0.547, 0.553, 0.592),
        (0.503, 0.512, 0.549),
        (0.379, 0.392, 0.421),
        (0.113, 0.125, 0.14),
    ),
    'red': (
        (0.998, 0.989, 0.988),
        (0.995, 0.971, 0.971),
        (0.985, 0.925, 0.925),
        (0.999, 0.866, 0.866),
        (0.984, 0.812, 0.811),
        (0.955, 0.751, 0.749),
        (0.915, 0.675, 0.672),
        (0.872, 0.575, 0.572),
        (0.83, 0.329, 0.324),
        (0.798, 0.294, 0.285),
        (0.744, 0.234, 0.222),
        (0.36, 0.115, 0.143),
    ),
    'blue': (
        (0.986, 0.992, 0.999),
        (0.96, 0.979, 0.998),
        (0.912, 0.956, 0.991),
        (0.853, 0.932, 1),
        (0.788, 0.894, 0.998),
        (0.709, 0.843, 0.976),
        (0.606, 0.777, 0.947),
        (0.451, 0.688, 0.917),
        (0.247, 0.556, 0.969),
        (0.234, 0.523, 0.912),
        (0.15, 0.44, 0.84),
        (0.102, 0.193, 0.379),
    ),
    'green': (
        (0.986, 0.996, 0.989),
        (0.963, 0.983, 0.967),
        (0.913, 0.964, 0.925),
        (0.859, 0.94, 0.879),
        (0.796, 0.907, 0.826),
        (0.718, 0.863, 0.761),
        (0.61, 0.801, 0.675),
        (0.451, 0.715, 0.559),
        (0.332, 0.634, 0.442),
        (0.308, 0.595, 0.417),
        (0.19, 0.5, 0.32),
        (0.132, 0.228, 0.18),
    ),
    'orange': (
        (0.995, 0.991, 0.987),
        (0.992, 0.975, 0.964),
        (0.995, 0.934, 0.895),
        (1, 0.888, 0.824),
        (0.999, 0.842, 0.755),
        (0.983, 0.793, 0.686),
        (0.955, 0.732, 0.607),
        (0.917, 0.651, 0.503),
        (0.903, 0.514, 0.29),
        (0.877, 0.474, 0.264),
        (0.743, 0.346, 0.178),
        (0.387, 0.208, 0.131),
    ),
    'yellow': (
        (0.995, 0.993, 0.98),
        (0.998, 0.988, 0.93),
        (0.996, 0.962, 0.81),
        (1, 0.944, 0.694),
        (0.992, 0.92, 0.609),
        (0.976, 0.887, 0.538),
        (0.948, 0.836, 0.462),
        (0.907, 0.759, 0.369),
        (0.998, 0.782, 0),
        (0.947, 0.718, 0.037),
        (0.708, 0.494, 0.001),
        (0.377, 0.284, 0.13),
    ),
    'purple': (
        (0.994, 0.991, 0.998),
        (0.984, 0.978, 0.995),
        (0.962, 0.948, 0.995),
        (0.935, 0.916, 0.995),
        (0.901, 0.879, 0.984),
        (0.857, 0.832, 0.963),
        (0.798, 0.768, 0.929),
        (0.717, 0.682, 0.883),
        (0.618, 0.561, 0.865),
        (0.583, 0.522, 0.834),
        (0.524, 0.456, 0.763),
        (0.282, 0.214, 0.464),
    ),
}

DARK_SCALES_P3 = {
    'gray': (
        (0.068, 0.068, 0.068),
        (0.083, 0.083, 0.083),
        (0.115, 0.115, 0.115),
        (0.141, 0.141, 0.141),
        (0.165, 0.165, 0.165),
        (0.191, 0.191, 0.191),
        (0.226, 0.226, 0.226),
        (0.285, 0.285, 0.285),
        (0.414, 0.414, 0.414),
        (0.46, 0.46, 0.46),
        (0.634, 0.634, 0.634),
        (0.927, 0.927, 0.927),
    ),
    'slate': (
        (0.067, 0.07, 0.075),
        (0.082, 0.086, 0.094),
        (0.113, 0.119, 0.134),
        (0.139, 0.145, 0.165),
        (0.163, 0.17, 0.194),
        (0.189, 0.198, 0.226),
        (0.224, 0.236, 0.271),
        (0.282, 0.299, 0.347),
        (0.412, 0.433, 0.486),
        (0.458, 0.481, 0.536),
        (0.632, 0.655, 0.704),
        (0.927, 0.935, 0.947),
    ),
    'red': (
        (0.086, 0.061, 0.064),
        (0.101, 0.066, 0.071),
        (0.143, 0.076, 0.086),
        (0.178, 0.082, 0.096),
        (0.206, 0.093, 0.109),
        (0.238, 0.111, 0.128),
        (0.281, 0.143, 0.161),
        (0.347, 0.197, 0.217),
        (0.83, 0.329, 0.324),
        (0.856, 0.402, 0.393),
        (0.95, 0.584, 0.567),
        (0.988, 0.826, 0.819),
    ),
    'blue': (
        (0.055, 0.082, 0.125),
        (0.067, 0.098, 0.153),
        (0.068, 0.152, 0.267),
        (0.053, 0.193, 0.369),
        (0.066, 0.237, 0.439),
        (0.105, 0.285, 0.504),
        (0.163, 0.344, 0.587),
        (0.205, 0.415, 0.702),
        (0.247, 0.556, 0.969),
        (0.3, 0.601, 0.983),
        (0.503, 0.713, 0.996),
        (0.792, 0.891, 1),
    ),
    'green': (
        (0.055, 0.077, 0.062),
        (0.063, 0.092, 0.074),
        (0.072, 0.135, 0.098),
        (0.074, 0.172, 0.118),
        (0.085, 0.206, 0.143),
        (0.109, 0.245, 0.173),
        (0.149, 0.296, 0.215),
        (0.208, 0.366, 0.276),
        (0.332, 0.634, 0.442),
        (0.397, 0.677, 0.499),
        (0.547, 0.781, 0.634),
        (0.797, 0.918, 0.851),
    ),
    'orange': (
        (0.084, 0.069, 0.059),
        (0.099, 0.079, 0.065),
        (0.139, 0.099, 0.073),
        (0.175, 0.115, 0.077),
        (0.207, 0.134, 0.085),
        (0.243, 0.158, 0.099),
        (0.293, 0.192, 0.124),
        (0.372, 0.248, 0.167),
        (0.903, 0.514, 0.29),
        (0.949, 0.591, 0.352),
        (0.997, 0.746, 0.572),
        (0.998, 0.909, 0.822),
    ),
    'yellow': (
        (0.081, 0.077, 0.049),
        (0.096, 0.089, 0.055),
        (0.132, 0.116, 0.055),
        (0.165, 0.141, 0.051),
        (0.196, 0.167, 0.053),
        (0.232, 0.197, 0.061),
        (0.283, 0.237, 0.078),
        (0.367, 0.303, 0.112),
        (0.998, 0.782, 0),
        (1, 0.821, 0.126),
        (0.996, 0.895, 0.566),
        (0.996, 0.962, 0.81),
    ),
    'purple': (
        (0.083, 0.071, 0.095),
        (0.095, 0.08, 0.113),
        (0.123, 0.095, 0.164),
        (0.147, 0.106, 0.208),
        (0.172, 0.123, 0.251),
        (0.203, 0.148, 0.299),
        (0.249, 0.189, 0.365),
        (0.32, 0.254, 0.463),
        (0.618, 0.561, 0.865),
        (0.666, 0.609, 0.897),
        (0.78, 0.73, 0.967),
        (0.933, 0.916, 0.996),
    ),
}


# =============================================================================
# Library
# =============================================================================

@dataclass(frozen=True)
class ReferenceLibrary:
    """Reference scales for one appearance."""
    appearance: str
    all_scales: Mapping[str, Scale]  # Every hue family, grays included
    gray_scales: Mapping[str, Scale]  # Neutral families only

    def all_colors(self) -> list[Color]:
        return [color for scale in self.all_scales.values() for color in scale]


def check_appearance(appearance: str) -> str:
    """Validate an appearance name."""
    if appearance not in APPEARANCES:
        raise ValueError(
            f"Unknown appearance: {appearance!r} (expected one of {', '.join(APPEARANCES)})"
        )
    return appearance


def convert_scales(scales_p3: Mapping[str, tuple]) -> dict[str, Scale]:
    """Convert named Display P3 scales to OKLCH in a single pass."""
    names = list(scales_p3)
    p3 = np.array([scales_p3[name] for name in names], dtype=np.float64)
    if p3.shape[1:] != (STEP_COUNT, 3):
        raise ValueError(f"Reference scales must have {STEP_COUNT} steps, got shape {p3.shape}")

    lch = oklab_to_oklch(display_p3_to_oklab(p3.reshape(-1, 3)))
    lch = lch.reshape(len(names), STEP_COUNT, 3)
    return {
        name: tuple(Color.from_array(row) for row in lch[i])
        for i, name in enumerate(names)
    }


@lru_cache(maxsize=None)
def palettes_for(appearance: str) -> ReferenceLibrary:
    """
    Reference library for an appearance, built on first use.

    Raises:
        ValueError: If appearance is not 'light' or 'dark'.
    """
    check_appearance(appearance)
    source = LIGHT_SCALES_P3 if appearance == 'light' else DARK_SCALES_P3
    scales = convert_scales(source)
    logger.debug("Loaded %d %s reference scales", len(scales), appearance)

    return ReferenceLibrary(
        appearance=appearance,
        all_scales=MappingProxyType(scales),
        gray_scales=MappingProxyType({name: scales[name] for name in GRAY_SCALE_NAMES}),
    )
