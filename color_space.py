#!/usr/bin/env python3
"""
Color space conversions for scale generation.

Colors travel through the pipeline as OKLCH points. Conversions between
sRGB, Display P3, XYZ (D65), OKLab and OKLCH operate on (N, 3) float arrays
so whole scales convert in one matrix product.
"""

import colorsys
import logging
import math
import re
from dataclasses import dataclass, replace

import numpy as np

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

ACHROMATIC_CHROMA = 2e-4  # Below this OKLCH chroma the hue is undefined (nan)
GAMUT_EPSILON = 0.000075  # Tolerance when testing sRGB coordinates for gamut
GAMUT_JND = 0.02  # deltaE OK below which a clipped color is acceptable
GAMUT_SEARCH_EPSILON = 0.0001  # Chroma resolution of the gamut mapping search

# APCA 0.0.98G-4g constants
APCA_NORM_BG = 0.56
APCA_NORM_TXT = 0.57
APCA_REV_TXT = 0.62
APCA_REV_BG = 0.65
APCA_BLACK_THRESHOLD = 0.022
APCA_BLACK_CLAMP = 1.414
APCA_LOW_CLIP = 0.1
APCA_DELTA_Y_MIN = 0.0005
APCA_SCALE = 1.14
APCA_LOW_OFFSET = 0.027

SRGB_TO_XYZ = np.array([
    [0.41239079926595934, 0.357584339383878, 0.1804807884018343],
    [0.21263900587151027, 0.715168678767756, 0.07219231536073371],
    [0.01933081871559182, 0.11919477979462598, 0.9505321522496606],
])

DISPLAY_P3_TO_XYZ = np.array([
    [0.4865709486482162, 0.26566769316909306, 0.1982172852343625],
    [0.2289745640697488, 0.6917385218365064, 0.079286914093745],
    [0.0, 0.04511338185890264, 1.043944368900976],
])

XYZ_TO_LMS = np.array([
    [0.8190224379967030, 0.3619062600528904, -0.1288737815209879],
    [0.0329836539323885, 0.9292868615863434, 0.0361446663506424],
    [0.0481771893596242, 0.2642395317527308, 0.6335478284694309],
])

LMS_TO_OKLAB = np.array([
    [0.2104542683093140, 0.7936177747023054, -0.0040720430116193],
    [1.9779985324311684, -2.4285922420485799, 0.4505937096174110],
    [0.0259040424655478, 0.7827717124575296, -0.8086757549230774],
])

# Inverses are derived so that hex -> OKLCH -> hex round trips exactly
XYZ_TO_SRGB = np.linalg.inv(SRGB_TO_XYZ)
LMS_TO_XYZ = np.linalg.inv(XYZ_TO_LMS)
OKLAB_TO_LMS = np.linalg.inv(LMS_TO_OKLAB)

_HEX_PATTERN = re.compile(r'^#?([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$')


# =============================================================================
# Data Types
# =============================================================================

class InvalidColorFormat(ValueError):
    """Raised when a color string is not a 3, 4, 6 or 8 digit hex color."""

    def __init__(self, value, field: str | None = None):
        self.value = value
        self.field = field
        prefix = f"{field}: " if field else ''
        super().__init__(
            f"{prefix}invalid hex color {value!r} "
            f"(expected #rgb, #rgba, #rrggbb or #rrggbbaa)"
        )


@dataclass(frozen=True)
class Color:
    """A point in OKLCH space. Hue is nan for achromatic colors."""
    lightness: float
    chroma: float
    hue: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.lightness) or not math.isfinite(self.chroma):
            raise ValueError(
                f"Color coordinates must be finite, got L={self.lightness} C={self.chroma}"
            )
        if self.chroma < 0:
            raise ValueError(f"Chroma must be non-negative, got {self.chroma}")

    @property
    def achromatic(self) -> bool:
        return math.isnan(self.hue)

    def to_array(self) -> np.ndarray:
        return np.array([self.lightness, self.chroma, self.hue], dtype=np.float64)

    @classmethod
    def from_array(cls, lch) -> 'Color':
        return cls(float(lch[0]), float(lch[1]), float(lch[2]))


# =============================================================================
# Hex Parsing
# =============================================================================

def normalize_hex(value: str, field: str | None = None) -> str:
    """
    Canonicalize a hex color string.

    Accepts 3, 4, 6 or 8 hex digits with or without a leading '#', in any
    case. Short forms are expanded.

    Returns:
        Lowercase '#rrggbb', or '#rrggbbaa' when the input carried alpha.

    Raises:
        InvalidColorFormat: If the value is not a hex color.
    """
    if not isinstance(value, str):
        raise InvalidColorFormat(value, field)
    match = _HEX_PATTERN.match(value.strip())
    if not match:
        raise InvalidColorFormat(value, field)

    digits = match.group(1).lower()
    if len(digits) in (3, 4):
        digits = ''.join(ch * 2 for ch in digits)
    return f"#{digits}"


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Parse a hex color into 8-bit (r, g, b). Any alpha digits are ignored."""
    h = normalize_hex(hex_color)[1:]
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def rgb_to_hex(r: int, g: int, b: int, alpha: int | None = None) -> str:
    """Format 8-bit channels as '#rrggbb', or '#rrggbbaa' when alpha is given."""
    channels = [r, g, b] if alpha is None else [r, g, b, alpha]
    return '#' + ''.join(f"{max(0, min(255, int(c))):02x}" for c in channels)


def round_half_up(value: float) -> int:
    """Round like browsers do: halves go towards positive infinity."""
    return int(math.floor(value + 0.5))


# =============================================================================
# Array Conversions
# =============================================================================

def srgb_to_linear(rgb: np.ndarray) -> np.ndarray:
    """Undo the sRGB transfer function (also used by Display P3). Sign preserving."""
    rgb = np.asarray(rgb, dtype=np.float64)
    magnitude = np.abs(rgb)
    return np.where(
        magnitude <= 0.04045,
        rgb / 12.92,
        np.sign(rgb) * ((magnitude + 0.055) / 1.055) ** 2.4,
    )


def linear_to_srgb(linear: np.ndarray) -> np.ndarray:
    """Apply the sRGB transfer function. Sign preserving."""
    linear = np.asarray(linear, dtype=np.float64)
    magnitude = np.abs(linear)
    return np.where(
        magnitude > 0.0031308,
        np.sign(linear) * (1.055 * magnitude ** (1 / 2.4) - 0.055),
        12.92 * linear,
    )


def xyz_to_oklab(xyz: np.ndarray) -> np.ndarray:
    """Convert XYZ (D65) array to OKLab."""
    lms = np.atleast_2d(xyz) @ XYZ_TO_LMS.T
    return np.cbrt(lms) @ LMS_TO_OKLAB.T


def oklab_to_xyz(lab: np.ndarray) -> np.ndarray:
    """Convert OKLab array to XYZ (D65)."""
    lms = (np.atleast_2d(lab) @ OKLAB_TO_LMS.T) ** 3
    return lms @ LMS_TO_XYZ.T


def srgb_to_oklab(rgb: np.ndarray) -> np.ndarray:
    """Convert sRGB array (0-1) to OKLab."""
    return xyz_to_oklab(srgb_to_linear(np.atleast_2d(rgb)) @ SRGB_TO_XYZ.T)


def oklab_to_srgb(lab: np.ndarray) -> np.ndarray:
    """Convert OKLab array to sRGB (0-1). Out-of-gamut values are not clipped."""
    return linear_to_srgb(oklab_to_xyz(lab) @ XYZ_TO_SRGB.T)


def display_p3_to_oklab(rgb: np.ndarray) -> np.ndarray:
    """Convert Display P3 array (0-1) to OKLab."""
    return xyz_to_oklab(srgb_to_linear(np.atleast_2d(rgb)) @ DISPLAY_P3_TO_XYZ.T)


def oklab_to_oklch(lab: np.ndarray) -> np.ndarray:
    """Convert OKLab array to OKLCH. Hue is nan where chroma is negligible."""
    lab = np.atleast_2d(lab)
    chroma = np.hypot(lab[:, 1], lab[:, 2])
    hue = np.degrees(np.arctan2(lab[:, 2], lab[:, 1])) % 360
    hue = np.where(chroma < ACHROMATIC_CHROMA, np.nan, hue)
    return np.column_stack([lab[:, 0], chroma, hue])


def oklch_to_oklab(lch: np.ndarray) -> np.ndarray:
    """Convert OKLCH array to OKLab. A nan hue is read as 0."""
    lch = np.atleast_2d(lch)
    hue = np.radians(np.nan_to_num(lch[:, 2], nan=0.0))
    return np.column_stack([
        lch[:, 0],
        lch[:, 1] * np.cos(hue),
        lch[:, 1] * np.sin(hue),
    ])


# =============================================================================
# Color Conversions
# =============================================================================

def hex_to_oklch(hex_color: str, field: str | None = None) -> Color:
    """Parse a hex color (alpha ignored) into an OKLCH Color."""
    h = normalize_hex(hex_color, field)[1:]
    rgb = np.array([int(h[i:i + 2], 16) for i in (0, 2, 4)], dtype=np.float64) / 255
    return Color.from_array(oklab_to_oklch(srgb_to_oklab(rgb))[0])


def color_to_oklab(color: Color) -> np.ndarray:
    return oklch_to_oklab(color.to_array())[0]


def color_to_srgb(color: Color) -> np.ndarray:
    """Unclipped sRGB coordinates (0-1) of a color."""
    return oklab_to_srgb(color_to_oklab(color))[0]


def in_srgb_gamut(rgb: np.ndarray) -> bool:
    return bool(np.all((rgb >= -GAMUT_EPSILON) & (rgb <= 1 + GAMUT_EPSILON)))


def gamut_map_srgb(color: Color) -> np.ndarray:
    """
    Map a color into the sRGB gamut (CSS Color 4 algorithm).

    Lightness and hue are held while chroma is reduced by binary search
    until clipping the result changes it by less than a JND.

    Returns:
        sRGB coordinates in [0, 1].
    """
    if color.lightness >= 1:
        return np.ones(3)
    if color.lightness <= 0:
        return np.zeros(3)

    rgb = color_to_srgb(color)
    if in_srgb_gamut(rgb):
        return np.clip(rgb, 0, 1)

    clipped = np.clip(rgb, 0, 1)
    error = np.linalg.norm(srgb_to_oklab(clipped)[0] - color_to_oklab(color))
    if error < GAMUT_JND:
        return clipped

    low, high = 0.0, color.chroma
    low_in_gamut = True
    current = color
    while high - low > GAMUT_SEARCH_EPSILON:
        current = replace(current, chroma=(low + high) / 2)
        rgb = color_to_srgb(current)
        if low_in_gamut and in_srgb_gamut(rgb):
            low = current.chroma
            continue

        clipped = np.clip(rgb, 0, 1)
        error = np.linalg.norm(srgb_to_oklab(clipped)[0] - color_to_oklab(current))
        if error < GAMUT_JND:
            if GAMUT_JND - error < GAMUT_SEARCH_EPSILON:
                return clipped
            low_in_gamut = False
            low = current.chroma
        else:
            high = current.chroma

    return np.clip(color_to_srgb(current), 0, 1)


def oklch_to_hex(color: Color) -> str:
    """Gamut map a color into sRGB and format it as '#rrggbb'."""
    rgb = gamut_map_srgb(color)
    return rgb_to_hex(*(round_half_up(c * 255) for c in rgb))


def mix_oklch(a: Color, b: Color, weight: float) -> Color:
    """
    Interpolate between two colors in OKLCH.

    weight=0 gives a, weight=1 gives b. Hue takes the shorter arc; when one
    side is achromatic the other side's hue is used.
    """
    lightness = a.lightness + (b.lightness - a.lightness) * weight
    chroma = a.chroma + (b.chroma - a.chroma) * weight

    if a.achromatic and b.achromatic:
        hue = math.nan
    elif a.achromatic:
        hue = b.hue
    elif b.achromatic:
        hue = a.hue
    else:
        delta = ((b.hue - a.hue + 180) % 360) - 180
        hue = (a.hue + delta * weight) % 360

    return Color(lightness, max(0.0, chroma), hue)


# =============================================================================
# Distance and Contrast
# =============================================================================

def delta_e_ok(a: Color, b: Color) -> float:
    """Euclidean distance between two colors in OKLab."""
    return float(np.linalg.norm(color_to_oklab(a) - color_to_oklab(b)))


def _apca_luminance(color: Color) -> float:
    rgb = color_to_srgb(color)
    linear = np.sign(rgb) * np.abs(rgb) ** 2.4
    return float(linear @ np.array([0.2126729, 0.7151522, 0.0721750]))


def _apca_soft_clamp(y: float) -> float:
    if y >= APCA_BLACK_THRESHOLD:
        return y
    return y + (APCA_BLACK_THRESHOLD - y) ** APCA_BLACK_CLAMP


def contrast_apca(background: Color, foreground: Color) -> float:
    """
    APCA lightness contrast (Lc) of foreground text over a background.

    Positive for dark text on a light background, negative for light text
    on a dark background. Magnitude is roughly 0-106.

    Returns nan when a luminance is still negative after the black soft
    clamp, which only happens for colors far outside sRGB.
    """
    y_text = _apca_soft_clamp(_apca_luminance(foreground))
    y_back = _apca_soft_clamp(_apca_luminance(background))

    if abs(y_back - y_text) < APCA_DELTA_Y_MIN:
        return 0.0
    if y_back < 0 or y_text < 0:
        return math.nan

    if y_back > y_text:
        contrast = (y_back ** APCA_NORM_BG - y_text ** APCA_NORM_TXT) * APCA_SCALE
    else:
        contrast = (y_back ** APCA_REV_BG - y_text ** APCA_REV_TXT) * APCA_SCALE

    if abs(contrast) < APCA_LOW_CLIP:
        return 0.0
    if contrast > 0:
        return (contrast - APCA_LOW_OFFSET) * 100
    return (contrast + APCA_LOW_OFFSET) * 100


# =============================================================================
# HSL
# =============================================================================

def hex_to_hsl(hex_color: str) -> tuple[float, float, float]:
    """Convert hex to HSL with h in [0, 360) and s, l in [0, 100]."""
    r, g, b = hex_to_rgb(hex_color)
    h, l, s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
    return (h * 360) % 360, s * 100, l * 100


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """Convert HSL (h in degrees, s and l in 0-100) to hex."""
    r, g, b = colorsys.hls_to_rgb((h % 360) / 360, l / 100, s / 100)
    return rgb_to_hex(round_half_up(r * 255), round_half_up(g * 255), round_half_up(b * 255))
