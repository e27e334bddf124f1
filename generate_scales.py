#!/usr/bin/env python3
"""
Generate 12-step UI color scales from an accent, a gray and a background.

Pipeline per scale: Matching → Blending → Retinting → Lightness transposition.
The accent scale then gets its solid, hover and text steps fixed up, and
every opaque scale gets a translucent twin over the background.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Mapping

from alpha_colors import alpha_scale
from color_space import Color, hex_to_oklch, normalize_hex, oklch_to_hex
from hue_rotation import hue_rotation_scale
from lightness import transpose_scale
from reference_scales import Scale, check_appearance, palettes_for
from scale_matching import blend_closest_scales, retint_scale
from scale_settings import DEFAULT_SETTINGS, ScaleSettings
from step_colors import SOLID_STEP, finish_accent_scale, text_color

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

DEFAULT_GRAY = '#888888'
DEFAULT_BACKGROUNDS = {'light': '#ffffff', 'dark': '#000000'}
DEGENERATE_ACCENTS = ('#ffffff', '#000000')  # No hue to match; use the gray scale
NEUTRAL_ROLE = 'neutral'
SCALE_METHODS = ('blend', 'hue-rotation')


# =============================================================================
# Data Types
# =============================================================================

@dataclass(frozen=True)
class GenerationRequest:
    """Inputs for one generate() call."""
    appearance: str
    accent: str
    gray: str = DEFAULT_GRAY
    background: str | None = None


@dataclass(frozen=True)
class GenerationResult:
    """Generated scales as hex strings, step 1 first."""
    accent_scale: tuple[str, ...]
    accent_scale_alpha: tuple[str, ...]
    accent_contrast: str  # Foreground for text on accent step 9
    gray_scale: tuple[str, ...]
    gray_scale_alpha: tuple[str, ...]
    background: str

    def to_dict(self) -> dict:
        return {key: list(value) if isinstance(value, tuple) else value
                for key, value in asdict(self).items()}


# =============================================================================
# Pipeline
# =============================================================================

def scale_from_color(source: Color, scales: Mapping[str, Scale], background: Color,
                     appearance: str, settings: ScaleSettings = DEFAULT_SETTINGS) -> Scale:
    """Build a 12-step scale around source from the given reference scales."""
    blended = blend_closest_scales(source, scales, settings.gray_family_names)
    retinted = retint_scale(blended, source, settings.chroma_cap_ratio)
    return transpose_scale(retinted, background, appearance, settings)


def _to_hex(scale: Scale) -> tuple[str, ...]:
    return tuple(oklch_to_hex(color) for color in scale)


def generate(appearance: str, accent: str, gray: str = DEFAULT_GRAY,
             background: str | None = None,
             settings: ScaleSettings = DEFAULT_SETTINGS) -> GenerationResult:
    """
    Generate accent and gray scales with their alpha twins.

    Args:
        appearance: 'light' or 'dark'
        accent: Brand/accent hex color
        gray: Hex color the neutral scale is matched to
        background: Page background hex; defaults to white or black by appearance
        settings: Easing curves and thresholds

    Returns:
        GenerationResult with 12 hex colors per scale.

    Raises:
        InvalidColorFormat: If a color is not valid hex (names the field)
        ValueError: If appearance is not 'light' or 'dark'
    """
    check_appearance(appearance)
    accent_hex = normalize_hex(accent, field='accent')
    gray_hex = normalize_hex(gray, field='gray')
    background_hex = normalize_hex(
        background if background is not None else DEFAULT_BACKGROUNDS[appearance],
        field='background',
    )

    library = palettes_for(appearance)
    background_color = hex_to_oklch(background_hex)
    background_out = oklch_to_hex(background_color)

    gray_base = hex_to_oklch(gray_hex)
    gray_scale = scale_from_color(
        gray_base, library.gray_scales, background_color, appearance, settings
    )

    accent_base = hex_to_oklch(accent_hex)
    if oklch_to_hex(accent_base) in DEGENERATE_ACCENTS:
        logger.debug("Accent %s has no hue, using the gray scale", accent_hex)
        accent_scale = gray_scale
        accent_contrast = text_color(accent_scale[SOLID_STEP], settings.text_contrast_threshold)
    else:
        accent_scale = scale_from_color(
            accent_base, library.all_scales, background_color, appearance, settings
        )
        accent_scale, accent_contrast = finish_accent_scale(accent_scale, accent_base, settings)

    accent_scale_hex = _to_hex(accent_scale)
    gray_scale_hex = _to_hex(gray_scale)

    return GenerationResult(
        accent_scale=accent_scale_hex,
        accent_scale_alpha=alpha_scale(accent_scale_hex, background_out),
        accent_contrast=oklch_to_hex(accent_contrast),
        gray_scale=gray_scale_hex,
        gray_scale_alpha=alpha_scale(gray_scale_hex, background_out),
        background=background_out,
    )


def generate_request(request: GenerationRequest,
                     settings: ScaleSettings = DEFAULT_SETTINGS) -> GenerationResult:
    return generate(request.appearance, request.accent, request.gray,
                    request.background, settings)


# =============================================================================
# Convenience
# =============================================================================

def generate_scale(base_color: str, appearance: str = 'light', scale_type: str = 'accent',
                   background: str | None = None,
                   settings: ScaleSettings = DEFAULT_SETTINGS,
                   method: str = 'blend', max_chroma: bool = False,
                   lock_color: bool = True) -> tuple[str, ...]:
    """
    A single 12-step scale: the accent scale, or the gray scale for scale_type='gray'.

    method='blend' runs the full matching pipeline. method='hue-rotation'
    rotates a fixed base scale to base_color's hue instead; max_chroma and
    lock_color only apply there.
    """
    if scale_type not in ('accent', 'gray'):
        raise ValueError(f"Unknown scale type: {scale_type!r}")
    if method not in SCALE_METHODS:
        raise ValueError(f"Unknown method: {method!r} (expected one of {', '.join(SCALE_METHODS)})")

    if method == 'hue-rotation':
        check_appearance(appearance)
        if background is None:
            background = DEFAULT_BACKGROUNDS[appearance]
        rotated = hue_rotation_scale(
            base_color, appearance, background, neutral=scale_type == 'gray',
            max_chroma=max_chroma, lock_color=lock_color,
        )
        return tuple(rotated['scale'])

    gray = base_color if scale_type == 'gray' else DEFAULT_GRAY
    result = generate(appearance, base_color, gray, background, settings)
    return result.gray_scale if scale_type == 'gray' else result.accent_scale


def generate_palette(semantic_colors: Mapping[str, str], appearance: str = 'light',
                     background: str | None = None,
                     settings: ScaleSettings = DEFAULT_SETTINGS) -> dict[str, dict]:
    """
    Scales for a set of semantic roles (brand, success, warning, error, ...).

    Every role is generated as an accent over the 'neutral' gray; the
    'neutral' role itself gets the gray scale.

    Returns:
        Mapping role -> {'scale': [...], 'alpha': [...]}.
    """
    if not semantic_colors:
        raise ValueError("semantic_colors must name at least one role")
    neutral = semantic_colors.get(NEUTRAL_ROLE, DEFAULT_GRAY)

    palette = {}
    for role, color in semantic_colors.items():
        result = generate(appearance, color, neutral, background, settings)
        if role == NEUTRAL_ROLE:
            palette[role] = {'scale': list(result.gray_scale),
                             'alpha': list(result.gray_scale_alpha)}
        else:
            palette[role] = {'scale': list(result.accent_scale),
                             'alpha': list(result.accent_scale_alpha)}
    return palette


def generate_themes(accent: str, gray: str = DEFAULT_GRAY,
                    backgrounds: Mapping[str, str] | None = None,
                    settings: ScaleSettings = DEFAULT_SETTINGS) -> dict[str, GenerationResult]:
    """Light and dark results for the same accent and gray."""
    backgrounds = {**DEFAULT_BACKGROUNDS, **(backgrounds or {})}
    return {
        appearance: generate(appearance, accent, gray, backgrounds[appearance], settings)
        for appearance in ('light', 'dark')
    }


# =============================================================================
# CLI
# =============================================================================

def format_result(result: GenerationResult) -> str:
    """Plain-text table of a result."""
    lines = [f"background {result.background}   accent contrast {result.accent_contrast}", '']
    lines.append(f"{'step':>4}  {'accent':<9} {'accent α':<11} {'gray':<9} {'gray α':<11}")
    for i in range(len(result.accent_scale)):
        lines.append(
            f"{i + 1:>4}  {result.accent_scale[i]:<9} {result.accent_scale_alpha[i]:<11} "
            f"{result.gray_scale[i]:<9} {result.gray_scale_alpha[i]:<11}"
        )
    return '\n'.join(lines)


def main(argv: list[str] | None = None) -> int:
    import argparse
    import json
    import sys

    from scale_settings import load_settings

    parser = argparse.ArgumentParser(
        description='Generate 12-step accent and gray color scales.'
    )
    parser.add_argument('--accent', '-a', required=True, help='Accent color (hex)')
    parser.add_argument('--gray', '-g', default=DEFAULT_GRAY, help='Gray color (hex)')
    parser.add_argument(
        '--background', '-b',
        default=None,
        help='Background color (hex). Defaults to white (light) or black (dark).'
    )
    parser.add_argument('--appearance', choices=('light', 'dark'), default='light')
    parser.add_argument('--json', action='store_true', help='Print JSON instead of a table')
    parser.add_argument('--config', default=None, help='YAML settings file')
    parser.add_argument('--swatches', default=None, help='Write a swatch preview PNG')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        settings = load_settings(args.config)
        result = generate(args.appearance, args.accent, args.gray, args.background, settings)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(format_result(result))

    if args.swatches:
        from swatches import visualize_scales

        try:
            visualize_scales(result, args.swatches)
            print(f"\nWrote: {args.swatches}")
        except OSError as e:
            print(f"Error writing swatches: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == '__main__':
    raise SystemExit(main())
