#!/usr/bin/env python3
"""Debug script to trace the lightness progression of a generated accent scale."""

import argparse
import logging
import sys

from color_space import InvalidColorFormat, hex_to_oklch
from generate_scales import DEFAULT_GRAY, generate
from lightness import lightness_inversions


def trace(accent: str, appearance: str = 'light', gray: str = DEFAULT_GRAY,
          background: str | None = None) -> list[tuple[int, int]]:
    """Print every accent step with its OKLCH coordinates and return inversions."""
    result = generate(appearance, accent, gray, background)
    source = hex_to_oklch(accent)

    print(f"Source {accent}: L {source.lightness:.4f}  C {source.chroma:.4f}  H {source.hue:.1f}")
    print(f"Background {result.background} ({appearance})")
    print()

    for i, hex_color in enumerate(result.accent_scale):
        color = hex_to_oklch(hex_color)
        marker = '  <- source' if i == 8 else ''
        print(
            f"Step {i + 1:>2}: {hex_color} | L {color.lightness:.4f}  "
            f"C {color.chroma:.4f}  H {color.hue:.1f}{marker}"
        )

    inversions = lightness_inversions(result.accent_scale, appearance)
    print()
    if inversions:
        for step, next_step in inversions:
            print(f"Inversion: step {next_step} is {'lighter' if appearance == 'light' else 'darker'} than step {step}")
    else:
        print("Lightness progression is monotonic")
    return inversions


def main():
    parser = argparse.ArgumentParser(description='Trace lightness of a generated accent scale.')
    parser.add_argument('--accent', '-a', required=True, help='Accent color (hex)')
    parser.add_argument('--appearance', choices=('light', 'dark'), default='light')
    parser.add_argument('--gray', '-g', default=DEFAULT_GRAY)
    parser.add_argument('--background', '-b', default=None)
    parser.add_argument('--verbose', '-v', action='store_true')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')
    try:
        trace(args.accent, args.appearance, args.gray, args.background)
    except InvalidColorFormat as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
