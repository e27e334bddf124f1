#!/usr/bin/env python3
"""Swatch preview images for generated scales."""

import logging

from PIL import Image, ImageDraw

from color_space import hex_to_rgb

logger = logging.getLogger(__name__)


def _rgba(hex_color: str) -> tuple[int, int, int, int]:
    digits = hex_color.lstrip('#')
    alpha = int(digits[6:8], 16) if len(digits) == 8 else 255
    return (*hex_to_rgb(hex_color), alpha)


def visualize_scales(result, output_path: str) -> None:
    """
    Draw accent and gray scales, opaque and alpha, as rows of swatches.

    Alpha rows are composited over the result's background, so each should
    look identical to the opaque row above it.

    Args:
        result: GenerationResult from generate_scales.generate()
        output_path: Path to save the PNG
    """
    rows = [
        ('accent', result.accent_scale),
        ('accent α', result.accent_scale_alpha),
        ('gray', result.gray_scale),
        ('gray α', result.gray_scale_alpha),
    ]
    swatch_size = 48
    padding = 8
    label_width = 70
    text_height = 16
    steps = max(len(scale) for _, scale in rows)

    img_width = label_width + steps * (swatch_size + padding) + padding
    img_height = text_height + len(rows) * (swatch_size + padding) + padding

    background = _rgba(result.background)
    img = Image.new('RGBA', (img_width, img_height), background)
    overlay = Image.new('RGBA', img.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    label_fill = _rgba(result.gray_scale[11])

    for col in range(steps):
        x = label_width + col * (swatch_size + padding)
        draw.text((x + swatch_size // 2 - 4, 2), str(col + 1), fill=label_fill)

    for row, (name, scale) in enumerate(rows):
        y = text_height + row * (swatch_size + padding)
        draw.text((padding, y + swatch_size // 2 - 5), name, fill=label_fill)
        for col, hex_color in enumerate(scale):
            x = label_width + col * (swatch_size + padding)
            draw.rectangle([x, y, x + swatch_size, y + swatch_size], fill=_rgba(hex_color))

    Image.alpha_composite(img, overlay).convert('RGB').save(output_path)
    logger.info("Saved swatches to %s", output_path)
