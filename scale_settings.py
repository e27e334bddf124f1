#!/usr/bin/env python3
"""
Tunable constants for scale generation, optionally loaded from YAML.
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

EasingCurve = tuple[float, float, float, float]


# =============================================================================
# Validation
# =============================================================================

def _check_curve(name: str, curve) -> None:
    if len(curve) != 4:
        raise ValueError(f"{name} must have 4 control values, got {len(curve)}")
    x1, _, x2, _ = curve
    if not (0 <= x1 <= 1 and 0 <= x2 <= 1):
        raise ValueError(f"{name} x control points must be in [0, 1], got {tuple(curve)}")


def _coerce(name: str, value: Any) -> Any:
    if name in ('light_easing', 'dark_easing'):
        try:
            return tuple(float(v) for v in value)
        except (TypeError, ValueError):
            raise ValueError(f"{name} must be a list of 4 numbers, got {value!r}")
    if name == 'gray_family_names':
        if isinstance(value, str) or not isinstance(value, (list, tuple)):
            raise ValueError(f"{name} must be a list of scale names, got {value!r}")
        return tuple(str(v) for v in value)
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a number, got {value!r}")


# =============================================================================
# Settings
# =============================================================================

@dataclass(frozen=True)
class ScaleSettings:
    """Parameters passed explicitly through the generation pipeline."""
    light_easing: EasingCurve = (0.0, 2.0, 0.0, 2.0)
    dark_easing: EasingCurve = (1.0, 0.0, 1.0, 0.0)
    # Background/step-1 lightness ratio at which the dark curve is fully linear
    dark_easing_max_ratio: float = 1.5
    chroma_cap_ratio: float = 1.5
    # deltaE OK x 100 below which the source is treated as the background
    background_distance_threshold: float = 25.0
    # |APCA Lc| of white text below which a dark foreground is used
    text_contrast_threshold: float = 40.0
    gray_family_names: tuple[str, ...] = ('gray', 'mauve', 'slate', 'sage', 'olive', 'sand')

    def __post_init__(self) -> None:
        for name in ('light_easing', 'dark_easing'):
            _check_curve(name, getattr(self, name))
        if self.dark_easing_max_ratio <= 1:
            raise ValueError(f"dark_easing_max_ratio must be > 1, got {self.dark_easing_max_ratio}")
        if self.chroma_cap_ratio <= 0:
            raise ValueError(f"chroma_cap_ratio must be > 0, got {self.chroma_cap_ratio}")


DEFAULT_SETTINGS = ScaleSettings()


# =============================================================================
# Loading
# =============================================================================

def settings_from_dict(data: dict[str, Any], base: ScaleSettings = DEFAULT_SETTINGS) -> ScaleSettings:
    """Overlay a mapping of overrides onto base settings."""
    known = {f.name for f in fields(ScaleSettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(unknown)}")
    return replace(base, **{name: _coerce(name, value) for name, value in data.items()})


def load_settings(config_path: Path | str | None = None) -> ScaleSettings:
    """Load settings from YAML. A missing path or file gives the defaults."""
    if config_path is None:
        return DEFAULT_SETTINGS
    path = Path(config_path)
    if not path.exists():
        return DEFAULT_SETTINGS
    with open(path, encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Could not parse settings file {path}: {e}")
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")
    return settings_from_dict(data)
