"""
Design presets, tokens and the wordmark logo.
"""

from .palettes import (
    PALETTES,
    PaletteDefinition,
    contrast_ratio,
    meets_contrast_aa,
    resolve_colours,
    resolve_site_colours,
    validate_custom_colours,
)
from .tokens import derive_design, resolve_design, validate_design_config
from .typography import (
    TYPOGRAPHY_CONFIG,
    TypographyConfig,
    build_google_fonts_url,
    css_fallback,
    find_font,
    resolve_typography,
)
from .wordmark import generate_wordmark

__all__ = [
    "PALETTES",
    "PaletteDefinition",
    "contrast_ratio",
    "meets_contrast_aa",
    "resolve_colours",
    "resolve_site_colours",
    "validate_custom_colours",
    "derive_design",
    "resolve_design",
    "validate_design_config",
    "TYPOGRAPHY_CONFIG",
    "TypographyConfig",
    "build_google_fonts_url",
    "css_fallback",
    "find_font",
    "resolve_typography",
    "generate_wordmark",
]
