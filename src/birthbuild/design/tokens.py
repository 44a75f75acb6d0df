"""
Design tokens: spacing, corner radius and type scale tables, and the
resolution of a site's effective design from its presets and overrides.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping

from ..config.models import DesignConfig, SiteSpec
from .palettes import COLOUR_KEYS, check_text_contrast, is_valid_hex_colour, resolve_site_colours
from .typography import TypographyConfig, build_google_fonts_url, is_known_font, resolve_typography

logger = logging.getLogger(__name__)

DEFAULT_SCALE = "default"
DEFAULT_DENSITY = "default"
DEFAULT_BORDER_RADIUS = "rounded"


@dataclass(frozen=True)
class SpacingTokens:
    section_padding: str
    gap: str
    hero_padding: str
    card_padding: str


@dataclass(frozen=True)
class RadiusTokens:
    card: str
    button: str
    image: str


@dataclass(frozen=True)
class ScaleTokens:
    h1: str
    h2: str
    h3: str
    body: str
    tagline: str


SPACING_SCALES: Mapping[str, SpacingTokens] = {
    "compact": SpacingTokens("2.5rem 1.5rem", "1rem", "3rem 1.5rem", "1.25rem"),
    "default": SpacingTokens("4rem 1.5rem", "1.5rem", "5rem 1.5rem", "2rem"),
    "relaxed": SpacingTokens("5.5rem 1.5rem", "2rem", "6.5rem 1.5rem", "2.5rem"),
    "spacious": SpacingTokens("7rem 1.5rem", "2.5rem", "8rem 1.5rem", "3rem"),
}

BORDER_RADIUS_SCALES: Mapping[str, RadiusTokens] = {
    "sharp": RadiusTokens("0px", "0px", "0px"),
    "slightly-rounded": RadiusTokens("4px", "4px", "4px"),
    "rounded": RadiusTokens("8px", "6px", "8px"),
    "circular": RadiusTokens("16px", "24px", "50%"),
}

TYPOGRAPHY_SCALES: Mapping[str, ScaleTokens] = {
    "small": ScaleTokens("2.25rem", "1.5rem", "1.1rem", "0.95rem", "1rem"),
    "default": ScaleTokens("2.5rem", "2rem", "1.25rem", "1rem", "1.2rem"),
    "large": ScaleTokens("3.5rem", "2.5rem", "1.5rem", "1.1rem", "1.4rem"),
}

RADIUS_BY_STYLE: Mapping[str, str] = {
    "modern": "rounded",
    "classic": "slightly-rounded",
    "minimal": "sharp",
}


def spacing_tokens(design: DesignConfig) -> SpacingTokens:
    return SPACING_SCALES.get(design.density or DEFAULT_DENSITY, SPACING_SCALES[DEFAULT_DENSITY])


def radius_tokens(design: DesignConfig) -> RadiusTokens:
    default = BORDER_RADIUS_SCALES[DEFAULT_BORDER_RADIUS]
    return BORDER_RADIUS_SCALES.get(design.border_radius or DEFAULT_BORDER_RADIUS, default)


def scale_tokens(design: DesignConfig) -> ScaleTokens:
    return TYPOGRAPHY_SCALES.get(design.scale or DEFAULT_SCALE, TYPOGRAPHY_SCALES[DEFAULT_SCALE])


def derive_design(spec: SiteSpec) -> DesignConfig:
    """
    Fully populated design built from the style, palette and typography presets.

    Used as the base that `SiteSpec.design` overrides are layered on.
    """
    typography = resolve_typography(spec.typography)
    return DesignConfig(
        colours=resolve_site_colours(spec),
        heading_font=typography.heading,
        body_font=typography.body,
        scale=DEFAULT_SCALE,
        density=DEFAULT_DENSITY,
        border_radius=RADIUS_BY_STYLE.get(spec.style, DEFAULT_BORDER_RADIUS),
    )


def validate_design_config(config: DesignConfig) -> Dict[str, str]:
    """
    Check the values option validation cannot: hex colours and font names.

    Returns a mapping of field name to problem; empty when the config is usable.
    Option fields (scale, density, border radius) are already normalised by
    the model.
    """
    errors: Dict[str, str] = {}
    if config.colours is not None:
        for key in COLOUR_KEYS:
            value = getattr(config.colours, key)
            if not is_valid_hex_colour(value):
                errors["colours"] = f"Invalid hex colour for {key}: {value!r}"
                break
    if config.heading_font is not None and not is_known_font(config.heading_font):
        errors["heading_font"] = f"Unknown heading font: {config.heading_font!r}"
    if config.body_font is not None and not is_known_font(config.body_font):
        errors["body_font"] = f"Unknown body font: {config.body_font!r}"
    return errors


def merge_design(base: DesignConfig, overrides: DesignConfig) -> DesignConfig:
    """Overlay every field set on `overrides` onto `base`."""
    update = {}
    for name in DesignConfig.model_fields:
        value = getattr(overrides, name)
        if value is not None:
            update[name] = value
    return base.model_copy(update=update)


def resolve_design(spec: SiteSpec) -> DesignConfig:
    """
    Effective design for a site: the presets plus any valid overrides.

    Override fields that fail validation are dropped with a warning and the
    preset value stays in place.
    """
    base = derive_design(spec)
    overrides = spec.design
    if overrides is None:
        return base

    errors = validate_design_config(overrides)
    for field, message in errors.items():
        logger.warning("Ignoring design %s for %s: %s", field, spec.id, message)
    if errors:
        overrides = overrides.model_copy(update={field: None for field in errors})

    design = merge_design(base, overrides)
    if overrides.colours is not None:
        check_text_contrast(design.colours, spec.id)
    return design


def design_typography(spec: SiteSpec, design: DesignConfig) -> TypographyConfig:
    """Typography for the resolved fonts, reusing the preset's stylesheet URL when it matches."""
    preset = resolve_typography(spec.typography)
    if (design.heading_font, design.body_font) == (preset.heading, preset.body):
        return preset
    return TypographyConfig(
        heading=design.heading_font,
        body=design.body_font,
        google_fonts_url=build_google_fonts_url(design.heading_font, design.body_font),
    )
