"""
Typography presets and the curated font registry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence


@dataclass(frozen=True)
class TypographyConfig:
    heading: str
    body: str
    google_fonts_url: str


@dataclass(frozen=True)
class FontDefinition:
    name: str
    google_fonts_param: str
    category: str  # serif, sans-serif, display


TYPOGRAPHY_CONFIG: Mapping[str, TypographyConfig] = {
    "modern": TypographyConfig(
        heading="Inter",
        body="Inter",
        google_fonts_url="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap",
    ),
    "classic": TypographyConfig(
        heading="Playfair Display",
        body="Source Sans 3",
        google_fonts_url=(
            "https://fonts.googleapis.com/css2?family=Playfair+Display:wght@400;700"
            "&family=Source+Sans+3:wght@400;600&display=swap"
        ),
    ),
    "mixed": TypographyConfig(
        heading="DM Serif Display",
        body="Inter",
        google_fonts_url=(
            "https://fonts.googleapis.com/css2?family=DM+Serif+Display"
            "&family=Inter:wght@400;500;600&display=swap"
        ),
    ),
}

DEFAULT_TYPOGRAPHY = "modern"
GOOGLE_FONTS_CSS_URL = "https://fonts.googleapis.com/css2"

FONTS: Sequence[FontDefinition] = (
    FontDefinition("Playfair Display", "Playfair+Display:wght@400;700", "serif"),
    FontDefinition("Lora", "Lora:wght@400;700", "serif"),
    FontDefinition("Montserrat", "Montserrat:wght@400;500;600;700", "sans-serif"),
    FontDefinition("Raleway", "Raleway:wght@400;500;600;700", "sans-serif"),
    FontDefinition("DM Serif Display", "DM+Serif+Display", "display"),
    FontDefinition("Inter", "Inter:wght@400;500;600;700", "sans-serif"),
    FontDefinition("Source Sans 3", "Source+Sans+3:wght@400;600;700", "sans-serif"),
    FontDefinition("Open Sans", "Open+Sans:wght@400;600;700", "sans-serif"),
    FontDefinition("Lato", "Lato:wght@400;700", "sans-serif"),
)


def resolve_typography(key: str) -> TypographyConfig:
    """Look up a typography preset; the option set is validated on SiteSpec."""
    return TYPOGRAPHY_CONFIG.get(key, TYPOGRAPHY_CONFIG[DEFAULT_TYPOGRAPHY])


def find_font(name: str) -> Optional[FontDefinition]:
    for font in FONTS:
        if font.name == name:
            return font
    return None


def css_fallback(name: str) -> str:
    """Generic CSS family to list after a named font."""
    font = find_font(name)
    return "serif" if font is not None and font.category == "serif" else "sans-serif"


def is_known_font(name: Optional[str]) -> bool:
    return name is not None and find_font(name) is not None


def build_google_fonts_url(heading_font: str, body_font: str) -> str:
    """
    Google Fonts stylesheet URL loading both fonts, each family once.

    Names missing from the registry are skipped; with neither known the
    default preset's URL is returned.
    """
    families = []
    for name in (heading_font, body_font):
        font = find_font(name)
        if font is not None and f"family={font.google_fonts_param}" not in families:
            families.append(f"family={font.google_fonts_param}")
    if not families:
        return TYPOGRAPHY_CONFIG[DEFAULT_TYPOGRAPHY].google_fonts_url
    return f"{GOOGLE_FONTS_CSS_URL}?{'&'.join(families)}&display=swap"
