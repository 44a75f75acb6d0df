"""
Palette definitions and colour utilities.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from ..config.models import CustomColours, SiteSpec

logger = logging.getLogger(__name__)

CUSTOM_PALETTE = "custom"
_HEX_COLOUR = re.compile(r"^#[0-9a-fA-F]{6}$")
COLOUR_KEYS = ("background", "primary", "accent", "text", "cta")


@dataclass(frozen=True)
class PaletteDefinition:
    key: str
    label: str
    colours: CustomColours


PALETTES: Sequence[PaletteDefinition] = (
    PaletteDefinition(
        key="sage_sand",
        label="Sage & Sand",
        colours=CustomColours(background="#f5f0e8", primary="#5f7161", accent="#a8b5a0", text="#2d2d2d", cta="#5f7161"),
    ),
    PaletteDefinition(
        key="blush_neutral",
        label="Blush & Neutral",
        colours=CustomColours(background="#fdf6f0", primary="#c9928e", accent="#e8cfc4", text="#3d3d3d", cta="#c9928e"),
    ),
    PaletteDefinition(
        key="deep_earth",
        label="Deep Earth",
        colours=CustomColours(background="#f0ebe3", primary="#6b4c3b", accent="#a67c52", text="#2b2b2b", cta="#6b4c3b"),
    ),
    PaletteDefinition(
        key="ocean_calm",
        label="Ocean Calm",
        colours=CustomColours(background="#f0f4f5", primary="#3d6b7e", accent="#7ca5b8", text="#2c3e50", cta="#3d6b7e"),
    ),
)

DEFAULT_PALETTE = PALETTES[0]


def resolve_colours(palette_key: str, custom_colours: Optional[CustomColours]) -> CustomColours:
    """
    Resolve the active colours for a palette option.

    "custom" with colours supplied returns them verbatim; unknown keys fall
    back to the first palette. Never raises.
    """
    if palette_key == CUSTOM_PALETTE and custom_colours is not None:
        return custom_colours
    for palette in PALETTES:
        if palette.key == palette_key:
            return palette.colours
    return DEFAULT_PALETTE.colours


def is_valid_hex_colour(value: str) -> bool:
    return bool(_HEX_COLOUR.match(value or ""))


def validate_custom_colours(colours: CustomColours) -> Optional[CustomColours]:
    """
    Return the colours if every value is a 6-digit hex colour, otherwise None.

    Colour values are interpolated into CSS, so anything else is refused.
    """
    for key in COLOUR_KEYS:
        value = getattr(colours, key)
        if not is_valid_hex_colour(value):
            logger.error("Invalid custom colour for '%s': %r; falling back to preset palette", key, value)
            return None
    return colours


def _channels(hex_colour: str) -> tuple[float, float, float]:
    cleaned = hex_colour.lstrip("#")
    return tuple(int(cleaned[i : i + 2], 16) / 255 for i in (0, 2, 4))  # type: ignore[return-value]


def _linearise(channel: float) -> float:
    return channel / 12.92 if channel <= 0.04045 else ((channel + 0.055) / 1.055) ** 2.4


def relative_luminance(hex_colour: str) -> float:
    r, g, b = _channels(hex_colour)
    return 0.2126 * _linearise(r) + 0.7152 * _linearise(g) + 0.0722 * _linearise(b)


def contrast_ratio(first: str, second: str) -> float:
    """
    WCAG 2.1 contrast ratio between two hex colours, from 1 to 21.
    """
    l1 = relative_luminance(first)
    l2 = relative_luminance(second)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def meets_contrast_aa(foreground: str, background: str) -> bool:
    """True when the pair reaches the AA threshold for normal text (4.5:1)."""
    return contrast_ratio(foreground, background) >= 4.5


def check_text_contrast(colours: CustomColours, site_id: str = "") -> bool:
    """
    Log a warning when body text on the background misses WCAG AA.

    The colours are still used; a hard-to-read choice is the owner's call.
    """
    if meets_contrast_aa(colours.text, colours.background):
        return True
    logger.warning(
        "Text colour %s on background %s for %s has contrast %.2f:1, below the 4.5:1 AA minimum",
        colours.text,
        colours.background,
        site_id or "site",
        contrast_ratio(colours.text, colours.background),
    )
    return False


def resolve_site_colours(spec: SiteSpec) -> CustomColours:
    """Active colours for a spec; invalid custom colours fall back to the default palette."""
    if spec.palette == CUSTOM_PALETTE:
        custom = validate_custom_colours(spec.custom_colours) if spec.custom_colours else None
        if custom is None:
            logger.warning("Palette 'custom' without usable colours for %s; using default palette", spec.id)
            return resolve_colours(DEFAULT_PALETTE.key, None)
        check_text_contrast(custom, spec.id)
        return resolve_colours(CUSTOM_PALETTE, custom)
    return resolve_colours(spec.palette, None)
