"""
Colour and font edits applied directly to generated HTML.

A page carries its design as ``:root`` custom properties in its <style>
block plus one Google Fonts <link>. Rewriting those in place restyles a
stored page set without regenerating it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from html import escape
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from ..errors import DesignError
from .palettes import DEFAULT_PALETTE, is_valid_hex_colour
from .typography import build_google_fonts_url, css_fallback, is_known_font

if TYPE_CHECKING:
    from ..pipeline.generator import GeneratedPage

DEFAULT_FONT = "Inter"

COLOUR_VARIABLES: Tuple[Tuple[str, str], ...] = (
    ("--colour-bg", "background"),
    ("--colour-primary", "primary"),
    ("--colour-accent", "accent"),
    ("--colour-text", "text"),
    ("--colour-cta", "cta"),
)
FONT_VARIABLES: Tuple[Tuple[str, str], ...] = (
    ("--font-heading", "font_heading"),
    ("--font-body", "font_body"),
)

_STYLE_BLOCK = re.compile(r"(<style[^>]*>)(.*?)(</style>)", re.DOTALL | re.IGNORECASE)
_FONTS_LINK = re.compile(r'(<link\s+href=")https://fonts\.googleapis\.com/css2\?[^"]*(")')


def _colour_pattern(variable: str) -> re.Pattern[str]:
    return re.compile(rf"({re.escape(variable)}\s*:\s*)(#[0-9a-fA-F]{{6}})", re.IGNORECASE)


def _font_pattern(variable: str) -> re.Pattern[str]:
    return re.compile(rf"({re.escape(variable)}\s*:\s*)'([^']+)',\s*(?:serif|sans-serif)")


@dataclass(frozen=True)
class CssVariables:
    """
    Design values held in a page's custom properties.

    As an edit request, fields left as None are not touched.
    """

    background: Optional[str] = None
    primary: Optional[str] = None
    accent: Optional[str] = None
    text: Optional[str] = None
    cta: Optional[str] = None
    font_heading: Optional[str] = None
    font_body: Optional[str] = None

    def is_empty(self) -> bool:
        return all(getattr(self, item.name) is None for item in fields(self))

    @property
    def changes_fonts(self) -> bool:
        return self.font_heading is not None or self.font_body is not None


def validate_css_changes(changes: CssVariables) -> None:
    """
    Refuse values that are not safe to write into a stylesheet.

    Raises:
        DesignError: On a colour that is not #RRGGBB or a font outside the registry.
    """
    for _, key in COLOUR_VARIABLES:
        value = getattr(changes, key)
        if value is not None and not is_valid_hex_colour(value):
            raise DesignError(f"Invalid hex colour for {key}: {value!r}")
    for _, key in FONT_VARIABLES:
        value = getattr(changes, key)
        if value is not None and not is_known_font(value):
            raise DesignError(f"Unknown font for {key}: {value!r}")


def extract_css_variables(html: str) -> CssVariables:
    """
    Read the current colour and font values from a page or stylesheet.

    Values that cannot be found fall back to the default palette and font.
    """
    found = {}
    for variable, key in COLOUR_VARIABLES:
        match = _colour_pattern(variable).search(html)
        found[key] = match.group(2) if match else getattr(DEFAULT_PALETTE.colours, key)
    for variable, key in FONT_VARIABLES:
        match = _font_pattern(variable).search(html)
        found[key] = match.group(2) if match else DEFAULT_FONT
    return CssVariables(**found)


def update_css_text(css: str, changes: CssVariables) -> str:
    """Rewrite the changed custom properties in plain CSS text."""
    validate_css_changes(changes)
    for variable, key in COLOUR_VARIABLES:
        value = getattr(changes, key)
        if value is not None:
            css = _colour_pattern(variable).sub(lambda match, value=value: match.group(1) + value, css)
    for variable, key in FONT_VARIABLES:
        name = getattr(changes, key)
        if name is not None:
            declaration = f"'{name}', {css_fallback(name)}"
            css = _font_pattern(variable).sub(lambda match, declaration=declaration: match.group(1) + declaration, css)
    return css


def update_css_variables(html: str, changes: CssVariables) -> str:
    """Rewrite the changed custom properties inside every <style> block of a page."""
    return _STYLE_BLOCK.sub(
        lambda match: match.group(1) + update_css_text(match.group(2), changes) + match.group(3),
        html,
    )


def update_google_fonts_link(html: str, heading_font: str, body_font: str) -> str:
    """Point the page's Google Fonts stylesheet link at the given pair of fonts."""
    url = escape(build_google_fonts_url(heading_font, body_font), quote=True)
    return _FONTS_LINK.sub(lambda match: match.group(1) + url + match.group(2), html)


def update_page_html(html: str, changes: CssVariables) -> str:
    updated = update_css_variables(html, changes)
    if changes.changes_fonts:
        current = extract_css_variables(updated)
        updated = update_google_fonts_link(updated, current.font_heading, current.font_body)
    return updated


def update_all_pages(pages: Sequence["GeneratedPage"], changes: CssVariables) -> List["GeneratedPage"]:
    """Apply one design edit to every page, keeping filenames and order."""
    validate_css_changes(changes)
    return [page.model_copy(update={"html": update_page_html(page.html, changes)}) for page in pages]
