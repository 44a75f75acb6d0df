"""
Wordmark SVG generation for generated sites.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class WordmarkStyle:
    font_weight: str
    font_size: str
    letter_spacing: str
    height: int
    text_y: int
    divider_y: Optional[int] = None


WORDMARK_STYLES: Mapping[str, WordmarkStyle] = {
    "modern": WordmarkStyle(font_weight="600", font_size="28", letter_spacing="0.5", height=48, text_y=32),
    "classic": WordmarkStyle(font_weight="600", font_size="28", letter_spacing="0", height=60, text_y=30, divider_y=46),
    "minimal": WordmarkStyle(font_weight="300", font_size="24", letter_spacing="2", height=48, text_y=32),
}

MIN_WIDTH = 200


def estimate_width(text: str) -> int:
    """Approximate rendered width at the wordmark font size, with padding."""
    return max(MIN_WIDTH, len(text) * 16 + 40)


def generate_wordmark(business_name: str, font_family: str, primary_colour: str, style: str) -> str:
    """
    Render the business name as a standalone, accessible SVG.

    Args:
        business_name: Text to display; escaped for both <text> and <title>.
        font_family: Font family name, used with a sans-serif fallback.
        primary_colour: Fill colour (expected #RRGGBB).
        style: Site style; unknown styles render as "modern".
    """
    params = WORDMARK_STYLES.get(style, WORDMARK_STYLES["modern"])
    escaped = html.escape(business_name, quote=True)
    family = html.escape(font_family, quote=True)
    colour = html.escape(primary_colour, quote=True)
    width = estimate_width(business_name)

    divider = ""
    if params.divider_y is not None:
        divider = (
            f'<line x1="{width * 0.3:g}" y1="{params.divider_y}" x2="{width * 0.7:g}" y2="{params.divider_y}" '
            f'stroke="{colour}" stroke-width="1" opacity="0.6" />'
        )

    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {width} {params.height}" role="img" '
        f'aria-labelledby="wordmark-title" width="{width}" height="{params.height}">'
        f'<title id="wordmark-title">{escaped}</title>'
        f'<text x="50%" y="{params.text_y}" text-anchor="middle" font-family="&apos;{family}&apos;, sans-serif" '
        f'font-size="{params.font_size}" font-weight="{params.font_weight}" '
        f'letter-spacing="{params.letter_spacing}" fill="{colour}">{escaped}</text>'
        f"{divider}</svg>"
    )
