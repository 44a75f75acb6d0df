"""
Generation pipeline.
"""

from .generator import (
    DesignSystem,
    GeneratedPage,
    GeneratedSite,
    generate_site,
    pages_to_generate,
    site_base_url,
)

__all__ = [
    "DesignSystem",
    "GeneratedPage",
    "GeneratedSite",
    "generate_site",
    "pages_to_generate",
    "site_base_url",
]
