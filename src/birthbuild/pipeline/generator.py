"""
Site generation: turns one SiteSpec snapshot into a complete page set.
"""

from __future__ import annotations

import concurrent.futures
import logging
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ..config.models import Photo, SiteSpec
from ..config.settings import DEFAULT_BASE_DOMAIN
from ..render.pages import PAGE_GENERATORS
from ..render.shared import PAGE_FILENAMES, PageChrome, build_chrome
from ..seo.files import generate_robots_txt, generate_sitemap
from ..seo.llms import generate_llms_txt

logger = logging.getLogger(__name__)

MAX_WORKERS = 6


class GeneratedPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: str
    html: str


class DesignSystem(BaseModel):
    """Shared chrome captured alongside a page set for later edits."""

    model_config = ConfigDict(frozen=True)

    css: str = ""
    head_fonts_url: str = ""
    nav_html: str = ""
    footer_html: str = ""
    wordmark_svg: str = ""


class GeneratedSite(BaseModel):
    model_config = ConfigDict(frozen=True)

    pages: List[GeneratedPage] = Field(default_factory=list)
    sitemap: str = ""
    robots: str = ""
    llms_txt: str = ""
    design_system: DesignSystem = Field(default_factory=DesignSystem)

    @property
    def filenames(self) -> List[str]:
        return [page.filename for page in self.pages]

    def page(self, filename: str) -> Optional[GeneratedPage]:
        for page in self.pages:
            if page.filename == filename:
                return page
        return None


def site_base_url(spec: SiteSpec, base_domain: str = DEFAULT_BASE_DOMAIN) -> str:
    """Public origin for a site; sites without a subdomain use the example host."""
    host = spec.subdomain_slug or "example"
    return f"https://{host}.{base_domain}"


def pages_to_generate(spec: SiteSpec) -> List[str]:
    """
    Enabled page slugs in nav order, minus pages with nothing to show.

    The testimonials page needs at least one testimonial and the FAQ page
    needs ``faq_enabled``.
    """
    slugs = []
    for slug in spec.pages:
        if slug == "testimonials" and not spec.testimonials:
            logger.info("Skipping testimonials page for %s: no testimonials", spec.id)
            continue
        if slug == "faq" and not spec.faq_enabled:
            logger.info("Skipping FAQ page for %s: FAQ disabled", spec.id)
            continue
        slugs.append(slug)
    return slugs


def capture_design_system(chrome: PageChrome) -> DesignSystem:
    return DesignSystem(
        css=chrome.css,
        head_fonts_url=chrome.fonts_url,
        nav_html=chrome.nav(),
        footer_html=chrome.footer_html,
        wordmark_svg=chrome.wordmark,
    )


def generate_site(
    spec: SiteSpec,
    photos: Sequence[Photo] = (),
    *,
    base_domain: str = DEFAULT_BASE_DOMAIN,
    lastmod: Optional[str] = None,
    max_workers: int = MAX_WORKERS,
) -> GeneratedSite:
    """
    Render every enabled page plus sitemap, robots.txt and llms.txt.

    Page generators run concurrently over the same read-only inputs; the
    result lists pages in nav order. Nothing is written anywhere, so a failed
    or abandoned run leaves no trace.
    """
    base_url = site_base_url(spec, base_domain)
    slugs = pages_to_generate(spec)
    chrome = build_chrome(spec, base_url=base_url, pages=slugs)
    photo_list = list(photos)

    logger.info("Generating %d page(s) for site %s", len(slugs), spec.id)
    rendered: Dict[str, str] = {}
    if slugs:
        workers = max(1, min(max_workers, len(slugs)))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {pool.submit(PAGE_GENERATORS[slug], spec, photo_list, chrome): slug for slug in slugs}
            for future in concurrent.futures.as_completed(futures):
                rendered[futures[future]] = future.result()

    pages = [GeneratedPage(filename=PAGE_FILENAMES[slug], html=rendered[slug]) for slug in slugs]
    filenames = [page.filename for page in pages]
    site = GeneratedSite(
        pages=pages,
        sitemap=generate_sitemap(filenames, base_url, lastmod=lastmod),
        robots=generate_robots_txt(base_url),
        llms_txt=generate_llms_txt(spec, base_url),
        design_system=capture_design_system(chrome),
    )
    logger.info("Generated %s for site %s", ", ".join(filenames) or "no pages", spec.id)
    return site
