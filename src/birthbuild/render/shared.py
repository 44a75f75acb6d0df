"""
Shared HTML fragments for generated sites.

Every spec-derived string must pass through `escape_html` before it is
interpolated into markup.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, NamedTuple, Optional, Sequence

from ..config.models import CustomColours, DesignConfig, Photo, SiteSpec
from ..design.tokens import design_typography, radius_tokens, resolve_design, scale_tokens, spacing_tokens
from ..design.typography import TypographyConfig, css_fallback
from ..design.wordmark import generate_wordmark
from ..util.text import truncate_words
from ..util.time import utc_now

MAX_LINK_LENGTH = 500
META_DESCRIPTION_LIMIT = 160

PAGE_FILENAMES: Mapping[str, str] = {
    "home": "index.html",
    "about": "about.html",
    "services": "services.html",
    "contact": "contact.html",
    "testimonials": "testimonials.html",
    "faq": "faq.html",
}

PAGE_LABELS: Mapping[str, str] = {
    "home": "Home",
    "about": "About",
    "services": "Services",
    "contact": "Contact",
    "testimonials": "Testimonials",
    "faq": "FAQ",
}

_CSP = "; ".join(
    [
        "default-src 'none'",
        "style-src 'unsafe-inline' https://fonts.googleapis.com",
        "font-src https://fonts.gstatic.com",
        "img-src 'self' https: data:",
        "form-action 'self'",
        "base-uri 'none'",
        "frame-ancestors 'none'",
    ]
)


class NavItem(NamedTuple):
    slug: str
    label: str
    filename: str


class SocialLink(NamedTuple):
    platform: str
    url: str


def escape_html(text: Optional[str]) -> str:
    """
    Neutralise the five characters that matter in text and attribute position.
    """
    if not text:
        return ""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def is_safe_link(url: Optional[str]) -> bool:
    """Only https links up to a sane length are rendered as external hrefs."""
    return bool(url) and url.startswith("https://") and len(url) <= MAX_LINK_LENGTH


def valid_social_links(links: Mapping[str, str]) -> List[SocialLink]:
    """Social links worth rendering, in their declared order."""
    return [SocialLink(platform, url) for platform, url in links.items() if is_safe_link(url)]


def nav_items(pages: Sequence[str]) -> List[NavItem]:
    return [NavItem(slug, PAGE_LABELS[slug], PAGE_FILENAMES[slug]) for slug in pages if slug in PAGE_FILENAMES]


def first_photo(photos: Sequence[Photo], purpose: str) -> Optional[Photo]:
    for photo in photos:
        if photo.purpose == purpose and photo.public_url:
            return photo
    return None


def generate_css(design: DesignConfig) -> str:
    """Stylesheet for a fully resolved design; see `design.tokens.resolve_design`."""
    colours = design.colours
    heading_font, body_font = design.heading_font, design.body_font
    spacing, radius, scale = spacing_tokens(design), radius_tokens(design), scale_tokens(design)
    root = f"""
    :root {{
      --colour-bg: {colours.background};
      --colour-primary: {colours.primary};
      --colour-accent: {colours.accent};
      --colour-text: {colours.text};
      --colour-cta: {colours.cta};
      --font-heading: '{heading_font}', {css_fallback(heading_font)};
      --font-body: '{body_font}', {css_fallback(body_font)};
      --radius: {radius.card};
      --btn-radius: {radius.button};
      --img-radius: {radius.image};
      --max-width: 1100px;
      --section-padding: {spacing.section_padding};
      --hero-padding: {spacing.hero_padding};
      --card-padding: {spacing.card_padding};
      --gap: {spacing.gap};
      --h1-size: {scale.h1};
      --h2-size: {scale.h2};
      --h3-size: {scale.h3};
      --body-size: {scale.body};
      --tagline-size: {scale.tagline};
    }}
"""
    return root + _BASE_CSS


def generate_head(title: str, description: str, css: str, fonts_url: str, canonical_url: Optional[str] = None) -> str:
    safe_title = escape_html(title)
    safe_description = escape_html(description)
    canonical = f'\n    <link rel="canonical" href="{escape_html(canonical_url)}" />' if canonical_url else ""
    return f"""<head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <meta http-equiv="Content-Security-Policy" content="{_CSP}" />
    <title>{safe_title}</title>
    <meta name="description" content="{safe_description}" />
    <meta property="og:title" content="{safe_title}" />
    <meta property="og:description" content="{safe_description}" />
    <meta property="og:type" content="website" />
    <meta name="twitter:card" content="summary" />
    <meta name="twitter:title" content="{safe_title}" />
    <meta name="twitter:description" content="{safe_description}" />{canonical}
    <link rel="preconnect" href="https://fonts.googleapis.com" />
    <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin />
    <link href="{escape_html(fonts_url)}" rel="stylesheet" />
    <style>{css}</style>
  </head>"""


def generate_nav(pages: Sequence[str], business_name: Optional[str], wordmark: str, active_page: Optional[str] = None) -> str:
    """
    Header with the wordmark and a CSS-only collapsible menu.

    `active_page` marks one link with ``aria-current``; None renders the
    neutral variant stored with a checkpoint's design system.
    """
    label = escape_html(business_name) if business_name else "Home"
    links = []
    for item in nav_items(pages):
        if item.slug == active_page:
            links.append(
                f'<a href="{item.filename}" class="nav-link nav-link--active" aria-current="page">{escape_html(item.label)}</a>'
            )
        else:
            links.append(f'<a href="{item.filename}" class="nav-link">{escape_html(item.label)}</a>')
    joined = "\n          ".join(links)
    return f"""<a href="#main" class="skip-link">Skip to content</a>
  <header class="site-header" role="banner">
    <div class="header-inner">
      <a href="index.html" class="wordmark-link" aria-label="{label}">
        {wordmark}
      </a>
      <input type="checkbox" id="nav-toggle" class="nav-toggle-checkbox" aria-hidden="true" />
      <label for="nav-toggle" class="nav-toggle-label" aria-label="Open navigation menu">
        <span class="nav-toggle-icon"></span>
      </label>
      <nav id="main-nav" class="main-nav" aria-label="Main navigation">
        <div class="nav-links">
          {joined}
        </div>
      </nav>
    </div>
  </header>"""


def social_icon(platform: str) -> str:
    return _SOCIAL_ICONS.get(platform.lower(), _GENERIC_ICON)


def generate_footer(business_name: Optional[str], social_links: Mapping[str, str], year: Optional[int] = None) -> str:
    year = year if year is not None else utc_now().year
    name = escape_html(business_name) if business_name else "This website"
    social_html = ""
    links = valid_social_links(social_links)
    if links:
        anchors = "\n          ".join(
            f'<a href="{escape_html(link.url)}" target="_blank" rel="noopener noreferrer" '
            f'aria-label="{escape_html(link.platform)}">{social_icon(link.platform)}</a>'
            for link in links
        )
        social_html = f"""<div class="footer-social">
          {anchors}
        </div>"""
    return f"""<footer class="site-footer" role="contentinfo">
    <div class="footer-inner">
      {social_html}
      <p class="footer-copyright">&copy; {year} {name}. All rights reserved.</p>
      <p class="footer-privacy">This site does not use tracking cookies.</p>
    </div>
  </footer>"""


@dataclass(frozen=True)
class PageChrome:
    """
    Fragments shared by every page of one generation run.

    Built once from the SiteSpec snapshot so head styling, navigation and footer
    stay identical from page to page.
    """

    pages: tuple
    business_name: Optional[str]
    wordmark: str
    css: str
    fonts_url: str
    footer_html: str
    typography: TypographyConfig
    colours: CustomColours
    base_url: str = ""

    def nav(self, active_page: Optional[str] = None) -> str:
        return generate_nav(self.pages, self.business_name, self.wordmark, active_page)

    def head(self, title: str, description: str, filename: Optional[str] = None) -> str:
        canonical = f"{self.base_url}/{filename}" if self.base_url and filename else None
        return generate_head(title, description, self.css, self.fonts_url, canonical)

    def document(
        self,
        active_page: str,
        title: str,
        description: str,
        main_html: str,
        trailing_html: str = "",
    ) -> str:
        """Assemble a full HTML document around the page's <main> content."""
        filename = PAGE_FILENAMES.get(active_page)
        tail = f"\n  {trailing_html}" if trailing_html else ""
        return f"""<!DOCTYPE html>
<html lang="en-GB">
{self.head(title, description, filename)}
<body>
  {self.nav(active_page)}
  <main id="main">
{main_html}
  </main>
  {self.footer_html}{tail}
</body>
</html>
"""


def build_chrome(
    spec: SiteSpec,
    base_url: str = "",
    year: Optional[int] = None,
    pages: Optional[Sequence[str]] = None,
) -> PageChrome:
    """
    Resolve design and shared fragments for one generation run.

    `pages` is the slug list actually being generated; the nav links only
    those. It defaults to every enabled page in `spec.pages`.
    """
    design = resolve_design(spec)
    typography = design_typography(spec, design)
    wordmark = generate_wordmark(
        spec.business_name or spec.doula_name or "My Site",
        design.heading_font,
        design.colours.primary,
        spec.style,
    )
    return PageChrome(
        pages=tuple(spec.pages if pages is None else pages),
        business_name=spec.business_name,
        wordmark=wordmark,
        css=generate_css(design),
        fonts_url=typography.google_fonts_url,
        footer_html=generate_footer(spec.business_name, spec.social_links, year),
        typography=typography,
        colours=design.colours,
        base_url=base_url.rstrip("/"),
    )


_GENERIC_ICON = (
    '<svg width="20" height="20" viewBox="0 0 24 24" fill="currentColor" aria-hidden="true">'
    '<path d="M12 0C5.373 0 0 5.373 0 12s5.373 12 12 12 12-5.373 12-12S18.627 0 12 0zm-1 17.5v-7l6 3.5-6 3.5z"/></svg>'
)

_SOCIAL_ICONS: Mapping[str, str] = {
    "facebook": (
        '<svg width="20" height="20" viewBox="0 0 24 24" fill="currentColor" aria-hidden="true"><path d="M24 12.073c0-6.627-5.373-12-12-12s-12 5.373-12 12c0 5.99 4.388 10.954 10.125 11.854v-8.385H7.078v-3.47h3.047V9.43c0-3.007 1.792-4.669 4.533-4.669 1.312 0 2.686.235 2.686.235v2.953H15.83c-1.491 0-1.956.925-1.956 1.874v2.25h3.328l-.532 3.47h-2.796v8.385C19.612 23.027 24 18.062 24 12.073z"/></svg>'
    ),
    "instagram": (
        '<svg width="20" height="20" viewBox="0 0 24 24" fill="currentColor" aria-hidden="true"><path d="M12 2.163c3.204 0 3.584.012 4.85.07 3.252.148 4.771 1.691 4.919 4.919.058 1.265.069 1.645.069 4.849 0 3.205-.012 3.584-.069 4.849-.149 3.225-1.664 4.771-4.919 4.919-1.266.058-1.644.07-4.85.07-3.204 0-3.584-.012-4.849-.07-3.26-.149-4.771-1.699-4.919-4.92-.058-1.265-.07-1.644-.07-4.849 0-3.204.013-3.583.07-4.849.149-3.227 1.664-4.771 4.919-4.919 1.266-.057 1.645-.069 4.849-.069zM12 0C8.741 0 8.333.014 7.053.072 2.695.272.273 2.69.073 7.052.014 8.333 0 8.741 0 12c0 3.259.014 3.668.072 4.948.2 4.358 2.618 6.78 6.98 6.98C8.333 23.986 8.741 24 12 24c3.259 0 3.668-.014 4.948-.072 4.354-.2 6.782-2.618 6.979-6.98.059-1.28.073-1.689.073-4.948 0-3.259-.014-3.667-.072-4.947-.196-4.354-2.617-6.78-6.979-6.98C15.668.014 15.259 0 12 0zm0 5.838a6.162 6.162 0 100 12.324 6.162 6.162 0 000-12.324zM12 16a4 4 0 110-8 4 4 0 010 8zm6.406-11.845a1.44 1.44 0 100 2.881 1.44 1.44 0 000-2.881z"/></svg>'
    ),
    "tiktok": (
        '<svg width="20" height="20" viewBox="0 0 24 24" fill="currentColor" aria-hidden="true"><path d="M12.525.02c1.31-.02 2.61-.01 3.91-.02.08 1.53.63 3.09 1.75 4.17 1.12 1.11 2.7 1.62 4.24 1.79v4.03c-1.44-.05-2.89-.35-4.2-.97-.57-.26-1.1-.59-1.62-.93-.01 2.92.01 5.84-.02 8.75-.08 1.4-.54 2.79-1.35 3.94-1.31 1.92-3.58 3.17-5.91 3.21-1.43.08-2.86-.31-4.08-1.03-2.02-1.19-3.44-3.37-3.65-5.71-.02-.5-.03-1-.01-1.49.18-1.9 1.12-3.72 2.58-4.96 1.66-1.44 3.98-2.13 6.15-1.72.02 1.48-.04 2.96-.04 4.44-.99-.32-2.15-.23-3.02.37-.63.41-1.11 1.04-1.36 1.75-.21.51-.15 1.07-.14 1.61.24 1.64 1.82 3.02 3.5 2.87 1.12-.01 2.19-.66 2.77-1.61.19-.33.4-.67.41-1.06.1-1.79.06-3.57.07-5.36.01-4.03-.01-8.05.02-12.07z"/></svg>'
    ),
    "linkedin": (
        '<svg width="20" height="20" viewBox="0 0 24 24" fill="currentColor" aria-hidden="true"><path d="M20.447 20.452h-3.554v-5.569c0-1.328-.027-3.037-1.852-3.037-1.853 0-2.136 1.445-2.136 2.939v5.667H9.351V9h3.414v1.561h.046c.477-.9 1.637-1.85 3.37-1.85 3.601 0 4.267 2.37 4.267 5.455v6.286zM5.337 7.433a2.062 2.062 0 01-2.063-2.065 2.064 2.064 0 112.063 2.065zm1.782 13.019H3.555V9h3.564v11.452zM22.225 0H1.771C.792 0 0 .774 0 1.729v20.542C0 23.227.792 24 1.771 24h20.451C23.2 24 24 23.227 24 22.271V1.729C24 .774 23.2 0 22.222 0h.003z"/></svg>'
    ),
    "twitter": (
        '<svg width="20" height="20" viewBox="0 0 24 24" fill="currentColor" aria-hidden="true"><path d="M18.244 2.25h3.308l-7.227 8.26 8.502 11.24H16.17l-5.214-6.817L4.99 21.75H1.68l7.73-8.835L1.254 2.25H8.08l4.713 6.231zm-1.161 17.52h1.833L7.084 4.126H5.117z"/></svg>'
    ),
}

_BASE_CSS = """
    *, *::before, *::after { box-sizing: border-box; margin: 0; padding: 0; }
    html { scroll-behavior: smooth; }

    body {
      font-family: var(--font-body);
      color: var(--colour-text);
      background-color: var(--colour-bg);
      font-size: var(--body-size);
      line-height: 1.7;
      -webkit-font-smoothing: antialiased;
    }

    h1, h2, h3, h4, h5, h6 {
      font-family: var(--font-heading);
      line-height: 1.2;
      color: var(--colour-primary);
    }

    a { color: var(--colour-primary); text-decoration: underline; }
    a:hover { opacity: 0.85; }

    *:focus-visible {
      outline: 2px solid var(--colour-primary);
      outline-offset: 2px;
    }

    img { max-width: 100%; height: auto; display: block; }

    .skip-link {
      position: absolute; left: -9999px; top: auto;
      padding: 0.5rem 1rem; background: var(--colour-primary); color: #fff;
      z-index: 1000; text-decoration: none;
    }
    .skip-link:focus { left: 1rem; top: 1rem; }

    .site-header {
      background: var(--colour-bg);
      border-bottom: 1px solid var(--colour-accent);
      position: sticky; top: 0; z-index: 100;
    }
    .header-inner {
      max-width: var(--max-width); margin: 0 auto;
      padding: 1rem 1.5rem;
      display: flex; align-items: center; justify-content: space-between;
    }
    .wordmark-link { text-decoration: none; }
    .wordmark-link svg { display: block; }

    .nav-toggle-checkbox { display: none; }
    .nav-toggle-label { display: none; cursor: pointer; padding: 0.5rem; }
    .nav-toggle-icon {
      display: block; width: 24px; height: 2px;
      background: var(--colour-text); position: relative;
    }
    .nav-toggle-icon::before, .nav-toggle-icon::after {
      content: ''; display: block; width: 24px; height: 2px;
      background: var(--colour-text); position: absolute; left: 0;
    }
    .nav-toggle-icon::before { top: -7px; }
    .nav-toggle-icon::after { top: 7px; }

    .nav-links { display: flex; gap: var(--gap); align-items: center; }
    .nav-link {
      text-decoration: none; font-weight: 500; font-size: 0.95rem;
      color: var(--colour-text); transition: color 0.2s;
    }
    .nav-link:hover, .nav-link--active { color: var(--colour-primary); }

    @media (max-width: 768px) {
      .nav-toggle-label { display: block; }
      .main-nav {
        display: none; position: absolute; top: 100%; left: 0; right: 0;
        background: var(--colour-bg); border-bottom: 1px solid var(--colour-accent);
        padding: 1rem 1.5rem;
      }
      .nav-toggle-checkbox:checked ~ .main-nav { display: block; }
      .nav-links { flex-direction: column; gap: 0.75rem; }
    }

    .section { padding: var(--section-padding); }
    .section-inner { max-width: var(--max-width); margin: 0 auto; }
    .section--alt { background: rgba(0,0,0,0.02); }
    .section-title { font-size: var(--h2-size); margin-bottom: var(--gap); }
    .section-subtitle { font-size: 1.1rem; color: var(--colour-text); opacity: 0.8; margin-bottom: 2rem; }

    .hero {
      position: relative; min-height: 85vh;
      display: flex; align-items: center; justify-content: center;
      overflow: hidden;
    }
    .hero__bg {
      position: absolute; inset: 0; width: 100%; height: 100%;
      object-fit: cover; z-index: 0;
    }
    .hero__overlay {
      position: absolute; inset: 0; z-index: 1;
      background: linear-gradient(to bottom, rgba(0,0,0,0.55), rgba(0,0,0,0.15));
    }
    .hero__content {
      position: relative; z-index: 2; text-align: center;
      padding: 2rem 1.5rem; max-width: var(--max-width);
    }
    .hero__content h1 { font-size: var(--h1-size); margin-bottom: 1rem; color: #fff; }
    .hero__tagline {
      font-size: var(--tagline-size); color: #fff; font-weight: 300;
      margin-bottom: 2rem; max-width: 600px; margin-left: auto; margin-right: auto;
    }
    @media (max-width: 768px) { .hero { min-height: 70vh; } }

    .hero--text-only { padding: var(--hero-padding); text-align: center; min-height: auto; display: block; }
    .hero--text-only .hero-inner { max-width: var(--max-width); margin: 0 auto; }
    .hero--text-only h1 { font-size: var(--h1-size); margin-bottom: 1rem; }
    .hero--text-only .tagline { font-size: var(--tagline-size); opacity: 0.85; margin-bottom: 2rem; max-width: 600px; margin-left: auto; margin-right: auto; }
    @media (min-width: 769px) {
      .hero__content h1, .hero--text-only h1 { font-size: calc(var(--h1-size) * 1.4); }
    }

    .btn {
      display: inline-block; padding: 0.75rem 2rem;
      background: var(--colour-cta); color: #fff; text-decoration: none;
      border-radius: var(--btn-radius); font-weight: 600; font-size: var(--body-size);
      border: none; cursor: pointer; transition: opacity 0.2s;
    }
    .btn:hover { opacity: 0.9; }
    .btn--outline {
      background: transparent; color: var(--colour-cta);
      border: 2px solid var(--colour-cta);
    }
    .btn--outline:hover { background: var(--colour-cta); color: #fff; }

    .cards { display: grid; gap: var(--gap); }
    @media (min-width: 640px) { .cards { grid-template-columns: repeat(2, 1fr); } }
    @media (min-width: 900px) { .cards { grid-template-columns: repeat(3, 1fr); } }
    .card {
      background: #fff; border-radius: var(--radius);
      padding: var(--card-padding); border: 1px solid var(--colour-accent);
    }
    .card h2, .card h3 { margin-bottom: 0.75rem; font-size: var(--h3-size); }
    .card p { margin-bottom: 1rem; }
    .card .price { font-weight: 600; color: var(--colour-primary); margin-bottom: 1rem; display: block; }

    .testimonial {
      background: #fff; border-left: 4px solid var(--colour-accent);
      padding: var(--card-padding); margin-bottom: var(--gap); border-radius: var(--radius);
    }
    .testimonial blockquote { font-style: italic; font-size: 1.05rem; margin-bottom: 0.75rem; }
    .testimonial cite { font-style: normal; font-weight: 600; display: block; }
    .testimonial .context { font-size: 0.9rem; opacity: 0.7; }

    .faq-item { border-bottom: 1px solid var(--colour-accent); }
    .faq-item summary {
      padding: 1.25rem 0; cursor: pointer; font-weight: 600;
      font-size: 1.05rem; list-style: none;
    }
    .faq-item summary::-webkit-details-marker { display: none; }
    .faq-item summary::before { content: '+'; margin-right: 0.75rem; font-size: 1.2rem; }
    .faq-item[open] summary::before { content: '\\2212'; }
    .faq-item .faq-answer { padding: 0 0 1.25rem; line-height: 1.7; }

    .contact-form { max-width: 600px; }
    .form-group { margin-bottom: var(--gap); }
    .form-group label { display: block; font-weight: 600; margin-bottom: 0.5rem; }
    .form-group input, .form-group textarea {
      width: 100%; padding: 0.75rem; border: 1px solid var(--colour-accent);
      border-radius: var(--radius); font-family: var(--font-body); font-size: var(--body-size);
    }
    .form-group textarea { min-height: 150px; resize: vertical; }
    .form-group input:focus, .form-group textarea:focus {
      outline: 2px solid var(--colour-primary); outline-offset: 2px;
    }

    .contact-info { margin-top: 2rem; }
    .contact-info dt { font-weight: 600; margin-top: 1rem; }
    .contact-info dd { margin-left: 0; }

    .about-grid { display: grid; gap: 2rem; }
    @media (min-width: 769px) { .about-grid { grid-template-columns: 2fr 1fr; } }
    .about-photo { border-radius: var(--img-radius); width: 100%; max-height: 28rem; object-fit: cover; object-position: center top; }
    @media (max-width: 768px) { .about-photo { max-height: 20rem; aspect-ratio: 4/3; } }
    .qualifications { margin-top: 2rem; padding: var(--card-padding); background: rgba(0,0,0,0.02); border-radius: var(--radius); }

    .site-footer {
      background: var(--colour-primary); color: rgba(255,255,255,0.9);
      padding: 2rem 1.5rem; text-align: center;
    }
    .footer-inner { max-width: var(--max-width); margin: 0 auto; }
    .footer-social { margin-bottom: 1.5rem; display: flex; justify-content: center; gap: 0.75rem; flex-wrap: wrap; }
    .footer-social a {
      width: 44px; height: 44px; border-radius: 50%;
      background: rgba(255,255,255,0.1); color: rgba(255,255,255,0.9);
      display: flex; align-items: center; justify-content: center;
      text-decoration: none; transition: background 0.2s, transform 0.2s;
    }
    .footer-social a:hover { background: rgba(255,255,255,0.25); transform: translateY(-2px); opacity: 1; }
    .footer-copyright { font-size: 0.9rem; margin-bottom: 0.25rem; }
    .footer-privacy { font-size: 0.8rem; opacity: 0.7; }

    .text-center { text-align: center; }
    .mt-2 { margin-top: 2rem; }
    .mb-2 { margin-bottom: 2rem; }
  """


def contact_cta(pages: Sequence[str], heading: str, subtitle: str, button_label: str) -> str:
    """Closing call-to-action block; empty when the contact page is disabled."""
    if "contact" not in pages:
        return ""
    return f"""<section class="section text-center">
    <div class="section-inner">
      <h2 class="section-title">{escape_html(heading)}</h2>
      <p class="section-subtitle">{subtitle}</p>
      <a href="contact.html" class="btn">{escape_html(button_label)}</a>
    </div>
  </section>"""


def meta_description(text: str) -> str:
    return truncate_words(text, META_DESCRIPTION_LIMIT)
