import logging

import pytest

from birthbuild.config import SiteSpec
from birthbuild.render.shared import (
    build_chrome,
    escape_html,
    generate_footer,
    generate_nav,
    is_safe_link,
    meta_description,
    nav_items,
    valid_social_links,
)
from birthbuild.util import truncate_words


def test_escape_html_neutralises_markup() -> None:
    escaped = escape_html("<script>alert(1)</script>")

    assert "<" not in escaped
    assert ">" not in escaped
    assert escape_html("Tom & Jerry's \"place\"") == "Tom &amp; Jerry&#x27;s &quot;place&quot;"
    assert escape_html(None) == ""


def test_social_links_require_https_and_length_cap() -> None:
    links = {
        "instagram": "https://instagram.com/bloom",
        "facebook": "http://facebook.com/bloom",
        "tiktok": "https://tiktok.com/" + "a" * 600,
        "linkedin": "",
    }

    assert [link.platform for link in valid_social_links(links)] == ["instagram"]


def test_nav_items_skip_unknown_pages() -> None:
    items = nav_items(["home", "blog", "faq"])

    assert [(item.label, item.filename) for item in items] == [("Home", "index.html"), ("FAQ", "faq.html")]


def test_nav_marks_only_active_page() -> None:
    nav = generate_nav(["home", "about"], "Bloom", "<svg></svg>", "about")

    assert nav.count('aria-current="page"') == 1
    assert '<a href="about.html" class="nav-link nav-link--active" aria-current="page">About</a>' in nav
    assert 'class="skip-link"' in nav


def test_footer_contains_copyright_and_icons() -> None:
    footer = generate_footer("Bloom <Doula>", {"instagram": "https://instagram.com/bloom"}, year=2030)

    assert "&copy; 2030 Bloom &lt;Doula&gt;. All rights reserved." in footer
    assert 'aria-label="instagram"' in footer
    assert "This site does not use tracking cookies." in footer


def test_footer_without_name_or_links() -> None:
    footer = generate_footer(None, {}, year=2030)

    assert "&copy; 2030 This website." in footer
    assert "footer-social" not in footer


def test_chrome_uses_valid_custom_colours_and_rejects_invalid() -> None:
    good = SiteSpec(
        business_name="Bloom",
        palette="custom",
        custom_colours={
            "background": "#ffffff",
            "primary": "#112233",
            "accent": "#445566",
            "text": "#000000",
            "cta": "#778899",
        },
    )
    bad = good.model_copy(
        update={"custom_colours": good.custom_colours.model_copy(update={"primary": "url(evil)"})}
    )

    assert "--colour-primary: #112233;" in build_chrome(good).css
    assert "--colour-primary: #5f7161;" in build_chrome(bad).css


def test_chrome_css_follows_style_radius() -> None:
    classic = build_chrome(SiteSpec(business_name="Bloom", style="classic", typography="classic"))

    assert "--radius: 4px;" in classic.css
    assert "--font-heading: 'Playfair Display', serif;" in classic.css
    assert "Playfair+Display" in classic.fonts_url


def test_truncate_words_never_cuts_mid_word() -> None:
    text = "Supporting families through pregnancy birth and beyond"

    assert truncate_words(text, 200) == text
    shortened = truncate_words(text, 30)
    assert len(shortened) <= 30
    assert shortened.endswith("...")
    assert text.startswith(shortened[:-3])
    assert shortened[:-3].split(" ")[-1] in text.split(" ")


def test_truncate_words_drops_an_oversized_first_word() -> None:
    assert truncate_words("x" * 200, 160) == "..."
    assert truncate_words("x" * 200 + " and more", 160) == "..."
    assert truncate_words("Bloom " + "x" * 200, 160) == "Bloom..."
    assert meta_description("y" * 300) == "..."


def test_minimal_style_uses_sharp_corners() -> None:
    css = build_chrome(SiteSpec(business_name="Bloom", style="minimal")).css

    assert "--radius: 0px;" in css
    assert "--btn-radius: 0px;" in css


def test_design_overrides_drive_css_tokens_and_fonts() -> None:
    spec = SiteSpec(
        business_name="Bloom",
        design={
            "density": "spacious",
            "border_radius": "circular",
            "scale": "large",
            "heading_font": "Lora",
            "body_font": "Lato",
        },
    )

    chrome = build_chrome(spec)

    assert "--section-padding: 7rem 1.5rem;" in chrome.css
    assert "--card-padding: 3rem;" in chrome.css
    assert "--img-radius: 50%;" in chrome.css
    assert "--btn-radius: 24px;" in chrome.css
    assert "--h1-size: 3.5rem;" in chrome.css
    assert "--font-heading: 'Lora', serif;" in chrome.css
    assert "--font-body: 'Lato', sans-serif;" in chrome.css
    assert chrome.fonts_url == (
        "https://fonts.googleapis.com/css2?family=Lora:wght@400;700&family=Lato:wght@400;700&display=swap"
    )
    assert "&apos;Lora&apos;" in chrome.wordmark


def test_design_colour_override_replaces_palette() -> None:
    spec = SiteSpec(
        business_name="Bloom",
        palette="ocean_calm",
        design={
            "colours": {
                "background": "#ffffff",
                "primary": "#112233",
                "accent": "#445566",
                "text": "#000000",
                "cta": "#778899",
            }
        },
    )

    chrome = build_chrome(spec)

    assert "--colour-primary: #112233;" in chrome.css
    assert chrome.colours.primary == "#112233"
    assert "--section-padding: 4rem 1.5rem;" in chrome.css


def test_invalid_design_colours_keep_palette(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)
    spec = SiteSpec(
        business_name="Bloom",
        design={
            "colours": {
                "background": "#ffffff",
                "primary": "red;} body {display:none",
                "accent": "#445566",
                "text": "#000000",
                "cta": "#778899",
            }
        },
    )

    css = build_chrome(spec).css

    assert "display:none" not in css
    assert "--colour-primary: #5f7161;" in css
    assert "Ignoring design colours" in caplog.text


def test_chrome_nav_links_only_pages_being_generated() -> None:
    spec = SiteSpec(business_name="Bloom", pages=["home", "about", "testimonials"])

    chrome = build_chrome(spec, pages=["home", "about"])

    assert chrome.pages == ("home", "about")
    assert "testimonials.html" not in chrome.nav("home")
    assert "testimonials.html" in build_chrome(spec).nav("home")


def test_is_safe_link_accepts_only_https() -> None:
    assert is_safe_link("https://calendly.com/bloom")
    assert not is_safe_link("javascript:alert(1)")
    assert not is_safe_link("JAVASCRIPT:alert(1)")
    assert not is_safe_link("http://calendly.com/bloom")
    assert not is_safe_link(None)
    assert not is_safe_link("https://calendly.com/" + "a" * 500)
