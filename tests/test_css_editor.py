import pytest

from birthbuild.config import SiteSpec
from birthbuild.design.css_editor import (
    CssVariables,
    extract_css_variables,
    update_all_pages,
    update_css_variables,
    update_google_fonts_link,
    update_page_html,
)
from birthbuild.errors import DesignError
from birthbuild.pipeline import generate_site


@pytest.fixture
def site_pages():
    spec = SiteSpec(business_name="Bloom", palette="ocean_calm", typography="classic", pages=["home", "about"])
    return generate_site(spec).pages


def test_extract_reads_generated_values(site_pages) -> None:
    values = extract_css_variables(site_pages[0].html)

    assert values == CssVariables(
        background="#f0f4f5",
        primary="#3d6b7e",
        accent="#7ca5b8",
        text="#2c3e50",
        cta="#3d6b7e",
        font_heading="Playfair Display",
        font_body="Source Sans 3",
    )


def test_extract_falls_back_to_defaults() -> None:
    values = extract_css_variables("<p>no styles here</p>")

    assert values.primary == "#5f7161"
    assert values.font_heading == "Inter"


def test_update_touches_only_requested_variables(site_pages) -> None:
    html = site_pages[0].html

    updated = update_css_variables(html, CssVariables(primary="#112233"))

    assert "--colour-primary: #112233;" in updated
    assert "--colour-cta: #3d6b7e;" in updated
    assert updated.replace("#112233", "#3d6b7e", 1) == html


def test_font_change_updates_fallback_and_stylesheet_link(site_pages) -> None:
    updated = update_page_html(site_pages[0].html, CssVariables(font_heading="Montserrat"))

    assert "--font-heading: 'Montserrat', sans-serif;" in updated
    assert "--font-body: 'Source Sans 3', sans-serif;" in updated
    assert (
        '<link href="https://fonts.googleapis.com/css2?family=Montserrat:wght@400;500;600;700'
        '&amp;family=Source+Sans+3:wght@400;600;700&amp;display=swap" rel="stylesheet" />'
    ) in updated
    assert updated.count("fonts.googleapis.com/css2") == 1


def test_fonts_link_leaves_preconnect_tags_alone(site_pages) -> None:
    updated = update_google_fonts_link(site_pages[0].html, "Lora", "Lato")

    assert '<link rel="preconnect" href="https://fonts.googleapis.com" />' in updated
    assert "family=Lora:wght@400;700&amp;family=Lato:wght@400;700" in updated


def test_update_all_pages_keeps_order_and_filenames(site_pages) -> None:
    updated = update_all_pages(site_pages, CssVariables(background="#ffffff", font_body="Lato"))

    assert [page.filename for page in updated] == ["index.html", "about.html"]
    for page in updated:
        values = extract_css_variables(page.html)
        assert (values.background, values.font_body) == ("#ffffff", "Lato")


@pytest.mark.parametrize(
    "changes",
    [
        CssVariables(primary="red;} body {display:none"),
        CssVariables(cta="#12345"),
        CssVariables(font_body="Comic Sans"),
        CssVariables(font_heading="Inter', serif; } *{x:y"),
    ],
)
def test_unsafe_values_are_refused(site_pages, changes: CssVariables) -> None:
    with pytest.raises(DesignError):
        update_all_pages(site_pages, changes)


def test_empty_changes_leave_pages_untouched(site_pages) -> None:
    assert CssVariables().is_empty()
    assert update_all_pages(site_pages, CssVariables()) == list(site_pages)
