import logging

import pytest
from pydantic import ValidationError

from birthbuild.config import CustomColours, DesignConfig, SiteSpec
from birthbuild.design import (
    PALETTES,
    build_google_fonts_url,
    contrast_ratio,
    derive_design,
    find_font,
    generate_wordmark,
    meets_contrast_aa,
    resolve_colours,
    resolve_design,
    resolve_site_colours,
    resolve_typography,
    validate_custom_colours,
    validate_design_config,
)
from birthbuild.design.palettes import check_text_contrast
from birthbuild.design.typography import css_fallback
from birthbuild.design.wordmark import estimate_width

CUSTOM = CustomColours(background="#ffffff", primary="#123456", accent="#abcdef", text="#000000", cta="#654321")


def test_custom_palette_returns_supplied_colours() -> None:
    assert resolve_colours("custom", CUSTOM) is CUSTOM


def test_unknown_palette_falls_back_to_first_entry() -> None:
    assert resolve_colours("neon_dreams", None) == PALETTES[0].colours
    assert resolve_colours("custom", None) == PALETTES[0].colours


def test_known_palette_lookup() -> None:
    assert resolve_colours("ocean_calm", None).primary == "#3d6b7e"


def test_validate_custom_colours_rejects_css_injection() -> None:
    bad = CUSTOM.model_copy(update={"cta": "red;} body {display:none"})
    assert validate_custom_colours(bad) is None
    assert validate_custom_colours(CUSTOM) is CUSTOM


def test_contrast_ratio_extremes() -> None:
    assert contrast_ratio("#000000", "#ffffff") == pytest.approx(21.0)
    assert contrast_ratio("#777777", "#777777") == pytest.approx(1.0)
    assert meets_contrast_aa("#2d2d2d", "#f5f0e8")
    assert not meets_contrast_aa("#cccccc", "#ffffff")


def test_typography_lookup_and_fallback() -> None:
    assert resolve_typography("classic").heading == "Playfair Display"
    assert resolve_typography("classic").body == "Source Sans 3"
    assert resolve_typography("gothic") == resolve_typography("modern")


def test_font_registry_drives_generic_family() -> None:
    assert find_font("Lora").category == "serif"
    assert find_font("Comic Sans") is None
    assert css_fallback("Playfair Display") == "serif"
    assert css_fallback("DM Serif Display") == "sans-serif"
    assert css_fallback("Unknown") == "sans-serif"


def test_wordmark_escapes_name_in_text_and_title() -> None:
    svg = generate_wordmark('Tom & "Jerry" <Doulas>', "Inter", "#5f7161", "modern")

    assert "<Doulas>" not in svg
    assert '<title id="wordmark-title">Tom &amp; &quot;Jerry&quot; &lt;Doulas&gt;</title>' in svg
    assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg"')
    assert svg.endswith("</svg>")


def test_wordmark_width_has_floor() -> None:
    assert estimate_width("") == 200
    assert estimate_width("A") == 200
    assert estimate_width("Bloom Doula Services") == 20 * 16 + 40


def test_classic_wordmark_adds_divider() -> None:
    classic = generate_wordmark("Bloom", "Playfair Display", "#6b4c3b", "classic")
    modern = generate_wordmark("Bloom", "Inter", "#6b4c3b", "modern")

    assert "<line" in classic
    assert 'height="60"' in classic
    assert "<line" not in modern
    assert 'height="48"' in modern


def test_unknown_style_renders_like_modern() -> None:
    assert generate_wordmark("Bloom", "Inter", "#000000", "baroque") == generate_wordmark(
        "Bloom", "Inter", "#000000", "modern"
    )


def test_minimal_wordmark_is_light() -> None:
    svg = generate_wordmark("Bloom", "Inter", "#000000", "minimal")
    assert 'font-weight="300"' in svg
    assert 'letter-spacing="2"' in svg


def test_palette_table_colours_cannot_be_mutated() -> None:
    colours = resolve_colours("sage_sand", None)

    with pytest.raises(ValidationError):
        colours.primary = "#000000"

    assert resolve_colours("sage_sand", None).primary == "#5f7161"
    assert PALETTES[0].colours.primary == "#5f7161"


def test_google_fonts_url_lists_each_known_family_once() -> None:
    assert build_google_fonts_url("Lora", "Lato") == (
        "https://fonts.googleapis.com/css2?family=Lora:wght@400;700&family=Lato:wght@400;700&display=swap"
    )
    assert build_google_fonts_url("Lora", "Lora") == (
        "https://fonts.googleapis.com/css2?family=Lora:wght@400;700&display=swap"
    )
    assert build_google_fonts_url("Comic Sans", "Lato") == (
        "https://fonts.googleapis.com/css2?family=Lato:wght@400;700&display=swap"
    )
    assert build_google_fonts_url("Comic Sans", "Papyrus") == resolve_typography("modern").google_fonts_url


def test_derive_design_maps_presets() -> None:
    design = derive_design(SiteSpec(business_name="Bloom", style="minimal", typography="classic", palette="deep_earth"))

    assert design.border_radius == "sharp"
    assert (design.heading_font, design.body_font) == ("Playfair Display", "Source Sans 3")
    assert (design.scale, design.density) == ("default", "default")
    assert design.colours == resolve_colours("deep_earth", None)


def test_validate_design_config_names_bad_fields() -> None:
    config = DesignConfig(
        colours=CUSTOM.model_copy(update={"accent": "blue"}),
        heading_font="Comic Sans",
        body_font="Lato",
    )

    errors = validate_design_config(config)

    assert set(errors) == {"colours", "heading_font"}
    assert "accent" in errors["colours"]
    assert validate_design_config(DesignConfig(body_font="Lato")) == {}


def test_resolve_design_keeps_presets_for_rejected_overrides(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)
    spec = SiteSpec(
        business_name="Bloom",
        design={"heading_font": "Comic Sans", "body_font": "Lato", "scale": "large"},
    )

    design = resolve_design(spec)

    assert design.heading_font == "Inter"
    assert design.body_font == "Lato"
    assert design.scale == "large"
    assert "Ignoring design heading_font" in caplog.text


def test_low_contrast_custom_colours_warn_but_apply(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)
    faint = CUSTOM.model_copy(update={"text": "#cccccc", "background": "#ffffff"})

    colours = resolve_site_colours(SiteSpec(business_name="Bloom", palette="custom", custom_colours=faint))

    assert colours == faint
    assert "below the 4.5:1 AA minimum" in caplog.text


def test_readable_custom_colours_do_not_warn(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)

    assert check_text_contrast(CUSTOM)
    resolve_site_colours(SiteSpec(business_name="Bloom", palette="custom", custom_colours=CUSTOM))

    assert "AA minimum" not in caplog.text
