from pathlib import Path
import json
import textwrap
import logging

import pytest

from birthbuild.config import ConfigError, Photo, SiteSpec, load_photos, load_site_inputs, load_site_spec, resolve_photos


def _write_spec(tmp_path: Path, body: str, name: str = "site.toml") -> Path:
    path = tmp_path / name
    path.write_text(textwrap.dedent(body).strip() + "\n", encoding="utf-8")
    return path


def test_loads_full_toml_spec(sample_spec_path: Path) -> None:
    spec, photos = load_site_inputs(sample_spec_path)

    assert spec.id == "bloom-doula"
    assert [svc.title for svc in spec.services] == ["Birth Support", "Postnatal Care"]
    assert spec.testimonials[1].name == "Priya"
    assert spec.social_links["instagram"] == "https://instagram.com/bloomdoula"
    assert spec.style == "classic"
    assert [photo.purpose for photo in photos] == ["headshot"]


def test_rejects_unknown_keys(tmp_path: Path) -> None:
    path = _write_spec(
        tmp_path,
        """
        business_name = "Bloom"
        unexpected = "nope"
        """,
    )

    with pytest.raises(ConfigError) as exc:
        load_site_spec(path)

    assert "extra" in str(exc.value).lower()


def test_rejects_plural_table_arrays(tmp_path: Path) -> None:
    path = _write_spec(
        tmp_path,
        """
        business_name = "Bloom"

        [[services]]
        title = "Birth Support"
        """,
    )

    with pytest.raises(ConfigError) as exc:
        load_site_spec(path)

    assert "[[service]]" in str(exc.value)


def test_reports_invalid_toml(tmp_path: Path) -> None:
    path = _write_spec(tmp_path, 'business_name = "Bloom')

    with pytest.raises(ConfigError) as exc:
        load_site_spec(path)

    assert "Invalid TOML" in str(exc.value)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_site_spec(tmp_path / "nope.toml")


def test_json_spec_with_nulls_and_photos(tmp_path: Path) -> None:
    path = tmp_path / "site.json"
    path.write_text(
        json.dumps(
            {
                "business_name": "Bloom",
                "services": None,
                "testimonials": None,
                "social_links": {"instagram": "https://instagram.com/b", "facebook": None},
                "pages": ["Home", "blog", "about", "home"],
                "photos": [{"purpose": "hero", "storage_path": "b/hero.jpg"}],
            }
        ),
        encoding="utf-8",
    )

    spec, photos = load_site_inputs(path)

    assert spec.services == []
    assert spec.testimonials == []
    assert spec.social_links == {"instagram": "https://instagram.com/b"}
    assert spec.pages == ["home", "about"]
    assert photos[0].storage_path == "b/hero.jpg"


def test_unknown_choices_fall_back_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)

    spec = SiteSpec(business_name="Bloom", style="baroque", palette="neon", typography=None)

    assert (spec.style, spec.palette, spec.typography) == ("modern", "sage_sand", "modern")
    assert "Unknown style 'baroque'" in caplog.text


def test_spec_hash_is_stable_and_sensitive() -> None:
    first = SiteSpec(business_name="Bloom", pages=["home", "about"])
    second = SiteSpec(business_name="Bloom", pages=["home", "about"])
    changed = SiteSpec(business_name="Bloom", pages=["home", "contact"])

    assert first.hash == second.hash
    assert first.hash != changed.hash
    assert len(first.hash) == 64


def test_resolve_photos_builds_urls_and_drops_unreachable() -> None:
    photos = [
        Photo(purpose="gallery", storage_path="g2.jpg", sort_order=2),
        Photo(purpose="gallery", storage_path="g1.jpg", sort_order=1),
        Photo(purpose="hero", public_url="https://cdn.test/hero.jpg"),
    ]

    resolved = resolve_photos(photos, "https://storage.test/photos/")
    assert [p.public_url for p in resolved] == [
        "https://storage.test/photos/g1.jpg",
        "https://storage.test/photos/g2.jpg",
        "https://cdn.test/hero.jpg",
    ]
    assert [p.purpose for p in resolve_photos(photos, None)] == ["hero"]


def test_load_photos_from_toml(tmp_path: Path) -> None:
    path = _write_spec(
        tmp_path,
        """
        [[photo]]
        purpose = "headshot"
        storage_path = "me.jpg"
        """,
        name="photos.toml",
    )

    assert [p.storage_path for p in load_photos(path)] == ["me.jpg"]


def test_load_photos_rejects_bad_purpose(tmp_path: Path) -> None:
    path = tmp_path / "photos.json"
    path.write_text(json.dumps([{"purpose": "banner"}]), encoding="utf-8")

    with pytest.raises(ConfigError):
        load_photos(path)


def test_design_table_loads_from_toml(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)
    path = _write_spec(
        tmp_path,
        """
        business_name = "Bloom"

        [design]
        heading_font = "Lora"
        density = "Spacious"
        border_radius = "pill"

        [design.colours]
        background = "#ffffff"
        primary = "#112233"
        accent = "#445566"
        text = "#000000"
        cta = "#778899"
        """,
    )

    design = load_site_spec(path).design

    assert design.heading_font == "Lora"
    assert design.body_font is None
    assert design.density == "spacious"
    assert design.border_radius is None
    assert design.colours.primary == "#112233"
    assert "Unknown design border_radius 'pill'" in caplog.text


def test_design_table_rejects_unknown_keys(tmp_path: Path) -> None:
    path = _write_spec(
        tmp_path,
        """
        business_name = "Bloom"

        [design]
        shadow = "deep"
        """,
    )

    with pytest.raises(ConfigError):
        load_site_spec(path)
