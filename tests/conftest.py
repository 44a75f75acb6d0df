from pathlib import Path
import textwrap

import pytest
from typer.testing import CliRunner

from birthbuild.config import SiteSpec


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def sample_spec_path(tmp_path: Path) -> Path:
    """
    Write a fully populated site spec TOML file and return its path.
    """
    spec_text = textwrap.dedent(
        """
        business_name = "Bloom Doula"
        doula_name = "Sarah Jones"
        tagline = "Calm, informed support for your birth"
        service_area = "Bristol, Bath, Keynsham"
        primary_location = "Bristol"
        email = "hello@bloomdoula.co.uk"
        phone = "07700 900123"
        bio = "I have supported families across Bristol for ten years.\\nI believe every birth deserves patience."
        philosophy = "Every family deserves to feel heard."
        style = "classic"
        palette = "ocean_calm"
        typography = "mixed"
        doula_uk = true
        training_provider = "Developing Doulas"
        training_year = "2016"
        additional_training = ["Hypnobirthing"]
        subdomain_slug = "bloom-doula"
        pages = ["home", "about", "services", "contact", "testimonials", "faq"]

        [social_links]
        instagram = "https://instagram.com/bloomdoula"
        facebook = "http://facebook.com/insecure"

        [[service]]
        type = "birth"
        title = "Birth Support"
        description = "Continuous support through labour."
        price = "£900"

        [[service]]
        type = "postnatal"
        title = "Postnatal Care"
        description = "Practical help in the fourth trimester."
        price = "£25/hour"

        [[testimonial]]
        quote = "Sarah was wonderful."
        name = "Amy"
        context = "First birth, 2023"

        [[testimonial]]
        quote = "Calm and kind throughout."
        name = "Priya"
        context = "VBAC, 2024"

        [[photo]]
        purpose = "headshot"
        storage_path = "bloom/headshot.jpg"
        alt_text = "Sarah smiling"
        public_url = "https://cdn.example.com/bloom/headshot.jpg"
        """
    ).strip()
    path = tmp_path / "site.toml"
    path.write_text(spec_text + "\n", encoding="utf-8")
    return path


@pytest.fixture
def bloom_spec() -> SiteSpec:
    """Minimal spec with three pages and no services or testimonials."""
    return SiteSpec(business_name="Bloom Doula", pages=["home", "about", "contact"])


@pytest.fixture
def full_spec() -> SiteSpec:
    return SiteSpec(
        business_name="Bloom Doula",
        doula_name="Sarah Jones",
        tagline="Calm, informed support",
        service_area="Bristol",
        email="hello@bloomdoula.co.uk",
        bio="Ten years supporting families.",
        philosophy="Every family deserves to feel heard.",
        services=[
            {"title": "Birth Support", "description": "Labour support.", "price": "£900"},
            {"title": "Postnatal Care", "description": "Fourth trimester help.", "price": "£25/hour"},
        ],
        testimonials=[
            {"quote": "Wonderful.", "name": "Amy", "context": "First birth"},
            {"quote": "So calm.", "name": "Priya", "context": "Second birth"},
        ],
        subdomain_slug="bloom-doula",
        pages=["home", "about", "services", "contact", "testimonials", "faq"],
    )
