import json

from birthbuild.config import SiteSpec
from birthbuild.seo import (
    build_aggregate_rating_schema,
    build_local_business_schema,
    build_service_graph,
    generate_llms_txt,
    generate_robots_txt,
    generate_sitemap,
    render_json_ld,
)


def test_robots_allows_ai_crawlers_and_points_to_sitemap() -> None:
    robots = generate_robots_txt("https://bloom.birthbuild.com")

    assert robots.startswith("User-agent: *\nAllow: /\n\n")
    assert "User-agent: GPTBot\nAllow: /" in robots
    assert "User-agent: ClaudeBot\nAllow: /" in robots
    assert robots.endswith("Sitemap: https://bloom.birthbuild.com/sitemap.xml\n")


def test_sitemap_escapes_locations() -> None:
    sitemap = generate_sitemap(["index.html"], "https://a.test/?x=1&y=2", lastmod="2026-02-03")

    assert "<loc>https://a.test/?x=1&amp;y=2/index.html</loc>" in sitemap
    assert "<lastmod>2026-02-03</lastmod>" in sitemap


def test_json_ld_cannot_close_script_tag() -> None:
    rendered = render_json_ld({"name": "</script><script>alert(1)</script>"})

    body = rendered[len('<script type="application/ld+json">') : -len("</script>")]
    assert "<" not in body
    assert json.loads(body)["name"] == "</script><script>alert(1)</script>"


def test_local_business_schema_fields() -> None:
    spec = SiteSpec(
        business_name="Bloom",
        doula_name="Sarah",
        service_area="Bristol",
        primary_location="Bristol",
        email="hi@bloom.test",
        doula_uk=True,
        subdomain_slug="bloom",
        services=[{"title": "Birth", "description": "Support", "price": "£900"}],
        social_links={"instagram": "https://instagram.com/bloom", "x": "http://x.com/bloom"},
    )
    schema = build_local_business_schema(spec, [], "https://bloom.birthbuild.com")

    assert schema["@type"] == ["LocalBusiness", "HealthAndBeautyBusiness"]
    assert schema["url"] == "https://bloom.birthbuild.com"
    assert schema["address"] == {"@type": "PostalAddress", "addressLocality": "Bristol"}
    assert schema["makesOffer"][0]["priceCurrency"] == "GBP"
    assert schema["sameAs"] == ["https://instagram.com/bloom"]
    assert schema["founder"]["name"] == "Sarah"
    assert schema["hasCredential"][0]["recognizedBy"]["name"] == "Doula UK"


def test_optional_schemas_need_content() -> None:
    spec = SiteSpec(business_name="Bloom", testimonials=[{"quote": "Great"}])

    assert build_service_graph(spec) is None
    assert build_aggregate_rating_schema(spec) is None


def test_llms_txt_sections() -> None:
    spec = SiteSpec(
        business_name="Bloom Doula",
        tagline="Calm support",
        service_area="Bristol",
        bio="Ten years of experience.",
        training_provider="Developing Doulas",
        training_year="2016",
        email="hi@bloom.test",
        subdomain_slug="bloom",
        services=[{"title": "Birth", "description": "Support", "price": "£900"}],
    )
    text = generate_llms_txt(spec, "https://bloom.birthbuild.com")

    assert text.startswith("# Bloom Doula\n> Calm support. Serving Bristol.\n")
    assert "## Services\n- Birth: Support (£900)" in text
    assert "## Qualifications\n- Developing Doulas (2016)" in text
    assert "- Website: https://bloom.birthbuild.com" in text
    assert "## Service Area\nBristol" in text


def test_llms_txt_for_empty_spec() -> None:
    assert generate_llms_txt(SiteSpec()).startswith("# Birth Worker\n")
