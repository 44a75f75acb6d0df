"""
Testimonials page: one quote card per testimonial.
"""

from __future__ import annotations

from typing import Sequence

from ...config.models import Photo, SiteSpec
from ...sections import wrap_section
from ...seo.schema import build_aggregate_rating_schema, render_json_ld
from ..shared import PageChrome, contact_cta, escape_html, meta_description


def generate_testimonials_page(spec: SiteSpec, photos: Sequence[Photo], chrome: PageChrome) -> str:
    provider = spec.doula_name or spec.business_name or "your doula"
    title = f"Testimonials | {spec.business_name or 'Birth Worker'}"
    description = f"Read what families say about working with {provider}."

    cards = "\n      ".join(
        f"""<div class="testimonial">
        <blockquote>&ldquo;{escape_html(item.quote)}&rdquo;</blockquote>
        <cite>{escape_html(item.name)}</cite>
        <span class="context">{escape_html(item.context)}</span>
      </div>"""
        for item in spec.testimonials
    )
    blocks = [
        wrap_section(
            "testimonials",
            f"""<section class="section">
    <div class="section-inner">
      <h1 class="section-title">What Families Say</h1>
      <p class="section-subtitle">Kind words from the families I&#x27;ve had the privilege of supporting.</p>
      {cards}
    </div>
  </section>""",
        )
    ]
    cta = contact_cta(
        spec.pages,
        "Start Your Journey",
        "Ready to experience the support that these families loved?",
        "Get in Touch",
    )
    if cta:
        blocks.append(wrap_section("cta", cta))

    rating = build_aggregate_rating_schema(spec)
    trailing = render_json_ld(rating) if rating is not None else ""
    return chrome.document("testimonials", title, meta_description(description), "\n".join(blocks), trailing)
