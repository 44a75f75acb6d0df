"""
About page: bio, qualifications, headshot, philosophy and CTA.
"""

from __future__ import annotations

from typing import List, Sequence

from ...config.models import Photo, SiteSpec
from ...sections import wrap_section
from ..shared import PageChrome, contact_cta, escape_html, first_photo, meta_description


def qualifications(spec: SiteSpec) -> List[str]:
    """Plain-text qualification lines, in display order."""
    items = []
    if spec.doula_uk:
        items.append("Doula UK Recognised Doula")
    if spec.training_provider:
        items.append(f"Trained with {spec.training_provider}")
    items.extend(spec.additional_training)
    return items


def generate_about_page(spec: SiteSpec, photos: Sequence[Photo], chrome: PageChrome) -> str:
    heading_name = escape_html(spec.doula_name) if spec.doula_name else "Me"
    title = f"About {spec.doula_name or 'Me'} | {spec.business_name or 'Birth Worker'}"
    description = spec.bio or f"Learn more about {spec.doula_name or 'your birth worker'}"

    if spec.bio:
        bio_html = "\n            ".join(
            f"<p>{escape_html(line.strip())}</p>" for line in spec.bio.split("\n") if line.strip()
        )
    else:
        bio_html = "<p>More information coming soon.</p>"

    quals = qualifications(spec)
    quals_html = ""
    if quals:
        entries = "\n              ".join(f"<li>{escape_html(item)}</li>" for item in quals)
        quals_html = f"""<div class="qualifications">
            <h2>Qualifications &amp; Accreditation</h2>
            <ul>
              {entries}
            </ul>
          </div>"""

    headshot = first_photo(photos, "headshot")
    photo_html = ""
    if headshot is not None:
        photo_html = f"""<div>
          <img src="{escape_html(headshot.public_url)}" alt="{escape_html(headshot.alt_text)}" class="about-photo" loading="lazy" />
        </div>"""

    blocks = [
        wrap_section(
            "intro",
            f"""<section class="section">
    <div class="section-inner">
      <h1 class="section-title">About {heading_name}</h1>
      <div class="about-grid">
        <div>
            {bio_html}
            {quals_html}
        </div>
        {photo_html}
      </div>
    </div>
  </section>""",
        )
    ]

    if spec.philosophy:
        blocks.append(
            wrap_section(
                "philosophy",
                f"""<section class="section section--alt">
    <div class="section-inner">
      <h2 class="section-title">My Philosophy</h2>
      <p>{escape_html(spec.philosophy)}</p>
    </div>
  </section>""",
            )
        )

    cta = contact_cta(
        spec.pages,
        "Let's Work Together",
        "I&#x27;d love to hear about your birth wishes and how I can support you.",
        "Get in Touch",
    )
    if cta:
        blocks.append(wrap_section("cta", cta))

    return chrome.document("about", title, meta_description(description), "\n".join(blocks))
