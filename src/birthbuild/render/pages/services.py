"""
Services page: one card per service, service JSON-LD and CTA.
"""

from __future__ import annotations

from typing import Sequence

from ...config.models import Photo, SiteSpec
from ...sections import wrap_section
from ...seo.schema import build_service_graph, render_json_ld
from ..shared import PageChrome, contact_cta, escape_html, meta_description


def generate_services_page(spec: SiteSpec, photos: Sequence[Photo], chrome: PageChrome) -> str:
    business = spec.business_name or "Birth Worker"
    provider = spec.doula_name or spec.business_name or "your doula"
    area_suffix = f" in {spec.service_area}" if spec.service_area else ""
    title = f"Services | {business}"
    description = f"Explore the birth work services offered by {provider}{area_suffix}"
    has_contact = spec.has_page("contact")

    enquire = '<a href="contact.html" class="btn btn--outline">Enquire</a>' if has_contact else ""
    cards = "\n          ".join(
        f"""<div class="card">
            <h2>{escape_html(svc.title)}</h2>
            <p>{escape_html(svc.description)}</p>
            <span class="price">{escape_html(svc.price)}</span>
            {enquire}
          </div>"""
        for svc in spec.services
    )

    heading = f"Services | {escape_html(business)}"
    subtitle_area = ""
    if spec.service_area:
        heading += f" in {escape_html(spec.service_area)}"
        subtitle_area = f" across {escape_html(spec.service_area)}"

    blocks = [
        wrap_section(
            "services",
            f"""<section class="section">
    <div class="section-inner">
      <h1 class="section-title">{heading}</h1>
      <p class="section-subtitle">Explore the support I offer to families{subtitle_area}.</p>
      <div class="cards">
          {cards}
      </div>
    </div>
  </section>""",
        )
    ]
    cta = contact_cta(
        spec.pages,
        "Interested in My Services?",
        "Get in touch to discuss your needs and how I can support you.",
        "Book a Consultation",
    )
    if cta:
        blocks.append(wrap_section("cta", cta))

    graph = build_service_graph(spec)
    schema = render_json_ld(graph) if graph is not None else ""
    return chrome.document("services", title, meta_description(description), "\n".join(blocks), schema)
