"""
llms.txt summary for generated sites (llmstxt.org markdown layout).
"""

from __future__ import annotations

from typing import List

from ..config.models import SiteSpec
from ..render.shared import is_safe_link
from ..util.text import truncate_words

ABOUT_LIMIT = 500


def generate_llms_txt(spec: SiteSpec, base_url: str = "") -> str:
    lines: List[str] = [f"# {spec.business_name or 'Birth Worker'}"]

    summary = []
    if spec.tagline:
        summary.append(spec.tagline)
    if spec.service_area:
        summary.append(f"Serving {spec.service_area}")
    if summary:
        lines.append(f"> {'. '.join(summary)}.")
    lines.append("")

    if spec.services:
        lines.append("## Services")
        for svc in spec.services:
            price = f" ({svc.price})" if svc.price else ""
            lines.append(f"- {svc.title}: {svc.description}{price}")
        lines.append("")

    if spec.bio:
        lines.extend(["## About", truncate_words(spec.bio, ABOUT_LIMIT), ""])

    qualifications = []
    if spec.training_provider:
        year = f" ({spec.training_year})" if spec.training_year else ""
        qualifications.append(f"{spec.training_provider}{year}")
    if spec.doula_uk:
        qualifications.append("Doula UK recognised")
    qualifications.extend(spec.additional_training)
    if qualifications:
        lines.append("## Qualifications")
        lines.extend(f"- {item}" for item in qualifications)
        lines.append("")

    contact = []
    if spec.email:
        contact.append(f"- Email: {spec.email}")
    if spec.phone:
        contact.append(f"- Phone: {spec.phone}")
    if spec.subdomain_slug and base_url:
        contact.append(f"- Website: {base_url}")
    if is_safe_link(spec.booking_url):
        contact.append(f"- Booking: {spec.booking_url}")
    if contact:
        lines.append("## Contact")
        lines.extend(contact)
        lines.append("")

    if spec.service_area:
        lines.extend(["## Service Area", spec.service_area, ""])

    return "\n".join(lines)
