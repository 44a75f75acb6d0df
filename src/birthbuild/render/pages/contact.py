"""
Contact page: Netlify form, contact details and social links.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ...config.models import Photo, SiteSpec
from ...sections import wrap_section
from ..shared import PageChrome, escape_html, is_safe_link, meta_description, valid_social_links

logger = logging.getLogger(__name__)

_FORM_HTML = """<form name="contact" method="POST" data-netlify="true" class="contact-form" aria-label="Contact form">
            <input type="hidden" name="form-name" value="contact" />
            <div class="form-group">
              <label for="contact-name">Your Name</label>
              <input type="text" id="contact-name" name="name" required autocomplete="name" />
            </div>
            <div class="form-group">
              <label for="contact-email">Your Email</label>
              <input type="email" id="contact-email" name="email" required autocomplete="email" />
            </div>
            <div class="form-group">
              <label for="contact-message">Your Message</label>
              <textarea id="contact-message" name="message" required></textarea>
            </div>
            <button type="submit" class="btn">Send Message</button>
          </form>"""


def generate_contact_page(spec: SiteSpec, photos: Sequence[Photo], chrome: PageChrome) -> str:
    business = spec.business_name or "Birth Worker"
    provider = spec.doula_name or spec.business_name or "your doula"
    area_suffix = f" in {spec.service_area}" if spec.service_area else ""
    title = f"Contact | {business}"
    description = f"Get in touch with {provider}. Enquire about birth work services{area_suffix}."

    details = []
    if spec.email:
        email = escape_html(spec.email)
        details.append(f'<dt>Email</dt><dd><a href="mailto:{email}">{email}</a></dd>')
    if spec.phone:
        phone = escape_html(spec.phone)
        details.append(f'<dt>Phone</dt><dd><a href="tel:{phone}">{phone}</a></dd>')
    if spec.booking_url and not is_safe_link(spec.booking_url):
        logger.warning("Ignoring booking URL for %s: only https links are rendered", spec.id)
    elif spec.booking_url:
        details.append(
            f'<dt>Book Online</dt><dd><a href="{escape_html(spec.booking_url)}" target="_blank" '
            'rel="noopener noreferrer">Schedule a consultation</a></dd>'
        )
    if spec.service_area:
        details.append(f"<dt>Service Area</dt><dd>{escape_html(spec.service_area)}</dd>")
    details_html = ""
    if details:
        joined = "\n              ".join(details)
        details_html = f"""<dl class="contact-info">
              {joined}
            </dl>"""

    social_html = ""
    links = valid_social_links(spec.social_links)
    if links:
        anchors = "\n                ".join(
            f'<a href="{escape_html(link.url)}" target="_blank" rel="noopener noreferrer" '
            f'aria-label="{escape_html(link.platform)}">{escape_html(link.platform)}</a>'
            for link in links
        )
        social_html = f"""<div class="mt-2">
              <h3>Find Me Online</h3>
              <div class="footer-social" style="justify-content: flex-start; margin-top: 0.75rem;">
                {anchors}
              </div>
            </div>"""

    body = f"""<section class="section">
    <div class="section-inner">
      <h1 class="section-title">Get in Touch</h1>
      <p class="section-subtitle">I&#x27;d love to hear from you. Fill in the form below or use any of the contact details provided.</p>
      <div class="about-grid">
        <div>
          {_FORM_HTML}
        </div>
        <div>
            {details_html}
            {social_html}
        </div>
      </div>
    </div>
  </section>"""
    return chrome.document(
        "contact", title, meta_description(description), wrap_section("contact_form", body)
    )
