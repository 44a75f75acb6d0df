"""
Home page: hero, services preview, featured testimonial, about teaser and CTA.
"""

from __future__ import annotations

from typing import Sequence

from ...config.models import Photo, SiteSpec
from ...sections import wrap_section
from ...seo.schema import build_local_business_schema, render_json_ld
from ...util.text import truncate_words
from ..shared import PageChrome, contact_cta, escape_html, first_photo, meta_description

PREVIEW_SERVICES = 3
BIO_TEASER_LIMIT = 200


def generate_home_page(spec: SiteSpec, photos: Sequence[Photo], chrome: PageChrome) -> str:
    business_name = escape_html(spec.business_name) if spec.business_name else "My Doula Practice"
    has_contact = spec.has_page("contact")

    title = f"{spec.business_name or 'Home'} | Birth Worker"
    area_suffix = f" in {spec.service_area}" if spec.service_area else ""
    description = spec.tagline or f"{spec.business_name or 'Professional'} birth work services{area_suffix}"

    blocks = [wrap_section("hero", _hero(spec, photos, business_name, has_contact))]
    if spec.services:
        blocks.append(wrap_section("services", _services_preview(spec, has_contact)))
    if spec.testimonials:
        blocks.append(wrap_section("testimonials", _featured_testimonial(spec)))
    if spec.bio:
        blocks.append(wrap_section("about", _about_teaser(spec, photos)))

    area = escape_html(spec.service_area)
    subtitle = (
        f"Supporting families across {area}." if area else "Supporting families through pregnancy, birth, and beyond."
    )
    cta = contact_cta(spec.pages, "Ready to Begin Your Journey?", subtitle, "Book a Free Consultation")
    if cta:
        blocks.append(wrap_section("cta", cta))

    schema = render_json_ld(build_local_business_schema(spec, photos, chrome.base_url))
    return chrome.document("home", title, meta_description(description), "\n".join(blocks), schema)


def _hero(spec: SiteSpec, photos: Sequence[Photo], business_name: str, has_contact: bool) -> str:
    tagline = escape_html(spec.tagline)
    button = '<a href="contact.html" class="btn">Get in Touch</a>' if has_contact else ""
    hero_photo = first_photo(photos, "hero")
    if hero_photo is not None:
        tagline_html = f'<p class="hero__tagline">{tagline}</p>' if tagline else ""
        button = button.replace('class="btn"', 'class="btn btn--hero"')
        return f"""<section class="hero">
    <img src="{escape_html(hero_photo.public_url)}" alt="{escape_html(hero_photo.alt_text)}" class="hero__bg" />
    <div class="hero__overlay"></div>
    <div class="hero__content">
      <h1>{business_name}</h1>
      {tagline_html}
      {button}
    </div>
  </section>"""
    tagline_html = f'<p class="tagline">{tagline}</p>' if tagline else ""
    return f"""<section class="hero hero--text-only">
    <div class="hero-inner">
      <h1>{business_name}</h1>
      {tagline_html}
      {button}
    </div>
  </section>"""


def _services_preview(spec: SiteSpec, has_contact: bool) -> str:
    enquire = '<a href="contact.html" class="btn btn--outline">Enquire</a>' if has_contact else ""
    cards = "\n      ".join(
        f"""<div class="card">
          <h3>{escape_html(svc.title)}</h3>
          <p>{escape_html(svc.description)}</p>
          <span class="price">{escape_html(svc.price)}</span>
          {enquire}
        </div>"""
        for svc in spec.services[:PREVIEW_SERVICES]
    )
    view_all = ""
    if len(spec.services) > PREVIEW_SERVICES and spec.has_page("services"):
        view_all = '<div class="text-center mt-2"><a href="services.html" class="btn btn--outline">View All Services</a></div>'
    return f"""<section class="section section--alt" id="services">
    <div class="section-inner">
      <h2 class="section-title">Services</h2>
      <div class="cards">{cards}</div>
      {view_all}
    </div>
  </section>"""


def _featured_testimonial(spec: SiteSpec) -> str:
    first = spec.testimonials[0]
    read_more = ""
    if spec.has_page("testimonials") and len(spec.testimonials) > 1:
        read_more = '<div class="mt-2"><a href="testimonials.html" class="btn btn--outline">Read More Testimonials</a></div>'
    return f"""<section class="section" id="testimonials">
    <div class="section-inner">
      <h2 class="section-title">What Families Say</h2>
      <div class="testimonial">
        <blockquote>&ldquo;{escape_html(first.quote)}&rdquo;</blockquote>
        <cite>{escape_html(first.name)}</cite>
        <span class="context">{escape_html(first.context)}</span>
      </div>
      {read_more}
    </div>
  </section>"""


def _about_teaser(spec: SiteSpec, photos: Sequence[Photo]) -> str:
    headshot = first_photo(photos, "headshot")
    photo_html = ""
    if headshot is not None:
        photo_html = (
            f'<div><img src="{escape_html(headshot.public_url)}" alt="{escape_html(headshot.alt_text)}" '
            'class="about-photo" /></div>'
        )
    read_more = (
        '<a href="about.html" class="btn btn--outline">Read More About Me</a>' if spec.has_page("about") else ""
    )
    teaser = truncate_words(spec.bio or "", BIO_TEASER_LIMIT)
    return f"""<section class="section section--alt" id="about">
    <div class="section-inner">
      <h2 class="section-title">About</h2>
      <div class="about-grid">
        <div>
          <p>{escape_html(teaser)}</p>
          <div class="mt-2">{read_more}</div>
        </div>
        {photo_html}
      </div>
    </div>
  </section>"""
