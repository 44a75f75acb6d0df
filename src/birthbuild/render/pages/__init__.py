"""
Page generators, one per logical page slug.
"""

from typing import Callable, Mapping, Sequence

from ...config.models import Photo, SiteSpec
from ..shared import PageChrome
from .about import generate_about_page
from .contact import generate_contact_page
from .faq import generate_faq_page
from .home import generate_home_page
from .services import generate_services_page
from .testimonials import generate_testimonials_page

PageGenerator = Callable[[SiteSpec, Sequence[Photo], PageChrome], str]

PAGE_GENERATORS: Mapping[str, PageGenerator] = {
    "home": generate_home_page,
    "about": generate_about_page,
    "services": generate_services_page,
    "contact": generate_contact_page,
    "testimonials": generate_testimonials_page,
    "faq": generate_faq_page,
}

__all__ = [
    "PAGE_GENERATORS",
    "PageGenerator",
    "generate_about_page",
    "generate_contact_page",
    "generate_faq_page",
    "generate_home_page",
    "generate_services_page",
    "generate_testimonials_page",
]
