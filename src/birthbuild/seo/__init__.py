"""
Structured data and crawler-facing files derived from a site spec.
"""

from .files import generate_robots_txt, generate_sitemap
from .llms import generate_llms_txt
from .schema import (
    build_aggregate_rating_schema,
    build_faq_schema,
    build_local_business_schema,
    build_service_graph,
    render_json_ld,
)

__all__ = [
    "generate_robots_txt",
    "generate_sitemap",
    "generate_llms_txt",
    "build_aggregate_rating_schema",
    "build_faq_schema",
    "build_local_business_schema",
    "build_service_graph",
    "render_json_ld",
]
