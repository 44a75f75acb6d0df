"""
Schema.org JSON-LD builders for generated pages.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence

from ..config.models import Photo, ServiceItem, SiteSpec
from ..render.shared import first_photo, valid_social_links

SchemaObject = Dict[str, Any]

SCHEMA_CONTEXT = "https://schema.org"
PRICE_CURRENCY = "GBP"


def render_json_ld(schema: SchemaObject) -> str:
    """
    Serialise a schema object into a <script> tag.

    Every ``<`` is emitted as ``\\u003c`` so user text cannot close the tag.
    """
    payload = json.dumps(schema, ensure_ascii=False, separators=(",", ":")).replace("<", "\\u003c")
    return f'<script type="application/ld+json">{payload}</script>'


def build_local_business_schema(spec: SiteSpec, photos: Sequence[Photo], base_url: str = "") -> SchemaObject:
    schema: SchemaObject = {
        "@context": SCHEMA_CONTEXT,
        "@type": ["LocalBusiness", "HealthAndBeautyBusiness"],
        "name": spec.business_name or "",
        "description": spec.tagline or "",
    }
    if spec.subdomain_slug and base_url:
        schema["url"] = base_url
    if spec.email:
        schema["email"] = spec.email
    if spec.phone:
        schema["telephone"] = spec.phone

    headshot = first_photo(photos, "headshot")
    if headshot is not None:
        schema["image"] = headshot.public_url

    if spec.primary_location:
        schema["address"] = {"@type": "PostalAddress", "addressLocality": spec.primary_location}
    if spec.service_area:
        schema["areaServed"] = spec.service_area

    credentials = build_credential_list(spec)
    if credentials:
        schema["hasCredential"] = credentials

    if spec.services:
        schema["makesOffer"] = [
            {
                "@type": "Offer",
                "itemOffered": {"@type": "Service", "name": svc.title, "description": svc.description},
                "price": svc.price,
                "priceCurrency": PRICE_CURRENCY,
            }
            for svc in spec.services
        ]

    social = valid_social_links(spec.social_links)
    if social:
        schema["sameAs"] = [link.url for link in social]

    if spec.doula_name:
        person: SchemaObject = {"@type": "Person", "name": spec.doula_name}
        if spec.service_area:
            person["workLocation"] = {"@type": "Place", "name": spec.service_area}
        schema["founder"] = person

    return schema


def build_service_schema(spec: SiteSpec, service: ServiceItem) -> SchemaObject:
    schema: SchemaObject = {
        "@type": "Service",
        "name": service.title,
        "description": service.description,
        "provider": {"@type": "LocalBusiness", "name": spec.business_name or ""},
    }
    if spec.service_area:
        schema["areaServed"] = spec.service_area
    return schema


def build_service_graph(spec: SiteSpec) -> Optional[SchemaObject]:
    """One @graph entry per service; None when there are no services."""
    if not spec.services:
        return None
    return {"@context": SCHEMA_CONTEXT, "@graph": [build_service_schema(spec, svc) for svc in spec.services]}


def build_faq_schema(items: Sequence[tuple[str, str]]) -> Optional[SchemaObject]:
    if not items:
        return None
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "FAQPage",
        "mainEntity": [
            {"@type": "Question", "name": question, "acceptedAnswer": {"@type": "Answer", "text": answer}}
            for question, answer in items
        ],
    }


def build_review_schemas(spec: SiteSpec) -> List[SchemaObject]:
    return [
        {
            "@type": "Review",
            "reviewBody": item.quote,
            "author": {"@type": "Person", "name": item.name},
            "itemReviewed": {"@type": "LocalBusiness", "name": spec.business_name or ""},
            "reviewRating": {"@type": "Rating", "ratingValue": 5, "bestRating": 5},
        }
        for item in spec.testimonials
    ]


def build_aggregate_rating_schema(spec: SiteSpec) -> Optional[SchemaObject]:
    """Aggregate rating with individual reviews; needs at least two testimonials."""
    if len(spec.testimonials) < 2:
        return None
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "LocalBusiness",
        "name": spec.business_name or "",
        "aggregateRating": {
            "@type": "AggregateRating",
            "ratingValue": 5,
            "bestRating": 5,
            "reviewCount": len(spec.testimonials),
        },
        "review": build_review_schemas(spec),
    }


def build_credential_list(spec: SiteSpec) -> List[SchemaObject]:
    credentials: List[SchemaObject] = []
    if spec.training_provider:
        credential: SchemaObject = {
            "@type": "EducationalOccupationalCredential",
            "credentialCategory": "Professional Training",
            "recognizedBy": {"@type": "Organization", "name": spec.training_provider},
        }
        if spec.training_year:
            credential["dateCreated"] = spec.training_year
        credentials.append(credential)
    if spec.doula_uk:
        credentials.append(
            {
                "@type": "EducationalOccupationalCredential",
                "credentialCategory": "Professional Recognition",
                "recognizedBy": {"@type": "Organization", "name": "Doula UK"},
            }
        )
    for training in spec.additional_training:
        credentials.append(
            {
                "@type": "EducationalOccupationalCredential",
                "credentialCategory": "Additional Training",
                "name": training,
            }
        )
    return credentials
