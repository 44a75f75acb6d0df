"""
Configuration helpers: site spec models, loaders, settings and scoring.
"""

from ..errors import ConfigError
from .models import (
    CustomColours,
    DesignConfig,
    Photo,
    ServiceItem,
    SiteSpec,
    Testimonial,
    load_photos,
    load_site_inputs,
    load_site_spec,
    resolve_photos,
)
from .settings import Secrets, Settings, get_secrets, get_settings

__all__ = [
    "ConfigError",
    "CustomColours",
    "DesignConfig",
    "Photo",
    "ServiceItem",
    "SiteSpec",
    "Testimonial",
    "load_photos",
    "load_site_inputs",
    "load_site_spec",
    "resolve_photos",
    "Secrets",
    "Settings",
    "get_secrets",
    "get_settings",
]
