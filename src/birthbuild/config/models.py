"""
Pydantic models for validating and hashing site spec files.
"""

from __future__ import annotations

import hashlib
import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..errors import ConfigError
from ..util.text import slugify

logger = logging.getLogger(__name__)

STYLE_OPTIONS = ("modern", "classic", "minimal")
PALETTE_OPTIONS = ("sage_sand", "blush_neutral", "deep_earth", "ocean_calm", "custom")
TYPOGRAPHY_OPTIONS = ("modern", "classic", "mixed")
SCALE_OPTIONS = ("small", "default", "large")
DENSITY_OPTIONS = ("compact", "default", "relaxed", "spacious")
BORDER_RADIUS_OPTIONS = ("sharp", "slightly-rounded", "rounded", "circular")
PAGE_OPTIONS = ("home", "about", "services", "contact", "testimonials", "faq")
DEFAULT_PAGES = ["home", "about", "services", "contact"]

_DEFAULT_CHOICES = {
    "style": STYLE_OPTIONS[0],
    "palette": PALETTE_OPTIONS[0],
    "typography": TYPOGRAPHY_OPTIONS[0],
}
_ALLOWED_CHOICES = {
    "style": STYLE_OPTIONS,
    "palette": PALETTE_OPTIONS,
    "typography": TYPOGRAPHY_OPTIONS,
}
_DESIGN_CHOICES = {
    "scale": SCALE_OPTIONS,
    "density": DENSITY_OPTIONS,
    "border_radius": BORDER_RADIUS_OPTIONS,
}


class ServiceItem(BaseModel):
    """A single service offered by the practice."""

    type: str = ""
    title: str
    description: str = ""
    price: str = ""


class Testimonial(BaseModel):
    """A client quote with attribution."""

    quote: str
    name: str = ""
    context: str = ""


class CustomColours(BaseModel):
    """User-picked colour set; values are expected to be #RRGGBB strings."""

    model_config = ConfigDict(frozen=True)

    background: str
    primary: str
    accent: str
    text: str
    cta: str


class DesignConfig(BaseModel):
    """
    Fine-grained design overrides layered on top of the style, palette and
    typography presets.

    Every field is optional; an unset field keeps the value derived from the
    presets. In TOML this is a ``[design]`` table with an optional
    ``[design.colours]`` sub-table.

    Attributes:
        colours: Full replacement colour set.
        heading_font: Heading font name from the curated font registry.
        body_font: Body font name from the curated font registry.
        scale: Typography scale ("small", "default" or "large").
        density: Spacing density ("compact", "default", "relaxed" or "spacious").
        border_radius: Corner style ("sharp", "slightly-rounded", "rounded" or "circular").
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    colours: Optional[CustomColours] = None
    heading_font: Optional[str] = None
    body_font: Optional[str] = None
    scale: Optional[str] = None
    density: Optional[str] = None
    border_radius: Optional[str] = None

    @field_validator("heading_font", "body_font", mode="before")
    @classmethod
    def _blank_font_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("scale", "density", "border_radius", mode="before")
    @classmethod
    def _drop_unknown_option(cls, value: Any, info) -> Any:
        if value is None:
            return None
        candidate = str(value).strip().lower()
        if candidate not in _DESIGN_CHOICES[info.field_name]:
            logger.warning("Unknown design %s '%s'; keeping the preset value", info.field_name, value)
            return None
        return candidate


class Photo(BaseModel):
    """
    Reference to an uploaded photo owned by the storage collaborator.

    Attributes:
        purpose: Where the photo is used ("headshot", "hero" or "gallery").
        storage_path: Object path inside the storage bucket.
        alt_text: Accessible description.
        sort_order: Ordering within a purpose.
        public_url: Resolved public URL; filled by `resolve_photos` when missing.
    """

    purpose: Literal["headshot", "hero", "gallery"]
    storage_path: str = ""
    alt_text: str = ""
    sort_order: int = 0
    public_url: Optional[str] = None


class SiteSpec(BaseModel):
    """
    Authoritative structured description of one birth worker's website.

    The generation engine treats an instance as a read-only snapshot. List and
    mapping fields are always present, even when empty.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str = ""
    status: Literal["draft", "building", "live", "error"] = "draft"

    business_name: Optional[str] = None
    doula_name: Optional[str] = None
    tagline: Optional[str] = None
    service_area: Optional[str] = None
    primary_location: Optional[str] = None
    services: List[ServiceItem] = Field(default_factory=list)

    email: Optional[str] = None
    phone: Optional[str] = None
    booking_url: Optional[str] = None
    social_links: Dict[str, str] = Field(default_factory=dict)

    bio: Optional[str] = None
    philosophy: Optional[str] = None
    testimonials: List[Testimonial] = Field(default_factory=list)
    faq_enabled: bool = True

    style: str = "modern"
    palette: str = "sage_sand"
    custom_colours: Optional[CustomColours] = None
    typography: str = "modern"
    design: Optional[DesignConfig] = None

    doula_uk: bool = False
    training_provider: Optional[str] = None
    training_year: Optional[str] = None
    additional_training: List[str] = Field(default_factory=list)

    primary_keyword: Optional[str] = None
    pages: List[str] = Field(default_factory=lambda: list(DEFAULT_PAGES))

    subdomain_slug: Optional[str] = None
    netlify_site_id: Optional[str] = None
    deploy_url: Optional[str] = None

    @field_validator("services", "testimonials", "additional_training", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("social_links", mode="before")
    @classmethod
    def _none_to_mapping(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            # Drop unset platforms so templates never see empty hrefs.
            return {str(k): str(v) for k, v in value.items() if v}
        return value

    @field_validator("pages", mode="before")
    @classmethod
    def _normalise_pages(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            seen: list[str] = []
            for item in value:
                slug = str(item).strip().lower()
                if slug not in PAGE_OPTIONS:
                    logger.warning("Ignoring unknown page '%s'", item)
                    continue
                if slug not in seen:
                    seen.append(slug)
            return seen
        return value

    @field_validator("style", "palette", "typography", mode="before")
    @classmethod
    def _default_unknown_choice(cls, value: Any, info) -> Any:
        field = info.field_name
        if value is None:
            return _DEFAULT_CHOICES[field]
        candidate = str(value).strip().lower()
        if candidate not in _ALLOWED_CHOICES[field]:
            logger.warning("Unknown %s '%s'; using '%s'", field, value, _DEFAULT_CHOICES[field])
            return _DEFAULT_CHOICES[field]
        return candidate

    @model_validator(mode="after")
    def _derive_id(self) -> "SiteSpec":
        if not self.id:
            self.id = slugify(self.business_name or self.doula_name or "")
        return self

    @property
    def hash(self) -> str:
        """
        Deterministic hash of the normalised spec, used to detect changes.
        """
        payload = self.model_dump(mode="json", round_trip=True)
        blob = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
        return hashlib.sha256(blob).hexdigest()

    def has_page(self, slug: str) -> bool:
        return slug in self.pages


def resolve_photos(photos: List[Photo], storage_base_url: Optional[str]) -> List[Photo]:
    """
    Fill in public URLs from the storage base URL and sort by `sort_order`.

    Photos without a public URL and without a base URL to derive one are dropped.
    """
    resolved: List[Photo] = []
    base = (storage_base_url or "").rstrip("/")
    for photo in sorted(photos, key=lambda p: (p.purpose, p.sort_order)):
        if photo.public_url:
            resolved.append(photo)
            continue
        if base and photo.storage_path:
            url = f"{base}/{photo.storage_path.lstrip('/')}"
            resolved.append(photo.model_copy(update={"public_url": url}))
            continue
        logger.warning("Skipping %s photo '%s': no public URL available", photo.purpose, photo.storage_path)
    return resolved


def load_site_inputs(path: Path | str) -> tuple[SiteSpec, List[Photo]]:
    """
    Load and validate a TOML or JSON site file.

    TOML files use singular table arrays ([[service]], [[testimonial]], [[photo]])
    and a [social_links] table. JSON files use the plural field names and an
    optional "photos" list.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    spec_path = Path(path).expanduser().resolve()
    if not spec_path.exists():
        raise ConfigError(f"Site spec file not found: {spec_path}")

    raw_data = _read_structured_file(spec_path)
    if spec_path.suffix.lower() == ".toml":
        raw_data = _normalize_toml_schema(raw_data)
    if not isinstance(raw_data, dict):
        raise ConfigError("Site spec root must be a table/object.")

    raw_photos = raw_data.pop("photos", None) or []
    try:
        spec = SiteSpec.model_validate(raw_data)
        photos = [Photo.model_validate(item) for item in raw_photos]
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
    return spec, photos


def load_site_spec(path: Path | str) -> SiteSpec:
    """Load only the SiteSpec from a TOML or JSON site file."""
    spec, _ = load_site_inputs(path)
    return spec


def load_photos(path: Path | str) -> List[Photo]:
    """
    Load a photo list from a JSON array or a TOML file with [[photo]] blocks.
    """
    photo_path = Path(path).expanduser().resolve()
    if not photo_path.exists():
        raise ConfigError(f"Photo list not found: {photo_path}")
    data = _read_structured_file(photo_path)
    if isinstance(data, dict):
        data = _coerce_table_array(data.get("photo"), "photo")
    if not isinstance(data, list):
        raise ConfigError("Photo list must be an array of objects.")
    try:
        return [Photo.model_validate(item) for item in data]
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def _read_structured_file(path: Path) -> Any:
    try:
        if path.suffix.lower() == ".toml":
            with path.open("rb") as handle:
                return tomllib.load(handle)
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read {path.name}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path.name}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path.name}: {exc}") from exc


def _normalize_toml_schema(data: Any) -> Dict[str, Any]:
    """
    Map singular TOML table arrays onto the plural model fields.
    """
    if not isinstance(data, dict):
        raise ConfigError("Site spec root must be a TOML table.")

    for plural, singular in (("services", "service"), ("testimonials", "testimonial"), ("photos", "photo")):
        if plural in data:
            raise ConfigError(f"Use [[{singular}]] blocks (singular) instead of [[{plural}]].")

    normalized = dict(data)
    normalized["services"] = _coerce_table_array(normalized.pop("service", None), "service")
    normalized["testimonials"] = _coerce_table_array(normalized.pop("testimonial", None), "testimonial")
    normalized["photos"] = _coerce_table_array(normalized.pop("photo", None), "photo")
    return normalized


def _coerce_table_array(value: Any, label: str) -> list[dict]:
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        if not all(isinstance(item, dict) for item in value):
            raise ConfigError(f"Each [[{label}]] entry must be a table/object.")
        return value
    raise ConfigError(f"Invalid [{label}] block; expected a table or array of tables.")
