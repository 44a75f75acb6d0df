"""
Content density scoring for site specs.

Core points measure whether the site is functional at all; depth points
measure how personal it will read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Tuple

from .models import SiteSpec

MAX_SUGGESTIONS = 3

CORE_CHECKS: Sequence[Callable[[SiteSpec], bool]] = (
    lambda s: bool(s.business_name),
    lambda s: bool(s.doula_name),
    lambda s: bool(s.service_area),
    lambda s: bool(s.services),
    lambda s: bool(s.email),
    lambda s: bool(s.style),
    lambda s: bool(s.palette),
    lambda s: bool(s.bio),
)

DEPTH_CHECKS: Sequence[Callable[[SiteSpec], bool]] = (
    lambda s: bool(s.primary_location),
    lambda s: len([a for a in (s.service_area or "").split(",") if a.strip()]) >= 3,
    lambda s: bool(s.philosophy),
    lambda s: bool(s.training_provider),
    lambda s: bool(s.training_year),
    lambda s: bool(s.additional_training),
    lambda s: bool(s.testimonials),
    lambda s: any(t.name and t.context for t in s.testimonials),
    lambda s: bool(s.social_links),
    lambda s: bool(s.phone),
    lambda s: bool(s.booking_url),
)

# (predicate that means "missing", suggestion) in priority order.
SUGGESTIONS: Sequence[Tuple[Callable[[SiteSpec], bool], str]] = (
    (lambda s: not s.testimonials, "Add a client testimonial; even one quote builds trust with visitors."),
    (lambda s: not s.philosophy, "Describe your philosophy or approach so families know if you're the right fit."),
    (lambda s: not s.primary_location, "Add your primary location to help families in your area find you."),
    (lambda s: not s.training_provider, "Mention your training provider; it adds credibility and helps with search."),
    (lambda s: not s.additional_training, "List any additional training or CPD, such as rebozo or aromatherapy."),
    (lambda s: not s.booking_url, "Add a booking link so families can reach you in one click."),
)

MAX_CORE = len(CORE_CHECKS)
MAX_DEPTH = len(DEPTH_CHECKS)
MAX_TOTAL = MAX_CORE + MAX_DEPTH


@dataclass
class DensityResult:
    core_score: int
    depth_score: int
    total_score: int
    percentage: int
    level: str
    suggestions: List[str] = field(default_factory=list)


def level_for_score(score: int) -> str:
    if score >= 16:
        return "excellent"
    if score >= 12:
        return "high"
    if score >= 7:
        return "medium"
    return "low"


def calculate_density_score(spec: SiteSpec) -> DensityResult:
    """
    Score how complete a spec is and suggest the most valuable missing details.
    """
    core = sum(1 for check in CORE_CHECKS if check(spec))
    depth = sum(1 for check in DEPTH_CHECKS if check(spec))
    total = core + depth
    suggestions = [text for missing, text in SUGGESTIONS if missing(spec)][:MAX_SUGGESTIONS]
    return DensityResult(
        core_score=core,
        depth_score=depth,
        total_score=total,
        percentage=round(total / MAX_TOTAL * 100),
        level=level_for_score(total),
        suggestions=suggestions,
    )
