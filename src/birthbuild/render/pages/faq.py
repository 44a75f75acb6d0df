"""
FAQ page: a fixed editorial set of questions, templated with the service area.
"""

from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from ...config.models import Photo, SiteSpec
from ...sections import wrap_section
from ...seo.schema import build_faq_schema, render_json_ld
from ..shared import PageChrome, contact_cta, escape_html, meta_description

FAQ_ITEMS: Sequence[Tuple[str, Callable[[str], str]]] = (
    (
        "What does a doula do?",
        lambda area: (
            "A doula provides continuous emotional, physical, and informational support before, during, and "
            f"after birth. I work with families{f' across {area}' if area else ''} to help them feel confident "
            "and prepared for their birthing experience. Unlike midwives, doulas do not provide medical care but "
            "instead complement the medical team by offering personalised, non-clinical support."
        ),
    ),
    (
        "When should I hire a doula?",
        lambda area: (
            "Many families choose to engage a doula during the second trimester, around 20-24 weeks, but it's "
            "never too early or too late to reach out. Early engagement allows more time for us to build a "
            "relationship and prepare together, but I'm happy to support families at any stage of their pregnancy."
        ),
    ),
    (
        "Do you work alongside midwives and doctors?",
        lambda area: (
            "Absolutely. A doula works alongside your medical team, not in place of them. I support you "
            "emotionally and practically while your midwife or doctor handles all clinical care. Research shows "
            "that having a doula alongside medical professionals can lead to more positive birth experiences and "
            "outcomes."
        ),
    ),
    (
        "What happens if my birth doesn't go to plan?",
        lambda area: (
            "Birth is unpredictable, and I'm trained to support you through any scenario, whether that's a "
            "straightforward vaginal birth, an induction, or a caesarean section. My role is to ensure you feel "
            "informed, supported, and empowered regardless of how your birth unfolds. I help you understand your "
            "options and advocate for your preferences throughout."
        ),
    ),
    (
        "Can my partner still be involved if I have a doula?",
        lambda area: (
            "Yes! Having a doula doesn't replace your partner's role; it enhances it. I support both you and "
            "your partner, giving them practical tools and confidence to be actively involved. Many partners say "
            "that having a doula helped them feel less anxious and more present during the birth. I'm there to "
            "support your whole family."
        ),
    ),
    (
        "How do I know if a doula is right for me?",
        lambda area: (
            "I offer a free initial consultation where we can chat about your needs, expectations, and "
            "preferences. There's no obligation; it's simply a chance for us to see if we're a good fit. Most "
            "families find that having dedicated, continuous support during pregnancy and birth makes a "
            "meaningful difference to their overall experience."
        ),
    ),
)


def faq_entries(service_area: str) -> List[Tuple[str, str]]:
    """Question and answer pairs for a service area (may be empty)."""
    return [(question, answer(service_area)) for question, answer in FAQ_ITEMS]


def generate_faq_page(spec: SiteSpec, photos: Sequence[Photo], chrome: PageChrome) -> str:
    area_suffix = f" in {spec.service_area}" if spec.service_area else ""
    title = f"FAQ | {spec.business_name or 'Birth Worker'}"
    description = f"Frequently asked questions about doula support{area_suffix}."

    entries = faq_entries(spec.service_area or "")
    items = "\n      ".join(
        f"""<details class="faq-item">
        <summary>{escape_html(question)}</summary>
        <div class="faq-answer">
          <p>{escape_html(answer)}</p>
        </div>
      </details>"""
        for question, answer in entries
    )
    blocks = [
        wrap_section(
            "faq",
            f"""<section class="section">
    <div class="section-inner">
      <h1 class="section-title">Frequently Asked Questions</h1>
      <p class="section-subtitle">Common questions about doula support and working together.</p>
      {items}
    </div>
  </section>""",
        )
    ]
    cta = contact_cta(
        spec.pages,
        "Still Have Questions?",
        "I&#x27;m always happy to chat. Get in touch and I&#x27;ll respond as soon as I can.",
        "Contact Me",
    )
    if cta:
        blocks.append(wrap_section("cta", cta))

    schema = build_faq_schema(entries)
    trailing = render_json_ld(schema) if schema is not None else ""
    return chrome.document("faq", title, meta_description(description), "\n".join(blocks), trailing)
