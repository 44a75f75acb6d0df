"""
Named section markers embedded in generated page HTML.

A section is the span between ``<!-- bb-section:NAME -->`` and the matching
``<!-- /bb-section:NAME -->``. The functions here are pure string transforms:
they never raise on malformed markup, and they never touch text outside the
section(s) they target.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

NAME_PATTERN = r"[A-Za-z_][A-Za-z0-9_-]*"

_NAME_RE = re.compile(rf"^{NAME_PATTERN}$")
_SECTION_RE = re.compile(
    rf"<!-- bb-section:({NAME_PATTERN}) -->(.*?)<!-- /bb-section:\1 -->",
    re.DOTALL,
)


@dataclass(frozen=True)
class ParsedSection:
    name: str
    html: str
    start_index: int
    end_index: int
    content: str = ""


def open_marker(name: str) -> str:
    return f"<!-- bb-section:{name} -->"


def close_marker(name: str) -> str:
    return f"<!-- /bb-section:{name} -->"


def is_valid_section_name(name: str) -> bool:
    return bool(_NAME_RE.match(name or ""))


def wrap_section(name: str, inner: str) -> str:
    """
    Surround a block of markup with a named marker pair.

    Raises:
        ValueError: If the name does not satisfy the marker grammar.
    """
    if not is_valid_section_name(name):
        raise ValueError(f"Invalid section name: {name!r}")
    return f"{open_marker(name)}\n{inner}\n{close_marker(name)}"


def parse_sections(html: str) -> List[ParsedSection]:
    """
    Return every well-formed section in document order.

    Markers whose closing name does not match the opening name produce no
    section; matching is non-greedy so the first closing marker wins.
    """
    return [
        ParsedSection(
            name=match.group(1),
            html=match.group(0),
            start_index=match.start(),
            end_index=match.end(),
            content=match.group(2),
        )
        for match in _SECTION_RE.finditer(html or "")
    ]


def get_section_names(html: str) -> List[str]:
    return [section.name for section in parse_sections(html)]


def extract_section(html: str, name: str) -> Optional[ParsedSection]:
    """First section called ``name``, or None."""
    for section in parse_sections(html):
        if section.name == name:
            return section
    return None


def reorder_sections(html: str, new_order: Iterable[str]) -> str:
    """
    Emit the named sections first, in ``new_order``, then the rest in their
    original relative order.

    Text before the first section and after the last one is kept verbatim,
    and the original separators between sections stay in their slots, so
    asking for the current order returns the input unchanged.
    """
    sections = parse_sections(html)
    if not sections:
        return html

    by_name = {}
    for section in sections:
        by_name.setdefault(section.name, section)

    ordered: List[ParsedSection] = []
    placed = set()
    for name in new_order:
        section = by_name.get(name)
        if section is not None and id(section) not in placed:
            ordered.append(section)
            placed.add(id(section))
    ordered.extend(section for section in sections if id(section) not in placed)

    gaps = [html[prev.end_index : nxt.start_index] for prev, nxt in zip(sections, sections[1:])]
    parts = [html[: sections[0].start_index]]
    for index, section in enumerate(ordered):
        parts.append(section.html)
        if index < len(gaps):
            parts.append(gaps[index])
    parts.append(html[sections[-1].end_index :])
    return "".join(parts)


def remove_section(html: str, name: str) -> str:
    section = extract_section(html, name)
    if section is None:
        return html
    return html[: section.start_index] + html[section.end_index :]


def replace_section(html: str, name: str, new_section_html: str) -> str:
    """
    Replace the whole marked span, markers included. No-op if absent.
    """
    section = extract_section(html, name)
    if section is None:
        return html
    return html[: section.start_index] + new_section_html + html[section.end_index :]


def replace_section_content(html: str, name: str, new_content: str) -> str:
    """
    Replace only what lies between the markers of ``name``. No-op if absent.
    """
    section = extract_section(html, name)
    if section is None:
        return html
    rebuilt = f"{open_marker(name)}{new_content}{close_marker(name)}"
    return html[: section.start_index] + rebuilt + html[section.end_index :]
