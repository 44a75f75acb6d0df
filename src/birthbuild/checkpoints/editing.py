"""
Section-level edits over stored checkpoints.

Edits never touch an existing checkpoint: the transformed page set is stored
as the next version.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from ..design.css_editor import (
    CssVariables,
    extract_css_variables,
    update_all_pages,
    update_css_text,
    validate_css_changes,
)
from ..design.typography import build_google_fonts_url
from ..errors import CheckpointError
from ..pipeline.generator import GeneratedPage
from ..sections import remove_section, reorder_sections, replace_section_content
from .store import Checkpoint, CheckpointStore

logger = logging.getLogger(__name__)

HtmlTransform = Callable[[str], str]


def edit_page_sections(
    store: CheckpointStore,
    site_spec_id: str,
    checkpoint_id: str,
    filename: str,
    operation: HtmlTransform,
    label: Optional[str] = None,
) -> Checkpoint:
    """
    Apply ``operation`` to one page of a checkpoint and store the result.

    Returns the source checkpoint unchanged when the transform is a no-op.

    Raises:
        CheckpointNotFoundError: If the checkpoint does not exist.
        CheckpointError: If the page is not part of the checkpoint.
    """
    source = store.get(site_spec_id, checkpoint_id)
    page = source.page(filename)
    if page is None:
        raise CheckpointError(f"Page {filename} is not part of checkpoint v{source.version}.")

    updated_html = operation(page.html)
    if updated_html == page.html:
        logger.info("Edit of %s in v%d changed nothing; no checkpoint created", filename, source.version)
        return source

    pages = [
        GeneratedPage(filename=item.filename, html=updated_html) if item.filename == filename else item
        for item in source.pages
    ]
    return store.create(
        site_spec_id,
        pages,
        design_system=source.design_system,
        label=label or f"Edited {filename} (from v{source.version})",
        llms_txt=source.llms_txt,
    )


def reorder_page_sections(
    store: CheckpointStore,
    site_spec_id: str,
    checkpoint_id: str,
    filename: str,
    new_order: Sequence[str],
    label: Optional[str] = None,
) -> Checkpoint:
    order = list(new_order)
    return edit_page_sections(
        store,
        site_spec_id,
        checkpoint_id,
        filename,
        lambda html: reorder_sections(html, order),
        label or f"Reordered sections on {filename}",
    )


def remove_page_section(
    store: CheckpointStore,
    site_spec_id: str,
    checkpoint_id: str,
    filename: str,
    name: str,
    label: Optional[str] = None,
) -> Checkpoint:
    return edit_page_sections(
        store,
        site_spec_id,
        checkpoint_id,
        filename,
        lambda html: remove_section(html, name),
        label or f"Removed {name} from {filename}",
    )


def replace_page_section_content(
    store: CheckpointStore,
    site_spec_id: str,
    checkpoint_id: str,
    filename: str,
    name: str,
    new_content: str,
    label: Optional[str] = None,
) -> Checkpoint:
    return edit_page_sections(
        store,
        site_spec_id,
        checkpoint_id,
        filename,
        lambda html: replace_section_content(html, name, new_content),
        label or f"Updated {name} on {filename}",
    )


def restyle_pages(
    store: CheckpointStore,
    site_spec_id: str,
    checkpoint_id: str,
    changes: CssVariables,
    label: Optional[str] = None,
) -> Checkpoint:
    """
    Apply colour and font changes to every page of a checkpoint and store the result.

    The captured design system is restyled too, so later edits and deploys
    see the same values. Returns the source checkpoint when nothing changes.

    Raises:
        CheckpointNotFoundError: If the checkpoint does not exist.
        DesignError: If a colour is not #RRGGBB or a font is not in the registry.
    """
    validate_css_changes(changes)
    source = store.get(site_spec_id, checkpoint_id)
    pages = update_all_pages(source.pages, changes)
    if all(new.html == old.html for new, old in zip(pages, source.pages)):
        logger.info("Restyle of v%d changed nothing; no checkpoint created", source.version)
        return source

    design_system = source.design_system
    update = {"css": update_css_text(design_system.css, changes)}
    if changes.changes_fonts:
        current = extract_css_variables(pages[0].html)
        update["head_fonts_url"] = build_google_fonts_url(current.font_heading, current.font_body)
    return store.create(
        site_spec_id,
        pages,
        design_system=design_system.model_copy(update=update),
        label=label or f"Restyled pages (from v{source.version})",
        llms_txt=source.llms_txt,
    )
