"""
Checkpoint history, section edits and deploys.
"""

from .deploy import DeployController, DeployResult, LiveState, build_deploy_files, read_live_state
from .editing import (
    edit_page_sections,
    remove_page_section,
    reorder_page_sections,
    replace_page_section_content,
    restyle_pages,
)
from .store import STATE_ACTIVE, STATE_EMPTY, Checkpoint, CheckpointStore

__all__ = [
    "DeployController",
    "DeployResult",
    "LiveState",
    "build_deploy_files",
    "read_live_state",
    "edit_page_sections",
    "remove_page_section",
    "reorder_page_sections",
    "replace_page_section_content",
    "restyle_pages",
    "STATE_ACTIVE",
    "STATE_EMPTY",
    "Checkpoint",
    "CheckpointStore",
]
