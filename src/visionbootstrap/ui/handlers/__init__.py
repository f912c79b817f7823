"""UI event handlers organized by feature area.

- workspace: rendering and viewer controls (variation, view mode, frame, export)
- synthesis: running the pipeline with streamed progress
- history: opening (list or thumbnail), deleting, and leaving projects
"""

from .history import (
    close_project,
    delete_project,
    dismiss_notice,
    new_project,
    select_project,
    select_thumbnail,
)
from .synthesis import run_synthesis, success_line
from .workspace import (
    WORKSPACE_FIELDS,
    export_variation,
    load_workspace,
    render_workspace,
    select_variation,
    set_device_frame,
    set_display_mode,
)

__all__ = [
    # Workspace handlers
    "WORKSPACE_FIELDS",
    "export_variation",
    "load_workspace",
    "render_workspace",
    "select_variation",
    "set_device_frame",
    "set_display_mode",
    # Synthesis handlers
    "run_synthesis",
    "success_line",
    # History handlers
    "close_project",
    "delete_project",
    "dismiss_notice",
    "new_project",
    "select_project",
    "select_thumbnail",
]
