"""Workspace rendering and viewer control handlers."""

import logging

import gradio as gr

from visionbootstrap.core.export import (
    build_preview_frame,
    build_source_listing,
    write_export,
)
from visionbootstrap.core.models import GeneratedProject

from ..adapters import history_choices, history_gallery, variation_choices
from ..models import (
    SelectVariation,
    SetDeviceFrame,
    SetDisplayMode,
    WorkspaceState,
    WorkspaceStatus,
)
from ..services import WorkspaceServices
from ..state import reduce

logger = logging.getLogger(__name__)

# Order of the updates returned by render_workspace; WorkspaceView exposes its
# components in the same order.
WORKSPACE_FIELDS = (
    "form_group",
    "generating_group",
    "viewer_group",
    "notice",
    "dismiss_button",
    "header",
    "elapsed",
    "progress_log",
    "preview",
    "source",
    "html_code",
    "css_code",
    "variation",
    "display_mode",
    "device_frame",
    "history",
    "thumbnails",
    "start_button",
    "new_button",
    "export_file",
)


def format_progress_log(lines: tuple[str, ...]) -> str:
    """Render progress lines as a code block for the log panel."""
    if not lines:
        return "```\n> _\n```"
    return "```\n" + "\n".join(lines) + "\n```"


def format_header(state: WorkspaceState) -> str:
    """Title shown above the workspace."""
    project = state.active_project
    if project is None or state.status is not WorkspaceStatus.VIEWING:
        return "## Synthesis Config"
    return f"## {project.name}\n**Version {state.active_variation_index + 1}** · {project.style}"


def render_workspace(state: WorkspaceState, projects: list[GeneratedProject]) -> tuple:
    """Build the component updates that display ``state``.

    Args:
        state: Current workspace state
        projects: Project history, newest first

    Returns:
        Tuple of gr.update dicts in WORKSPACE_FIELDS order
    """
    status = state.status
    project = state.active_project if status is WorkspaceStatus.VIEWING else None
    variation = state.active_variation if project is not None else None
    preview_mode = state.display_mode == "preview"

    if variation is not None:
        preview = build_preview_frame(variation, state.device_frame)
        source = build_source_listing(project, state.active_variation_index, variation)
        html_code, css_code = variation.html, variation.css
    else:
        preview = build_preview_frame(None)
        source = html_code = css_code = ""

    notice = f"❌ **Error:** {state.notice}" if state.notice else ""

    return (
        gr.update(visible=status is WorkspaceStatus.IDLE),
        gr.update(visible=status is WorkspaceStatus.GENERATING),
        gr.update(visible=status is WorkspaceStatus.VIEWING),
        gr.update(value=notice, visible=bool(notice)),
        gr.update(visible=bool(notice)),
        gr.update(value=format_header(state)),
        gr.update(value=f"### {state.elapsed_seconds}s\nTime Elapsed"),
        gr.update(value=format_progress_log(state.progress_log)),
        gr.update(value=preview, visible=preview_mode),
        gr.update(value=source, visible=not preview_mode),
        gr.update(value=html_code),
        gr.update(value=css_code),
        gr.update(
            choices=variation_choices(project),
            value=state.active_variation_index if project is not None else None,
        ),
        gr.update(value=state.display_mode),
        gr.update(value=state.device_frame),
        gr.update(
            choices=history_choices(projects),
            value=project.id if project is not None else None,
        ),
        gr.update(value=history_gallery(projects)),
        gr.update(interactive=not state.is_generating),
        gr.update(interactive=not state.is_generating),
        gr.update(value=None, visible=False),
    )


def load_workspace(state: WorkspaceState, services: WorkspaceServices) -> tuple:
    """Render the workspace on page load.

    Returns:
        Tuple of (*workspace_updates, state)
    """
    return (*render_workspace(state, services.store.list()), state)


def select_variation(index: int | None, state: WorkspaceState, services: WorkspaceServices) -> tuple:
    """Switch the shown variation.

    Returns:
        Tuple of (*workspace_updates, state)
    """
    if index is not None:
        state = reduce(state, SelectVariation(int(index)))
    return (*render_workspace(state, services.store.list()), state)


def set_display_mode(mode: str, state: WorkspaceState, services: WorkspaceServices) -> tuple:
    """Toggle between rendered preview and source listing.

    Returns:
        Tuple of (*workspace_updates, state)
    """
    state = reduce(state, SetDisplayMode(mode))
    return (*render_workspace(state, services.store.list()), state)


def set_device_frame(frame: str, state: WorkspaceState, services: WorkspaceServices) -> tuple:
    """Toggle the preview frame between desktop and mobile widths.

    Returns:
        Tuple of (*workspace_updates, state)
    """
    state = reduce(state, SetDeviceFrame(frame))
    return (*render_workspace(state, services.store.list()), state)


def export_variation(state: WorkspaceState, services: WorkspaceServices):
    """Write the active variation as a standalone document for download.

    Returns:
        gr.update for the export file component
    """
    project = state.active_project
    if project is None or state.active_variation is None:
        gr.Warning("Nothing to export. Select a project first.")
        return gr.update(value=None, visible=False)

    try:
        path = write_export(project, state.active_variation_index, services.config.export_dir)
    except OSError as e:
        logger.error(f"Error exporting variation: {e}", exc_info=True)
        gr.Warning(f"Export failed: {e}")
        return gr.update(value=None, visible=False)

    gr.Info(f"Exported {path.name}")
    return gr.update(value=str(path), visible=True)
