"""Project history handlers."""

import logging

import gradio as gr

from ..adapters import draft_to_form
from ..models import CloseProject, DismissNotice, NewProject, ProjectDeleted, SelectProject, WorkspaceState
from ..services import WorkspaceServices
from ..state import reduce
from .workspace import render_workspace

logger = logging.getLogger(__name__)


def select_project(project_id: str | None, state: WorkspaceState, services: WorkspaceServices) -> tuple:
    """Open a project from the history list.

    Args:
        project_id: Selected history entry
        state: Workspace state
        services: Shared collaborators

    Returns:
        Tuple of (*workspace_updates, state)
    """
    if not project_id:
        return (*render_workspace(state, services.store.list()), state)

    project = services.store.get(project_id)
    if project is None:
        logger.warning(f"Selected project not found: {project_id}")
        gr.Warning("That project no longer exists.")
    elif state.is_generating:
        gr.Info("Wait for the current synthesis to finish.")
    else:
        state = reduce(state, SelectProject(project))
        logger.info(f"Opened project {project.name!r} ({project.id})")

    return (*render_workspace(state, services.store.list()), state)


def select_thumbnail(index, state: WorkspaceState, services: WorkspaceServices) -> tuple:
    """Open the project whose gallery thumbnail was clicked.

    The gallery lists projects in history order, so the clicked index maps
    onto ``services.store.list()``.

    Args:
        index: Gallery index from the select event
        state: Workspace state
        services: Shared collaborators

    Returns:
        Tuple of (*workspace_updates, state)
    """
    projects = services.store.list()
    if not isinstance(index, int) or not 0 <= index < len(projects):
        logger.warning(f"Gallery selection out of range: {index}")
        return (*render_workspace(state, projects), state)
    return select_project(projects[index].id, state, services)


def delete_project(project_id: str | None, state: WorkspaceState, services: WorkspaceServices) -> tuple:
    """Delete the selected history entry.

    Deleting the open project returns the workspace to the form.

    Returns:
        Tuple of (*workspace_updates, state)
    """
    if not project_id:
        gr.Info("Select a project to delete.")
        return (*render_workspace(state, services.store.list()), state)

    try:
        removed = services.store.delete(project_id)
    except OSError as e:
        logger.error(f"Error deleting project {project_id}: {e}", exc_info=True)
        gr.Warning(f"Could not delete project: {e}")
        return (*render_workspace(state, services.store.list()), state)

    if removed:
        state = reduce(state, ProjectDeleted(project_id))
    return (*render_workspace(state, services.store.list()), state)


def new_project(state: WorkspaceState, services: WorkspaceServices) -> tuple:
    """Return to an empty form.

    Returns:
        Tuple of (*workspace_updates, state, name, style, structure_guide,
        content, image)
    """
    state = reduce(state, NewProject())
    return (*render_workspace(state, services.store.list()), state, *draft_to_form(state.draft))


def close_project(state: WorkspaceState, services: WorkspaceServices) -> tuple:
    """Leave the viewer and return to the form, keeping the draft.

    Returns:
        Tuple of (*workspace_updates, state)
    """
    state = reduce(state, CloseProject())
    return (*render_workspace(state, services.store.list()), state)


def dismiss_notice(state: WorkspaceState, services: WorkspaceServices) -> tuple:
    """Clear the failure notice.

    Returns:
        Tuple of (*workspace_updates, state)
    """
    state = reduce(state, DismissNotice())
    return (*render_workspace(state, services.store.list()), state)
