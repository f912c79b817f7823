"""State transitions for the workspace.

Every change to :class:`WorkspaceState` goes through :func:`reduce`, a pure
function with one case per action. Actions that do not apply in the current
status (for example a second ``StartSynthesis`` while generating) return the
state unchanged.

Transitions::

    Idle --StartSynthesis--> Generating
    Generating --SynthesisSucceeded--> Viewing (new project, variation 0)
    Generating --SynthesisFailed--> Idle (notice set)
    Idle/Viewing --SelectProject--> Viewing
    Viewing --NewProject--> Idle (draft cleared)
    Viewing --CloseProject--> Idle (draft kept)
    Viewing --ProjectDeleted(active id)--> Idle
"""

import logging
from dataclasses import replace

from .models import (
    DEVICE_FRAMES,
    DISPLAY_MODES,
    Action,
    CloseProject,
    DismissNotice,
    DraftInputs,
    NewProject,
    ProgressSynced,
    ProjectDeleted,
    SelectProject,
    SelectVariation,
    SetDeviceFrame,
    SetDisplayMode,
    ShowNotice,
    StartSynthesis,
    SynthesisFailed,
    SynthesisSucceeded,
    UpdateDraft,
    WorkspaceState,
    WorkspaceStatus,
)

logger = logging.getLogger(__name__)


def _view_project(state: WorkspaceState, project) -> WorkspaceState:
    return replace(
        state,
        status=WorkspaceStatus.VIEWING,
        active_project=project,
        active_variation_index=0,
        display_mode="preview",
    )


def _to_idle(state: WorkspaceState, **changes) -> WorkspaceState:
    return replace(
        state,
        status=WorkspaceStatus.IDLE,
        active_project=None,
        active_variation_index=0,
        **changes,
    )


def reduce(state: WorkspaceState, action: Action) -> WorkspaceState:
    """Apply ``action`` to ``state`` and return the resulting state.

    Args:
        state: Current workspace state.
        action: Action to apply.

    Returns:
        New state (or ``state`` itself when the action does not apply).
    """
    generating = state.status is WorkspaceStatus.GENERATING

    if isinstance(action, StartSynthesis):
        if state.status is not WorkspaceStatus.IDLE:
            logger.debug(f"Ignoring StartSynthesis in status {state.status.value}")
            return state
        return replace(
            state,
            status=WorkspaceStatus.GENERATING,
            progress_log=(),
            elapsed_seconds=0,
            notice=None,
        )

    if isinstance(action, ProgressSynced):
        if not generating:
            return state
        return replace(
            state,
            progress_log=tuple(action.progress_log),
            elapsed_seconds=action.elapsed_seconds,
        )

    if isinstance(action, SynthesisSucceeded):
        if not generating:
            return state
        return _view_project(state, action.project)

    if isinstance(action, SynthesisFailed):
        if not generating:
            return state
        return _to_idle(state, notice=action.message)

    if isinstance(action, SelectProject):
        if generating:
            return state
        return _view_project(state, action.project)

    if isinstance(action, ProjectDeleted):
        active = state.active_project
        if active is not None and active.id == action.project_id:
            return _to_idle(state)
        return state

    if isinstance(action, NewProject):
        if generating:
            return state
        return _to_idle(state, draft=DraftInputs(), notice=None)

    if isinstance(action, CloseProject):
        if state.status is not WorkspaceStatus.VIEWING:
            return state
        return _to_idle(state)

    if isinstance(action, SelectVariation):
        # Clamp so the index always points at an existing variation
        if state.active_project is None or not state.active_project.variations:
            return state
        last = len(state.active_project.variations) - 1
        return replace(state, active_variation_index=min(max(action.index, 0), last))

    if isinstance(action, SetDisplayMode):
        if action.mode not in DISPLAY_MODES:
            logger.warning(f"Unknown display mode: {action.mode}")
            return state
        return replace(state, display_mode=action.mode)

    if isinstance(action, SetDeviceFrame):
        if action.frame not in DEVICE_FRAMES:
            logger.warning(f"Unknown device frame: {action.frame}")
            return state
        return replace(state, device_frame=action.frame)

    if isinstance(action, UpdateDraft):
        return replace(state, draft=action.draft)

    if isinstance(action, ShowNotice):
        return replace(state, notice=action.message)

    if isinstance(action, DismissNotice):
        return replace(state, notice=None)

    raise TypeError(f"Unknown action: {action!r}")
