"""Data models for the workspace state and the actions that change it."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from visionbootstrap.core.models import DEFAULT_STYLE, ComponentVariation, GeneratedProject

logger = logging.getLogger(__name__)

DisplayMode = Literal["preview", "source"]
DeviceFrame = Literal["desktop", "mobile"]

DISPLAY_MODES: tuple[str, ...] = ("preview", "source")
DEVICE_FRAMES: tuple[str, ...] = ("desktop", "mobile")


class WorkspaceStatus(str, Enum):
    """Top-level mode of the workspace."""

    IDLE = "idle"  # Form visible, no active project
    GENERATING = "generating"  # Pipeline running, progress log animating
    VIEWING = "viewing"  # Active project shown


@dataclass(frozen=True)
class DraftInputs:
    """Form inputs for the next synthesis run."""

    name: str = ""
    style: str = DEFAULT_STYLE
    structure_guide: str = ""
    content: str = ""
    reference_image: str | None = None  # Data URL


@dataclass(frozen=True)
class WorkspaceState:
    """Session state of the single-page workspace.

    Instances are immutable; every change goes through
    :func:`visionbootstrap.ui.state.reduce`, which returns a new instance.

    Attributes
    ----------
    status : WorkspaceStatus
        Idle, generating, or viewing
    active_project : GeneratedProject | None
        Project currently shown (always None unless viewing)
    active_variation_index : int
        Index into ``active_project.variations``
    display_mode : str
        "preview" (rendered) or "source" (markup and styles)
    device_frame : str
        "desktop" (full width) or "mobile" (narrow frame)
    progress_log : tuple[str, ...]
        Scripted log lines shown while generating
    elapsed_seconds : int
        Seconds since synthesis started
    notice : str | None
        User-visible failure message from the last run
    draft : DraftInputs
        Current form inputs
    """

    status: WorkspaceStatus = WorkspaceStatus.IDLE
    active_project: GeneratedProject | None = None
    active_variation_index: int = 0
    display_mode: str = "preview"
    device_frame: str = "desktop"
    progress_log: tuple[str, ...] = ()
    elapsed_seconds: int = 0
    notice: str | None = None
    draft: DraftInputs = field(default_factory=DraftInputs)

    @property
    def is_generating(self) -> bool:
        return self.status is WorkspaceStatus.GENERATING

    @property
    def active_variation(self) -> ComponentVariation | None:
        if self.active_project is None:
            return None
        return self.active_project.variation(self.active_variation_index)

    def __repr__(self) -> str:
        """String representation for debugging."""
        project_id = self.active_project.id if self.active_project else None
        return (
            f"WorkspaceState(status={self.status.value}, "
            f"project={project_id}, "
            f"variation={self.active_variation_index}, "
            f"mode={self.display_mode}/{self.device_frame})"
        )


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StartSynthesis:
    pass


@dataclass(frozen=True)
class ProgressSynced:
    """Progress log and elapsed time as recorded by the generation session."""

    progress_log: tuple[str, ...]
    elapsed_seconds: int


@dataclass(frozen=True)
class SynthesisSucceeded:
    project: GeneratedProject


@dataclass(frozen=True)
class SynthesisFailed:
    message: str


@dataclass(frozen=True)
class SelectProject:
    project: GeneratedProject


@dataclass(frozen=True)
class ProjectDeleted:
    project_id: str


@dataclass(frozen=True)
class NewProject:
    pass


@dataclass(frozen=True)
class CloseProject:
    pass


@dataclass(frozen=True)
class SelectVariation:
    index: int


@dataclass(frozen=True)
class SetDisplayMode:
    mode: str


@dataclass(frozen=True)
class SetDeviceFrame:
    frame: str


@dataclass(frozen=True)
class UpdateDraft:
    draft: DraftInputs


@dataclass(frozen=True)
class ShowNotice:
    """Surface a user-visible message without changing status."""

    message: str


@dataclass(frozen=True)
class DismissNotice:
    pass


Action = (
    StartSynthesis
    | ProgressSynced
    | SynthesisSucceeded
    | SynthesisFailed
    | SelectProject
    | ProjectDeleted
    | NewProject
    | CloseProject
    | SelectVariation
    | SetDisplayMode
    | SetDeviceFrame
    | UpdateDraft
    | ShowNotice
    | DismissNotice
)


# Cosmetic progress script shown while a synthesis is in flight. It is paced
# by a timer and does not reflect actual pipeline progress.
PROGRESS_SCRIPT: tuple[str, ...] = (
    "SYSTEM: Initializing design pipeline...",
    "VISION: Parsing image constraints...",
    "ASSETS: Contacting Freepik Global...",
    "CONTENT: Injecting user specifications...",
    "STYLE: Mapping aesthetic vectors...",
    "COMPILE: Synthesizing V1 - V2...",
    "COMPILE: Synthesizing V3 - V4...",
    "FINALIZE: Optimizing micro-interactions...",
)

LOG_PREFIX = "> "
