"""Synthesis run handler."""

import logging
from collections.abc import Iterator
from concurrent.futures import TimeoutError as FutureTimeoutError

import gradio as gr

from visionbootstrap.core.errors import SYNTHESIS_FAILED_MESSAGE, SynthesisError
from visionbootstrap.core.images import encode_image_file
from visionbootstrap.core.models import VARIATION_COUNT

from ..adapters import draft_from_form
from ..models import (
    LOG_PREFIX,
    ProgressSynced,
    ShowNotice,
    StartSynthesis,
    SynthesisFailed,
    SynthesisSucceeded,
    UpdateDraft,
    WorkspaceState,
)
from ..services import WorkspaceServices
from ..state import reduce
from ..ticker import GenerationSession
from ..validation import ValidationError, build_request
from .workspace import render_workspace

logger = logging.getLogger(__name__)


def success_line(elapsed_seconds: int) -> str:
    """Final progress log line appended after a successful run."""
    return f"{LOG_PREFIX}SUCCESS: {VARIATION_COUNT} Versions Compiled in {elapsed_seconds}s."


def run_synthesis(
    name: str,
    style: str,
    structure_guide: str,
    content: str,
    image_path: str | None,
    state: WorkspaceState,
    services: WorkspaceServices,
) -> Iterator[tuple]:
    """Run one synthesis, streaming progress to the workspace.

    The pipeline runs on the services executor while this generator polls it
    and yields the progress log and elapsed time. The generation session is
    stopped whatever the outcome.

    Args:
        name: Project name (blank for the default)
        style: Selected style option
        structure_guide: Structure text area value
        content: Content text area value
        image_path: Uploaded reference image path or None
        state: Workspace state
        services: Shared collaborators

    Yields:
        Tuple of (*workspace_updates, state)
    """

    def emit(current: WorkspaceState) -> tuple:
        return (*render_workspace(current, services.store.list()), current)

    try:
        reference_image = encode_image_file(image_path) if image_path else None
        draft = draft_from_form(name, style, structure_guide, content, reference_image)
        request = build_request(style, draft.structure_guide, draft.content, reference_image)
    except (ValidationError, ValueError, OSError) as e:
        logger.warning(f"Rejected synthesis inputs: {e}")
        gr.Warning(str(e))
        yield emit(reduce(state, ShowNotice(str(e))))
        return

    state = reduce(state, UpdateDraft(draft))
    started = reduce(state, StartSynthesis())
    if started is state:
        logger.info("Synthesis already in progress, ignoring request")
        yield emit(state)
        return
    state = started
    yield emit(state)

    pipeline = services.create_pipeline()
    session = GenerationSession(log_interval=services.config.log_interval).start()
    project = None
    error_message = None
    try:
        future = services.executor.submit(pipeline.run, request, draft.name)
        while True:
            try:
                project = future.result(timeout=services.poll_interval)
                break
            except FutureTimeoutError:
                log, elapsed = session.snapshot()
                state = reduce(state, ProgressSynced(log, elapsed))
                yield emit(state)
    except SynthesisError as e:
        error_message = str(e)
    except Exception as e:
        logger.error(f"Unexpected synthesis failure: {e}", exc_info=True)
        error_message = SYNTHESIS_FAILED_MESSAGE
    finally:
        session.stop()

    if project is None:
        gr.Warning(error_message or SYNTHESIS_FAILED_MESSAGE)
        yield emit(reduce(state, SynthesisFailed(error_message or SYNTHESIS_FAILED_MESSAGE)))
        return

    try:
        services.store.save(project)
    except OSError as e:
        # The project is still shown; only persistence failed.
        logger.error(f"Failed to save project {project.id}: {e}", exc_info=True)
        gr.Warning(f"Project could not be saved: {e}")

    log, elapsed = session.snapshot()
    state = reduce(state, ProgressSynced((*log, success_line(elapsed)), elapsed))
    state = reduce(state, SynthesisSucceeded(project))
    logger.info(f"Synthesis finished: {project.name!r} in {elapsed}s")
    yield emit(state)
