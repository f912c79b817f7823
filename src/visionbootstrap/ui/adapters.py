"""Adapter functions for converting between UI values and business objects."""

import logging

from PIL import Image

from visionbootstrap.core.images import reference_thumbnail
from visionbootstrap.core.models import DEFAULT_STYLE, GeneratedProject

from .models import DraftInputs

logger = logging.getLogger(__name__)

THUMBNAIL_SIZE = 96
PLACEHOLDER_COLOR = (229, 231, 235)


def draft_from_form(
    name: str | None,
    style: str | None,
    structure_guide: str | None,
    content: str | None,
    reference_image: str | None,
) -> DraftInputs:
    """Convert raw form values to a DraftInputs object.

    Gradio passes None for untouched components; those become defaults.
    """
    return DraftInputs(
        name=name or "",
        style=style or DEFAULT_STYLE,
        structure_guide=structure_guide or "",
        content=content or "",
        reference_image=reference_image or None,
    )


def draft_to_form(draft: DraftInputs) -> tuple[str, str, str, str, None]:
    """Convert a DraftInputs object back to form values.

    Returns:
        Tuple of (name, style, structure_guide, content, image). The image
        upload is always reset, since the draft keeps only its encoded form.
    """
    return draft.name, draft.style, draft.structure_guide, draft.content, None


def history_label(project: GeneratedProject) -> str:
    return f"{project.name} · {project.style}"


def history_choices(projects: list[GeneratedProject]) -> list[tuple[str, str]]:
    """Build (label, project_id) choices for the history list."""
    return [(history_label(project), project.id) for project in projects]


def history_gallery(projects: list[GeneratedProject]) -> list[tuple[Image.Image, str]]:
    """Build (thumbnail, caption) items for the history gallery.

    One item per project, in the same order as :func:`history_choices`.
    Projects without a usable reference image get a blank tile.
    """
    items = []
    for project in projects:
        thumb = None
        if project.reference_image:
            try:
                thumb = reference_thumbnail(project.reference_image, THUMBNAIL_SIZE)
            except ValueError as e:
                logger.warning(f"No thumbnail for project {project.id}: {e}")
        if thumb is None:
            thumb = Image.new("RGB", (THUMBNAIL_SIZE, THUMBNAIL_SIZE), PLACEHOLDER_COLOR)
        items.append((thumb, history_label(project)))
    return items


def variation_choices(project: GeneratedProject | None) -> list[tuple[str, int]]:
    """Build (label, index) choices for the variation switch."""
    if project is None:
        return []
    return [(f"V{i + 1}", i) for i in range(len(project.variations))]
