"""End-to-end synthesis run.

:class:`SynthesisPipeline` drives one run: it reports progress, calls the
:class:`~visionbootstrap.core.generation_client.GenerationClient`, merges the
raw variations with their theme rationale, and assembles a new
:class:`~visionbootstrap.core.models.GeneratedProject`.

Usage
-----
::

    from visionbootstrap.core.generation_client import GenerationClient
    from visionbootstrap.core.models import GenerationRequest
    from visionbootstrap.core.pipeline import SynthesisPipeline

    pipeline = SynthesisPipeline(GenerationClient())
    project = pipeline.run(GenerationRequest(style="Brutalist"), name="Pricing")
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable

from visionbootstrap.core.errors import SYNTHESIS_FAILED_MESSAGE, SynthesisError
from visionbootstrap.core.models import (
    VARIATION_COUNT,
    ComponentVariation,
    GeneratedProject,
    GenerationRequest,
    RawVariation,
    ThemeDescriptor,
)

logger = logging.getLogger(__name__)

FALLBACK_DESCRIPTION = "Aesthetic variation based on synthesis logic."


def merge_variations(
    variations: list[RawVariation], themes: list[ThemeDescriptor]
) -> tuple[ComponentVariation, ...]:
    """Attach each variation's theme description, matched by theme name.

    Variations without a matching theme (or whose theme has an empty
    description) get :data:`FALLBACK_DESCRIPTION`.
    """
    descriptions: dict[str, str] = {}
    for theme in themes:
        # First theme with a given name wins.
        descriptions.setdefault(theme.name, theme.description)

    return tuple(
        ComponentVariation(
            theme_name=v.theme_name,
            html=v.html,
            css=v.css,
            description=descriptions.get(v.theme_name) or FALLBACK_DESCRIPTION,
        )
        for v in variations
    )


def default_project_name(style: str) -> str:
    """Name used when the user leaves the project name blank."""
    return f"{style} Project"


class SynthesisPipeline:
    """Runs one synthesis from user inputs to a finished project.

    Args:
        client: Object exposing ``generate(image, style, structure_guide,
            user_content)`` (normally a ``GenerationClient``).
        on_progress: Optional callback receiving progress messages.
    """

    def __init__(self, client, on_progress: Callable[[str], None] | None = None):
        self.client = client
        self.on_progress = on_progress

    def _emit(self, message: str) -> None:
        logger.info(message)
        if self.on_progress is not None:
            self.on_progress(message)

    def run(self, request: GenerationRequest, name: str = "") -> GeneratedProject:
        """Run the pipeline.

        Args:
            request: Synthesis inputs.
            name: User-supplied project name (blank means "<style> Project").

        Returns:
            The assembled project (not yet saved).

        Raises:
            SynthesisError: If the backend fails or returns no variations.
        """
        self._emit(f"Starting synthesis ({request.style})")

        try:
            result = self.client.generate(
                request.reference_image,
                request.style,
                request.structure_guide,
                request.user_content,
            )
        except Exception as e:
            logger.error(f"Generation failed: {e}", exc_info=True)
            raise SynthesisError(SYNTHESIS_FAILED_MESSAGE) from e

        if result is None or not result.variations:
            logger.error("Invalid response: no variations generated")
            raise SynthesisError(SYNTHESIS_FAILED_MESSAGE)

        if len(result.variations) != VARIATION_COUNT:
            logger.warning(
                f"Expected {VARIATION_COUNT} variations, backend returned {len(result.variations)}"
            )

        self._emit(f"Received {len(result.variations)} variations")

        project = GeneratedProject(
            id=uuid.uuid4().hex,
            name=name.strip() or default_project_name(request.style),
            style=request.style,
            created_at=int(time.time() * 1000),
            reference_image=request.reference_image or None,
            variations=merge_variations(result.variations, result.themes),
            guide=result.guide or "",
            structure_guide=request.structure_guide,
            content=result.content or "",
        )

        self._emit(f"Assembled project {project.name!r} ({project.id})")
        return project
