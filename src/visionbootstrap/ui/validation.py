"""Validation utilities for workspace inputs."""

import logging

import pydantic

from visionbootstrap.core.models import STYLE_OPTIONS, GenerationRequest

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 100000


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def validate_text_field(label: str, text: str, max_length: int = MAX_TEXT_LENGTH) -> None:
    """Validate free-text input length.

    Raises:
        ValidationError: If the text is too long
    """
    if text and len(text) > max_length:
        raise ValidationError(
            f"{label} is too long ({len(text)} characters). Maximum is {max_length} characters."
        )


def build_request(
    style: str,
    structure_guide: str,
    user_content: str,
    reference_image: str | None,
) -> GenerationRequest:
    """Validate form inputs and build a :class:`GenerationRequest`.

    Args:
        style: Selected style option
        structure_guide: Structure text area value
        user_content: Content text area value
        reference_image: Encoded reference image or None

    Returns:
        Validated generation request

    Raises:
        ValidationError: If validation fails with user-friendly message
    """
    if style not in STYLE_OPTIONS:
        raise ValidationError(f"Unknown style: {style!r}. Pick one of the listed styles.")

    validate_text_field("Structure guide", structure_guide)
    validate_text_field("Content", user_content)

    try:
        return GenerationRequest(
            reference_image=reference_image or None,
            style=style,
            structure_guide=structure_guide or "",
            user_content=user_content or "",
        )
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid synthesis inputs: {e}") from e
