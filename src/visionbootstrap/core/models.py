"""Domain models for synthesis requests, results, and saved projects.

All models serialise with camelCase keys (``themeName``, ``structureGuide``,
``createdAt``...) so that the persisted history and the generative backend
payloads share one wire shape. Python code uses the snake_case attribute
names; both spellings are accepted on input.

Models
------
GenerationRequest
    Inputs of one synthesis run (transient, never persisted on its own).
ThemeDescriptor, RawVariation, PipelineResult
    The structured JSON reply of the generative backend.
ComponentVariation
    One finished variation: a raw variation merged with its theme rationale.
GeneratedProject
    The record produced by a successful run and kept in the project history.
"""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

StyleOption = Literal[
    "Corporate",
    "Creative",
    "Modern",
    "Minimal",
    "Flat",
    "Material",
    "Brutalist",
    "Neumorphic",
    "Skeuomorphic",
    "Retro",
    "Vintage",
    "Futuristic",
    "Industrial",
    "Editorial",
    "Portfolio",
    "Experimental",
    "Luxury",
    "Playful",
    "Dark Mode",
    "Glassmorphism",
    "Swiss / International",
    "Monochrome",
    "Bold Typography",
    "Illustration-Led",
    "Data-Driven",
    "Product-First",
    "Startup",
    "Enterprise",
    "Agency",
    "E-commerce",
    "Landing Page",
    "Dashboard",
    "Magazine",
    "Tech / SaaS",
]

STYLE_OPTIONS: tuple[str, ...] = get_args(StyleOption)
DEFAULT_STYLE = "Modern"

# Number of variations the backend is instructed to produce per run.
VARIATION_COUNT = 4


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class GenerationRequest(_CamelModel):
    """Inputs of a single synthesis run.

    Attributes:
        reference_image: Optional reference image as a data URL or bare
            base64 string.
        style: Aesthetic category applied to all variations.
        structure_guide: Free-text layout instructions.
        user_content: Free-text copy and data that must appear verbatim.
    """

    model_config = ConfigDict(frozen=True)

    reference_image: str | None = None
    style: StyleOption = DEFAULT_STYLE
    structure_guide: str = ""
    user_content: str = ""


class ThemeDescriptor(_CamelModel):
    """Named aesthetic descriptor with its rationale text."""

    name: str = ""
    description: str = ""


class RawVariation(_CamelModel):
    """A variation as returned by the backend, before theme merging."""

    theme_name: str
    html: str
    css: str


class PipelineResult(_CamelModel):
    """Structured reply of the generative backend."""

    themes: list[ThemeDescriptor]
    guide: str
    content: str
    variations: list[RawVariation]


class ComponentVariation(_CamelModel):
    """One finished, immutable component variation."""

    model_config = ConfigDict(frozen=True)

    theme_name: str
    html: str
    css: str
    description: str


class GeneratedProject(_CamelModel):
    """A saved generation result.

    Created once per successful pipeline run and never modified afterwards;
    the only lifecycle operation is deletion from the project history.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    style: StyleOption
    created_at: int = Field(description="Creation time in epoch milliseconds")
    reference_image: str | None = None
    variations: tuple[ComponentVariation, ...]
    guide: str = ""
    structure_guide: str = ""
    content: str = ""

    def variation(self, index: int) -> ComponentVariation | None:
        """Return the variation at ``index`` or None when out of range."""
        if 0 <= index < len(self.variations):
            return self.variations[index]
        return None
