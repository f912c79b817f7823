"""Unit tests for the synthesis pipeline."""

from unittest.mock import Mock

import pytest

from visionbootstrap.core.errors import SYNTHESIS_FAILED_MESSAGE, GenerationError, SynthesisError
from visionbootstrap.core.models import GenerationRequest, PipelineResult, RawVariation, ThemeDescriptor
from visionbootstrap.core.pipeline import (
    FALLBACK_DESCRIPTION,
    SynthesisPipeline,
    default_project_name,
    merge_variations,
)


class TestMergeVariations:
    """Tests for merge_variations."""

    def test_matches_by_theme_name(self):
        merged = merge_variations(
            [RawVariation(theme_name="V1", html="a", css="b"), RawVariation(theme_name="V2", html="c", css="d")],
            [ThemeDescriptor(name="V1", description="A")],
        )
        assert merged[0].description == "A"
        assert merged[1].description == FALLBACK_DESCRIPTION

    def test_first_theme_with_a_name_wins(self):
        merged = merge_variations(
            [RawVariation(theme_name="V1", html="", css="")],
            [ThemeDescriptor(name="V1", description="first"), ThemeDescriptor(name="V1", description="second")],
        )
        assert merged[0].description == "first"

    def test_empty_description_falls_back(self):
        merged = merge_variations(
            [RawVariation(theme_name="V1", html="", css="")],
            [ThemeDescriptor(name="V1", description="")],
        )
        assert merged[0].description == FALLBACK_DESCRIPTION

    def test_markup_is_kept_verbatim(self):
        merged = merge_variations([RawVariation(theme_name="V1", html="<p>x</p>", css="p{color:red}")], [])
        assert merged[0].html == "<p>x</p>"
        assert merged[0].css == "p{color:red}"


class TestSynthesisPipeline:
    """Tests for SynthesisPipeline.run."""

    def test_assembles_project(self, pipeline_result):
        client = Mock()
        client.generate.return_value = pipeline_result
        request = GenerationRequest(style="Brutalist", structure_guide="card", user_content="Pro")

        project = SynthesisPipeline(client).run(request, name="Pricing")

        client.generate.assert_called_once_with(None, "Brutalist", "card", "Pro")
        assert project.name == "Pricing"
        assert project.style == "Brutalist"
        assert len(project.variations) == 4
        assert project.variations[0].description == "A"
        assert project.variations[1].description == FALLBACK_DESCRIPTION
        assert project.guide == pipeline_result.guide
        assert project.content == pipeline_result.content
        assert project.structure_guide == "card"
        assert project.created_at > 0

    def test_blank_name_uses_style(self, pipeline_result):
        client = Mock()
        client.generate.return_value = pipeline_result

        project = SynthesisPipeline(client).run(GenerationRequest(), name="   ")

        assert project.name == "Modern Project"
        assert default_project_name("Luxury") == "Luxury Project"

    def test_ids_are_unique(self, pipeline_result):
        client = Mock()
        client.generate.return_value = pipeline_result
        pipeline = SynthesisPipeline(client)

        ids = {pipeline.run(GenerationRequest()).id for _ in range(5)}

        assert len(ids) == 5

    def test_reference_image_is_kept(self, pipeline_result):
        client = Mock()
        client.generate.return_value = pipeline_result
        request = GenerationRequest(reference_image="data:image/png;base64,AAAA")

        project = SynthesisPipeline(client).run(request)

        assert project.reference_image == "data:image/png;base64,AAAA"
        assert client.generate.call_args.args[0] == "data:image/png;base64,AAAA"

    def test_backend_error_becomes_synthesis_error(self):
        client = Mock()
        client.generate.side_effect = GenerationError("quota exceeded")

        with pytest.raises(SynthesisError) as exc_info:
            SynthesisPipeline(client).run(GenerationRequest())

        assert str(exc_info.value) == SYNTHESIS_FAILED_MESSAGE
        assert isinstance(exc_info.value.__cause__, GenerationError)

    def test_empty_variations_fail(self):
        client = Mock()
        client.generate.return_value = PipelineResult(themes=[], guide="", content="", variations=[])

        with pytest.raises(SynthesisError):
            SynthesisPipeline(client).run(GenerationRequest())

    def test_progress_callback(self, pipeline_result):
        client = Mock()
        client.generate.return_value = pipeline_result
        messages = []

        SynthesisPipeline(client, on_progress=messages.append).run(GenerationRequest())

        assert messages[0].startswith("Starting synthesis")
        assert any("4 variations" in m for m in messages)
