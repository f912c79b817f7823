"""Gemini client for component synthesis.

A synthesis call is a short conversation with at most one intermediate
round-trip:

1. The instruction (plus the optional reference image) is sent with one
   declared function, ``get_freepik_images(query)``, and no output schema,
   so the model may either answer or ask for stock imagery.
2. If the model calls the function, every call is answered with results from
   the stock image lookup and the conversation is re-issued with the output
   constrained to the :class:`PipelineResult` JSON schema.
3. If the model does not call the function, the original turn is re-issued
   with the schema imposed up front, since there is no later turn to impose
   it on.

The final reply is parsed as JSON into a :class:`PipelineResult`. Any
backend failure, malformed JSON, or schema violation raises
:class:`GenerationError`; nothing is repaired locally and nothing is retried.

Backend replies are decoded once, at the boundary, into either a
:class:`ToolCallTurn` or a :class:`FinalTurn`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial

import pydantic
from google import genai
from google.genai import types

from visionbootstrap.core.config import VisionBootstrapConfig
from visionbootstrap.core.config import config as default_config
from visionbootstrap.core.errors import GenerationError
from visionbootstrap.core.images import decode_reference_image
from visionbootstrap.core.models import VARIATION_COUNT, PipelineResult
from visionbootstrap.core.prompts import STOCK_IMAGE_TOOL_NAME, build_instruction
from visionbootstrap.core.stock_images import search_images

logger = logging.getLogger(__name__)

STOCK_IMAGE_TOOL = types.FunctionDeclaration(
    name=STOCK_IMAGE_TOOL_NAME,
    description="Search for professional stock images.",
    parameters=types.Schema(
        type=types.Type.OBJECT,
        properties={"query": types.Schema(type=types.Type.STRING)},
        required=["query"],
    ),
)

PIPELINE_RESULT_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "themes": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "name": types.Schema(type=types.Type.STRING),
                    "description": types.Schema(type=types.Type.STRING),
                },
            ),
        ),
        "guide": types.Schema(type=types.Type.STRING),
        "content": types.Schema(type=types.Type.STRING),
        "variations": types.Schema(
            type=types.Type.ARRAY,
            min_items=VARIATION_COUNT,
            max_items=VARIATION_COUNT,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "themeName": types.Schema(type=types.Type.STRING),
                    "html": types.Schema(type=types.Type.STRING),
                    "css": types.Schema(type=types.Type.STRING),
                },
                required=["themeName", "html", "css"],
            ),
        ),
    },
    required=["themes", "guide", "content", "variations"],
)


@dataclass(frozen=True)
class ToolCallTurn:
    """The model asked for one or more function calls."""

    calls: tuple[types.FunctionCall, ...]
    model_content: types.Content


@dataclass(frozen=True)
class FinalTurn:
    """The model answered with text (expected to be schema JSON)."""

    text: str


BackendTurn = ToolCallTurn | FinalTurn


def decode_response(response: types.GenerateContentResponse) -> BackendTurn:
    """Classify a backend reply as a function-call request or a final answer.

    Raises:
        GenerationError: If the reply carries neither function calls nor text.
    """
    calls = response.function_calls or []
    if calls:
        model_content = None
        if response.candidates:
            model_content = response.candidates[0].content
        if model_content is None:
            model_content = types.Content(
                role="model",
                parts=[types.Part(function_call=call) for call in calls],
            )
        return ToolCallTurn(calls=tuple(calls), model_content=model_content)

    text = response.text
    if not text:
        raise GenerationError("Backend returned an empty response")
    return FinalTurn(text=text)


def parse_pipeline_result(text: str) -> PipelineResult:
    """Parse the final reply body into a :class:`PipelineResult`.

    Raises:
        GenerationError: If the text is not valid JSON or violates the schema.
    """
    try:
        return PipelineResult.model_validate_json(text)
    except pydantic.ValidationError as e:
        raise GenerationError(f"Backend response does not match the result schema: {e}") from e


class GenerationClient:
    """Issues synthesis requests to Gemini.

    Args:
        config: Configuration (defaults to the global config).
        client: Pre-built ``genai.Client``; created from ``config`` when omitted.
        image_search: Stock image lookup used to answer function calls;
            defaults to :func:`search_images` bound to ``config``.
    """

    def __init__(
        self,
        config: VisionBootstrapConfig | None = None,
        client: genai.Client | None = None,
        image_search: Callable[[str], list[str]] | None = None,
    ):
        self.config = config or default_config
        self._client = client
        self.image_search = image_search or partial(search_images, config=self.config)

    @property
    def client(self) -> genai.Client:
        """Lazily created Gemini client."""
        if self._client is None:
            if not self.config.gemini_api_key:
                raise GenerationError(
                    "No Gemini API key configured. Set GEMINI_API_KEY or VBS_GEMINI_API_KEY."
                )
            self._client = genai.Client(
                api_key=self.config.gemini_api_key,
                http_options=types.HttpOptions(timeout=self.config.http_timeout_ms),
            )
        return self._client

    def build_user_turn(
        self, image: str | None, style: str, structure_guide: str, user_content: str
    ) -> types.Content:
        """Build the first user turn: optional inline image, then instruction."""
        parts: list[types.Part] = []
        if image:
            try:
                data, mime_type = decode_reference_image(image)
            except ValueError as e:
                raise GenerationError(str(e)) from e
            parts.append(types.Part.from_bytes(data=data, mime_type=mime_type))
        parts.append(types.Part.from_text(text=build_instruction(style, structure_guide, user_content)))
        return types.Content(role="user", parts=parts)

    def _thinking_config(self) -> types.ThinkingConfig | None:
        if self.config.thinking_budget <= 0:
            return None
        return types.ThinkingConfig(thinking_budget=self.config.thinking_budget)

    def tool_config(self) -> types.GenerateContentConfig:
        """Config for the first turn: function declared, no output schema."""
        return types.GenerateContentConfig(
            tools=[types.Tool(function_declarations=[STOCK_IMAGE_TOOL])],
            thinking_config=self._thinking_config(),
        )

    def schema_config(self) -> types.GenerateContentConfig:
        """Config for the final turn: JSON output constrained to the schema."""
        return types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=PIPELINE_RESULT_SCHEMA,
            thinking_config=self._thinking_config(),
        )

    def answer_tool_calls(self, calls: tuple[types.FunctionCall, ...]) -> types.Content:
        """Run the stock image lookup for each call and package the responses."""
        parts: list[types.Part] = []
        for call in calls:
            if call.name == STOCK_IMAGE_TOOL_NAME:
                query = str((call.args or {}).get("query", ""))
                images = self.image_search(query)
                logger.info(f"Answered {call.name}({query!r}) with {len(images)} images")
                payload = {"images": images}
            else:
                logger.warning(f"Model requested unknown function: {call.name}")
                payload = {"error": f"Unknown function: {call.name}"}
            parts.append(
                types.Part(
                    function_response=types.FunctionResponse(
                        id=call.id, name=call.name, response=payload
                    )
                )
            )
        return types.Content(role="user", parts=parts)

    def _send(
        self, contents: list[types.Content], config: types.GenerateContentConfig
    ) -> BackendTurn:
        try:
            response = self.client.models.generate_content(
                model=self.config.gemini_model,
                contents=contents,
                config=config,
            )
        except GenerationError:
            raise
        except Exception as e:
            raise GenerationError(f"Gemini request failed: {e}") from e
        return decode_response(response)

    def generate(
        self,
        image: str | None,
        style: str,
        structure_guide: str,
        user_content: str,
    ) -> PipelineResult:
        """Run one synthesis conversation and return the structured result.

        Args:
            image: Optional reference image (data URL or bare base64).
            style: Aesthetic category name.
            structure_guide: Layout instructions.
            user_content: Copy and data to embed.

        Returns:
            Parsed :class:`PipelineResult`.

        Raises:
            GenerationError: On backend failure or an unusable final reply.
        """
        user_turn = self.build_user_turn(image, style, structure_guide, user_content)
        contents = [user_turn]

        logger.info(f"Requesting synthesis from {self.config.gemini_model} (style={style})")
        first = self._send(contents, self.tool_config())

        if isinstance(first, ToolCallTurn):
            logger.info(f"Model requested {len(first.calls)} function call(s)")
            contents = [user_turn, first.model_content, self.answer_tool_calls(first.calls)]
        else:
            logger.info("Model answered without function calls; re-issuing with schema")

        final = self._send(contents, self.schema_config())
        if isinstance(final, ToolCallTurn):
            raise GenerationError("Backend requested a function call on the final turn")

        result = parse_pipeline_result(final.text)
        logger.info(
            f"Synthesis returned {len(result.variations)} variations and {len(result.themes)} themes"
        )
        return result
