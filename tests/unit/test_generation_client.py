"""Unit tests for the Gemini generation client.

The ``genai.Client`` is always mocked; responses are simple mocks exposing
``function_calls``, ``candidates`` and ``text`` like GenerateContentResponse.
"""

import base64
import json
from unittest.mock import Mock, patch

import pytest
from google.genai import types

from visionbootstrap.core.errors import GenerationError
from visionbootstrap.core.generation_client import (
    FinalTurn,
    GenerationClient,
    ToolCallTurn,
    decode_response,
    parse_pipeline_result,
)
from visionbootstrap.core.prompts import STOCK_IMAGE_TOOL_NAME

RESULT_JSON = json.dumps(
    {
        "themes": [{"name": "V1", "description": "A"}],
        "guide": "g",
        "content": "c",
        "variations": [
            {"themeName": f"V{i}", "html": f"<p>{i}</p>", "css": "p{}"} for i in range(1, 5)
        ],
    }
)


def text_response(text: str) -> Mock:
    return Mock(function_calls=None, candidates=[], text=text)


def tool_response(*calls: types.FunctionCall) -> Mock:
    content = types.Content(role="model", parts=[types.Part(function_call=c) for c in calls])
    return Mock(function_calls=list(calls), candidates=[Mock(content=content)], text=None)


def image_call(query: str = "office", call_id: str = "call-1") -> types.FunctionCall:
    return types.FunctionCall(id=call_id, name=STOCK_IMAGE_TOOL_NAME, args={"query": query})


@pytest.fixture
def genai_client() -> Mock:
    return Mock()


@pytest.fixture
def image_search() -> Mock:
    return Mock(return_value=["https://img/1.jpg"])


@pytest.fixture
def client(test_config, genai_client, image_search) -> GenerationClient:
    return GenerationClient(test_config, client=genai_client, image_search=image_search)


class TestDecodeResponse:
    """Tests for decode_response."""

    def test_function_calls_become_tool_turn(self):
        turn = decode_response(tool_response(image_call()))
        assert isinstance(turn, ToolCallTurn)
        assert turn.calls[0].name == STOCK_IMAGE_TOOL_NAME
        assert turn.model_content.role == "model"

    def test_builds_model_content_without_candidates(self):
        response = Mock(function_calls=[image_call()], candidates=None, text=None)
        turn = decode_response(response)
        assert turn.model_content.parts[0].function_call.name == STOCK_IMAGE_TOOL_NAME

    def test_text_becomes_final_turn(self):
        assert decode_response(text_response("{}")) == FinalTurn(text="{}")

    def test_empty_reply_raises(self):
        with pytest.raises(GenerationError, match="empty"):
            decode_response(text_response(""))


class TestParsePipelineResult:
    """Tests for parse_pipeline_result."""

    def test_valid_json(self):
        result = parse_pipeline_result(RESULT_JSON)
        assert len(result.variations) == 4
        assert result.variations[0].theme_name == "V1"

    @pytest.mark.parametrize("text", ["not json", "{}", '{"themes": [], "guide": "", "content": ""}'])
    def test_invalid_payload_raises(self, text):
        with pytest.raises(GenerationError):
            parse_pipeline_result(text)


class TestBuildUserTurn:
    """Tests for the first user turn."""

    def test_text_only(self, client):
        turn = client.build_user_turn(None, "Brutalist", "card", "Pro plan")
        assert turn.role == "user"
        assert len(turn.parts) == 1
        assert '"Brutalist"' in turn.parts[0].text
        assert "Pro plan" in turn.parts[0].text

    def test_image_part_comes_first(self, client):
        payload = base64.b64encode(b"\x89PNG fake").decode("ascii")
        turn = client.build_user_turn(f"data:image/jpeg;base64,{payload}", "Modern", "", "")
        assert len(turn.parts) == 2
        assert turn.parts[0].inline_data.mime_type == "image/jpeg"
        assert turn.parts[0].inline_data.data == b"\x89PNG fake"
        assert turn.parts[1].text

    def test_bad_image_raises(self, client):
        with pytest.raises(GenerationError):
            client.build_user_turn("data:image/png;base64,@@@", "Modern", "", "")


class TestAnswerToolCalls:
    """Tests for answer_tool_calls."""

    def test_stock_image_call(self, client, image_search):
        content = client.answer_tool_calls((image_call("coffee shop", "c7"),))

        image_search.assert_called_once_with("coffee shop")
        response = content.parts[0].function_response
        assert response.id == "c7"
        assert response.name == STOCK_IMAGE_TOOL_NAME
        assert response.response == {"images": ["https://img/1.jpg"]}

    def test_unknown_function_gets_error_payload(self, client, image_search):
        call = types.FunctionCall(id="c1", name="get_weather", args={})
        content = client.answer_tool_calls((call,))

        image_search.assert_not_called()
        assert "error" in content.parts[0].function_response.response

    def test_one_response_per_call(self, client):
        content = client.answer_tool_calls((image_call("a", "1"), image_call("b", "2")))
        assert [p.function_response.id for p in content.parts] == ["1", "2"]


class TestGenerate:
    """Tests for the two-turn generate conversation."""

    def test_tool_round_trip(self, client, genai_client, image_search):
        genai_client.models.generate_content.side_effect = [
            tool_response(image_call("office")),
            text_response(RESULT_JSON),
        ]

        result = client.generate(None, "Modern", "card", "copy")

        assert len(result.variations) == 4
        image_search.assert_called_once_with("office")

        first, second = genai_client.models.generate_content.call_args_list
        assert first.kwargs["config"].tools
        assert first.kwargs["config"].response_schema is None
        final_contents = second.kwargs["contents"]
        assert len(final_contents) == 3
        assert final_contents[1].role == "model"
        assert final_contents[2].parts[0].function_response.name == STOCK_IMAGE_TOOL_NAME
        assert second.kwargs["config"].response_mime_type == "application/json"
        assert not second.kwargs["config"].tools

    def test_no_tool_call_reissues_with_schema(self, client, genai_client, image_search):
        genai_client.models.generate_content.side_effect = [
            text_response("some free text"),
            text_response(RESULT_JSON),
        ]

        result = client.generate(None, "Modern", "", "")

        assert result.guide == "g"
        image_search.assert_not_called()
        first, second = genai_client.models.generate_content.call_args_list
        assert len(second.kwargs["contents"]) == 1
        assert second.kwargs["config"].response_schema is not None

    def test_thinking_budget_on_every_turn(self, client, genai_client):
        genai_client.models.generate_content.side_effect = [
            text_response("x"),
            text_response(RESULT_JSON),
        ]
        client.generate(None, "Modern", "", "")
        for call in genai_client.models.generate_content.call_args_list:
            assert call.kwargs["config"].thinking_config.thinking_budget == 4000
            assert call.kwargs["model"] == "gemini-3-pro-preview"

    def test_transport_error_raises_generation_error(self, client, genai_client):
        genai_client.models.generate_content.side_effect = ConnectionError("reset")
        with pytest.raises(GenerationError, match="reset"):
            client.generate(None, "Modern", "", "")

    def test_bad_final_json_raises(self, client, genai_client):
        genai_client.models.generate_content.side_effect = [
            text_response("x"),
            text_response("{not json"),
        ]
        with pytest.raises(GenerationError):
            client.generate(None, "Modern", "", "")

    def test_tool_call_on_final_turn_raises(self, client, genai_client):
        genai_client.models.generate_content.side_effect = [
            tool_response(image_call()),
            tool_response(image_call()),
        ]
        with pytest.raises(GenerationError, match="final turn"):
            client.generate(None, "Modern", "", "")


class TestClientCreation:
    """Tests for lazy genai.Client creation."""

    def test_missing_key_raises(self, test_config):
        cfg = test_config.model_copy(update={"gemini_api_key": ""})
        with pytest.raises(GenerationError, match="API key"):
            GenerationClient(cfg).client

    def test_injected_client_is_used(self, client, genai_client):
        assert client.client is genai_client

    def test_default_image_search_uses_client_config(self, test_config):
        with patch("visionbootstrap.core.generation_client.search_images") as search:
            search.return_value = ["https://img/1.jpg"]
            client = GenerationClient(test_config, client=Mock())
            client.image_search("office")

        search.assert_called_once_with("office", config=test_config)
