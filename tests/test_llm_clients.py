"""Tests for provider message mapping in the LLM clients."""

import json
import pytest
from unittest.mock import Mock

from google.genai import types

from llm.anthropic_client import AnthropicClient
from llm.base_client import Message, ToolCall, ToolDeclaration, ToolResult
from llm.factory import LLMProvider, create_llm_client
from llm.gemini_client import GeminiClient, LOCAL_CALL_ID_PREFIX
from llm.openai_client import OpenAIClient


HISTORY_DECL = ToolDeclaration(
    name="get_inspection_history",
    description="History for one equipment ID.",
    parameters={
        "type": "object",
        "properties": {"equipmentId": {"type": "string", "description": "Equipment ID"}},
        "required": ["equipmentId"],
    },
)
LIST_DECL = ToolDeclaration(
    name="get_equipment_list",
    description="List all equipment.",
    parameters={"type": "object", "properties": {}},
)


def conversation(call_ids=("c1", "c2")):
    """System, user, assistant with two tool calls, and the batched tool results."""
    return [
        Message(role="system", content="You are InspectorAI."),
        Message(role="user", content="Compare PSV-001 and PSV-002"),
        Message(role="assistant", content="", tool_calls=[
            ToolCall(id=call_ids[0], name="get_inspection_history", arguments={"equipmentId": "EQ-PSV-001"}),
            ToolCall(id=call_ids[1], name="get_inspection_history", arguments={"equipmentId": "EQ-PSV-002"}),
        ]),
        Message(role="tool", tool_results=[
            ToolResult(call_id=call_ids[0], name="get_inspection_history", success=True, result={"id": "EQ-PSV-001"}),
            ToolResult(call_id=call_ids[1], name="get_inspection_history", success=False, error="Missing equipmentId"),
        ]),
    ]


def named_mock(name, **kwargs):
    mock = Mock(**kwargs)
    mock.name = name
    return mock


class TestOpenAIClient:
    """Test OpenAI chat-completions mapping."""

    def setup_method(self):
        """Set up test fixtures."""
        self.client = OpenAIClient(api_key="sk-test")
        self.client.client = Mock()

    def test_tool_results_become_tool_messages(self):
        """Test each result is sent as its own tool message keyed by call id."""
        converted = self.client._convert_messages(conversation())

        assert [m["role"] for m in converted] == ["system", "user", "assistant", "tool", "tool"]
        assert [tc["id"] for tc in converted[2]["tool_calls"]] == ["c1", "c2"]
        assert converted[3]["tool_call_id"] == "c1"
        assert json.loads(converted[3]["content"]) == {"result": {"id": "EQ-PSV-001"}}
        assert json.loads(converted[4]["content"]) == {"error": "Missing equipmentId"}

    def test_parse_tool_calls(self):
        """Test tool calls and usage are read from the response."""
        tool_call = Mock(id="call_abc", function=named_mock("search_similar_findings", arguments='{"query": "leak"}'))
        response = Mock()
        response.choices = [Mock(message=Mock(content=None, tool_calls=[tool_call]), finish_reason="tool_calls")]
        response.usage = Mock(prompt_tokens=10, completion_tokens=5, total_tokens=15)
        self.client.client.chat.completions.create.return_value = response

        result = self.client.chat(conversation()[:2], tools=[HISTORY_DECL])

        assert result.content == ""
        assert result.tool_calls[0].id == "call_abc"
        assert result.tool_calls[0].name == "search_similar_findings"
        assert result.tool_calls[0].arguments == {"query": "leak"}
        assert result.usage["total_tokens"] == 15

        kwargs = self.client.client.chat.completions.create.call_args.kwargs
        assert kwargs["tools"][0]["function"]["name"] == "get_inspection_history"
        assert kwargs["tool_choice"] == "auto"

    def test_api_error_propagates(self):
        """Test SDK errors are re-raised."""
        self.client.client.chat.completions.create.side_effect = RuntimeError("401")

        with pytest.raises(RuntimeError):
            self.client.chat(conversation()[:2])

    def test_requires_key(self, monkeypatch):
        """Test chat fails fast without an API key."""
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(RuntimeError):
            OpenAIClient().chat([Message(role="user", content="hi")])


class TestAnthropicClient:
    """Test Anthropic messages mapping."""

    def setup_method(self):
        """Set up test fixtures."""
        self.client = AnthropicClient(api_key="sk-ant-test")
        self.client.client = Mock()

    def test_tool_results_batched_in_one_user_message(self):
        """Test all results of one model turn travel in a single user message."""
        system, converted = self.client._convert_messages(conversation())

        assert system == "You are InspectorAI."
        assert [m["role"] for m in converted] == ["user", "assistant", "user"]
        assert [b["type"] for b in converted[1]["content"]] == ["tool_use", "tool_use"]

        blocks = converted[2]["content"]
        assert [b["tool_use_id"] for b in blocks] == ["c1", "c2"]
        assert [b["is_error"] for b in blocks] == [False, True]

    def test_parse_tool_use(self):
        """Test tool_use blocks become tool calls."""
        response = Mock(
            content=[
                Mock(type="text", text="Checking."),
                named_mock("get_equipment_list", type="tool_use", id="toolu_1", input={}),
            ],
            usage=Mock(input_tokens=20, output_tokens=8),
            stop_reason="tool_use",
        )
        self.client.client.messages.create.return_value = response

        result = self.client.chat(conversation()[:2], tools=[LIST_DECL], temperature=0.3)

        assert result.content == "Checking."
        assert result.tool_calls[0].id == "toolu_1"
        assert result.tool_calls[0].name == "get_equipment_list"
        assert result.usage["total_tokens"] == 28

        kwargs = self.client.client.messages.create.call_args.kwargs
        assert kwargs["system"] == "You are InspectorAI."
        assert kwargs["tools"][0]["input_schema"] == LIST_DECL.parameters
        assert kwargs["temperature"] == 0.3


class TestGeminiClient:
    """Test Gemini generate-content mapping."""

    def setup_method(self):
        """Set up test fixtures."""
        self.client = GeminiClient(api_key="gemini-test")
        self.client.client = Mock()

    def test_tool_results_batched_in_one_content(self):
        """Test results of one model turn become one content of function responses."""
        system, contents = self.client._convert_messages(conversation())

        assert system == "You are InspectorAI."
        assert [c.role for c in contents] == ["user", "model", "user"]
        assert [p.function_call.id for p in contents[1].parts] == ["c1", "c2"]

        responses = [p.function_response for p in contents[2].parts]
        assert [r.id for r in responses] == ["c1", "c2"]
        assert responses[0].response == {"result": {"id": "EQ-PSV-001"}}
        assert responses[1].response == {"error": "Missing equipmentId"}

    def test_local_ids_not_sent(self):
        """Test locally minted call ids are dropped on the wire."""
        local = (f"{LOCAL_CALL_ID_PREFIX}a", f"{LOCAL_CALL_ID_PREFIX}b")
        _, contents = self.client._convert_messages(conversation(local))

        assert [p.function_call.id for p in contents[1].parts] == [None, None]
        assert [p.function_response.id for p in contents[2].parts] == [None, None]

    def test_raw_content_replayed(self):
        """Test a provider-native assistant turn is sent back unchanged."""
        raw = types.Content(role="model", parts=[types.Part(text="Hi", thought_signature=b"sig")])
        _, contents = self.client._convert_messages([
            Message(role="user", content="Hello"),
            Message(role="assistant", content="Hi", raw_content=raw),
        ])

        assert contents[1] is raw

    def test_declarations(self):
        """Test parameterless tools send no schema and others convert types."""
        empty = self.client._convert_declaration(LIST_DECL)
        history = self.client._convert_declaration(HISTORY_DECL)

        assert empty.parameters is None
        assert history.parameters.type == types.Type.OBJECT
        assert history.parameters.properties["equipmentId"].type == types.Type.STRING
        assert history.parameters.required == ["equipmentId"]

    def test_parse_function_calls(self):
        """Test function calls, ids and usage are read from the first candidate."""
        content = types.Content(role="model", parts=[
            types.Part(text="internal", thought=True),
            types.Part(function_call=types.FunctionCall(id="fc-1", name="get_equipment_list", args={})),
            types.Part(function_call=types.FunctionCall(
                name="search_similar_findings", args={"query": "corrosion"}
            )),
        ])
        self.client.client.models.generate_content.return_value = types.GenerateContentResponse(
            candidates=[types.Candidate(content=content, finish_reason=types.FinishReason.STOP)],
            usage_metadata=types.GenerateContentResponseUsageMetadata(
                prompt_token_count=30, candidates_token_count=6, total_token_count=36
            ),
        )

        result = self.client.chat(conversation()[:2], tools=[LIST_DECL, HISTORY_DECL], temperature=0.3)

        assert result.content == ""
        assert result.tool_calls[0].id == "fc-1"
        assert result.tool_calls[1].id.startswith(LOCAL_CALL_ID_PREFIX)
        assert result.tool_calls[1].arguments == {"query": "corrosion"}
        assert result.usage == {"prompt_tokens": 30, "completion_tokens": 6, "total_tokens": 36}
        assert result.finish_reason == "STOP"
        assert result.raw_content == content

        config = self.client.client.models.generate_content.call_args.kwargs["config"]
        assert config.temperature == 0.3
        assert config.automatic_function_calling.disable is True
        assert [d.name for d in config.tools[0].function_declarations] == [
            "get_equipment_list", "get_inspection_history"
        ]

    def test_parse_text(self):
        """Test text parts are concatenated and thoughts skipped."""
        self.client.client.models.generate_content.return_value = types.GenerateContentResponse(
            candidates=[types.Candidate(content=types.Content(role="model", parts=[
                types.Part(text="thinking", thought=True),
                types.Part(text="PSV-001 "),
                types.Part(text="is fine."),
            ]))],
        )

        result = self.client.chat(conversation()[:2])

        assert result.content == "PSV-001 is fine."
        assert result.tool_calls is None

    def test_no_candidates(self):
        """Test an empty candidate list yields an empty response."""
        self.client.client.models.generate_content.return_value = types.GenerateContentResponse(candidates=[])

        result = self.client.chat(conversation()[:2])

        assert result.content == ""
        assert result.tool_calls is None


class TestFactory:
    """Test client construction by provider."""

    @pytest.mark.parametrize("provider, cls", [
        (LLMProvider.GEMINI, GeminiClient),
        (LLMProvider.OPENAI, OpenAIClient),
        (LLMProvider.ANTHROPIC, AnthropicClient),
    ])
    def test_create(self, provider, cls):
        """Test each provider maps to its client."""
        client = create_llm_client(provider, api_key="key", model="custom-model")

        assert isinstance(client, cls)
        assert client.get_provider_name() == provider.value
        assert client.get_model_name() == "custom-model"

    def test_unknown_provider(self):
        """Test unknown provider strings are rejected."""
        with pytest.raises(ValueError):
            LLMProvider("mistral")
