"""Google Gemini LLM client implementation."""

import os
import uuid
import logging
from typing import Optional, List, Dict, Any

from google import genai
from google.genai import types

from .base_client import BaseLLMClient, Message, LLMResponse, ToolCall, ToolDeclaration

logger = logging.getLogger(__name__)

# Gemini may omit function call ids; ids we mint carry this prefix and are never sent back
LOCAL_CALL_ID_PREFIX = "local-call-"


class GeminiClient(BaseLLMClient):
    """Google Gemini client implementation."""

    DEFAULT_MODEL = "gemini-3-flash-preview"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Gemini API key (falls back to GEMINI_API_KEY, GOOGLE_API_KEY, API_KEY env vars)
            model: Model to use (default: gemini-3-flash-preview)
        """
        self.api_key = (
            api_key
            or os.environ.get("GEMINI_API_KEY")
            or os.environ.get("GOOGLE_API_KEY")
            or os.environ.get("API_KEY")
        )
        self.model = model or self.DEFAULT_MODEL
        self.client = None

        if self.api_key:
            self.client = genai.Client(api_key=self.api_key)
            logger.info(f"Gemini client initialized with model: {self.model}")
        else:
            logger.warning("No Gemini API key provided")

    def chat(
        self,
        messages: List[Message],
        tools: Optional[List[ToolDeclaration]] = None,
        temperature: float = 0.7,
        max_tokens: int = 4000
    ) -> LLMResponse:
        """Send generate-content request to Gemini."""
        if not self.client:
            raise RuntimeError("Gemini client not initialized. Check API key.")

        system_instruction, contents = self._convert_messages(messages)

        config_kwargs: Dict[str, Any] = {
            "temperature": temperature,
            "max_output_tokens": max_tokens,
        }
        if system_instruction:
            config_kwargs["system_instruction"] = system_instruction
        if tools:
            config_kwargs["tools"] = [types.Tool(
                function_declarations=[self._convert_declaration(tool) for tool in tools]
            )]
            config_kwargs["automatic_function_calling"] = types.AutomaticFunctionCallingConfig(
                disable=True
            )

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=contents,
                config=types.GenerateContentConfig(**config_kwargs)
            )
            return self._parse_response(response)

        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise

    def _convert_messages(self, messages: List[Message]):
        """
        Convert messages to Gemini contents.

        Assistant turns are replayed from the provider-native content when
        available so thought signatures survive the round-trip. A tool message
        becomes one content with a function_response part per result.

        Returns:
            Tuple of (system instruction, contents)
        """
        system_parts = []
        contents: List[types.Content] = []

        for msg in messages:
            if msg.role == "system":
                system_parts.append(msg.content)
            elif msg.role == "tool":
                contents.append(types.Content(
                    role="user",
                    parts=[
                        types.Part(function_response=types.FunctionResponse(
                            id=_wire_id(result.call_id),
                            name=result.name,
                            response=result.to_response()
                        ))
                        for result in msg.tool_results or []
                    ]
                ))
            elif msg.role == "assistant":
                if isinstance(msg.raw_content, types.Content):
                    contents.append(msg.raw_content)
                    continue
                parts = []
                if msg.content:
                    parts.append(types.Part(text=msg.content))
                for tc in msg.tool_calls or []:
                    parts.append(types.Part(function_call=types.FunctionCall(
                        id=_wire_id(tc.id),
                        name=tc.name,
                        args=tc.arguments
                    )))
                if parts:
                    contents.append(types.Content(role="model", parts=parts))
            else:
                contents.append(types.Content(
                    role="user",
                    parts=[types.Part(text=msg.content)]
                ))

        return "\n".join(system_parts).strip(), contents

    def _convert_declaration(self, tool: ToolDeclaration) -> types.FunctionDeclaration:
        """Convert a JSON-schema tool declaration to a Gemini function declaration."""
        parameters = None
        if tool.parameters.get("properties"):
            parameters = _to_gemini_schema(tool.parameters)
        return types.FunctionDeclaration(
            name=tool.name,
            description=tool.description,
            parameters=parameters
        )

    def _parse_response(self, response) -> LLMResponse:
        """Extract text and function calls from the first candidate."""
        candidates = response.candidates or []
        if not candidates:
            logger.warning("Gemini returned no candidates")
            return LLMResponse(content="")

        candidate = candidates[0]
        content = candidate.content
        parts = (content.parts if content else None) or []

        text = ""
        tool_calls = []
        for part in parts:
            if part.function_call:
                call = part.function_call
                tool_calls.append(ToolCall(
                    id=call.id or f"{LOCAL_CALL_ID_PREFIX}{uuid.uuid4().hex[:12]}",
                    name=call.name,
                    arguments=dict(call.args or {})
                ))
            elif part.text and not part.thought:
                text += part.text

        usage = None
        if response.usage_metadata:
            meta = response.usage_metadata
            usage = {
                "prompt_tokens": meta.prompt_token_count or 0,
                "completion_tokens": meta.candidates_token_count or 0,
                "total_tokens": meta.total_token_count or 0,
            }

        return LLMResponse(
            content=text,
            tool_calls=tool_calls if tool_calls else None,
            usage=usage,
            finish_reason=candidate.finish_reason.value if candidate.finish_reason else None,
            raw_content=content
        )

    def get_provider_name(self) -> str:
        """Get the provider name."""
        return "gemini"

    def get_model_name(self) -> str:
        """Get the model name."""
        return self.model


def _wire_id(call_id: str) -> Optional[str]:
    """Call id to send to Gemini (None for locally minted ids)."""
    if call_id.startswith(LOCAL_CALL_ID_PREFIX):
        return None
    return call_id


def _to_gemini_schema(schema: Dict[str, Any]) -> types.Schema:
    """Convert a JSON-schema fragment to a Gemini Schema."""
    kwargs: Dict[str, Any] = {"type": types.Type(schema["type"].upper())}
    if "description" in schema:
        kwargs["description"] = schema["description"]
    if "enum" in schema:
        kwargs["enum"] = list(schema["enum"])
    if "properties" in schema:
        kwargs["properties"] = {
            name: _to_gemini_schema(prop) for name, prop in schema["properties"].items()
        }
    if "required" in schema:
        kwargs["required"] = list(schema["required"])
    if "items" in schema:
        kwargs["items"] = _to_gemini_schema(schema["items"])
    return types.Schema(**kwargs)
