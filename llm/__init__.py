"""LLM client abstraction layer."""

from .base_client import BaseLLMClient, Message, LLMResponse, ToolCall, ToolResult, ToolDeclaration
from .factory import create_llm_client, LLMProvider

__all__ = [
    "BaseLLMClient",
    "Message",
    "LLMResponse",
    "ToolCall",
    "ToolResult",
    "ToolDeclaration",
    "create_llm_client",
    "LLMProvider",
]
