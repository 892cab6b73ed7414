"""Base LLM client interface."""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field


class ToolDeclaration(BaseModel):
    """Tool made available to the LLM for function calling."""
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: Dict[str, Any]  # JSON schema of type "object"


class ToolCall(BaseModel):
    """Tool call from LLM."""
    id: str
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


class ToolResult(BaseModel):
    """Result of executing one tool call."""
    call_id: str
    name: str
    success: bool
    result: Any = None
    error: Optional[str] = None

    def to_response(self) -> Dict[str, Any]:
        """Response payload sent back to the model."""
        if self.success:
            return {"result": self.result}
        return {"error": self.error}


class Message(BaseModel):
    """Chat message."""
    role: str  # "system", "user", "assistant", "tool"
    content: str = ""
    tool_calls: Optional[List[ToolCall]] = None  # For assistant messages with tool calls
    tool_results: Optional[List[ToolResult]] = None  # For tool messages, one per call
    raw_content: Optional[Any] = Field(default=None, exclude=True, repr=False)  # Provider-native turn for replay


class LLMResponse(BaseModel):
    """Response from LLM."""
    content: str
    tool_calls: Optional[List[ToolCall]] = None
    usage: Optional[Dict[str, int]] = None
    finish_reason: Optional[str] = None
    raw_content: Optional[Any] = Field(default=None, exclude=True, repr=False)


class BaseLLMClient(ABC):
    """Abstract base class for LLM clients."""

    @abstractmethod
    def chat(
        self,
        messages: List[Message],
        tools: Optional[List[ToolDeclaration]] = None,
        temperature: float = 0.7,
        max_tokens: int = 4000
    ) -> LLMResponse:
        """
        Send chat completion request.

        Args:
            messages: List of messages in conversation
            tools: Optional list of tool declarations for function calling
            temperature: Sampling temperature (0-1)
            max_tokens: Maximum tokens in response

        Returns:
            LLMResponse with content and optional tool calls
        """
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Get the name of the LLM provider."""
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """Get the name of the model being used."""
        pass
