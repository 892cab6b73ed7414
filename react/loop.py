"""ReAct loop implementation."""

import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import List, Dict, Any
from pydantic import BaseModel, Field

from llm.base_client import BaseLLMClient, Message, ToolCall, ToolResult
from memory.session import ConversationSession
from .errors import MaxToolRoundsExceeded
from .registry import ToolRegistry

logger = logging.getLogger(__name__)


class LoopState(str, Enum):
    """Where the loop is within a user turn."""
    IDLE = "idle"
    AWAITING_MODEL = "awaiting_model"
    EXECUTING_TOOLS = "executing_tools"


class ReActStep(BaseModel):
    """A single tool execution within the ReAct loop."""
    round_number: int
    call_id: str
    action: str
    action_input: Dict[str, Any] = Field(default_factory=dict)
    success: bool
    observation: Any = None


class ReActResult(BaseModel):
    """Result of one user turn through the ReAct loop."""
    steps: List[ReActStep]
    final_answer: str
    rounds_used: int
    tools_called: List[str]


class ReActLoop:
    """
    ReAct (Reasoning + Acting) loop for one user turn.

    Sends the conversation to the LLM, executes every tool call the model
    requests, feeds all results back in a single tool message, and repeats
    until the model answers in plain text. Each tool call gets exactly one
    result carrying its call id. The number of tool rounds per turn is
    bounded by max_tool_rounds.
    """

    MAX_TOOL_ROUNDS = 5
    NO_OUTPUT_MESSAGE = "I processed the request but received no text output."
    ROUND_LIMIT_ERROR = "Tool round limit reached; no further tools will run for this request."

    def __init__(
        self,
        llm_client: BaseLLMClient,
        registry: ToolRegistry,
        system_instruction: str,
        max_tool_rounds: int = MAX_TOOL_ROUNDS,
        parallel_tool_calls: bool = True,
        temperature: float = 0.3,
        max_tokens: int = 4000
    ):
        """
        Initialize ReAct loop.

        Args:
            llm_client: LLM client for reasoning
            registry: Tools available to the model
            system_instruction: Fixed system prompt sent with every request
            max_tool_rounds: Maximum tool-execution rounds per user turn (default: 5)
            parallel_tool_calls: Run the calls of one model turn concurrently
            temperature: Sampling temperature
            max_tokens: Maximum tokens per model response
        """
        if max_tool_rounds < 1:
            raise ValueError("max_tool_rounds must be at least 1")

        self.llm_client = llm_client
        self.registry = registry
        self.system_instruction = system_instruction
        self.max_tool_rounds = max_tool_rounds
        self.parallel_tool_calls = parallel_tool_calls
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.tool_declarations = list(registry.list_declarations())
        self._state = LoopState.IDLE

    @property
    def state(self) -> LoopState:
        return self._state

    def run(self, session: ConversationSession, user_text: str) -> ReActResult:
        """
        Run one user turn to completion.

        Args:
            session: Conversation to append the turn to
            user_text: User's message

        Returns:
            ReActResult with the final answer and the tool steps taken

        Raises:
            MaxToolRoundsExceeded: If the model keeps requesting tools past the limit
            Exception: Whatever the LLM client raises on a failed request
        """
        if self._state != LoopState.IDLE:
            raise RuntimeError(f"ReAct loop is busy ({self._state.value})")

        steps: List[ReActStep] = []
        tools_called: List[str] = []
        rounds = 0

        session.append(Message(role="user", content=user_text))
        self._state = LoopState.AWAITING_MODEL

        try:
            while True:
                logger.info(f"ReAct request {rounds + 1} (tool rounds used: {rounds}/{self.max_tool_rounds})")

                response = self.llm_client.chat(
                    messages=self._build_messages(session),
                    tools=self.tool_declarations,
                    temperature=self.temperature,
                    max_tokens=self.max_tokens
                )

                session.append(Message(
                    role="assistant",
                    content=response.content or "",
                    tool_calls=response.tool_calls,
                    raw_content=response.raw_content
                ))

                if not response.tool_calls:
                    logger.info(f"ReAct completed after {rounds} tool rounds")
                    return ReActResult(
                        steps=steps,
                        final_answer=response.content or self.NO_OUTPUT_MESSAGE,
                        rounds_used=rounds,
                        tools_called=tools_called
                    )

                if rounds >= self.max_tool_rounds:
                    # Answer the pending calls so the history stays well-formed
                    logger.warning(f"ReAct tool round limit ({self.max_tool_rounds}) reached")
                    session.append(Message(
                        role="tool",
                        tool_results=[
                            ToolResult(call_id=call.id, name=call.name, success=False, error=self.ROUND_LIMIT_ERROR)
                            for call in response.tool_calls
                        ]
                    ))
                    raise MaxToolRoundsExceeded(self.max_tool_rounds)

                rounds += 1
                self._state = LoopState.EXECUTING_TOOLS
                results = self._execute_tool_calls(response.tool_calls)

                for call, result in zip(response.tool_calls, results):
                    steps.append(ReActStep(
                        round_number=rounds,
                        call_id=call.id,
                        action=call.name,
                        action_input=call.arguments,
                        success=result.success,
                        observation=result.result if result.success else result.error
                    ))
                    if result.success:
                        tools_called.append(call.name)

                session.append(Message(role="tool", tool_results=results))
                self._state = LoopState.AWAITING_MODEL
        finally:
            self._state = LoopState.IDLE

    def _build_messages(self, session: ConversationSession) -> List[Message]:
        """System instruction followed by the full conversation."""
        return [Message(role="system", content=self.system_instruction)] + session.messages

    def _execute_tool_calls(self, tool_calls: List[ToolCall]) -> List[ToolResult]:
        """
        Execute one model turn's tool calls.

        Returns:
            One result per call, in the same order as the calls
        """
        if self.parallel_tool_calls and len(tool_calls) > 1:
            with ThreadPoolExecutor(max_workers=len(tool_calls)) as pool:
                return list(pool.map(self._execute_one, tool_calls))
        return [self._execute_one(call) for call in tool_calls]

    def _execute_one(self, call: ToolCall) -> ToolResult:
        try:
            return self.registry.execute(call)
        except Exception as e:
            logger.exception(f"Tool registry failed on {call.name}")
            return ToolResult(call_id=call.id, name=call.name, success=False, error=str(e))
