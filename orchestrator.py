"""Main orchestrator for the InspectorAI assistant."""

import logging
from typing import Optional, List, Dict, Any

from config.settings import Settings

# Data
from retrieval.generator import generate_inspection_dataset
from retrieval.inspection_store import InspectionStore

# LLM components
from llm.factory import create_llm_client
from llm.base_client import BaseLLMClient, Message

# Memory components
from memory.session import ConversationSession

# ReAct components
from react.registry import build_default_registry
from react.loop import ReActLoop, ReActResult
from react.prompts import SYSTEM_INSTRUCTION

logger = logging.getLogger(__name__)


class InspectionAssistant:
    """Chat assistant answering questions about the equipment inspection database."""

    FALLBACK_ERROR_MESSAGE = (
        "I encountered an error while communicating with the inspection database. "
        "Please ensure your API key is valid."
    )

    def __init__(
        self,
        settings: Optional[Settings] = None,
        llm_client: Optional[BaseLLMClient] = None,
        store: Optional[InspectionStore] = None
    ):
        """
        Initialize assistant.

        Args:
            settings: Application settings
            llm_client: Pre-built LLM client (default: built from settings)
            store: Pre-built inspection store (default: generated from settings)
        """
        self.settings = settings or Settings()

        # Record set is built once and shared by reference
        if store is None:
            store = InspectionStore(generate_inspection_dataset(
                seed=self.settings.dataset_seed,
                per_type=self.settings.equipment_per_type
            ))
        self.store = store
        self.registry = build_default_registry(self.store)

        self.llm_client = llm_client
        if self.llm_client is None:
            self._init_llm_client()

        self.react_loop: Optional[ReActLoop] = None
        if self.llm_client:
            self._init_react()

        self.session = ConversationSession()
        self.last_result: Optional[ReActResult] = None

    def _init_llm_client(self):
        """Initialize LLM client based on settings."""
        api_key = self.settings.get_llm_api_key()

        if not api_key:
            logger.warning(
                f"No API key for {self.settings.llm_provider.value}. "
                "Messages will be answered with the fallback error text."
            )
            return

        try:
            self.llm_client = create_llm_client(
                provider=self.settings.llm_provider,
                api_key=api_key,
                model=self.settings.llm_model
            )
            logger.info(
                f"LLM client initialized: {self.settings.llm_provider.value} "
                f"({self.llm_client.get_model_name()})"
            )
        except Exception as e:
            logger.error(f"Failed to initialize LLM client: {e}")
            self.llm_client = None

    def _init_react(self):
        """Initialize ReAct loop with the inspection tools."""
        self.react_loop = ReActLoop(
            llm_client=self.llm_client,
            registry=self.registry,
            system_instruction=SYSTEM_INSTRUCTION,
            max_tool_rounds=self.settings.max_tool_rounds,
            parallel_tool_calls=self.settings.parallel_tool_calls,
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens
        )
        logger.info(f"ReAct loop initialized with tools: {self.registry.names}")

    def send_message(self, text: str) -> str:
        """
        Process one user message end-to-end.

        Never raises: any failure while talking to the model is logged and
        answered with the fallback error text, and the session stays usable
        for the next message.

        Args:
            text: User message

        Returns:
            Final assistant text
        """
        self.last_result = None

        if not self.react_loop:
            self.session.append(Message(role="user", content=text))
            return self.FALLBACK_ERROR_MESSAGE

        try:
            result = self.react_loop.run(self.session, text)
        except Exception as e:
            logger.error(f"Error processing message: {e}", exc_info=self.settings.verbose)
            return self.FALLBACK_ERROR_MESSAGE

        self.last_result = result
        if self.settings.verbose:
            logger.debug(f"Rounds used: {result.rounds_used}, tools called: {result.tools_called}")
        return result.final_answer

    def reset(self):
        """Start a new conversation; the record set is kept."""
        logger.info(f"Discarding session {self.session.session_id}")
        self.session = ConversationSession()
        self.last_result = None

    def get_conversation_history(self) -> List[Dict[str, Any]]:
        """
        Get the user and assistant text turns of the current conversation.

        Returns:
            List of {role, content, timestamp} dicts, oldest first
        """
        return [
            {
                "role": turn.role,
                "content": turn.message.content,
                "timestamp": turn.timestamp.isoformat()
            }
            for turn in self.session.turns
            if turn.role in ("user", "assistant") and turn.message.content
        ]
