"""Application settings."""

import os
import logging
from typing import Optional
from pydantic import BaseModel

from llm.factory import LLMProvider

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Application configuration settings."""

    # LLM Provider settings
    llm_provider: LLMProvider = LLMProvider.GEMINI  # unknown names fail validation
    llm_model: Optional[str] = None  # Override the provider's default model

    # API Keys
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None

    # Tool loop settings
    max_tool_rounds: int = 5
    parallel_tool_calls: bool = True
    temperature: float = 0.3
    max_tokens: int = 4000

    # Dataset settings
    equipment_per_type: int = 50
    dataset_seed: Optional[int] = None

    # Logging
    verbose: bool = False

    def __init__(self, **data):
        # Auto-load API keys from environment if not provided
        if data.get("gemini_api_key") is None:
            data["gemini_api_key"] = (
                os.environ.get("GEMINI_API_KEY")
                or os.environ.get("GOOGLE_API_KEY")
                or os.environ.get("API_KEY")
            )

        if data.get("openai_api_key") is None:
            data["openai_api_key"] = os.environ.get("OPENAI_API_KEY")

        if data.get("anthropic_api_key") is None:
            data["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")

        if data.get("dataset_seed") is None:
            data["dataset_seed"] = _seed_from_env()

        super().__init__(**data)

    def get_llm_api_key(self) -> Optional[str]:
        """Get the API key for the configured LLM provider."""
        if self.llm_provider == LLMProvider.GEMINI:
            return self.gemini_api_key
        elif self.llm_provider == LLMProvider.OPENAI:
            return self.openai_api_key
        elif self.llm_provider == LLMProvider.ANTHROPIC:
            return self.anthropic_api_key
        return None


def _seed_from_env() -> Optional[int]:
    """Read INSPECTOR_DATASET_SEED; a non-integer value is ignored with a warning."""
    raw = os.environ.get("INSPECTOR_DATASET_SEED", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring INSPECTOR_DATASET_SEED={raw!r}: not an integer")
        return None
