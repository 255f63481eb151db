"""Model configuration with environment variable loading.

Pydantic-based configuration for the Agno chat agent.
Supports Google Gemini (default) and OpenAI as model providers.
"""

import logging
import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Keys shorter than this are almost certainly truncated copies
MIN_API_KEY_LENGTH = 30

_DEFAULT_MODELS = {
    "gemini": "gemini-2.0-flash",
    "openai": "gpt-4o-mini",
}


def _api_key_from_env() -> str:
    return (
        os.getenv("LLM_API_KEY")
        or os.getenv("GOOGLE_GEMINI_API_KEY")
        or os.getenv("OPENAI_API_KEY")
        or ""
    )


def _provider_from_env() -> str:
    return os.getenv("LLM_PROVIDER", "gemini").strip().lower()


class AgentConfig(BaseModel):
    """Configuration for the Agno chat agent.

    Attributes:
        provider: Model provider, ``gemini`` or ``openai``.
        api_key: API key for model access.
        model_name: Model identifier to use.
        temperature: Default sampling temperature (0.0 = deterministic, 2.0 = creative).
        max_tokens: Maximum tokens in generated response.
    """

    provider: Literal["gemini", "openai"] = Field(
        default_factory=_provider_from_env,
        description="LLM provider",
    )
    api_key: str = Field(
        default_factory=_api_key_from_env,
        description="API key for LLM provider",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", ""),
        description="Model to use (provider default when empty)",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_tokens: int = Field(
        default_factory=lambda: int(os.getenv("LLM_MAX_TOKENS", "2048")),
        ge=1,
        le=128000,
        description="Maximum tokens in generated response",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set LLM_API_KEY or GOOGLE_GEMINI_API_KEY in .env"
            )
        v = v.strip()
        if len(v) < MIN_API_KEY_LENGTH:
            logger.warning("LLM API key seems too short. Please verify it's correct.")
        return v

    @property
    def resolved_model(self) -> str:
        """Model identifier, falling back to the provider default."""
        return self.model_name or _DEFAULT_MODELS[self.provider]


def get_agent_config() -> AgentConfig:
    """Create agent configuration from environment.

    Returns:
        Configured AgentConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return AgentConfig()
