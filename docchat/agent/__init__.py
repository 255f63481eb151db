"""Agno agent logic for model access.

Responsibilities:
    - Model construction for Gemini or OpenAI from environment configuration
    - Streaming token generation for the SSE relay
    - Non-streaming completion for chunked relays and diagnostics

Maintains clean separation from the HTTP layer.
"""

from docchat.agent.chat_agent import AgentService, ModelError, get_agent_service
from docchat.agent.config import AgentConfig, get_agent_config

__all__ = [
    "AgentConfig",
    "AgentService",
    "ModelError",
    "get_agent_config",
    "get_agent_service",
]
