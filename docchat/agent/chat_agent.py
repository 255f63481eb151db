"""Agno agent service with streaming support.

Wraps the hosted model behind a small service so the relay only deals with
plain text deltas. The agent is stateless: conversation history and document
context travel inside the prompt built by the relay, so no session storage or
knowledge base is attached.
"""

import logging
from collections import OrderedDict
from collections.abc import AsyncGenerator

from agno.agent import Agent
from agno.models.google import Gemini
from agno.models.openai import OpenAIChat

from docchat.agent.config import AgentConfig, get_agent_config

logger = logging.getLogger(__name__)

# Agno event names that carry a text delta (2.x and 1.x naming)
_CONTENT_EVENTS = {"RunContent", "RunResponseContent", "RunResponse"}

# Agents kept for recently used temperatures; the least recently used is dropped
MAX_CACHED_AGENTS = 8

_INSTRUCTIONS = [
    "Provide helpful and accurate responses.",
    "When a document excerpt is included in the prompt, base your answer on it.",
    "Answer in the language the user writes in.",
    "Be concise yet thorough.",
]


class ModelError(Exception):
    """Raised when the model call fails."""

    pass


class AgentService:
    """Service for talking to the hosted model through Agno.

    Agno binds the temperature to the model instance, so one Agent is built
    per requested temperature. Only the MAX_CACHED_AGENTS most recently used
    are kept.
    """

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the agent service.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._agents: OrderedDict[float, Agent] = OrderedDict()
        logger.info(
            f"Model backend: {self._config.provider} ({self._config.resolved_model})"
        )

    @property
    def config(self) -> AgentConfig:
        return self._config

    def _create_model(self, temperature: float) -> Gemini | OpenAIChat:
        if self._config.provider == "openai":
            return OpenAIChat(
                id=self._config.resolved_model,
                api_key=self._config.api_key,
                temperature=temperature,
                max_tokens=self._config.max_tokens,
            )
        return Gemini(
            id=self._config.resolved_model,
            api_key=self._config.api_key,
            temperature=temperature,
            max_output_tokens=self._config.max_tokens,
        )

    def _create_agent(self, temperature: float) -> Agent:
        return Agent(
            model=self._create_model(temperature),
            description="A helpful chat assistant that can read attached documents.",
            instructions=_INSTRUCTIONS,
            markdown=True,
        )

    def _agent_for(self, temperature: float | None) -> Agent:
        if temperature is None:
            temperature = self._config.temperature
        agent = self._agents.get(temperature)
        if agent is not None:
            self._agents.move_to_end(temperature)
            return agent

        agent = self._create_agent(temperature)
        self._agents[temperature] = agent
        if len(self._agents) > MAX_CACHED_AGENTS:
            evicted, _ = self._agents.popitem(last=False)
            logger.debug(f"Dropped cached agent for temperature {evicted}")
        return agent

    async def stream_response(
        self,
        message: str,
        temperature: float | None = None,
    ) -> AsyncGenerator[str]:
        """Stream response text deltas for a prompt.

        Args:
            message: The full prompt.
            temperature: Optional per-request sampling temperature.

        Yields:
            Response text chunks as they arrive.

        Raises:
            ModelError: If the model call fails.
        """
        agent = self._agent_for(temperature)
        try:
            async for chunk in agent.arun(message, stream=True):
                event = getattr(chunk, "event", None)
                if event is not None and event not in _CONTENT_EVENTS:
                    continue
                content = getattr(chunk, "content", None)
                if isinstance(content, str) and content:
                    yield content
        except Exception as e:
            logger.error(f"Model streaming failed: {e}")
            raise ModelError(str(e)) from e

    async def get_response(
        self,
        message: str,
        temperature: float | None = None,
    ) -> str:
        """Get complete response for a prompt.

        Args:
            message: The full prompt.
            temperature: Optional per-request sampling temperature.

        Returns:
            Complete response text (empty when the model produced nothing).

        Raises:
            ModelError: If the model call fails.
        """
        agent = self._agent_for(temperature)
        try:
            response = await agent.arun(message)
        except Exception as e:
            logger.error(f"Model request failed: {e}")
            raise ModelError(str(e)) from e
        content = getattr(response, "content", None)
        return content if isinstance(content, str) else ""


# Module-level singleton instance
_agent_service: AgentService | None = None


def get_agent_service() -> AgentService:
    """Get or create the global agent service.

    Returns:
        The AgentService instance.
    """
    global _agent_service
    if _agent_service is None:
        _agent_service = AgentService()
    return _agent_service
