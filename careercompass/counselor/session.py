"""Session gateway: opens persona-bound chat sessions and streams replies.

The provider is stateless over the chat completions API, so a
:class:`ChatSession` carries the transcript of completed turns and replays
it with every request. The controller never touches that transcript; it
only hands the session back to :meth:`SessionGateway.send_turn`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, List, Optional, Protocol, Tuple

import httpx
from openai import OpenAIError

from ..errors import ConfigurationError, InitializationError, TransportError
from .client import DEFAULT_MODEL, ProviderSettings, get_openai_client
from .prompts import SYSTEM_INSTRUCTIONS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersonaConfig:
    """Fixed behavior contract for every session."""

    model: str = DEFAULT_MODEL
    system_instruction: str = SYSTEM_INSTRUCTIONS
    temperature: float = 0.7  # 0..1, randomness of the output

    def __post_init__(self) -> None:
        if not 0.0 <= self.temperature <= 1.0:
            raise ConfigurationError(f"temperature must be within [0, 1], got {self.temperature}")


class ChatSession:
    """Opaque handle bound to one persona for its whole lifetime."""

    def __init__(self, client: Any, config: PersonaConfig) -> None:
        self.client = client
        self.config = config
        self._turns: List[Dict[str, str]] = []

    @property
    def turns(self) -> Tuple[Dict[str, str], ...]:
        return tuple(self._turns)

    def build_messages(self, user_text: str) -> List[Dict[str, str]]:
        return (
            [{"role": "system", "content": self.config.system_instruction}]
            + list(self._turns)
            + [{"role": "user", "content": user_text}]
        )

    def record_turn(self, user_text: str, reply: str) -> None:
        self._turns.append({"role": "user", "content": user_text})
        self._turns.append({"role": "assistant", "content": reply})


class ChatGateway(Protocol):
    """What the conversation controller needs from a provider."""

    def create_session(self, config: PersonaConfig) -> ChatSession:  # pragma: no cover - interface only
        ...

    def send_turn(self, session: ChatSession, text: str) -> AsyncIterator[str]:  # pragma: no cover - interface only
        ...

    async def aclose(self) -> None:  # pragma: no cover - interface only
        ...


def _extract_delta_text(chunk: Any) -> str:
    """Pull the text delta out of one streamed chunk.

    Role-only and finish chunks carry no content and yield "". Depending on
    SDK version (or a test double), chunks may be objects or plain dicts.
    """
    choices = chunk.get("choices") if isinstance(chunk, dict) else getattr(chunk, "choices", None)
    for choice in choices or []:
        delta = choice.get("delta") if isinstance(choice, dict) else getattr(choice, "delta", None)
        if delta is None:
            continue
        content = delta.get("content") if isinstance(delta, dict) else getattr(delta, "content", None)
        if isinstance(content, str) and content:
            return content
        return ""
    return ""


class SessionGateway:
    """Thin wrapper around the chat completions streaming API."""

    def __init__(self, settings: Optional[ProviderSettings] = None, client: Any = None) -> None:
        self.settings = settings
        self.client = client
        self._owned_clients: List[Any] = []

    def create_session(self, config: PersonaConfig) -> ChatSession:
        client = self.client
        if client is None:
            try:
                client = get_openai_client(self.settings)
                self._owned_clients.append(client)
            except ConfigurationError:
                raise
            except Exception as e:
                raise InitializationError(f"Could not create provider client: {e}") from e
        logger.info("Opened chat session (model=%s, temperature=%s)", config.model, config.temperature)
        return ChatSession(client, config)

    async def send_turn(self, session: ChatSession, text: str) -> AsyncIterator[str]:
        """Yield reply fragments for one user utterance, in reply order.

        The returned iterator is single-pass. The turn is added to the
        session transcript only after the reply streamed to completion.
        """
        messages = session.build_messages(text)
        parts: List[str] = []
        try:
            stream = await session.client.chat.completions.create(
                model=session.config.model,
                messages=messages,
                temperature=session.config.temperature,
                stream=True,
            )
            async with stream:
                async for chunk in stream:
                    fragment = _extract_delta_text(chunk)
                    if not fragment:
                        continue
                    parts.append(fragment)
                    logger.debug("Received fragment (%d chars)", len(fragment))
                    yield fragment
        except (OpenAIError, httpx.HTTPError) as e:
            raise TransportError(f"Provider request failed: {e}") from e

        session.record_turn(text, "".join(parts))

    async def aclose(self) -> None:
        """Close the provider clients this gateway opened."""
        while self._owned_clients:
            await self._owned_clients.pop().close()
