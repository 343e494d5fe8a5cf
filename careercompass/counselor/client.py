"""Provider settings and OpenAI client factory.

This keeps the dependency on the OpenAI SDK in one place, which makes
it easier to swap or mock in tests. The provider is reached through its
OpenAI-compatible endpoint, so the same SDK covers it.

Environment variables (e.g. ``API_KEY``) are loaded from a ``.env`` file
if present, using ``python-dotenv``. This lets you keep the key in
`.env` without exporting it manually each time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv
import httpx
from openai import AsyncOpenAI

from ..errors import ConfigurationError


# Load environment variables from a .env file if it exists.
load_dotenv()


DEFAULT_MODEL = os.getenv("CAREERCOMPASS_MODEL", "gemini-2.5-flash")

DEFAULT_BASE_URL = os.getenv(
    "CAREERCOMPASS_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai/"
)

# Default request timeout (seconds) to avoid hanging forever.
DEFAULT_TIMEOUT_S = 60.0


@dataclass(frozen=True)
class ProviderSettings:
    """Where and how to reach the hosted model."""

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = DEFAULT_TIMEOUT_S

    @classmethod
    def from_env(cls) -> "ProviderSettings":
        api_key = (os.getenv("API_KEY") or "").strip()
        if not api_key:
            raise ConfigurationError("API_KEY environment variable not set")

        raw_timeout = os.getenv("CAREERCOMPASS_TIMEOUT_S", str(DEFAULT_TIMEOUT_S))
        try:
            timeout_s = float(raw_timeout)
        except ValueError as e:
            raise ConfigurationError(f"CAREERCOMPASS_TIMEOUT_S must be a number, got {raw_timeout!r}") from e

        return cls(
            api_key=api_key,
            base_url=os.getenv("CAREERCOMPASS_BASE_URL", DEFAULT_BASE_URL),
            timeout_s=timeout_s,
        )


def get_openai_client(settings: Optional[ProviderSettings] = None) -> AsyncOpenAI:
    """Return an async OpenAI client configured from settings or environment.

    Raises :class:`ConfigurationError` when no credential is available.
    """

    settings = settings or ProviderSettings.from_env()
    http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.timeout_s))
    return AsyncOpenAI(api_key=settings.api_key, base_url=settings.base_url, http_client=http_client)
