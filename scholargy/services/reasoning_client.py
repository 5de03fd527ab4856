"""
Reasoning service client.

The recommendation generator only needs "system instruction + user message
in, raw text out". ``ReasoningClient`` is that seam; tests replace it with a
deterministic stub, production uses ``GeminiReasoningClient`` over the
Google Gen AI SDK (google-genai).

The Gemini client holds the API key, so it is built once per process by
``get_reasoning_client()`` and passed explicitly into the generator.
"""

import logging
from typing import Optional, Protocol

from google import genai
from google.genai import types

from scholargy.config import settings

logger = logging.getLogger(__name__)

# Initialize Gemini client (lazy initialization)
_reasoning_client: Optional["GeminiReasoningClient"] = None


class ReasoningClient(Protocol):
    """Single request/response text-generation call."""

    async def complete(
        self,
        system_instruction: str,
        user_message: str,
        model: str,
        temperature: float,
    ) -> str:  # pragma: no cover
        ...


class GeminiReasoningClient:
    """``ReasoningClient`` backed by the Gemini API."""

    def __init__(self, client: genai.Client) -> None:
        self._client = client

    async def complete(
        self,
        system_instruction: str,
        user_message: str,
        model: str,
        temperature: float,
    ) -> str:
        """
        Run one generate_content round trip and return the response text.

        SDK and HTTP errors are not caught here; the generator decides how
        they surface. An empty candidate list yields "" (a malformed reply,
        not a transport failure).
        """
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=temperature,
        )

        response = await self._client.aio.models.generate_content(
            model=model,
            contents=user_message,
            config=config,
        )

        return response.text or ""


def get_reasoning_client() -> Optional[GeminiReasoningClient]:
    """
    Lazy initialization of the process-wide Gemini client.

    Returns:
        The client, or None when GOOGLE_API_KEY is not configured.
    """
    global _reasoning_client

    if _reasoning_client is not None:
        return _reasoning_client

    if not settings.GOOGLE_API_KEY:
        logger.warning(
            "GOOGLE_API_KEY not configured. Next steps generation will not work. "
            "Please set GOOGLE_API_KEY in your .env file."
        )
        return None

    try:
        _reasoning_client = GeminiReasoningClient(genai.Client(api_key=settings.GOOGLE_API_KEY))
        logger.info("Gemini client initialized successfully for next steps")
        return _reasoning_client
    except Exception as e:
        logger.error(f"Failed to initialize Gemini client: {e}")
        return None
