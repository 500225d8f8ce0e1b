"""Gemini generateContent client.

Single-call adapter: one prompt in, the first candidate's text out. No
streaming, no retries. The only timeout is the transport timeout from
CompletionConfig.
"""

import logging
from typing import Any

import httpx

from src.completion.config import CompletionConfig, get_completion_config

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """Base class for completion failures."""


class InvalidInputError(CompletionError):
    """Raised for an empty prompt. No request is sent."""


class NetworkFailureError(CompletionError):
    """Raised when the request cannot reach the provider."""


class UpstreamError(CompletionError):
    """Raised for a non-success status or an unusable response body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CompletionClient:
    """Client for the Generative Language generateContent endpoint.

    Generation limits (max output tokens, temperature) are fixed by the
    config and sent with every request.
    """

    def __init__(
        self,
        config: CompletionConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the completion client.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            http_client: Optional pre-built httpx client (tests inject a
                    MockTransport here). A new client is opened per call
                    otherwise.
        """
        self._config = config or get_completion_config()
        self._http_client = http_client

    @property
    def endpoint(self) -> str:
        return f"{self._config.base_url}/models/{self._config.model_name}:generateContent"

    def build_payload(self, prompt: str) -> dict[str, Any]:
        """Build the generateContent request body for a prompt."""
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "maxOutputTokens": self._config.max_output_tokens,
                "temperature": self._config.temperature,
            },
        }

    async def complete(self, prompt: str) -> str:
        """Generate text for a prompt.

        Args:
            prompt: The user's question. Must not be blank.

        Returns:
            Text of the first returned candidate.

        Raises:
            InvalidInputError: Prompt is empty or whitespace.
            NetworkFailureError: Transport failure.
            UpstreamError: Non-success status or no usable candidate.
        """
        if not prompt or not prompt.strip():
            raise InvalidInputError("Prompt cannot be empty")

        if self._http_client is not None:
            response = await self._post(self._http_client, prompt)
        else:
            async with httpx.AsyncClient(timeout=self._config.timeout) as client:
                response = await self._post(client, prompt)

        return extract_first_candidate(response)

    async def _post(self, client: httpx.AsyncClient, prompt: str) -> dict[str, Any]:
        try:
            response = await client.post(
                self.endpoint,
                json=self.build_payload(prompt),
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": self._config.api_key,
                },
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"Completion request failed with HTTP {status_code}: {e.response.text}")
            raise UpstreamError(f"HTTP {status_code}", status_code=status_code) from e
        except httpx.RequestError as e:
            logger.error(f"Completion request could not be sent: {e}")
            raise NetworkFailureError(f"Connection failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError("Response body is not valid JSON") from e


def extract_first_candidate(body: dict[str, Any]) -> str:
    """Return the text of the first candidate in a generateContent response.

    Raises:
        UpstreamError: If the body carries no candidate text.
    """
    try:
        parts = body["candidates"][0]["content"]["parts"]
        text = "".join(part.get("text", "") for part in parts)
    except (KeyError, IndexError, TypeError) as e:
        raise UpstreamError("Response contained no candidates") from e

    if not text:
        raise UpstreamError("First candidate contained no text")
    return text


# Module-level singleton instance
_completion_client: CompletionClient | None = None


def get_completion_client() -> CompletionClient:
    """Get or create the global completion client.

    Returns:
        The CompletionClient instance.
    """
    global _completion_client
    if _completion_client is None:
        _completion_client = CompletionClient()
    return _completion_client


class DeferredCompletionClient:
    """Resolves the global completion client on first use.

    Missing configuration (no API key) then fails the completion call
    instead of the caller's setup, and a turn degrades to the fallback
    answer.
    """

    async def complete(self, prompt: str) -> str:
        return await get_completion_client().complete(prompt)


def get_deferred_completion_client() -> DeferredCompletionClient:
    return DeferredCompletionClient()
