"""OpenAI adapter — implements the LlmGateway port."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from repo_explorer.domain.exceptions import AnalysisApiError, MissingCredentialError

logger = logging.getLogger(__name__)

_DEFAULT_ERROR = "Failed to analyze file"


def _error_message(exc: APIStatusError) -> str:
    """Pull the human-readable ``error.message`` out of an error response."""
    body = exc.body
    if isinstance(body, Mapping):
        # The SDK already unwraps ``{"error": {...}}`` but not every proxy nests it.
        inner = body.get("error", body)
        if isinstance(inner, Mapping) and inner.get("message"):
            return str(inner["message"])
    return _DEFAULT_ERROR


class OpenAIAdapter:
    """Concrete ``LlmGateway`` backed by the OpenAI chat-completions API.

    The SDK's own retries are disabled: rate-limit recovery is handled by
    :class:`~repo_explorer.services.analysis_client.AnalysisClient`.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = "gpt-3.5-turbo",
        *,
        base_url: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 1_000,
    ) -> None:
        self._client = (
            AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)
            if api_key
            else None
        )
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def complete(self, system_prompt: str, user_prompt: str) -> str | None:
        """Send a system + user prompt and return the first choice's text."""
        if self._client is None:
            raise MissingCredentialError(
                "OPENAI_API_KEY is not configured. Please check your .env file."
            )

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except APIStatusError as exc:
            message = _error_message(exc)
            logger.warning("OpenAI returned HTTP %s: %s", exc.status_code, message)
            raise AnalysisApiError(message) from exc
        except APIConnectionError as exc:
            raise AnalysisApiError(f"LLM call failed: {exc}") from exc

        if not response.choices:
            return None
        return response.choices[0].message.content

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        if self._client is not None:
            await self._client.close()
