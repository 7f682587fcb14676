"""Analysis client — asks the LLM to explain a single file."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from repo_explorer.domain.exceptions import AnalysisApiError
from repo_explorer.domain.ports.llm_gateway import LlmGateway

logger = logging.getLogger(__name__)

# ── Prompt templates ────────────────────────────────────────────────────────

SYSTEM_PROMPT = (
    "You are a helpful assistant that performs static analysis of code files "
    "and explains what they do."
)

USER_PROMPT_TEMPLATE = """\
Analyze the following code file and explain its purpose and functionality:

File path: {path}

Code:
{content}"""

NO_ANALYSIS_FALLBACK = "No analysis returned."

MAX_CONTENT_CHARS = 5_000
RATE_LIMIT_MARKER = "Rate limit"


def build_user_prompt(path: str, content: str, max_chars: int = MAX_CONTENT_CHARS) -> str:
    """Embed *path* and the first *max_chars* characters of *content* in the prompt."""
    return USER_PROMPT_TEMPLATE.format(path=path, content=content[:max_chars])


class AnalysisClient:
    """Explain a file via an :class:`LlmGateway`, with bounded rate-limit retries.

    Parameters
    ----------
    llm:
        Gateway that performs the chat completion.
    max_chars:
        Content is truncated to this many characters before prompting.
    retry_delay:
        Seconds to wait after a rate-limit error before retrying.
    max_retries:
        How many times a rate-limited request is retried before giving up.
    sleep:
        Awaitable delay function; replaced in tests.
    """

    def __init__(
        self,
        llm: LlmGateway,
        *,
        max_chars: int = MAX_CONTENT_CHARS,
        retry_delay: float = 30.0,
        max_retries: int = 1,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._llm = llm
        self._max_chars = max_chars
        self._retry_delay = retry_delay
        self._max_retries = max_retries
        self._sleep = sleep

    async def analyze(self, path: str, content: str) -> str:
        """Return the model's explanation of *path*; never empty on success."""
        user_prompt = build_user_prompt(path, content, self._max_chars)

        attempt = 0
        while True:
            try:
                text = await self._llm.complete(SYSTEM_PROMPT, user_prompt)
            except AnalysisApiError as exc:
                if RATE_LIMIT_MARKER not in str(exc) or attempt >= self._max_retries:
                    raise
                attempt += 1
                logger.warning(
                    "Rate limited analysing %s; retry %d/%d in %.0fs",
                    path, attempt, self._max_retries, self._retry_delay,
                )
                await self._sleep(self._retry_delay)
                continue
            return text or NO_ANALYSIS_FALLBACK
