"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx

from repo_explorer.infrastructure.config import get_settings
from repo_explorer.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_explorer.infrastructure.openai_adapter import OpenAIAdapter
from repo_explorer.services.analysis_cache import AnalysisCache
from repo_explorer.services.analysis_client import AnalysisClient
from repo_explorer.services.explore_session import ExploreSession

_http_client: httpx.AsyncClient | None = None
_openai_adapter: OpenAIAdapter | None = None
_session: ExploreSession | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _openai_adapter, _session  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout))

    api_key = settings.openai_api_key.get_secret_value() if settings.openai_api_key else None
    _openai_adapter = OpenAIAdapter(
        api_key=api_key,
        model=settings.openai_model,
        base_url=settings.openai_base_url,
        temperature=settings.analysis_temperature,
        max_tokens=settings.analysis_max_tokens,
    )

    token = settings.github_token.get_secret_value() if settings.github_token else None
    github_adapter = GitHubRestAdapter(
        client=_http_client, token=token, tree_ref=settings.tree_ref
    )
    client = AnalysisClient(
        _openai_adapter,
        max_chars=settings.max_content_chars,
        retry_delay=settings.rate_limit_retry_delay,
        max_retries=settings.max_rate_limit_retries,
    )
    _session = ExploreSession(
        github_adapter,
        AnalysisCache(github_adapter, client),
        analysis_configured=_openai_adapter.configured,
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _openai_adapter, _session  # noqa: PLW0603

    _session = None
    if _http_client:
        await _http_client.aclose()
        _http_client = None
    if _openai_adapter:
        await _openai_adapter.close()
        _openai_adapter = None


def get_session() -> ExploreSession:
    """Return the process-wide interactive session."""
    assert _session is not None, "startup() was not called"
    return _session
