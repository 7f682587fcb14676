"""GitHub REST API adapter — implements the RepoFetcher port."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any

import httpx

from repo_explorer.domain.entities import EntryKind, RepoMetadata, RepoSnapshot, TreeEntry
from repo_explorer.domain.exceptions import (
    ContentExtractionError,
    GitHubApiError,
    GitHubRateLimitError,
)
from repo_explorer.domain.value_objects import GitHubUrl

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"


def format_reset_time(reset_raw: str | None) -> str:
    """Turn an ``X-RateLimit-Reset`` epoch value into a local time string."""
    if not reset_raw:
        return "unknown time"
    try:
        return datetime.fromtimestamp(int(reset_raw)).strftime("%H:%M:%S")
    except (ValueError, OSError, OverflowError):
        return "unknown time"


class GitHubRestAdapter:
    """Concrete RepoFetcher backed by the GitHub v3 REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        tree_ref: str = "main",
    ) -> None:
        self._client = client
        self._token = token
        self._tree_ref = tree_ref
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "repo-explorer/1.0",
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    @property
    def has_token(self) -> bool:
        return bool(self._token)

    async def fetch_metadata(self, url: GitHubUrl) -> RepoMetadata:
        """GET /repos/{owner}/{repo} → RepoMetadata."""
        data = await self._get_json(f"{_GITHUB_API}/repos/{url.owner}/{url.repo}")
        license_info = data.get("license") or {}
        return RepoMetadata(
            name=data.get("name", url.repo),
            full_name=data.get("full_name", url.full_name),
            description=data.get("description"),
            stars=data.get("stargazers_count", 0),
            forks=data.get("forks_count", 0),
            watchers=data.get("watchers_count", 0),
            open_issues=data.get("open_issues_count", 0),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            pushed_at=data.get("pushed_at"),
            default_branch=data.get("default_branch", "main"),
            language=data.get("language"),
            license_name=license_info.get("name"),
            html_url=data.get("html_url"),
        )

    async def fetch_tree(self, url: GitHubUrl, ref: str | None = None) -> list[TreeEntry]:
        """GET /repos/{owner}/{repo}/git/trees/{ref}?recursive=1 → [TreeEntry]."""
        ref = ref or self._tree_ref
        data = await self._get_json(
            f"{_GITHUB_API}/repos/{url.owner}/{url.repo}/git/trees/{ref}",
            params={"recursive": "1"},
        )
        if data.get("truncated"):
            logger.warning("Tree listing for %s was truncated by GitHub", url.full_name)

        return [
            TreeEntry(
                path=item.get("path", ""),
                kind=EntryKind.TREE if item.get("type") == "tree" else EntryKind.BLOB,
                content_url=item.get("url"),
                size_bytes=item.get("size"),
            )
            for item in data.get("tree", [])
            if item.get("type", "blob") != "commit"  # submodules
        ]

    async def fetch_snapshot(self, url: GitHubUrl) -> RepoSnapshot:
        """Fetch metadata and tree concurrently; fail with the first error."""
        metadata, entries = await asyncio.gather(
            self.fetch_metadata(url),
            self.fetch_tree(url),
        )
        logger.info("Fetched %s: %d tree entries", url.full_name, len(entries))
        return RepoSnapshot(metadata=metadata, entries=entries)

    async def fetch_blob_content(self, content_url: str) -> str:
        """GET a blob URL and return its base64 ``content`` field."""
        data = await self._get_json(content_url)
        content = data.get("content")
        if not content:
            raise ContentExtractionError("No content found in the response")
        return content

    async def _get_json(
        self,
        url: str,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Perform a GitHub API GET request with error translation."""
        logger.debug("GET %s", url)
        try:
            resp = await self._client.get(url, headers=self._api_headers, params=params)
        except httpx.HTTPError as exc:
            raise GitHubApiError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code == 403:
            reset_at = format_reset_time(resp.headers.get("x-ratelimit-reset"))
            message = f"GitHub API rate limit exceeded. Rate limit will reset at {reset_at}."
            if not self.has_token:
                message += " Please add a GitHub token (GITHUB_TOKEN) to increase the rate limit."
            raise GitHubRateLimitError(message, reset_at=reset_at)

        if not resp.is_success:
            raise GitHubApiError(
                f"GitHub API error: {resp.status_code} {resp.reason_phrase}"
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise GitHubApiError(f"GitHub API returned invalid JSON for {url}") from exc
        if not isinstance(data, dict):
            raise GitHubApiError(f"GitHub API returned an unexpected payload for {url}")
        return data
