"""Port: repository fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_explorer.domain.entities import RepoMetadata, RepoSnapshot, TreeEntry
from repo_explorer.domain.value_objects import GitHubUrl


class RepoFetcher(Protocol):
    """Abstract contract for fetching GitHub repository data."""

    async def fetch_metadata(self, url: GitHubUrl) -> RepoMetadata:
        """Return high-level repository metadata."""
        ...

    async def fetch_tree(self, url: GitHubUrl, ref: str | None = None) -> list[TreeEntry]:
        """Return the flat recursive tree listing for ``ref`` (adapter default when omitted)."""
        ...

    async def fetch_snapshot(self, url: GitHubUrl) -> RepoSnapshot:
        """Return metadata and tree, fetched concurrently."""
        ...

    async def fetch_blob_content(self, content_url: str) -> str:
        """Return the raw (base64) ``content`` field of a blob."""
        ...
