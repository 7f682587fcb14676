"""Domain exception hierarchy.

Inner layers raise these; the session turns them into user-facing notices
and the interface layer maps anything that escapes to an HTTP status code.
"""

from __future__ import annotations


class RepoExplorerError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidGitHubUrlError(RepoExplorerError):
    """The supplied URL does not point to a GitHub repository."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class GitHubApiError(RepoExplorerError):
    """GitHub answered with a non-2xx status (other than 403) or not at all."""


class GitHubRateLimitError(RepoExplorerError):
    """GitHub API rate limit exceeded (HTTP 403)."""

    def __init__(self, message: str, reset_at: str = "unknown time") -> None:
        super().__init__(message)
        self.reset_at = reset_at


# ── Content errors ──────────────────────────────────────────────────────────


class ContentExtractionError(RepoExplorerError):
    """A blob response did not carry any file content."""


class ContentEncodingError(RepoExplorerError):
    """File content is not valid base64."""


# ── LLM errors ──────────────────────────────────────────────────────────────


class MissingCredentialError(RepoExplorerError):
    """No LLM API key is configured."""


class AnalysisApiError(RepoExplorerError):
    """The LLM provider rejected or failed an analysis request."""
