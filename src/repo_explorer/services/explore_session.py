"""Explore session — the single interactive session and its user actions.

Every public action is a boundary: domain errors are caught here, logged and
turned into a :class:`Notice`, so a failed search or analysis never leaves
the session unusable.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from repo_explorer.domain.entities import AnalysisStatus, Folder, RepoMetadata, TreeRow
from repo_explorer.domain.exceptions import MissingCredentialError, RepoExplorerError
from repo_explorer.domain.ports.repo_fetcher import RepoFetcher
from repo_explorer.domain.value_objects import GitHubUrl
from repo_explorer.services.analysis_cache import AnalysisCache, OutcomeKind
from repo_explorer.services.text_classifier import is_text_file
from repo_explorer.services.tree_store import TreeStore

logger = logging.getLogger(__name__)


class NoticeLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notice:
    """Transient message shown to the user after an action."""

    title: str
    description: str = ""
    level: NoticeLevel = NoticeLevel.INFO
    error: type[RepoExplorerError] | None = None

    @classmethod
    def from_error(cls, title: str, exc: RepoExplorerError) -> Notice:
        return cls(title=title, description=str(exc), level=NoticeLevel.ERROR, error=type(exc))

    @property
    def is_error(self) -> bool:
        return self.level is NoticeLevel.ERROR


class ExploreSession:
    """Holds the current repository, its tree and the analysis cache.

    Parameters
    ----------
    fetcher:
        Gateway to the hosting API.
    cache:
        Analysis cache sharing the same fetcher.
    analysis_configured:
        ``False`` when no LLM key is set; file opens then report a
        configuration error without touching the admission gate.
    """

    def __init__(
        self,
        fetcher: RepoFetcher,
        cache: AnalysisCache,
        *,
        analysis_configured: bool = True,
    ) -> None:
        self._fetcher = fetcher
        self._cache = cache
        self._analysis_configured = analysis_configured
        self._tree = TreeStore()
        self._metadata: RepoMetadata | None = None
        self._url: GitHubUrl | None = None

    # ── Read-only state ─────────────────────────────────────────────────

    @property
    def metadata(self) -> RepoMetadata | None:
        return self._metadata

    @property
    def url(self) -> GitHubUrl | None:
        return self._url

    @property
    def tree(self) -> Folder:
        return self._tree.root

    @property
    def analyses(self) -> Mapping[str, str]:
        return self._cache.results

    @property
    def analyzing(self) -> str | None:
        return self._cache.in_flight

    def analysis_status(self, path: str) -> AnalysisStatus:
        return self._cache.status(path)

    def rows(self) -> list[TreeRow]:
        return self._tree.visible_rows(self._cache.results)

    # ── Actions ─────────────────────────────────────────────────────────

    async def search(self, raw_url: str) -> Notice:
        """Load a repository, replacing any previous one wholesale."""
        try:
            url = GitHubUrl.from_string(raw_url)
            logger.info("Loading %s", url.full_name)
            snapshot = await self._fetcher.fetch_snapshot(url)
        except RepoExplorerError as exc:
            logger.warning("Search for %r failed: %s", raw_url, exc)
            self.reset()
            return Notice.from_error("Error analyzing repository", exc)
        except Exception:
            logger.exception("Unexpected error loading %r", raw_url)
            self.reset()
            return Notice(
                title="Error analyzing repository",
                description="An unexpected error occurred. Please try again later.",
                level=NoticeLevel.ERROR,
            )

        self._cache.clear()
        self._tree.build(snapshot.entries)
        self._metadata = snapshot.metadata
        self._url = url
        return Notice(
            title="Repository analyzed successfully",
            description="You can now explore the repository structure and analysis.",
        )

    def reset(self) -> None:
        """Drop the current repository and go back to an empty session."""
        self._cache.clear()
        self._tree.clear()
        self._metadata = None
        self._url = None

    def toggle_folder(self, path: str) -> bool:
        return self._tree.toggle_folder(path)

    async def open_file(self, path: str) -> Notice | None:
        """Handle a click on a file row.

        Analysed files toggle their explanation; text files without one are
        sent for analysis. Returns ``None`` when there is nothing to report.
        """
        if not is_text_file(path):
            return None

        if path in self._cache:
            self._tree.toggle_file(path)
            return None

        entry = self._tree.find_file(path)
        if entry is None or not entry.content_url:
            return None

        if not self._analysis_configured:
            exc = MissingCredentialError(
                "OPENAI_API_KEY is not configured. Please check your .env file."
            )
            logger.error("%s", exc)
            return Notice.from_error("Configuration Error", exc)

        outcome = await self._cache.request_analysis(path, entry.content_url)
        if outcome.kind is OutcomeKind.COMPLETED:
            return Notice(title="Analysis complete", description=outcome.message)
        if outcome.kind is OutcomeKind.BUSY:
            return Notice(
                title="Analysis in Progress",
                description=outcome.message,
                level=NoticeLevel.WARNING,
            )
        if outcome.kind is OutcomeKind.FAILED:
            return Notice(
                title="Analysis failed",
                description=outcome.message,
                level=NoticeLevel.ERROR,
                error=outcome.error,
            )
        return None
