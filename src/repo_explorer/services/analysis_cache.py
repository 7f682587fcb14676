"""Analysis cache — per-path explanations behind a one-at-a-time admission gate."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from repo_explorer.domain.entities import AnalysisStatus
from repo_explorer.domain.exceptions import RepoExplorerError
from repo_explorer.domain.ports.repo_fetcher import RepoFetcher
from repo_explorer.services.analysis_client import AnalysisClient
from repo_explorer.services.base64_decoder import decode_base64
from repo_explorer.services.text_classifier import is_text_file

logger = logging.getLogger(__name__)


class OutcomeKind(str, Enum):
    COMPLETED = "completed"
    SKIPPED = "skipped"
    BUSY = "busy"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class AnalysisOutcome:
    """What happened to a single ``request_analysis`` call."""

    kind: OutcomeKind
    path: str
    message: str = ""
    error: type[RepoExplorerError] | None = None


class AnalysisCache:
    """Maps file paths to finished analyses.

    At most one analysis runs at a time across the whole session; a request
    made while another is running is rejected, not queued. Failed attempts
    leave no cache entry, only a ``FAILED`` status tag.
    """

    def __init__(self, fetcher: RepoFetcher, client: AnalysisClient) -> None:
        self._fetcher = fetcher
        self._client = client
        self._results: dict[str, str] = {}
        self._status: dict[str, AnalysisStatus] = {}
        self._in_flight: str | None = None
        self._generation = 0

    @property
    def results(self) -> Mapping[str, str]:
        return MappingProxyType(self._results)

    @property
    def in_flight(self) -> str | None:
        """Path currently being analysed, if any."""
        return self._in_flight

    def get(self, path: str) -> str | None:
        return self._results.get(path)

    def __contains__(self, path: object) -> bool:
        return path in self._results

    def __len__(self) -> int:
        return len(self._results)

    def status(self, path: str) -> AnalysisStatus:
        return self._status.get(path, AnalysisStatus.NOT_ATTEMPTED)

    def clear(self) -> None:
        """Forget every result.

        An in-flight request keeps the gate until it ends, but its result is
        dropped instead of leaking into the fresh cache.
        """
        self._results.clear()
        self._status.clear()
        self._generation += 1

    async def request_analysis(self, path: str, content_url: str) -> AnalysisOutcome:
        """Fetch, decode and analyse *path*, caching the result on success."""
        if not is_text_file(path):
            return AnalysisOutcome(OutcomeKind.SKIPPED, path, f"{path} is not a text file")

        if self._in_flight is not None:
            logger.info("Rejected %s: %s is still being analysed", path, self._in_flight)
            return AnalysisOutcome(
                OutcomeKind.BUSY,
                path,
                "Please wait for the current analysis to complete",
            )

        # Claimed before the first await so concurrent callers see it.
        self._in_flight = path
        self._status[path] = AnalysisStatus.ANALYZING
        generation = self._generation
        try:
            raw = await self._fetcher.fetch_blob_content(content_url)
            content = decode_base64(raw)
            analysis = await self._client.analyze(path, content)
        except RepoExplorerError as exc:
            self._rollback(path, generation)
            logger.warning("Analysis of %s failed: %s", path, exc)
            return AnalysisOutcome(
                OutcomeKind.FAILED,
                path,
                str(exc) or "Failed to analyze the file",
                error=type(exc),
            )
        except asyncio.CancelledError:
            self._rollback(path, generation)
            raise
        except Exception:
            self._rollback(path, generation)
            logger.exception("Unexpected error analysing %s", path)
            return AnalysisOutcome(OutcomeKind.FAILED, path, "Failed to analyze the file")
        finally:
            self._in_flight = None

        if generation != self._generation:
            logger.info("Discarding analysis of %s from a previous repository", path)
            return AnalysisOutcome(OutcomeKind.FAILED, path, "Repository changed during analysis")

        self._results[path] = analysis
        self._status[path] = AnalysisStatus.DONE
        logger.info("Analysed %s (%d chars)", path, len(analysis))
        return AnalysisOutcome(OutcomeKind.COMPLETED, path, f"Successfully analyzed {path}")

    def _rollback(self, path: str, generation: int) -> None:
        if generation != self._generation:
            return
        self._results.pop(path, None)
        self._status[path] = AnalysisStatus.FAILED
