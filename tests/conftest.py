"""Pytest configuration and fixtures."""

from __future__ import annotations

import asyncio
import base64

import pytest

from repo_explorer.domain.entities import EntryKind, RepoMetadata, RepoSnapshot, TreeEntry
from repo_explorer.services.analysis_cache import AnalysisCache
from repo_explorer.services.analysis_client import AnalysisClient


def b64(text: str) -> str:
    """Encode like GitHub does: standard base64 wrapped at 60 columns."""
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    return "\n".join(encoded[i : i + 60] for i in range(0, len(encoded), 60)) + "\n"


class FakeFetcher:
    """In-memory RepoFetcher; blob fetches yield to the event loop once."""

    def __init__(self, snapshot=None, blobs=None, error=None):
        self.snapshot = snapshot
        self.blobs = blobs or {}
        self.error = error
        self.snapshot_calls = []
        self.blob_calls = []

    async def fetch_metadata(self, url):
        return self.snapshot.metadata

    async def fetch_tree(self, url, ref=None):
        return self.snapshot.entries

    async def fetch_snapshot(self, url):
        self.snapshot_calls.append(url)
        if self.error is not None:
            raise self.error
        return self.snapshot

    async def fetch_blob_content(self, content_url):
        self.blob_calls.append(content_url)
        await asyncio.sleep(0)
        value = self.blobs[content_url]
        if isinstance(value, Exception):
            raise value
        return value


class FakeLlm:
    """LlmGateway returning (or raising) queued replies in order."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    async def complete(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        reply = self.replies.pop(0) if self.replies else "An explanation."
        if isinstance(reply, Exception):
            raise reply
        return reply


class RecordingSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest.fixture
def widgets_snapshot():
    return RepoSnapshot(
        metadata=RepoMetadata(name="widgets", full_name="acme/widgets"),
        entries=[
            TreeEntry(path="src", kind=EntryKind.TREE),
            TreeEntry(
                path="src/index.js",
                kind=EntryKind.BLOB,
                content_url="https://api.github.com/repos/acme/widgets/git/blobs/aaa",
                size_bytes=42,
            ),
            TreeEntry(
                path="logo.png",
                kind=EntryKind.BLOB,
                content_url="https://api.github.com/repos/acme/widgets/git/blobs/bbb",
                size_bytes=1024,
            ),
            TreeEntry(
                path="README.md",
                kind=EntryKind.BLOB,
                content_url="https://api.github.com/repos/acme/widgets/git/blobs/ccc",
                size_bytes=10,
            ),
        ],
    )


@pytest.fixture
def widgets_fetcher(widgets_snapshot):
    return FakeFetcher(
        snapshot=widgets_snapshot,
        blobs={
            "https://api.github.com/repos/acme/widgets/git/blobs/aaa": b64("console.log('hi');\n"),
            "https://api.github.com/repos/acme/widgets/git/blobs/ccc": b64("# widgets\n"),
        },
    )


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def make_cache(sleep):
    def _make(fetcher, llm):
        client = AnalysisClient(llm, retry_delay=30.0, max_retries=1, sleep=sleep)
        return AnalysisCache(fetcher, client)

    return _make
