"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EntryKind(str, Enum):
    """Git object type of a tree listing entry."""

    BLOB = "blob"
    TREE = "tree"


class AnalysisStatus(str, Enum):
    """Lifecycle of a single file's analysis within one session."""

    NOT_ATTEMPTED = "not_attempted"
    ANALYZING = "analyzing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """A single record from the recursive git tree listing."""

    path: str
    kind: EntryKind = EntryKind.BLOB
    content_url: str | None = None
    size_bytes: int | None = None

    @property
    def name(self) -> str:
        return self.path.rsplit("/", maxsplit=1)[-1]


@dataclass(slots=True)
class Folder:
    """A directory node; children keep insertion order."""

    name: str
    path: str
    children: dict[str, Folder | FileLeaf] = field(default_factory=dict)

    @property
    def folders(self) -> list[Folder]:
        return [c for c in self.children.values() if isinstance(c, Folder)]

    @property
    def files(self) -> list[FileLeaf]:
        return [c for c in self.children.values() if isinstance(c, FileLeaf)]


@dataclass(frozen=True, slots=True)
class FileLeaf:
    """A file node wrapping its tree entry."""

    entry: TreeEntry

    @property
    def name(self) -> str:
        return self.entry.name

    @property
    def path(self) -> str:
        return self.entry.path


@dataclass(frozen=True, slots=True)
class RepoMetadata:
    """Read-only snapshot of a repository's GitHub metadata."""

    name: str
    full_name: str
    description: str | None = None
    stars: int = 0
    forks: int = 0
    watchers: int = 0
    open_issues: int = 0
    created_at: str | None = None
    updated_at: str | None = None
    pushed_at: str | None = None
    default_branch: str = "main"
    language: str | None = None
    license_name: str | None = None
    html_url: str | None = None


@dataclass(frozen=True, slots=True)
class RepoSnapshot:
    """Metadata and flat tree returned together by one gateway call."""

    metadata: RepoMetadata
    entries: list[TreeEntry]


@dataclass(frozen=True, slots=True)
class TreeRow:
    """One visible line of the rendered tree."""

    path: str
    name: str
    depth: int
    is_folder: bool
    expanded: bool = False
    interactive: bool = True
    has_analysis: bool = False
