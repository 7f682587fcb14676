"""Tree store — hierarchical index over the flat git tree plus expansion state.

The hierarchy is rebuilt from scratch whenever the flat listing changes.
Children keep the order in which GitHub listed them; nothing is sorted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from repo_explorer.domain.entities import (
    EntryKind,
    FileLeaf,
    Folder,
    TreeEntry,
    TreeRow,
)
from repo_explorer.services.text_classifier import is_text_file

logger = logging.getLogger(__name__)


def build_tree(entries: Iterable[TreeEntry]) -> Folder:
    """Build a folder hierarchy from a flat list of tree entries.

    Every intermediate path segment becomes exactly one :class:`Folder`,
    whether or not the listing contains an explicit ``tree`` entry for it.
    Entries with an empty path are skipped.
    """
    root = Folder(name="", path="")
    for entry in entries:
        if not entry.path:
            continue
        parts = entry.path.split("/")
        folder_parts = parts if entry.kind is EntryKind.TREE else parts[:-1]

        current = root
        for part in folder_parts:
            child = current.children.get(part)
            if not isinstance(child, Folder):
                path = f"{current.path}/{part}" if current.path else part
                child = Folder(name=part, path=path)
                current.children[part] = child
            current = child

        if entry.kind is EntryKind.BLOB:
            current.children[parts[-1]] = FileLeaf(entry=entry)
    return root


class TreeStore:
    """In-memory tree for one repository plus folder / file expansion sets."""

    def __init__(self) -> None:
        self._root = Folder(name="", path="")
        self._files: dict[str, TreeEntry] = {}
        self._expanded_folders: set[str] = set()
        self._expanded_files: set[str] = set()

    @property
    def root(self) -> Folder:
        return self._root

    def build(self, entries: Iterable[TreeEntry]) -> Folder:
        """Replace the tree with one built from *entries*; expansion state is reset."""
        entries = list(entries)
        self._root = build_tree(entries)
        self._files = {
            e.path: e for e in entries if e.path and e.kind is EntryKind.BLOB
        }
        self._expanded_folders.clear()
        self._expanded_files.clear()
        logger.debug("Built tree with %d files", len(self._files))
        return self._root

    def clear(self) -> None:
        self.build([])

    def find_file(self, path: str) -> TreeEntry | None:
        return self._files.get(path)

    # ── Expansion state ─────────────────────────────────────────────────

    def toggle_folder(self, path: str) -> bool:
        """Flip *path* in the expanded-folder set; return the new state."""
        return _toggle(self._expanded_folders, path)

    def toggle_file(self, path: str) -> bool:
        """Flip *path* in the expanded-file set; return the new state."""
        return _toggle(self._expanded_files, path)

    def is_folder_expanded(self, path: str) -> bool:
        return path in self._expanded_folders

    def is_file_expanded(self, path: str) -> bool:
        return path in self._expanded_files

    # ── Rendering contract ──────────────────────────────────────────────

    def visible_rows(self, analyses: Mapping[str, str] | None = None) -> list[TreeRow]:
        """Flatten the currently visible part of the tree, depth first.

        At each level sub-folders come before files. Only text files are
        interactive, and a file only shows as expanded once it has an analysis.
        """
        analyses = analyses or {}
        rows: list[TreeRow] = []
        self._collect(self._root, 0, analyses, rows)
        return rows

    def _collect(
        self,
        folder: Folder,
        depth: int,
        analyses: Mapping[str, str],
        rows: list[TreeRow],
    ) -> None:
        for sub in folder.folders:
            expanded = self.is_folder_expanded(sub.path)
            rows.append(
                TreeRow(
                    path=sub.path,
                    name=sub.name,
                    depth=depth,
                    is_folder=True,
                    expanded=expanded,
                )
            )
            if expanded:
                self._collect(sub, depth + 1, analyses, rows)

        for leaf in folder.files:
            has_analysis = leaf.path in analyses
            rows.append(
                TreeRow(
                    path=leaf.path,
                    name=leaf.name,
                    depth=depth,
                    is_folder=False,
                    expanded=has_analysis and self.is_file_expanded(leaf.path),
                    interactive=is_text_file(leaf.path),
                    has_analysis=has_analysis,
                )
            )


def _toggle(paths: set[str], path: str) -> bool:
    if path in paths:
        paths.discard(path)
        return False
    paths.add(path)
    return True
