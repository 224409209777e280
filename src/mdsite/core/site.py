"""Content index for a scanned site.

Holds every scanned entry together with its output path, with O(1) lookups
by content path. Built once before any page is processed and read-only
afterwards, so worker threads can share it without locking.
"""

from pathlib import Path

from mdsite.core.errors import PathCollisionError
from mdsite.core.mapper import map_path
from mdsite.core.types import ContentEntry, ContentPath, EntryKind, OutputPath


class Site:
    """Scanned content with precomputed output paths.

    Stores entries in a flat list ordered by content path, with indices for
    path lookups and the set of directories implied by entry paths.
    """

    __slots__ = ("_directories", "_entries", "_outputs", "_path_index", "_root")

    def __init__(
        self,
        root: Path,
        entries: list[ContentEntry],
        outputs: list[OutputPath],
    ) -> None:
        """Initialize site.

        Args:
            root: Content root directory
            entries: Scanned entries, sorted by path
            outputs: Output path for each entry
        """
        self._root = root
        self._entries = entries
        self._outputs = outputs
        self._path_index = {entry.path: i for i, entry in enumerate(entries)}
        self._directories = {
            ContentPath(entry.path.parts[:depth])
            for entry in entries
            for depth in range(len(entry.path.parts))
        }

    @property
    def root(self) -> Path:
        """Content root directory."""
        return self._root

    def get_entry(self, path: ContentPath) -> ContentEntry | None:
        """Get entry by content path.

        Args:
            path: Path relative to the content root

        Returns:
            ContentEntry if scanned, None otherwise
        """
        idx = self._path_index.get(path)
        if idx is None:
            return None
        return self._entries[idx]

    def get_output(self, path: ContentPath) -> OutputPath | None:
        """Get the output path of a scanned entry."""
        idx = self._path_index.get(path)
        if idx is None:
            return None
        return self._outputs[idx]

    def has_directory(self, path: ContentPath) -> bool:
        """Check whether any scanned entry lives under path."""
        return path in self._directories

    def entries(self) -> list[ContentEntry]:
        return list(self._entries)

    def pages(self) -> list[ContentEntry]:
        return [e for e in self._entries if e.kind is EntryKind.PAGE]

    def assets(self) -> list[ContentEntry]:
        return [e for e in self._entries if e.kind is EntryKind.ASSET]

    def items(
        self,
        kind: EntryKind | None = None,
    ) -> list[tuple[ContentEntry, OutputPath]]:
        """Get (entry, output path) pairs, optionally filtered by kind."""
        return [
            (entry, output)
            for entry, output in zip(self._entries, self._outputs, strict=True)
            if kind is None or entry.kind is kind
        ]

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._path_index


class SiteBuilder:
    """Builder for constructing Site instances.

    Maps every added entry and rejects entries whose output file is already
    claimed by another entry.
    """

    def __init__(self, root: Path) -> None:
        self._root = root
        self._entries: list[ContentEntry] = []
        self._claimed: dict[ContentPath, ContentEntry] = {}

    def add_entry(self, entry: ContentEntry) -> OutputPath:
        """Add an entry to the site.

        Args:
            entry: Scanned content entry

        Returns:
            Output path the entry maps to

        Raises:
            PathCollisionError: If another entry maps to the same output file
        """
        output = map_path(entry.path, entry.kind)
        existing = self._claimed.get(output.file_path)
        if existing is not None:
            raise PathCollisionError(output.file_path, existing.source, entry.source)
        self._claimed[output.file_path] = entry
        self._entries.append(entry)
        return output

    def build(self) -> Site:
        """Build the Site instance."""
        entries = sorted(self._entries, key=lambda e: e.path)
        outputs = [map_path(e.path, e.kind) for e in entries]
        return Site(self._root, entries, outputs)
