"""Core type definitions."""

import enum
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import NewType

from mdsite.core.paths import normalize_segments

# Link string as emitted into generated HTML (e.g., "../about.html", "food/")
# Distinct from ContentPath to catch type mismatches
URLPath = NewType("URLPath", str)

PAGE_SUFFIX = ".md"
INDEX_PAGE = "index.md"
INDEX_HTML = "index.html"


class EntryKind(enum.Enum):
    """Kind of a content file, decided once from its name."""

    PAGE = "page"
    ASSET = "asset"

    @classmethod
    def for_name(cls, name: str) -> "EntryKind":
        """Classify a file name: ".md" files are pages, everything else assets."""
        return cls.PAGE if name.endswith(PAGE_SUFFIX) else cls.ASSET


@dataclass(frozen=True, order=True)
class ContentPath:
    """Normalized path relative to the content root.

    Segments are never empty, "." or "..". The empty tuple is the root itself.
    """

    parts: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for part in self.parts:
            if part in ("", ".", "..") or "/" in part:
                raise ValueError(f"Invalid path segment: {part!r}")

    @classmethod
    def parse(cls, value: str) -> "ContentPath":
        """Parse a forward-slash path, collapsing "." and ".." segments.

        Raises:
            ValueError: If the path escapes the root
        """
        return cls(normalize_segments(value.split("/")))

    @classmethod
    def from_fs(cls, relative: PurePath) -> "ContentPath":
        """Build from a host filesystem path relative to the content root."""
        return cls(normalize_segments(relative.parts))

    @property
    def name(self) -> str:
        """Final segment, empty for the root."""
        return self.parts[-1] if self.parts else ""

    @property
    def parent(self) -> "ContentPath":
        """Containing directory; the root is its own parent."""
        return ContentPath(self.parts[:-1])

    @property
    def is_root(self) -> bool:
        return not self.parts

    def joinpath(self, *segments: str) -> "ContentPath":
        return ContentPath(normalize_segments((*self.parts, *segments)))

    def with_name(self, name: str) -> "ContentPath":
        if self.is_root:
            raise ValueError("Root path has no name")
        return ContentPath((*self.parts[:-1], name))

    def is_relative_to(self, other: "ContentPath") -> bool:
        return self.parts[: len(other.parts)] == other.parts

    def to_fs(self, root: Path) -> Path:
        """Resolve onto a host filesystem directory."""
        return root.joinpath(*self.parts)

    def __str__(self) -> str:
        return "/".join(self.parts)


@dataclass(frozen=True)
class ContentEntry:
    """A file found under the content root."""

    path: ContentPath
    kind: EntryKind
    source: Path

    def read_bytes(self) -> bytes:
        return self.source.read_bytes()


@dataclass(frozen=True)
class OutputPath:
    """Location under the output root, produced by the path mapper.

    Directory outputs are the canonical form of index pages: the file on disk
    is ``<path>/index.html`` but links point at ``<path>/``.
    """

    path: ContentPath
    is_directory: bool = False

    @property
    def file_path(self) -> ContentPath:
        """File written to disk."""
        if self.is_directory:
            return ContentPath((*self.path.parts, INDEX_HTML))
        return self.path

    @property
    def directory(self) -> ContentPath:
        """Directory that relative links on this page resolve against."""
        return self.path if self.is_directory else self.path.parent
