"""Content directory scanner.

Walks the content root and classifies every file as a page or an asset.

Traversal policy:
    - hidden files and directories (name starts with ".") are skipped
    - symlinked directories are not followed, symlinked files are
    - excluded paths and excluded file names are skipped
    - there is no depth limit
    - entries are returned sorted by content path segments
"""

import logging
import os
from collections.abc import Collection
from pathlib import Path

from mdsite.core.errors import ContentRootError
from mdsite.core.types import ContentEntry, ContentPath, EntryKind

logger = logging.getLogger(__name__)


def scan(
    root: Path,
    *,
    exclude: Collection[Path] = (),
    exclude_names: Collection[str] = (),
) -> list[ContentEntry]:
    """Scan a content root.

    Args:
        root: Content root directory
        exclude: Files or directories to skip (output directory, header, ...)
        exclude_names: File names to skip anywhere in the tree (e.g., "nav.md")

    Returns:
        Entries sorted by content path

    Raises:
        ContentRootError: If root is missing or not a directory
    """
    if not root.exists():
        raise ContentRootError(f"Content directory not found: {root}")
    if not root.is_dir():
        raise ContentRootError(f"Content path is not a directory: {root}")

    root = root.resolve()
    excluded = {p.resolve() for p in exclude}
    entries: list[ContentEntry] = []

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        dirnames[:] = sorted(
            d
            for d in dirnames
            if not d.startswith(".") and (current / d).resolve() not in excluded
        )

        for name in sorted(filenames):
            if name.startswith(".") or name in exclude_names:
                continue
            file_path = current / name
            if file_path.resolve() in excluded:
                logger.debug(f"Skipping excluded file {file_path}")
                continue
            if not file_path.is_file():
                logger.warning(f"Skipping unreadable entry {file_path}")
                continue
            entries.append(
                ContentEntry(
                    path=ContentPath.from_fs(file_path.relative_to(root)),
                    kind=EntryKind.for_name(name),
                    source=file_path,
                ),
            )

    entries.sort(key=lambda e: e.path)
    logger.debug(f"Scanned {len(entries)} entries under {root}")
    return entries
