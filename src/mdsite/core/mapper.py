"""Content-to-output path mapping.

Pages become HTML files at the same location, ``index.md`` pages become the
directory they live in, and assets keep their path. The mapping is pure: it
never looks at the filesystem and has no failure path.

    guide.md            -> guide.html
    food/index.md       -> food/            (written as food/index.html)
    index.md            -> ./               (written as index.html)
    images/logo.png     -> images/logo.png
"""

from mdsite.core.types import (
    INDEX_PAGE,
    PAGE_SUFFIX,
    ContentPath,
    EntryKind,
    OutputPath,
)

HTML_SUFFIX = ".html"


def map_path(path: ContentPath, kind: EntryKind) -> OutputPath:
    """Map a content path to its output path.

    Args:
        path: Path relative to the content root
        kind: Kind of the content entry

    Returns:
        OutputPath relative to the output root
    """
    if kind is EntryKind.ASSET:
        return OutputPath(path)

    if path.name == INDEX_PAGE:
        return OutputPath(path.parent, is_directory=True)

    stem = path.name[: -len(PAGE_SUFFIX)]
    return OutputPath(path.with_name(stem + HTML_SUFFIX))
