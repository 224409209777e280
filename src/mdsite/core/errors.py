"""Fatal build errors.

Anything raised from here aborts the build. Recoverable conditions are
reported as diagnostics instead.
"""

from pathlib import Path

from mdsite.core.types import ContentPath


class BuildError(Exception):
    """Base class for errors that abort a build."""


class ContentRootError(BuildError):
    """Content root is missing, not a directory, or overlaps the output."""


class PathCollisionError(BuildError):
    """Two content entries map to the same output file."""

    def __init__(self, output: ContentPath, first: Path, second: Path) -> None:
        self.output = output
        self.first = first
        self.second = second
        super().__init__(
            f"Output path collision: {first} and {second} both map to {output}",
        )
