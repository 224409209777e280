"""Non-fatal build diagnostics."""

import enum
from collections.abc import Iterable
from dataclasses import dataclass


class DiagnosticKind(enum.Enum):
    """Category of a recoverable build problem."""

    BROKEN_LINK = "broken-link"
    MALFORMED_FRONT_MATTER = "malformed-front-matter"
    INVALID_ENCODING = "invalid-encoding"


@dataclass(frozen=True)
class Diagnostic:
    """A problem reported to the operator without aborting the build.

    Attributes:
        source: Content file the problem was found in (e.g., "food/index.md")
        kind: Problem category
        message: Human readable description
    """

    source: str
    kind: DiagnosticKind
    message: str

    def __str__(self) -> str:
        return f"{self.source}: {self.message}"


def unique_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    """Deduplicate and sort diagnostics.

    Shared header and footer content is rendered once per page, so the same
    broken link would otherwise be reported for every page.
    """
    return sorted(set(diagnostics), key=lambda d: (d.source, d.kind.value, d.message))
