"""Front matter extraction.

A page may start with a YAML block delimited by ``---`` lines:

    ---
    title: Coffee
    meta_description: Brewing notes
    ---

    # Coffee

Only ``title`` and ``meta_description`` are used; other keys are ignored.
"""

import logging
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)

FRONT_MATTER_MARKER = "---"


@dataclass(frozen=True)
class PageMetadata:
    """Metadata attached to a page."""

    title: str | None = None
    meta_description: str | None = None


@dataclass(frozen=True)
class FrontMatter:
    """Result of splitting a page into metadata and body.

    Attributes:
        metadata: Parsed metadata, empty when absent or malformed
        body: Markdown body without the front matter block
        error: Why the block could not be parsed, None on success
    """

    metadata: PageMetadata
    body: str
    error: str | None = None


def split_front_matter(text: str) -> FrontMatter:
    """Split optional front matter from a page.

    Args:
        text: Full page source

    Returns:
        FrontMatter with metadata and body. Malformed blocks yield empty
        metadata and an error message instead of raising.
    """
    text = text.removeprefix("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != FRONT_MATTER_MARKER:
        return FrontMatter(metadata=PageMetadata(), body=text)

    closing = next(
        (i for i in range(1, len(lines)) if lines[i].rstrip() == FRONT_MATTER_MARKER),
        None,
    )
    if closing is None:
        return FrontMatter(
            metadata=PageMetadata(),
            body=text,
            error="front matter block is not closed",
        )

    block = "".join(lines[1:closing])
    body = "".join(lines[closing + 1 :]).lstrip("\r\n")

    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        return FrontMatter(
            metadata=PageMetadata(),
            body=body,
            error=f"invalid YAML in front matter: {e}",
        )

    if data is None:
        return FrontMatter(metadata=PageMetadata(), body=body)
    if not isinstance(data, dict):
        return FrontMatter(
            metadata=PageMetadata(),
            body=body,
            error="front matter must be a mapping",
        )

    return FrontMatter(
        metadata=PageMetadata(
            title=_string_value(data, "title"),
            meta_description=_string_value(data, "meta_description"),
        ),
        body=body,
    )


def _string_value(data: dict[object, object], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        logger.debug(f"Ignoring non-string front matter value for {key!r}")
        return None
    return value
