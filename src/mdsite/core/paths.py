"""Path normalization utilities.

Content paths and link targets always use forward-slash semantics,
independent of the host filesystem. These helpers operate on segment
tuples and never touch the disk.
"""

import re
from collections.abc import Iterable
from urllib.parse import quote, unquote

# Characters left unescaped when emitting a path segment. ":" is excluded so a
# relative link can never be mistaken for one with a scheme.
_SEGMENT_SAFE = "!$&'()*+,;=@~"

SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")


def normalize_segments(parts: Iterable[str]) -> tuple[str, ...]:
    """Collapse empty, "." and ".." segments.

    Args:
        parts: Raw path segments, possibly containing "." and ".."

    Returns:
        Normalized segments

    Raises:
        ValueError: If ".." climbs above the root
    """
    result: list[str] = []
    for part in parts:
        if part in ("", "."):
            continue
        if part == "..":
            if not result:
                raise ValueError("Path escapes the content root")
            result.pop()
            continue
        result.append(part)
    return tuple(result)


def split_target(target: str) -> tuple[str, str]:
    """Split a link target into its path and its query/fragment suffix.

    Args:
        target: Link target (e.g., "page.md#section")

    Returns:
        Tuple of (path, suffix), e.g. ("page.md", "#section")
    """
    cut = len(target)
    for marker in ("?", "#"):
        idx = target.find(marker)
        if idx != -1 and idx < cut:
            cut = idx
    return target[:cut], target[cut:]


def decode_segments(path: str) -> list[str]:
    """Split a URL path into percent-decoded segments."""
    return [unquote(part) for part in path.split("/")]


def encode_segments(parts: Iterable[str]) -> str:
    """Join segments into a URL path, percent-encoding each one."""
    return "/".join(quote(part, safe=_SEGMENT_SAFE) for part in parts)


def relative_url(
    from_dir: tuple[str, ...],
    target: tuple[str, ...],
    *,
    directory: bool,
) -> str:
    """Compute a relative URL between two locations in the output tree.

    Args:
        from_dir: Directory the link is followed from
        target: Target segments
        directory: Whether the target is a directory (emitted with trailing "/")

    Returns:
        Relative URL; "./" when the target is the current directory
    """
    target_dir = target if directory else target[:-1]

    common = 0
    while (
        common < len(from_dir)
        and common < len(target_dir)
        and from_dir[common] == target_dir[common]
    ):
        common += 1

    rest = list(target_dir[common:])
    if not directory:
        rest.append(target[-1])

    url = "../" * (len(from_dir) - common) + encode_segments(rest)
    if directory and rest:
        url += "/"
    return url or "./"
