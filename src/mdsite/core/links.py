"""Internal link rewriting.

Markdown links between content files are written against the source tree
(``[coffee](../drinks/coffee.md)``). After mapping, the same file lives at a
different location in the output tree, so every internal link is resolved
against the content root, mapped, and re-emitted from the output location of
the page that contains it.

Link classification:
    external           has a scheme ("https:", "mailto:"), starts with "//"
                       or "#", or has no path at all ("?page=2")
    internal-root      starts with "/"; a leading segment equal to the root
                       marker (the content directory's name by default) is
                       stripped, so "/content/about.md" and "/about.md" both
                       name the root-level about.md
    internal-relative  everything else, resolved against the directory of
                       the linking page

Index pages are always linked in their directory form ("food/"), matching
how the page itself is written (food/index.html).
"""

import enum
import logging
from dataclasses import dataclass

from mdsite.core.diagnostics import Diagnostic, DiagnosticKind
from mdsite.core.mapper import map_path
from mdsite.core.paths import (
    SCHEME_RE,
    decode_segments,
    encode_segments,
    normalize_segments,
    relative_url,
    split_target,
)
from mdsite.core.site import Site
from mdsite.core.types import ContentPath, EntryKind, OutputPath, URLPath

logger = logging.getLogger(__name__)


class LinkKind(enum.Enum):
    """Classification of a link target."""

    EXTERNAL = "external"
    INTERNAL_RELATIVE = "internal-relative"
    INTERNAL_ROOT = "internal-root"


class LinkStyle(enum.Enum):
    """How rewritten links are emitted. One style applies to a whole build."""

    RELATIVE = "relative"
    ABSOLUTE = "absolute"


def classify_link(target: str) -> LinkKind:
    """Classify a link target.

    Classification only looks at the string; it never checks whether the
    target exists.

    Args:
        target: Raw link target from Markdown

    Returns:
        LinkKind of the target
    """
    if not target or target.startswith(("#", "//")) or SCHEME_RE.match(target):
        return LinkKind.EXTERNAL
    path, _ = split_target(target)
    if not path:
        return LinkKind.EXTERNAL
    if path.startswith("/"):
        return LinkKind.INTERNAL_ROOT
    return LinkKind.INTERNAL_RELATIVE


@dataclass(frozen=True)
class RewriteResult:
    """Outcome of rewriting one link.

    A dangling internal link is still rewritten using the mapping rules; the
    result then carries a diagnostic instead of failing.

    Attributes:
        url: Link to emit
        kind: Classification of the original target
        target: Resolved content path, None for external links
        diagnostic: Set when the target could not be found
    """

    url: URLPath
    kind: LinkKind
    target: ContentPath | None = None
    diagnostic: Diagnostic | None = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None


class LinkRewriter:
    """Rewrites Markdown link targets against the output tree.

    Shares only the read-only Site; safe to use from several threads.
    """

    def __init__(
        self,
        site: Site,
        *,
        root_marker: str | None = None,
        style: LinkStyle = LinkStyle.RELATIVE,
        base_url: str = "/",
    ) -> None:
        """Initialize rewriter.

        Args:
            site: Scanned content used for existence checks
            root_marker: Leading segment stripped from root links.
                         Defaults to the content directory's name.
            style: Relative or root-absolute links
            base_url: Prefix for absolute links (e.g., "/docs/")
        """
        self._site = site
        self._root_marker = root_marker if root_marker is not None else site.root.name
        self._style = style
        self._base_url = base_url if base_url.endswith("/") else f"{base_url}/"

    @property
    def style(self) -> LinkStyle:
        return self._style

    def rewrite(
        self,
        target: str,
        from_path: ContentPath,
        *,
        resolve_from: ContentPath | None = None,
    ) -> RewriteResult:
        """Rewrite a single link target.

        Args:
            target: Raw link target (e.g., "../food/index.md#bread")
            from_path: Content path of the page the link is emitted on
            resolve_from: Content path relative links resolve against.
                          Defaults to from_path; shared header and footer
                          content resolves against the content root while
                          being emitted on every page.

        Returns:
            RewriteResult with the link to emit
        """
        kind = classify_link(target)
        if kind is LinkKind.EXTERNAL:
            return RewriteResult(url=URLPath(target), kind=kind)

        source = resolve_from if resolve_from is not None else from_path
        raw_path, suffix = split_target(target)
        segments = decode_segments(raw_path)

        if kind is LinkKind.INTERNAL_ROOT:
            segments = segments[1:]
            if segments and segments[0] == self._root_marker:
                segments = segments[1:]
            base: tuple[str, ...] = ()
        else:
            base = source.parent.parts

        try:
            parts = normalize_segments((*base, *segments))
        except ValueError:
            return self._unresolved(target, kind, source, "points outside the content root")
        try:
            resolved = ContentPath(parts)
        except ValueError:
            # e.g. "a%2Fb.md" decodes to a segment containing "/"
            return self._unresolved(target, kind, source, "has an invalid path segment")

        is_directory = resolved.is_root or raw_path.endswith("/")
        if is_directory:
            output = OutputPath(resolved, is_directory=True)
            exists = self._site.has_directory(resolved)
        else:
            entry_kind = EntryKind.for_name(resolved.name)
            output = map_path(resolved, entry_kind)
            entry = self._site.get_entry(resolved)
            exists = entry is not None or (
                entry_kind is EntryKind.ASSET and self._site.has_directory(resolved)
            )

        url = URLPath(self.url_for(output, from_path) + suffix)

        diagnostic = None
        if not exists:
            diagnostic = Diagnostic(
                source=str(source),
                kind=DiagnosticKind.BROKEN_LINK,
                message=f"link {target!r} points to missing /{resolved}",
            )
            logger.debug(f"{source}: broken link {target!r} rewritten to {url!r}")

        return RewriteResult(url=url, kind=kind, target=resolved, diagnostic=diagnostic)

    def _unresolved(
        self,
        target: str,
        kind: LinkKind,
        source: ContentPath,
        reason: str,
    ) -> RewriteResult:
        """Leave a link that cannot name a content path unchanged."""
        return RewriteResult(
            url=URLPath(target),
            kind=kind,
            diagnostic=Diagnostic(
                source=str(source),
                kind=DiagnosticKind.BROKEN_LINK,
                message=f"link {target!r} {reason}",
            ),
        )

    def url_for(self, output: OutputPath, from_path: ContentPath) -> str:
        """Link from a page to an output location in the configured style.

        Args:
            output: Target location in the output tree
            from_path: Content path of the page the link is emitted on

        Returns:
            Relative or root-absolute URL
        """
        if self._style is LinkStyle.ABSOLUTE:
            url = self._base_url + encode_segments(output.path.parts)
            if output.is_directory and output.path.parts:
                url += "/"
            return url

        page_dir = map_path(from_path, EntryKind.PAGE).directory
        return relative_url(
            page_dir.parts,
            output.path.parts,
            directory=output.is_directory,
        )
