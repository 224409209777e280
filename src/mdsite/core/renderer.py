"""Markdown rendering with internal link rewriting.

Wraps mistune's HTML renderer so every link and image target passes through
the LinkRewriter while the document is rendered.
"""

import html
import logging
import re
from dataclasses import dataclass, field

import mistune

from mdsite.core.diagnostics import Diagnostic
from mdsite.core.links import LinkRewriter
from mdsite.core.types import ContentPath

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r"<[^>]+>")

DEFAULT_PLUGINS = ("table", "strikethrough", "task_lists", "footnotes", "url")


@dataclass
class RenderResult:
    """Result of rendering a markdown document."""

    html: str
    title: str | None
    diagnostics: list[Diagnostic] = field(default_factory=list)


def heading_text(rendered: str) -> str:
    """Plain text of a rendered heading (tags removed, entities decoded)."""
    return html.unescape(TAG_PATTERN.sub("", rendered)).strip()


class _LinkRewritingRenderer(mistune.HTMLRenderer):
    """HTML renderer that rewrites link and image targets.

    Also records the text of the first level-1 heading as the page title.
    """

    def __init__(
        self,
        rewriter: LinkRewriter,
        from_path: ContentPath,
        resolve_from: ContentPath | None,
    ) -> None:
        # Raw HTML in pages is passed through unchanged
        super().__init__(escape=False)
        self._rewriter = rewriter
        self._from_path = from_path
        self._resolve_from = resolve_from
        self.diagnostics: list[Diagnostic] = []
        self.first_heading: str | None = None

    def _rewrite(self, url: str) -> str:
        result = self._rewriter.rewrite(
            url,
            self._from_path,
            resolve_from=self._resolve_from,
        )
        if result.diagnostic is not None:
            self.diagnostics.append(result.diagnostic)
        return result.url

    def link(self, text: str, url: str, title: str | None = None) -> str:
        return super().link(text, self._rewrite(url), title)

    def image(self, text: str, url: str, title: str | None = None) -> str:
        return super().image(text, self._rewrite(url), title)

    def heading(self, text: str, level: int, **attrs: object) -> str:
        if level == 1 and self.first_heading is None:
            self.first_heading = heading_text(text) or None
        return super().heading(text, level, **attrs)


class PageRenderer:
    """Renders markdown to HTML fragments with rewritten internal links.

    A fresh mistune parser is created per call, so one PageRenderer can be
    shared by worker threads.
    """

    def __init__(
        self,
        rewriter: LinkRewriter,
        *,
        plugins: tuple[str, ...] = DEFAULT_PLUGINS,
    ) -> None:
        """Initialize renderer.

        Args:
            rewriter: Link rewriter for internal links
            plugins: mistune plugins to enable
        """
        self._rewriter = rewriter
        self._plugins = plugins

    def render(
        self,
        markdown_text: str,
        from_path: ContentPath,
        *,
        resolve_from: ContentPath | None = None,
    ) -> RenderResult:
        """Render a markdown document.

        Args:
            markdown_text: Markdown source without front matter
            from_path: Content path of the page the HTML ends up on
            resolve_from: Content path relative links resolve against
                          (defaults to from_path)

        Returns:
            RenderResult with HTML, first H1 title and link diagnostics
        """
        renderer = _LinkRewritingRenderer(self._rewriter, from_path, resolve_from)
        markdown = mistune.create_markdown(
            renderer=renderer,
            plugins=list(self._plugins),
        )
        logger.debug(f"Rendering {len(markdown_text)} characters for {from_path}")
        rendered = markdown(markdown_text)
        return RenderResult(
            html=rendered,
            title=renderer.first_heading,
            diagnostics=renderer.diagnostics,
        )
