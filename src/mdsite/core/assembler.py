"""HTML document assembly.

Combines the rendered header, page body, footer, stylesheet link and page
metadata into a complete HTML document using the bundled Jinja2 template.
"""

from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from mdsite.assets import get_template_dir

PAGE_TEMPLATE = "page.html"


@dataclass(frozen=True)
class PageDocument:
    """Inputs for one assembled page.

    Header, footer and content are trusted HTML fragments produced by the
    renderer; title and description are escaped.
    """

    content: str
    title: str = ""
    meta_description: str | None = None
    stylesheet: str | None = None
    header: str | None = None
    footer: str | None = None


class PageAssembler:
    """Renders PageDocuments into HTML documents."""

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize assembler.

        Args:
            template_dir: Directory containing page.html (default: bundled)
        """
        self._env = Environment(
            loader=FileSystemLoader(template_dir or get_template_dir()),
            autoescape=select_autoescape(["html"]),
            keep_trailing_newline=True,
        )
        self._template = self._env.get_template(PAGE_TEMPLATE)

    def assemble(self, document: PageDocument) -> str:
        """Render a complete HTML document.

        Args:
            document: Page parts

        Returns:
            HTML document text
        """
        return self._template.render(
            title=document.title,
            meta_description=document.meta_description,
            stylesheet=document.stylesheet,
            header=Markup(document.header) if document.header else None,
            footer=Markup(document.footer) if document.footer else None,
            content=Markup(document.content),
        )
