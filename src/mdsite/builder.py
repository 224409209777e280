"""Site build driver.

Scans the content root, builds the read-only content index, then renders
every page in a thread pool while the main thread streams finished files to
the output directory. Assets are copied byte for byte.
"""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from mdsite.config import Config
from mdsite.core.assembler import PageAssembler, PageDocument
from mdsite.core.diagnostics import Diagnostic, DiagnosticKind, unique_diagnostics
from mdsite.core.errors import ContentRootError
from mdsite.core.frontmatter import split_front_matter
from mdsite.core.links import LinkRewriter
from mdsite.core.renderer import PageRenderer
from mdsite.core.scanner import scan
from mdsite.core.site import Site, SiteBuilder
from mdsite.core.types import ContentEntry, ContentPath, EntryKind, OutputPath
from mdsite.core.writer import OutputFile, SiteWriter, WriteReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SharedContent:
    """Header, footer and stylesheet included in every page.

    Passed by value to each page job. Header and footer links resolve
    against their anchor paths, which sit at the content root.
    """

    header: str | None = None
    footer: str | None = None
    header_anchor: ContentPath = ContentPath(("header.md",))
    footer_anchor: ContentPath = ContentPath(("footer.md",))
    stylesheet: OutputPath | None = None


@dataclass(frozen=True)
class PageResult:
    """Rendered page ready to be written."""

    entry: ContentEntry
    file: OutputFile
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass
class BuildResult:
    """Outcome of a site build."""

    output_dir: Path
    pages: int
    assets: int
    report: WriteReport
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every file was written."""
        return self.report.ok


def resolve_optional_file(path: Path, content_dir: Path) -> Path | None:
    """Locate an optional input file (header, footer, stylesheet).

    Args:
        path: Configured location
        content_dir: Content root, searched by file name as a fallback

    Returns:
        Existing file path, or None if the file is absent in both places
    """
    path = path.expanduser()
    if path.is_file():
        return path
    candidate = content_dir / path.name
    if candidate.is_file():
        return candidate
    return None


def decode_text(raw: bytes, source: str) -> tuple[str, Diagnostic | None]:
    """Decode UTF-8 content, replacing undecodable bytes.

    Returns:
        Tuple of (text, INVALID_ENCODING diagnostic or None)
    """
    try:
        return raw.decode("utf-8"), None
    except UnicodeDecodeError as e:
        return raw.decode("utf-8", errors="replace"), Diagnostic(
            source, DiagnosticKind.INVALID_ENCODING, f"not valid UTF-8: {e}"
        )


def build_page(
    entry: ContentEntry,
    output: OutputPath,
    shared: SharedContent,
    renderer: PageRenderer,
    rewriter: LinkRewriter,
    assembler: PageAssembler,
) -> PageResult:
    """Render one page into a complete HTML document.

    Args:
        entry: Page to render
        output: Output path of the page
        shared: Header, footer and stylesheet
        renderer: Markdown renderer with link rewriting
        rewriter: Link rewriter (for the stylesheet link)
        assembler: HTML document assembler

    Returns:
        PageResult with the HTML file and diagnostics

    Raises:
        OSError: If the page cannot be read
    """
    diagnostics: list[Diagnostic] = []
    source = str(entry.path)

    text, encoding_error = decode_text(entry.read_bytes(), source)
    if encoding_error is not None:
        diagnostics.append(encoding_error)

    front_matter = split_front_matter(text)
    if front_matter.error is not None:
        diagnostics.append(
            Diagnostic(source, DiagnosticKind.MALFORMED_FRONT_MATTER, front_matter.error),
        )

    body = renderer.render(front_matter.body, entry.path)
    diagnostics.extend(body.diagnostics)

    header_html = None
    if shared.header is not None:
        header = renderer.render(shared.header, entry.path, resolve_from=shared.header_anchor)
        header_html = header.html
        diagnostics.extend(header.diagnostics)

    footer_html = None
    if shared.footer is not None:
        footer = renderer.render(shared.footer, entry.path, resolve_from=shared.footer_anchor)
        footer_html = footer.html
        diagnostics.extend(footer.diagnostics)

    stylesheet = None
    if shared.stylesheet is not None:
        stylesheet = rewriter.url_for(shared.stylesheet, entry.path)

    metadata = front_matter.metadata
    html = assembler.assemble(
        PageDocument(
            content=body.html,
            title=metadata.title or body.title or "",
            meta_description=metadata.meta_description,
            stylesheet=stylesheet,
            header=header_html,
            footer=footer_html,
        ),
    )

    return PageResult(
        entry=entry,
        file=OutputFile(path=output.file_path, source=source, data=html.encode("utf-8")),
        diagnostics=tuple(diagnostics),
    )


class SiteGenerator:
    """Builds a static site from a content directory."""

    def __init__(self, config: Config, *, assembler: PageAssembler | None = None) -> None:
        """Initialize generator.

        Args:
            config: Application configuration
            assembler: Document assembler (default: bundled template)
        """
        self._config = config
        self._assembler = assembler or PageAssembler()

    def build(self) -> BuildResult:
        """Build the site.

        Returns:
            BuildResult with write report and diagnostics

        Raises:
            ContentRootError: If the content root is unusable
            PathCollisionError: If two entries map to the same output file
        """
        content = self._config.content
        content_dir, output_dir = _check_directories(
            content.source_dir.expanduser(),
            content.output_dir.expanduser(),
        )

        header_path = resolve_optional_file(content.header, content_dir)
        footer_path = resolve_optional_file(content.footer, content_dir)
        style_path = resolve_optional_file(content.style, content_dir)

        exclude = [output_dir, *(p for p in (header_path, footer_path) if p is not None)]
        entries = scan(content_dir, exclude=exclude, exclude_names=content.exclude)
        site, stylesheet = _load_site(content_dir, entries, style_path)
        logger.info(
            f"Building {len(site.pages())} pages and {len(site.assets())} assets "
            f"from {content_dir} into {output_dir}",
        )

        links = self._config.links
        rewriter = LinkRewriter(
            site,
            root_marker=links.root_marker,
            style=links.style,
            base_url=links.base_url,
        )
        renderer = PageRenderer(rewriter)
        header_anchor = _anchor(header_path, "header.md")
        footer_anchor = _anchor(footer_path, "footer.md")
        header_text, header_error = _read_shared(header_path, header_anchor)
        footer_text, footer_error = _read_shared(footer_path, footer_anchor)
        shared = SharedContent(
            header=header_text,
            footer=footer_text,
            header_anchor=header_anchor,
            footer_anchor=footer_anchor,
            stylesheet=stylesheet,
        )

        writer = SiteWriter(output_dir, clean=self._config.build.clean)
        writer.prepare()

        for asset, output in site.items(EntryKind.ASSET):
            writer.write(
                OutputFile(path=output.file_path, source=str(asset.path), copy_from=asset.source),
            )

        diagnostics = [d for d in (header_error, footer_error) if d is not None]
        diagnostics.extend(self._build_pages(site, shared, renderer, rewriter, writer))

        report = writer.report
        report.written.sort()
        report.failed.sort(key=lambda f: f.path)

        diagnostics = unique_diagnostics(diagnostics)
        logger.info(
            f"Wrote {len(report.written)} files, {len(report.failed)} failed, "
            f"{len(diagnostics)} warnings",
        )

        return BuildResult(
            output_dir=output_dir,
            pages=len(site.pages()),
            assets=len(site.assets()),
            report=report,
            diagnostics=diagnostics,
        )

    def _build_pages(
        self,
        site: Site,
        shared: SharedContent,
        renderer: PageRenderer,
        rewriter: LinkRewriter,
        writer: SiteWriter,
    ) -> list[Diagnostic]:
        """Render pages concurrently and stream results to the writer."""
        diagnostics: list[Diagnostic] = []
        with ThreadPoolExecutor(max_workers=self._config.build.max_workers) as pool:
            futures = {}
            for page, output in site.items(EntryKind.PAGE):
                future = pool.submit(
                    build_page, page, output, shared, renderer, rewriter, self._assembler
                )
                futures[future] = (page, output)

            for future in as_completed(futures):
                page, output = futures[future]
                try:
                    result = future.result()
                except OSError as e:
                    writer.record_failure(output.file_path, str(page.path), str(e))
                    continue
                diagnostics.extend(result.diagnostics)
                writer.write(result.file)
        return diagnostics


def build_site(config: Config) -> BuildResult:
    """Build a site with the bundled page template."""
    return SiteGenerator(config).build()


def _check_directories(content_dir: Path, output_dir: Path) -> tuple[Path, Path]:
    """Validate and resolve the content and output directories.

    Raises:
        ContentRootError: If the content root is missing, not a directory,
                          or lies inside the output directory
    """
    if not content_dir.exists():
        raise ContentRootError(f"Content directory not found: {content_dir}")
    if not content_dir.is_dir():
        raise ContentRootError(f"Content path is not a directory: {content_dir}")

    content_dir = content_dir.resolve()
    output_dir = output_dir.resolve()
    if content_dir.is_relative_to(output_dir):
        raise ContentRootError(
            f"Output directory {output_dir} must not contain the content root",
        )
    return content_dir, output_dir


def _load_site(
    content_dir: Path,
    entries: Sequence[ContentEntry],
    style_path: Path | None,
) -> tuple[Site, OutputPath | None]:
    """Index scanned entries, adding the stylesheet when it lives elsewhere.

    A root-level content asset with the stylesheet's name takes precedence
    over an external stylesheet, which is then not copied.

    Returns:
        Tuple of (site, stylesheet output path or None)
    """
    builder = SiteBuilder(content_dir)
    stylesheet: OutputPath | None = None
    style_resolved = style_path.resolve() if style_path is not None else None
    style_root_path = ContentPath((style_path.name,)) if style_path is not None else None
    root_namesake: OutputPath | None = None

    for entry in entries:
        output = builder.add_entry(entry)
        if style_resolved is not None and entry.source.resolve() == style_resolved:
            stylesheet = output
        elif entry.path == style_root_path:
            root_namesake = output

    if stylesheet is None and root_namesake is not None:
        logger.info(
            f"Using {content_dir / style_root_path.name} as stylesheet instead of {style_path}",
        )
        stylesheet = root_namesake

    if style_path is not None and stylesheet is None:
        stylesheet = builder.add_entry(
            ContentEntry(
                path=ContentPath((style_path.name,)),
                kind=EntryKind.ASSET,
                source=style_path,
            ),
        )

    return builder.build(), stylesheet


def _read_shared(
    path: Path | None,
    anchor: ContentPath,
) -> tuple[str | None, Diagnostic | None]:
    """Read header or footer Markdown without its front matter."""
    if path is None:
        return None, None
    text, error = decode_text(path.read_bytes(), str(anchor))
    return split_front_matter(text).body, error


def _anchor(path: Path | None, default: str) -> ContentPath:
    return ContentPath((path.name if path is not None else default,))
