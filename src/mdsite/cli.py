"""CLI interface for mdsite.

Command-line tool for building static HTML sites from Markdown content.
"""

import logging
import sys
from pathlib import Path

import click

from mdsite.config import Config
from mdsite.core.errors import BuildError
from mdsite.core.links import LinkStyle


@click.group()
@click.version_option(package_name="mdsite")
def cli() -> None:
    """mdsite - static HTML sites from Markdown content."""


@cli.command()
@click.argument(
    "content",
    type=click.Path(path_type=Path),
    required=False,
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Path to configuration file (default: auto-discover mdsite.toml)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Site output directory, created if absent (default: _site)",
)
@click.option(
    "--header",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Markdown header included on every page (default: header.md)",
)
@click.option(
    "--footer",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Markdown footer included on every page (default: footer.md)",
)
@click.option(
    "--style",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Stylesheet linked from every page (default: style.css)",
)
@click.option(
    "--link-style",
    type=click.Choice([s.value for s in LinkStyle]),
    default=None,
    help="Emit rewritten links relative to each page or root-absolute",
)
@click.option(
    "--base-url",
    default=None,
    help="URL prefix for absolute links (default: /)",
)
@click.option(
    "--clean/--no-clean",
    default=None,
    help="Empty the output directory before building (default: disabled)",
)
@click.option(
    "--workers",
    type=click.IntRange(min=0),
    default=None,
    help="Page rendering threads, 0 for automatic",
)
@click.option(
    "--strict",
    is_flag=True,
    default=None,
    help="Fail the build when broken links or bad front matter are found",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (show per-file progress)",
)
def build(
    content: Path | None,
    config_path: Path | None,
    output: Path | None,
    header: Path | None,
    footer: Path | None,
    style: Path | None,
    link_style: str | None,
    base_url: str | None,
    clean: bool | None,
    workers: int | None,
    strict: bool | None,
    verbose: bool,
) -> None:
    """Build a static site from a CONTENT directory of Markdown files."""
    from mdsite.builder import build_site

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = Config.load(config_path).with_overrides(
            source_dir=content,
            output_dir=output,
            header=header,
            footer=footer,
            style=style,
            link_style=LinkStyle(link_style) if link_style is not None else None,
            base_url=base_url,
            clean=clean,
            workers=workers,
            strict=strict or None,
        )
    except (FileNotFoundError, ValueError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    click.echo(f"Content directory: {config.content.source_dir}")
    click.echo(f"Output directory: {config.content.output_dir}")

    try:
        result = build_site(config)
    except BuildError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    _print_diagnostics(result.diagnostics)

    if not result.ok:
        click.echo(
            click.style(
                f"\n{len(result.report.failed)} file(s) could not be written:",
                fg="red",
                bold=True,
            ),
            err=True,
        )
        for failure in result.report.failed:
            click.echo(f"  - {failure}", err=True)
        sys.exit(1)

    click.echo(
        click.style(
            f"\nBuilt {result.pages} pages and copied {result.assets} assets "
            f"into {result.output_dir}",
            fg="green",
            bold=True,
        ),
    )

    if config.build.strict and result.diagnostics:
        click.echo(
            click.style("Strict mode: failing because of warnings", fg="red"),
            err=True,
        )
        sys.exit(1)


def _print_diagnostics(diagnostics: list) -> None:
    """Print build warnings.

    Args:
        diagnostics: List of Diagnostic objects
    """
    if not diagnostics:
        return

    click.echo(
        click.style(f"\nWarnings ({len(diagnostics)}):", fg="yellow", bold=True),
        err=True,
    )
    for diagnostic in diagnostics:
        click.echo(f"  - [{diagnostic.kind.value}] {diagnostic}", err=True)


if __name__ == "__main__":
    cli()
