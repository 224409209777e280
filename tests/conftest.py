"""Shared test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest
from mdsite.config import BuildConfig, Config, ContentConfig, LinksConfig
from mdsite.core.scanner import scan
from mdsite.core.site import Site, SiteBuilder

FileTree = dict[str, str | bytes]


def write_tree(root: Path, files: FileTree) -> None:
    """Create files under root from a {relative path: content} mapping."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Empty content root named "content"."""
    path = tmp_path / "content"
    path.mkdir()
    return path


@pytest.fixture
def make_site(content_dir: Path) -> Callable[[FileTree], Site]:
    """Factory creating files in content_dir and returning the scanned Site."""

    def _make(files: FileTree) -> Site:
        write_tree(content_dir, files)
        builder = SiteBuilder(content_dir.resolve())
        for entry in scan(content_dir):
            builder.add_entry(entry)
        return builder.build()

    return _make


@pytest.fixture
def test_config(tmp_path: Path, content_dir: Path) -> Config:
    """Create a test configuration with tmp_path directories.

    Header, footer and stylesheet point into tmp_path and are absent until a
    test creates them.
    """
    return Config(
        content=ContentConfig(
            source_dir=content_dir,
            output_dir=tmp_path / "_site",
            header=tmp_path / "header.md",
            footer=tmp_path / "footer.md",
            style=tmp_path / "style.css",
        ),
        links=LinksConfig(),
        build=BuildConfig(workers=2),
    )
