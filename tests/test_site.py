"""Tests for Site class."""

from collections.abc import Callable
from pathlib import Path

import pytest
from mdsite.core.errors import PathCollisionError
from mdsite.core.site import Site, SiteBuilder
from mdsite.core.types import ContentEntry, ContentPath, EntryKind, OutputPath


def _entry(root: Path, value: str) -> ContentEntry:
    path = ContentPath.parse(value)
    return ContentEntry(path=path, kind=EntryKind.for_name(path.name), source=path.to_fs(root))


class TestSite:
    """Tests for Site lookups."""

    def test__get_entry__returns_entry(self, make_site: Callable[..., Site]) -> None:
        """Get entry by content path."""
        site = make_site({"guide.md": "# Guide"})

        entry = site.get_entry(ContentPath.parse("guide.md"))

        assert entry is not None
        assert entry.kind is EntryKind.PAGE

    def test__get_entry__not_found__returns_none(
        self, make_site: Callable[..., Site]
    ) -> None:
        site = make_site({"guide.md": "# Guide"})

        assert site.get_entry(ContentPath.parse("missing.md")) is None

    def test__get_output__returns_mapped_path(
        self, make_site: Callable[..., Site]
    ) -> None:
        site = make_site({"food/index.md": "# Food"})

        output = site.get_output(ContentPath.parse("food/index.md"))

        assert output == OutputPath(ContentPath.parse("food"), is_directory=True)

    def test__has_directory__implied_by_entries(
        self, make_site: Callable[..., Site]
    ) -> None:
        site = make_site({"food/bread/wheat.md": "# Wheat"})

        assert site.has_directory(ContentPath())
        assert site.has_directory(ContentPath.parse("food"))
        assert site.has_directory(ContentPath.parse("food/bread"))
        assert not site.has_directory(ContentPath.parse("food/bread/wheat.md"))
        assert not site.has_directory(ContentPath.parse("drinks"))

    def test__pages_and_assets__split_by_kind(
        self, make_site: Callable[..., Site]
    ) -> None:
        site = make_site({"index.md": "# Home", "logo.png": b"\x89PNG"})

        assert [str(e.path) for e in site.pages()] == ["index.md"]
        assert [str(e.path) for e in site.assets()] == ["logo.png"]
        assert len(site) == 2
        assert ContentPath.parse("logo.png") in site

    def test__items__pairs_entries_with_outputs(
        self, make_site: Callable[..., Site]
    ) -> None:
        site = make_site({"a.md": "# A", "b.txt": "b"})

        items = site.items(EntryKind.PAGE)

        assert len(items) == 1
        entry, output = items[0]
        assert str(entry.path) == "a.md"
        assert str(output.file_path) == "a.html"


class TestSiteBuilder:
    """Tests for SiteBuilder class."""

    def test__add_entry__returns_output(self, tmp_path: Path) -> None:
        builder = SiteBuilder(tmp_path)

        output = builder.add_entry(_entry(tmp_path, "a/coffee.md"))

        assert output == OutputPath(ContentPath.parse("a/coffee.html"))

    def test__build__sorts_entries(self, tmp_path: Path) -> None:
        builder = SiteBuilder(tmp_path)
        builder.add_entry(_entry(tmp_path, "b.md"))
        builder.add_entry(_entry(tmp_path, "a/z.md"))
        builder.add_entry(_entry(tmp_path, "a.md"))

        site = builder.build()

        assert [str(e.path) for e in site.entries()] == ["a/z.md", "a.md", "b.md"]

    def test__page_and_asset_collide__raises_error(self, tmp_path: Path) -> None:
        """A page and an HTML asset claiming the same output file fail the build."""
        builder = SiteBuilder(tmp_path)
        builder.add_entry(_entry(tmp_path, "about.md"))

        with pytest.raises(PathCollisionError) as exc_info:
            builder.add_entry(_entry(tmp_path, "about.html"))

        error = exc_info.value
        assert error.output == ContentPath.parse("about.html")
        assert error.first == tmp_path / "about.md"
        assert error.second == tmp_path / "about.html"
        assert "about.md" in str(error)
        assert "about.html" in str(error)

    def test__index_page_and_index_html_collide__raises_error(self, tmp_path: Path) -> None:
        builder = SiteBuilder(tmp_path)
        builder.add_entry(_entry(tmp_path, "food/index.html"))

        with pytest.raises(PathCollisionError, match="food/index.html"):
            builder.add_entry(_entry(tmp_path, "food/index.md"))
