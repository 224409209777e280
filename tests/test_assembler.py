"""Tests for HTML document assembly."""

from pathlib import Path

from mdsite.core.assembler import PAGE_TEMPLATE, PageAssembler, PageDocument


class TestPageAssembler:
    """Tests for PageAssembler.assemble()."""

    def test__minimal_document(self) -> None:
        html = PageAssembler().assemble(PageDocument(content="<p>Hi</p>"))

        assert html.startswith("<!DOCTYPE html>")
        assert "<main>\n<p>Hi</p>\n</main>" in html
        assert "<title></title>" in html
        assert "<header>" not in html
        assert "<footer>" not in html
        assert "stylesheet" not in html
        assert 'name="description"' not in html

    def test__all_parts__included(self) -> None:
        html = PageAssembler().assemble(
            PageDocument(
                content="<p>Body</p>",
                title="Coffee",
                meta_description="Brewing notes",
                stylesheet="../style.css",
                header='<p><a href="../about.html">About</a></p>',
                footer="<p>Footer</p>",
            )
        )

        assert "<title>Coffee</title>" in html
        assert '<meta name="description" content="Brewing notes">' in html
        assert '<link rel="stylesheet" href="../style.css">' in html
        assert '<header>\n<p><a href="../about.html">About</a></p>\n</header>' in html
        assert "<footer>\n<p>Footer</p>\n</footer>" in html
        assert html.index("<header>") < html.index("<main>") < html.index("<footer>")

    def test__metadata__escaped(self) -> None:
        html = PageAssembler().assemble(
            PageDocument(content="<p>x</p>", title="Tea & <Cake>"),
        )

        assert "<title>Tea &amp; &lt;Cake&gt;</title>" in html

    def test__content__not_escaped(self) -> None:
        html = PageAssembler().assemble(PageDocument(content="<em>raw</em>"))

        assert "<em>raw</em>" in html

    def test__custom_template_dir(self, tmp_path: Path) -> None:
        (tmp_path / PAGE_TEMPLATE).write_text("{{ title }}|{{ content }}")

        html = PageAssembler(tmp_path).assemble(
            PageDocument(content="<p>x</p>", title="T"),
        )

        assert html == "T|<p>x</p>"
