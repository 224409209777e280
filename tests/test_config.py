"""Tests for configuration loading."""

from pathlib import Path
from unittest.mock import patch

import pytest
from mdsite.config import BuildConfig, Config, ContentConfig, LinksConfig
from mdsite.core.links import LinkStyle


class TestConfigLoad:
    """Tests for Config.load()."""

    def test__explicit_path__loads_config(self, tmp_path: Path) -> None:
        """Load config from explicit path."""
        config_file = tmp_path / "mdsite.toml"
        config_file.write_text("""
[content]
source_dir = "docs"
output_dir = "public"
header = "partials/header.md"
footer = "partials/footer.md"
style = "theme.css"
exclude = ["nav.md", "drafts.md"]

[links]
style = "absolute"
base_url = "/docs/"
root_marker = "site"

[build]
clean = true
workers = 4
strict = true
""")

        config = Config.load(config_file)

        assert config.content.source_dir == tmp_path / "docs"
        assert config.content.output_dir == tmp_path / "public"
        assert config.content.header == tmp_path / "partials" / "header.md"
        assert config.content.footer == tmp_path / "partials" / "footer.md"
        assert config.content.style == tmp_path / "theme.css"
        assert config.content.exclude == ["nav.md", "drafts.md"]
        assert config.links.style is LinkStyle.ABSOLUTE
        assert config.links.base_url == "/docs/"
        assert config.links.root_marker == "site"
        assert config.build.clean is True
        assert config.build.workers == 4
        assert config.build.strict is True
        assert config.config_path == config_file

    def test__explicit_path_not_found__raises_error(self, tmp_path: Path) -> None:
        """Raise FileNotFoundError for missing explicit path."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            Config.load(tmp_path / "missing.toml")

    def test__empty_file__uses_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "mdsite.toml"
        config_file.write_text("")

        config = Config.load(config_file)

        assert config.content.source_dir == tmp_path / "content"
        assert config.content.output_dir == tmp_path / "_site"
        assert config.content.header == tmp_path / "header.md"
        assert config.content.exclude == ["nav.md"]
        assert config.links == LinksConfig()
        assert config.build == BuildConfig()

    def test__invalid_toml__raises_value_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "mdsite.toml"
        config_file.write_text("[content\n")

        with pytest.raises(ValueError, match="Invalid TOML"):
            Config.load(config_file)

    def test__discovers_config_in_cwd(self, tmp_path: Path) -> None:
        """Auto-discover mdsite.toml in current directory."""
        config_file = tmp_path / "mdsite.toml"
        config_file.write_text('[build]\nworkers = 3\n')

        with patch("pathlib.Path.cwd", return_value=tmp_path):
            config = Config.load()

        assert config.build.workers == 3
        assert config.config_path == config_file

    def test__discovers_config_in_parent(self, tmp_path: Path) -> None:
        """Auto-discover mdsite.toml in parent directory."""
        config_file = tmp_path / "mdsite.toml"
        config_file.write_text('[content]\nsource_dir = "pages"\n')
        subdir = tmp_path / "a" / "b"
        subdir.mkdir(parents=True)

        with patch("pathlib.Path.cwd", return_value=subdir):
            config = Config.load()

        assert config.content.source_dir == tmp_path / "pages"

    def test__no_config_found__returns_defaults(self, tmp_path: Path) -> None:
        with patch("pathlib.Path.cwd", return_value=tmp_path):
            config = Config.load()

        assert config.content == ContentConfig()
        assert config.config_path is None


class TestConfigValidation:
    """Tests for section validation."""

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            ('content = "x"', "content section must be a dictionary"),
            ("[content]\nsource_dir = 1", "content.source_dir must be a string"),
            ('[content]\nexclude = "nav.md"', "content.exclude must be a list"),
            ("[content]\nexclude = [1]", "content.exclude items must be strings"),
            ('[links]\nstyle = "fancy"', "links.style must be one of: relative, absolute"),
            ("[links]\nbase_url = 1", "links.base_url must be a string"),
            ("[links]\nroot_marker = true", "links.root_marker must be a string"),
            ('build = "x"', "build section must be a dictionary"),
            ('[build]\nclean = "yes"', "build.clean must be a boolean"),
            ("[build]\nworkers = -1", "build.workers must be a non-negative integer"),
            ("[build]\nworkers = true", "build.workers must be a non-negative integer"),
            ("[build]\nstrict = 1", "build.strict must be a boolean"),
        ],
    )
    def test__invalid_value__raises_value_error(
        self, tmp_path: Path, content: str, message: str
    ) -> None:
        config_file = tmp_path / "mdsite.toml"
        config_file.write_text(content)

        with pytest.raises(ValueError, match=message):
            Config.load(config_file)


class TestBuildConfig:
    """Tests for BuildConfig."""

    def test__explicit_workers(self) -> None:
        assert BuildConfig(workers=3).max_workers == 3

    def test__automatic_workers__positive(self) -> None:
        assert BuildConfig().max_workers >= 1


class TestWithOverrides:
    """Tests for Config.with_overrides()."""

    def test__no_overrides__same_values(self) -> None:
        config = Config._default()

        result = config.with_overrides()

        assert result == config

    def test__overrides_applied(self, tmp_path: Path) -> None:
        config = Config._default()

        result = config.with_overrides(
            source_dir=tmp_path / "docs",
            output_dir=tmp_path / "out",
            link_style=LinkStyle.ABSOLUTE,
            base_url="/site/",
            clean=True,
            workers=1,
            strict=True,
        )

        assert result.content.source_dir == tmp_path / "docs"
        assert result.content.output_dir == tmp_path / "out"
        assert result.content.header == Path("header.md")
        assert result.links.style is LinkStyle.ABSOLUTE
        assert result.links.base_url == "/site/"
        assert result.build == BuildConfig(clean=True, workers=1, strict=True)

    def test__original_not_modified(self, tmp_path: Path) -> None:
        config = Config._default()

        config.with_overrides(source_dir=tmp_path, clean=True)

        assert config.content.source_dir == Path("content")
        assert config.build.clean is False

    def test__home_expanded(self) -> None:
        result = Config._default().with_overrides(output_dir=Path("~/site"))

        assert result.content.output_dir == Path.home() / "site"
