"""Configuration management for mdsite.

Supports TOML configuration format with auto-discovery.
"""

import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from mdsite.core.links import LinkStyle

CONFIG_FILENAME = "mdsite.toml"


@dataclass
class ContentConfig:
    """Content and output locations."""

    source_dir: Path = field(default_factory=lambda: Path("content"))
    output_dir: Path = field(default_factory=lambda: Path("_site"))
    header: Path = field(default_factory=lambda: Path("header.md"))
    footer: Path = field(default_factory=lambda: Path("footer.md"))
    style: Path = field(default_factory=lambda: Path("style.css"))
    exclude: list[str] = field(default_factory=lambda: ["nav.md"])


@dataclass
class LinksConfig:
    """Link rewriting configuration."""

    style: LinkStyle = LinkStyle.RELATIVE
    base_url: str = "/"
    root_marker: str | None = None


@dataclass
class BuildConfig:
    """Build behavior configuration."""

    clean: bool = False
    workers: int = 0
    strict: bool = False

    @property
    def max_workers(self) -> int:
        """Worker thread count, resolving 0 to an automatic value."""
        if self.workers > 0:
            return self.workers
        return min(32, (os.cpu_count() or 1) + 4)


@dataclass
class Config:
    """Application configuration."""

    content: ContentConfig
    links: LinksConfig
    build: BuildConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for mdsite.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            config_path = config_path.expanduser()
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> "Config":
        """Create config with all defaults."""
        return cls(
            content=ContentConfig(),
            links=LinksConfig(),
            build=BuildConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> "Config":
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            content=cls._parse_content(data.get("content"), config_dir),
            links=cls._parse_links(data.get("links")),
            build=cls._parse_build(data.get("build")),
            config_path=path,
        )

    @classmethod
    def _parse_content(cls, data: object, config_dir: Path) -> ContentConfig:
        """Parse content configuration section.

        Args:
            data: Raw content section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ContentConfig instance
        """
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError("content section must be a dictionary")

        paths: dict[str, Path] = {}
        for key, default in (
            ("source_dir", "content"),
            ("output_dir", "_site"),
            ("header", "header.md"),
            ("footer", "footer.md"),
            ("style", "style.css"),
        ):
            value = data.get(key, default)
            if not isinstance(value, str):
                raise ValueError(f"content.{key} must be a string")
            paths[key] = config_dir / Path(value).expanduser()

        exclude_raw = data.get("exclude", ["nav.md"])
        if not isinstance(exclude_raw, list):
            raise ValueError("content.exclude must be a list")
        exclude: list[str] = []
        for item in exclude_raw:
            if not isinstance(item, str):
                raise ValueError("content.exclude items must be strings")
            exclude.append(item)

        return ContentConfig(
            source_dir=paths["source_dir"],
            output_dir=paths["output_dir"],
            header=paths["header"],
            footer=paths["footer"],
            style=paths["style"],
            exclude=exclude,
        )

    @classmethod
    def _parse_links(cls, data: object) -> LinksConfig:
        """Parse links configuration section.

        Args:
            data: Raw links section data

        Returns:
            LinksConfig instance
        """
        if data is None:
            return LinksConfig()

        if not isinstance(data, dict):
            raise ValueError("links section must be a dictionary")

        style = data.get("style", LinkStyle.RELATIVE.value)
        if not isinstance(style, str):
            raise ValueError("links.style must be a string")
        try:
            link_style = LinkStyle(style)
        except ValueError:
            raise ValueError(
                "links.style must be one of: "
                + ", ".join(s.value for s in LinkStyle),
            ) from None

        base_url = data.get("base_url", "/")
        if not isinstance(base_url, str):
            raise ValueError("links.base_url must be a string")

        root_marker = data.get("root_marker")
        if root_marker is not None and not isinstance(root_marker, str):
            raise ValueError("links.root_marker must be a string")

        return LinksConfig(style=link_style, base_url=base_url, root_marker=root_marker)

    @classmethod
    def _parse_build(cls, data: object) -> BuildConfig:
        """Parse build configuration section.

        Args:
            data: Raw build section data

        Returns:
            BuildConfig instance
        """
        if data is None:
            return BuildConfig()

        if not isinstance(data, dict):
            raise ValueError("build section must be a dictionary")

        clean = data.get("clean", False)
        if not isinstance(clean, bool):
            raise ValueError("build.clean must be a boolean")

        workers = data.get("workers", 0)
        if not isinstance(workers, int) or isinstance(workers, bool) or workers < 0:
            raise ValueError("build.workers must be a non-negative integer")

        strict = data.get("strict", False)
        if not isinstance(strict, bool):
            raise ValueError("build.strict must be a boolean")

        return BuildConfig(clean=clean, workers=workers, strict=strict)

    def with_overrides(
        self,
        *,
        source_dir: Path | None = None,
        output_dir: Path | None = None,
        header: Path | None = None,
        footer: Path | None = None,
        style: Path | None = None,
        link_style: LinkStyle | None = None,
        base_url: str | None = None,
        clean: bool | None = None,
        workers: int | None = None,
        strict: bool | None = None,
    ) -> "Config":
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified. Paths have "~" expanded.

        Returns:
            New Config instance with overrides applied
        """
        path_overrides = {
            key: value.expanduser()
            for key, value in (
                ("source_dir", source_dir),
                ("output_dir", output_dir),
                ("header", header),
                ("footer", footer),
                ("style", style),
            )
            if value is not None
        }
        content = replace(self.content, **path_overrides) if path_overrides else self.content

        links = self.links
        if link_style is not None or base_url is not None:
            links = replace(
                self.links,
                style=link_style if link_style is not None else self.links.style,
                base_url=base_url if base_url is not None else self.links.base_url,
            )

        build = self.build
        if clean is not None or workers is not None or strict is not None:
            build = replace(
                self.build,
                clean=clean if clean is not None else self.build.clean,
                workers=workers if workers is not None else self.build.workers,
                strict=strict if strict is not None else self.build.strict,
            )

        return replace(self, content=content, links=links, build=build)
