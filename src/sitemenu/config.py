"""Configuration management for sitemenu.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from sitemenu.core.breadcrumb import BreadcrumbOptions
from sitemenu.core.source import DEFAULT_PAGE_SIZE

CONFIG_FILENAME = "sitemenu.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class ContentConfig:
    """Content source configuration."""

    source_file: Path = field(default_factory=lambda: Path("content.json"))
    base_url: str = "http://localhost:8080"
    app_namespace: str | None = None


@dataclass
class MenuConfig:
    """Menu tree configuration."""

    levels: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass
class BreadcrumbConfig:
    """Breadcrumb defaults."""

    link_active_item: bool = False
    show_homepage: bool = True
    homepage_title: str | None = None
    divider_html: str | None = None

    def to_options(self) -> BreadcrumbOptions:
        """Convert to breadcrumb builder options."""
        return BreadcrumbOptions(
            link_active_item=self.link_active_item,
            show_homepage=self.show_homepage,
            homepage_title=self.homepage_title,
            divider_html=self.divider_html,
        )


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    content: ContentConfig
    menu: MenuConfig
    breadcrumb: BreadcrumbConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for sitemenu.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
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
    def _default(cls) -> Config:
        return cls(
            server=ServerConfig(),
            content=ContentConfig(),
            menu=MenuConfig(),
            breadcrumb=BreadcrumbConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            content=cls._parse_content(data.get("content"), config_dir),
            menu=cls._parse_menu(data.get("menu")),
            breadcrumb=cls._parse_breadcrumb(data.get("breadcrumb")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

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
            return ContentConfig(source_file=config_dir / "content.json")

        if not isinstance(data, dict):
            raise ValueError("content section must be a dictionary")

        source_file = data.get("source_file", "content.json")
        if not isinstance(source_file, str):
            raise ValueError("content.source_file must be a string")

        base_url = data.get("base_url", "http://localhost:8080")
        if not isinstance(base_url, str):
            raise ValueError("content.base_url must be a string")

        app_namespace = data.get("app_namespace")
        if app_namespace is not None and not isinstance(app_namespace, str):
            raise ValueError("content.app_namespace must be a string")

        return ContentConfig(
            source_file=config_dir / source_file,
            base_url=base_url,
            app_namespace=app_namespace,
        )

    @classmethod
    def _parse_menu(cls, data: object) -> MenuConfig:
        if data is None:
            return MenuConfig()

        if not isinstance(data, dict):
            raise ValueError("menu section must be a dictionary")

        levels = data.get("levels", 1)
        if not isinstance(levels, int) or isinstance(levels, bool) or levels < 0:
            raise ValueError("menu.levels must be a non-negative integer")

        page_size = data.get("page_size", DEFAULT_PAGE_SIZE)
        if not isinstance(page_size, int) or isinstance(page_size, bool) or page_size < 1:
            raise ValueError("menu.page_size must be a positive integer")

        return MenuConfig(levels=levels, page_size=page_size)

    @classmethod
    def _parse_breadcrumb(cls, data: object) -> BreadcrumbConfig:
        """Parse breadcrumb configuration section.

        Args:
            data: Raw breadcrumb section data

        Returns:
            BreadcrumbConfig instance
        """
        if data is None:
            return BreadcrumbConfig()

        if not isinstance(data, dict):
            raise ValueError("breadcrumb section must be a dictionary")

        link_active_item = data.get("link_active_item", False)
        if not isinstance(link_active_item, bool):
            raise ValueError("breadcrumb.link_active_item must be a boolean")

        show_homepage = data.get("show_homepage", True)
        if not isinstance(show_homepage, bool):
            raise ValueError("breadcrumb.show_homepage must be a boolean")

        homepage_title = data.get("homepage_title")
        if homepage_title is not None and not isinstance(homepage_title, str):
            raise ValueError("breadcrumb.homepage_title must be a string")

        divider_html = data.get("divider_html")
        if divider_html is not None and not isinstance(divider_html, str):
            raise ValueError("breadcrumb.divider_html must be a string")

        return BreadcrumbConfig(
            link_active_item=link_active_item,
            show_homepage=show_homepage,
            homepage_title=homepage_title,
            divider_html=divider_html,
        )

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        source_file: Path | None = None,
        base_url: str | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            source_file: Override content.source_file
            base_url: Override content.base_url

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        content = self.content
        if source_file is not None or base_url is not None:
            content = replace(
                self.content,
                source_file=source_file if source_file is not None else self.content.source_file,
                base_url=base_url if base_url is not None else self.content.base_url,
            )

        return replace(self, server=server, content=content)
