"""CLI interface for sitemenu.

Command-line tool for printing menus and breadcrumbs of a content tree,
and for serving them over HTTP.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, NoReturn

import click

from sitemenu.config import Config
from sitemenu.core.breadcrumb import BreadcrumbBuilder, BreadcrumbOptions
from sitemenu.core.menu import MenuTreeBuilder
from sitemenu.core.source import ContentError, ContentRepository

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover sitemenu.toml)",
)
content_option = click.option(
    "--content",
    "content_file",
    type=click.Path(exists=True, path_type=Path, dir_okay=False),
    default=None,
    help="Content tree JSON file (overrides config)",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)


@click.group()
def cli() -> None:
    """sitemenu - Menus and breadcrumbs for content trees."""


@cli.command()
@config_option
@content_option
@verbose_option
@click.option(
    "--current",
    default=None,
    help="Path or id of the page being rendered",
)
@click.option(
    "--levels",
    "-l",
    default=None,
    help="Number of menu levels (default: from config)",
)
@click.option(
    "--root",
    default=None,
    help="Path or id of the menu root (default: the site)",
)
def menu(
    config_path: Path | None,
    content_file: Path | None,
    verbose: bool,
    current: str | None,
    levels: str | None,
    root: str | None,
) -> None:
    """Print the menu tree as JSON."""
    _configure_logging(verbose)
    config, repository = _load(config_path, content_file)
    portal = repository.portal(current, config.content.base_url)
    if current and portal.get_current_content() is None:
        _fail(f"content not found: {current}")

    builder = MenuTreeBuilder(
        portal,
        namespace=config.content.app_namespace,
        page_size=config.menu.page_size,
    )
    effective_levels: object = levels if levels is not None else config.menu.levels

    if root is None:
        items = builder.get_menu_tree(effective_levels)
    else:
        root_node = portal.get_by_key(root)
        if root_node is None:
            _fail(f"menu root not found: {root}")
        items = builder.build_tree(root_node, effective_levels)

    _echo_json({"items": [item.to_dict() for item in items]})


@cli.command()
@config_option
@content_option
@verbose_option
@click.option(
    "--current",
    required=True,
    help="Path or id of the page being rendered",
)
@click.option(
    "--link-active-item/--no-link-active-item",
    default=None,
    help="Include a URL for the current page (overrides config)",
)
@click.option(
    "--show-homepage/--no-show-homepage",
    default=None,
    help="Include a home entry for the site (overrides config)",
)
@click.option(
    "--homepage-title",
    default=None,
    help="Label of the home entry (default: site display name)",
)
@click.option(
    "--divider-html",
    default=None,
    help="Divider markup passed through to templates",
)
def breadcrumb(
    config_path: Path | None,
    content_file: Path | None,
    verbose: bool,
    current: str,
    link_active_item: bool | None,
    show_homepage: bool | None,
    homepage_title: str | None,
    divider_html: str | None,
) -> None:
    """Print the breadcrumb trail of a page as JSON."""
    _configure_logging(verbose)
    config, repository = _load(config_path, content_file)
    portal = repository.portal(current, config.content.base_url)
    if portal.get_current_content() is None:
        _fail(f"content not found: {current}")

    defaults = config.breadcrumb
    params: dict[str, Any] = {
        "linkActiveItem": defaults.link_active_item,
        "showHomepage": defaults.show_homepage,
        "homepageTitle": defaults.homepage_title,
        "dividerHtml": defaults.divider_html,
    }
    if link_active_item is not None:
        params["linkActiveItem"] = link_active_item
    if show_homepage is not None:
        params["showHomepage"] = show_homepage
    if homepage_title is not None:
        params["homepageTitle"] = homepage_title
    if divider_html is not None:
        params["dividerHtml"] = divider_html

    result = BreadcrumbBuilder(portal).build(BreadcrumbOptions.from_mapping(params))
    _echo_json(result.to_dict())


@cli.command()
@config_option
@content_option
@verbose_option
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--base-url",
    default=None,
    help="Base URL for absolute page links (overrides config)",
)
def serve(
    config_path: Path | None,
    content_file: Path | None,
    verbose: bool,
    host: str | None,
    port: int | None,
    base_url: str | None,
) -> None:
    """Start the navigation API server."""
    from sitemenu.server import run_server

    _configure_logging(verbose)
    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        source_file=content_file,
        base_url=base_url,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Content file: {config.content.source_file}")
    click.echo(f"Base URL: {config.content.base_url}")

    try:
        run_server(config)
    except (FileNotFoundError, ContentError) as e:
        _fail(str(e))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(config_path: Path | None) -> Config:
    try:
        return Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))


def _load(
    config_path: Path | None,
    content_file: Path | None,
) -> tuple[Config, ContentRepository]:
    """Load configuration and the content tree it points to.

    Args:
        config_path: Explicit config file, or None to auto-discover
        content_file: Content file overriding the configured one

    Returns:
        Tuple of (config, repository)

    Raises:
        SystemExit: If config or content can't be loaded
    """
    config = _load_config(config_path).with_overrides(source_file=content_file)
    try:
        repository = ContentRepository.load(config.content.source_file)
    except (FileNotFoundError, ContentError) as e:
        _fail(str(e))
    return config, repository


def _echo_json(data: object) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
