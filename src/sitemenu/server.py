"""aiohttp server for sitemenu.

Application factory and route registration for standalone server mode.
"""

import logging

from aiohttp import web

from sitemenu.api.breadcrumb import create_breadcrumb_routes
from sitemenu.api.menu import create_menu_routes
from sitemenu.app_keys import config_key, repository_key
from sitemenu.config import Config
from sitemenu.core.source import ContentRepository

logger = logging.getLogger(__name__)


def create_app(
    config: Config,
    repository: ContentRepository | None = None,
) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        repository: Preloaded content (default: load config.content.source_file)

    Returns:
        Configured aiohttp application

    Raises:
        FileNotFoundError: If the content file doesn't exist
        ContentError: If the content file is malformed
    """
    if repository is None:
        repository = ContentRepository.load(config.content.source_file)

    app = web.Application()
    app[config_key] = config
    app[repository_key] = repository

    app.router.add_routes(create_menu_routes())
    app.router.add_routes(create_breadcrumb_routes())

    return app


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    logger.info(f"Serving navigation on {config.server.host}:{config.server.port}")
    web.run_app(app, host=config.server.host, port=config.server.port)
