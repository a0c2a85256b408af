"""Application keys for type-safe app configuration access."""

from aiohttp import web

from sitemenu.config import Config
from sitemenu.core.source import ContentRepository

config_key = web.AppKey("config", Config)
repository_key = web.AppKey("repository", ContentRepository)
