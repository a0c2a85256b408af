"""Breadcrumb API endpoint."""

from dataclasses import replace

from aiohttp import web

from sitemenu.app_keys import config_key, repository_key
from sitemenu.core.breadcrumb import BreadcrumbBuilder, BreadcrumbOptions

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def create_breadcrumb_routes() -> list[web.RouteDef]:
    return [web.get("/api/breadcrumb", get_breadcrumb)]


async def get_breadcrumb(request: web.Request) -> web.Response:
    config = request.app[config_key]
    repository = request.app[repository_key]

    current = request.query.get("current")
    if not current:
        return web.json_response(
            {"error": "Missing required parameter", "parameter": "current"},
            status=400,
        )

    portal = repository.portal(current, config.content.base_url)
    if portal.get_current_content() is None:
        return web.json_response(
            {"error": "Content not found", "path": current},
            status=404,
        )

    try:
        options = _options_from_query(request, config.breadcrumb.to_options())
    except ValueError as e:
        return web.json_response({"error": str(e)}, status=400)

    breadcrumb = BreadcrumbBuilder(portal).build(options)
    return web.json_response(breadcrumb.to_dict())


def _options_from_query(
    request: web.Request,
    defaults: BreadcrumbOptions,
) -> BreadcrumbOptions:
    """Apply query string overrides to the configured breadcrumb options.

    Raises:
        ValueError: If a boolean parameter has an unrecognized value
    """
    query = request.query
    options = defaults
    if "linkActiveItem" in query:
        options = replace(
            options,
            link_active_item=_parse_bool("linkActiveItem", query["linkActiveItem"]),
        )
    if "showHomepage" in query:
        options = replace(
            options,
            show_homepage=_parse_bool("showHomepage", query["showHomepage"]),
        )
    if "homepageTitle" in query:
        options = replace(options, homepage_title=query["homepageTitle"] or None)
    if "dividerHtml" in query:
        options = replace(options, divider_html=query["dividerHtml"] or None)
    return options


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")
