"""Menu API endpoint.

Provides the menu tree of the site, or of any section of it, as seen from
the page being rendered.
"""

from aiohttp import web

from sitemenu.app_keys import config_key, repository_key
from sitemenu.core.menu import MenuTreeBuilder


def create_menu_routes() -> list[web.RouteDef]:
    return [web.get("/api/menu", get_menu)]


async def get_menu(request: web.Request) -> web.Response:
    config = request.app[config_key]
    repository = request.app[repository_key]

    current = request.query.get("current")
    portal = repository.portal(current, config.content.base_url)
    if current and portal.get_current_content() is None:
        return web.json_response(
            {"error": "Content not found", "path": current},
            status=404,
        )

    builder = MenuTreeBuilder(
        portal,
        namespace=config.content.app_namespace,
        page_size=config.menu.page_size,
    )
    levels = request.query.get("levels", config.menu.levels)

    root_key = request.query.get("root")
    if root_key is None:
        items = builder.get_menu_tree(levels)
    else:
        root = portal.get_by_key(root_key)
        if root is None:
            return web.json_response(
                {"error": "Section not found", "path": root_key},
                status=404,
            )
        items = builder.build_tree(root, levels)

    return web.json_response({"items": [item.to_dict() for item in items]})
