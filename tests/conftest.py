"""Shared test fixtures."""

import json
from pathlib import Path
from typing import Any

import pytest
from sitemenu.config import (
    BreadcrumbConfig,
    Config,
    ContentConfig,
    MenuConfig,
    ServerConfig,
)
from sitemenu.core.source import ContentRepository

NAMESPACE = "com-example-menu"
BASE_URL = "https://example.com"


def node_data(
    path: str,
    display_name: str,
    *,
    menu_item: bool | None = None,
    menu_name: str | None = None,
    new_window: bool | None = None,
    node_type: str = "base:folder",
) -> dict[str, Any]:
    """Build a raw content node as found in content documents."""
    data: dict[str, Any] = {
        "id": path.strip("/").replace("/", "-") or "root",
        "path": path,
        "displayName": display_name,
        "type": node_type,
    }
    if menu_item is not None:
        record: dict[str, Any] = {"menuItem": menu_item}
        if menu_name is not None:
            record["menuName"] = menu_name
        if new_window is not None:
            record["newWindow"] = new_window
        data["x"] = {NAMESPACE: {"menu-item": record}}
    return data


@pytest.fixture
def content_data() -> dict[str, Any]:
    """Content document for a small site.

    /site                      (site, not a menu item)
    /site/a                    menu item
    /site/a/b                  menu item
    /site/a/c                  menu item, "Charlie" menu name, new window
    /site/a/c/d                menu item
    /site/hidden               not a menu item
    /site/hidden/deep          menu item below a hidden node
    /site/plain                no extension data
    /site/e                    menu item
    """
    return {
        "site": "/site",
        "nodes": [
            node_data("/site", "My Site", node_type="portal:site"),
            node_data("/site/a", "Alpha", menu_item=True),
            node_data("/site/a/b", "Bravo", menu_item=True),
            node_data(
                "/site/a/c",
                "Charlie page",
                menu_item=True,
                menu_name="Charlie",
                new_window=True,
            ),
            node_data("/site/a/c/d", "Delta", menu_item=True),
            node_data("/site/hidden", "Hidden", menu_item=False),
            node_data("/site/hidden/deep", "Deep", menu_item=True),
            node_data("/site/plain", "Plain"),
            node_data("/site/e", "Echo", menu_item=True),
        ],
    }


@pytest.fixture
def repository(content_data: dict[str, Any]) -> ContentRepository:
    return ContentRepository.from_dict(content_data)


@pytest.fixture
def content_file(tmp_path: Path, content_data: dict[str, Any]) -> Path:
    """Write the sample content document to a JSON file."""
    path = tmp_path / "content.json"
    path.write_text(json.dumps(content_data))
    return path


@pytest.fixture
def test_config(content_file: Path) -> Config:
    """Create a test configuration pointing at the sample content."""
    return Config(
        server=ServerConfig(),
        content=ContentConfig(
            source_file=content_file,
            base_url=BASE_URL,
            app_namespace=NAMESPACE,
        ),
        menu=MenuConfig(),
        breadcrumb=BreadcrumbConfig(),
    )
