"""Menu item classification.

Decides whether a content node is flagged as a menu item by inspecting
the ``menu-item`` record in its extension data, and extracts the
menu-specific metadata when it is.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sitemenu.core.types import ContentNode

MENU_ITEM_KEY = "menu-item"


@dataclass(frozen=True)
class MenuItemMetadata:
    """Parsed ``menu-item`` extension record."""

    menu_item: bool
    menu_name: str | None = None
    new_window: bool = False

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> MenuItemMetadata:
        """Build metadata from a raw ``menu-item`` record.

        An empty or non-string ``menuName`` is treated as no override.
        """
        menu_name = record.get("menuName")
        if not isinstance(menu_name, str) or not menu_name:
            menu_name = None
        return cls(
            menu_item=bool(record.get("menuItem")),
            menu_name=menu_name,
            new_window=bool(record.get("newWindow")),
        )


def app_namespace(app_name: str) -> str:
    """Convert an application name to its extension data key.

    Example: ``"com.example.menu"`` becomes ``"com-example-menu"``.
    """
    return app_name.replace(".", "-")


def resolve_namespace(
    extension_data: Mapping[str, Any] | None,
    namespace: str | None = None,
) -> str | None:
    """Pick the namespace key to read menu metadata from.

    An explicitly configured namespace always wins. Otherwise the only key
    present is used, or the first key in lexicographic order when several
    applications attached data to the node.

    Args:
        extension_data: Extension data mapping of a node
        namespace: Configured application namespace, if any

    Returns:
        Namespace key, or None when there is nothing to read
    """
    if namespace is not None:
        return namespace
    if not extension_data:
        return None
    return min(extension_data)


def get_menu_item_metadata(
    node: ContentNode,
    namespace: str | None = None,
) -> MenuItemMetadata | None:
    """Return the menu metadata attached to a node, if any."""
    extension_data = node.extension_data
    if not extension_data:
        return None

    key = resolve_namespace(extension_data, namespace)
    if key is None:
        return None

    module_data = extension_data.get(key)
    if not isinstance(module_data, Mapping):
        return None

    record = module_data.get(MENU_ITEM_KEY)
    if not isinstance(record, Mapping) or not record:
        return None

    return MenuItemMetadata.from_record(record)


def is_menu_item(node: ContentNode, namespace: str | None = None) -> bool:
    """Check whether a node is flagged as a menu item."""
    metadata = get_menu_item_metadata(node, namespace)
    return metadata is not None and metadata.menu_item
