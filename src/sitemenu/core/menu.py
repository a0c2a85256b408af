"""Menu tree builder.

Builds depth-bounded trees of menu items from a content source. Only
nodes flagged as menu items are included, and a node that is not a menu
item hides its whole subtree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TypedDict

from sitemenu.core.active_path import resolve_active_state
from sitemenu.core.classifier import MenuItemMetadata, get_menu_item_metadata
from sitemenu.core.levels import resolve_levels
from sitemenu.core.source import DEFAULT_PAGE_SIZE, ContentSource
from sitemenu.core.types import ContentNode

logger = logging.getLogger(__name__)


class MenuEntryDict(TypedDict):
    """Dictionary representation of a menu entry."""

    displayName: str
    menuName: str | None
    path: str
    name: str
    id: str
    hasChildren: bool
    inPath: bool
    isActive: bool
    newWindow: bool
    type: str
    children: list[MenuEntryDict]


@dataclass(frozen=True)
class MenuEntry:
    """Menu item with its visible children."""

    display_name: str
    menu_name: str | None
    path: str
    name: str
    id: str
    type: str
    in_path: bool = False
    is_active: bool = False
    new_window: bool = False
    children: tuple[MenuEntry, ...] = ()

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def to_dict(self) -> MenuEntryDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "displayName": self.display_name,
            "menuName": self.menu_name,
            "path": self.path,
            "name": self.name,
            "id": self.id,
            "hasChildren": self.has_children,
            "inPath": self.in_path,
            "isActive": self.is_active,
            "newWindow": self.new_window,
            "type": self.type,
            "children": [child.to_dict() for child in self.children],
        }


class MenuTreeBuilder:
    """Builds menu trees from a content source.

    The builder holds no per-call state, so one instance can serve any
    number of trees as long as its source stays the same.
    """

    def __init__(
        self,
        source: ContentSource,
        *,
        namespace: str | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """Initialize builder.

        Args:
            source: Content source to read nodes from
            namespace: Application namespace holding menu metadata
                (None to use the key found on each node)
            page_size: Maximum number of children listed per node
        """
        self._source = source
        self._namespace = namespace
        self._page_size = page_size

    def get_menu_tree(self, levels: object = 1) -> list[MenuEntry]:
        """Build the menu tree of the current site.

        Args:
            levels: Number of menu levels to include

        Returns:
            Menu entries below the site, empty if there is no site
        """
        site = self._source.get_site()
        if site is None:
            logger.warning("No site available, returning empty menu")
            return []
        return self.build_tree(site, levels)

    def build_tree(
        self,
        root: ContentNode | None,
        levels: object = 1,
        current: ContentNode | None = None,
    ) -> list[MenuEntry]:
        """Build menu entries below a root node.

        A site root that is itself a menu item is emitted first, without
        children, so the site can sit next to its own children in a menu.

        Args:
            root: Node whose children form the first menu level
            levels: Number of levels to include; non-integers mean 1
            current: Node being rendered (default: the source's current node)

        Returns:
            Menu entries in child order, empty for a missing root
        """
        if not root:
            return []

        depth = resolve_levels(levels)
        if current is None:
            current = self._source.get_current_content()
        current_path = current.path if current is not None else None

        return self._build_children(root, depth, current_path)

    def _build_children(
        self,
        parent: ContentNode,
        levels: int,
        current_path: str | None,
    ) -> list[MenuEntry]:
        entries: list[MenuEntry] = []
        if parent.is_site:
            metadata = get_menu_item_metadata(parent, self._namespace)
            if metadata is not None and metadata.menu_item:
                entries.append(self._to_entry(parent, metadata, 0, current_path))

        result = self._source.get_children(parent.id, self._page_size)
        if result.total > len(result.hits):
            logger.debug(
                f"Menu for {parent.path} truncated to {len(result.hits)} "
                f"of {result.total} children",
            )

        for child in result.hits:
            metadata = get_menu_item_metadata(child, self._namespace)
            if metadata is None or not metadata.menu_item:
                logger.debug(f"Skipping {child.path}: not a menu item")
                continue
            entries.append(self._to_entry(child, metadata, levels - 1, current_path))
        return entries

    def _to_entry(
        self,
        node: ContentNode,
        metadata: MenuItemMetadata,
        levels: int,
        current_path: str | None,
    ) -> MenuEntry:
        children: list[MenuEntry] = []
        if levels > 0:
            children = self._build_children(node, levels, current_path)

        state = resolve_active_state(node.path, current_path)
        return MenuEntry(
            display_name=node.display_name,
            menu_name=metadata.menu_name,
            path=node.path,
            name=node.name,
            id=node.id,
            type=node.type,
            in_path=state.in_path,
            is_active=state.is_active,
            new_window=metadata.new_window,
            children=tuple(children),
        )
