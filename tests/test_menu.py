"""Tests for menu tree builder."""

from typing import Any

import pytest
from sitemenu.core.menu import MenuEntry, MenuTreeBuilder
from sitemenu.core.source import ContentRepository, Portal

from tests.conftest import NAMESPACE, node_data


@pytest.fixture
def portal(repository: ContentRepository) -> Portal:
    return repository.portal("/site/a/b", "https://example.com")


@pytest.fixture
def builder(portal: Portal) -> MenuTreeBuilder:
    return MenuTreeBuilder(portal, namespace=NAMESPACE)


def _paths(entries: list[MenuEntry] | tuple[MenuEntry, ...]) -> list[str]:
    return [entry.path for entry in entries]


class TestMenuTreeBuilderGetMenuTree:
    """Tests for MenuTreeBuilder.get_menu_tree()."""

    def test_defaults_to_one_level(self, builder: MenuTreeBuilder) -> None:
        """Include only direct menu children of the site by default."""
        menu = builder.get_menu_tree()

        assert _paths(menu) == ["/site/a", "/site/e"]
        assert all(entry.children == () for entry in menu)
        assert all(entry.has_children is False for entry in menu)

    def test_two_levels(self, builder: MenuTreeBuilder) -> None:
        """Include grandchildren with two levels."""
        menu = builder.get_menu_tree(2)

        alpha = menu[0]
        assert alpha.has_children is True
        assert _paths(alpha.children) == ["/site/a/b", "/site/a/c"]
        assert alpha.children[1].children == ()

    def test_three_levels(self, builder: MenuTreeBuilder) -> None:
        """Descend one more level per level of budget."""
        menu = builder.get_menu_tree(3)

        charlie = menu[0].children[1]
        assert _paths(charlie.children) == ["/site/a/c/d"]

    def test_non_integer_levels_default_to_one(self, builder: MenuTreeBuilder) -> None:
        """Treat non-integer levels as one level."""
        assert builder.get_menu_tree("deep") == builder.get_menu_tree(1)
        assert builder.get_menu_tree(2.5) == builder.get_menu_tree(1)

    def test_string_levels(self, builder: MenuTreeBuilder) -> None:
        """Accept whole numbers given as strings."""
        assert builder.get_menu_tree("2") == builder.get_menu_tree(2)


class TestMenuTreeBuilderBuildTree:
    """Tests for MenuTreeBuilder.build_tree()."""

    def test_missing_root(self, builder: MenuTreeBuilder) -> None:
        """Return an empty list for a missing root."""
        assert builder.build_tree(None, 3) == []

    def test_zero_levels(self, builder: MenuTreeBuilder, portal: Portal) -> None:
        """List direct children without descending at zero levels."""
        menu = builder.build_tree(portal.get_site(), 0)

        assert _paths(menu) == ["/site/a", "/site/e"]
        assert all(entry.has_children is False for entry in menu)
        assert all(entry.children == () for entry in menu)

    def test_subtree_root(self, builder: MenuTreeBuilder, portal: Portal) -> None:
        """Build a menu below any node."""
        menu = builder.build_tree(portal.get_by_key("/site/a"), 1)

        assert _paths(menu) == ["/site/a/b", "/site/a/c"]

    def test_skips_non_menu_items_and_their_subtrees(
        self,
        builder: MenuTreeBuilder,
        portal: Portal,
    ) -> None:
        """Never include nor descend into nodes that aren't menu items."""
        menu = builder.build_tree(portal.get_site(), 5)

        def walk(entries: tuple[MenuEntry, ...] | list[MenuEntry]) -> list[str]:
            paths: list[str] = []
            for entry in entries:
                paths.append(entry.path)
                paths.extend(walk(entry.children))
            return paths

        paths = walk(menu)
        assert "/site/hidden" not in paths
        assert "/site/hidden/deep" not in paths
        assert "/site/plain" not in paths

    def test_active_and_in_path(self, builder: MenuTreeBuilder) -> None:
        """Mark the current node active and its ancestors in path."""
        alpha, echo = builder.get_menu_tree(2)
        bravo, charlie = alpha.children

        assert (alpha.in_path, alpha.is_active) == (True, False)
        assert (bravo.in_path, bravo.is_active) == (False, True)
        assert (charlie.in_path, charlie.is_active) == (False, False)
        assert (echo.in_path, echo.is_active) == (False, False)

    def test_explicit_current_node(self, builder: MenuTreeBuilder, portal: Portal) -> None:
        """Resolve active state against an explicitly given current node."""
        menu = builder.build_tree(portal.get_site(), 1, current=portal.get_by_key("/site/e"))

        alpha, echo = menu
        assert alpha.in_path is False
        assert echo.is_active is True

    def test_without_current_node(self, repository: ContentRepository) -> None:
        """Leave all entries unmarked when nothing is being rendered."""
        builder = MenuTreeBuilder(repository.portal(None), namespace=NAMESPACE)

        menu = builder.get_menu_tree(2)

        assert not any(entry.is_active or entry.in_path for entry in menu)

    def test_menu_metadata(self, builder: MenuTreeBuilder) -> None:
        """Copy menu name and new window flag from the menu-item record."""
        alpha = builder.get_menu_tree(2)[0]
        bravo, charlie = alpha.children

        assert charlie.menu_name == "Charlie"
        assert charlie.display_name == "Charlie page"
        assert charlie.new_window is True
        assert bravo.menu_name is None
        assert bravo.new_window is False

    def test_idempotent(self, builder: MenuTreeBuilder) -> None:
        """Return equal trees for repeated calls."""
        assert builder.get_menu_tree(3) == builder.get_menu_tree(3)


class TestMenuTreeBuilderSiteRoot:
    """Tests for site roots that are menu items themselves."""

    @staticmethod
    def _repository(site_menu_item: bool | None) -> ContentRepository:
        return ContentRepository.from_dict(
            {
                "site": "/site",
                "nodes": [
                    node_data(
                        "/site",
                        "Home",
                        menu_item=site_menu_item,
                        node_type="portal:site",
                    ),
                    node_data("/site/a", "Alpha", menu_item=True),
                    node_data("/site/a/c", "Charlie", menu_item=True),
                ],
            },
        )

    def test_site_excluded_unless_menu_item(self) -> None:
        """Leave out a site that isn't a menu item."""
        portal = self._repository(None).portal("/site/a/c")

        menu = MenuTreeBuilder(portal).get_menu_tree(2)

        assert len(menu) == 1
        alpha = menu[0]
        assert alpha.path == "/site/a"
        assert alpha.has_children is True
        assert _paths(alpha.children) == ["/site/a/c"]
        assert alpha.children[0].has_children is False

    def test_site_menu_item_comes_first(self) -> None:
        """Emit a menu-item site first, without children."""
        portal = self._repository(True).portal("/site")

        menu = MenuTreeBuilder(portal).get_menu_tree(2)

        assert _paths(menu) == ["/site", "/site/a"]
        home = menu[0]
        assert home.children == ()
        assert home.is_active is True
        assert menu[1].in_path is False


class TestMenuTreeBuilderRootSite:
    """Tests for a site at the root path."""

    def test_top_level_children(self) -> None:
        """List top-level menu items under a root site."""
        repository = ContentRepository.from_dict(
            {
                "site": "/",
                "nodes": [
                    node_data("/", "Root", node_type="portal:site"),
                    node_data("/a", "Alpha", menu_item=True),
                    node_data("/a/b", "Bravo", menu_item=True),
                ],
            },
        )

        menu = MenuTreeBuilder(repository.portal("/a/b")).get_menu_tree(2)

        assert _paths(menu) == ["/a"]
        assert menu[0].in_path is True
        assert _paths(menu[0].children) == ["/a/b"]
        assert menu[0].children[0].is_active is True


class TestMenuTreeBuilderPageSize:
    """Tests for child paging."""

    def test_children_past_page_size_are_not_visited(self) -> None:
        """Only visit the first page of children."""
        nodes: list[dict[str, Any]] = [node_data("/site", "Site", node_type="portal:site")]
        for i in range(5):
            nodes.append(node_data(f"/site/p{i}", f"Page {i}", menu_item=True))
        repository = ContentRepository.from_dict({"site": "/site", "nodes": nodes})

        builder = MenuTreeBuilder(repository.portal(None), page_size=3)

        assert _paths(builder.get_menu_tree()) == ["/site/p0", "/site/p1", "/site/p2"]


class TestMenuEntry:
    """Tests for MenuEntry."""

    def test_to_dict(self) -> None:
        """Convert entries to the camelCase JSON shape."""
        child = MenuEntry(
            display_name="Bravo",
            menu_name=None,
            path="/site/a/b",
            name="b",
            id="site-a-b",
            type="base:folder",
            is_active=True,
        )
        entry = MenuEntry(
            display_name="Alpha",
            menu_name="A",
            path="/site/a",
            name="a",
            id="site-a",
            type="base:folder",
            in_path=True,
            children=(child,),
        )

        result = entry.to_dict()

        assert result == {
            "displayName": "Alpha",
            "menuName": "A",
            "path": "/site/a",
            "name": "a",
            "id": "site-a",
            "hasChildren": True,
            "inPath": True,
            "isActive": False,
            "newWindow": False,
            "type": "base:folder",
            "children": [
                {
                    "displayName": "Bravo",
                    "menuName": None,
                    "path": "/site/a/b",
                    "name": "b",
                    "id": "site-a-b",
                    "hasChildren": False,
                    "inPath": False,
                    "isActive": True,
                    "newWindow": False,
                    "type": "base:folder",
                    "children": [],
                },
            ],
        }
