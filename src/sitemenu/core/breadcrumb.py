"""Breadcrumb trail builder.

Walks the path of the current node up to the site root and turns every
existing ancestor into a breadcrumb entry, optionally preceded by a home
entry for the site itself.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from sitemenu.core.source import ContentSource, parent_path

logger = logging.getLogger(__name__)

ABSOLUTE_URL = "absolute"


@dataclass(frozen=True)
class BreadcrumbEntry:
    """Breadcrumb navigation item."""

    text: str
    url: str | None = None
    active: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {"text": self.text, "active": self.active}
        if self.url is not None:
            result["url"] = self.url
        return result


@dataclass(frozen=True)
class BreadcrumbMenu:
    """Breadcrumb entries ordered from home to the current page."""

    divider: str | None = None
    items: tuple[BreadcrumbEntry, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "divider": self.divider,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True)
class BreadcrumbOptions:
    """Breadcrumb settings."""

    link_active_item: bool = False
    show_homepage: bool = True
    homepage_title: str | None = None
    divider_html: str | None = None

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any] | None) -> BreadcrumbOptions:
        """Build options from camelCase template parameters.

        A key that is present always wins over the default, so
        ``{"showHomepage": False}`` disables the home entry. The flags must
        be real booleans; any other value, such as the string ``"false"``,
        falls back to the default. Empty strings for the title and divider
        count as not set.

        Args:
            params: Mapping with ``linkActiveItem``, ``showHomepage``,
                ``homepageTitle`` and ``dividerHtml`` keys, all optional

        Returns:
            BreadcrumbOptions instance
        """
        if not params:
            return cls()
        defaults = cls()
        return cls(
            link_active_item=_flag(params, "linkActiveItem", defaults.link_active_item),
            show_homepage=_flag(params, "showHomepage", defaults.show_homepage),
            homepage_title=params.get("homepageTitle") or None,
            divider_html=params.get("dividerHtml") or None,
        )


def _flag(params: Mapping[str, Any], key: str, default: bool) -> bool:
    value = params.get(key)
    return value if isinstance(value, bool) else default


class BreadcrumbBuilder:
    """Builds breadcrumb trails from a content source."""

    def __init__(self, source: ContentSource) -> None:
        self._source = source

    def build(self, options: BreadcrumbOptions | None = None) -> BreadcrumbMenu:
        """Build the breadcrumb trail of the current node.

        Ancestors that can't be found in the content source are skipped.

        Args:
            options: Breadcrumb settings (default: BreadcrumbOptions())

        Returns:
            BreadcrumbMenu with the home entry first and the current node last
        """
        if options is None:
            options = BreadcrumbOptions()

        content = self._source.get_current_content()
        site = self._source.get_site()
        if content is None or site is None:
            logger.warning("No current content or site, returning empty breadcrumb")
            return BreadcrumbMenu(divider=options.divider_html)

        # Collected deepest first, reversed at the end
        items: list[BreadcrumbEntry] = []

        if content.path != site.path:
            for path in self._ancestor_paths(content.path, site.path):
                node = self._source.get_by_key(path)
                if node is None:
                    logger.debug(f"Skipping breadcrumb for missing node {path}")
                    continue

                url = self._source.page_url(node.path, ABSOLUTE_URL)
                if node.path == content.path:
                    items.append(
                        BreadcrumbEntry(
                            text=node.display_name,
                            url=url if options.link_active_item else None,
                            active=True,
                        ),
                    )
                else:
                    items.append(BreadcrumbEntry(text=node.display_name, url=url))

        if options.show_homepage:
            items.append(
                BreadcrumbEntry(
                    text=options.homepage_title or site.display_name,
                    url=self._source.page_url(site.path, ABSOLUTE_URL),
                    active=content.path == site.path,
                ),
            )

        items.reverse()
        return BreadcrumbMenu(divider=options.divider_html, items=tuple(items))

    def _ancestor_paths(self, path: str, site_path: str) -> list[str]:
        """List a path and its ancestors below the site, deepest first.

        Stops before the site path. Top-level paths are only yielded for a
        site at the root path, otherwise the top-level segment is the one
        holding the site.
        """
        paths: list[str] = []
        current: str | None = path
        while current is not None and current != site_path:
            parent = parent_path(current)
            if parent is None or (parent == "/" and site_path != "/"):
                break
            paths.append(current)
            current = parent
        return paths
