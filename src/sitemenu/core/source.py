"""Content source contract and in-memory content repository.

The navigation builders only read from a ``ContentSource``. The
``ContentRepository`` in this module is a loaded content tree with path
and id indexes; its ``portal()`` method scopes it to one request by fixing
the node that is currently being rendered.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from sitemenu.core.types import SITE_TYPE, ContentNode, ContentPath

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 200


class ContentError(ValueError):
    """Raised when a content document is malformed."""


@dataclass(frozen=True)
class ChildrenResult:
    """One page of child nodes."""

    hits: tuple[ContentNode, ...]
    total: int


class ContentSource(Protocol):
    """Read-only view of the content backend for one request."""

    def get_current_content(self) -> ContentNode | None: ...

    def get_site(self) -> ContentNode | None: ...

    def get_by_key(self, key: str) -> ContentNode | None: ...

    def get_children(self, parent_id: str, count: int = DEFAULT_PAGE_SIZE) -> ChildrenResult: ...

    def page_url(self, path: str, url_type: str = "server") -> str: ...


def normalize_path(path: str) -> ContentPath:
    """Normalize path to have a leading slash and no trailing slash."""
    stripped = path.strip().strip("/")
    return ContentPath(f"/{stripped}")


def parent_path(path: str) -> ContentPath | None:
    """Return the parent of a content path, None for the root path."""
    normalized = normalize_path(path)
    if normalized == "/":
        return None
    head, _, _ = normalized.rpartition("/")
    return ContentPath(head or "/")


class ContentRepository:
    """Immutable content tree with O(1) lookups by path and id.

    Children keep the order in which nodes were added.
    """

    __slots__ = ("_by_id", "_by_path", "_children", "_site_path")

    def __init__(self, nodes: list[ContentNode], site_path: str) -> None:
        """Initialize repository.

        Args:
            nodes: All content nodes, parents before or after children
            site_path: Path of the site root node

        Raises:
            ContentError: If paths or ids repeat, or the site is missing
        """
        self._by_path: dict[str, ContentNode] = {}
        self._by_id: dict[str, ContentNode] = {}
        self._children: dict[str, list[ContentNode]] = {}

        for node in nodes:
            if node.path in self._by_path:
                raise ContentError(f"Duplicate content path: {node.path}")
            if node.id in self._by_id:
                raise ContentError(f"Duplicate content id: {node.id}")
            self._by_path[node.path] = node
            self._by_id[node.id] = node

        for node in nodes:
            parent = parent_path(node.path)
            if parent is not None and parent in self._by_path:
                self._children.setdefault(parent, []).append(node)

        site = normalize_path(site_path)
        if site not in self._by_path:
            raise ContentError(f"Site not found: {site}")
        self._site_path = site

    @classmethod
    def from_dict(cls, data: object) -> ContentRepository:
        """Build a repository from a parsed content document.

        Args:
            data: Document of the form ``{"site": path, "nodes": [...]}``

        Returns:
            ContentRepository instance

        Raises:
            ContentError: If the document is malformed
        """
        if not isinstance(data, dict):
            raise ContentError("Content document must be a dictionary")

        site_path = data.get("site")
        if not isinstance(site_path, str):
            raise ContentError("site must be a string")

        raw_nodes = data.get("nodes")
        if not isinstance(raw_nodes, list):
            raise ContentError("nodes must be a list")

        nodes = [cls._parse_node(raw, site_path) for raw in raw_nodes]
        return cls(nodes, site_path)

    @classmethod
    def load(cls, path: Path) -> ContentRepository:
        """Load a repository from a JSON content document.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ContentError: If the file is not a valid content document
        """
        if not path.exists():
            raise FileNotFoundError(f"Content file not found: {path}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ContentError(f"Invalid JSON in {path}: {e}") from e
        repository = cls.from_dict(data)
        logger.info(f"Loaded {len(repository)} content nodes from {path}")
        return repository

    @classmethod
    def _parse_node(cls, raw: object, site_path: str) -> ContentNode:
        if not isinstance(raw, dict):
            raise ContentError("nodes items must be dictionaries")

        path = raw.get("path")
        if not isinstance(path, str) or not path.startswith("/"):
            raise ContentError("node path must be an absolute string path")
        path = normalize_path(path)

        node_id = raw.get("id", path)
        if not isinstance(node_id, str):
            raise ContentError(f"node id must be a string: {path}")

        name = raw.get("name", path.rsplit("/", 1)[-1])
        if not isinstance(name, str):
            raise ContentError(f"node name must be a string: {path}")

        display_name = raw.get("displayName", name)
        if not isinstance(display_name, str):
            raise ContentError(f"node displayName must be a string: {path}")

        default_type = SITE_TYPE if path == normalize_path(site_path) else "base:folder"
        node_type = raw.get("type", default_type)
        if not isinstance(node_type, str):
            raise ContentError(f"node type must be a string: {path}")

        extension_data = raw.get("x")
        if extension_data is not None and not isinstance(extension_data, dict):
            raise ContentError(f"node x must be a dictionary: {path}")

        return ContentNode(
            id=node_id,
            path=path,
            name=name,
            display_name=display_name,
            type=node_type,
            extension_data=extension_data,
        )

    def __len__(self) -> int:
        return len(self._by_path)

    @property
    def site(self) -> ContentNode:
        """Site root node."""
        return self._by_path[self._site_path]

    def get(self, key: str) -> ContentNode | None:
        """Get node by path (leading slash) or by id."""
        if not key:
            return None
        if key.startswith("/"):
            return self._by_path.get(normalize_path(key))
        return self._by_id.get(key)

    def children(self, parent_id: str, count: int = DEFAULT_PAGE_SIZE) -> ChildrenResult:
        """List children of a node, at most ``count`` of them."""
        parent = self._by_id.get(parent_id)
        if parent is None:
            return ChildrenResult(hits=(), total=0)
        children = self._children.get(parent.path, [])
        return ChildrenResult(hits=tuple(children[: max(count, 0)]), total=len(children))

    def portal(self, current_key: str | None, base_url: str = "") -> Portal:
        """Scope the repository to a request rendering ``current_key``."""
        current = self.get(current_key) if current_key else None
        return Portal(self, current, base_url)


class Portal:
    """Request-scoped ``ContentSource`` over a ``ContentRepository``."""

    __slots__ = ("_base_url", "_current", "_repository")

    def __init__(
        self,
        repository: ContentRepository,
        current: ContentNode | None,
        base_url: str = "",
    ) -> None:
        self._repository = repository
        self._current = current
        self._base_url = base_url.rstrip("/")

    def get_current_content(self) -> ContentNode | None:
        return self._current

    def get_site(self) -> ContentNode | None:
        return self._repository.site

    def get_by_key(self, key: str) -> ContentNode | None:
        return self._repository.get(key)

    def get_children(self, parent_id: str, count: int = DEFAULT_PAGE_SIZE) -> ChildrenResult:
        return self._repository.children(parent_id, count)

    def page_url(self, path: str, url_type: str = "server") -> str:
        """Build the URL of a page.

        Paths inside the site are served relative to the site root, so the
        site itself maps to ``/``.

        Args:
            path: Content path of the page
            url_type: ``"absolute"`` to prefix the base URL, ``"server"`` otherwise

        Returns:
            Page URL
        """
        site_path = self._repository.site.path
        normalized = normalize_path(path)
        if normalized == site_path:
            relative = "/"
        elif normalized.startswith(f"{site_path}/"):
            relative = normalized[len(site_path) :]
        else:
            relative = normalized

        if url_type == "absolute":
            return f"{self._base_url}{relative}"
        return relative
