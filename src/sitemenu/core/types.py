"""Core type definitions."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, NewType

# Absolute slash-delimited content path (e.g., "/mysite/about/team")
ContentPath = NewType("ContentPath", str)

SITE_TYPE = "portal:site"


@dataclass(frozen=True)
class ContentNode:
    """Content node as supplied by the content backend."""

    id: str
    path: ContentPath
    name: str
    display_name: str
    type: str = "base:folder"
    extension_data: Mapping[str, Any] | None = None

    @property
    def is_site(self) -> bool:
        """Whether this node is a site root."""
        return self.type == SITE_TYPE
