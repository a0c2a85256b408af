"""Site navigation for content trees.

This package builds breadcrumb trails and menu trees from a read-only
content source.
"""

from .core.breadcrumb import BreadcrumbBuilder, BreadcrumbMenu, BreadcrumbOptions
from .core.menu import MenuEntry, MenuTreeBuilder
from .core.source import ContentRepository, ContentSource

__all__ = [
    'BreadcrumbBuilder',
    'BreadcrumbMenu',
    'BreadcrumbOptions',
    'ContentRepository',
    'ContentSource',
    'MenuEntry',
    'MenuTreeBuilder',
]
