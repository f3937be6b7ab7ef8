"""Repository layer for resource lookups.

Repositories hide where resources come from, keeping services focused on
shortlink rules and easy to test against an in-memory store.
"""

from repositories.resource_repository import (
    CatalogLoadError,
    CatalogResourceStore,
    ResourceStore,
    load_catalog,
    resolve_resource,
)

__all__ = [
    "CatalogLoadError",
    "CatalogResourceStore",
    "ResourceStore",
    "load_catalog",
    "resolve_resource",
]
