"""Read-only access to the host's resources.

The shortlink services only need a handful of lookups, described by the
``ResourceStore`` protocol. ``CatalogResourceStore`` implements them over
a JSON catalog loaded once at startup; a host with its own storage can
pass any object that satisfies the protocol instead.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from core.logger import get_logger
from schemas import Resource, ResourceCatalog, ResourceRef

logger = get_logger(__name__)


class CatalogLoadError(Exception):
    """Raised when the resource catalog file cannot be read or parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load resource catalog {path}: {reason}")


class ResourceStore(Protocol):
    def get_resource(self, resource_id: int) -> Resource | None: ...

    def get_permalink(self, resource_id: int) -> str | None: ...

    def get_mime_type(self, resource_id: int) -> str: ...

    def get_format(self, resource: Resource) -> str: ...

    def get_resource_type(self, resource: Resource) -> str: ...


class CatalogResourceStore:
    """In-memory resource store keyed by resource id."""

    def __init__(self, resources: Iterable[Resource] = ()) -> None:
        self._resources: dict[int, Resource] = {r.id: r for r in resources}

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._resources.values())

    def get_resource(self, resource_id: int) -> Resource | None:
        # 0 is the "no resource" sentinel and never names a real record
        if not resource_id:
            return None
        return self._resources.get(resource_id)

    def get_permalink(self, resource_id: int) -> str | None:
        resource = self.get_resource(resource_id)
        if resource is None or not resource.permalink:
            return None
        return resource.permalink

    def get_mime_type(self, resource_id: int) -> str:
        resource = self.get_resource(resource_id)
        return resource.mime_type if resource else ""

    def get_format(self, resource: Resource) -> str:
        return resource.format

    def get_resource_type(self, resource: Resource) -> str:
        return resource.type


def resolve_resource(store: ResourceStore, ref: ResourceRef) -> Resource | None:
    """Normalise an id-or-record argument to a record (``None`` if unknown)."""
    if isinstance(ref, Resource):
        return ref
    return store.get_resource(ref)


def load_catalog(path: Path) -> CatalogResourceStore:
    """Load a catalog file of the form ``{"resources": [{...}, ...]}``."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogLoadError(path, str(e)) from e

    try:
        catalog = ResourceCatalog.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        raise CatalogLoadError(path, str(e)) from e

    store = CatalogResourceStore(catalog.resources)
    if len(store) != len(catalog.resources):
        logger.warning(
            "catalog.duplicate_ids",
            path=str(path),
            entries=len(catalog.resources),
            unique=len(store),
        )
    logger.info("catalog.loaded", path=str(path), resources=len(store))
    return store
