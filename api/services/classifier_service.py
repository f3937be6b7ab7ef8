"""Type prefix classification for shortlinks.

Every shortlink starts with a one-letter namespace describing what it
points at:

    b  blog post (default)
    t  short-form text: asides, status updates, links
    a  audio and video
    p  photos, galleries, images

Attachments are classified by the coarse kind of their MIME type, other
resources by their content format. The ``type_prefix`` hook sees every
result and may swap in a prefix of its own.
"""

from __future__ import annotations

from typing import Literal

from core.hooks import HookRegistry
from repositories.resource_repository import ResourceStore, resolve_resource
from schemas import Resource, ResourceRef

DEFAULT_PREFIX = "b"

FORMAT_PREFIXES: dict[str, str] = {
    "aside": "t",
    "status": "t",
    "link": "t",
    "audio": "a",
    "video": "a",
    "photo": "p",
    "gallery": "p",
    "image": "p",
}

MEDIA_PREFIXES: dict[str, str] = {
    "audio": "a",
    "video": "a",
    "image": "p",
}

# Formats that legitimately mean "ordinary post"
_STANDARD_FORMATS = frozenset({"", "standard"})

UnknownFormatPolicy = Literal["default", "error"]


class UnclassifiableResourceError(Exception):
    """Raised under the "error" policy when nothing maps to a prefix."""

    def __init__(self, resource_id: int, kind: str):
        self.resource_id = resource_id
        self.kind = kind
        super().__init__(f"No type prefix for resource {resource_id} ({kind!r})")


class TypeClassifier:
    def __init__(
        self,
        store: ResourceStore,
        hooks: HookRegistry,
        unknown_format_policy: UnknownFormatPolicy = "default",
    ) -> None:
        self._store = store
        self._hooks = hooks
        self._policy = unknown_format_policy

    def classify(self, ref: ResourceRef) -> str:
        """Return the type prefix for a resource or resource id.

        Raises:
            UnclassifiableResourceError: policy is "error" and the resource's
                format or media kind has no prefix.
        """
        resource = resolve_resource(self._store, ref)
        if resource is None:
            return self._hooks.apply("type_prefix", DEFAULT_PREFIX, ref)

        prefix = self._classify_record(resource)
        return self._hooks.apply("type_prefix", prefix, resource)

    def _classify_record(self, resource: Resource) -> str:
        if self._store.get_resource_type(resource) == "attachment":
            mime_type = self._store.get_mime_type(resource.id)
            kind = mime_type.partition("/")[0].lower()
            prefix = MEDIA_PREFIXES.get(kind)
            if prefix is None:
                return self._unknown(resource, mime_type)
            return prefix

        post_format = self._store.get_format(resource).lower()
        prefix = FORMAT_PREFIXES.get(post_format)
        if prefix is not None:
            return prefix
        if post_format in _STANDARD_FORMATS:
            return DEFAULT_PREFIX
        return self._unknown(resource, post_format)

    def _unknown(self, resource: Resource, kind: str) -> str:
        if self._policy == "error":
            raise UnclassifiableResourceError(resource.id, kind)
        return DEFAULT_PREFIX
