"""Shortlink generation, the inverse of redirect resolution.

A resource's shortlink is ``{base}/{type prefix}/{base 60 id}``. The base
comes from HUM_SHORTLINK_BASE, then the ``shortlink_base`` setting, then
the site's home URL, and is always filtered through the ``shortlink_base``
hook and used without a trailing slash.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.config import Settings
from core.hooks import HookRegistry
from repositories.resource_repository import ResourceStore, resolve_resource
from schemas import Resource, ResourceRef, ShortlinkContext
from services import base60
from services.classifier_service import TypeClassifier


@dataclass(frozen=True)
class RequestContext:
    """What the host knows about the request a "query" shortlink is for."""

    is_front_page: bool = False
    queried_resource_id: int | None = None


@dataclass(frozen=True)
class Shortlink:
    resource_id: int
    type_prefix: str | None
    short_code: str | None
    url: str


class ShortlinkGenerator:
    def __init__(
        self,
        store: ResourceStore,
        hooks: HookRegistry,
        classifier: TypeClassifier,
        settings: Settings,
    ) -> None:
        self._store = store
        self._hooks = hooks
        self._classifier = classifier
        self._settings = settings

    def base_url(self) -> str:
        base = self._hooks.apply(
            "shortlink_base", self._settings.configured_shortlink_base
        )
        return base.rstrip("/")

    def front_page(self) -> Shortlink:
        return Shortlink(
            resource_id=0, type_prefix=None, short_code=None, url=f"{self.base_url()}/"
        )

    def for_resource(self, resource: Resource) -> Shortlink:
        """Shortlink for a known resource.

        Raises:
            UnclassifiableResourceError: see TypeClassifier.classify.
        """
        type_prefix = self._classifier.classify(resource)
        short_code = base60.encode(resource.id)
        return Shortlink(
            resource_id=resource.id,
            type_prefix=type_prefix,
            short_code=short_code,
            url=f"{self.base_url()}/{type_prefix}/{short_code}",
        )

    def compute_shortlink(
        self,
        default_link: str | None,
        resource_ref: ResourceRef | None,
        context: ShortlinkContext | str,
        allow_slugs: bool = False,
        request: RequestContext | None = None,
    ) -> str | None:
        """Shortlink for the current request or a given resource.

        Returns ``default_link`` when there is nothing to shorten (an unknown
        resource, or a query context that is neither the front page nor a
        single resource). ``allow_slugs`` is accepted for callers that pass
        it and has no effect.
        """
        context = ShortlinkContext(context)
        resource: Resource | None = None

        if context is ShortlinkContext.QUERY:
            request = request or RequestContext()
            if request.is_front_page:
                return self.front_page().url
            if request.queried_resource_id:
                resource = self._store.get_resource(request.queried_resource_id)
        elif resource_ref is not None:
            resource = resolve_resource(self._store, resource_ref)

        if resource is None or not resource.id:
            return default_link
        return self.for_resource(resource).url
