"""Wiring for the shortlink services.

Builds the hook registry from settings and the service objects that share
it. Done once per process (or per test) and stored on ``app.state``.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.config import Settings
from core.hooks import HookRegistry
from repositories.resource_repository import ResourceStore
from services.classifier_service import TypeClassifier
from services.dispatch_service import ShortPathDispatcher
from services.legacy_service import LegacyIdResolver
from services.resolver_service import RedirectResolver
from services.shortlink_service import ShortlinkGenerator


@dataclass(frozen=True)
class ShortlinkServices:
    store: ResourceStore
    hooks: HookRegistry
    classifier: TypeClassifier
    resolver: RedirectResolver
    dispatcher: ShortPathDispatcher
    legacy: LegacyIdResolver
    generator: ShortlinkGenerator


def register_settings_hooks(hooks: HookRegistry, settings: Settings) -> HookRegistry:
    """Register the hooks that come from configuration rather than code."""
    if settings.extra_local_types:
        extra = frozenset(settings.extra_local_types)
        hooks.add("local_types", lambda types: frozenset(types) | extra)

    for type_prefix, base_url in settings.redirect_bases.items():
        hooks.add(
            f"redirect_base_{type_prefix}",
            lambda url, base_url=base_url: url or base_url,
        )

    if settings.amazon_affiliate_id:
        affiliate_id = settings.amazon_affiliate_id
        hooks.add("affiliate_id", lambda value: value or affiliate_id)

    return hooks


def build_services(
    settings: Settings,
    store: ResourceStore,
    hooks: HookRegistry | None = None,
) -> ShortlinkServices:
    """Create the services around one store and one hook registry.

    Settings-derived hooks are appended to ``hooks``: they run after
    anything already registered there and before anything added later.
    """
    if hooks is None:
        hooks = HookRegistry()
    register_settings_hooks(hooks, settings)
    classifier = TypeClassifier(store, hooks, settings.unknown_format_policy)
    resolver = RedirectResolver(store, hooks)
    return ShortlinkServices(
        store=store,
        hooks=hooks,
        classifier=classifier,
        resolver=resolver,
        dispatcher=ShortPathDispatcher(resolver),
        legacy=LegacyIdResolver(store, hooks),
        generator=ShortlinkGenerator(store, hooks, classifier, settings),
    )
