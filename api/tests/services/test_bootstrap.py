"""Unit tests for wiring settings into hooks and services."""

import pytest

from core.config import Settings
from core.hooks import HookRegistry
from services.bootstrap import build_services, register_settings_hooks


def _settings(**overrides) -> Settings:
    return Settings(home_url="http://example.com", shortlink_base_override="", **overrides)


@pytest.mark.unit
class TestRegisterSettingsHooks:
    def test_nothing_configured_registers_nothing(self):
        assert len(register_settings_hooks(HookRegistry(), _settings())) == 0

    def test_redirect_bases(self):
        hooks = register_settings_hooks(
            HookRegistry(),
            _settings(redirect_bases={"w": "https://wiki.example.com/", "g": "https://github.com/"}),
        )
        assert hooks.apply("redirect_base_w", None) == "https://wiki.example.com/"
        assert hooks.apply("redirect_base_g", None) == "https://github.com/"

    def test_redirect_base_keeps_earlier_hook_result(self):
        hooks = HookRegistry()
        hooks.add("redirect_base_w", lambda url: "https://first.example.com/")
        register_settings_hooks(hooks, _settings(redirect_bases={"w": "https://wiki.example.com/"}))
        assert hooks.apply("redirect_base_w", None) == "https://first.example.com/"

    def test_extra_local_types(self):
        hooks = register_settings_hooks(HookRegistry(), _settings(extra_local_types=["n"]))
        assert hooks.apply("local_types", frozenset({"b"})) == frozenset({"b", "n"})

    def test_affiliate_id(self):
        hooks = register_settings_hooks(HookRegistry(), _settings(amazon_affiliate_id="xyz-20"))
        assert hooks.apply("affiliate_id", None) == "xyz-20"


@pytest.mark.unit
class TestBuildServices:
    def test_services_share_hooks_and_store(self, store):
        hooks = HookRegistry()
        services = build_services(_settings(), store, hooks)
        assert services.hooks is hooks
        assert services.store is store

    def test_hooks_added_after_build_are_consulted(self, store):
        hooks = HookRegistry()
        services = build_services(_settings(), store, hooks)

        hooks.add("redirect_base_w", lambda url: "http://wiki.example.com/")

        assert services.hooks is hooks
        assert services.dispatcher.dispatch("w/Page") == "http://wiki.example.com/Page"

    def test_creates_registry_when_missing(self, store):
        services = build_services(_settings(), store)
        assert isinstance(services.hooks, HookRegistry)

    def test_configured_redirect_base_reaches_dispatcher(self, store):
        services = build_services(
            _settings(redirect_bases={"w": "https://wiki.example.com/"}), store
        )
        assert services.dispatcher.dispatch("w/FrontPage") == "https://wiki.example.com/FrontPage"

    def test_configured_local_type_reaches_resolver(self, store):
        services = build_services(_settings(extra_local_types=["n"]), store)
        assert services.resolver.resolve("n", "23") == "http://example.com/2012/notes/"

    def test_configured_affiliate_reaches_item_links(self, store):
        services = build_services(_settings(amazon_affiliate_id="xyz-20"), store)
        assert "tag=xyz-20" in services.dispatcher.dispatch("i/asin/B000000001")

    def test_error_policy_reaches_classifier(self, store):
        from services.classifier_service import UnclassifiableResourceError

        services = build_services(_settings(unknown_format_policy="error"), store)
        quote = store.get_resource(1).model_copy(update={"format": "quote"})
        with pytest.raises(UnclassifiableResourceError):
            services.classifier.classify(quote)
