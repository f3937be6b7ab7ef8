"""Unit tests for core.hooks.HookRegistry."""

import pytest

from core.hooks import HookRegistry


@pytest.mark.unit
class TestHookRegistry:
    def test_apply_without_filters_returns_value(self):
        assert HookRegistry().apply("redirect_b", "http://example.com/", "4c2") == (
            "http://example.com/"
        )

    def test_apply_none_passes_through(self):
        assert HookRegistry().apply("redirect_base_w", None) is None

    def test_filters_run_in_registration_order(self):
        hooks = HookRegistry()
        hooks.add("name", lambda v: v + "a")
        hooks.add("name", lambda v: v + "b")
        hooks.add("name", lambda v: v + "c")
        assert hooks.apply("name", "") == "abc"

    def test_extra_args_passed_to_every_filter(self):
        seen = []
        hooks = HookRegistry()
        hooks.add("redirect_g", lambda url, short_id: seen.append(short_id) or url)
        hooks.add("redirect_g", lambda url, short_id: seen.append(short_id) or url)

        hooks.apply("redirect_g", None, "willnorris")

        assert seen == ["willnorris", "willnorris"]

    def test_names_are_independent(self):
        hooks = HookRegistry()
        hooks.add("redirect_base_w", lambda url: "http://wiki.example.com/")
        assert hooks.apply("redirect_base_x", None) is None

    def test_decorator_registers_and_returns_function(self):
        hooks = HookRegistry()

        @hooks.on("type_prefix")
        def always_r(prefix, resource):
            return "r"

        assert hooks.apply("type_prefix", "b", None) == "r"
        assert always_r("b", None) == "r"

    def test_has(self):
        hooks = HookRegistry()
        assert not hooks.has("affiliate_id")
        hooks.add("affiliate_id", lambda v: "xyz-20")
        assert hooks.has("affiliate_id")

    def test_empty_registry_is_truthy(self):
        hooks = HookRegistry()
        assert len(hooks) == 0
        assert hooks

    def test_len_counts_filters(self):
        hooks = HookRegistry()
        hooks.add("a", lambda v: v)
        hooks.add("a", lambda v: v)
        hooks.add("b", lambda v: v)
        assert len(hooks) == 3

    def test_filter_exceptions_propagate(self):
        hooks = HookRegistry()

        def broken(value, path):
            raise RuntimeError("bad hook")

        hooks.add("legacy_id", broken)
        with pytest.raises(RuntimeError, match="bad hook"):
            hooks.apply("legacy_id", 1, "1")
