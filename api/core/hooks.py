"""Named filter chains for extending shortlink behaviour.

A hook is an ordered list of callables registered under one name.
Applying a hook threads a value through every callable in registration
order: each receives the current value plus any extra arguments and
returns the (possibly replaced) value. With nothing registered the value
passes through unchanged.

The registry is built once at startup and handed to the services that
consult it; request handling only ever reads from it.

Usage:
    hooks = HookRegistry()
    hooks.add("redirect_base_w", lambda url: "https://wiki.example.com/")

    @hooks.on("type_prefix")
    def recipes_get_r(prefix, resource):
        return "r" if resource.type == "recipe" else prefix

    hooks.apply("redirect_base_w", None)  # "https://wiki.example.com/"
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

Filter = Callable[..., Any]


class HookRegistry:
    """Append-only mapping of hook name -> ordered filters."""

    def __init__(self) -> None:
        self._filters: dict[str, list[Filter]] = {}

    def add(self, name: str, func: Filter) -> Filter:
        self._filters.setdefault(name, []).append(func)
        return func

    def on(self, name: str) -> Callable[[Filter], Filter]:
        """Decorator form of :meth:`add`."""

        def decorator(func: Filter) -> Filter:
            return self.add(name, func)

        return decorator

    def has(self, name: str) -> bool:
        return bool(self._filters.get(name))

    def apply(self, name: str, value: Any, *args: Any) -> Any:
        for func in self._filters.get(name, ()):
            value = func(value, *args)
        return value

    def __len__(self) -> int:
        return sum(len(funcs) for funcs in self._filters.values())

    def __bool__(self) -> bool:
        # An empty registry is still a registry hosts can add to
        return True
