"""Per-request context for the canonical ``request.completed`` log line.

RequestTimingMiddleware creates the dict when a request starts and logs it
when the response finishes. Anything in between (dispatcher, legacy
fallback, shortlink API) can attach fields describing what it did.

Usage:
    from core.wide_event import set_wide_event_fields

    set_wide_event_fields(shortlink_type="b", shortlink_outcome="local")
"""

from contextvars import ContextVar
from typing import Any

_wide_event: ContextVar[dict[str, Any]] = ContextVar("wide_event")


def init_wide_event() -> dict[str, Any]:
    """Start a fresh wide event for the current context."""
    event: dict[str, Any] = {}
    _wide_event.set(event)
    return event


def get_wide_event() -> dict[str, Any]:
    """Get the current wide event dict. Returns empty dict if not initialized."""
    try:
        return _wide_event.get()
    except LookupError:
        return {}


def set_wide_event_fields(**kwargs: Any) -> None:
    """Attach fields to the current wide event.

    No-op outside a request (CLI, tests without middleware).
    """
    event = get_wide_event()
    if event:
        event.update(kwargs)


def clear_wide_event() -> None:
    _wide_event.set({})
