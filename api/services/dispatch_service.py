"""Turn a matched short path into a redirect destination."""

from __future__ import annotations

import re
from dataclasses import dataclass

from core.logger import get_logger
from core.wide_event import set_wide_event_fields
from services.resolver_service import RedirectResolver, split_path

logger = get_logger(__name__)

# Punctuation that sticks to URLs pasted from prose: "see x.am/b/4c2)."
_TRAILING_PUNCTUATION_RE = re.compile(r"[.,)]+\Z")


@dataclass(frozen=True)
class ShortPath:
    type_prefix: str
    short_id: str | None

    @classmethod
    def parse(cls, raw_path: str) -> "ShortPath":
        type_prefix, short_id = split_path(raw_path)
        return cls(type_prefix=type_prefix, short_id=short_id)


def strip_trailing_punctuation(short_id: str) -> str:
    return _TRAILING_PUNCTUATION_RE.sub("", short_id)


class ShortPathDispatcher:
    """Resolves ``{type}/{id}`` paths, retrying once without trailing punctuation.

    Returns the destination URL or ``None``; turning ``None`` into a 404 is
    left to the caller.
    """

    def __init__(self, resolver: RedirectResolver) -> None:
        self._resolver = resolver

    def dispatch(self, raw_path: str) -> str | None:
        path = ShortPath.parse(raw_path)
        set_wide_event_fields(shortlink_type=path.type_prefix)

        url = self._resolver.resolve(path.type_prefix, path.short_id)

        if url is None and path.short_id is not None:
            clean_id = strip_trailing_punctuation(path.short_id)
            if clean_id != path.short_id:
                url = self._resolver.resolve(path.type_prefix, clean_id)
                set_wide_event_fields(shortlink_punctuation_retry=True)

        if url is None:
            logger.info(
                "shortlink.unresolved",
                type_prefix=path.type_prefix,
                short_id=path.short_id,
            )
            set_wide_event_fields(shortlink_outcome="unresolved")
            return None

        set_wide_event_fields(shortlink_outcome="redirect")
        return url
