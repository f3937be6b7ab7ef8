"""Redirect resolution for shortlinks.

``RedirectResolver.resolve(type_prefix, short_id)`` tries, in order:

1. local resources: for local type prefixes the id is a base 60 resource
   id and the destination is that resource's permalink
2. simple redirect rules: ``redirect_base_{type}`` supplies a base URL and
   the raw id is appended to it
3. ``/i/`` item links: ISBN/ASIN sub-paths go to the Amazon product page

The first step that produces a URL wins. Whatever the steps came up with
(possibly nothing) then passes through the ``redirect_{type}`` hook, whose
output is the final answer. ``None`` means unresolved.
"""

from __future__ import annotations

from collections.abc import Callable

from core.hooks import HookRegistry
from core.logger import get_logger
from repositories.resource_repository import ResourceStore
from services import base60

logger = get_logger(__name__)

DEFAULT_LOCAL_TYPES = frozenset({"b", "t", "a", "p"})

ITEM_TYPE = "i"
AMAZON_SUBTYPES = frozenset({"a", "asin", "i", "isbn"})

AMAZON_PRODUCT_URL = "http://www.amazon.com/dp/{item_id}"
AMAZON_AFFILIATE_URL = (
    "http://www.amazon.com/gp/redirect.html?ie=UTF8"
    "&location=http%3A%2F%2Fwww.amazon.com%2Fdp%2F{item_id}"
    "&tag={affiliate_id}&linkCode=ur2&camp=1789&creative=9325"
)

ResolverStep = Callable[[str, str | None], str | None]


def trailingslashit(url: str) -> str:
    return url.rstrip("/") + "/"


def split_path(path: str | None) -> tuple[str, str | None]:
    """Split on the first ``/``; the second half is ``None`` without one."""
    head, sep, tail = (path or "").partition("/")
    return head, (tail if sep else None)


def amazon_url(item_id: str, affiliate_id: str | None = None) -> str:
    if affiliate_id:
        return AMAZON_AFFILIATE_URL.format(item_id=item_id, affiliate_id=affiliate_id)
    return AMAZON_PRODUCT_URL.format(item_id=item_id)


class RedirectResolver:
    def __init__(self, store: ResourceStore, hooks: HookRegistry) -> None:
        self._store = store
        self._hooks = hooks
        self._steps: tuple[tuple[str, ResolverStep], ...] = (
            ("local", self._resolve_local),
            ("redirect_base", self._resolve_base_url),
            ("item", self._resolve_item),
        )

    def local_types(self) -> frozenset[str]:
        return frozenset(self._hooks.apply("local_types", DEFAULT_LOCAL_TYPES))

    def resolve(self, type_prefix: str, short_id: str | None) -> str | None:
        url: str | None = None
        matched_by = None
        for name, step in self._steps:
            url = step(type_prefix, short_id)
            if url:
                matched_by = name
                break

        final = self._hooks.apply(f"redirect_{type_prefix}", url or None, short_id)
        if final and final != url:
            matched_by = f"redirect_{type_prefix}"

        logger.debug(
            "shortlink.resolve",
            type_prefix=type_prefix,
            short_id=short_id,
            matched_by=matched_by if final else None,
        )
        return final or None

    def _resolve_local(self, type_prefix: str, short_id: str | None) -> str | None:
        if type_prefix not in self.local_types():
            return None
        return self._store.get_permalink(base60.decode(short_id))

    def _resolve_base_url(self, type_prefix: str, short_id: str | None) -> str | None:
        base = self._hooks.apply(f"redirect_base_{type_prefix}", None)
        if not base:
            return None
        return trailingslashit(base) + (short_id or "")

    def _resolve_item(self, type_prefix: str, short_id: str | None) -> str | None:
        """Handle ``/i/{subtype}/{id}`` links (ISBN and ASIN go to Amazon)."""
        if type_prefix != ITEM_TYPE:
            return None

        subtype, item_id = split_path(short_id)
        url = None
        if subtype in AMAZON_SUBTYPES:
            affiliate_id = self._hooks.apply("affiliate_id", None)
            url = amazon_url(item_id or "", affiliate_id)
        return self._hooks.apply(f"redirect_i_{subtype}", url, item_id)
