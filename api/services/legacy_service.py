"""Legacy post identifiers.

Before base 60 shortlinks, posts were reachable at ``/{id}`` with the
id either in decimal or in base 32. Requests that 404 everywhere else are
given one more chance here: if the path reads as such an id and the
resource exists, the visitor is sent to its permalink.
"""

from __future__ import annotations

import re

from core.hooks import HookRegistry
from core.logger import get_logger
from repositories.resource_repository import ResourceStore

logger = get_logger(__name__)

_DECIMAL_RE = re.compile(r"[0-9]+")
_BASE32_DIGITS = "0123456789abcdefghijklmnopqrstuv"


def base32_to_int(value: str) -> int:
    """Lenient base 32 conversion: characters outside 0-9a-v are skipped.

    Unresolved short paths reach this too, so ``b/zzz`` reads as 11 (only
    the ``b`` is a digit) and can redirect to resource 11. Old links were
    minted with this reading; keep it.
    """
    n = 0
    for ch in value.lower():
        digit = _BASE32_DIGITS.find(ch)
        if digit >= 0:
            n = n * 32 + digit
    return n


def legacy_resource_id(path: str) -> int:
    """Default reading of a legacy path: decimal if all digits, else base 32."""
    if _DECIMAL_RE.fullmatch(path):
        return int(path)
    return base32_to_int(path)


class LegacyIdResolver:
    def __init__(self, store: ResourceStore, hooks: HookRegistry) -> None:
        self._store = store
        self._hooks = hooks

    def resolve(self, raw_path: str) -> str | None:
        """Return the redirect target for a 404 path, or ``None`` to keep the 404."""
        path = raw_path.strip("/")
        if not path:
            return None

        resource_id = self._hooks.apply("legacy_id", legacy_resource_id(path), path)
        resource = self._store.get_resource(resource_id) if resource_id else None
        if resource is None:
            return None

        permalink = self._store.get_permalink(resource.id)
        if not permalink:
            return None

        logger.debug("legacy_id.matched", path=path, resource_id=resource.id)
        return self._hooks.apply("legacy_redirect", permalink, resource)
