"""404 handler that gives legacy shortlinks one last chance.

The path-resolution callable is injected at construction time so ``core``
never imports from ``services``.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from fastapi import Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.concurrency import run_in_threadpool

from core.wide_event import set_wide_event_fields

logger = logging.getLogger(__name__)

# JSON endpoints report their own 404s; only page-style paths are retried
_SKIP_PREFIXES = ("/api/",)
_RETRY_METHODS = frozenset({"GET", "HEAD"})

NotFoundHandler = Callable[[Request, Exception], Awaitable[Response]]


def legacy_redirect_handler(
    resolver: Callable[[str], str | None] | None = None,
) -> NotFoundHandler:
    """Build the app-wide 404 handler.

    Args:
        resolver: A callable ``(path: str) -> str | None`` that receives the
            request path without its leading slash and returns a permanent
            redirect target, or ``None`` to keep the 404.
    """
    resolve = resolver or (lambda path: None)

    async def handle_404(request: Request, exc: Exception) -> Response:
        path = request.url.path
        target: str | None = None

        # Includes short paths the dispatcher could not resolve
        if request.method in _RETRY_METHODS and not path.startswith(_SKIP_PREFIXES):
            try:
                target = await run_in_threadpool(resolve, path.lstrip("/"))
            except Exception:
                logger.exception("legacy_id.resolve_error", extra={"path": path})
                target = None

        if target:
            logger.info(
                "legacy_id.redirect",
                extra={"from_path": path, "to_url": target, "status_code": 301},
            )
            set_wide_event_fields(shortlink_outcome="legacy")
            return RedirectResponse(url=target, status_code=301)

        detail = getattr(exc, "detail", None) or "Not Found"
        return JSONResponse(status_code=404, content={"detail": detail})

    return handle_404
