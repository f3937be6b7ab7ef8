"""Markup advertising a page's shortlink.

The same ``<link rel="shortlink">`` line works in an HTML ``<head>`` and
inside feed entries; ``shortlink_header`` gives the equivalent HTTP
``Link`` header value.
"""

from __future__ import annotations

from markupsafe import Markup


def render_shortlink_tag(url: str) -> Markup:
    return Markup('<link rel="shortlink" href="{}" />').format(url)


def shortlink_header(url: str) -> str:
    return f"<{url}>; rel=shortlink"
