"""Rendering module for presentation concerns.

Shortlink markup for page heads and feeds, and the HTTP Link header.
"""

from rendering.shortlink import render_shortlink_tag, shortlink_header

__all__ = [
    "render_shortlink_tag",
    "shortlink_header",
]
