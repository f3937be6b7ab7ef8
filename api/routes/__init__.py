"""API route modules."""

from routes.health_routes import router as health_router
from routes.shortlink_routes import api_router as shortlinks_api_router
from routes.shortlink_routes import redirect_router as shortlinks_redirect_router

__all__ = [
    "health_router",
    "shortlinks_api_router",
    "shortlinks_redirect_router",
]
