"""API package."""

from storefront.api.admin_routes import admin_router
from storefront.api.middleware import LoggingMiddleware, RateLimitMiddleware
from storefront.api.routes import router

__all__ = [
    "router",
    "admin_router",
    "LoggingMiddleware",
    "RateLimitMiddleware",
]
