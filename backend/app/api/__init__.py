"""API package."""

from app.api.middleware import RateLimitMiddleware, RequestLoggingMiddleware
from app.api.routes import router

__all__ = [
    "router",
    "RequestLoggingMiddleware",
    "RateLimitMiddleware",
]
