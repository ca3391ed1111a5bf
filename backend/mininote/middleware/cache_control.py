"""
MiniNote Backend - Cache Suppression Middleware
================================================

What:  Adds no-cache headers to every response.
Why:   A note can change at any moment; a cached copy in a browser or an
       intermediate proxy would show stale or deleted content.

Headers:
    Cache-Control: no-cache, no-store, must-revalidate
    Pragma: no-cache
    Expires: 0
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


class NoCacheMiddleware(BaseHTTPMiddleware):
    """Overwrites any caching headers set by route handlers."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers.update(NO_CACHE_HEADERS)
        return response
