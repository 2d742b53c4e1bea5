"""Static CORS headers for the public ``/api`` routes."""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from src.storefront.runtime.config.config_data import CORSConfig
from src.storefront.runtime.context import get_config

API_PREFIX = "/api"


def cors_headers(cors: CORSConfig) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": cors.allow_origin,
        "Access-Control-Allow-Methods": ", ".join(cors.allow_methods),
        "Access-Control-Allow-Headers": ", ".join(cors.allow_headers),
        "Access-Control-Max-Age": str(cors.max_age),
    }


class StaticCORSMiddleware(BaseHTTPMiddleware):
    """Answer preflight requests with 200 and stamp the same headers on responses.

    The headers do not depend on the request origin, so there is no per-origin
    negotiation and credentials are never allowed. Starlette's
    ``CORSMiddleware`` is not used because it echoes or rejects per origin
    and answers disallowed preflights with 400; here every ``OPTIONS`` on
    ``/api`` gets 200 with the same headers.
    """

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith(API_PREFIX):
            return await call_next(request)

        headers = cors_headers(get_config().app.cors)
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers)

        response = await call_next(request)
        for name, value in headers.items():
            response.headers.setdefault(name, value)
        return response
