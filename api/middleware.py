import os

import structlog
from fastapi import Request, Response

from core.logging import BusinessEvents

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

# Query parameters that identify the buyer are not logged verbatim
_REDACTED_PARAMS = {"PayerID"}


async def log_api_entry(request: Request, call_next):
    """Middleware to log API entries with request details"""
    # Get a fresh logger each time to ensure test configurations are respected
    log = structlog.get_logger(__name__)

    demo_mode = os.getenv("DEMO_MODE", "").lower() in {"1", "true", "yes"}
    query_params = None
    if not demo_mode:
        query_params = {
            key: ("***" if key in _REDACTED_PARAMS else value)
            for key, value in request.query_params.items()
        }
    log.info(
        BusinessEvents.API_ENTRY,
        method=request.method,
        path=request.url.path,
        client_host=request.client.host if request.client else None,
        query_params=query_params,
    )
    return await call_next(request)


async def add_cors_headers(request: Request, call_next):
    """Answer preflight requests and stamp the CORS headers on every response."""
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response
