"""
PayPal Tools - Main Application Entry Point

This module initializes the FastAPI application and sets up the core routing.
It exposes a fixed set of PayPal operations as tool endpoints for agent
callers, plus the pages PayPal redirects the buyer to after checkout.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from api.middleware import add_cors_headers, log_api_entry
from api.routes import checkout_router, router
from core.dependencies import clear_settings, get_settings, init_settings
from core.logging import configure_logging
from core.metrics import init_metrics
from core.settings import Settings
from core.tracing import init_tracer

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI application startup and shutdown events."""
    # Startup
    init_settings()
    settings = get_settings()

    init_tracer(settings.OTEL_SERVICE_NAME)
    log.info(
        "app.startup",
        app_name=settings.APP_NAME,
        paypal_mode=settings.PAYPAL_MODE,
        environment=settings.ENVIRONMENT,
        tool_auth=bool(settings.SHARED_SECRET),
    )

    yield
    # Shutdown
    clear_settings()


app = FastAPI(
    title="PayPal Tools",
    description="""
    ## PayPal operations as agent tools

    ### Tools:
    - **createPaypalOrder**: create a CAPTURE order and get its approval links
    - **capturePaypalOrder**: capture an approved order
    - **refundPaypalCapture**: refund a capture, fully or partially
    - **getPayPalOrder**: look up an order's current state

    Every tool returns `{success, data?, error?}`.

    ### Checkout redirects:
    - `/success` captures the approved order and shows the outcome
    - `/cancel` confirms an abandoned checkout
    """,
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

FastAPIInstrumentor.instrument_app(app)

if get_settings().METRICS_ENABLED:
    init_metrics(app)

app.middleware("http")(log_api_entry)

# Registered last so it wraps everything, preflight included
app.middleware("http")(add_cors_headers)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    log.error("api.unhandled_error", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc)},
    )


@app.get("/")
async def root():
    """Root endpoint describing the service."""
    return {
        "name": "PayPal Tools",
        "version": "1.0.0",
        "description": "PayPal order, capture and refund operations exposed as agent tools",
        "api_documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_spec": "/openapi.json",
        },
        "endpoints": {
            "tools": "/api/v1/tools - Tool descriptors",
            "createPaypalOrder": "POST /api/v1/tools/createPaypalOrder",
            "capturePaypalOrder": "POST /api/v1/tools/capturePaypalOrder",
            "refundPaypalCapture": "POST /api/v1/tools/refundPaypalCapture",
            "getPayPalOrder": "POST /api/v1/tools/getPayPalOrder",
            "success": "/success?token={order_id} - Checkout return page",
            "cancel": "/cancel - Checkout cancel page",
            "health": "/health - Health check endpoint",
            "metrics": "/metrics - Prometheus metrics",
        },
    }


@app.get("/health")
async def health(settings: Settings = Depends(get_settings)):
    """Health check endpoint alias."""
    return await health_check(settings)


@app.get("/healthz")
async def health_check(settings: Settings = Depends(get_settings)):
    """Health check endpoint to verify API status."""
    return {
        "status": "ok",
        "app_name": settings.APP_NAME,
        "paypal_mode": settings.PAYPAL_MODE,
        "environment": settings.ENVIRONMENT,
    }


API_PREFIX = "/api/v1"

app.include_router(router, prefix=API_PREFIX)
app.include_router(checkout_router, tags=["checkout"])


def main():
    import uvicorn

    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
