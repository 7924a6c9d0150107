import logging
import os
import sys

import structlog
from opentelemetry.instrumentation.logging import LoggingInstrumentor


def get_log_level():
    """Get log level from environment or default to INFO"""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_renderer():
    """Get log renderer based on environment"""
    env = os.getenv("ENVIRONMENT", "development")
    # Use JSON format for tests and production
    if env in ["test", "production"]:
        return structlog.processors.JSONRenderer()
    # Pretty printing for local development
    return structlog.dev.ConsoleRenderer(colors=True, sort_keys=False)


def configure_logging():
    """Set up structlog + OTEL context injection."""
    shared_processors = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            get_log_renderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    env = os.getenv("ENVIRONMENT", "development")
    if env == "test":
        # In test mode, write to stdout for easier capture
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(get_log_level())

    # urllib3 logs every connection at DEBUG, including PayPal hosts
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").handlers.clear()
    logging.getLogger("uvicorn.access").handlers.clear()

    # Must run after the handlers above are in place
    if not LoggingInstrumentor().is_instrumented_by_opentelemetry:
        LoggingInstrumentor().instrument(set_logging_format=False)


class BusinessEvents:
    """Standard names for business event logs"""

    API_ENTRY = "api.request"
    TOKEN_FETCHED = "paypal.token.fetched"
    TOKEN_CACHE_HIT = "paypal.token.cache_hit"
    TOKEN_FAILED = "paypal.token.failed"
    PAYPAL_REQUEST = "paypal.request"
    PAYPAL_RESPONSE = "paypal.response"
    PAYPAL_FAILURE = "paypal.failure"
    CHECKOUT_RETURN = "checkout.return"
    CHECKOUT_ERROR = "checkout.error"
    CHECKOUT_CANCEL = "checkout.cancel"


# Configure logging when module is imported
configure_logging()
