"""
Prometheus metrics instrumentation for the PayPal tools service.

This module sets up FastAPI instrumentation to expose metrics in Prometheus format
at the /metrics endpoint, plus counters for the outbound PayPal traffic.
"""

from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

# Outbound PayPal operations, labelled by outcome (success, paypal_error, exception)
paypal_requests_total = Counter(
    "paypal_tools_requests_total",
    "Total number of PayPal operations performed",
    ["operation", "outcome"],
)

paypal_token_requests_total = Counter(
    "paypal_tools_token_requests_total",
    "Total number of OAuth token requests sent to PayPal",
    ["result"],
)

paypal_request_latency = Histogram(
    "paypal_tools_request_latency_seconds",
    "Time taken by a single PayPal operation, token included",
    ["operation"],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)


def init_metrics(app):
    """
    Initialize Prometheus metrics instrumentation for the FastAPI app.

    Args:
        app: FastAPI application instance

    Returns:
        Instrumentator instance
    """
    inst = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        excluded_handlers=["/metrics"],
    )
    inst.instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)
    return inst
