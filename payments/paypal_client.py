"""
PayPal Client

This module talks to the PayPal REST API on behalf of the tool endpoints:
- OAuth client-credentials token acquisition, cached until shortly before expiry
- Order creation, capture and lookup (Checkout Orders v2)
- Capture refunds (Payments v2)

Every operation returns a ResultEnvelope; no exception escapes an operation.
"""

import base64
from datetime import UTC, datetime, timedelta
from typing import Any, Callable, Optional
from urllib.parse import quote

import requests
import structlog

from core.logging import BusinessEvents
from core.metrics import (
    paypal_request_latency,
    paypal_requests_total,
    paypal_token_requests_total,
)
from core.tracing import get_tracer
from payments.config import PayPalConfig
from payments.errors import PayPalAuthError
from payments.schemas import (
    AccessToken,
    ApplicationContext,
    Money,
    OrderRequest,
    PurchaseUnit,
    RefundRequest,
    ResultEnvelope,
)

DEFAULT_CURRENCY = "USD"
DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_TOKEN_MARGIN_SECONDS = 30

log = structlog.get_logger(__name__)
tracer = get_tracer(__name__)


def _path_segment(resource_id: str) -> str:
    """Encode an ID as a single path segment that cannot resolve to another endpoint."""
    # "." and ".." are dot segments and get collapsed by the HTTP stack
    if not resource_id or resource_id.strip(".") == "":
        raise ValueError(f"Invalid PayPal resource ID: {resource_id!r}")
    return quote(resource_id, safe="")


class PayPalClient:
    def __init__(
        self,
        config: PayPalConfig,
        return_url: str,
        cancel_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        token_margin_seconds: int = DEFAULT_TOKEN_MARGIN_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.config = config
        self.return_url = return_url
        self.cancel_url = cancel_url
        self.timeout = timeout
        self.token_margin = timedelta(seconds=token_margin_seconds)
        self.session = session or requests.Session()
        # (access_token, expires_at); replaced as a whole, never mutated
        self._token_cache: tuple[str, datetime] | None = None

    def _url(self, path: str) -> str:
        return f"{self.config.base_url}{path}"

    def _token(self) -> str:
        """Return a bearer token, fetching a new one only when the cached one is stale."""
        cached = self._token_cache
        if cached and datetime.now(UTC) < cached[1] - self.token_margin:
            log.debug(BusinessEvents.TOKEN_CACHE_HIT, mode=self.config.mode)
            return cached[0]

        credentials = base64.b64encode(
            f"{self.config.client_id}:{self.config.client_secret}".encode()
        ).decode()
        r = self.session.request(
            "POST",
            self._url("/v1/oauth2/token"),
            headers={
                "Authorization": f"Basic {credentials}",
                "Content-Type": "application/x-www-form-urlencoded",
            },
            data="grant_type=client_credentials",
            timeout=self.timeout,
        )
        if not 200 <= r.status_code < 300:
            paypal_token_requests_total.labels(result="failed").inc()
            log.warning(
                BusinessEvents.TOKEN_FAILED,
                mode=self.config.mode,
                status_code=r.status_code,
            )
            raise PayPalAuthError(status_code=r.status_code)

        token = AccessToken.model_validate(r.json())
        issued_at = datetime.now(UTC)
        self._token_cache = (
            token.access_token,
            issued_at + timedelta(seconds=token.expires_in),
        )
        paypal_token_requests_total.labels(result="issued").inc()
        log.info(
            BusinessEvents.TOKEN_FETCHED,
            mode=self.config.mode,
            expires_in=token.expires_in,
        )
        return token.access_token

    def clear_token_cache(self) -> None:
        self._token_cache = None

    def _call(
        self,
        operation: str,
        failure_prefix: str,
        method: str,
        path_template: str,
        *path_ids: str,
        build_body: Optional[Callable[[], dict[str, Any]]] = None,
    ) -> ResultEnvelope:
        with tracer.start_as_current_span(f"paypal.{operation}") as span:
            span.set_attribute("paypal.environment", self.config.environment)
            with paypal_request_latency.labels(operation=operation).time():
                try:
                    path = path_template.format(*(_path_segment(i) for i in path_ids))
                    body = build_body() if build_body else None
                    token = self._token()
                    log.info(
                        BusinessEvents.PAYPAL_REQUEST,
                        operation=operation,
                        method=method,
                        path=path,
                    )
                    response = self.session.request(
                        method,
                        self._url(path),
                        headers={
                            "Authorization": f"Bearer {token}",
                            "Content-Type": "application/json",
                        },
                        json=body,
                        timeout=self.timeout,
                    )
                    data = response.json()
                except Exception as e:
                    span.record_exception(e)
                    paypal_requests_total.labels(
                        operation=operation, outcome="exception"
                    ).inc()
                    log.error(
                        BusinessEvents.PAYPAL_FAILURE,
                        operation=operation,
                        error=str(e),
                        error_type=type(e).__name__,
                    )
                    return ResultEnvelope(success=False, error=f"{failure_prefix}: {e}")

            success = 200 <= response.status_code < 300
            span.set_attribute("http.status_code", response.status_code)
            paypal_requests_total.labels(
                operation=operation, outcome="success" if success else "paypal_error"
            ).inc()
            log.info(
                BusinessEvents.PAYPAL_RESPONSE,
                operation=operation,
                status_code=response.status_code,
                success=success,
                paypal_status=data.get("status") if isinstance(data, dict) else None,
            )
            return ResultEnvelope(success=success, data=data)

    def create_order(
        self,
        amount: str,
        currency: str = DEFAULT_CURRENCY,
        description: Optional[str] = None,
    ) -> ResultEnvelope:
        """
        Create a CAPTURE order for the given amount.

        Args:
            amount: Payment amount as a decimal string, e.g. "10.00"
            currency: ISO 4217 currency code
            description: Optional purchase unit description

        Returns:
            Envelope whose data is the created order, including approval links
        """

        def build_body():
            return OrderRequest(
                intent="CAPTURE",
                purchase_units=[
                    PurchaseUnit(
                        amount=Money(
                            currency_code=currency or DEFAULT_CURRENCY, value=amount
                        ),
                        description=description,
                    )
                ],
                application_context=ApplicationContext(
                    return_url=self.return_url,
                    cancel_url=self.cancel_url,
                    user_action="PAY_NOW",
                ),
            ).to_body()

        return self._call(
            "create_order",
            "Failed to create PayPal payment",
            "POST",
            "/v2/checkout/orders",
            build_body=build_body,
        )

    def capture_order(self, order_id: str) -> ResultEnvelope:
        """Capture an approved order; data carries the capture status and amount."""
        return self._call(
            "capture_order",
            "Failed to capture PayPal payment",
            "POST",
            "/v2/checkout/orders/{}/capture",
            order_id,
        )

    def refund_capture(
        self,
        capture_id: str,
        amount: Optional[str] = None,
        currency: str = DEFAULT_CURRENCY,
        note: Optional[str] = None,
        *,
        invoice_id: Optional[str] = None,
    ) -> ResultEnvelope:
        """
        Refund a captured payment.

        Without an amount the full captured amount is refunded, and currency
        is ignored.
        """

        def build_body():
            return RefundRequest(
                amount=(
                    Money(currency_code=currency or DEFAULT_CURRENCY, value=amount)
                    if amount
                    else None
                ),
                invoice_id=invoice_id or None,
                note_to_payer=note or None,
            ).to_body()

        return self._call(
            "refund_capture",
            "Failed to process refund",
            "POST",
            "/v2/payments/captures/{}/refund",
            capture_id,
            build_body=build_body,
        )

    def get_order(self, order_id: str) -> ResultEnvelope:
        return self._call(
            "get_order",
            "Failed to get order details",
            "GET",
            "/v2/checkout/orders/{}",
            order_id,
        )
