"""
Browser redirect endpoints for the PayPal checkout flow.

PayPal sends the buyer to /success (with the order ID in `token`) after
approval, or to /cancel when they abandon checkout.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, JSONResponse

from api.pages import render_cancel_page, render_capture_outcome, render_error_page
from core.dependencies import get_paypal_client
from core.logging import BusinessEvents
from payments.paypal_client import PayPalClient

log = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/success", response_class=HTMLResponse)
def payment_success(
    token: Optional[str] = None,
    payer_id: Optional[str] = Query(default=None, alias="PayerID"),
    client: PayPalClient = Depends(get_paypal_client),
):
    """Capture the approved order and show the buyer the outcome."""
    if not token:
        return JSONResponse(status_code=400, content={"error": "Missing token parameter"})

    try:
        envelope = client.capture_order(token)
        page = render_capture_outcome(token, envelope)
    except Exception as e:
        log.error(BusinessEvents.CHECKOUT_ERROR, order_id=token, error=str(e))
        return HTMLResponse(render_error_page(str(e)), status_code=500)

    log.info(
        BusinessEvents.CHECKOUT_RETURN,
        order_id=token,
        payer_present=payer_id is not None,
        captured=envelope.success,
    )
    return HTMLResponse(page)


@router.get("/cancel", response_class=HTMLResponse)
def payment_cancel(token: Optional[str] = None):
    """Tell the buyer the checkout was abandoned. Nothing is sent to PayPal."""
    log.info(BusinessEvents.CHECKOUT_CANCEL, order_id=token)
    return HTMLResponse(render_cancel_page(token))
