"""
Tool endpoints for agent callers.

Each endpoint maps one named tool onto a PayPalClient operation and returns
its ResultEnvelope. PayPal-side failures are reported inside the envelope with
HTTP 200; only malformed arguments (422) and a bad shared secret (401) are
reported through the status code.
"""

from typing import Any

from fastapi import APIRouter, Depends

from api.schemas import (
    CaptureOrderArgs,
    CreateOrderArgs,
    GetOrderArgs,
    RefundCaptureArgs,
    ToolDescriptor,
)
from api.security import require_shared_secret
from core.dependencies import get_paypal_client
from payments.paypal_client import DEFAULT_CURRENCY, PayPalClient

router = APIRouter()

TOOLS = [
    ToolDescriptor.from_args(
        "createPaypalOrder", "Create a PayPal payment order", CreateOrderArgs
    ),
    ToolDescriptor.from_args(
        "capturePaypalOrder", "Capture a PayPal payment order", CaptureOrderArgs
    ),
    ToolDescriptor.from_args(
        "refundPaypalCapture", "Refund a captured PayPal payment", RefundCaptureArgs
    ),
    ToolDescriptor.from_args(
        "getPayPalOrder", "Get details of a PayPal order", GetOrderArgs
    ),
]


@router.get("", response_model=list[ToolDescriptor])
def list_tools():
    """List the tools this service exposes, with their parameters."""
    return TOOLS


@router.post("/createPaypalOrder", dependencies=[Depends(require_shared_secret)])
def create_paypal_order(
    args: CreateOrderArgs, client: PayPalClient = Depends(get_paypal_client)
) -> dict[str, Any]:
    """
    Create a PayPal order and return it, including the buyer approval links.

    **Request Example:**
    ```json
    {"amount": "10.00", "currency": "USD", "description": "Consulting hour"}
    ```
    """
    return client.create_order(
        args.amount, args.currency or DEFAULT_CURRENCY, args.description
    ).to_dict()


@router.post("/capturePaypalOrder", dependencies=[Depends(require_shared_secret)])
def capture_paypal_order(
    args: CaptureOrderArgs, client: PayPalClient = Depends(get_paypal_client)
) -> dict[str, Any]:
    """Capture an order the buyer has approved."""
    return client.capture_order(args.order_id).to_dict()


@router.post("/refundPaypalCapture", dependencies=[Depends(require_shared_secret)])
def refund_paypal_capture(
    args: RefundCaptureArgs, client: PayPalClient = Depends(get_paypal_client)
) -> dict[str, Any]:
    """Refund a capture; omit `amount` to refund it in full."""
    return client.refund_capture(
        args.capture_id, args.amount, args.currency or DEFAULT_CURRENCY, args.note
    ).to_dict()


@router.post("/getPayPalOrder", dependencies=[Depends(require_shared_secret)])
def get_paypal_order(
    args: GetOrderArgs, client: PayPalClient = Depends(get_paypal_client)
) -> dict[str, Any]:
    return client.get_order(args.order_id).to_dict()
