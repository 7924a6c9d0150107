"""
PayPal Schemas Module

Pydantic models for PayPal request bodies, the OAuth token response and the
uniform result envelope returned by every client operation.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict


class AccessToken(BaseModel):
    """OAuth client-credentials token response."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int = 0

    model_config = ConfigDict(extra="ignore")


class Money(BaseModel):
    currency_code: str
    value: str  # kept as the caller's literal string, never parsed


class PurchaseUnit(BaseModel):
    amount: Money
    description: Optional[str] = None


class ApplicationContext(BaseModel):
    return_url: str
    cancel_url: str
    user_action: Optional[str] = None


class OrderRequest(BaseModel):
    """Body of POST /v2/checkout/orders."""

    intent: Literal["CAPTURE", "AUTHORIZE"] = "CAPTURE"
    purchase_units: list[PurchaseUnit]
    application_context: Optional[ApplicationContext] = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class RefundRequest(BaseModel):
    """Body of POST /v2/payments/captures/{id}/refund.

    An empty request refunds the full captured amount.
    """

    amount: Optional[Money] = None
    invoice_id: Optional[str] = None
    note_to_payer: Optional[str] = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ResultEnvelope(BaseModel):
    """Outcome of a PayPal operation, successful or not."""

    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        # PayPal bodies pass through untouched, so only the top level is pruned
        result: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            result["data"] = self.data
        if self.error is not None:
            result["error"] = self.error
        return result
