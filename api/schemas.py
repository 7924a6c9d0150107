"""
API Schemas Module

This module defines Pydantic models for tool-call arguments and the tool
descriptors advertised to callers.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ToolArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateOrderArgs(ToolArgs):
    amount: str = Field(description="The payment amount (e.g. '10.00')")
    currency: Optional[str] = Field(
        default="USD", description="The currency code (e.g. 'USD')"
    )
    description: Optional[str] = Field(
        default=None, description="Optional description of the payment"
    )


class CaptureOrderArgs(ToolArgs):
    order_id: str = Field(
        alias="orderId", description="The PayPal order ID to capture"
    )


class RefundCaptureArgs(ToolArgs):
    capture_id: str = Field(
        alias="captureId",
        description="The PayPal-generated ID for the captured payment to refund",
    )
    amount: Optional[str] = Field(
        default=None,
        description="Optional amount to refund. If not specified, refunds the full amount",
    )
    currency: Optional[str] = Field(
        default="USD", description="Currency code for the refund amount (e.g. 'USD')"
    )
    note: Optional[str] = Field(
        default=None, description="Optional note to the payer about the refund"
    )


class GetOrderArgs(ToolArgs):
    order_id: str = Field(alias="orderId", description="The PayPal order ID to check")


class ToolParameter(BaseModel):
    type: str = "string"
    description: str
    optional: bool = False


class ToolDescriptor(BaseModel):
    """Schema for a tool advertised to agent callers."""

    name: str
    description: str
    parameters: dict[str, ToolParameter]

    @classmethod
    def from_args(cls, name: str, description: str, args: type[ToolArgs]):
        parameters = {
            field.alias or field_name: ToolParameter(
                description=field.description or "",
                optional=not field.is_required(),
            )
            for field_name, field in args.model_fields.items()
        }
        return cls(name=name, description=description, parameters=parameters)
