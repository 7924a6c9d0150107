"""HTML pages shown to the buyer when PayPal redirects back after checkout.

Pages are self-contained; every interpolated value is escaped.
"""

import html
from typing import Any, Optional

from payments.schemas import ResultEnvelope

GENERIC_ERROR = "An error occurred processing the payment."

_CSS = """\
body { font-family: Arial, sans-serif; max-width: 800px; margin: 40px auto; padding: 20px; text-align: center; }
.success { color: #28a745; font-size: 24px; margin-bottom: 20px; }
.error { color: #dc3545; font-size: 24px; margin-bottom: 20px; }
.cancel { color: #6c757d; font-size: 24px; margin-bottom: 20px; }
.details { background: #f8f9fa; padding: 20px; border-radius: 8px; text-align: left; }
"""


def _page(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        "<html>\n<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{html.escape(title)}</title>\n"
        f"<style>\n{_CSS}</style>\n"
        "</head>\n<body>\n"
        f"{body}\n"
        "</body>\n</html>\n"
    )


def first_capture_amount(data: dict[str, Any]) -> dict[str, Any]:
    """Amount of the first capture of the first purchase unit.

    Raises KeyError/IndexError when the capture body has no such capture.
    """
    return data["purchase_units"][0]["payments"]["captures"][0]["amount"]


def render_success_page(order_id: str, data: dict[str, Any]) -> str:
    amount = first_capture_amount(data)
    details = (
        f"<p>Order ID: {html.escape(order_id)}</p>\n"
        f"<p>Status: {html.escape(str(data.get('status', '')))}</p>\n"
        f"<p>Amount: {html.escape(str(amount['value']))} "
        f"{html.escape(str(amount['currency_code']))}</p>"
    )
    return _page(
        "Payment Successful",
        '<h1 class="success">Payment Successful!</h1>\n'
        f'<div class="details">\n{details}\n</div>',
    )


def render_error_page(message: Optional[str]) -> str:
    return _page(
        "Payment Error",
        '<h1 class="error">Payment Error</h1>\n'
        f"<p>{html.escape(message or GENERIC_ERROR)}</p>",
    )


def render_cancel_page(order_id: Optional[str]) -> str:
    body = (
        '<h1 class="cancel">Payment Cancelled</h1>\n'
        "<p>The payment was cancelled and you have not been charged.</p>"
    )
    if order_id:
        body += f"\n<p>Order ID: {html.escape(order_id)}</p>"
    return _page("Payment Cancelled", body)


def render_capture_outcome(order_id: str, envelope: ResultEnvelope) -> str:
    """Turn the capture envelope into the success or error page."""
    if envelope.success:
        return render_success_page(order_id, envelope.data)
    return render_error_page(envelope.error)
