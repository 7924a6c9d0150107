class PayPalError(Exception):
    """Base exception for PayPal client failures."""


class PayPalAuthError(PayPalError):
    """Raised when an OAuth access token cannot be obtained."""

    def __init__(self, message: str = "Failed to get PayPal access token", status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
