"""
PayPal configuration.

Resolves the immutable credentials and API host used by every outbound call.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

from core.settings import Settings

SANDBOX_HOST = "api.sandbox.paypal.com"
LIVE_HOST = "api.paypal.com"


class PayPalConfig(BaseModel):
    """Mode and credentials, fixed for the lifetime of the process."""

    mode: str = "sandbox"
    client_id: str = ""
    client_secret: str = ""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> "PayPalConfig":
        return cls(
            mode=settings.PAYPAL_MODE or "sandbox",
            client_id=settings.PAYPAL_CLIENT_ID,
            client_secret=settings.PAYPAL_CLIENT_SECRET,
        )

    @property
    def host(self) -> str:
        # Anything other than "sandbox" talks to the live API
        return SANDBOX_HOST if self.mode == "sandbox" else LIVE_HOST

    @property
    def base_url(self) -> str:
        return f"https://{self.host}"

    @property
    def environment(self) -> Literal["sandbox", "live"]:
        return "sandbox" if self.mode == "sandbox" else "live"
