from typing import Literal

from dotenv import load_dotenv
from pydantic import ConfigDict, field_validator
from pydantic_settings import BaseSettings

# Load .env file automatically
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # PayPal credentials
    PAYPAL_CLIENT_ID: str = ""
    PAYPAL_CLIENT_SECRET: str = ""
    PAYPAL_MODE: str = "sandbox"

    # Inbound tool-call authentication (empty disables the check)
    SHARED_SECRET: str = ""

    # Where PayPal sends the buyer back after checkout
    PUBLIC_BASE_URL: str = "http://localhost:8000"

    # Outbound call tuning
    PAYPAL_TIMEOUT_SECONDS: float = 15.0
    TOKEN_EXPIRY_MARGIN_SECONDS: int = 30

    # App settings
    APP_NAME: str = "PayPal Tools"
    ENVIRONMENT: Literal["development", "test", "production"] = "development"

    # Observability (Optional)
    OTEL_SERVICE_NAME: str = "paypal-tools"
    METRICS_ENABLED: bool = True

    model_config = ConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @field_validator("PAYPAL_MODE", mode="before")
    @classmethod
    def default_mode(cls, value):
        # An empty PAYPAL_MODE means sandbox
        return value or "sandbox"

    @property
    def return_url(self) -> str:
        return f"{self.PUBLIC_BASE_URL.rstrip('/')}/success"

    @property
    def cancel_url(self) -> str:
        return f"{self.PUBLIC_BASE_URL.rstrip('/')}/cancel"
