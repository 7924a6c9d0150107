from core.settings import Settings
from payments.config import PayPalConfig
from payments.paypal_client import PayPalClient

# Process-wide singletons, created on first use
_settings = None
_paypal_client = None


def get_settings() -> Settings:
    """Dependency that provides application settings."""
    if _settings is None:
        init_settings()
    return _settings


def init_settings():
    """Initialize settings singleton."""
    global _settings
    _settings = Settings()


def clear_settings():
    """Clear settings and everything built from them."""
    global _settings, _paypal_client
    _settings = None
    _paypal_client = None


def get_paypal_client() -> PayPalClient:
    """Dependency that provides the shared PayPal client and its token cache."""
    global _paypal_client
    if _paypal_client is None:
        settings = get_settings()
        _paypal_client = PayPalClient(
            PayPalConfig.from_settings(settings),
            return_url=settings.return_url,
            cancel_url=settings.cancel_url,
            timeout=settings.PAYPAL_TIMEOUT_SECONDS,
            token_margin_seconds=settings.TOKEN_EXPIRY_MARGIN_SECONDS,
        )
    return _paypal_client
