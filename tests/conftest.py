"""Test configuration and fixtures."""

import os
from unittest.mock import MagicMock

import pytest
import requests
import structlog
from fastapi.testclient import TestClient

from core.dependencies import clear_settings, get_paypal_client, get_settings
from core.logging import configure_logging
from core.settings import Settings
from main import app
from payments.config import PayPalConfig
from payments.paypal_client import PayPalClient

RETURN_URL = "https://tools.test/success"
CANCEL_URL = "https://tools.test/cancel"

# Module-level loggers must not pin the configuration of the first test
structlog.configure(cache_logger_on_first_use=False)


class MockResponse:
    """Stand-in for requests.Response with an explicit status code."""

    def __init__(self, status_code, json_data=None, text=""):
        self.status_code = status_code
        self._json_data = json_data
        self.text = text

    def json(self):
        if self._json_data is None:
            raise requests.exceptions.JSONDecodeError("Expecting value", self.text, 0)
        return self._json_data


def token_response(access_token="A21AA-test-token", expires_in=32400):
    return MockResponse(
        200,
        {
            "scope": "https://uri.paypal.com/services/payments/payment",
            "access_token": access_token,
            "token_type": "Bearer",
            "app_id": "APP-80W284485P519543T",
            "expires_in": expires_in,
            "nonce": "2024-01-01T00:00:00Z-nonce",
        },
    )


def sent_requests(session, path_suffix=""):
    """(method, url, kwargs) for every request the mock session received."""
    return [
        (c.args[0], c.args[1], c.kwargs)
        for c in session.request.call_args_list
        if c.args[1].endswith(path_suffix)
    ]


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Setup test environment variables before each test."""
    original_env = dict(os.environ)

    os.environ.update(
        {
            "PAYPAL_CLIENT_ID": "test_client_id",
            "PAYPAL_CLIENT_SECRET": "test_secret",
            "PAYPAL_MODE": "sandbox",
            "SHARED_SECRET": "",
            "PUBLIC_BASE_URL": "https://tools.test",
            "APP_NAME": "Test PayPal Tools",
            "ENVIRONMENT": "development",
            "DISABLE_TRACING": "true",
        }
    )

    yield

    os.environ.clear()
    os.environ.update(original_env)
    clear_settings()


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    configure_logging()
    structlog.configure(cache_logger_on_first_use=False)


@pytest.fixture
def mock_settings():
    return Settings(
        PAYPAL_CLIENT_ID="test_client_id",
        PAYPAL_CLIENT_SECRET="test_secret",
        PAYPAL_MODE="sandbox",
        PUBLIC_BASE_URL="https://tools.test",
        APP_NAME="Test PayPal Tools",
        ENVIRONMENT="development",
    )


@pytest.fixture
def paypal_config():
    return PayPalConfig(
        mode="sandbox", client_id="test_client_id", client_secret="test_secret"
    )


@pytest.fixture
def mock_session():
    """requests.Session double; tests queue responses on request.side_effect."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def paypal_client(paypal_config, mock_session):
    return PayPalClient(
        paypal_config,
        return_url=RETURN_URL,
        cancel_url=CANCEL_URL,
        timeout=10.0,
        session=mock_session,
    )


@pytest.fixture
def client(mock_settings, paypal_client):
    """Test client wired to the mock PayPal session."""
    app.dependency_overrides[get_settings] = lambda: mock_settings
    app.dependency_overrides[get_paypal_client] = lambda: paypal_client

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
