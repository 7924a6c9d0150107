"""Test the metrics module."""

from unittest.mock import MagicMock, patch

from prometheus_client import REGISTRY, generate_latest

from core.metrics import init_metrics, paypal_request_latency
from tests.conftest import MockResponse, token_response


def _sample(name, labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_operation_outcomes_are_counted(paypal_client, mock_session):
    success = {"operation": "get_order", "outcome": "success"}
    paypal_error = {"operation": "get_order", "outcome": "paypal_error"}
    before_success = _sample("paypal_tools_requests_total", success)
    before_error = _sample("paypal_tools_requests_total", paypal_error)

    mock_session.request.side_effect = [
        token_response(),
        MockResponse(200, {"id": "A"}),
        MockResponse(404, {"name": "RESOURCE_NOT_FOUND"}),
    ]
    paypal_client.get_order("A")
    paypal_client.get_order("B")

    assert _sample("paypal_tools_requests_total", success) == before_success + 1
    assert _sample("paypal_tools_requests_total", paypal_error) == before_error + 1


def test_exceptions_are_counted(paypal_client, mock_session):
    labels = {"operation": "refund_capture", "outcome": "exception"}
    before = _sample("paypal_tools_requests_total", labels)

    mock_session.request.side_effect = [MockResponse(500)]
    paypal_client.refund_capture("CAP1")

    assert _sample("paypal_tools_requests_total", labels) == before + 1


def test_token_requests_are_counted(paypal_client, mock_session):
    before = _sample("paypal_tools_token_requests_total", {"result": "issued"})

    mock_session.request.side_effect = [
        token_response(),
        MockResponse(200, {"id": "A"}),
        MockResponse(200, {"id": "B"}),
    ]
    paypal_client.get_order("A")
    paypal_client.get_order("B")

    assert _sample("paypal_tools_token_requests_total", {"result": "issued"}) == before + 1


def test_latency_is_observed(paypal_client, mock_session):
    before = _sample("paypal_tools_request_latency_seconds_count", {"operation": "capture_order"})

    mock_session.request.side_effect = [token_response(), MockResponse(201, {"id": "A"})]
    paypal_client.capture_order("A")

    after = _sample("paypal_tools_request_latency_seconds_count", {"operation": "capture_order"})
    assert after == before + 1
    assert paypal_request_latency._name == "paypal_tools_request_latency_seconds"


def test_init_metrics_with_app():
    """Test metrics initialization with FastAPI app."""
    mock_app = MagicMock()

    with patch("core.metrics.Instrumentator") as mock_instrumentator:
        mock_inst = MagicMock()
        mock_instrumentator.return_value = mock_inst
        mock_inst.instrument.return_value = mock_inst
        mock_inst.expose.return_value = mock_inst

        result = init_metrics(mock_app)

        mock_instrumentator.assert_called_once()
        mock_inst.instrument.assert_called_with(mock_app)
        mock_inst.expose.assert_called_with(
            mock_app, endpoint="/metrics", include_in_schema=False
        )
        assert result == mock_inst


def test_metrics_endpoint_integration(client):
    """Test that metrics endpoint is available and returns Prometheus format."""
    response = client.get("/metrics")

    assert response.status_code == 200
    assert "text/plain" in response.headers.get("content-type", "")
    content = response.text
    assert "paypal_tools_requests_total" in content
    assert "paypal_tools_token_requests_total" in content
    assert "paypal_tools_request_latency_seconds" in content


def test_metrics_export():
    result = generate_latest()

    assert isinstance(result, bytes)
    assert b"paypal_tools_requests" in result
