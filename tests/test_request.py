"""Tests for request execution and error translation."""

from __future__ import annotations

import logging

import httpx
import pytest
import respx
from httpx import Response

from stackr import Stackr
from stackr.exceptions import (
    APIError,
    StackrError,
    TimeoutError,
    TransportError,
)
from stackr.models import App

from .conftest import make_app_dict


class TestSuccessfulResponses:
    """Tests for 2xx responses."""

    @pytest.mark.asyncio
    async def test_returns_decoded_json(self, api_base_url, mock_token):
        """Test that a 2xx JSON body is returned as-is without a model."""
        payload = [{"id": "a", "anything": [1, 2, 3]}]

        with respx.mock:
            respx.get(f"{api_base_url}/apps").mock(return_value=Response(200, json=payload))

            async with Stackr(token=mock_token) as client:
                data = await client._request("GET", "/apps")

        assert data == payload

    @pytest.mark.asyncio
    async def test_empty_body_returns_none(self, api_base_url, mock_token):
        """Test that an empty 2xx body decodes to None."""
        with respx.mock:
            respx.post(f"{api_base_url}/apps/x/start").mock(return_value=Response(204))

            async with Stackr(token=mock_token) as client:
                data = await client._request("POST", "/apps/x/start")

        assert data is None

    @pytest.mark.asyncio
    async def test_validates_against_response_model(self, api_base_url, mock_token):
        """Test that the body is validated against the given model."""
        with respx.mock:
            respx.get(f"{api_base_url}/apps/app_1").mock(
                return_value=Response(200, json=make_app_dict(app_id="app_1"))
            )

            async with Stackr(token=mock_token) as client:
                app = await client._request("GET", "/apps/app_1", response_model=App)

        assert isinstance(app, App)
        assert app.id == "app_1"

    @pytest.mark.asyncio
    async def test_lowercase_method_is_normalized(self, api_base_url, mock_token):
        """Test that the method is sent upper-cased."""
        with respx.mock:
            route = respx.get(f"{api_base_url}/apps").mock(return_value=Response(200, json=[]))

            async with Stackr(token=mock_token) as client:
                await client._request("get", "/apps")

        assert route.calls[0].request.method == "GET"

    @pytest.mark.asyncio
    async def test_invalid_json_on_success_raises_api_error(self, api_base_url, mock_token):
        """Test that a 2xx body that isn't JSON surfaces as an APIError."""
        with respx.mock:
            respx.get(f"{api_base_url}/apps").mock(
                return_value=Response(200, text="<html>maintenance</html>")
            )

            async with Stackr(token=mock_token) as client:
                with pytest.raises(APIError) as exc_info:
                    await client._request("GET", "/apps")

        assert exc_info.value.status_code == 200
        assert exc_info.value.body == "<html>maintenance</html>"
        assert exc_info.value.path == "/apps"

    @pytest.mark.asyncio
    async def test_unexpected_shape_raises_api_error(self, api_base_url, mock_token):
        """Test that a body that doesn't match the model surfaces as an APIError."""
        with respx.mock:
            respx.get(f"{api_base_url}/apps/x").mock(
                return_value=Response(200, json={"unexpected": True})
            )

            async with Stackr(token=mock_token) as client:
                with pytest.raises(APIError) as exc_info:
                    await client._request("GET", "/apps/x", response_model=App)

        assert exc_info.value.body == {"unexpected": True}
        assert "Unexpected response format" in str(exc_info.value)


class TestApiErrors:
    """Tests for non-2xx responses."""

    @pytest.mark.asyncio
    async def test_json_error_body_preserved(self, api_base_url, mock_token):
        """Test that a JSON error body is kept verbatim."""
        with respx.mock:
            respx.get(f"{api_base_url}/apps/x").mock(
                return_value=Response(404, json={"message": "not found"})
            )

            async with Stackr(token=mock_token) as client:
                with pytest.raises(APIError) as exc_info:
                    await client.apps.get("x")

        error = exc_info.value
        assert error.status_code == 404
        assert error.body == {"message": "not found"}
        assert error.path == "/apps/x"
        assert error.kind == "api"
        assert str(error) == "[stackr] 404 on GET /apps/x"

    @pytest.mark.asyncio
    async def test_text_error_body_preserved(self, api_base_url, mock_token):
        """Test that a non-JSON error body is kept as text."""
        with respx.mock:
            respx.get(f"{api_base_url}/apps").mock(
                return_value=Response(502, text="Bad Gateway")
            )

            async with Stackr(token=mock_token) as client:
                with pytest.raises(APIError) as exc_info:
                    await client.apps.list()

        assert exc_info.value.status_code == 502
        assert exc_info.value.body == "Bad Gateway"
        assert exc_info.value.is_retryable is True

    @pytest.mark.asyncio
    async def test_empty_error_body(self, api_base_url, mock_token):
        """Test that an empty error body becomes an empty string."""
        with respx.mock:
            respx.post(f"{api_base_url}/apps/x/delete").mock(return_value=Response(403))

            async with Stackr(token=mock_token) as client:
                with pytest.raises(APIError) as exc_info:
                    await client.apps.delete("x")

        assert exc_info.value.status_code == 403
        assert exc_info.value.body == ""
        assert exc_info.value.is_retryable is False

    @pytest.mark.asyncio
    async def test_redirect_is_not_success(self, api_base_url, mock_token):
        """Test that a 3xx response is reported, not followed."""
        with respx.mock:
            respx.get(f"{api_base_url}/apps").mock(
                return_value=Response(302, headers={"Location": "https://elsewhere"})
            )

            async with Stackr(token=mock_token) as client:
                with pytest.raises(APIError) as exc_info:
                    await client.apps.list()

        assert exc_info.value.status_code == 302

    @pytest.mark.asyncio
    async def test_api_error_is_not_retried(self, api_base_url, mock_token):
        """Test that a failing request is sent exactly once."""
        with respx.mock:
            route = respx.get(f"{api_base_url}/apps").mock(
                return_value=Response(503, json={"message": "unavailable"})
            )

            async with Stackr(token=mock_token) as client:
                with pytest.raises(APIError):
                    await client.apps.list()

        assert route.call_count == 1


class TestTransportFailures:
    """Tests for timeouts and network errors."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc", [httpx.ReadTimeout, httpx.ConnectTimeout, httpx.WriteTimeout, httpx.PoolTimeout]
    )
    async def test_timeout_raises_timeout_error(self, api_base_url, mock_token, exc):
        """Test that every httpx timeout becomes a TimeoutError."""
        with respx.mock:
            route = respx.get(f"{api_base_url}/apps/slow").mock(side_effect=exc)

            async with Stackr(token=mock_token, timeout=5000) as client:
                with pytest.raises(TimeoutError) as exc_info:
                    await client.apps.get("slow")

        error = exc_info.value
        assert error.path == "/apps/slow"
        assert error.timeout_ms == 5000
        assert error.kind == "timeout"
        assert "timed out after 5000ms" in str(error)
        assert route.call_count == 1

    @pytest.mark.asyncio
    async def test_timeout_reports_per_call_override(self, api_base_url, mock_token):
        """Test that the per-call timeout is the one reported."""
        with respx.mock:
            respx.get(f"{api_base_url}/apps").mock(side_effect=httpx.ReadTimeout)

            async with Stackr(token=mock_token) as client:
                with pytest.raises(TimeoutError) as exc_info:
                    await client._request("GET", "/apps", timeout=250)

        assert exc_info.value.timeout_ms == 250

    @pytest.mark.asyncio
    async def test_connect_error_raises_transport_error(self, api_base_url, mock_token):
        """Test that a refused connection becomes a TransportError."""
        with respx.mock:
            respx.get(f"{api_base_url}/apps").mock(
                side_effect=httpx.ConnectError("Connection refused")
            )

            async with Stackr(token=mock_token) as client:
                with pytest.raises(TransportError) as exc_info:
                    await client.apps.list()

        error = exc_info.value
        assert error.path == "/apps"
        assert error.kind == "transport"
        assert "Connection refused" in error.description
        assert isinstance(error.cause, httpx.ConnectError)
        assert isinstance(error.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_is_not_a_transport_error(self, api_base_url, mock_token):
        """Test that timeouts and other network failures stay distinguishable."""
        with respx.mock:
            respx.get(f"{api_base_url}/apps").mock(side_effect=httpx.ReadTimeout)

            async with Stackr(token=mock_token) as client:
                with pytest.raises(StackrError) as exc_info:
                    await client.apps.list()

        assert not isinstance(exc_info.value, TransportError)

    @pytest.mark.asyncio
    async def test_remote_protocol_error_raises_transport_error(self, api_base_url, mock_token):
        """Test that a dropped connection becomes a TransportError."""
        with respx.mock:
            respx.get(f"{api_base_url}/apps").mock(
                side_effect=httpx.RemoteProtocolError("Server disconnected")
            )

            async with Stackr(token=mock_token) as client:
                with pytest.raises(TransportError):
                    await client.apps.list()


class TestRequestOverrides:
    """Tests for per-call headers."""

    @pytest.mark.asyncio
    async def test_headers_merged_over_defaults(self, api_base_url, mock_token):
        """Test that per-call headers are added without dropping defaults."""
        with respx.mock:
            route = respx.get(f"{api_base_url}/apps").mock(return_value=Response(200, json=[]))

            async with Stackr(token=mock_token) as client:
                await client._request("GET", "/apps", headers={"X-Request-Id": "req_1"})

        headers = route.calls[0].request.headers
        assert headers["X-Request-Id"] == "req_1"
        assert headers["Authorization"] == f"Bearer {mock_token}"
        assert headers["Accept"] == "application/json"


class TestDebugLogging:
    """Tests for debug trace output."""

    @pytest.mark.asyncio
    async def test_debug_logs_request_and_response(self, api_base_url, mock_token, caplog):
        """Test that debug mode logs the method, path and status."""
        with respx.mock:
            respx.get(f"{api_base_url}/apps").mock(return_value=Response(200, json=[]))

            async with Stackr(token=mock_token, debug=True) as client:
                with caplog.at_level(logging.INFO, logger="stackr.client"):
                    await client.apps.list()

        assert "→ GET /apps" in caplog.text
        assert "← 200 /apps" in caplog.text

    @pytest.mark.asyncio
    async def test_no_logs_without_debug(self, api_base_url, mock_token, caplog):
        """Test that nothing is logged when debug is off."""
        with respx.mock:
            respx.get(f"{api_base_url}/apps").mock(return_value=Response(200, json=[]))

            async with Stackr(token=mock_token) as client:
                with caplog.at_level(logging.DEBUG, logger="stackr.client"):
                    await client.apps.list()

        assert not [r for r in caplog.records if r.name == "stackr.client"]

    @pytest.mark.asyncio
    async def test_debug_does_not_log_failed_response(self, api_base_url, mock_token, caplog):
        """Test that only the outgoing line is logged for a failed call."""
        with respx.mock:
            respx.get(f"{api_base_url}/apps").mock(return_value=Response(500))

            async with Stackr(token=mock_token, debug=True) as client:
                with caplog.at_level(logging.INFO, logger="stackr.client"):
                    with pytest.raises(APIError):
                        await client.apps.list()

        assert "→ GET /apps" in caplog.text
        assert "←" not in caplog.text
