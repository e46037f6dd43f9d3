# -*- coding: utf-8 -*-
"""
Tests for the HTTP client: signing, retry and response classification.
"""

import asyncio
import json

import aiohttp
import pytest
from unittest.mock import AsyncMock, MagicMock

from okx_client.auth import ApiCredentials, OkxSigner
from okx_client.errors import (
    AuthenticationError,
    BadResponse,
    DDoSProtection,
    ExchangeNotAvailable,
    InsufficientFunds,
    NetworkError,
    RateLimitExceeded,
    RequestTimeout,
)
from okx_client.http_client import HttpClient

from conftest import TEST_API_KEY, TEST_API_SECRET, TEST_PASSPHRASE


def mock_response(status, body):
    """Async context manager yielding a response with the given body."""
    response = MagicMock()
    response.status = status
    text = body if isinstance(body, str) else json.dumps(body)
    response.text = AsyncMock(return_value=text)
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)
    return context


def envelope(data=None, code="0", msg=""):
    return {"code": code, "msg": msg, "data": data if data is not None else []}


@pytest.fixture
def http_client(connection_config, retry_config):
    signer = OkxSigner(ApiCredentials(TEST_API_KEY, TEST_API_SECRET, TEST_PASSPHRASE))
    return HttpClient(connection_config, signer, retry_config)


class TestRequest:
    """Request construction."""

    @pytest.mark.asyncio
    async def test_get_returns_data(self, http_client, mock_client_session):
        mock_client_session.request.return_value = mock_response(200, envelope([{"ordId": "1"}]))

        result = await http_client.request(
            mock_client_session, "GET", "/api/v5/trade/orders-history", {"instType": "SPOT", "limit": "100"}
        )

        assert result == [{"ordId": "1"}]
        kwargs = mock_client_session.request.call_args.kwargs
        assert kwargs["method"] == "GET"
        assert str(kwargs["url"]) == (
            "https://test-api.example.com/api/v5/trade/orders-history?instType=SPOT&limit=100"
        )
        assert "data" not in kwargs

    @pytest.mark.asyncio
    async def test_private_request_is_signed(self, http_client, mock_client_session):
        mock_client_session.request.return_value = mock_response(200, envelope())

        await http_client.request(mock_client_session, "POST", "/api/v5/trade/order", data={"instId": "BTC-USDT"})

        kwargs = mock_client_session.request.call_args.kwargs
        headers = kwargs["headers"]
        assert headers["OK-ACCESS-KEY"] == TEST_API_KEY
        assert headers["OK-ACCESS-PASSPHRASE"] == TEST_PASSPHRASE
        assert headers["OK-ACCESS-SIGN"]
        assert headers["OK-ACCESS-TIMESTAMP"].endswith("Z")
        assert kwargs["data"] == b'{"instId":"BTC-USDT"}'

    @pytest.mark.asyncio
    async def test_public_request_is_not_signed(self, http_client, mock_client_session):
        mock_client_session.request.return_value = mock_response(200, envelope())

        await http_client.request(mock_client_session, "GET", "/api/v5/public/time", private=False)

        headers = mock_client_session.request.call_args.kwargs["headers"]
        assert "OK-ACCESS-SIGN" not in headers

    @pytest.mark.asyncio
    async def test_private_request_without_credentials(self, connection_config, mock_client_session):
        client = HttpClient(connection_config, OkxSigner(ApiCredentials("", "", "")))

        with pytest.raises(AuthenticationError):
            await client.request(mock_client_session, "GET", "/api/v5/account/balance")
        mock_client_session.request.assert_not_called()


class TestRetry:
    """Transport failures are retried, venue errors are not."""

    @pytest.mark.asyncio
    async def test_retries_bare_server_error(self, http_client, mock_client_session):
        mock_client_session.request.side_effect = [
            mock_response(502, "Bad Gateway"),
            mock_response(200, envelope([{"ts": "1"}])),
        ]

        result = await http_client.request(mock_client_session, "GET", "/api/v5/public/time", private=False)

        assert result == [{"ts": "1"}]
        assert mock_client_session.request.call_count == 2

    @pytest.mark.asyncio
    async def test_retries_connection_errors(self, http_client, mock_client_session):
        mock_client_session.request.side_effect = [
            aiohttp.ClientConnectionError("refused"),
            mock_response(200, envelope()),
        ]

        assert await http_client.request(mock_client_session, "GET", "/api/v5/public/time", private=False) == []
        assert mock_client_session.request.call_count == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, http_client, mock_client_session):
        mock_client_session.request.side_effect = aiohttp.ClientConnectionError("refused")

        with pytest.raises(NetworkError) as exc_info:
            await http_client.request(mock_client_session, "GET", "/api/v5/public/time", private=False)

        assert exc_info.value.retryable
        assert mock_client_session.request.call_count == 3

    @pytest.mark.asyncio
    async def test_timeout(self, http_client, mock_client_session):
        mock_client_session.request.side_effect = asyncio.TimeoutError()

        with pytest.raises(RequestTimeout):
            await http_client.request(mock_client_session, "GET", "/api/v5/public/time", private=False)

    @pytest.mark.asyncio
    async def test_server_error_exhausted(self, http_client, mock_client_session):
        mock_client_session.request.side_effect = [mock_response(503, "") for _ in range(3)]

        with pytest.raises(ExchangeNotAvailable) as exc_info:
            await http_client.request(mock_client_session, "GET", "/api/v5/public/time", private=False)
        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_order_timeout_is_not_resent(self, http_client, mock_client_session):
        mock_client_session.request.side_effect = [
            asyncio.TimeoutError(),
            mock_response(200, envelope([{"clOrdId": "x", "sCode": "51016", "sMsg": "Duplicated clOrdId"}], code="1")),
        ]

        with pytest.raises(RequestTimeout):
            await http_client.request(
                mock_client_session, "POST", "/api/v5/trade/order", data={"instId": "BTC-USDT", "clOrdId": "x"}
            )
        assert mock_client_session.request.call_count == 1

    @pytest.mark.asyncio
    async def test_post_connection_error_is_not_resent(self, http_client, mock_client_session):
        mock_client_session.request.side_effect = [
            aiohttp.ClientConnectionError("reset"),
            mock_response(200, envelope()),
        ]

        with pytest.raises(NetworkError):
            await http_client.request(mock_client_session, "POST", "/api/v5/asset/transfer", data={"amt": "1"})
        assert mock_client_session.request.call_count == 1

    @pytest.mark.asyncio
    async def test_post_server_error_is_not_resent(self, http_client, mock_client_session):
        mock_client_session.request.side_effect = [mock_response(502, "Bad Gateway"), mock_response(200, envelope())]

        with pytest.raises(ExchangeNotAvailable):
            await http_client.request(mock_client_session, "POST", "/api/v5/trade/batch-orders", data=[])
        assert mock_client_session.request.call_count == 1

    @pytest.mark.asyncio
    async def test_venue_error_not_retried(self, http_client, mock_client_session, rejected_item):
        mock_client_session.request.return_value = mock_response(
            200, envelope([rejected_item], code="1", msg="All operations failed")
        )

        with pytest.raises(InsufficientFunds):
            await http_client.request(mock_client_session, "POST", "/api/v5/trade/order", data={})
        assert mock_client_session.request.call_count == 1

    @pytest.mark.asyncio
    async def test_venue_rate_limit_not_retried(self, http_client, mock_client_session):
        mock_client_session.request.return_value = mock_response(
            429, envelope(code="50011", msg="Too Many Requests")
        )

        with pytest.raises(RateLimitExceeded):
            await http_client.request(mock_client_session, "GET", "/api/v5/account/balance")
        assert mock_client_session.request.call_count == 1

    @pytest.mark.asyncio
    async def test_http_throttling(self, http_client, mock_client_session):
        mock_client_session.request.return_value = mock_response(429, "Too Many Requests")

        with pytest.raises(DDoSProtection) as exc_info:
            await http_client.request(mock_client_session, "GET", "/api/v5/account/balance")
        assert not isinstance(exc_info.value, RateLimitExceeded)


class TestResponseDecoding:

    @pytest.mark.asyncio
    async def test_non_json_success(self, http_client, mock_client_session):
        mock_client_session.request.return_value = mock_response(200, "<html></html>")

        with pytest.raises(BadResponse):
            await http_client.request(mock_client_session, "GET", "/api/v5/public/time", private=False)

    @pytest.mark.asyncio
    async def test_empty_body(self, http_client, mock_client_session):
        mock_client_session.request.return_value = mock_response(200, "")

        with pytest.raises(BadResponse):
            await http_client.request(mock_client_session, "GET", "/api/v5/public/time", private=False)
