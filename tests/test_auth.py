# -*- coding: utf-8 -*-
"""
Tests for request preparation and signing.
"""

import base64
import hashlib
import hmac

import pytest

from okx_client.auth import ApiCredentials, OkxSigner, PreparedRequest
from okx_client.errors import AuthenticationError

from conftest import TEST_API_KEY, TEST_API_SECRET, TEST_PASSPHRASE

TIMESTAMP = "2020-12-08T09:08:57.715Z"


def expected_signature(message: str) -> str:
    digest = hmac.new(TEST_API_SECRET.encode(), message.encode(), hashlib.sha256).digest()
    return base64.b64encode(digest).decode()


@pytest.fixture
def signer():
    return OkxSigner(ApiCredentials(TEST_API_KEY, TEST_API_SECRET, TEST_PASSPHRASE))


class TestPreparedRequest:
    """Freezing method, path, query and body."""

    def test_get_with_query(self):
        request = PreparedRequest.create("get", "/api/v5/account/balance", params={"ccy": "BTC"})

        assert request.method == "GET"
        assert request.request_path == "/api/v5/account/balance?ccy=BTC"
        assert request.body == ""

    def test_query_order_is_kept(self):
        request = PreparedRequest.create(
            "GET", "/api/v5/trade/orders-history", params={"instType": "SPOT", "limit": "100", "after": "5"}
        )
        assert request.request_path == "/api/v5/trade/orders-history?instType=SPOT&limit=100&after=5"

    def test_get_ignores_body(self):
        request = PreparedRequest.create("GET", "/api/v5/public/time", data={"a": 1})
        assert request.body == ""

    def test_post_body_is_compact_json(self):
        request = PreparedRequest.create("post", "/api/v5/trade/order", data={"instId": "BTC-USDT", "sz": "1"})
        assert request.body == '{"instId":"BTC-USDT","sz":"1"}'

    def test_list_body(self):
        request = PreparedRequest.create("POST", "/api/v5/trade/cancel-algos", data=[{"algoId": "1"}])
        assert request.body == '[{"algoId":"1"}]'

    def test_canonical_string(self):
        request = PreparedRequest.create("POST", "/api/v5/trade/order", data={"sz": "1"})
        assert request.canonical_string(TIMESTAMP) == f'{TIMESTAMP}POST/api/v5/trade/order{{"sz":"1"}}'

    def test_frozen(self):
        request = PreparedRequest.create("GET", "/api/v5/public/time")
        with pytest.raises(AttributeError):
            request.path = "/other"


class TestOkxSigner:
    """Signing and header construction."""

    def test_headers(self, signer):
        request = PreparedRequest.create("GET", "/api/v5/account/balance", params={"ccy": "BTC"})
        signed = signer.sign(request, TIMESTAMP)

        assert signed.timestamp == TIMESTAMP
        assert signed.headers["OK-ACCESS-KEY"] == TEST_API_KEY
        assert signed.headers["OK-ACCESS-PASSPHRASE"] == TEST_PASSPHRASE
        assert signed.headers["OK-ACCESS-TIMESTAMP"] == TIMESTAMP
        assert signed.headers["Content-Type"] == "application/json"
        assert "x-simulated-trading" not in signed.headers

    def test_signature_matches_hmac(self, signer):
        request = PreparedRequest.create("GET", "/api/v5/account/balance", params={"ccy": "BTC"})
        signed = signer.sign(request, TIMESTAMP)

        assert signed.headers["OK-ACCESS-SIGN"] == expected_signature(
            f"{TIMESTAMP}GET/api/v5/account/balance?ccy=BTC"
        )

    def test_post_signature_covers_body(self, signer):
        request = PreparedRequest.create("POST", "/api/v5/trade/order", data={"instId": "BTC-USDT"})
        signed = signer.sign(request, TIMESTAMP)

        assert signed.headers["OK-ACCESS-SIGN"] == expected_signature(
            f'{TIMESTAMP}POST/api/v5/trade/order{{"instId":"BTC-USDT"}}'
        )

    def test_changed_request_fails_verification(self, signer):
        request = PreparedRequest.create("POST", "/api/v5/trade/order", data={"sz": "1"})
        signed = signer.sign(request, TIMESTAMP)
        tampered = PreparedRequest.create("POST", "/api/v5/trade/order", data={"sz": "2"})

        assert signer.verify(request, TIMESTAMP, signed.headers["OK-ACCESS-SIGN"])
        assert not signer.verify(tampered, TIMESTAMP, signed.headers["OK-ACCESS-SIGN"])

    def test_default_timestamp_format(self, signer):
        signed = signer.sign(PreparedRequest.create("GET", "/api/v5/public/time"))
        assert signed.timestamp.endswith("Z")
        assert len(signed.timestamp) == len(TIMESTAMP)

    def test_simulation_header(self):
        signer = OkxSigner(ApiCredentials(TEST_API_KEY, TEST_API_SECRET, TEST_PASSPHRASE), simulation=True)
        signed = signer.sign(PreparedRequest.create("GET", "/api/v5/public/time"), TIMESTAMP)

        assert signed.headers["x-simulated-trading"] == "1"
        assert signer.public_headers()["x-simulated-trading"] == "1"

    @pytest.mark.parametrize(
        "credentials",
        [
            ApiCredentials("", TEST_API_SECRET, TEST_PASSPHRASE),
            ApiCredentials(TEST_API_KEY, "", TEST_PASSPHRASE),
            ApiCredentials(TEST_API_KEY, TEST_API_SECRET, ""),
        ],
    )
    def test_missing_credentials(self, credentials):
        signer = OkxSigner(credentials)
        assert not signer.validate_credentials()
        with pytest.raises(AuthenticationError):
            signer.sign(PreparedRequest.create("GET", "/api/v5/account/balance"))

    def test_public_headers_without_credentials(self):
        signer = OkxSigner(ApiCredentials("", "", ""))
        assert signer.public_headers() == {"Content-Type": "application/json"}
