# -*- coding: utf-8 -*-
"""
Tests for response envelope checks and error classification.
"""

import pytest

from okx_client.error_classifier import (
    build_error,
    check_http_status,
    check_response,
    classify,
    classify_item,
)
from okx_client.errors import (
    AuthenticationError,
    BadRequest,
    BadResponse,
    BadSymbol,
    DDoSProtection,
    ExchangeError,
    ExchangeNotAvailable,
    InsufficientFunds,
    InvalidNonce,
    OnMaintenance,
    OrderNotFound,
    PermissionDenied,
    RateLimitExceeded,
)


class TestClassify:
    """Code and message lookup."""

    @pytest.mark.parametrize(
        "code,error_class",
        [
            ("50011", RateLimitExceeded),
            ("50113", AuthenticationError),
            ("50102", InvalidNonce),
            ("51001", BadSymbol),
            ("51008", InsufficientFunds),
            ("51603", OrderNotFound),
            ("50001", OnMaintenance),
        ],
    )
    def test_exact_codes(self, code, error_class):
        assert classify(code) is error_class

    def test_integer_code(self):
        assert classify(51008) is InsufficientFunds

    def test_broad_message(self):
        assert classify("99999", "Order does not exist, try again") is OrderNotFound

    def test_exact_wins_over_message(self):
        assert classify("51008", "Order does not exist") is InsufficientFunds

    def test_unknown_falls_back(self):
        assert classify("99999", "something odd") is ExchangeError
        assert classify(None) is ExchangeError

    def test_build_error_keeps_code_and_message(self):
        error = build_error("51008", "Insufficient USDT", status_code=200)

        assert isinstance(error, InsufficientFunds)
        assert error.code == "51008"
        assert error.status_code == 200
        assert "Insufficient USDT" in str(error)


class TestRetryable:
    """Transient errors are flagged, business errors are not."""

    def test_transient(self):
        assert build_error("50011", "too frequent").retryable
        assert build_error("50001", "maintenance").retryable

    def test_business(self):
        assert not build_error("51008", "insufficient").retryable
        assert not build_error("50113", "bad sign").retryable

    @pytest.mark.parametrize("code", ["50102", "60006"])
    def test_expired_timestamp_is_authentication_error(self, code):
        error = build_error(code, "Timestamp request expired")

        assert isinstance(error, InvalidNonce)
        assert isinstance(error, AuthenticationError)
        assert not error.retryable

    def test_rate_limit_is_ddos_protection(self):
        assert issubclass(RateLimitExceeded, DDoSProtection)


class TestClassifyItem:
    """Per-item sCode classification."""

    def test_success_item(self):
        assert classify_item({"ordId": "1", "sCode": "0", "sMsg": ""}) is None

    def test_item_without_status(self):
        assert classify_item({"ordId": "1"}) is None
        assert classify_item({"ordId": "1", "sCode": ""}) is None

    def test_rejected_item(self, rejected_item):
        error = classify_item(rejected_item)

        assert isinstance(error, InsufficientFunds)
        assert error.code == "51008"
        assert error.response_data is rejected_item

    def test_non_dict(self):
        assert classify_item("oops") is None


class TestCheckResponse:
    """Envelope validation."""

    def test_success_returns_data(self):
        assert check_response({"code": "0", "msg": "", "data": [{"a": 1}]}) == [{"a": 1}]

    def test_missing_data_is_empty_list(self):
        assert check_response({"code": "0", "msg": ""}) == []

    def test_object_data_is_wrapped(self):
        assert check_response({"code": "0", "data": {"ts": "1"}}) == [{"ts": "1"}]

    def test_partial_success_returns_data(self, rejected_item):
        data = [{"ordId": "1", "sCode": "0", "sMsg": ""}, rejected_item]
        assert check_response({"code": "2", "msg": "partial", "data": data}) == data

    def test_failure_raises_first_rejected_item(self, rejected_item):
        response = {"code": "1", "msg": "All operations failed", "data": [rejected_item]}
        with pytest.raises(InsufficientFunds) as exc_info:
            check_response(response, 200)

        assert exc_info.value.code == "51008"
        assert exc_info.value.status_code == 200
        assert exc_info.value.response_data is response

    def test_top_level_code(self):
        with pytest.raises(RateLimitExceeded) as exc_info:
            check_response({"code": "50011", "msg": "Too Many Requests", "data": []}, 429)
        assert exc_info.value.retryable

    def test_non_envelope_body(self):
        with pytest.raises(BadResponse):
            check_response("<html>oops</html>", 200)

    def test_non_envelope_with_http_error(self):
        with pytest.raises(ExchangeNotAvailable):
            check_response("Bad Gateway", 502)


class TestCheckHttpStatus:
    """HTTP statuses without a venue code."""

    @pytest.mark.parametrize(
        "status,error_class",
        [
            (400, BadRequest),
            (401, AuthenticationError),
            (403, PermissionDenied),
            (429, DDoSProtection),
            (503, ExchangeNotAvailable),
            (599, ExchangeNotAvailable),
            (418, ExchangeError),
        ],
    )
    def test_status_mapping(self, status, error_class):
        with pytest.raises(error_class) as exc_info:
            check_http_status(status, "body")
        assert exc_info.value.status_code == status

    def test_http_429_is_not_venue_rate_limit(self):
        with pytest.raises(DDoSProtection) as exc_info:
            check_http_status(429, "Too Many Requests")
        assert not isinstance(exc_info.value, RateLimitExceeded)

    def test_ok_status(self):
        assert check_http_status(200, "") is None
