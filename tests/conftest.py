# -*- coding: utf-8 -*-
"""
Shared fixtures and utilities for testing OKX client.
"""

import pytest
from decimal import Decimal
from typing import Dict, Any
from unittest.mock import Mock, AsyncMock

from okx_client.account_client import OkxClient
from okx_client.models import ConnectionConfig, RetryConfig
from okx_client.models.market import Market, MarketLimits, MarketPrecision, MinMax
from okx_client.public_client import OkxPublicClient


# Credentials
TEST_API_KEY = "a1b2c3d4-e5f6-7a8b-9c0d-e1f2a3b4c5d6"
TEST_API_SECRET = "0123456789ABCDEF0123456789ABCDEF"
TEST_PASSPHRASE = "Passphrase1!"


# Market fixtures
@pytest.fixture
def spot_market() -> Market:
    """BTC/USDT spot market with margin trading enabled."""
    return Market(
        id="BTC-USDT",
        symbol="BTC/USDT",
        base="BTC",
        quote="USDT",
        type="spot",
        spot=True,
        margin=True,
        precision=MarketPrecision(amount=Decimal("0.00000001"), price=Decimal("0.1")),
        limits=MarketLimits(amount=MinMax(min=Decimal("0.00001"))),
    )


@pytest.fixture
def spot_cash_market() -> Market:
    """Spot market without margin trading."""
    return Market(
        id="OKB-USDT",
        symbol="OKB/USDT",
        base="OKB",
        quote="USDT",
        type="spot",
        spot=True,
        margin=False,
        precision=MarketPrecision(amount=Decimal("0.001"), price=Decimal("0.001")),
    )


@pytest.fixture
def swap_market() -> Market:
    """Linear BTC/USDT perpetual swap."""
    return Market(
        id="BTC-USDT-SWAP",
        symbol="BTC/USDT:USDT",
        base="BTC",
        quote="USDT",
        type="swap",
        settle="USDT",
        swap=True,
        linear=True,
        inverse=False,
        contract_size=Decimal("0.01"),
        precision=MarketPrecision(amount=Decimal("1"), price=Decimal("0.1")),
    )


@pytest.fixture
def inverse_market() -> Market:
    """Inverse BTC/USD perpetual swap."""
    return Market(
        id="BTC-USD-SWAP",
        symbol="BTC/USD:BTC",
        base="BTC",
        quote="USD",
        type="swap",
        settle="BTC",
        swap=True,
        linear=False,
        inverse=True,
        contract_size=Decimal("100"),
        precision=MarketPrecision(amount=Decimal("1"), price=Decimal("0.1")),
    )


@pytest.fixture
def unknown_precision_market() -> Market:
    """Market whose lot and tick sizes are unknown."""
    return Market(
        id="XYZ-USDT",
        symbol="XYZ/USDT",
        base="XYZ",
        quote="USDT",
        type="spot",
        spot=True,
    )


# Raw instrument fixtures
@pytest.fixture
def spot_instrument() -> Dict[str, Any]:
    return {
        "instType": "SPOT",
        "instId": "BTC-USDT",
        "baseCcy": "BTC",
        "quoteCcy": "USDT",
        "settleCcy": "",
        "ctVal": "",
        "ctType": "",
        "lever": "10",
        "tickSz": "0.1",
        "lotSz": "0.00000001",
        "minSz": "0.00001",
        "maxLmtSz": "9999999999",
        "expTime": "",
        "stk": "",
        "optType": "",
        "state": "live",
    }


@pytest.fixture
def swap_instrument() -> Dict[str, Any]:
    return {
        "instType": "SWAP",
        "instId": "BTC-USDT-SWAP",
        "instFamily": "BTC-USDT",
        "uly": "BTC-USDT",
        "baseCcy": "",
        "quoteCcy": "",
        "settleCcy": "USDT",
        "ctVal": "0.01",
        "ctType": "linear",
        "lever": "100",
        "tickSz": "0.1",
        "lotSz": "1",
        "minSz": "1",
        "maxLmtSz": "100000",
        "expTime": "",
        "state": "live",
    }


@pytest.fixture
def future_instrument() -> Dict[str, Any]:
    return {
        "instType": "FUTURES",
        "instId": "BTC-USD-240329",
        "instFamily": "BTC-USD",
        "settleCcy": "BTC",
        "ctVal": "100",
        "ctType": "inverse",
        "lever": "100",
        "tickSz": "0.1",
        "lotSz": "1",
        "minSz": "1",
        "expTime": "1711699200000",
        "state": "live",
    }


@pytest.fixture
def option_instrument() -> Dict[str, Any]:
    return {
        "instType": "OPTION",
        "instId": "BTC-USD-240329-50000-C",
        "instFamily": "BTC-USD",
        "settleCcy": "BTC",
        "ctVal": "0.01",
        "ctType": "",
        "tickSz": "0.0005",
        "lotSz": "1",
        "minSz": "1",
        "expTime": "1711699200000",
        "stk": "50000",
        "optType": "C",
        "state": "live",
    }


# Configuration fixtures
@pytest.fixture
def connection_config() -> ConnectionConfig:
    """Connection config with valid-looking credentials."""
    return ConnectionConfig(
        api_key=TEST_API_KEY,
        api_secret=TEST_API_SECRET,
        passphrase=TEST_PASSPHRASE,
        base_url="https://test-api.example.com",
        broker_id="brokerABC",
    )


@pytest.fixture
def retry_config() -> RetryConfig:
    """Retry config without delays."""
    return RetryConfig(max_retries=2, retry_delay=0.0)


@pytest.fixture
async def account_client(connection_config, retry_config):
    """OkxClient that is closed after the test."""
    client = OkxClient(connection_config, retry_config)
    yield client
    await client.close()


@pytest.fixture
def public_client():
    """Fresh OkxPublicClient instance for testing."""
    return OkxPublicClient(base_url="https://test-api.example.com", auto_warmup=False)


# Raw order fixtures
@pytest.fixture
def spot_limit_order_data() -> Dict[str, Any]:
    return {
        "instType": "SPOT",
        "instId": "BTC-USDT",
        "ordId": "312269865356374016",
        "clOrdId": "b1",
        "tag": "",
        "px": "29000.1",
        "sz": "0.5",
        "ordType": "limit",
        "side": "buy",
        "posSide": "net",
        "tdMode": "cash",
        "accFillSz": "0.2",
        "avgPx": "29000",
        "state": "partially_filled",
        "fee": "-0.0002",
        "feeCcy": "BTC",
        "tgtCcy": "",
        "reduceOnly": "false",
        "cTime": "1597026383085",
        "uTime": "1597026383090",
        "fillTime": "1597026383088",
        "tpTriggerPx": "",
        "slTriggerPx": "",
    }


@pytest.fixture
def rejected_item() -> Dict[str, Any]:
    return {
        "ordId": "",
        "clOrdId": "reject1",
        "tag": "",
        "sCode": "51008",
        "sMsg": "Order failed. Insufficient USDT balance in account.",
    }


# Utility fixtures
@pytest.fixture
def mock_client_session():
    """Mock aiohttp ClientSession."""
    import aiohttp

    session = Mock(spec=aiohttp.ClientSession)
    session.request = Mock()
    session.close = AsyncMock()
    session.closed = False
    return session
