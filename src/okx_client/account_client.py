"""
OKX Client - Main orchestration module.

This module provides the main OkxClient class that coordinates all client
functionality:
- Data models are immutable structures in models/
- Order payloads are built by order_builder.py, responses parsed by parsers.py
- HTTP operations are handled by http_client.py
- Session management is handled by session_manager.py
- API methods are implemented in api_methods.py
- Market metadata is cached once by the public client
"""

import asyncio
import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Sequence

from dotenv import load_dotenv

from .api_methods import APIMethods
from .auth import ApiCredentials, OkxSigner
from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_BROKER_ID,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
    ERROR_STATUS_CODE,
    SUCCESS_STATUS_CODE,
)
from .errors import BadRequest, BadResponse
from .http_client import HttpClient
from .models import (
    Balances,
    ConnectionConfig,
    LedgerEntry,
    Market,
    Order,
    Position,
    RetryConfig,
    Trade,
    Transfer,
    is_valid_transition,
)
from .models.orders import Number
from .monitoring import PerformanceMonitor, Statistics
from .order_builder import (
    build_amend_payload,
    build_batch_payload,
    build_cancel_batch_payload,
    build_cancel_payload,
    build_leverage_payload,
    build_order_payload,
)
from .public_client import OkxPublicClient
from .session_manager import SessionManager

logger = logging.getLogger(__name__)

TRUE_VALUES = ("1", "true", "yes", "on")


class OkxClient:
    """
    Main OKX client orchestrator.

    Resolves symbols through the shared market cache, builds payloads with the
    order builder and times every call with the performance monitor.
    """

    def __init__(
        self,
        config: ConnectionConfig,
        retry_config: Optional[RetryConfig] = None,
    ):
        """Initialize OKX client with configuration."""
        self._config = config
        self._session_manager = SessionManager(config)
        self._signer = OkxSigner(
            ApiCredentials(config.api_key, config.api_secret, config.passphrase),
            simulation=config.simulation,
        )
        self._http_client = HttpClient(config, self._signer, retry_config)
        self._public = OkxPublicClient(
            base_url=config.base_url,
            option_families=config.option_families,
            simulation=config.simulation,
            retry_config=retry_config,
            auto_warmup=False,
            timeout=config.timeout,
        )
        self._api_methods = APIMethods(self._http_client, config, self._public.markets)
        self._monitor = PerformanceMonitor()
        self._closed = False

    @classmethod
    def from_env(cls, simulation: Optional[bool] = None) -> "OkxClient":
        """
        Create client from environment variables (a ``.env`` file is honored).

        Reads OKX_API_KEY, OKX_API_SECRET, OKX_PASSPHRASE, OKX_DEMO and
        OKX_BROKER_ID.
        """
        load_dotenv()
        if simulation is None:
            simulation = os.getenv("OKX_DEMO", "").strip().lower() in TRUE_VALUES

        config = ConnectionConfig(
            api_key=os.getenv("OKX_API_KEY", ""),
            api_secret=os.getenv("OKX_API_SECRET", ""),
            passphrase=os.getenv("OKX_PASSPHRASE", ""),
            simulation=simulation,
            broker_id=os.getenv("OKX_BROKER_ID", DEFAULT_BROKER_ID),
        )

        return cls(config)

    @property
    def config(self) -> ConnectionConfig:
        return self._config

    # Markets
    async def load_markets(self, reload: bool = False) -> Mapping[str, Market]:
        """Load the market cache once; concurrent callers share the load."""
        return await self._public.load_markets(reload=reload)

    async def market(self, symbol: str) -> Market:
        await self.load_markets()
        return self._public.markets.market(symbol)

    # Order methods
    async def create_order(
        self,
        symbol: str,
        order_type: str,
        side: str,
        amount: Optional[Number],
        price: Optional[Number] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Order:
        """Place an order; algo variants are routed to the algo endpoint."""
        market = await self.market(symbol)
        payload = build_order_payload(market, order_type, side, amount, price, params, self._config)
        return await self._execute_with_monitoring(
            self._api_methods.submit_order, "POST", payload.path, payload, market
        )

    async def create_orders(self, orders: Sequence[Dict[str, Any]]) -> List[Order]:
        """
        Place up to 20 plain orders in one request.

        Args:
            orders: Dicts with ``symbol``, ``type``, ``side``, ``amount`` and
                optional ``price`` and ``params``

        Returns:
            One Order per input, in order; rejected members have status
            'rejected' and carry their classified error
        """
        markets = []
        payloads = []
        for order in orders:
            market = await self.market(order["symbol"])
            markets.append(market)
            payloads.append(build_order_payload(
                market,
                order["type"],
                order["side"],
                order.get("amount"),
                order.get("price"),
                order.get("params"),
                self._config,
            ))
        payload = build_batch_payload(payloads)
        return await self._execute_with_monitoring(
            self._api_methods.submit_orders, "POST", payload.path, payload, markets
        )

    async def cancel_order(
        self,
        order_id: Optional[str],
        symbol: str,
        client_order_id: Optional[str] = None,
        algo: bool = False,
    ) -> Order:
        market = await self.market(symbol)
        payload = build_cancel_payload(market, order_id, client_order_id, algo=algo)
        results = await self._execute_with_monitoring(
            self._api_methods.submit_cancel, "POST", payload.path, payload, market
        )
        if not results:
            raise BadResponse(f"Cancel of {order_id or client_order_id} returned no data")
        return results[0]

    async def cancel_orders(self, order_ids: Sequence[str], symbol: str) -> List[Order]:
        market = await self.market(symbol)
        payload = build_cancel_batch_payload(market, order_ids)
        return await self._execute_with_monitoring(
            self._api_methods.submit_cancel, "POST", payload.path, payload, market
        )

    async def edit_order(
        self,
        order_id: Optional[str],
        symbol: str,
        amount: Optional[Number] = None,
        price: Optional[Number] = None,
        client_order_id: Optional[str] = None,
        algo: bool = False,
    ) -> Order:
        """Amend size and/or price of a live plain order."""
        market = await self.market(symbol)
        payload = build_amend_payload(market, order_id, client_order_id, amount, price, algo=algo)
        return await self._execute_with_monitoring(
            self._api_methods.submit_amend, "POST", payload.path, payload, market
        )

    async def fetch_order(
        self,
        order_id: Optional[str],
        symbol: str,
        client_order_id: Optional[str] = None,
        algo: bool = False,
    ) -> Order:
        market = await self.market(symbol)
        return await self._execute_with_monitoring(
            self._api_methods.fetch_order, "GET", "/api/v5/trade/order",
            market, order_id, client_order_id, algo,
        )

    async def refresh_order(self, order: Order, algo: bool = False) -> Order:
        """
        Re-fetch an order and check the status change against its lifecycle.

        Raises:
            BadResponse: When the venue reports an impossible transition,
                e.g. a closed order reopening
        """
        if order.id is None or order.symbol is None:
            raise BadRequest("Order needs an id and a symbol to be refreshed")
        latest = await self.fetch_order(order.id, order.symbol, algo=algo)
        if not is_valid_transition(order.status, latest.status):
            logger.warning(f"Order {order.id}: invalid transition {order.status} -> {latest.status}")
            raise BadResponse(
                f"Order {order.id} moved from {order.status!r} to {latest.status!r}"
            )
        return latest

    async def fetch_open_orders(
        self,
        symbol: Optional[str] = None,
        limit: Optional[int] = None,
        algo_type: Optional[str] = None,
    ) -> List[Order]:
        market = await self.market(symbol) if symbol is not None else None
        return await self._execute_with_monitoring(
            self._api_methods.fetch_open_orders, "GET", "/api/v5/trade/orders-pending",
            market, limit, algo_type,
        )

    async def fetch_closed_orders(
        self,
        symbol: Optional[str] = None,
        limit: Optional[int] = None,
        inst_type: Optional[str] = None,
    ) -> List[Order]:
        """Filled and canceled orders; ``inst_type`` is required without a symbol."""
        market = await self.market(symbol) if symbol is not None else None
        inst_type = inst_type or (market.inst_type if market is not None else None)
        if inst_type is None:
            raise BadRequest("fetch_closed_orders requires a symbol or an inst_type")
        return await self._execute_with_monitoring(
            self._api_methods.fetch_closed_orders, "GET", "/api/v5/trade/orders-history",
            inst_type, market, limit,
        )

    async def fetch_my_trades(
        self, symbol: Optional[str] = None, limit: Optional[int] = None
    ) -> List[Trade]:
        market = await self.market(symbol) if symbol is not None else None
        return await self._execute_with_monitoring(
            self._api_methods.fetch_my_trades, "GET", "/api/v5/trade/fills", market, limit
        )

    # Account methods
    async def fetch_positions(self, symbols: Optional[Sequence[str]] = None) -> List[Position]:
        await self.load_markets()
        markets = [await self.market(symbol) for symbol in symbols] if symbols else None
        return await self._execute_with_monitoring(
            self._api_methods.fetch_positions, "GET", "/api/v5/account/positions", markets
        )

    async def fetch_balance(self, account: str = "trading") -> Balances:
        """Balances of the trading or the funding account."""
        if account not in ("trading", "funding"):
            raise BadRequest(f"Unknown account: {account!r}")
        return await self._execute_with_monitoring(
            self._api_methods.fetch_balance, "GET", "/api/v5/account/balance", account
        )

    async def transfer(
        self, currency: str, amount: Number, from_account: str, to_account: str
    ) -> Transfer:
        return await self._execute_with_monitoring(
            self._api_methods.transfer, "POST", "/api/v5/asset/transfer",
            currency, amount, from_account, to_account,
        )

    async def fetch_ledger(
        self, currency: Optional[str] = None, limit: Optional[int] = None
    ) -> List[LedgerEntry]:
        await self.load_markets()
        return await self._execute_with_monitoring(
            self._api_methods.fetch_ledger, "GET", "/api/v5/account/bills", currency, limit
        )

    async def set_leverage(
        self,
        leverage: Number,
        symbol: str,
        margin_mode: Optional[str] = None,
        position_side: Optional[str] = None,
    ) -> Dict[str, Any]:
        market = await self.market(symbol)
        payload = build_leverage_payload(market, leverage, margin_mode, position_side, self._config)
        return await self._execute_with_monitoring(
            self._api_methods.set_leverage, "POST", payload.path, payload
        )

    # Monitoring and health
    async def health_check(self) -> bool:
        """Check client health."""
        await self._session_manager.create_session()
        return await self._session_manager.health_check()

    def get_statistics(self) -> Statistics:
        """Get performance statistics."""
        return self._monitor.statistics

    async def close(self) -> None:
        """Close client and cleanup resources."""
        if not self._closed:
            await self._session_manager.close_session()
            await self._public.close()
            self._closed = True
            logger.info("OKX client closed")

    async def _execute_with_monitoring(
        self, api_method, method: str, endpoint: str, *args, **kwargs
    ):
        """Execute API method with performance monitoring."""
        if self._closed:
            raise RuntimeError("Client is closed")

        start_time = asyncio.get_running_loop().time()
        session = await self._session_manager.create_session()

        try:
            result = await api_method(session, *args, **kwargs)
            duration_ms = (asyncio.get_running_loop().time() - start_time) * 1000

            self._monitor.record_request(endpoint, method, SUCCESS_STATUS_CODE, duration_ms)
            return result

        except Exception as e:
            duration_ms = (asyncio.get_running_loop().time() - start_time) * 1000
            status_code = getattr(e, "status_code", None) or ERROR_STATUS_CODE

            self._monitor.record_request(
                endpoint,
                method,
                status_code,
                duration_ms,
                error_type=type(e).__name__,
                retryable=getattr(e, "retryable", False),
            )
            raise

    # Context manager support
    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    def __del__(self):
        """Cleanup on deletion."""
        if hasattr(self, "_closed") and not self._closed:
            logger.warning("OkxClient not properly closed - call close() explicitly")


def create_okx_client(
    api_key: str,
    api_secret: str,
    passphrase: str,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
    simulation: bool = False,
    broker_id: str = DEFAULT_BROKER_ID,
    max_retries: int = DEFAULT_MAX_RETRIES,
    retry_delay: float = DEFAULT_RETRY_DELAY,
    **options: Any,
) -> OkxClient:
    """
    Factory function to create OKX client with common configuration.

    Args:
        api_key: API key for authentication
        api_secret: API secret for authentication
        passphrase: API passphrase chosen when the key was created
        base_url: Base URL for API endpoints
        timeout: Request timeout in seconds
        simulation: Trade on the demo environment
        broker_id: Attribution tag for orders
        max_retries: Maximum number of transport retry attempts
        retry_delay: Initial delay between retries in seconds
        **options: Further ``ConnectionConfig`` fields

    Returns:
        Configured OkxClient instance
    """
    config = ConnectionConfig(
        api_key=api_key,
        api_secret=api_secret,
        passphrase=passphrase,
        base_url=base_url,
        timeout=timeout,
        simulation=simulation,
        broker_id=broker_id,
        **options,
    )

    retry_config = RetryConfig(
        max_retries=max_retries,
        retry_delay=retry_delay,
    )

    return OkxClient(config, retry_config)
