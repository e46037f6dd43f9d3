"""
API method implementations for OKX client.

Contains the private endpoint calls organized by functional area. Payloads
come from ``order_builder``; responses are normalized by ``parsers``.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from aiohttp import ClientSession

from .constants import DEFAULT_PAGE_SIZE
from .errors import BadResponse
from .http_client import HttpClient
from .markets import MarketCache
from .models.account import Balances, LedgerEntry, Position, Transfer
from .models.config import ConnectionConfig
from .models.market import Market
from .models.orders import Order, OrderPayload, Trade
from .pagination import paginate
from .parsers import (
    ACCOUNT_IDS,
    parse_balance,
    parse_create_order_results,
    parse_ledger_entry,
    parse_order,
    parse_position,
    parse_trade,
    parse_transfer,
)
from .precise import number_to_string
from .utils import omit_none

logger = logging.getLogger(__name__)

ORDER_PATH = "/api/v5/trade/order"
ALGO_ORDER_PATH = "/api/v5/trade/order-algo"
OPEN_ORDERS_PATH = "/api/v5/trade/orders-pending"
OPEN_ALGO_ORDERS_PATH = "/api/v5/trade/orders-algo-pending"
CLOSED_ORDERS_PATH = "/api/v5/trade/orders-history"
FILLS_PATH = "/api/v5/trade/fills"
POSITIONS_PATH = "/api/v5/account/positions"
TRADING_BALANCE_PATH = "/api/v5/account/balance"
FUNDING_BALANCE_PATH = "/api/v5/asset/balances"
TRANSFER_PATH = "/api/v5/asset/transfer"
BILLS_PATH = "/api/v5/account/bills"


class APIMethods:
    """Container for all API method implementations."""

    def __init__(self, http_client: HttpClient, config: ConnectionConfig, markets: MarketCache):
        """Initialize API methods with HTTP client, configuration and market cache."""
        self._http_client = http_client
        self._config = config
        self._markets = markets

    def _market_of(self, record: Dict[str, Any]) -> Optional[Market]:
        inst_id = record.get("instId")
        return self._markets.safe_market(inst_id) if inst_id else None

    async def _paginated(
        self,
        session: ClientSession,
        path: str,
        params: Dict[str, Any],
        cursor_field: str,
        limit: Optional[int],
    ) -> List[Dict[str, Any]]:
        async def fetch_page(page_params: Dict[str, Any]) -> List[Dict[str, Any]]:
            return await self._http_client.request(
                session, "GET", path, params={**params, **page_params}
            )

        return await paginate(
            fetch_page,
            cursor_field,
            limit=limit,
            page_size=DEFAULT_PAGE_SIZE,
            max_pages=self._config.pagination_calls,
        )

    # Orders

    async def submit_order(
        self, session: ClientSession, payload: OrderPayload, market: Market
    ) -> Order:
        """Send a single order (plain or algo)."""
        data = await self._http_client.request(
            session, "POST", payload.path, data=payload.wire_body()
        )
        if not data:
            raise BadResponse("Order placement returned no data")
        return parse_order(data[0], market)

    async def submit_orders(
        self,
        session: ClientSession,
        payload: OrderPayload,
        markets: Sequence[Market],
    ) -> List[Order]:
        """Send a batch; rejected members come back with status 'rejected'."""
        data = await self._http_client.request(
            session, "POST", payload.path, data=payload.wire_body()
        )
        return parse_create_order_results(data, list(markets))

    async def submit_cancel(
        self, session: ClientSession, payload: OrderPayload, market: Market
    ) -> List[Order]:
        """Send a cancel request (single, batch or algo)."""
        data = await self._http_client.request(
            session, "POST", payload.path, data=payload.wire_body()
        )
        return parse_create_order_results(data, [market] * len(data))

    async def submit_amend(
        self, session: ClientSession, payload: OrderPayload, market: Market
    ) -> Order:
        data = await self._http_client.request(
            session, "POST", payload.path, data=payload.wire_body()
        )
        if not data:
            raise BadResponse("Amend returned no data")
        return parse_order(data[0], market)

    async def set_leverage(
        self, session: ClientSession, payload: OrderPayload
    ) -> Dict[str, Any]:
        data = await self._http_client.request(
            session, "POST", payload.path, data=payload.wire_body()
        )
        return data[0] if data else {}

    async def fetch_order(
        self,
        session: ClientSession,
        market: Market,
        order_id: Optional[str] = None,
        client_order_id: Optional[str] = None,
        algo: bool = False,
    ) -> Order:
        """Fetch one order by venue id or client id."""
        if algo:
            path = ALGO_ORDER_PATH
            params = omit_none({"algoId": order_id, "algoClOrdId": client_order_id})
        else:
            path = ORDER_PATH
            params = omit_none({"instId": market.id, "ordId": order_id, "clOrdId": client_order_id})
        data = await self._http_client.request(session, "GET", path, params=params)
        if not data:
            raise BadResponse(f"Order {order_id or client_order_id} returned no data")
        return parse_order(data[0], market)

    async def fetch_open_orders(
        self,
        session: ClientSession,
        market: Optional[Market] = None,
        limit: Optional[int] = None,
        algo_type: Optional[str] = None,
    ) -> List[Order]:
        """Fetch live orders; ``algo_type`` selects algo orders of that ordType."""
        params = omit_none({
            "instType": market.inst_type if market is not None else None,
            "instId": market.id if market is not None else None,
        })
        if algo_type is not None:
            params["ordType"] = algo_type
            records = await self._paginated(session, OPEN_ALGO_ORDERS_PATH, params, "algoId", limit)
        else:
            records = await self._paginated(session, OPEN_ORDERS_PATH, params, "ordId", limit)
        return [parse_order(record, market or self._market_of(record)) for record in records]

    async def fetch_closed_orders(
        self,
        session: ClientSession,
        inst_type: str,
        market: Optional[Market] = None,
        limit: Optional[int] = None,
    ) -> List[Order]:
        """Fetch filled and canceled orders of the last seven days."""
        params = omit_none({
            "instType": inst_type,
            "instId": market.id if market is not None else None,
        })
        records = await self._paginated(session, CLOSED_ORDERS_PATH, params, "ordId", limit)
        return [parse_order(record, market or self._market_of(record)) for record in records]

    async def fetch_my_trades(
        self,
        session: ClientSession,
        market: Optional[Market] = None,
        limit: Optional[int] = None,
    ) -> List[Trade]:
        params = omit_none({
            "instType": market.inst_type if market is not None else None,
            "instId": market.id if market is not None else None,
        })
        records = await self._paginated(session, FILLS_PATH, params, "billId", limit)
        return [parse_trade(record, market or self._market_of(record)) for record in records]

    # Account

    async def fetch_positions(
        self, session: ClientSession, markets: Optional[Sequence[Market]] = None
    ) -> List[Position]:
        params = {}
        if markets:
            params["instId"] = ",".join(market.id for market in markets)
        data = await self._http_client.request(session, "GET", POSITIONS_PATH, params=params)
        return [parse_position(record, self._market_of(record)) for record in data]

    async def fetch_balance(self, session: ClientSession, account: str = "trading") -> Balances:
        path = TRADING_BALANCE_PATH if account == "trading" else FUNDING_BALANCE_PATH
        data = await self._http_client.request(session, "GET", path)
        return parse_balance(data, account)

    async def transfer(
        self,
        session: ClientSession,
        currency: str,
        amount: Any,
        from_account: str,
        to_account: str,
    ) -> Transfer:
        """Move funds between the funding and trading accounts."""
        body = {
            "ccy": currency,
            "amt": number_to_string(amount),
            "from": ACCOUNT_IDS.get(from_account, from_account),
            "to": ACCOUNT_IDS.get(to_account, to_account),
            "type": "0",
        }
        data = await self._http_client.request(session, "POST", TRANSFER_PATH, data=body)
        if not data:
            raise BadResponse("Transfer returned no data")
        record = {**body, **data[0]}
        return parse_transfer(record)

    async def fetch_ledger(
        self,
        session: ClientSession,
        currency: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[LedgerEntry]:
        params = omit_none({"ccy": currency})
        records = await self._paginated(session, BILLS_PATH, params, "billId", limit)
        return [parse_ledger_entry(record, self._market_of(record)) for record in records]
