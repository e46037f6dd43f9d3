"""
OKX public market data client.

Unauthenticated access to instruments, tickers and order books. Markets of
all instrument types are fetched concurrently and cached once.
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from aiohttp import ClientSession, ClientTimeout

from .auth import ApiCredentials, OkxSigner
from .constants import DEFAULT_BASE_URL, DEFAULT_OPTION_FAMILIES, DEFAULT_TIMEOUT, MARKET_TYPES
from .errors import BadRequest
from .http_client import HttpClient
from .markets import MarketCache, parse_markets
from .models.config import ConnectionConfig, RetryConfig
from .models.market import Market
from .utils import validate_url

logger = logging.getLogger(__name__)

INSTRUMENTS_PATH = "/api/v5/public/instruments"
TICKER_PATH = "/api/v5/market/ticker"
ORDER_BOOK_PATH = "/api/v5/market/books"
SERVER_TIME_PATH = "/api/v5/public/time"

INST_TYPE_BY_MARKET_TYPE: Mapping[str, str] = {
    "spot": "SPOT",
    "swap": "SWAP",
    "future": "FUTURES",
    "option": "OPTION",
}

ORDER_BOOK_DEPTHS = (1, 5, 20, 50, 100, 400)


class OkxPublicClient:
    """
    A lightweight client for OKX public market data.

    The market cache is owned by the instance; ``load_markets`` queries the
    venue at most once unless asked to reload.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        option_families: Sequence[str] = DEFAULT_OPTION_FAMILIES,
        simulation: bool = False,
        retry_config: Optional[RetryConfig] = None,
        auto_warmup: bool = True,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the public OKX client.

        Args:
            base_url: Base URL for the API
            option_families: Instrument families whose options are loaded
            simulation: Send the demo-trading header
            retry_config: Transport retry settings
            auto_warmup: Load markets when entering the context manager
            timeout: Total request timeout in seconds
        """
        if not isinstance(base_url, str) or not validate_url(base_url):
            raise ValueError("Base URL must be a valid HTTP/HTTPS URL")

        self.base_url = base_url.rstrip("/")
        self.option_families = tuple(option_families)
        self._config = ConnectionConfig(base_url=self.base_url, simulation=simulation, timeout=timeout)
        self._http_client = HttpClient(
            self._config,
            OkxSigner(ApiCredentials("", "", ""), simulation=simulation),
            retry_config,
        )
        self._session: Optional[ClientSession] = None
        self._timeout = ClientTimeout(total=timeout)
        self._auto_warmup = auto_warmup
        self.markets = MarketCache(self.fetch_markets)

        logger.info(f"OkxPublicClient initialized for {self.base_url}")

    async def _get_session(self) -> ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = ClientSession(timeout=self._timeout)
        return self._session

    async def close(self):
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        """Async context manager entry."""
        if self._auto_warmup:
            await self.load_markets()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _make_request(self, path: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        session = await self._get_session()
        return await self._http_client.request(session, "GET", path, params=params, private=False)

    async def fetch_instruments(
        self, inst_type: str, inst_family: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Raw instrument records of one instrument type."""
        params = {"instType": inst_type}
        if inst_family is not None:
            params["instFamily"] = inst_family
        return await self._make_request(INSTRUMENTS_PATH, params)

    async def fetch_markets(self, types: Iterable[str] = MARKET_TYPES) -> List[Market]:
        """
        Fetch and parse markets of every requested type.

        One request per instrument type (options: one per configured family)
        runs concurrently; results are merged in request order.
        """
        queries = []
        for market_type in types:
            inst_type = INST_TYPE_BY_MARKET_TYPE.get(market_type)
            if inst_type is None:
                raise BadRequest(f"Unsupported market type: {market_type!r}")
            if market_type == "option":
                queries.extend((inst_type, family) for family in self.option_families)
            else:
                queries.append((inst_type, None))

        pages = await asyncio.gather(
            *(self.fetch_instruments(inst_type, family) for inst_type, family in queries)
        )
        markets = parse_markets(instrument for page in pages for instrument in page)
        logger.debug(f"Fetched {len(markets)} markets across {len(pages)} requests")
        return markets

    async def load_markets(self, reload: bool = False) -> Mapping[str, Market]:
        """Load the market cache (single flight)."""
        return await self.markets.load(reload=reload)

    async def warmup_cache(self) -> int:
        """Preload markets; returns the number cached."""
        markets = await self.load_markets()
        return len(markets)

    async def fetch_ticker(self, symbol: str) -> Dict[str, Any]:
        """Raw ticker for a market."""
        market = await self._resolve(symbol)
        data = await self._make_request(TICKER_PATH, {"instId": market.id})
        if not data:
            raise BadRequest(f"No ticker for {symbol}")
        return data[0]

    async def fetch_order_book(self, symbol: str, limit: int = 5) -> Dict[str, Any]:
        """
        Raw order book for a market.

        Returns:
            ``{"asks": [[px, sz, _, count], ...], "bids": [...], "ts": "..."}``
        """
        if limit not in ORDER_BOOK_DEPTHS:
            raise ValueError(f"Invalid limit: {limit}. Valid limits are: {list(ORDER_BOOK_DEPTHS)}")
        market = await self._resolve(symbol)
        data = await self._make_request(ORDER_BOOK_PATH, {"instId": market.id, "sz": str(limit)})
        if not data:
            raise BadRequest(f"No order book for {symbol}")
        return data[0]

    async def fetch_time(self) -> int:
        """Server time in milliseconds."""
        data = await self._make_request(SERVER_TIME_PATH)
        return int(data[0]["ts"])

    async def _resolve(self, symbol: str) -> Market:
        await self.load_markets()
        return self.markets.market(symbol)
