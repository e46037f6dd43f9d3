"""
Market metadata: OKX instrument parsing and the shared market cache.

The cache is loaded once (single flight: concurrent callers await the same
load) and is read-only afterwards until an explicit reload.
"""

import asyncio
import logging
from datetime import datetime, timezone
from decimal import InvalidOperation
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional

from .errors import BadRequest, BadSymbol
from .models.market import Market, MarketLimits, MarketPrecision, MinMax
from .utils import safe_decimal, safe_integer, safe_string

logger = logging.getLogger(__name__)

INST_TYPES: Mapping[str, str] = MappingProxyType({
    "SPOT": "spot",
    "SWAP": "swap",
    "FUTURES": "future",
    "OPTION": "option",
})

MarketLoader = Callable[[], Awaitable[List[Market]]]


def _expiry_code(expiry_ms: Optional[int]) -> str:
    return datetime.fromtimestamp(expiry_ms / 1000, tz=timezone.utc).strftime("%y%m%d")


def parse_market(instrument: Dict[str, Any]) -> Market:
    """
    Build a Market from an OKX ``public/instruments`` record.

    Raises:
        BadRequest: When the record lacks the fields a market needs
    """
    inst_id = safe_string(instrument, "instId")
    market_type = INST_TYPES.get(safe_string(instrument, "instType", ""))
    if inst_id is None or market_type is None:
        raise BadRequest(f"Unsupported instrument: {instrument.get('instId')!r}")

    parts = inst_id.split("-")
    spot = market_type == "spot"
    if spot:
        base = safe_string(instrument, "baseCcy") or parts[0]
        quote = safe_string(instrument, "quoteCcy") or parts[1]
        settle = None
    else:
        family = safe_string(instrument, "instFamily") or safe_string(instrument, "uly") or "-".join(parts[:2])
        base, quote = family.split("-")[:2]
        settle = safe_string(instrument, "settleCcy")

    expiry = safe_integer(instrument, "expTime")
    strike = safe_decimal(instrument, "stk")
    option_type = {"C": "call", "P": "put"}.get(safe_string(instrument, "optType", ""))

    symbol = f"{base}/{quote}"
    if not spot:
        symbol = f"{symbol}:{settle}"
        if market_type in ("future", "option"):
            if expiry is None:
                raise BadRequest(f"Instrument {inst_id} has no expiry")
            symbol = f"{symbol}-{_expiry_code(expiry)}"
        if market_type == "option":
            symbol = f"{symbol}-{safe_string(instrument, 'stk')}-{safe_string(instrument, 'optType')}"

    contract_type = safe_string(instrument, "ctType")
    if spot:
        linear = inverse = None
    elif contract_type in ("linear", "inverse"):
        linear = contract_type == "linear"
        inverse = not linear
    else:
        linear = settle == quote
        inverse = settle == base

    max_leverage = safe_decimal(instrument, "lever")

    return Market(
        id=inst_id,
        symbol=symbol,
        base=base,
        quote=quote,
        type=market_type,
        settle=settle,
        spot=spot,
        # spot instruments carry a leverage only when margin trading is enabled
        margin=spot and max_leverage is not None and max_leverage > 1,
        swap=market_type == "swap",
        future=market_type == "future",
        option=market_type == "option",
        linear=linear,
        inverse=inverse,
        contract_size=None if spot else safe_decimal(instrument, "ctVal"),
        expiry=expiry if market_type in ("future", "option") else None,
        strike=strike,
        option_type=option_type,
        active=safe_string(instrument, "state") == "live",
        precision=MarketPrecision(
            amount=safe_decimal(instrument, "lotSz"),
            price=safe_decimal(instrument, "tickSz"),
        ),
        limits=MarketLimits(
            amount=MinMax(min=safe_decimal(instrument, "minSz"), max=safe_decimal(instrument, "maxLmtSz")),
            leverage=MinMax(min=None, max=max_leverage),
        ),
        info=instrument,
    )


def parse_markets(instruments: Iterable[Dict[str, Any]]) -> List[Market]:
    """Parse instruments, skipping the ones that cannot be parsed."""
    markets = []
    for instrument in instruments:
        try:
            markets.append(parse_market(instrument))
        except (BadRequest, InvalidOperation, ValueError, TypeError) as e:
            logger.warning(f"Skipping instrument {instrument.get('instId')!r}: {e}")
    return markets


class MarketCache:
    """
    Shared market lookup keyed by unified symbol and by venue id.

    ``load`` is single-flight: while a load is in progress every caller awaits
    the same task, so the venue is queried once.
    """

    def __init__(self, loader: MarketLoader):
        """
        Initialize the cache.

        Args:
            loader: Coroutine function returning every market to cache
        """
        self._loader = loader
        self._markets: Mapping[str, Market] = MappingProxyType({})
        self._markets_by_id: Mapping[str, Market] = MappingProxyType({})
        self._loaded = False
        self._task: Optional["asyncio.Future[Mapping[str, Market]]"] = None

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def markets(self) -> Mapping[str, Market]:
        return self._markets

    async def load(self, reload: bool = False) -> Mapping[str, Market]:
        """
        Load markets once, or again when ``reload`` is set.

        A failed load is not cached; the next call tries again.
        """
        if self._loaded and not reload:
            logger.debug("Markets already loaded")
            return self._markets

        if self._task is None:
            self._task = asyncio.ensure_future(self._load())
            self._task.add_done_callback(self._load_finished)
        # shield: a cancelled caller must not cancel the shared load
        return await asyncio.shield(self._task)

    def _load_finished(self, task: "asyncio.Future[Mapping[str, Market]]") -> None:
        if self._task is task:
            self._task = None
        if not task.cancelled() and task.exception() is not None:
            logger.warning(f"Market load failed: {task.exception()!r}")

    async def _load(self) -> Mapping[str, Market]:
        markets = await self._loader()
        self._markets = MappingProxyType({market.symbol: market for market in markets})
        self._markets_by_id = MappingProxyType({market.id: market for market in markets})
        self._loaded = True
        logger.info(f"Market cache loaded with {len(self._markets)} markets")
        return self._markets

    def market(self, symbol: str) -> Market:
        """Look up a market by unified symbol or venue id."""
        market = self.safe_market(symbol)
        if market is None:
            raise BadSymbol(f"Unknown market: {symbol}")
        return market

    def market_by_id(self, inst_id: str) -> Market:
        market = self._markets_by_id.get(inst_id)
        if market is None:
            raise BadSymbol(f"Unknown instrument id: {inst_id}")
        return market

    def safe_market(self, symbol: Optional[str]) -> Optional[Market]:
        """Like ``market`` but returns None for unknown symbols."""
        if symbol is None:
            return None
        return self._markets.get(symbol) or self._markets_by_id.get(symbol)
