"""
Market-related models for OKX client.

Immutable market metadata, created once when the market cache is loaded.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class MarketPrecision:
    """Lot size (amount) and tick size (price) steps."""
    amount: Optional[Decimal] = None
    price: Optional[Decimal] = None


@dataclass(frozen=True)
class MinMax:
    """Inclusive bounds; ``None`` means unbounded."""
    min: Optional[Decimal] = None
    max: Optional[Decimal] = None


@dataclass(frozen=True)
class MarketLimits:
    """Order size limits for a market."""
    amount: MinMax = field(default_factory=MinMax)
    price: MinMax = field(default_factory=MinMax)
    cost: MinMax = field(default_factory=MinMax)
    leverage: MinMax = field(default_factory=MinMax)


@dataclass(frozen=True)
class Market:
    """Market data structure."""
    id: str  # venue instId, e.g. "BTC-USDT-SWAP"
    symbol: str  # unified symbol, e.g. "BTC/USDT:USDT"
    base: str
    quote: str
    type: str  # "spot", "swap", "future" or "option"
    settle: Optional[str] = None
    spot: bool = False
    margin: bool = False
    swap: bool = False
    future: bool = False
    option: bool = False
    linear: Optional[bool] = None
    inverse: Optional[bool] = None
    contract_size: Optional[Decimal] = None
    expiry: Optional[int] = None
    strike: Optional[Decimal] = None
    option_type: Optional[str] = None  # "call" or "put"
    active: bool = True
    precision: MarketPrecision = field(default_factory=MarketPrecision)
    limits: MarketLimits = field(default_factory=MarketLimits)
    info: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def contract(self) -> bool:
        """True for swap, future and option markets."""
        return self.swap or self.future or self.option

    @property
    def inst_type(self) -> str:
        """Venue instrument type for this market."""
        return {
            "spot": "SPOT",
            "swap": "SWAP",
            "future": "FUTURES",
            "option": "OPTION",
        }[self.type]
