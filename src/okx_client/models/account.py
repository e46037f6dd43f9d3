"""
Account-related models for OKX client.

Immutable snapshots for positions, balances, transfers and ledger entries.
A new fetch yields a new snapshot; nothing here is mutated after creation.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class Position:
    """Position data structure."""
    symbol: str
    side: Optional[str]  # "long" or "short"
    contracts: Optional[Decimal]
    contract_size: Optional[Decimal]
    entry_price: Optional[Decimal]
    mark_price: Optional[Decimal]
    notional: Optional[Decimal]
    leverage: Optional[Decimal]
    margin_mode: Optional[str]
    liquidation_price: Optional[Decimal]
    unrealized_pnl: Optional[Decimal]
    percentage: Optional[Decimal]
    initial_margin: Optional[Decimal]
    maintenance_margin: Optional[Decimal]
    maintenance_margin_percentage: Optional[Decimal]
    collateral: Optional[Decimal]
    hedged: bool
    timestamp: Optional[int]
    info: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class BalanceEntry:
    """Balance of a single currency."""
    currency: str
    free: Optional[Decimal]
    used: Optional[Decimal]
    total: Optional[Decimal]


@dataclass(frozen=True)
class Balances:
    """Account balance snapshot."""
    account: str  # "trading" or "funding"
    entries: Mapping[str, BalanceEntry]
    timestamp: Optional[int] = None
    info: Any = field(default=None, compare=False, repr=False)

    def get(self, currency: str) -> Optional[BalanceEntry]:
        return self.entries.get(currency)


@dataclass(frozen=True)
class Transfer:
    """Internal transfer between accounts."""
    id: Optional[str]
    currency: Optional[str]
    amount: Optional[Decimal]
    from_account: Optional[str]
    to_account: Optional[str]
    status: Optional[str]
    timestamp: Optional[int]
    info: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class LedgerEntry:
    """Account bill."""
    id: Optional[str]
    currency: Optional[str]
    direction: Optional[str]  # "in" or "out"
    amount: Optional[Decimal]
    before: Optional[Decimal]
    after: Optional[Decimal]
    type: Optional[str]
    reference_id: Optional[str]
    symbol: Optional[str]
    fee: Optional[Any]
    timestamp: Optional[int]
    info: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)
