"""
Data models for OKX client.

This package contains all data structures used throughout the OKX client,
following the state-first principle with immutable data structures.
"""

from .config import ConnectionConfig, RetryConfig, load_config
from .orders import (
    ALGO_ORDER_TYPES,
    ORDER_OPTIONS,
    Endpoint,
    Fee,
    Order,
    OrderParams,
    OrderPayload,
    OrderStatus,
    SliceParams,
    Trade,
    TriggerLeg,
    is_valid_transition,
)
from .account import Balances, BalanceEntry, LedgerEntry, Position, Transfer
from .market import Market, MarketLimits, MarketPrecision, MinMax

__all__ = [
    # Configuration
    "ConnectionConfig",
    "RetryConfig",
    "load_config",
    # Orders
    "ALGO_ORDER_TYPES",
    "ORDER_OPTIONS",
    "Endpoint",
    "Fee",
    "Order",
    "OrderParams",
    "OrderPayload",
    "OrderStatus",
    "SliceParams",
    "Trade",
    "TriggerLeg",
    "is_valid_transition",
    # Account
    "Balances",
    "BalanceEntry",
    "LedgerEntry",
    "Position",
    "Transfer",
    # Market
    "Market",
    "MarketLimits",
    "MarketPrecision",
    "MinMax",
]
