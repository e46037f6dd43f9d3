"""
OKX Client - Python client for the OKX v5 REST API.

This package translates between a unified trading model and the OKX wire
protocol: decimal-exact order payloads, request signing, response
normalization and error classification.
"""

from .account_client import OkxClient, create_okx_client
from .auth import ApiCredentials, OkxSigner, PreparedRequest, SignedRequest
from .error_classifier import check_response, classify, classify_item
from .errors import (
    AccountNotEnabled,
    AccountSuspended,
    AuthenticationError,
    BadRequest,
    BadResponse,
    BadSymbol,
    CancelPending,
    ConflictingOrderParams,
    DDoSProtection,
    DuplicateOrderId,
    ExchangeError,
    ExchangeNotAvailable,
    InsufficientFunds,
    InvalidNonce,
    InvalidOrder,
    MissingCost,
    NetworkError,
    NotSupported,
    OkxError,
    OnMaintenance,
    OrderNotFound,
    PermissionDenied,
    RateLimitExceeded,
    RequestTimeout,
    RestrictedLocation,
)
from .markets import MarketCache, parse_market
from .models import (
    # Configuration
    ConnectionConfig,
    RetryConfig,
    load_config,
    # Orders
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
    # Account
    Balances,
    BalanceEntry,
    LedgerEntry,
    Position,
    Transfer,
    # Market
    Market,
)
from .order_builder import (
    build_amend_payload,
    build_batch_payload,
    build_cancel_payload,
    build_leverage_payload,
    build_order_payload,
)
from .pagination import paginate
from .public_client import OkxPublicClient

__all__ = [
    # Main Clients
    "OkxClient",
    "create_okx_client",
    "OkxPublicClient",
    "MarketCache",
    "parse_market",
    # Signing
    "ApiCredentials",
    "OkxSigner",
    "PreparedRequest",
    "SignedRequest",
    # Order building
    "build_order_payload",
    "build_batch_payload",
    "build_cancel_payload",
    "build_amend_payload",
    "build_leverage_payload",
    "paginate",
    # Errors
    "check_response",
    "classify",
    "classify_item",
    "OkxError",
    "ExchangeError",
    "AuthenticationError",
    "PermissionDenied",
    "AccountSuspended",
    "AccountNotEnabled",
    "RestrictedLocation",
    "BadRequest",
    "BadSymbol",
    "ConflictingOrderParams",
    "InsufficientFunds",
    "InvalidOrder",
    "OrderNotFound",
    "CancelPending",
    "DuplicateOrderId",
    "MissingCost",
    "NotSupported",
    "BadResponse",
    "NetworkError",
    "DDoSProtection",
    "RateLimitExceeded",
    "ExchangeNotAvailable",
    "OnMaintenance",
    "RequestTimeout",
    "InvalidNonce",
    # Models
    "ConnectionConfig",
    "RetryConfig",
    "load_config",
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
    "Balances",
    "BalanceEntry",
    "LedgerEntry",
    "Position",
    "Transfer",
    "Market",
]
