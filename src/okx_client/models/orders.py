"""
Order-related models for OKX client.

Immutable data structures for order requests, wire payloads and normalized
orders.
"""

from dataclasses import dataclass, field, fields
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from ..errors import BadRequest

Number = Union[str, int, float, Decimal]


class Endpoint(Enum):
    """Endpoint a payload must be sent to."""
    ORDER = "/api/v5/trade/order"
    BATCH = "/api/v5/trade/batch-orders"
    ALGO = "/api/v5/trade/order-algo"
    CANCEL = "/api/v5/trade/cancel-order"
    CANCEL_BATCH = "/api/v5/trade/cancel-batch-orders"
    CANCEL_ALGO = "/api/v5/trade/cancel-algos"
    AMEND = "/api/v5/trade/amend-order"
    LEVERAGE = "/api/v5/account/set-leverage"


# Endpoints whose wire body is a JSON array rather than an object
LIST_ENDPOINTS = frozenset({Endpoint.BATCH, Endpoint.CANCEL_BATCH, Endpoint.CANCEL_ALGO})


ALGO_ORDER_TYPES = frozenset(
    {"trigger", "conditional", "move_order_stop", "oco", "iceberg", "twap"}
)


class OrderStatus:
    """Unified order states."""
    OPEN = "open"
    CLOSED = "closed"
    CANCELED = "canceled"
    REJECTED = "rejected"

    TERMINAL = frozenset({CLOSED, CANCELED, REJECTED})


def is_valid_transition(previous: Optional[str], current: str) -> bool:
    """Check an order status change against the order lifecycle.

    ``rejected`` is only reachable at creation; ``open`` may move to
    ``closed`` or ``canceled``; terminal states never change. Unmapped venue
    states are not judged.
    """
    known = OrderStatus.TERMINAL | {OrderStatus.OPEN}
    if previous is None:
        return True
    if previous not in known or current not in known:
        return True
    if previous == current:
        return True
    if previous == OrderStatus.OPEN:
        return current in (OrderStatus.CLOSED, OrderStatus.CANCELED)
    return False


@dataclass(frozen=True)
class TriggerLeg:
    """Stop-loss or take-profit leg.

    Attributes:
        trigger_price: Price that activates the leg
        price: Limit price once triggered; ``None`` executes at market
        trigger_price_type: "last", "index" or "mark"
    """
    trigger_price: Number
    price: Optional[Number] = None
    trigger_price_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TriggerLeg":
        unknown = set(data) - {"trigger_price", "price", "trigger_price_type"}
        if unknown:
            raise BadRequest(f"Unknown trigger leg options: {sorted(unknown)}")
        if data.get("trigger_price") is None:
            raise BadRequest("Trigger leg requires trigger_price")
        return cls(
            trigger_price=data["trigger_price"],
            price=data.get("price"),
            trigger_price_type=data.get("trigger_price_type"),
        )


@dataclass(frozen=True)
class SliceParams:
    """Iceberg or TWAP slicing parameters."""
    kind: str  # "iceberg" or "twap"
    size_limit: Number  # average amount per child order
    price_limit: Number  # worst acceptable price
    price_variance: Optional[Number] = None  # ratio, e.g. 0.001
    price_spread: Optional[Number] = None  # absolute distance
    time_interval: Optional[int] = None  # seconds, twap only

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SliceParams":
        allowed = {f.name for f in fields(cls)}
        unknown = set(data) - allowed
        if unknown:
            raise BadRequest(f"Unknown slice options: {sorted(unknown)}")
        return cls(**data)


ORDER_OPTIONS: Mapping[str, str] = MappingProxyType({
    "time_in_force": "GTC, IOC, FOK or PO",
    "post_only": "maker-only; outranks IOC/FOK",
    "reduce_only": "may only reduce an open position",
    "margin_mode": "cross or isolated; overrides the configured default",
    "position_side": "long, short or net; explicit hedged-mode side",
    "hedged": "account runs in long/short position mode",
    "client_order_id": "caller attribution token, up to 32 alphanumerics",
    "trigger_price": "sets the trigger leg; routes to the algo endpoint",
    "trigger_price_type": "last, index or mark",
    "stop_loss": "structured stop-loss leg",
    "take_profit": "structured take-profit leg",
    "stop_loss_price": "discrete stop-loss trigger price",
    "take_profit_price": "discrete take-profit trigger price",
    "trailing_percent": "trailing stop callback in percent",
    "trailing_trigger_price": "activation price for a trailing stop",
    "target_currency": "base or quote; unit of a spot market order size",
    "cost": "quote amount to spend on a spot market buy",
    "borrow_currency": "currency borrowed on spot margin",
    "attach_protective": "attach stop-loss/take-profit legs to a plain order",
    "slice": "iceberg or twap slicing",
    "extra": "labeled extra wire fields sent verbatim",
})


@dataclass(frozen=True)
class OrderParams:
    """Typed optional order options. See ``ORDER_OPTIONS``."""
    time_in_force: Optional[str] = None
    post_only: bool = False
    reduce_only: bool = False
    margin_mode: Optional[str] = None
    position_side: Optional[str] = None
    hedged: Optional[bool] = None
    client_order_id: Optional[str] = None
    trigger_price: Optional[Number] = None
    trigger_price_type: Optional[str] = None
    stop_loss: Optional[TriggerLeg] = None
    take_profit: Optional[TriggerLeg] = None
    stop_loss_price: Optional[Number] = None
    take_profit_price: Optional[Number] = None
    trailing_percent: Optional[Number] = None
    trailing_trigger_price: Optional[Number] = None
    target_currency: Optional[str] = None
    cost: Optional[Number] = None
    borrow_currency: Optional[str] = None
    attach_protective: bool = False
    slice: Optional[SliceParams] = None
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, params: Optional[Mapping[str, Any]]) -> "OrderParams":
        """Build options from a plain mapping, rejecting unknown keys."""
        if not params:
            return cls()
        unknown = set(params) - set(ORDER_OPTIONS)
        if unknown:
            raise BadRequest(
                f"Unknown order options: {sorted(unknown)}; "
                f"pass venue fields through 'extra'"
            )
        values = dict(params)
        for name in ("stop_loss", "take_profit"):
            if isinstance(values.get(name), Mapping):
                values[name] = TriggerLeg.from_dict(values[name])
        if isinstance(values.get("slice"), Mapping):
            values["slice"] = SliceParams.from_dict(values["slice"])
        if "extra" in values:
            values["extra"] = MappingProxyType(dict(values["extra"] or {}))
        return cls(**values)


@dataclass(frozen=True)
class OrderPayload:
    """Wire request produced by the order builder.

    List-bodied endpoints keep their items under ``body["orders"]``.
    """
    endpoint: Endpoint
    body: Mapping[str, Any]

    @property
    def is_algo(self) -> bool:
        return self.endpoint is Endpoint.ALGO

    @property
    def path(self) -> str:
        return self.endpoint.value

    def wire_body(self) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
        """JSON-ready body for the endpoint."""
        if self.endpoint in LIST_ENDPOINTS:
            return [dict(item) for item in self.body["orders"]]
        return {
            key: [dict(item) for item in value] if isinstance(value, tuple) else value
            for key, value in self.body.items()
        }


@dataclass(frozen=True)
class Fee:
    """Fee paid, always as a positive cost."""
    cost: Optional[Decimal]
    currency: Optional[str]


@dataclass(frozen=True)
class Order:
    """Normalized order."""
    id: Optional[str]
    status: Optional[str]
    client_order_id: Optional[str] = None
    symbol: Optional[str] = None
    side: Optional[str] = None
    type: Optional[str] = None
    time_in_force: Optional[str] = None
    post_only: Optional[bool] = None
    price: Optional[Decimal] = None
    average: Optional[Decimal] = None
    amount: Optional[Decimal] = None
    cost: Optional[Decimal] = None
    filled: Optional[Decimal] = None
    remaining: Optional[Decimal] = None
    trigger_price: Optional[Decimal] = None
    stop_loss_price: Optional[Decimal] = None
    take_profit_price: Optional[Decimal] = None
    trailing_percent: Optional[Decimal] = None
    reduce_only: Optional[bool] = None
    margin_mode: Optional[str] = None
    fee: Optional[Fee] = None
    timestamp: Optional[int] = None
    last_trade_timestamp: Optional[int] = None
    last_update_timestamp: Optional[int] = None
    error: Optional[Exception] = field(default=None, compare=False)
    info: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_rejected(self) -> bool:
        return self.status == OrderStatus.REJECTED


@dataclass(frozen=True)
class Trade:
    """Normalized fill."""
    id: Optional[str]
    order_id: Optional[str]
    symbol: Optional[str]
    side: Optional[str]
    price: Optional[Decimal]
    amount: Optional[Decimal]
    cost: Optional[Decimal]
    taker_or_maker: Optional[str]
    fee: Optional[Fee]
    timestamp: Optional[int]
    info: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)
