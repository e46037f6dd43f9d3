"""
Order request builder.

Turns a unified order intent into an immutable wire payload plus the
endpoint it belongs to. Order variants collapse onto the wire ``ordType``
through a fixed precedence, first match wins:

1. trailing stop            -> ``move_order_stop``
2. protective legs only     -> ``conditional`` (one leg) or ``oco`` (both)
3. trigger price            -> ``trigger``
4. slicing                  -> ``iceberg`` / ``twap``
5. plain                    -> ``market``, ``limit``, ``post_only``, ``ioc``,
                               ``fok`` or ``optimal_limit_ioc``

Every function here is pure: no I/O, no shared state.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .constants import CLIENT_ORDER_ID_TOKEN_LENGTH, MARKET_PRICE_SENTINEL
from .errors import (
    BadRequest,
    ConflictingOrderParams,
    InvalidOrder,
    MissingCost,
    NotSupported,
)
from .models.config import MARGIN_MODES, ConnectionConfig
from .models.market import Market
from .models.orders import (
    ALGO_ORDER_TYPES,
    Endpoint,
    Number,
    OrderParams,
    OrderPayload,
    SliceParams,
    TriggerLeg,
)
from .precise import number_to_string, string_div, string_gt, string_lt, string_mul
from .precision import amount_to_precision, cost_to_precision, price_to_precision
from .utils import omit_none, random_token, validate_client_order_id

logger = logging.getLogger(__name__)

ORDER_TYPES = ("market", "limit")
ORDER_SIDES = ("buy", "sell")
TIME_IN_FORCE = ("GTC", "IOC", "FOK", "PO")
TRIGGER_PRICE_TYPES = ("last", "index", "mark")
POSITION_SIDES = ("long", "short", "net")
MAX_BATCH_SIZE = 20
DEFAULT_CONFIG = ConnectionConfig()

ParamsLike = Union[OrderParams, Mapping[str, Any], None]


def build_order_payload(
    market: Market,
    order_type: str,
    side: str,
    amount: Optional[Number],
    price: Optional[Number] = None,
    params: ParamsLike = None,
    config: Optional[ConnectionConfig] = None,
) -> OrderPayload:
    """
    Build the wire payload for a new order.

    Args:
        market: Market the order trades on
        order_type: "market" or "limit"
        side: "buy" or "sell"
        amount: Order size in base units (contracts on contract markets)
        price: Limit price, or reference price for spot market buys
        params: OrderParams or a mapping accepted by ``OrderParams.from_dict``
        config: Connection configuration supplying defaults

    Returns:
        Immutable OrderPayload tagged with its endpoint

    Raises:
        BadRequest, InvalidOrder and subclasses for invalid intents
    """
    config = config or DEFAULT_CONFIG
    options = params if isinstance(params, OrderParams) else OrderParams.from_dict(params)

    order_type = (order_type or "").lower()
    side = (side or "").lower()
    if order_type not in ORDER_TYPES:
        raise BadRequest(f"Unsupported order type: {order_type!r}")
    if side not in ORDER_SIDES:
        raise BadRequest(f"Unsupported order side: {side!r}")

    body: Dict[str, Any] = {"instId": market.id, "side": side}
    body.update(_margin_fields(market, side, options, config))
    body.update(_position_fields(market, side, options, config))

    stop_loss, take_profit = _protective_legs(options, config)
    has_protective = stop_loss is not None or take_profit is not None

    if options.trailing_percent is not None:
        _warn_ignored(options, "trailing stop", has_protective)
        body.update(_trailing_fields(market, amount, options))
    elif has_protective and options.trigger_price is None and not options.attach_protective:
        body.update(_size_fields(market, order_type, side, amount, price, options, config, algo=True))
        body.update(_conditional_fields(market, stop_loss, take_profit))
    elif options.trigger_price is not None:
        body.update(_size_fields(market, order_type, side, amount, price, options, config, algo=True))
        body.update(_trigger_fields(market, order_type, price, options))
        if has_protective:
            body["attachAlgoOrds"] = (_attached_legs(market, stop_loss, take_profit),)
    elif options.slice is not None:
        body.update(_size_fields(market, order_type, side, amount, price, options, config, algo=True))
        body.update(_slice_fields(market, options.slice))
    else:
        body.update(_plain_fields(market, order_type, price, options))
        body.update(_size_fields(market, order_type, side, amount, price, options, config, algo=False))
        if has_protective:
            body["attachAlgoOrds"] = (_attached_legs(market, stop_loss, take_profit),)

    endpoint = Endpoint.ALGO if body["ordType"] in ALGO_ORDER_TYPES else Endpoint.ORDER
    body.update(_client_order_id_fields(options, config, endpoint))

    for key, value in options.extra.items():
        if key in body:
            raise ConflictingOrderParams(f"Extra wire field {key!r} would overwrite a built field")
        body[key] = value

    return OrderPayload(endpoint=endpoint, body=MappingProxyType(body))


def build_batch_payload(payloads: Sequence[OrderPayload]) -> OrderPayload:
    """Combine plain order payloads into one batch request."""
    if not payloads:
        raise BadRequest("Batch requires at least one order")
    if len(payloads) > MAX_BATCH_SIZE:
        raise BadRequest(f"Batch supports at most {MAX_BATCH_SIZE} orders, got {len(payloads)}")
    for payload in payloads:
        if payload.endpoint is not Endpoint.ORDER:
            raise NotSupported(
                f"Batch orders only accept plain orders, got {payload.body.get('ordType')!r}"
            )
    return OrderPayload(
        endpoint=Endpoint.BATCH,
        body=MappingProxyType({"orders": tuple(p.body for p in payloads)}),
    )


def build_cancel_payload(
    market: Market,
    order_id: Optional[str] = None,
    client_order_id: Optional[str] = None,
    algo: bool = False,
) -> OrderPayload:
    """Build a cancel request for a plain or algo order."""
    if algo:
        if order_id is None:
            raise BadRequest("Cancelling an algo order requires its id")
        return OrderPayload(
            endpoint=Endpoint.CANCEL_ALGO,
            body=MappingProxyType({"orders": (MappingProxyType({"algoId": str(order_id), "instId": market.id}),)}),
        )
    return OrderPayload(
        endpoint=Endpoint.CANCEL,
        body=MappingProxyType(_order_reference(market, order_id, client_order_id)),
    )


def build_cancel_batch_payload(market: Market, order_ids: Sequence[str]) -> OrderPayload:
    """Build a cancel request for several plain orders of one market."""
    if not order_ids:
        raise BadRequest("Batch cancel requires at least one order id")
    if len(order_ids) > MAX_BATCH_SIZE:
        raise BadRequest(f"Batch cancel supports at most {MAX_BATCH_SIZE} orders, got {len(order_ids)}")
    orders = tuple(
        MappingProxyType({"instId": market.id, "ordId": str(order_id)}) for order_id in order_ids
    )
    return OrderPayload(endpoint=Endpoint.CANCEL_BATCH, body=MappingProxyType({"orders": orders}))


def build_amend_payload(
    market: Market,
    order_id: Optional[str] = None,
    client_order_id: Optional[str] = None,
    amount: Optional[Number] = None,
    price: Optional[Number] = None,
    algo: bool = False,
) -> OrderPayload:
    """Build an amend request changing size and/or price of a live plain order."""
    if algo:
        raise NotSupported("Amending algo orders is not supported")
    if amount is None and price is None:
        raise BadRequest("Amend requires a new amount or a new price")
    body = _order_reference(market, order_id, client_order_id)
    if amount is not None:
        body["newSz"] = amount_to_precision(market, amount)
    if price is not None:
        body["newPx"] = price_to_precision(market, price)
    return OrderPayload(endpoint=Endpoint.AMEND, body=MappingProxyType(body))


def build_leverage_payload(
    market: Market,
    leverage: Number,
    margin_mode: Optional[str] = None,
    position_side: Optional[str] = None,
    config: Optional[ConnectionConfig] = None,
) -> OrderPayload:
    """Build a set-leverage request."""
    config = config or DEFAULT_CONFIG
    margin_mode = margin_mode or config.default_margin_mode or "cross"
    if margin_mode not in MARGIN_MODES:
        raise BadRequest(f"Unsupported margin mode: {margin_mode!r}")
    lever = number_to_string(leverage)
    if string_lt(lever, "1") or string_gt(lever, "125"):
        raise BadRequest(f"Leverage must be between 1 and 125, got {lever}")
    body = {"instId": market.id, "lever": lever, "mgnMode": margin_mode}
    if position_side is not None:
        if margin_mode != "isolated" or position_side not in ("long", "short"):
            raise BadRequest("posSide only applies to isolated long/short positions")
        body["posSide"] = position_side
    return OrderPayload(endpoint=Endpoint.LEVERAGE, body=MappingProxyType(body))


# Field builders

def _margin_fields(
    market: Market, side: str, options: OrderParams, config: ConnectionConfig
) -> Dict[str, str]:
    explicit = options.margin_mode
    if explicit is not None and explicit not in MARGIN_MODES:
        raise BadRequest(f"Unsupported margin mode: {explicit!r}")

    if market.contract:
        return {"tdMode": explicit or config.default_margin_mode or "cross"}

    if explicit is None and not config.spot_margin:
        return {"tdMode": "cash"}

    if not market.margin:
        raise BadRequest(f"{market.symbol} does not support margin trading")
    borrow = options.borrow_currency or (market.quote if side == "buy" else market.base)
    return {
        "tdMode": explicit or config.default_margin_mode or "cross",
        "ccy": borrow,
    }


def _position_fields(
    market: Market, side: str, options: OrderParams, config: ConnectionConfig
) -> Dict[str, Any]:
    hedged = options.hedged if options.hedged is not None else config.hedged
    fields: Dict[str, Any] = {}

    if options.position_side is not None:
        if options.position_side not in POSITION_SIDES:
            raise BadRequest(f"Unsupported position side: {options.position_side!r}")
        fields["posSide"] = options.position_side
    elif hedged and market.contract:
        opening_long = (side == "buy") != options.reduce_only
        fields["posSide"] = "long" if opening_long else "short"

    if options.reduce_only and not (hedged and market.contract):
        fields["reduceOnly"] = True
    return fields


def _client_order_id_fields(
    options: OrderParams, config: ConnectionConfig, endpoint: Endpoint
) -> Dict[str, str]:
    key = "algoClOrdId" if endpoint is Endpoint.ALGO else "clOrdId"
    if options.client_order_id is not None:
        if not validate_client_order_id(options.client_order_id):
            raise InvalidOrder(
                f"Client order id must be 1-32 alphanumerics, got {options.client_order_id!r}"
            )
        fields = {key: options.client_order_id}
    else:
        # attribution only, not an idempotency key
        fields = {key: f"{config.broker_id}{random_token(CLIENT_ORDER_ID_TOKEN_LENGTH)}"}
    if config.broker_id:
        fields["tag"] = config.broker_id
    return fields


def _size_fields(
    market: Market,
    order_type: str,
    side: str,
    amount: Optional[Number],
    price: Optional[Number],
    options: OrderParams,
    config: ConnectionConfig,
    algo: bool,
) -> Dict[str, str]:
    spot_market_buy = market.spot and order_type == "market" and side == "buy"
    if not spot_market_buy:
        if options.cost is not None:
            raise BadRequest("cost is only accepted for spot market buy orders")
        return {"sz": amount_to_precision(market, _require_amount(amount))}

    target = options.target_currency or config.default_target_currency
    if target not in ("base", "quote"):
        raise BadRequest(f"Unsupported target currency: {target!r}")

    if target == "quote" and (options.cost is not None or not algo):
        if options.cost is not None:
            cost = options.cost
        elif price is not None:
            cost = string_mul(_require_amount(amount), price)
        else:
            raise MissingCost(
                f"Market buy on {market.symbol} needs a price to compute cost "
                f"(amount * price) or an explicit cost"
            )
        return {"sz": cost_to_precision(market, cost), "tgtCcy": "quote_ccy"}

    return {"sz": amount_to_precision(market, _require_amount(amount)), "tgtCcy": "base_ccy"}


def _plain_fields(
    market: Market, order_type: str, price: Optional[Number], options: OrderParams
) -> Dict[str, str]:
    time_in_force = (options.time_in_force or "GTC").upper()
    if time_in_force not in TIME_IN_FORCE:
        raise BadRequest(f"Unsupported time in force: {options.time_in_force!r}")
    post_only = options.post_only or time_in_force == "PO"

    if order_type == "market":
        if post_only:
            raise InvalidOrder("Market orders cannot be post-only")
        if time_in_force == "IOC" and market.contract:
            # execution hint, still a market order once parsed back
            return {"ordType": "optimal_limit_ioc"}
        return {"ordType": "market"}

    if price is None:
        raise InvalidOrder(f"Limit order on {market.symbol} requires a price")
    if post_only:
        ord_type = "post_only"
    elif time_in_force == "IOC":
        ord_type = "ioc"
    elif time_in_force == "FOK":
        ord_type = "fok"
    else:
        ord_type = "limit"
    return {"ordType": ord_type, "px": price_to_precision(market, price)}


def _trailing_fields(market: Market, amount: Optional[Number], options: OrderParams) -> Dict[str, str]:
    fields = {
        "ordType": "move_order_stop",
        "sz": amount_to_precision(market, _require_amount(amount)),
        "callbackRatio": string_div(options.trailing_percent, "100"),
    }
    if options.trailing_trigger_price is not None:
        fields["activePx"] = price_to_precision(market, options.trailing_trigger_price)
    return fields


def _trigger_fields(
    market: Market, order_type: str, price: Optional[Number], options: OrderParams
) -> Dict[str, str]:
    return {
        "ordType": "trigger",
        "triggerPx": price_to_precision(market, options.trigger_price),
        "orderPx": _execution_price(market, order_type, price),
        "triggerPxType": _trigger_price_type(options.trigger_price_type),
    }


def _conditional_fields(
    market: Market, stop_loss: Optional[TriggerLeg], take_profit: Optional[TriggerLeg]
) -> Dict[str, str]:
    both = stop_loss is not None and take_profit is not None
    fields = {"ordType": "oco" if both else "conditional"}
    if stop_loss is not None:
        fields.update(_leg_fields(market, "sl", stop_loss))
    if take_profit is not None:
        fields.update(_leg_fields(market, "tp", take_profit))
    return fields


def _attached_legs(
    market: Market, stop_loss: Optional[TriggerLeg], take_profit: Optional[TriggerLeg]
) -> Mapping[str, str]:
    fields: Dict[str, str] = {}
    if take_profit is not None:
        fields.update(_leg_fields(market, "tp", take_profit))
    if stop_loss is not None:
        fields.update(_leg_fields(market, "sl", stop_loss))
    return MappingProxyType(fields)


def _leg_fields(market: Market, prefix: str, leg: TriggerLeg) -> Dict[str, str]:
    return {
        f"{prefix}TriggerPx": price_to_precision(market, leg.trigger_price),
        f"{prefix}OrdPx": (
            price_to_precision(market, leg.price) if leg.price is not None else MARKET_PRICE_SENTINEL
        ),
        f"{prefix}TriggerPxType": _trigger_price_type(leg.trigger_price_type),
    }


def _slice_fields(market: Market, slice_params: SliceParams) -> Dict[str, str]:
    if slice_params.kind not in ("iceberg", "twap"):
        raise BadRequest(f"Unsupported slice kind: {slice_params.kind!r}")
    if (slice_params.price_variance is None) == (slice_params.price_spread is None):
        raise BadRequest("Slice orders need exactly one of price_variance or price_spread")
    fields = {
        "ordType": slice_params.kind,
        "szLimit": amount_to_precision(market, slice_params.size_limit),
        "pxLimit": price_to_precision(market, slice_params.price_limit),
    }
    if slice_params.price_variance is not None:
        fields["pxVar"] = number_to_string(slice_params.price_variance)
    else:
        fields["pxSpread"] = price_to_precision(market, slice_params.price_spread)
    if slice_params.kind == "twap":
        if slice_params.time_interval is None:
            raise BadRequest("TWAP orders require time_interval")
        fields["timeInterval"] = str(int(slice_params.time_interval))
    return fields


# Helpers

def _protective_legs(
    options: OrderParams, config: ConnectionConfig
) -> Tuple[Optional[TriggerLeg], Optional[TriggerLeg]]:
    stop_loss = _resolve_leg("stop_loss", options.stop_loss, options.stop_loss_price, config)
    take_profit = _resolve_leg("take_profit", options.take_profit, options.take_profit_price, config)
    return stop_loss, take_profit


def _resolve_leg(
    name: str,
    structured: Optional[TriggerLeg],
    discrete: Optional[Number],
    config: ConnectionConfig,
) -> Optional[TriggerLeg]:
    if structured is not None and discrete is not None:
        if config.protective_precedence == "structured":
            return structured
        if config.protective_precedence == "discrete":
            return TriggerLeg(trigger_price=discrete)
        raise ConflictingOrderParams(
            f"Both {name} and {name}_price were given; pass one, or set protective_precedence"
        )
    if structured is not None:
        return structured
    if discrete is not None:
        return TriggerLeg(trigger_price=discrete)
    return None


def _execution_price(market: Market, order_type: str, price: Optional[Number]) -> str:
    if order_type == "market":
        return MARKET_PRICE_SENTINEL
    if price is None:
        raise InvalidOrder(f"Limit trigger order on {market.symbol} requires a price")
    return price_to_precision(market, price)


def _trigger_price_type(value: Optional[str]) -> str:
    value = value or "last"
    if value not in TRIGGER_PRICE_TYPES:
        raise BadRequest(f"Unsupported trigger price type: {value!r}")
    return value


def _order_reference(
    market: Market, order_id: Optional[str], client_order_id: Optional[str]
) -> Dict[str, str]:
    if order_id is None and client_order_id is None:
        raise BadRequest("Either order_id or client_order_id is required")
    return omit_none({
        "instId": market.id,
        "ordId": str(order_id) if order_id is not None else None,
        "clOrdId": client_order_id,
    })


def _require_amount(amount: Optional[Number]) -> Number:
    if amount is None:
        raise BadRequest("Order amount is required")
    return amount


def _warn_ignored(options: OrderParams, chosen: str, has_protective: bool) -> None:
    ignored: List[str] = []
    if options.trigger_price is not None:
        ignored.append("trigger_price")
    if has_protective:
        ignored.append("protective legs")
    if options.slice is not None:
        ignored.append("slice")
    if ignored:
        logger.warning(f"Building {chosen}; ignoring {', '.join(ignored)}")
