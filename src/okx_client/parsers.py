"""
Response normalization for OKX records.

Pure functions turning raw venue records into the unified models. Blank
strings are treated as absent, fees are flipped to positive costs, and
rejected batch items are reduced to an id, a status and the classified error.
"""

import logging
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .constants import MARKET_PRICE_SENTINEL, SUCCESS_CODE
from .error_classifier import classify_item
from .models.account import Balances, BalanceEntry, LedgerEntry, Position, Transfer
from .models.market import Market
from .models.orders import ALGO_ORDER_TYPES, Fee, Order, OrderStatus, Trade
from .precise import (
    string_abs,
    string_div,
    string_gt,
    string_lt,
    string_mul,
    string_neg,
    string_sub,
    to_decimal,
)
from .utils import safe_decimal, safe_integer, safe_string

logger = logging.getLogger(__name__)

ORDER_STATES: Mapping[str, str] = MappingProxyType({
    "live": OrderStatus.OPEN,
    "partially_filled": OrderStatus.OPEN,
    "filled": OrderStatus.CLOSED,
    "effective": OrderStatus.CLOSED,
    "canceled": OrderStatus.CANCELED,
    "order_failed": OrderStatus.CANCELED,
    "mmp_canceled": OrderStatus.CANCELED,
})

MARKET_ORDER_TYPES = frozenset({"market", "optimal_limit_ioc"})

ACCOUNTS: Mapping[str, str] = MappingProxyType({
    "6": "funding",
    "18": "trading",
})
ACCOUNT_IDS: Mapping[str, str] = MappingProxyType({name: code for code, name in ACCOUNTS.items()})

TRANSFER_STATES: Mapping[str, str] = MappingProxyType({
    "success": "ok",
    "pending": "pending",
    "failed": "failed",
})

LEDGER_TYPES: Mapping[str, str] = MappingProxyType({
    "1": "transfer",
    "2": "trade",
    "3": "trade",  # delivery
    "4": "rebate",
    "5": "trade",  # forced repayment / liquidation
    "6": "transfer",  # margin transfer
    "7": "interest",
    "8": "fee",  # funding fee
    "9": "trade",  # auto deleveraging
    "10": "trade",  # clawback
    "11": "transfer",  # system token conversion
    "12": "transfer",  # strategy transfer
    "13": "trade",  # ddh
    "14": "transfer",  # block trade
    "22": "trade",  # repay
})


def _is_rejected(item: Mapping[str, Any]) -> bool:
    s_code = safe_string(item, "sCode")
    return s_code is not None and s_code != SUCCESS_CODE


def _fee(data: Dict[str, Any], amount_key: str = "fee", currency_key: str = "feeCcy") -> Optional[Fee]:
    raw = safe_string(data, amount_key)
    if raw is None:
        return None
    # venue reports fees paid as negative balance changes
    return Fee(cost=to_decimal(string_neg(raw)), currency=safe_string(data, currency_key))


def _optional_price(data: Dict[str, Any], key: str) -> Optional[Decimal]:
    value = safe_string(data, key)
    if value is None or value == MARKET_PRICE_SENTINEL:
        return None
    return to_decimal(value)


def _symbol(data: Dict[str, Any], market: Optional[Market]) -> Optional[str]:
    if market is not None:
        return market.symbol
    return safe_string(data, "instId")


def parse_order_status(state: Optional[str]) -> Optional[str]:
    """Map a venue order state; unmapped states pass through unchanged."""
    if state is None:
        return None
    return ORDER_STATES.get(state, state)


def parse_order_type(data: Dict[str, Any]) -> Optional[str]:
    ord_type = safe_string(data, "ordType")
    if ord_type is None:
        return None
    if ord_type in MARKET_ORDER_TYPES:
        return "market"
    if ord_type in ALGO_ORDER_TYPES:
        execution_price = (
            safe_string(data, "ordPx")
            or safe_string(data, "slOrdPx")
            or safe_string(data, "tpOrdPx")
        )
        if execution_price is None or execution_price == MARKET_PRICE_SENTINEL:
            return "market"
        return "limit"
    return "limit"


def parse_time_in_force(ord_type: Optional[str]) -> Optional[str]:
    if ord_type is None:
        return None
    if ord_type in ("ioc", "optimal_limit_ioc"):
        return "IOC"
    if ord_type == "fok":
        return "FOK"
    return "GTC"


def parse_rejected_order(item: Dict[str, Any]) -> Order:
    """Reduce a rejected batch item to id, client id, status and error."""
    return Order(
        id=safe_string(item, "ordId") or safe_string(item, "algoId"),
        client_order_id=safe_string(item, "clOrdId") or safe_string(item, "algoClOrdId"),
        status=OrderStatus.REJECTED,
        error=classify_item(item),
        info=item,
    )


def _order_cost(
    market: Optional[Market],
    filled: Optional[str],
    average: Optional[str],
) -> Optional[Decimal]:
    if filled is None or average is None:
        return None
    contract_size = (
        str(market.contract_size)
        if market is not None and market.contract_size is not None
        else "1"
    )
    if market is not None and market.inverse:
        if not string_gt(average, "0"):
            return None
        return to_decimal(string_div(string_mul(filled, contract_size), average))
    return to_decimal(string_mul(string_mul(filled, average), contract_size))


def parse_order(order: Dict[str, Any], market: Optional[Market] = None) -> Order:
    """
    Normalize an OKX order record (plain or algo).

    Args:
        order: Raw record from trade/order, orders-pending, orders-history,
            orders-algo-pending or an order placement acknowledgement
        market: Market of the order, when resolved

    Returns:
        Normalized Order
    """
    if _is_rejected(order):
        return parse_rejected_order(order)

    ord_type = safe_string(order, "ordType")
    side = safe_string(order, "side")
    is_algo = safe_string(order, "algoId") is not None

    size = safe_string(order, "sz")
    filled = safe_string(order, "actualSz") if is_algo else safe_string(order, "accFillSz")
    average = safe_string(order, "avgPx") or safe_string(order, "actualPx")

    amount: Optional[str] = size
    cost: Optional[Decimal] = None
    is_spot = (
        market.spot if market is not None
        else safe_string(order, "instType") == "SPOT"
    )
    if (
        is_spot
        and side == "buy"
        and ord_type in MARKET_ORDER_TYPES
        and safe_string(order, "tgtCcy") == "quote_ccy"
    ):
        # sz holds the quote amount spent
        amount = None
        cost = to_decimal(size) if size is not None else None

    if cost is None:
        cost = _order_cost(market, filled, average)

    remaining = None
    if amount is not None and filled is not None:
        remaining = to_decimal(string_sub(amount, filled))

    if is_algo:
        price = _optional_price(order, "ordPx")
    else:
        price = _optional_price(order, "px")

    trailing_percent = None
    callback_ratio = safe_string(order, "callbackRatio")
    if callback_ratio is not None:
        trailing_percent = to_decimal(string_mul(callback_ratio, "100"))

    margin_mode = safe_string(order, "tdMode")
    if margin_mode not in ("cross", "isolated"):
        margin_mode = None

    reduce_only = safe_string(order, "reduceOnly")

    return Order(
        id=safe_string(order, "ordId") or safe_string(order, "algoId"),
        client_order_id=safe_string(order, "clOrdId") or safe_string(order, "algoClOrdId"),
        status=parse_order_status(safe_string(order, "state")),
        symbol=_symbol(order, market),
        side=side,
        type=parse_order_type(order),
        time_in_force=parse_time_in_force(ord_type),
        post_only=ord_type == "post_only" if ord_type is not None else None,
        price=price,
        average=to_decimal(average) if average is not None else None,
        amount=to_decimal(amount) if amount is not None else None,
        cost=cost,
        filled=to_decimal(filled) if filled is not None else None,
        remaining=remaining,
        trigger_price=_optional_price(order, "triggerPx"),
        stop_loss_price=_optional_price(order, "slTriggerPx"),
        take_profit_price=_optional_price(order, "tpTriggerPx"),
        trailing_percent=trailing_percent,
        reduce_only=reduce_only == "true" if reduce_only is not None else None,
        margin_mode=margin_mode,
        fee=_fee(order),
        timestamp=safe_integer(order, "cTime"),
        last_trade_timestamp=safe_integer(order, "fillTime"),
        last_update_timestamp=safe_integer(order, "uTime"),
        info=order,
    )


def parse_orders(
    orders: Iterable[Dict[str, Any]],
    market: Optional[Market] = None,
) -> List[Order]:
    return [parse_order(order, market) for order in orders]


def parse_create_order_results(
    items: Iterable[Dict[str, Any]],
    markets: Optional[List[Optional[Market]]] = None,
) -> List[Order]:
    """
    Normalize placement acknowledgements, one per submitted order.

    Rejected items carry ``status='rejected'`` and their classified error;
    the others are returned as acknowledgements without a venue state.
    """
    results = []
    for index, item in enumerate(items):
        market = markets[index] if markets is not None and index < len(markets) else None
        if _is_rejected(item):
            logger.debug(f"Order rejected: sCode={item.get('sCode')} sMsg={item.get('sMsg')}")
        results.append(parse_order(item, market))
    return results


def parse_trade(trade: Dict[str, Any], market: Optional[Market] = None) -> Trade:
    """Normalize a fill record."""
    price = safe_string(trade, "fillPx")
    amount = safe_string(trade, "fillSz")
    cost = None
    if price is not None and amount is not None:
        cost = _order_cost(market, amount, price)
    exec_type = safe_string(trade, "execType")
    return Trade(
        id=safe_string(trade, "tradeId"),
        order_id=safe_string(trade, "ordId"),
        symbol=_symbol(trade, market),
        side=safe_string(trade, "side"),
        price=to_decimal(price) if price is not None else None,
        amount=to_decimal(amount) if amount is not None else None,
        cost=cost,
        taker_or_maker={"T": "taker", "M": "maker"}.get(exec_type) if exec_type else None,
        fee=_fee(trade),
        timestamp=safe_integer(trade, "ts") or safe_integer(trade, "fillTime"),
        info=trade,
    )


def parse_position(position: Dict[str, Any], market: Optional[Market] = None) -> Position:
    """
    Normalize a position record.

    In net mode (``posSide == 'net'``) the side follows the sign of ``pos``.
    """
    pos_side = safe_string(position, "posSide")
    pos = safe_string(position, "pos")
    contracts = to_decimal(string_abs(pos)) if pos is not None else None

    if pos_side in ("long", "short"):
        side = pos_side
    elif pos is not None and string_lt(pos, "0"):
        side = "short"
    elif pos is not None and string_gt(pos, "0"):
        side = "long"
    else:
        side = None

    notional = safe_string(position, "notionalUsd")
    maintenance_margin = safe_string(position, "mmr")
    maintenance_margin_percentage = None
    if maintenance_margin is not None and notional is not None and string_gt(notional, "0"):
        maintenance_margin_percentage = to_decimal(
            string_div(string_mul(maintenance_margin, "100"), notional)
        )

    percentage = None
    pnl_ratio = safe_string(position, "uplRatio")
    if pnl_ratio is not None:
        percentage = to_decimal(string_mul(pnl_ratio, "100"))

    margin = safe_decimal(position, "margin")
    initial_margin = safe_decimal(position, "imr")

    return Position(
        symbol=_symbol(position, market),
        side=side,
        contracts=contracts,
        contract_size=market.contract_size if market is not None else None,
        entry_price=safe_decimal(position, "avgPx"),
        mark_price=safe_decimal(position, "markPx"),
        notional=to_decimal(notional) if notional is not None else None,
        leverage=safe_decimal(position, "lever"),
        margin_mode=safe_string(position, "mgnMode"),
        liquidation_price=safe_decimal(position, "liqPx"),
        unrealized_pnl=safe_decimal(position, "upl"),
        percentage=percentage,
        initial_margin=initial_margin if initial_margin is not None else margin,
        maintenance_margin=to_decimal(maintenance_margin) if maintenance_margin is not None else None,
        maintenance_margin_percentage=maintenance_margin_percentage,
        collateral=margin if margin is not None else initial_margin,
        hedged=pos_side in ("long", "short"),
        timestamp=safe_integer(position, "uTime"),
        info=position,
    )


def parse_balance(data: List[Dict[str, Any]], account: str = "trading") -> Balances:
    """
    Normalize a balance response.

    The trading account returns one snapshot with ``details`` per currency;
    the funding account returns one record per currency.
    """
    entries: Dict[str, BalanceEntry] = {}
    timestamp = None

    if account == "trading":
        snapshot = data[0] if data else {}
        timestamp = safe_integer(snapshot, "uTime")
        for detail in snapshot.get("details") or []:
            currency = safe_string(detail, "ccy")
            if currency is None:
                continue
            entries[currency] = BalanceEntry(
                currency=currency,
                free=safe_decimal(detail, "availBal"),
                used=safe_decimal(detail, "frozenBal"),
                total=safe_decimal(detail, "eq"),
            )
    else:
        for record in data:
            currency = safe_string(record, "ccy")
            if currency is None:
                continue
            entries[currency] = BalanceEntry(
                currency=currency,
                free=safe_decimal(record, "availBal"),
                used=safe_decimal(record, "frozenBal"),
                total=safe_decimal(record, "bal"),
            )

    return Balances(
        account=account,
        entries=MappingProxyType(entries),
        timestamp=timestamp,
        info=data,
    )


def parse_transfer(transfer: Dict[str, Any]) -> Transfer:
    state = safe_string(transfer, "state")
    from_account = safe_string(transfer, "from")
    to_account = safe_string(transfer, "to")
    return Transfer(
        id=safe_string(transfer, "transId"),
        currency=safe_string(transfer, "ccy"),
        amount=safe_decimal(transfer, "amt"),
        from_account=ACCOUNTS.get(from_account, from_account),
        to_account=ACCOUNTS.get(to_account, to_account),
        status=TRANSFER_STATES.get(state, state),
        timestamp=safe_integer(transfer, "ts"),
        info=transfer,
    )


def parse_ledger_entry(bill: Dict[str, Any], market: Optional[Market] = None) -> LedgerEntry:
    """Normalize an account bill."""
    change = safe_string(bill, "balChg")
    after = safe_string(bill, "bal")
    before = None
    if change is not None and after is not None:
        before = to_decimal(string_sub(after, change))

    direction = None
    if change is not None:
        direction = "out" if string_lt(change, "0") else "in"

    bill_type = safe_string(bill, "type")
    symbol = market.symbol if market is not None else safe_string(bill, "instId")

    return LedgerEntry(
        id=safe_string(bill, "billId"),
        currency=safe_string(bill, "ccy"),
        direction=direction,
        amount=to_decimal(string_abs(change)) if change is not None else None,
        before=before,
        after=to_decimal(after) if after is not None else None,
        type=LEDGER_TYPES.get(bill_type, bill_type),
        reference_id=safe_string(bill, "ordId"),
        symbol=symbol,
        fee=_fee(bill),
        timestamp=safe_integer(bill, "ts"),
        info=bill,
    )
