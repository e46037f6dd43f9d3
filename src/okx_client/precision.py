"""
Precision normalization against a market's tick and lot sizes.

Amounts and costs are truncated toward zero so an order never spends more
than asked; prices are rounded to the nearest tick with ties going away from
zero. A market with unknown precision passes values through unchanged.
"""

from .errors import InvalidOrder
from .models.market import Market
from .precise import (
    Numeric,
    RoundingMode,
    number_to_string,
    string_gt,
    string_eq,
    to_precision,
)


def amount_to_precision(market: Market, amount: Numeric) -> str:
    """Truncate an amount to the market's lot size."""
    step = market.precision.amount
    if step is None:
        return number_to_string(amount)
    result = to_precision(amount, step, RoundingMode.TRUNCATE)
    if string_eq(result, "0") and string_gt(amount, "0"):
        raise InvalidOrder(
            f"Amount {number_to_string(amount)} is below the lot size {step} of {market.symbol}"
        )
    return result


def price_to_precision(market: Market, price: Numeric) -> str:
    """Round a price to the market's tick size (half away from zero)."""
    step = market.precision.price
    if step is None:
        return number_to_string(price)
    return to_precision(price, step, RoundingMode.ROUND)


def cost_to_precision(market: Market, cost: Numeric) -> str:
    """Truncate a notional value to the market's tick size."""
    step = market.precision.price
    if step is None:
        return number_to_string(cost)
    return to_precision(cost, step, RoundingMode.TRUNCATE)
