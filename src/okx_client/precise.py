"""
Exact base-10 string arithmetic.

All amounts and prices travel through the client as decimal strings. These
helpers do their work on ``decimal.Decimal`` under a private context and hand
strings back, so tick and lot sizes like ``0.00000001`` are never pushed
through IEEE-754 floats.
"""

from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    Context,
    Decimal,
    DecimalException,
    Inexact,
    InvalidOperation,
    Overflow,
    ROUND_DOWN,
    ROUND_HALF_UP,
    ROUND_UP,
)
from enum import Enum
from typing import Union

from .errors import BadRequest

Numeric = Union[str, int, float, Decimal]

DEFAULT_DIVISION_PRECISION = 18

# division and step snapping; quotients are truncated
_CONTEXT = Context(prec=80, rounding=ROUND_DOWN)

# everything else: results are exact or the operation fails
_EXACT = Context(
    prec=MAX_PREC,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=[Inexact, Overflow, InvalidOperation],
)


class RoundingMode(Enum):
    """Rounding applied when snapping a value to a step."""
    TRUNCATE = ROUND_DOWN
    ROUND = ROUND_HALF_UP
    ROUND_UP = ROUND_UP


def number_to_string(value: Numeric) -> str:
    """Convert a caller-supplied number to a decimal string.

    Floats are taken by their shortest ``repr`` so ``0.1`` becomes ``"0.1"``
    rather than its binary expansion.
    """
    return _format(_to_decimal(value))


def _to_decimal(value: Numeric) -> Decimal:
    if isinstance(value, bool):
        raise BadRequest(f"Invalid numeric value: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as e:
            raise BadRequest(f"Invalid numeric value: {value!r}") from e
    else:
        raise BadRequest(f"Invalid numeric value: {value!r}")
    if not result.is_finite():
        raise BadRequest(f"Invalid numeric value: {value!r}")
    return result


def _format(value: Decimal) -> str:
    text = format(value, "f")
    if text.startswith("-") and value.is_zero():
        return text[1:]
    return text


def _canonical(value: Decimal) -> str:
    if value.is_zero():
        return "0"
    return _format(_exact(_EXACT.normalize, value))


def _exact(operation, *operands) -> Decimal:
    try:
        return operation(*operands)
    except DecimalException as e:
        raise BadRequest(f"Result not exactly representable: {type(e).__name__}") from e


def to_decimal(value: Numeric) -> Decimal:
    """Public accessor used by the models to hold exact values."""
    return _to_decimal(value)


def string_add(a: Numeric, b: Numeric) -> str:
    return _format(_exact(_EXACT.add, _to_decimal(a), _to_decimal(b)))


def string_sub(a: Numeric, b: Numeric) -> str:
    return _format(_exact(_EXACT.subtract, _to_decimal(a), _to_decimal(b)))


def string_mul(a: Numeric, b: Numeric) -> str:
    return _format(_exact(_EXACT.multiply, _to_decimal(a), _to_decimal(b)))


def string_div(a: Numeric, b: Numeric, precision: int = DEFAULT_DIVISION_PRECISION) -> str:
    """Divide, truncating the quotient to ``precision`` fractional digits."""
    divisor = _to_decimal(b)
    if divisor.is_zero():
        raise BadRequest("Division by zero")
    quotient = _CONTEXT.divide(_to_decimal(a), divisor)
    quantum = Decimal(1).scaleb(-precision)
    return _canonical(quotient.quantize(quantum, rounding=ROUND_DOWN, context=_CONTEXT))


def string_mod(a: Numeric, b: Numeric) -> str:
    divisor = _to_decimal(b)
    if divisor.is_zero():
        raise BadRequest("Division by zero")
    return _format(_exact(_EXACT.remainder, _to_decimal(a), divisor))


def string_neg(a: Numeric) -> str:
    return _format(_exact(_EXACT.minus, _to_decimal(a)))


def string_abs(a: Numeric) -> str:
    return _format(_exact(_EXACT.abs, _to_decimal(a)))


def string_compare(a: Numeric, b: Numeric) -> int:
    """Return -1, 0 or 1."""
    return int(_to_decimal(a).compare(_to_decimal(b)))


def string_eq(a: Numeric, b: Numeric) -> bool:
    return string_compare(a, b) == 0


def string_gt(a: Numeric, b: Numeric) -> bool:
    return string_compare(a, b) > 0


def string_ge(a: Numeric, b: Numeric) -> bool:
    return string_compare(a, b) >= 0


def string_lt(a: Numeric, b: Numeric) -> bool:
    return string_compare(a, b) < 0


def string_le(a: Numeric, b: Numeric) -> bool:
    return string_compare(a, b) <= 0


def string_max(a: Numeric, b: Numeric) -> str:
    return number_to_string(a) if string_ge(a, b) else number_to_string(b)


def string_min(a: Numeric, b: Numeric) -> str:
    return number_to_string(a) if string_le(a, b) else number_to_string(b)


def to_precision(
    value: Numeric,
    step: Numeric,
    rounding_mode: RoundingMode = RoundingMode.TRUNCATE,
) -> str:
    """Snap ``value`` to a multiple of ``step``.

    Args:
        value: Value to snap
        step: Tick or lot size, e.g. ``"0.01"``
        rounding_mode: How to resolve values between two multiples

    Returns:
        Canonical decimal string without exponent or trailing zeros
    """
    step_value = _to_decimal(step)
    if step_value <= 0:
        raise BadRequest(f"Precision step must be positive, got {step!r}")
    steps = _CONTEXT.divide(_to_decimal(value), step_value)
    whole_steps = steps.to_integral_value(rounding=rounding_mode.value, context=_CONTEXT)
    return _canonical(_exact(_EXACT.multiply, whole_steps, step_value))
