# /basefee/core/units.py
# Arbitrary-precision arithmetic and denomination conversion between wei and gwei.
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Union

Numberish = Union[int, float, str, Decimal]

GWEI = 10**9

# Wide enough for 2**256 sized operands plus the division scale
_PRECISION = 120
DIVISION_DECIMAL_PLACES = 20
_DIVISION_QUANTUM = Decimal(1).scaleb(-DIVISION_DECIMAL_PLACES)


def to_decimal(value: Numberish) -> Decimal:
    """
    Converts an integer, float, decimal or hex string, or Decimal into a Decimal.

    Floats go through their shortest repr so 0.1 stays 0.1 rather than the
    binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError("Booleans are not amounts")
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty string is not a number")
        if text.lower().startswith(("0x", "-0x")):
            return Decimal(int(text, 16))
        try:
            return Decimal(text)
        except ArithmeticError:
            raise ValueError(f"Not a number: {value!r}")
    raise TypeError(f"Unsupported amount type: {type(value).__name__}")


def _is_empty(value) -> bool:
    if value is None or value == "":
        return True
    return to_decimal(value) == 0


def _plain(value: Decimal) -> str:
    return format(value, "f")


def multiply(number_one: Numberish, number_two: Numberish) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return to_decimal(number_one) * to_decimal(number_two)


def divide(number_one: Numberish, number_two: Numberish) -> Decimal:
    """
    Divides with 20 decimal places of precision, rounding half up.

    A zero or missing divisor yields zero instead of raising so that callers
    never see NaN or infinity leak into fee arithmetic.
    """
    if _is_empty(number_two):
        return Decimal(0)
    if number_one is None or number_one == "":
        return Decimal(0)
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        quotient = to_decimal(number_one) / to_decimal(number_two)
        return quotient.quantize(_DIVISION_QUANTUM, rounding=ROUND_HALF_UP).normalize()


def gwei_to_wei(gwei_amount: Numberish) -> str:
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        wei_amount = multiply(gwei_amount, GWEI).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return _plain(wei_amount)


def wei_to_gwei(wei_amount: Numberish) -> str:
    return _plain(divide(wei_amount, GWEI))


def wei_to_gwei_number(wei_amount: Numberish) -> float:
    return float(divide(wei_amount, GWEI))


def wei_to_string(wei_amount: Numberish) -> str:
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return _plain(to_decimal(wei_amount).normalize())
