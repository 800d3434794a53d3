"""Decimal conversion utilities for currency and rate arithmetic"""

from decimal import Decimal, InvalidOperation
from typing import Any, Union
from brokerage_gateway.domain.exceptions import InvalidNumericInputError

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Values accepted wherever the engine converts to Decimal
Numeric = Union[Decimal, int, float, str]

# Adjusted exponent bound for inputs; products and quotients of two inputs
# stay inside the default context's Emax/Emin
MAX_ADJUSTED_EXPONENT = 999


def to_decimal(value: Any, field: str = "value") -> Decimal:
    """
    Convert a numeric-like value to an exact Decimal.

    Floats go through their shortest string form so 0.1 becomes Decimal("0.1")
    instead of its binary expansion.

    Raises:
        InvalidNumericInputError: value is not a finite number, or its
            exponent is outside +/-MAX_ADJUSTED_EXPONENT
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or value is None:
        raise InvalidNumericInputError(f"{field} must be numeric, got: {value!r}")
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise InvalidNumericInputError(f"{field} must be numeric, got: {value!r}") from e

    if not result.is_finite():
        raise InvalidNumericInputError(f"{field} must be a finite number, got: {value!r}")
    if result and abs(result.adjusted()) > MAX_ADJUSTED_EXPONENT:
        raise InvalidNumericInputError(f"{field} is out of range, got: {result}")
    return result


def percentage_of(amount: Decimal, rate: Decimal) -> Decimal:
    """Return rate percent of amount (amount * rate / 100)"""
    return amount * rate / HUNDRED
