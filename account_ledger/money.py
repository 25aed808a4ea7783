"""
Monetary Amount Handling

Parsing and formatting of two-decimal amounts. NEVER uses float for stored
or computed monetary values.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from .errors import InvalidAmountError


CENT = Decimal("0.01")
ZERO = Decimal("0.00")
# DECIMAL(12,2)
MAX_AMOUNT = Decimal("9999999999.99")


def to_decimal(value: Any) -> Decimal:
    """Convert a stored value (Decimal, str, int) to a 2-place Decimal"""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_amount(value: Any) -> Decimal:
    """
    Parse a client-supplied amount.

    Accepts JSON numbers and numeric strings. The amount must be finite,
    strictly positive, carry at most two fraction digits and fit DECIMAL(12,2).

    Raises:
        InvalidAmountError: if any of the above does not hold
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmountError("Invalid amount")

    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmountError("Invalid amount")

    if not amount.is_finite() or amount <= 0:
        raise InvalidAmountError("Invalid amount")
    # must precede quantize, which overflows the context precision on huge values
    if amount > MAX_AMOUNT:
        raise InvalidAmountError("Amount exceeds the maximum allowed")
    if amount != amount.quantize(CENT):
        raise InvalidAmountError("Amount must have at most two decimal places")

    return amount.quantize(CENT)


def format_amount(amount: Decimal) -> str:
    """Render an amount as a fixed two-decimal string"""
    return f"{to_decimal(amount):.2f}"
