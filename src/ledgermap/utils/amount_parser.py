"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import math
import re

CENTS = Decimal("0.01")
# Exclusive bound for a Numeric(20, 2) column: 18 integer digits
MAX_AMOUNT = Decimal(10) ** 18


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Amount '{amount_str}' is not a finite number")
    return -amount if is_negative else amount


def coerce_amount(value) -> Decimal:
    """Convert a raw cell (number or string) into a 2-place Decimal.

    Raises:
        ValueError: If the value is missing, not a finite number, or too
            large to store
    """
    if value is None:
        raise ValueError("Missing amount")
    if isinstance(value, bool):
        raise ValueError(f"Could not parse amount {value!r}")
    if isinstance(value, (int, Decimal)):
        amount = Decimal(value)
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Amount {value!r} is not a finite number")
        amount = Decimal(str(value))
    else:
        amount = parse_amount(str(value))
    if not amount.is_finite():
        raise ValueError(f"Amount {value!r} is not a finite number")
    try:
        amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Amount {value!r} is out of range")
    if abs(amount) >= MAX_AMOUNT:
        raise ValueError(f"Amount {value!r} is out of range")
    return amount
