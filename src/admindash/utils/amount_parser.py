"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENTS = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a positive money amount into a Decimal rounded to cents.

    Handles "123.45", "$123.45" and "1,234.56". Transaction amounts are
    always positive; the sign comes from the transaction type.

    Raises:
        ValueError: If the string is empty, malformed or not positive
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"[$€£¥,\s]", "", amount_str)
    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite() or amount <= 0:
        raise ValueError(f"Amount must be positive, got '{amount_str}'")
    return quantize_amount(amount)


def quantize_amount(amount: Decimal | float | int | str) -> Decimal:
    """Round an amount to two decimal places."""
    return Decimal(str(amount)).quantize(CENTS, rounding=ROUND_HALF_UP)
