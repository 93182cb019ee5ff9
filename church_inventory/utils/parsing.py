"""
Parsing helpers for loosely typed form input
"""

from decimal import Decimal, InvalidOperation

CENTS = Decimal('0.01')
ZERO = Decimal('0.00')


def parse_cost(value) -> Decimal:
    """
    Parse a user-entered currency amount.

    Anything that is not a finite, non-negative number becomes zero;
    this never raises.

    Args:
        value: str, int, float, Decimal or None

    Returns:
        Decimal quantized to cents
    """
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, str):
        value = value.strip().replace(',', '')
        if not value:
            return ZERO

    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return ZERO

    if not amount.is_finite() or amount < 0:
        return ZERO

    try:
        return amount.quantize(CENTS)
    except InvalidOperation:
        # Too many digits to represent in cents
        return ZERO
