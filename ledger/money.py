"""Decimal money helpers."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from ledger.errors import InvalidAmountError

Amount = Union[Decimal, int, float, str]

CENT = Decimal("0.01")


def to_money(value: Amount) -> Decimal:
    """Convert user input to a finite Decimal.

    Floats go through str() so 0.1 stays 0.1.

    Raises:
        InvalidAmountError: value is not a finite number
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidAmountError(f"Invalid amount: {value!r}") from None
    if not amount.is_finite():
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    return amount


def positive_money(value: Amount, message: str) -> Decimal:
    """to_money() that also rejects zero and negative amounts with message."""
    amount = to_money(value)
    if amount <= 0:
        raise InvalidAmountError(message)
    return amount


def round_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Decimal) -> str:
    """$1,234.50 style display."""
    return f"${round_cents(amount):,.2f}"
