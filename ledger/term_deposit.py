"""
Fixed-term deposits with simple interest.
"""

import calendar
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from core.timestamps import now
from ledger.errors import TermDepositClosedError
from ledger.money import round_cents


def add_months(start: datetime, months: int) -> datetime:
    """Calendar month arithmetic; Jan 31 + 1 month is the last day of February."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return start.replace(year=year, month=month, day=day)


@dataclass
class TermDeposit:
    """
    Principal locked for term_months at an annual percentage rate.

    Attributes:
        term_deposit_id: Bank-assigned id (starting at 1)
        account_number: Account the principal was drawn from
        principal: Amount locked
        interest_rate: Annual rate in percent (5 means 5%)
        term_months: Length of the term
        start_date: When it was opened
        is_active: False once closed
    """
    term_deposit_id: int
    account_number: int
    principal: Decimal
    interest_rate: Decimal
    term_months: int
    start_date: datetime = field(default_factory=now)
    is_active: bool = True

    @property
    def maturity_date(self) -> datetime:
        return add_months(self.start_date, self.term_months)

    def calculate_maturity_amount(self) -> Decimal:
        """principal * (1 + rate/100/12 * months), rounded to cents."""
        monthly_rate = self.interest_rate / Decimal(100) / Decimal(12)
        return round_cents(self.principal * (1 + monthly_rate * self.term_months))

    def is_matured(self, clock: Optional[Callable[[], datetime]] = None) -> bool:
        return (clock or now)() >= self.maturity_date

    def close(self) -> Decimal:
        """Close the deposit and return its maturity amount.

        Closing before maturity still pays the full maturity amount.

        Raises:
            TermDepositClosedError: already closed
        """
        if not self.is_active:
            raise TermDepositClosedError("Term deposit is already closed")
        self.is_active = False
        return self.calculate_maturity_amount()

    def details(self) -> dict:
        return {
            "term_deposit_id": self.term_deposit_id,
            "account_number": self.account_number,
            "principal": self.principal,
            "interest_rate": self.interest_rate,
            "term_months": self.term_months,
            "start_date": self.start_date,
            "maturity_date": self.maturity_date,
            "maturity_amount": self.calculate_maturity_amount(),
            "is_active": self.is_active,
        }
