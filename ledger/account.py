"""
Customer accounts and their transaction history.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from core.timestamps import now
from ledger.errors import InsufficientFundsError
from ledger.money import Amount, positive_money

logger = logging.getLogger(__name__)

# Transaction types
DEPOSIT = "deposit"
WITHDRAWAL = "withdrawal"
TRANSFER_IN = "transfer_in"
TRANSFER_OUT = "transfer_out"
TERM_DEPOSIT_OPENED = "term_deposit_opened"
TERM_DEPOSIT_CLOSED = "term_deposit_closed"


@dataclass(frozen=True)
class Transaction:
    """One balance change. balance is the account balance after it."""
    type: str
    amount: Decimal
    balance: Decimal
    timestamp: datetime = field(default_factory=now)
    counterparty: Optional[int] = None
    term_deposit_id: Optional[int] = None

    def to_dict(self) -> dict:
        data = {
            "type": self.type,
            "amount": str(self.amount),
            "balance": str(self.balance),
            "timestamp": self.timestamp.isoformat(),
        }
        if self.counterparty is not None:
            data["counterparty"] = self.counterparty
        if self.term_deposit_id is not None:
            data["term_deposit_id"] = self.term_deposit_id
        return data


class Account:
    """A single account with a non-negative Decimal balance.

    The opening balance is not recorded as a transaction.
    """

    def __init__(self, account_number: int, initial_balance: Decimal = Decimal("0")):
        self.account_number = account_number
        self.balance = initial_balance
        self.transactions: list[Transaction] = []

    def __repr__(self) -> str:
        return f"Account({self.account_number}, balance={self.balance})"

    def get_balance(self) -> Decimal:
        return self.balance

    def credit(self, amount: Decimal, tx_type: str, **extra) -> Decimal:
        """Add an already-validated amount and record it as tx_type."""
        self.balance += amount
        self.transactions.append(Transaction(type=tx_type, amount=amount, balance=self.balance, **extra))
        logger.debug(f"Account {self.account_number}: {tx_type} +{amount} -> {self.balance}")
        return self.balance

    def debit(self, amount: Decimal, tx_type: str, **extra) -> Decimal:
        """Remove an already-validated amount and record it as tx_type.

        Raises:
            InsufficientFundsError: amount exceeds the balance
        """
        if amount > self.balance:
            raise InsufficientFundsError("Insufficient funds")
        self.balance -= amount
        self.transactions.append(Transaction(type=tx_type, amount=amount, balance=self.balance, **extra))
        logger.debug(f"Account {self.account_number}: {tx_type} -{amount} -> {self.balance}")
        return self.balance

    def deposit(self, amount: Amount) -> Decimal:
        """Deposit a positive amount, returning the new balance."""
        return self.credit(positive_money(amount, "Deposit amount must be positive"), DEPOSIT)

    def withdraw(self, amount: Amount) -> Decimal:
        """Withdraw a positive amount no larger than the balance.

        Raises:
            InvalidAmountError: amount is not positive
            InsufficientFundsError: amount exceeds the balance
        """
        return self.debit(positive_money(amount, "Withdrawal amount must be positive"), WITHDRAWAL)

    def get_transaction_history(self) -> list[Transaction]:
        return list(self.transactions)
