"""
Bank: the registry of accounts and term deposits.

Handles:
- Account creation and lookup (numbers start at 1000 by default)
- Deposits, withdrawals and transfers between accounts
- Opening and closing term deposits (ids start at 1)

Every operation validates before it mutates, so a failed call leaves all
balances and histories untouched.
"""

import logging
from decimal import Decimal
from typing import NamedTuple, Optional

from config.settings import get_ledger_settings
from core import log_event
from ledger.account import (
    TERM_DEPOSIT_CLOSED,
    TERM_DEPOSIT_OPENED,
    TRANSFER_IN,
    TRANSFER_OUT,
    Account,
)
from ledger.errors import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    SameAccountTransferError,
    TermDepositNotFoundError,
)
from ledger.money import Amount, positive_money, to_money
from ledger.term_deposit import TermDeposit

logger = logging.getLogger(__name__)


class TransferResult(NamedTuple):
    from_balance: Decimal
    to_balance: Decimal


class Bank:
    """In-memory bank. Not thread-safe; the CLI drives it from one thread."""

    def __init__(self, name: Optional[str] = None, first_account_number: Optional[int] = None):
        settings = get_ledger_settings()
        self.name = name or settings.bank_name
        self.accounts: dict[int, Account] = {}
        self.term_deposits: dict[int, TermDeposit] = {}
        self._next_account_number = (
            first_account_number if first_account_number is not None
            else settings.first_account_number
        )
        self._next_term_deposit_id = 1

    # =========================================================================
    # Accounts
    # =========================================================================

    def create_account(self, initial_balance: Amount = 0) -> int:
        """Open an account and return its number.

        Raises:
            InvalidAmountError: initial_balance is negative or not a number
        """
        balance = to_money(initial_balance)
        if balance < 0:
            raise InvalidAmountError("Initial balance cannot be negative")

        account_number = self._next_account_number
        self._next_account_number += 1
        self.accounts[account_number] = Account(account_number, balance)
        logger.info(f"Opened account {account_number} with balance {balance}")
        log_event("account_opened", details=f"Account {account_number} opened with balance {balance}")
        return account_number

    def get_account(self, account_number: int) -> Account:
        account = self.accounts.get(account_number)
        if account is None:
            raise AccountNotFoundError("Account not found")
        return account

    def get_balance(self, account_number: int) -> Decimal:
        return self.get_account(account_number).get_balance()

    def deposit(self, account_number: int, amount: Amount) -> Decimal:
        return self.get_account(account_number).deposit(amount)

    def withdraw(self, account_number: int, amount: Amount) -> Decimal:
        return self.get_account(account_number).withdraw(amount)

    def transfer(self, from_account_number: int, to_account_number: int, amount: Amount) -> TransferResult:
        """Move amount between two different accounts.

        Records transfer_out on the source and transfer_in on the destination.

        Raises:
            SameAccountTransferError: source and destination are the same
            AccountNotFoundError: either account does not exist
            InvalidAmountError: amount is not positive
            InsufficientFundsError: source balance is too low
        """
        if from_account_number == to_account_number:
            raise SameAccountTransferError("Cannot transfer to the same account")

        source = self.get_account(from_account_number)
        destination = self.get_account(to_account_number)
        value = positive_money(amount, "Transfer amount must be positive")

        source.debit(value, TRANSFER_OUT, counterparty=to_account_number)
        destination.credit(value, TRANSFER_IN, counterparty=from_account_number)
        logger.info(f"Transferred {value} from {from_account_number} to {to_account_number}")
        log_event("transfer", details=f"{value} from {from_account_number} to {to_account_number}")
        return TransferResult(source.balance, destination.balance)

    def get_all_accounts(self) -> list[Account]:
        return list(self.accounts.values())

    # =========================================================================
    # Term deposits
    # =========================================================================

    def open_term_deposit(
        self,
        account_number: int,
        amount: Amount,
        interest_rate: Amount,
        term_months: int,
    ) -> int:
        """Lock amount from an account into a new term deposit.

        Returns:
            The new term deposit id

        Raises:
            InvalidAmountError: amount, rate or term is not positive
            InsufficientFundsError: account balance is below amount
        """
        account = self.get_account(account_number)
        principal = positive_money(amount, "Term deposit amount must be positive")
        rate = positive_money(interest_rate, "Interest rate must be positive")
        if not isinstance(term_months, int) or isinstance(term_months, bool) or term_months <= 0:
            raise InvalidAmountError("Term must be a positive number of months")
        if principal > account.balance:
            raise InsufficientFundsError("Insufficient funds in account")

        term_deposit_id = self._next_term_deposit_id
        self._next_term_deposit_id += 1
        account.debit(principal, TERM_DEPOSIT_OPENED, term_deposit_id=term_deposit_id)
        self.term_deposits[term_deposit_id] = TermDeposit(
            term_deposit_id=term_deposit_id,
            account_number=account_number,
            principal=principal,
            interest_rate=rate,
            term_months=term_months,
        )
        logger.info(f"Opened term deposit {term_deposit_id} on account {account_number}: {principal} at {rate}%")
        log_event("term_deposit_opened", details=f"Term deposit {term_deposit_id} on account {account_number}: {principal}")
        return term_deposit_id

    def get_term_deposit(self, term_deposit_id: int) -> TermDeposit:
        term_deposit = self.term_deposits.get(term_deposit_id)
        if term_deposit is None:
            raise TermDepositNotFoundError("Term deposit not found")
        return term_deposit

    def close_term_deposit(self, term_deposit_id: int, account_number: int) -> Decimal:
        """Close a term deposit and credit its maturity amount to account_number.

        Any existing account may receive the payout.

        Raises:
            TermDepositNotFoundError: unknown id
            AccountNotFoundError: unknown account
            TermDepositClosedError: already closed
        """
        term_deposit = self.get_term_deposit(term_deposit_id)
        account = self.get_account(account_number)

        maturity_amount = term_deposit.close()
        account.credit(maturity_amount, TERM_DEPOSIT_CLOSED, term_deposit_id=term_deposit_id)
        logger.info(f"Closed term deposit {term_deposit_id}, credited {maturity_amount} to {account_number}")
        log_event("term_deposit_closed", details=f"Term deposit {term_deposit_id} paid {maturity_amount} to {account_number}")
        return maturity_amount

    def get_all_term_deposits(self) -> list[TermDeposit]:
        return list(self.term_deposits.values())
