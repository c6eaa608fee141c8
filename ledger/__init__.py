"""
Command-line banking ledger simulator.

Accounts, transfers and simple-interest term deposits held in memory,
driven by an interactive menu (ledger.cli).
"""

from ledger.account import Account, Transaction
from ledger.bank import Bank, TransferResult
from ledger.errors import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    LedgerError,
    SameAccountTransferError,
    TermDepositClosedError,
    TermDepositNotFoundError,
)
from ledger.term_deposit import TermDeposit

__all__ = [
    "Account",
    "Transaction",
    "Bank",
    "TransferResult",
    "TermDeposit",
    "LedgerError",
    "InvalidAmountError",
    "InsufficientFundsError",
    "AccountNotFoundError",
    "TermDepositNotFoundError",
    "TermDepositClosedError",
    "SameAccountTransferError",
]
