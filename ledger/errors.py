"""
Ledger error hierarchy.

Every failed ledger operation raises a LedgerError subclass; the CLI
reports its message and returns to the menu. Balances are never changed
by an operation that raises.
"""


class LedgerError(Exception):
    """Base class for ledger operation failures."""


class InvalidAmountError(LedgerError):
    """Amount is not a finite positive number (or negative for opening balances)."""


class InsufficientFundsError(LedgerError):
    """Debit exceeds the available balance."""


class AccountNotFoundError(LedgerError):
    """No account with the given number."""


class TermDepositNotFoundError(LedgerError):
    """No term deposit with the given id."""


class TermDepositClosedError(LedgerError):
    """Term deposit was already closed."""


class SameAccountTransferError(LedgerError):
    """Transfer source and destination are the same account."""
