"""Tests for the banking ledger: accounts, transfers and term deposits."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from core import clear_event_log, get_event_log
from ledger import (
    Account,
    AccountNotFoundError,
    Bank,
    InsufficientFundsError,
    InvalidAmountError,
    SameAccountTransferError,
    TermDeposit,
    TermDepositClosedError,
    TermDepositNotFoundError,
)
from ledger.money import format_money, to_money
from ledger.term_deposit import add_months


@pytest.fixture
def bank():
    return Bank("Test Bank", first_account_number=1000)


class TestAccount:
    def test_initial_balance(self):
        account = Account(1001, Decimal("1000"))
        assert account.get_balance() == Decimal("1000")
        assert account.get_transaction_history() == []

    def test_deposit(self):
        account = Account(1002, Decimal("500"))
        assert account.deposit(200) == Decimal("700")

    def test_withdraw(self):
        account = Account(1003, Decimal("1000"))
        assert account.withdraw(300) == Decimal("700")

    def test_insufficient_funds(self):
        account = Account(1004, Decimal("100"))
        with pytest.raises(InsufficientFundsError, match="Insufficient funds"):
            account.withdraw(200)
        assert account.balance == Decimal("100")
        assert account.transactions == []

    @pytest.mark.parametrize("amount", [0, -5, "abc", "NaN", "Infinity"])
    def test_invalid_amounts(self, amount):
        account = Account(1005, Decimal("100"))
        with pytest.raises(InvalidAmountError):
            account.deposit(amount)
        with pytest.raises(InvalidAmountError):
            account.withdraw(amount)

    def test_history(self):
        account = Account(1006, Decimal("1000"))
        account.deposit(200)
        account.withdraw(100)
        history = account.get_transaction_history()
        assert [tx.type for tx in history] == ["deposit", "withdrawal"]
        assert [tx.balance for tx in history] == [Decimal("1200"), Decimal("1100")]

    def test_decimal_arithmetic_is_exact(self):
        account = Account(1007)
        account.deposit(0.1)
        account.deposit(0.2)
        assert account.balance == Decimal("0.3")

    def test_transaction_to_dict(self):
        account = Account(1008)
        account.deposit("12.50")
        data = account.transactions[0].to_dict()
        assert data["type"] == "deposit"
        assert data["amount"] == "12.50"
        assert "counterparty" not in data


class TestBankAccounts:
    def test_account_numbers_start_at_1000(self, bank):
        assert bank.create_account(1500) == 1000
        assert bank.create_account() == 1001
        assert bank.get_balance(1000) == Decimal("1500")
        assert bank.get_balance(1001) == Decimal("0")

    def test_first_number_from_settings(self):
        assert Bank().create_account() == 1000

    def test_negative_initial_balance(self, bank):
        with pytest.raises(InvalidAmountError):
            bank.create_account(-1)

    def test_unknown_account(self, bank):
        with pytest.raises(AccountNotFoundError, match="Account not found"):
            bank.get_account(4242)

    def test_deposit_and_withdraw(self, bank):
        number = bank.create_account(100)
        assert bank.deposit(number, 50) == Decimal("150")
        assert bank.withdraw(number, 25) == Decimal("125")

    def test_get_all_accounts(self, bank):
        bank.create_account(1)
        bank.create_account(2)
        assert [a.account_number for a in bank.get_all_accounts()] == [1000, 1001]


class TestTransfer:
    def test_transfer(self, bank):
        a = bank.create_account(1000)
        b = bank.create_account(500)
        result = bank.transfer(a, b, 300)
        assert result.from_balance == Decimal("700")
        assert result.to_balance == Decimal("800")

    def test_transfer_records_one_entry_per_side(self, bank):
        a = bank.create_account(1000)
        b = bank.create_account(0)
        bank.transfer(a, b, 300)
        out, = bank.get_account(a).transactions
        into, = bank.get_account(b).transactions
        assert (out.type, out.counterparty) == ("transfer_out", b)
        assert (into.type, into.counterparty) == ("transfer_in", a)

    def test_insufficient_funds_leaves_both_untouched(self, bank):
        a = bank.create_account(100)
        b = bank.create_account(0)
        with pytest.raises(InsufficientFundsError):
            bank.transfer(a, b, 200)
        assert bank.get_balance(a) == Decimal("100")
        assert bank.get_balance(b) == Decimal("0")
        assert bank.get_account(b).transactions == []

    def test_same_account(self, bank):
        a = bank.create_account(100)
        with pytest.raises(SameAccountTransferError):
            bank.transfer(a, a, 10)

    def test_unknown_destination(self, bank):
        a = bank.create_account(100)
        with pytest.raises(AccountNotFoundError):
            bank.transfer(a, 9999, 10)
        assert bank.get_balance(a) == Decimal("100")

    def test_non_positive_amount(self, bank):
        a = bank.create_account(100)
        b = bank.create_account(0)
        with pytest.raises(InvalidAmountError):
            bank.transfer(a, b, 0)


class TestTermDeposit:
    def test_maturity_amount(self):
        td = TermDeposit(1, 1000, Decimal("10000"), Decimal("5"), 12)
        assert td.calculate_maturity_amount() == Decimal("10500.00")

    def test_maturity_amount_rounded_to_cents(self):
        td = TermDeposit(1, 1000, Decimal("1000"), Decimal("3.5"), 7)
        # 1000 * (1 + 0.035/12 * 7) = 1020.41666...
        assert td.calculate_maturity_amount() == Decimal("1020.42")

    def test_maturity_date(self):
        start = datetime(2024, 1, 31, 9, 0, tzinfo=timezone.utc)
        td = TermDeposit(1, 1000, Decimal("100"), Decimal("1"), 1, start_date=start)
        assert td.maturity_date == datetime(2024, 2, 29, 9, 0, tzinfo=timezone.utc)

    def test_is_matured(self):
        start = datetime(2024, 1, 15, tzinfo=timezone.utc)
        td = TermDeposit(1, 1000, Decimal("100"), Decimal("1"), 6, start_date=start)
        assert not td.is_matured(clock=lambda: datetime(2024, 7, 14, tzinfo=timezone.utc))
        assert td.is_matured(clock=lambda: datetime(2024, 7, 15, tzinfo=timezone.utc))

    def test_close_once(self):
        td = TermDeposit(1, 1000, Decimal("100"), Decimal("12"), 12)
        assert td.close() == Decimal("112.00")
        assert not td.is_active
        with pytest.raises(TermDepositClosedError):
            td.close()

    def test_details(self):
        td = TermDeposit(3, 1000, Decimal("100"), Decimal("12"), 12)
        details = td.details()
        assert details["term_deposit_id"] == 3
        assert details["maturity_amount"] == Decimal("112.00")
        assert details["maturity_date"] - details["start_date"] > timedelta(days=364)


class TestAddMonths:
    @pytest.mark.parametrize("start,months,expected", [
        (datetime(2024, 1, 15), 1, datetime(2024, 2, 15)),
        (datetime(2024, 1, 31), 1, datetime(2024, 2, 29)),
        (datetime(2023, 1, 31), 1, datetime(2023, 2, 28)),
        (datetime(2024, 11, 30), 3, datetime(2025, 2, 28)),
        (datetime(2024, 5, 10), 24, datetime(2026, 5, 10)),
    ])
    def test_add_months(self, start, months, expected):
        assert add_months(start, months) == expected


class TestBankTermDeposits:
    def test_open(self, bank):
        number = bank.create_account(15000)
        td_id = bank.open_term_deposit(number, 10000, 4, 6)
        assert td_id == 1
        assert bank.get_balance(number) == Decimal("5000")
        details = bank.get_term_deposit(td_id).details()
        assert details["principal"] == Decimal("10000")
        assert details["interest_rate"] == Decimal("4")
        entry, = bank.get_account(number).transactions
        assert (entry.type, entry.term_deposit_id) == ("term_deposit_opened", 1)

    def test_ids_are_sequential(self, bank):
        number = bank.create_account(300)
        assert bank.open_term_deposit(number, 100, 1, 1) == 1
        assert bank.open_term_deposit(number, 100, 1, 1) == 2

    def test_open_insufficient_funds(self, bank):
        number = bank.create_account(100)
        with pytest.raises(InsufficientFundsError, match="Insufficient funds in account"):
            bank.open_term_deposit(number, 200, 5, 12)
        assert bank.get_all_term_deposits() == []

    @pytest.mark.parametrize("amount,rate,months", [(0, 5, 12), (100, 0, 12), (100, 5, 0), (100, 5, 1.5)])
    def test_open_invalid_input(self, bank, amount, rate, months):
        number = bank.create_account(1000)
        with pytest.raises(InvalidAmountError):
            bank.open_term_deposit(number, amount, rate, months)
        assert bank.get_balance(number) == Decimal("1000")

    def test_close(self, bank):
        number = bank.create_account(15000)
        td_id = bank.open_term_deposit(number, 10000, 5, 12)
        maturity = bank.close_term_deposit(td_id, number)
        assert maturity == Decimal("10500.00")
        assert bank.get_balance(number) == Decimal("15500.00")
        assert bank.get_account(number).transactions[-1].type == "term_deposit_closed"

    def test_close_twice(self, bank):
        number = bank.create_account(1000)
        td_id = bank.open_term_deposit(number, 500, 5, 12)
        bank.close_term_deposit(td_id, number)
        with pytest.raises(TermDepositClosedError):
            bank.close_term_deposit(td_id, number)

    def test_close_unknown(self, bank):
        number = bank.create_account(1000)
        with pytest.raises(TermDepositNotFoundError):
            bank.close_term_deposit(99, number)

    def test_close_into_other_account(self, bank):
        owner = bank.create_account(1000)
        other = bank.create_account(0)
        td_id = bank.open_term_deposit(owner, 1000, 12, 12)
        bank.close_term_deposit(td_id, other)
        assert bank.get_balance(other) == Decimal("1120.00")


class TestMoney:
    def test_to_money_from_float_uses_str(self):
        assert to_money(0.1) == Decimal("0.1")

    def test_bool_rejected(self):
        with pytest.raises(InvalidAmountError):
            to_money(True)

    def test_format(self):
        assert format_money(Decimal("1234.5")) == "$1,234.50"


class TestBankAuditTrail:
    @pytest.fixture(autouse=True)
    def _clean_log(self):
        clear_event_log()
        yield
        clear_event_log()

    def test_operations_are_audited(self, bank):
        first = bank.create_account(1000)
        second = bank.create_account(0)
        bank.transfer(first, second, 100)
        td_id = bank.open_term_deposit(first, 500, 5, 12)
        bank.close_term_deposit(td_id, first)

        actions = [e["action"] for e in reversed(get_event_log())]
        assert actions == [
            "account_opened",
            "account_opened",
            "transfer",
            "term_deposit_opened",
            "term_deposit_closed",
        ]

    def test_failed_operation_not_audited(self, bank):
        number = bank.create_account(10)
        clear_event_log()
        with pytest.raises(InsufficientFundsError):
            bank.open_term_deposit(number, 500, 5, 12)
        assert get_event_log() == []
