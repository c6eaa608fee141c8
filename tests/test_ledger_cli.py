"""Tests for the interactive ledger menu."""

import io
from decimal import Decimal

import pytest

from ledger import Bank
from ledger.cli import BankingApp, main


def run_session(*answers, bank=None):
    """Drive a full menu session with scripted answers; returns (bank, output)."""
    bank = bank or Bank("Test Bank")
    feed = iter(answers)
    output = io.StringIO()

    def answer(prompt):
        try:
            return next(feed)
        except StopIteration:
            raise EOFError from None

    BankingApp(bank, input_func=answer, output=output).run()
    return bank, output.getvalue()


class TestMenu:
    def test_exit(self):
        _, out = run_session("11")
        assert "Welcome to Test Bank!" in out
        assert "1. Create Account" in out
        assert "11. Exit" in out
        assert "Thank you for using Test Bank!" in out

    def test_invalid_option(self):
        _, out = run_session("42", "11")
        assert "Invalid option. Please try again." in out

    def test_end_of_input_exits(self):
        _, out = run_session()
        assert "Thank you for using Test Bank!" in out

    @pytest.mark.parametrize("choice", ["3", "4", "5", "6", "7", "9", "10"])
    def test_actions_require_login(self, choice):
        _, out = run_session(choice, "11")
        assert "Please login to an account first." in out


class TestAccountActions:
    def test_create_login_deposit_withdraw(self):
        bank, out = run_session(
            "1", "100",
            "2", "1000",
            "4", "50.25",
            "5", "20",
            "3",
            "11",
        )
        assert "Account created successfully! Account Number: 1000" in out
        assert "Logged in to account 1000" in out
        assert "Deposited $50.25. New balance: $150.25" in out
        assert "Withdrew $20.00. New balance: $130.25" in out
        assert "Current balance: $130.25" in out
        assert bank.get_balance(1000) == Decimal("130.25")

    def test_create_rejects_negative(self):
        bank, out = run_session("1", "-5", "11")
        assert "Invalid amount" in out
        assert bank.get_all_accounts() == []

    def test_login_unknown_account(self):
        _, out = run_session("2", "1234", "11")
        assert "Error logging in: Account not found" in out

    def test_login_non_numeric(self):
        _, out = run_session("2", "abc", "11")
        assert "Error logging in" in out

    def test_overdraw_reports_error(self):
        _, out = run_session("1", "10", "2", "1000", "5", "50", "11")
        assert "Error withdrawing money: Insufficient funds" in out

    def test_transfer(self):
        bank = Bank("Test Bank")
        bank.create_account(500)
        bank.create_account(0)
        _, out = run_session("2", "1000", "6", "1001", "200", "11", bank=bank)
        assert "Transfer successful!" in out
        assert "Your new balance: $300.00" in out
        assert "Recipient's new balance: $200.00" in out

    def test_transfer_to_self(self):
        bank = Bank("Test Bank")
        bank.create_account(500)
        _, out = run_session("2", "1000", "6", "1000", "10", "11", bank=bank)
        assert "Error transferring money: Cannot transfer to the same account" in out

    def test_history(self):
        _, out = run_session("1", "0", "2", "1000", "4", "10", "10", "11")
        assert "=== Transaction History ===" in out
        assert "| DEPOSIT | $10.00 | Balance: $10.00" in out

    def test_empty_history(self):
        _, out = run_session("1", "0", "2", "1000", "10", "11")
        assert "No transactions found." in out


class TestTermDepositActions:
    def test_open_view_close(self):
        bank, out = run_session(
            "1", "15000",
            "2", "1000",
            "7", "10000", "5", "12",
            "8",
            "9", "1",
            "11",
        )
        assert "Term Deposit ID: 1" in out
        assert "Maturity Amount: $10,500.00" in out
        assert "ID: 1 | Principal: $10,000.00 | Rate: 5% | Term: 12m | Status: Active" in out
        assert "Amount credited to your account: $10,500.00" in out
        assert bank.get_balance(1000) == Decimal("15500.00")

    def test_view_without_deposits(self):
        _, out = run_session("8", "11")
        assert "No term deposits found." in out

    def test_open_invalid_input(self):
        _, out = run_session("1", "100", "2", "1000", "7", "50", "0", "12", "11")
        assert "Invalid input. Please enter valid positive numbers." in out

    def test_close_twice(self):
        _, out = run_session(
            "1", "100", "2", "1000",
            "7", "50", "5", "12",
            "9", "1",
            "9", "1",
            "11",
        )
        assert "Error closing term deposit: Term deposit is already closed" in out


class TestMain:
    def test_bank_name_option(self, monkeypatch, capsys):
        monkeypatch.setattr("builtins.input", lambda prompt: "11")
        assert main(["--bank-name", "CLI Bank"]) == 0
        assert "Welcome to CLI Bank!" in capsys.readouterr().out
