#!/usr/bin/env python3
"""
Interactive banking menu over a Bank.

Run:
    ledger-cli
    python -m ledger.cli --bank-name "Test Bank" --verbose

Options:
    --bank-name    Display name of the bank
    --verbose      Enable debug logging
"""

import argparse
import logging
import sys
from typing import Callable, Optional, TextIO

from ledger.bank import Bank
from ledger.errors import LedgerError
from ledger.money import format_money, to_money

MENU_OPTIONS = [
    "Create Account",
    "Login to Account",
    "Check Balance",
    "Deposit Money",
    "Withdraw Money",
    "Transfer Money",
    "Open Term Deposit",
    "View Term Deposits",
    "Close Term Deposit",
    "View Transaction History",
    "Exit",
]

LOGIN_FIRST = "Please login to an account first."
DATE_FORMAT = "%a %b %d %Y"


def _parse_int(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None


def _parse_amount(text: str):
    try:
        return to_money(text)
    except LedgerError:
        return None


class BankingApp:
    """Menu-driven session. Input and output are injectable for tests."""

    def __init__(
        self,
        bank: Optional[Bank] = None,
        input_func: Optional[Callable[[str], str]] = None,
        output: Optional[TextIO] = None,
    ):
        self.bank = bank or Bank()
        self._input = input_func or input
        self._output = output or sys.stdout
        self.current_account: Optional[int] = None

    def say(self, message: str = "") -> None:
        print(message, file=self._output)

    def prompt(self, question: str) -> str:
        return self._input(question).strip()

    def display_menu(self) -> None:
        title = f"=== {self.bank.name} ==="
        self.say()
        self.say(title)
        for number, label in enumerate(MENU_OPTIONS, start=1):
            self.say(f"{number}. {label}")
        self.say("=" * len(title))

    def _require_login(self) -> bool:
        if self.current_account is None:
            self.say(LOGIN_FIRST)
            return False
        return True

    # =========================================================================
    # Menu actions
    # =========================================================================

    def create_account(self) -> None:
        initial = _parse_amount(self.prompt("Enter initial deposit amount ($): "))
        if initial is None or initial < 0:
            self.say("Invalid amount. Please enter a valid positive number.")
            return
        try:
            account_number = self.bank.create_account(initial)
        except LedgerError as e:
            self.say(f"Error creating account: {e}")
            return
        self.say(f"Account created successfully! Account Number: {account_number}")
        self.say(f"Initial balance: {format_money(initial)}")

    def login(self) -> None:
        account_number = _parse_int(self.prompt("Enter your account number: "))
        try:
            self.bank.get_account(account_number)
        except LedgerError as e:
            self.say(f"Error logging in: {e}")
            self.current_account = None
            return
        self.current_account = account_number
        self.say(f"Logged in to account {account_number}")

    def check_balance(self) -> None:
        if not self._require_login():
            return
        self.say(f"Current balance: {format_money(self.bank.get_balance(self.current_account))}")

    def deposit(self) -> None:
        if not self._require_login():
            return
        amount = _parse_amount(self.prompt("Enter deposit amount ($): "))
        if amount is None or amount <= 0:
            self.say("Invalid amount. Please enter a valid positive number.")
            return
        try:
            balance = self.bank.deposit(self.current_account, amount)
        except LedgerError as e:
            self.say(f"Error depositing money: {e}")
            return
        self.say(f"Deposited {format_money(amount)}. New balance: {format_money(balance)}")

    def withdraw(self) -> None:
        if not self._require_login():
            return
        amount = _parse_amount(self.prompt("Enter withdrawal amount ($): "))
        if amount is None or amount <= 0:
            self.say("Invalid amount. Please enter a valid positive number.")
            return
        try:
            balance = self.bank.withdraw(self.current_account, amount)
        except LedgerError as e:
            self.say(f"Error withdrawing money: {e}")
            return
        self.say(f"Withdrew {format_money(amount)}. New balance: {format_money(balance)}")

    def transfer(self) -> None:
        if not self._require_login():
            return
        to_account = _parse_int(self.prompt("Enter recipient account number: "))
        amount = _parse_amount(self.prompt("Enter transfer amount ($): "))
        if to_account is None or amount is None or amount <= 0:
            self.say("Invalid input. Please enter valid numbers.")
            return
        try:
            result = self.bank.transfer(self.current_account, to_account, amount)
        except LedgerError as e:
            self.say(f"Error transferring money: {e}")
            return
        self.say("Transfer successful!")
        self.say(f"Your new balance: {format_money(result.from_balance)}")
        self.say(f"Recipient's new balance: {format_money(result.to_balance)}")

    def open_term_deposit(self) -> None:
        if not self._require_login():
            return
        amount = _parse_amount(self.prompt("Enter term deposit amount ($): "))
        rate = _parse_amount(self.prompt("Enter annual interest rate (%): "))
        months = _parse_int(self.prompt("Enter term in months: "))
        if amount is None or amount <= 0 or rate is None or rate <= 0 or months is None or months <= 0:
            self.say("Invalid input. Please enter valid positive numbers.")
            return
        try:
            term_deposit_id = self.bank.open_term_deposit(self.current_account, amount, rate, months)
        except LedgerError as e:
            self.say(f"Error opening term deposit: {e}")
            return

        details = self.bank.get_term_deposit(term_deposit_id).details()
        self.say("Term deposit opened successfully!")
        self.say(f"Term Deposit ID: {term_deposit_id}")
        self.say(f"Principal: {format_money(details['principal'])}")
        self.say(f"Interest Rate: {details['interest_rate']}% per annum")
        self.say(f"Term: {details['term_months']} months")
        self.say(f"Maturity Date: {details['maturity_date'].strftime(DATE_FORMAT)}")
        self.say(f"Maturity Amount: {format_money(details['maturity_amount'])}")

    def view_term_deposits(self) -> None:
        term_deposits = self.bank.get_all_term_deposits()
        if not term_deposits:
            self.say("No term deposits found.")
            return

        self.say()
        self.say("=== Term Deposits ===")
        for td in term_deposits:
            d = td.details()
            status = "Active" if d["is_active"] else "Closed"
            self.say(
                f"ID: {d['term_deposit_id']} | Principal: {format_money(d['principal'])} | "
                f"Rate: {d['interest_rate']}% | Term: {d['term_months']}m | Status: {status}"
            )
            self.say(
                f"  Maturity: {d['maturity_date'].strftime(DATE_FORMAT)} | "
                f"Amount: {format_money(d['maturity_amount'])}"
            )

    def close_term_deposit(self) -> None:
        if not self._require_login():
            return
        term_deposit_id = _parse_int(self.prompt("Enter term deposit ID to close: "))
        if term_deposit_id is None:
            self.say("Invalid term deposit ID.")
            return
        try:
            amount = self.bank.close_term_deposit(term_deposit_id, self.current_account)
        except LedgerError as e:
            self.say(f"Error closing term deposit: {e}")
            return
        self.say("Term deposit closed successfully!")
        self.say(f"Amount credited to your account: {format_money(amount)}")

    def view_transaction_history(self) -> None:
        if not self._require_login():
            return
        transactions = self.bank.get_account(self.current_account).get_transaction_history()
        if not transactions:
            self.say("No transactions found.")
            return

        self.say()
        self.say("=== Transaction History ===")
        for tx in transactions:
            self.say(
                f"{tx.timestamp:%Y-%m-%d %H:%M:%S} | {tx.type.upper()} | "
                f"{format_money(tx.amount)} | Balance: {format_money(tx.balance)}"
            )

    # =========================================================================
    # Main loop
    # =========================================================================

    def run(self) -> None:
        actions = {
            "1": self.create_account,
            "2": self.login,
            "3": self.check_balance,
            "4": self.deposit,
            "5": self.withdraw,
            "6": self.transfer,
            "7": self.open_term_deposit,
            "8": self.view_term_deposits,
            "9": self.close_term_deposit,
            "10": self.view_transaction_history,
        }
        exit_choice = str(len(MENU_OPTIONS))
        goodbye = f"Thank you for using {self.bank.name}!"

        self.say(f"Welcome to {self.bank.name}!")
        while True:
            self.display_menu()
            try:
                choice = self.prompt(f"Select an option (1-{exit_choice}): ")
                if choice == exit_choice:
                    self.say(goodbye)
                    return
                action = actions.get(choice)
                if action is None:
                    self.say("Invalid option. Please try again.")
                    continue
                action()
            except EOFError:
                self.say()
                self.say(goodbye)
                return


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Interactive banking ledger simulator")
    parser.add_argument(
        "--bank-name", "-n",
        default=None,
        help="Bank display name (default: LEDGER_BANK_NAME or 'Digital Bank')"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    args = parser.parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        BankingApp(Bank(args.bank_name)).run()
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
