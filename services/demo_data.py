"""Canned demo dataset served to users without a bank connection."""

from decimal import Decimal
from typing import List
from models.account import Account
from models.transaction import Transaction


def _txn(id, date, amount, merchant, category, account):
    return Transaction(
        id=id,
        date=date,
        amount=Decimal(amount),
        merchant=merchant,
        category=category,
        account=account,
    )


DEMO_TRANSACTIONS = (
    _txn("txn_001", "2026-01-02", "-45.67", "Whole Foods Market", "groceries", "Chase Checking"),
    _txn("txn_002", "2026-01-03", "-12.50", "Starbucks", "food", "Chase Checking"),
    _txn("txn_003", "2026-01-05", "3500.00", "Employer Direct Deposit", "income", "Chase Checking"),
    _txn("txn_004", "2026-01-06", "-89.99", "Amazon", "shopping", "Amex Platinum"),
    _txn("txn_005", "2026-01-07", "-150.00", "PG&E", "utilities", "Chase Checking"),
    _txn("txn_006", "2026-01-08", "-35.00", "Uber", "transport", "Amex Platinum"),
    _txn("txn_007", "2026-01-10", "-78.50", "Trader Joes", "groceries", "Chase Checking"),
    _txn("txn_008", "2026-01-12", "-25.00", "Netflix", "entertainment", "Amex Platinum"),
    _txn("txn_009", "2026-01-12", "-15.99", "Spotify", "entertainment", "Amex Platinum"),
    _txn("txn_010", "2026-01-15", "-200.00", "CVS Pharmacy", "health", "Chase Checking"),
    _txn("txn_011", "2026-01-18", "-65.00", "Chipotle", "food", "Amex Platinum"),
    _txn("txn_012", "2026-01-19", "3500.00", "Employer Direct Deposit", "income", "Chase Checking"),
    _txn("txn_013", "2026-01-20", "-1200.00", "Rent Payment", "housing", "Chase Checking"),
    _txn("txn_014", "2026-01-22", "-55.00", "Shell Gas Station", "transport", "Chase Checking"),
    _txn("txn_015", "2026-01-24", "-125.00", "Target", "shopping", "Amex Platinum"),
    _txn("txn_016", "2026-01-25", "-42.00", "Grubhub", "food", "Amex Platinum"),
    _txn("txn_017", "2026-01-27", "-95.50", "Costco", "groceries", "Chase Checking"),
    _txn("txn_018", "2026-01-28", "500.00", "Venmo Transfer", "transfer", "Chase Checking"),
    _txn("txn_019", "2026-01-29", "-180.00", "United Airlines", "travel", "Amex Platinum"),
    _txn("txn_020", "2026-01-30", "-28.00", "Lyft", "transport", "Amex Platinum"),
)

DEMO_ACCOUNTS = (
    Account(
        id="acc_001",
        name="Chase Checking",
        type="checking",
        balance=Decimal("4250.33"),
        institution="Chase",
    ),
    Account(
        id="acc_002",
        name="Amex Platinum",
        type="credit",
        balance=Decimal("-892.48"),
        institution="American Express",
    ),
)


def demo_transactions() -> List[Transaction]:
    """Fresh copies of the demo transactions."""
    return [Transaction(**vars(t)) for t in DEMO_TRANSACTIONS]


def demo_accounts() -> List[Account]:
    """Fresh copies of the demo accounts."""
    return [Account(**vars(a)) for a in DEMO_ACCOUNTS]
