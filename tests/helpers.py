"""Helper utilities for tests."""

from decimal import Decimal

from models.account import Account
from models.transaction import Transaction


def make_transaction(
    id="t1",
    date="2026-02-01",
    amount="-10.00",
    merchant="Corner Store",
    category="shopping",
    account="Checking",
    pending=None,
) -> Transaction:
    """Build a Transaction with sensible defaults."""
    return Transaction(
        id=id,
        date=date,
        amount=Decimal(amount),
        merchant=merchant,
        category=category,
        account=account,
        pending=pending,
    )


def make_account(
    id="a1", name="Checking", type="checking", balance="100.00", **kwargs
) -> Account:
    """Build an Account with sensible defaults."""
    return Account(id=id, name=name, type=type, balance=Decimal(balance), **kwargs)
