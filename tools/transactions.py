"""Transaction analysis tools.

Pure functions over a resolved snapshot of transactions or accounts. Nothing
here does I/O or mutates its input; an empty or non-matching input produces
an empty or zeroed result rather than an error.

Dates are ISO strings compared lexicographically, so bounds that are not
zero-padded YYYY-MM-DD simply fail to match.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Union
from models.account import Account
from models.category import NON_SPENDING_CATEGORIES
from models.transaction import Transaction

Number = Union[Decimal, int, float, str]

CHECKING_ACCOUNT_TYPES = frozenset({"checking", "depository"})
CREDIT_ACCOUNT_TYPES = frozenset({"credit"})


@dataclass
class TransactionFilter:
    """Criteria for filter_transactions. Every field is optional.

    Attributes:
        category: Exact category, compared case-insensitively.
        merchant: Case-insensitive substring of the merchant name.
        start_date: Inclusive lower date bound (YYYY-MM-DD).
        end_date: Inclusive upper date bound (YYYY-MM-DD).
        min_amount: Inclusive lower bound on the signed amount.
        max_amount: Inclusive upper bound on the signed amount.
            A NaN bound on either side matches nothing.
        account: Case-insensitive substring of the account name.
        limit: Keep only the first N results after sorting. None or a
            non-positive value keeps everything.
    """

    category: Optional[str] = None
    merchant: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    min_amount: Optional[Number] = None
    max_amount: Optional[Number] = None
    account: Optional[str] = None
    limit: Optional[int] = None

    def matches(self, transaction: Transaction) -> bool:
        """Check a single transaction against every set criterion."""
        if self.category and transaction.category.lower() != self.category.lower():
            return False
        if self.merchant and self.merchant.lower() not in transaction.merchant.lower():
            return False
        if not _in_date_range(transaction.date, self.start_date, self.end_date):
            return False
        if self.min_amount is not None:
            low = _to_decimal(self.min_amount)
            if low.is_nan() or transaction.amount < low:
                return False
        if self.max_amount is not None:
            high = _to_decimal(self.max_amount)
            if high.is_nan() or transaction.amount > high:
                return False
        if self.account and self.account.lower() not in transaction.account.lower():
            return False
        return True


def filter_transactions(
    transactions: Iterable[Transaction],
    criteria: Optional[TransactionFilter] = None,
) -> List[Transaction]:
    """Filter transactions and sort them newest first.

    Criteria combine with AND. Sorting is by date descending; transactions on
    the same date keep their input order. The limit applies after sorting.

    Args:
        transactions: Snapshot to query.
        criteria: Filter to apply. None returns everything, sorted.

    Returns:
        New list of matching transactions.
    """
    criteria = criteria or TransactionFilter()

    matched = [t for t in transactions if criteria.matches(t)]
    # sorted() stays stable with reverse=True, so same-day order is preserved
    matched = sorted(matched, key=lambda t: t.date, reverse=True)

    if criteria.limit is not None and criteria.limit > 0:
        matched = matched[: criteria.limit]

    return matched


def total_balance(accounts: Iterable[Account]) -> Dict[str, Decimal]:
    """Summarize balances across accounts.

    Only checking-like ("checking", "depository") and "credit" accounts
    count; investment, loan and other account types are left out of every
    figure.

    Returns:
        Dictionary with:
        - "checking": Sum of checking-like balances.
        - "credit_owed": Absolute value of the summed credit balances.
        - "net_worth": Checking balances plus (negative) credit balances.

    Example:
        {
            "checking": Decimal("4250.33"),
            "credit_owed": Decimal("892.48"),
            "net_worth": Decimal("3357.85"),
        }
    """
    checking = Decimal("0")
    credit = Decimal("0")

    for account in accounts:
        balance = account.balance if account.balance is not None else Decimal("0")
        if account.type in CHECKING_ACCOUNT_TYPES:
            checking += balance
        elif account.type in CREDIT_ACCOUNT_TYPES:
            credit += balance

    return {
        "checking": checking,
        "credit_owed": abs(credit),
        "net_worth": checking + credit,
    }


def spending_summary(
    transactions: Iterable[Transaction],
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> Dict[str, Dict]:
    """Total spending per category.

    A transaction counts as spending when its amount is negative and its
    category is neither "income" nor "transfer".

    Args:
        transactions: Snapshot to summarize.
        start_date: Optional inclusive lower date bound.
        end_date: Optional inclusive upper date bound.

    Returns:
        Dictionary mapping category to {"total": Decimal, "count": int}, in
        order of first appearance. Categories without spending are absent.

    Example:
        {
            "groceries": {"total": Decimal("220.14"), "count": 3},
            "food": {"total": Decimal("119.50"), "count": 3},
        }
    """
    summary: Dict[str, Dict] = {}

    for transaction in transactions:
        if not _is_spending(transaction):
            continue
        if not _in_date_range(transaction.date, start_date, end_date):
            continue

        entry = summary.setdefault(
            transaction.category, {"total": Decimal("0"), "count": 0}
        )
        entry["total"] += abs(transaction.amount)
        entry["count"] += 1

    return summary


def income_summary(
    transactions: Iterable[Transaction],
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> Dict:
    """Summarize money coming in.

    A transaction counts as income when its category is "income" or its
    amount is positive, so incoming transfers and refunds are included.

    Returns:
        Dictionary with "total" (sum of absolute amounts, Decimal), "count"
        and "transactions" (matches in input order).
    """
    matched = [
        t
        for t in transactions
        if (t.category == "income" or t.amount > 0)
        and _in_date_range(t.date, start_date, end_date)
    ]
    return _totals(matched)


def category_spending(transactions: Iterable[Transaction], category: str) -> Dict:
    """Drill into the outgoing transactions of one category.

    Args:
        transactions: Snapshot to search.
        category: Category name, compared case-insensitively. Unknown names
            produce an empty result.

    Returns:
        Dictionary with "total", "count" and "transactions".
    """
    wanted = (category or "").lower()
    matched = [t for t in transactions if t.category.lower() == wanted and t.amount < 0]
    return _totals(matched)


def _is_spending(transaction: Transaction) -> bool:
    return (
        transaction.amount < 0
        and transaction.category not in NON_SPENDING_CATEGORIES
    )


def _in_date_range(
    value: str, start_date: Optional[str], end_date: Optional[str]
) -> bool:
    if start_date and value < start_date:
        return False
    if end_date and value > end_date:
        return False
    return True


def _totals(matched: List[Transaction]) -> Dict:
    return {
        "total": sum((abs(t.amount) for t in matched), Decimal("0")),
        "count": len(matched),
        "transactions": matched,
    }


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
