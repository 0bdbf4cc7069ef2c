"""Tests for transaction analysis tools."""

from decimal import Decimal

import pytest

from services.demo_data import demo_accounts, demo_transactions
from tests.helpers import make_account, make_transaction
from tools.transactions import (
    TransactionFilter,
    category_spending,
    filter_transactions,
    income_summary,
    spending_summary,
    total_balance,
)


@pytest.fixture
def demo():
    return demo_transactions()


def ids(transactions):
    return [t.id for t in transactions]


class TestFilterTransactions:
    """Tests for filter_transactions function."""

    def test_no_criteria_returns_everything_newest_first(self, demo):
        result = filter_transactions(demo)

        assert len(result) == 20
        dates = [t.date for t in result]
        assert dates == sorted(dates, reverse=True)

    def test_category_groceries(self, demo):
        """Groceries search returns the three grocery runs, newest first."""
        result = filter_transactions(demo, TransactionFilter(category="groceries"))

        assert ids(result) == ["txn_017", "txn_007", "txn_001"]
        assert [t.date for t in result] == ["2026-01-27", "2026-01-10", "2026-01-02"]
        assert sum(abs(t.amount) for t in result) == Decimal("220.14")

    def test_category_is_case_insensitive(self, demo):
        result = filter_transactions(demo, TransactionFilter(category="GROCERIES"))

        assert len(result) == 3

    def test_unknown_category_matches_nothing(self, demo):
        result = filter_transactions(demo, TransactionFilter(category="crypto"))

        assert result == []

    def test_merchant_substring_case_insensitive(self, demo):
        result = filter_transactions(demo, TransactionFilter(merchant="employer"))

        assert ids(result) == ["txn_012", "txn_003"]

    def test_date_bounds_are_inclusive(self, demo):
        result = filter_transactions(
            demo, TransactionFilter(start_date="2026-01-10", end_date="2026-01-12")
        )

        assert ids(result) == ["txn_008", "txn_009", "txn_007"]

    def test_min_amount_zero_returns_only_money_in(self, demo):
        """Positive amounts come back regardless of category."""
        result = filter_transactions(demo, TransactionFilter(min_amount=0))

        assert ids(result) == ["txn_018", "txn_012", "txn_003"]
        assert {t.category for t in result} == {"income", "transfer"}

    def test_amount_bounds_are_inclusive_on_signed_amount(self, demo):
        result = filter_transactions(
            demo, TransactionFilter(min_amount=Decimal("-28.00"), max_amount=-15.99)
        )

        assert ids(result) == ["txn_020", "txn_008", "txn_009"]

    @pytest.mark.parametrize(
        "criteria",
        [
            TransactionFilter(min_amount=float("nan")),
            TransactionFilter(max_amount=Decimal("NaN")),
            TransactionFilter(min_amount=-100, max_amount=float("nan")),
        ],
    )
    def test_nan_amount_bound_matches_nothing(self, demo, criteria):
        assert filter_transactions(demo, criteria) == []

    def test_infinite_amount_bounds_are_open(self, demo):
        result = filter_transactions(
            demo, TransactionFilter(min_amount=float("-inf"), max_amount=float("inf"))
        )

        assert len(result) == 20

    def test_account_substring(self, demo):
        result = filter_transactions(demo, TransactionFilter(account="amex"))

        assert len(result) == 9
        assert all(t.account == "Amex Platinum" for t in result)

    def test_same_day_keeps_input_order(self, demo):
        result = filter_transactions(demo, TransactionFilter(category="entertainment"))

        assert ids(result) == ["txn_008", "txn_009"]

        reversed_input = list(reversed(demo))
        result = filter_transactions(
            reversed_input, TransactionFilter(category="entertainment")
        )
        assert ids(result) == ["txn_009", "txn_008"]

    def test_limit_keeps_most_recent(self, demo):
        result = filter_transactions(demo, TransactionFilter(limit=3))

        assert ids(result) == ["txn_020", "txn_019", "txn_018"]

    def test_limit_larger_than_result(self, demo):
        result = filter_transactions(
            demo, TransactionFilter(category="groceries", limit=10)
        )

        assert len(result) == 3

    @pytest.mark.parametrize("limit", [None, 0, -1])
    def test_non_positive_limit_keeps_everything(self, demo, limit):
        result = filter_transactions(demo, TransactionFilter(limit=limit))

        assert len(result) == 20

    def test_criteria_combine_as_intersection(self, demo):
        """Combined criteria equal the intersection of single-criterion results."""
        single = [
            TransactionFilter(account="chase"),
            TransactionFilter(start_date="2026-01-05"),
            TransactionFilter(max_amount=-50),
        ]
        combined = TransactionFilter(
            account="chase", start_date="2026-01-05", max_amount=-50
        )

        expected = set(ids(demo))
        for criteria in single:
            expected &= set(ids(filter_transactions(demo, criteria)))

        assert set(ids(filter_transactions(demo, combined))) == expected
        assert expected == {"txn_005", "txn_007", "txn_010", "txn_013", "txn_014", "txn_017"}

    def test_resorting_is_a_no_op(self, demo):
        once = filter_transactions(demo, TransactionFilter(account="chase"))
        twice = filter_transactions(once)

        assert ids(twice) == ids(once)

    def test_does_not_mutate_input(self, demo):
        before = ids(demo)

        filter_transactions(demo, TransactionFilter(limit=2))

        assert ids(demo) == before

    def test_unpadded_date_bound_does_not_raise(self, demo):
        result = filter_transactions(demo, TransactionFilter(start_date="2026-1-5"))

        assert isinstance(result, list)

    def test_empty_input(self):
        assert filter_transactions([], TransactionFilter(category="food")) == []


class TestTotalBalance:
    """Tests for total_balance function."""

    def test_demo_accounts(self):
        balance = total_balance(demo_accounts())

        assert balance == {
            "checking": Decimal("4250.33"),
            "credit_owed": Decimal("892.48"),
            "net_worth": Decimal("3357.85"),
        }

    def test_depository_counts_as_checking(self):
        balance = total_balance(
            [make_account(type="depository", balance="1000.00")]
        )

        assert balance["checking"] == Decimal("1000.00")
        assert balance["net_worth"] == Decimal("1000.00")

    def test_adding_checking_account_is_additive(self):
        accounts = demo_accounts()
        before = total_balance(accounts)

        accounts.append(make_account(id="a9", type="checking", balance="150.25"))
        after = total_balance(accounts)

        assert after["checking"] - before["checking"] == Decimal("150.25")
        assert after["net_worth"] - before["net_worth"] == Decimal("150.25")
        assert after["credit_owed"] == before["credit_owed"]

    def test_adding_credit_account_increases_debt(self):
        accounts = demo_accounts()
        before = total_balance(accounts)

        accounts.append(make_account(id="a9", type="credit", balance="-300.00"))
        after = total_balance(accounts)

        assert after["credit_owed"] - before["credit_owed"] == Decimal("300.00")
        assert before["net_worth"] - after["net_worth"] == Decimal("300.00")
        assert after["checking"] == before["checking"]

    def test_other_account_types_are_ignored(self):
        balance = total_balance(
            [
                make_account(id="a1", type="investment", balance="50000"),
                make_account(id="a2", type="loan", balance="-20000"),
            ]
        )

        assert balance == {
            "checking": Decimal("0"),
            "credit_owed": Decimal("0"),
            "net_worth": Decimal("0"),
        }

    def test_missing_balance_counts_as_zero(self):
        account = make_account(type="checking")
        account.balance = None

        assert total_balance([account])["checking"] == Decimal("0")


class TestSpendingSummary:
    """Tests for spending_summary function."""

    def test_demo_groceries(self, demo):
        summary = spending_summary(demo)

        assert summary["groceries"] == {"total": Decimal("220.14"), "count": 3}
        assert summary["entertainment"] == {"total": Decimal("40.99"), "count": 2}
        assert summary["transport"] == {"total": Decimal("118.00"), "count": 3}

    def test_excludes_income_and_transfer(self, demo):
        summary = spending_summary(demo)

        assert "income" not in summary
        assert "transfer" not in summary

    def test_negative_transfer_is_not_spending(self):
        summary = spending_summary(
            [
                make_transaction("t1", amount="-500.00", category="transfer"),
                make_transaction("t2", amount="-5.00", category="food"),
            ]
        )

        assert summary == {"food": {"total": Decimal("5.00"), "count": 1}}

    def test_totals_add_up_to_all_spending(self, demo):
        summary = spending_summary(demo)

        assert sum(entry["total"] for entry in summary.values()) == Decimal("2443.15")
        assert sum(entry["count"] for entry in summary.values()) == 17

    def test_date_bounds(self, demo):
        summary = spending_summary(demo, "2026-01-20", "2026-01-25")

        assert summary == {
            "housing": {"total": Decimal("1200.00"), "count": 1},
            "transport": {"total": Decimal("55.00"), "count": 1},
            "shopping": {"total": Decimal("125.00"), "count": 1},
            "food": {"total": Decimal("42.00"), "count": 1},
        }

    def test_empty_period_is_empty_mapping(self, demo):
        assert spending_summary(demo, "2030-01-01") == {}


class TestIncomeSummary:
    """Tests for income_summary function."""

    def test_demo_income_includes_transfer_in(self, demo):
        income = income_summary(demo)

        assert income["count"] == 3
        assert income["total"] == Decimal("7500.00")
        assert ids(income["transactions"]) == ["txn_003", "txn_012", "txn_018"]

    def test_income_category_with_negative_amount_counts(self):
        income = income_summary(
            [make_transaction("t1", amount="-100.00", category="income")]
        )

        assert income["count"] == 1
        assert income["total"] == Decimal("100.00")

    def test_positive_refund_counts(self):
        income = income_summary(
            [make_transaction("t1", amount="19.99", category="shopping")]
        )

        assert income["count"] == 1

    def test_date_bounds(self, demo):
        income = income_summary(demo, start_date="2026-01-10", end_date="2026-01-20")

        assert ids(income["transactions"]) == ["txn_012"]

    def test_empty(self):
        assert income_summary([]) == {
            "total": Decimal("0"),
            "count": 0,
            "transactions": [],
        }


class TestCategorySpending:
    """Tests for category_spending function."""

    def test_entertainment(self, demo):
        data = category_spending(demo, "entertainment")

        assert ids(data["transactions"]) == ["txn_008", "txn_009"]
        assert data["total"] == Decimal("40.99")
        assert data["count"] == 2

    def test_case_insensitive(self, demo):
        assert category_spending(demo, "Entertainment")["count"] == 2

    def test_only_money_out(self, demo):
        assert category_spending(demo, "income")["count"] == 0

    def test_unknown_category_is_empty(self, demo):
        assert category_spending(demo, "crypto") == {
            "total": Decimal("0"),
            "count": 0,
            "transactions": [],
        }
