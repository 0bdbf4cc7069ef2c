from datetime import datetime
from decimal import Decimal

from models.connection import Connection
from services.demo_data import DEMO_TRANSACTIONS
from tests.helpers import make_account


class TestTransactionAccessor:
    """Tests for TransactionAccessor."""

    def test_no_user_gets_demo_transactions(self, services):
        transactions = services.accessor.resolve_transactions(None)

        assert len(transactions) == 20
        assert transactions[0].id == "txn_001"

    def test_unknown_user_gets_demo_transactions(self, services):
        transactions = services.accessor.resolve_transactions("nobody")

        assert [t.id for t in transactions] == [t.id for t in DEMO_TRANSACTIONS]

    def test_cached_user_gets_cached_transactions(self, services, real_transactions):
        services.transaction_cache.save("42", real_transactions)

        transactions = services.accessor.resolve_transactions("42")

        assert transactions == real_transactions

    def test_round_trip_preserves_the_set(self, services, real_transactions):
        services.transaction_cache.save("42", real_transactions)

        resolved = services.accessor.resolve_transactions("42")

        assert {t.id for t in resolved} == {t.id for t in real_transactions}
        assert {(t.id, t.amount) for t in resolved} == {
            (t.id, t.amount) for t in real_transactions
        }

    def test_empty_cache_is_not_demo_fallback(self, services):
        services.transaction_cache.save("42", [])

        assert services.accessor.resolve_transactions("42") == []

    def test_demo_result_is_a_copy(self, services):
        first = services.accessor.resolve_transactions(None)
        first[0].amount = Decimal("0")
        first.clear()

        second = services.accessor.resolve_transactions(None)

        assert len(second) == 20
        assert second[0].amount == Decimal("-45.67")
        assert DEMO_TRANSACTIONS[0].amount == Decimal("-45.67")

    def test_cached_result_is_a_copy(self, services, real_transactions):
        services.transaction_cache.save("42", real_transactions)

        resolved = services.accessor.resolve_transactions("42")
        resolved.sort(key=lambda t: t.amount)
        resolved[0].merchant = "changed"

        assert [t.id for t in services.accessor.resolve_transactions("42")] == [
            "p1",
            "p2",
            "p3",
        ]
        assert services.transaction_cache.find("42").transactions[0].merchant == "Safeway"

    def test_demo_accounts_without_connection(self, services):
        accounts = services.accessor.resolve_accounts("42")

        assert [(a.name, a.type) for a in accounts] == [
            ("Chase Checking", "checking"),
            ("Amex Platinum", "credit"),
        ]

    def test_connection_accounts(self, services):
        services.connections.save(
            Connection(
                user_id="42",
                access_token="access-sandbox-1",
                item_id="item-1",
                accounts=[make_account(name="Plaid Checking", balance="10.00")],
                connected_at=datetime(2026, 2, 1, 9, 30),
            )
        )

        accounts = services.accessor.resolve_accounts("42")

        assert [a.name for a in accounts] == ["Plaid Checking"]

    def test_connection_without_accounts_falls_back_to_demo(self, services):
        services.connections.save(
            Connection(user_id="42", access_token="tok", item_id="item", accounts=[])
        )

        assert len(services.accessor.resolve_accounts("42")) == 2

    def test_has_connection(self, services):
        assert services.accessor.has_connection("42") is False
        assert services.accessor.has_connection(None) is False

        services.connections.save(
            Connection(user_id="42", access_token="tok", item_id="item")
        )

        assert services.accessor.has_connection("42") is True
