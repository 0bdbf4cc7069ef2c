import sqlite3
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from banking import get_bank_client
from banking.errors import BankProviderError, NotConnectedError
from banking.sync import link_user, sync_user
from models.connection import Connection
from tests.helpers import make_account, make_transaction


@pytest.fixture
def bank_client():
    client = MagicMock()
    client.exchange_public_token.return_value = ("access-sandbox-1", "item-1")
    client.get_accounts.return_value = [make_account(id="acc-1", name="Plaid Checking")]
    client.get_transactions.return_value = [
        make_transaction("tx-1", "2026-02-03", "-12.50", "Starbucks", "food", "acc-1")
    ]
    return client


class TestLinkUser:
    """Tests for link_user function."""

    def test_stores_connection_and_cache(self, services, bank_client):
        connection, cache = link_user(services, "42", "public-sandbox-1", bank_client)

        assert connection.access_token == "access-sandbox-1"
        assert services.connections.find("42").item_id == "item-1"
        assert [t.id for t in services.transaction_cache.find("42").transactions] == ["tx-1"]
        assert [a.name for a in services.accessor.resolve_accounts("42")] == ["Plaid Checking"]
        bank_client.get_transactions.assert_called_once_with("access-sandbox-1")

    def test_failed_exchange_stores_nothing(self, services, bank_client):
        bank_client.exchange_public_token.side_effect = BankProviderError("bad token")

        with pytest.raises(BankProviderError):
            link_user(services, "42", "public-sandbox-1", bank_client)

        assert services.connections.find("42") is None
        assert services.transaction_cache.find("42") is None


class TestSyncUser:
    """Tests for sync_user function."""

    def _connect(self, services):
        services.connections.save(
            Connection(
                user_id="42",
                access_token="access-sandbox-1",
                item_id="item-1",
                accounts=[],
                connected_at=datetime(2026, 1, 1),
            )
        )

    def test_requires_connection(self, services, bank_client):
        with pytest.raises(NotConnectedError):
            sync_user(services, "42", bank_client)

        bank_client.get_transactions.assert_not_called()

    def test_refreshes_cache_and_accounts(self, services, bank_client):
        self._connect(services)

        connection, cache = sync_user(services, "42", bank_client)

        assert len(cache.transactions) == 1
        stored = services.connections.find("42")
        assert [a.id for a in stored.accounts] == ["acc-1"]
        assert stored.connected_at == datetime(2026, 1, 1)

    def test_fetch_failure_keeps_previous_cache(self, services, bank_client):
        self._connect(services)
        services.transaction_cache.save("42", [make_transaction("old")])
        bank_client.get_accounts.side_effect = BankProviderError("institution down")

        with pytest.raises(BankProviderError):
            sync_user(services, "42", bank_client)

        assert [t.id for t in services.transaction_cache.find("42").transactions] == ["old"]

    def test_store_failure_keeps_accounts_and_cache_together(
        self, services, bank_client, monkeypatch
    ):
        self._connect(services)
        services.transaction_cache.save("42", [make_transaction("old")])

        def failing_write(conn, user_id, transactions):
            raise sqlite3.OperationalError("disk I/O error")

        monkeypatch.setattr(services.transaction_cache, "write", failing_write)

        with pytest.raises(sqlite3.OperationalError):
            sync_user(services, "42", bank_client)

        assert services.connections.find("42").accounts == []
        assert [t.id for t in services.transaction_cache.find("42").transactions] == ["old"]


class TestGetBankClient:
    """Tests for get_bank_client function."""

    def test_none_without_credentials(self, test_config):
        assert get_bank_client(test_config) is None

    def test_plaid_client_with_credentials(self, test_config):
        test_config.plaid_client_id = "client-id"
        test_config.plaid_secret = "secret"

        client = get_bank_client(test_config)

        assert type(client).__name__ == "PlaidBankClient"
