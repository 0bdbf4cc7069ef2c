"""Linking and refreshing a user's bank data."""

from datetime import datetime
from typing import List, Tuple
from banking.base import BankClient
from banking.errors import NotConnectedError
from models.connection import Connection, TransactionCache
from models.transaction import Transaction
from logger import get_logger

logger = get_logger()


def link_user(
    services, user_id: str, public_token: str, bank_client: BankClient
) -> Tuple[Connection, TransactionCache]:
    """Complete a bank link and load the user's initial data.

    Args:
        services: Services container.
        user_id: Opaque user identifier.
        public_token: Public token returned by the browser link flow.
        bank_client: Bank-data provider.

    Returns:
        Tuple of (stored Connection, stored TransactionCache).

    Raises:
        BankProviderError: If any provider call fails. Nothing is stored.
    """
    access_token, item_id = bank_client.exchange_public_token(public_token)
    accounts = bank_client.get_accounts(access_token)
    transactions = bank_client.get_transactions(access_token)

    connection = Connection(
        user_id=user_id,
        access_token=access_token,
        item_id=item_id,
        accounts=accounts,
        connected_at=datetime.now(),
    )
    cache = _store(services, connection, transactions)

    logger.info(
        f"Linked item {item_id} for user {user_id}: "
        f"{len(accounts)} account(s), {len(transactions)} transaction(s)"
    )
    return connection, cache


def sync_user(
    services, user_id: str, bank_client: BankClient
) -> Tuple[Connection, TransactionCache]:
    """Refetch a connected user's accounts and transactions.

    Both fetches happen before anything is written, and the new accounts and
    transactions are stored together, so a failure at any step leaves the
    previous data untouched.

    Raises:
        NotConnectedError: If the user has never linked a bank.
        BankProviderError: If a provider call fails.
    """
    connection = services.connections.find(user_id)
    if connection is None:
        raise NotConnectedError(user_id)

    transactions = bank_client.get_transactions(connection.access_token)
    accounts = bank_client.get_accounts(connection.access_token)

    connection.accounts = accounts
    cache = _store(services, connection, transactions)

    logger.info(
        f"Synced {len(transactions)} transactions from {len(accounts)} "
        f"account(s) for user {user_id}"
    )
    return connection, cache


def _store(
    services, connection: Connection, transactions: List[Transaction]
) -> TransactionCache:
    """Write a connection and its transaction cache in one database transaction."""
    with services.db_manager.connect() as conn:
        try:
            services.connections.write(conn, connection)
            cache = services.transaction_cache.write(
                conn, connection.user_id, transactions
            )
            conn.commit()
        except Exception:
            conn.rollback()
            raise
    return cache
