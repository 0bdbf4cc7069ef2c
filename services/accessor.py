"""Resolves the transaction and account snapshot a query runs against."""

import copy
from typing import List, Optional
from models.account import Account
from models.transaction import Transaction
from services.demo_data import demo_accounts, demo_transactions


class TransactionAccessor:
    """Picks a user's data source: cached bank data, else the demo dataset.

    Every call returns new objects, so callers can filter, sort or edit the
    result without touching what is stored.

    Args:
        connections: ConnectionService used to look up the user's accounts.
        transaction_cache: TransactionCacheService holding fetched transactions.
    """

    def __init__(self, connections, transaction_cache):
        self.connections = connections
        self.transaction_cache = transaction_cache

    def resolve_transactions(self, user_id: Optional[str] = None) -> List[Transaction]:
        """Get the transaction snapshot for a user.

        Args:
            user_id: Opaque user identifier, or None for anonymous demo use.

        Returns:
            The user's cached transactions if a cache exists, else the demo set.
        """
        cached = self.transaction_cache.find(user_id) if user_id else None
        if cached is not None:
            return copy.deepcopy(cached.transactions)
        return demo_transactions()

    def resolve_accounts(self, user_id: Optional[str] = None) -> List[Account]:
        """Get the account snapshot for a user.

        Returns:
            The connection's stored accounts when present and non-empty, else
            the two demo accounts.
        """
        connection = self.connections.find(user_id) if user_id else None
        if connection is not None and connection.accounts:
            return copy.deepcopy(connection.accounts)
        return demo_accounts()

    def has_connection(self, user_id: Optional[str]) -> bool:
        return bool(user_id) and self.connections.exists(user_id)
