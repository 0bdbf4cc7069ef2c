"""Transaction cache service for the per-user fetched transaction set."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from models.connection import TransactionCache
from models.transaction import Transaction
from logger import get_logger

logger = get_logger()


class TransactionCacheService:
    """Service for storing the most recent transaction fetch per user."""

    def __init__(self, db_manager):
        """Initialize the transaction cache service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find(self, user_id: str) -> Optional[TransactionCache]:
        """Get the cached transaction set for a user.

        Args:
            user_id: Opaque user identifier.

        Returns:
            TransactionCache with transactions in their stored order, or None
            if nothing has been cached for this user.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT cached_at FROM transaction_caches WHERE user_id = ?",
                (user_id,),
            )
            header = cursor.fetchone()
            if header is None:
                return None

            cursor = conn.execute(
                """
                SELECT id, date, amount, merchant, category, account, pending
                FROM cached_transactions
                WHERE user_id = ?
                ORDER BY position
                """,
                (user_id,),
            )
            transactions = [self._row_to_transaction(row) for row in cursor.fetchall()]

        return TransactionCache(
            user_id=user_id,
            transactions=transactions,
            cached_at=datetime.fromisoformat(header[0]),
        )

    def save(self, user_id: str, transactions: List[Transaction]) -> TransactionCache:
        """Replace a user's cached transaction set.

        The previous set is removed and the new one written in a single
        database transaction, so a failure leaves the old cache in place.

        Args:
            user_id: Opaque user identifier.
            transactions: Transactions to cache, in provider order.

        Returns:
            The stored TransactionCache.
        """
        with self.db_manager.connect() as conn:
            try:
                cache = self.write(conn, user_id, transactions)
                conn.commit()
            except Exception:
                conn.rollback()
                raise

        logger.info(f"Cached {len(transactions)} transactions for user {user_id}")
        return cache

    def write(
        self, conn, user_id: str, transactions: List[Transaction]
    ) -> TransactionCache:
        """Replace a user's cached set on an open connection without committing."""
        cached_at = datetime.now()
        rows = [
            (
                user_id,
                position,
                t.id,
                t.date,
                str(t.amount),
                t.merchant,
                t.category,
                t.account,
                None if t.pending is None else int(t.pending),
            )
            for position, t in enumerate(transactions)
        ]

        conn.execute("DELETE FROM cached_transactions WHERE user_id = ?", (user_id,))
        conn.execute(
            """
            INSERT INTO transaction_caches (user_id, cached_at) VALUES (?, ?)
            ON CONFLICT(user_id) DO UPDATE SET cached_at = excluded.cached_at
            """,
            (user_id, cached_at.isoformat()),
        )
        conn.executemany(
            """
            INSERT INTO cached_transactions
                (user_id, position, id, date, amount, merchant, category, account, pending)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            rows,
        )
        return TransactionCache(
            user_id=user_id, transactions=list(transactions), cached_at=cached_at
        )

    def _row_to_transaction(self, row: tuple) -> Transaction:
        """Convert a database row to a Transaction object."""
        return Transaction(
            id=row[0],
            date=row[1],
            amount=Decimal(row[2]),
            merchant=row[3],
            category=row[4],
            account=row[5],
            pending=None if row[6] is None else bool(row[6]),
        )
