"""Connection service for bank-link records."""

import json
from datetime import datetime
from typing import Optional
from models.account import Account
from models.connection import Connection
from logger import get_logger

logger = get_logger()


class ConnectionService:
    """Service for storing each user's bank connection.

    There is no delete operation; linking again overwrites the previous
    record.
    """

    def __init__(self, db_manager):
        """Initialize the connection service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find(self, user_id: str) -> Optional[Connection]:
        """Get the connection for a user.

        Args:
            user_id: Opaque user identifier.

        Returns:
            Connection object if the user has linked a bank, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT user_id, access_token, item_id, accounts, connected_at
                FROM connections
                WHERE user_id = ?
                """,
                (user_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_connection(row)
            return None

    def exists(self, user_id: str) -> bool:
        """Check whether a user has a stored connection."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT 1 FROM connections WHERE user_id = ?", (user_id,)
            )
            return cursor.fetchone() is not None

    def save(self, connection: Connection) -> Connection:
        """Create or replace a user's connection.

        Args:
            connection: Connection to store.

        Returns:
            The same Connection object.
        """
        with self.db_manager.connect() as conn:
            self.write(conn, connection)
            conn.commit()

        logger.info(
            f"Saved connection for user {connection.user_id} "
            f"({len(connection.accounts)} account(s))"
        )
        return connection

    def write(self, conn, connection: Connection) -> None:
        """Upsert a connection on an open connection without committing."""
        conn.execute(
            """
            INSERT INTO connections (user_id, access_token, item_id, accounts, connected_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET
                access_token = excluded.access_token,
                item_id = excluded.item_id,
                accounts = excluded.accounts,
                connected_at = excluded.connected_at
            """,
            (
                connection.user_id,
                connection.access_token,
                connection.item_id,
                json.dumps([a.to_dict() for a in connection.accounts]),
                connection.connected_at.isoformat(),
            ),
        )

    def _row_to_connection(self, row: tuple) -> Connection:
        """Convert a database row to a Connection object."""
        return Connection(
            user_id=row[0],
            access_token=row[1],
            item_id=row[2],
            accounts=[Account.from_dict(a) for a in json.loads(row[3] or "[]")],
            connected_at=datetime.fromisoformat(row[4]),
        )
