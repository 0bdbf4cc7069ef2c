"""Chat history service: a bounded, per-user log of conversation turns."""

from datetime import datetime
from typing import List
from models.chat_message import ChatMessage

VALID_ROLES = ("user", "assistant")


class ChatHistoryService:
    """Service for managing each user's recent conversation.

    Only the newest `limit` messages are kept; appending beyond that evicts
    the oldest ones.

    Args:
        db_manager: Database manager instance for database operations.
        limit: Maximum number of messages kept per user.
    """

    def __init__(self, db_manager, limit: int = 20):
        if limit < 1:
            raise ValueError("Chat history limit must be at least 1")
        self.db_manager = db_manager
        self.limit = limit

    def find_by_user(self, user_id: str) -> List[ChatMessage]:
        """Get a user's stored messages, oldest first."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT role, content, created_at
                FROM chat_messages
                WHERE user_id = ?
                ORDER BY id
                """,
                (user_id,),
            )
            return [
                ChatMessage(
                    role=row[0],
                    content=row[1],
                    created_at=datetime.fromisoformat(row[2]),
                )
                for row in cursor.fetchall()
            ]

    def append(self, user_id: str, role: str, content: str) -> ChatMessage:
        """Append a message and trim the log to the configured limit.

        Args:
            user_id: Opaque user identifier.
            role: "user" or "assistant".
            content: Message text.

        Returns:
            The stored ChatMessage.

        Raises:
            ValueError: If role is not one of VALID_ROLES.
        """
        if role not in VALID_ROLES:
            raise ValueError(f"Invalid chat role: {role}")

        created_at = datetime.now()
        with self.db_manager.connect() as conn:
            conn.execute(
                """
                INSERT INTO chat_messages (user_id, role, content, created_at)
                VALUES (?, ?, ?, ?)
                """,
                (user_id, role, content, created_at.isoformat()),
            )
            # Evict everything older than the newest `limit` rows
            conn.execute(
                """
                DELETE FROM chat_messages
                WHERE user_id = ?
                  AND id NOT IN (
                      SELECT id FROM chat_messages
                      WHERE user_id = ?
                      ORDER BY id DESC
                      LIMIT ?
                  )
                """,
                (user_id, user_id, self.limit),
            )
            conn.commit()

        return ChatMessage(role=role, content=content, created_at=created_at)

    def clear(self, user_id: str) -> int:
        """Delete a user's history.

        Returns:
            Number of messages removed.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM chat_messages WHERE user_id = ?", (user_id,)
            )
            conn.commit()
            return cursor.rowcount
