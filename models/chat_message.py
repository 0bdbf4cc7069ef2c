"""ChatMessage model for stored conversation turns."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class ChatMessage:
    """A single turn in a user's conversation with the assistant.

    Attributes:
        role: "user" or "assistant".
        content: Message text.
        created_at: Timestamp when the message was stored.
    """

    role: str
    content: str
    created_at: datetime
