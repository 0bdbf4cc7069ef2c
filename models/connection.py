"""Bank connection and transaction cache records."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from models.account import Account
from models.transaction import Transaction


@dataclass
class Connection:
    """A user's link to the bank-data provider.

    Attributes:
        user_id: Opaque identifier of the chat user.
        access_token: Provider access token for the linked item.
        item_id: Provider item identifier.
        accounts: Last-known account list, refreshed on every sync.
        connected_at: When the connection was first established.
    """

    user_id: str
    access_token: str
    item_id: str
    accounts: List[Account] = field(default_factory=list)
    connected_at: datetime = field(default_factory=datetime.now)


@dataclass
class TransactionCache:
    """The most recently fetched transaction set for a user."""

    user_id: str
    transactions: List[Transaction]
    cached_at: datetime
