from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class Transaction:
    id: str  # provider transaction id, stable across fetches
    date: str  # ISO YYYY-MM-DD, compared as a string
    amount: Decimal  # signed: negative is money out
    merchant: str
    category: str  # one of models.category.CATEGORIES
    account: str  # account id or display name
    pending: Optional[bool] = None

    @property
    def is_debit(self) -> bool:
        return self.amount < 0

    def to_dict(self) -> dict:
        """Convert transaction to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "date": self.date,
            "amount": float(self.amount),
            "merchant": self.merchant,
            "category": self.category,
            "account": self.account,
            "pending": self.pending,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transaction":
        """Build a Transaction from a dictionary produced by to_dict()."""
        return cls(
            id=data["id"],
            date=data["date"],
            amount=Decimal(str(data["amount"])),
            merchant=data.get("merchant") or "",
            category=data.get("category") or "other",
            account=data.get("account") or "",
            pending=data.get("pending"),
        )
