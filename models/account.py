from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class Account:
    id: str
    name: str  # display name, e.g. "Chase Checking"
    type: str  # "checking"/"depository", "credit", or anything else the provider reports
    balance: Decimal  # signed; credit balances are what is owed
    institution: Optional[str] = None
    available_balance: Optional[Decimal] = None
    subtype: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert account to a JSON-friendly dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "subtype": self.subtype,
            "balance": float(self.balance),
            "available_balance": (
                float(self.available_balance)
                if self.available_balance is not None
                else None
            ),
            "institution": self.institution,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Account":
        """Build an Account from a dictionary produced by to_dict()."""
        available = data.get("available_balance")
        return cls(
            id=data["id"],
            name=data["name"],
            type=data.get("type") or "other",
            subtype=data.get("subtype"),
            balance=Decimal(str(data.get("balance") or 0)),
            available_balance=(
                Decimal(str(available)) if available is not None else None
            ),
            institution=data.get("institution"),
        )
