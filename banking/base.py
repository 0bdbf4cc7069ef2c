"""Base interface for bank-data providers."""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from models.account import Account
from models.transaction import Transaction


class BankClient(ABC):
    """Abstract base class for bank-data providers.

    Implementations normalize provider data into internal Account and
    Transaction objects: amounts signed negative for money out, categories
    mapped with models.category.map_provider_category.
    """

    @abstractmethod
    def create_link_token(self, user_id: str) -> str:
        """Issue a token the browser-side link flow starts from."""

    @abstractmethod
    def exchange_public_token(self, public_token: str) -> Tuple[str, str]:
        """Exchange a link public token.

        Returns:
            Tuple of (access_token, item_id).
        """

    @abstractmethod
    def get_accounts(self, access_token: str) -> List[Account]:
        """Fetch the accounts of a linked item."""

    @abstractmethod
    def get_transactions(
        self,
        access_token: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[Transaction]:
        """Fetch transactions of a linked item.

        Args:
            access_token: Provider access token.
            start_date: Inclusive start (YYYY-MM-DD). Provider default if None.
            end_date: Inclusive end (YYYY-MM-DD). Today if None.

        Raises:
            BankProviderError: If the provider call fails.
        """
