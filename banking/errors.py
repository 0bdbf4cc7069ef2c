"""Errors raised by the bank-data provider layer."""


class BankProviderError(Exception):
    """The bank-data provider was unreachable or rejected a request."""


class NotConnectedError(Exception):
    """The user has no stored bank connection."""

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} has no bank account connected")
        self.user_id = user_id
