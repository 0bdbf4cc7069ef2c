"""Plaid implementation of the bank-data provider."""

import json
from datetime import date, timedelta
from decimal import Decimal
from typing import List, Optional, Tuple

import plaid
import urllib3
from plaid.api import plaid_api
from plaid.model.accounts_get_request import AccountsGetRequest
from plaid.model.country_code import CountryCode
from plaid.model.item_public_token_exchange_request import (
    ItemPublicTokenExchangeRequest,
)
from plaid.model.link_token_create_request import LinkTokenCreateRequest
from plaid.model.link_token_create_request_user import LinkTokenCreateRequestUser
from plaid.model.products import Products
from plaid.model.transactions_get_request import TransactionsGetRequest
from plaid.model.transactions_get_request_options import (
    TransactionsGetRequestOptions,
)

from banking.base import BankClient
from banking.errors import BankProviderError
from models.account import Account
from models.category import map_provider_category
from models.transaction import Transaction
from logger import get_logger

logger = get_logger()

CLIENT_NAME = "Personal Finance Bot"
DEFAULT_LOOKBACK_DAYS = 30
TRANSACTIONS_PAGE_SIZE = 100

_ENVIRONMENTS = {
    "sandbox": plaid.Environment.Sandbox,
    "production": plaid.Environment.Production,
}


class PlaidBankClient(BankClient):
    """Talks to Plaid through the official plaid-python client.

    Args:
        client_id: Plaid client id.
        secret: Plaid secret for the chosen environment.
        env: "sandbox" or "production".
        api: Optional pre-built PlaidApi, used by tests.
    """

    def __init__(
        self,
        client_id: str,
        secret: str,
        env: str = "sandbox",
        api: Optional[plaid_api.PlaidApi] = None,
    ):
        if api is None:
            host = _ENVIRONMENTS.get(env.lower())
            if host is None:
                raise ValueError(f"Unknown Plaid environment: {env}")
            configuration = plaid.Configuration(
                host=host,
                api_key={"clientId": client_id, "secret": secret},
            )
            api = plaid_api.PlaidApi(plaid.ApiClient(configuration))
        self.api = api

    def create_link_token(self, user_id: str) -> str:
        request = LinkTokenCreateRequest(
            user=LinkTokenCreateRequestUser(client_user_id=str(user_id)),
            client_name=CLIENT_NAME,
            products=[Products("transactions")],
            country_codes=[CountryCode("US")],
            language="en",
        )
        response = self._call("link_token_create", request)
        return response["link_token"]

    def exchange_public_token(self, public_token: str) -> Tuple[str, str]:
        request = ItemPublicTokenExchangeRequest(public_token=public_token)
        response = self._call("item_public_token_exchange", request)
        return response["access_token"], response["item_id"]

    def get_accounts(self, access_token: str) -> List[Account]:
        response = self._call(
            "accounts_get", AccountsGetRequest(access_token=access_token)
        )
        return [self._to_account(a) for a in response.get("accounts", [])]

    def get_transactions(
        self,
        access_token: str,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> List[Transaction]:
        end = date.fromisoformat(end_date) if end_date else date.today()
        start = (
            date.fromisoformat(start_date)
            if start_date
            else end - timedelta(days=DEFAULT_LOOKBACK_DAYS)
        )

        request = TransactionsGetRequest(
            access_token=access_token,
            start_date=start,
            end_date=end,
            options=TransactionsGetRequestOptions(
                count=TRANSACTIONS_PAGE_SIZE, offset=0
            ),
        )
        response = self._call("transactions_get", request)
        transactions = [self._to_transaction(t) for t in response.get("transactions", [])]

        logger.info(f"Fetched {len(transactions)} transactions from {start} to {end}")
        return transactions

    def _call(self, method: str, request) -> dict:
        """Invoke a PlaidApi method and return its response as a dict.

        Raises:
            BankProviderError: Wrapping any plaid.ApiException or a
                connection failure.
        """
        try:
            return getattr(self.api, method)(request).to_dict()
        except plaid.ApiException as e:
            message = _error_message(e)
            logger.error(f"Plaid {method} failed: {message}")
            raise BankProviderError(message) from e
        except (urllib3.exceptions.HTTPError, OSError) as e:
            logger.error(f"Plaid {method} could not reach Plaid: {e}")
            raise BankProviderError(f"could not reach Plaid: {e}") from e

    @staticmethod
    def _to_account(data: dict) -> Account:
        balances = data.get("balances") or {}
        current = balances.get("current")
        available = balances.get("available")
        return Account(
            id=data["account_id"],
            name=data.get("name") or "",
            type=_enum_value(data.get("type")) or "other",
            subtype=_enum_value(data.get("subtype")),
            balance=Decimal(str(current)) if current is not None else Decimal("0"),
            available_balance=(
                Decimal(str(available)) if available is not None else None
            ),
            institution=data.get("official_name") or data.get("name"),
        )

    @staticmethod
    def _to_transaction(data: dict) -> Transaction:
        pfc = data.get("personal_finance_category") or {}
        legacy = data.get("category") or []
        provider_category = pfc.get("primary") or (legacy[0] if legacy else None)

        txn_date = data["date"]
        if isinstance(txn_date, date):
            txn_date = txn_date.isoformat()

        return Transaction(
            id=data["transaction_id"],
            date=txn_date,
            # Plaid reports money out as positive
            amount=-Decimal(str(data["amount"])),
            merchant=data.get("merchant_name") or data.get("name") or "",
            category=map_provider_category(provider_category),
            account=data.get("account_id") or "",
            pending=data.get("pending"),
        )


def _enum_value(value) -> Optional[str]:
    """Unwrap plaid's string enum models to plain strings."""
    if value is None:
        return None
    return str(getattr(value, "value", value))


def _error_message(error: plaid.ApiException) -> str:
    try:
        body = json.loads(error.body)
        return body.get("error_message") or body.get("error_code") or str(error)
    except (TypeError, ValueError):
        return str(error)
