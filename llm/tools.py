"""Finance tools exposed to the chat model.

Each tool has a pydantic parameter model (which doubles as its JSON schema),
a method returning structured data, and a renderer turning that data into the
text the model reads. Tools are bound to a single user; the model never
chooses whose data it sees.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Dict, List, Literal, Optional, Type
from urllib.parse import quote

from pydantic import BaseModel, Field, FiniteFloat, ValidationError

from banking.errors import BankProviderError, NotConnectedError
from banking.sync import sync_user
from models.category import CATEGORIES
from tools.transactions import (
    TransactionFilter,
    category_spending,
    filter_transactions,
    income_summary,
    spending_summary,
    total_balance,
)
from logger import get_logger

logger = get_logger()

DEFAULT_LIMIT = 10

_DATE_HELP = "date in YYYY-MM-DD format"


class NoParams(BaseModel):
    pass


class DateRangeParams(BaseModel):
    start_date: Optional[str] = Field(None, description=f"Start {_DATE_HELP}")
    end_date: Optional[str] = Field(None, description=f"End {_DATE_HELP}")


class SearchTransactionsParams(DateRangeParams):
    # Any string is accepted; a category outside the enum matches nothing
    category: Optional[str] = Field(
        None,
        description="Filter by category",
        json_schema_extra={"enum": CATEGORIES},
    )
    merchant: Optional[str] = Field(
        None, description="Search by merchant name (partial match)"
    )
    min_amount: Optional[FiniteFloat] = Field(
        None, description="Minimum transaction amount"
    )
    max_amount: Optional[FiniteFloat] = Field(
        None, description="Maximum transaction amount"
    )
    limit: Optional[int] = Field(
        DEFAULT_LIMIT, description="Max number of results (default 10)"
    )


class CategoryParams(BaseModel):
    category: str = Field(
        ...,
        description="The category to analyze",
        json_schema_extra={"enum": CATEGORIES},
    )


class RecentTransactionsParams(BaseModel):
    limit: Optional[int] = Field(
        DEFAULT_LIMIT, description="Number of transactions to show (default 10)"
    )


class PaymentLinkParams(BaseModel):
    amount: FiniteFloat = Field(
        ..., description="The amount to pay or request (e.g. 20.50)"
    )
    description: str = Field(
        ..., description='Note for the transaction (e.g. "Dinner", "Rent")'
    )
    type: Literal["charge", "pay"] = Field(
        "charge",
        description='Type of transaction: "charge" to request money, "pay" to send money',
    )


@dataclass
class ToolSpec:
    name: str
    description: str
    params: Type[BaseModel]


TOOL_SPECS = [
    ToolSpec(
        name="get_balance",
        description="Get the current account balances including checking accounts, "
        "credit card balances, and net worth.",
        params=NoParams,
    ),
    ToolSpec(
        name="get_spending_summary",
        description="Get a breakdown of spending by category. Can be filtered by date range.",
        params=DateRangeParams,
    ),
    ToolSpec(
        name="get_income_summary",
        description="Get a summary of income received.",
        params=DateRangeParams,
    ),
    ToolSpec(
        name="search_transactions",
        description="Search transactions by various filters like category, merchant, "
        "date range, or amount.",
        params=SearchTransactionsParams,
    ),
    ToolSpec(
        name="get_category_spending",
        description="Get detailed spending for a specific category.",
        params=CategoryParams,
    ),
    ToolSpec(
        name="get_recent_transactions",
        description="Get the most recent transactions across all accounts.",
        params=RecentTransactionsParams,
    ),
    ToolSpec(
        name="get_accounts",
        description="Get a list of all connected bank accounts and their current balances.",
        params=NoParams,
    ),
    ToolSpec(
        name="sync_transactions",
        description="Sync the latest transactions from connected bank accounts. "
        "Use when user asks to refresh or update their data.",
        params=NoParams,
    ),
    ToolSpec(
        name="create_payment_link",
        description="Generate a Venmo link to request or send money. Use when user says "
        '"Split bill with X" or "Ask X for money".',
        params=PaymentLinkParams,
    ),
]

TOOL_NAMES = [spec.name for spec in TOOL_SPECS]


def tool_schemas() -> List[dict]:
    """Function-tool definitions in the chat-completions format."""
    return [
        {
            "type": "function",
            "function": {
                "name": spec.name,
                "description": spec.description,
                "parameters": spec.params.model_json_schema(),
            },
        }
        for spec in TOOL_SPECS
    ]


class FinanceTools:
    """The finance tools, bound to one user's data.

    Args:
        services: Services container.
        user_id: Opaque user identifier supplied by the caller.
        bank_client: Optional bank client; needed only for sync_transactions.
    """

    def __init__(self, services, user_id: str, bank_client=None):
        self.services = services
        self.user_id = user_id
        self.bank_client = bank_client
        self._specs = {spec.name: spec for spec in TOOL_SPECS}
        self._handlers: Dict[str, Callable[[BaseModel], str]] = {
            "get_balance": self._run_get_balance,
            "get_spending_summary": self._run_get_spending_summary,
            "get_income_summary": self._run_get_income_summary,
            "search_transactions": self._run_search_transactions,
            "get_category_spending": self._run_get_category_spending,
            "get_recent_transactions": self._run_get_recent_transactions,
            "get_accounts": self._run_get_accounts,
            "sync_transactions": self._run_sync_transactions,
            "create_payment_link": self._run_create_payment_link,
        }

    def call(self, name: str, arguments: Optional[dict] = None) -> str:
        """Run a tool by name and render its result as text.

        Unknown tools and invalid arguments come back as text so the model
        can correct itself; they are never raised.
        """
        spec = self._specs.get(name)
        if spec is None:
            logger.warning(f"Model requested unknown tool: {name}")
            return f"Unknown tool: {name}"

        try:
            params = spec.params.model_validate(arguments or {})
        except ValidationError as e:
            logger.warning(f"Invalid arguments for {name}: {e}")
            return f"Invalid arguments for {name}: {e}"

        logger.info(f"Tool called: {name} {params.model_dump(exclude_none=True)}")
        return self._handlers[name](params)

    # Structured operations

    def _snapshot(self):
        # Sorted newest first so summaries list transactions in date order
        return filter_transactions(
            self.services.accessor.resolve_transactions(self.user_id)
        )

    def get_balance(self) -> dict:
        accounts = self.services.accessor.resolve_accounts(self.user_id)
        return {"accounts": accounts, **total_balance(accounts)}

    def get_spending_summary(self, start_date=None, end_date=None) -> dict:
        return spending_summary(self._snapshot(), start_date, end_date)

    def get_income_summary(self, start_date=None, end_date=None) -> dict:
        return income_summary(self._snapshot(), start_date, end_date)

    def search_transactions(self, criteria: TransactionFilter) -> list:
        return filter_transactions(
            self.services.accessor.resolve_transactions(self.user_id), criteria
        )

    def get_category_spending(self, category: str) -> dict:
        return category_spending(self._snapshot(), category)

    def get_recent_transactions(self, limit: int = DEFAULT_LIMIT) -> list:
        return self.search_transactions(TransactionFilter(limit=limit))

    def get_accounts(self) -> list:
        return self.services.accessor.resolve_accounts(self.user_id)

    # Handlers: validated params in, text out

    def _run_get_balance(self, params: NoParams) -> str:
        balance = self.get_balance()
        account_list = "\n".join(
            f"• {a.name} ({a.institution or a.type}): {_money(a.balance)}"
            for a in balance["accounts"]
        )
        return (
            f"Account Balances:\n{account_list}\n\n"
            f"Summary:\n"
            f"• Checking: {_money(balance['checking'])}\n"
            f"• Credit Owed: {_money(balance['credit_owed'])}\n"
            f"• Net Worth: {_money(balance['net_worth'])}"
        )

    def _run_get_spending_summary(self, params: DateRangeParams) -> str:
        summary = self.get_spending_summary(params.start_date, params.end_date)
        if not summary:
            return "No spending found for the specified period."

        entries = sorted(summary.items(), key=lambda item: item[1]["total"], reverse=True)
        total_spent = sum((data["total"] for _, data in entries), Decimal("0"))
        formatted = "\n".join(
            f"• {category}: {_money(data['total'])} ({data['count']} transactions)"
            for category, data in entries
        )
        return f"Spending Summary:\n{formatted}\n\nTotal Spent: {_money(total_spent)}"

    def _run_get_income_summary(self, params: DateRangeParams) -> str:
        income = self.get_income_summary(params.start_date, params.end_date)
        if income["count"] == 0:
            return "No income found for the specified period."

        formatted = "\n".join(
            f"• {t.date}: {_money(abs(t.amount))} - {t.merchant}"
            for t in income["transactions"]
        )
        return f"Income Summary:\n{formatted}\n\nTotal Income: {_money(income['total'])}"

    def _run_search_transactions(self, params: SearchTransactionsParams) -> str:
        transactions = self.search_transactions(
            TransactionFilter(
                category=params.category,
                merchant=params.merchant,
                start_date=params.start_date,
                end_date=params.end_date,
                min_amount=params.min_amount,
                max_amount=params.max_amount,
                limit=params.limit or DEFAULT_LIMIT,
            )
        )
        if not transactions:
            return "No transactions found matching your criteria."

        formatted = "\n".join(
            f"• {t.date} | {_signed_money(t.amount)} | {t.merchant} ({t.category})"
            for t in transactions
        )
        return f"Found {len(transactions)} transactions:\n{formatted}"

    def _run_get_category_spending(self, params: CategoryParams) -> str:
        data = self.get_category_spending(params.category)
        if data["count"] == 0:
            return f"No spending found in {params.category} category."

        formatted = "\n".join(
            f"• {t.date}: {_money(abs(t.amount))} - {t.merchant}"
            for t in data["transactions"]
        )
        return (
            f"{params.category.upper()} Spending ({data['count']} transactions):\n"
            f"{formatted}\n\nTotal: {_money(data['total'])}"
        )

    def _run_get_recent_transactions(self, params: RecentTransactionsParams) -> str:
        transactions = self.get_recent_transactions(params.limit or DEFAULT_LIMIT)
        formatted = "\n".join(
            f"• {t.date} | {_signed_money(t.amount)} | {t.merchant}"
            for t in transactions
        )
        return f"Recent Transactions:\n{formatted}"

    def _run_get_accounts(self, params: NoParams) -> str:
        formatted = "\n\n".join(
            f"• {a.name}\n  Type: {a.type}\n  Balance: {_money(a.balance)}"
            for a in self.get_accounts()
        )
        return f"Connected Accounts:\n\n{formatted}"

    def _run_sync_transactions(self, params: NoParams) -> str:
        if not self.services.accessor.has_connection(self.user_id):
            return "No bank account connected. Use /connect to link your bank."
        if self.bank_client is None:
            return "Sync failed: bank sync is not configured."

        try:
            connection, cache = sync_user(self.services, self.user_id, self.bank_client)
        except NotConnectedError:
            return "No bank account connected. Use /connect to link your bank."
        except BankProviderError as e:
            return f"Sync failed: {e}"

        return (
            f"Synced {len(cache.transactions)} transactions from "
            f"{len(connection.accounts)} account(s)."
        )

    def _run_create_payment_link(self, params: PaymentLinkParams) -> str:
        venmo_user = self.services.config.venmo_username
        if not venmo_user:
            return "Payment links are not configured. Set VENMO_USERNAME to enable them."

        link = (
            f"https://venmo.com/?txn={params.type}&recipients={venmo_user}"
            f"&amount={params.amount:.2f}&note={quote(params.description, safe='')}"
        )
        return (
            f'Here is the Venmo link to {params.type} ${params.amount:.2f} for '
            f'"{params.description}":\n\n{link}\n\n'
            f"You can forward this link to the person."
        )


def _money(value) -> str:
    return f"${value:.2f}"


def _signed_money(value) -> str:
    sign = "+" if value >= 0 else ""
    return f"{sign}${value:.2f}"
