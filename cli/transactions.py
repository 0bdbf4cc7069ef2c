#!/usr/bin/env python3

import sys
import csv
from datetime import date
from decimal import Decimal
from pathlib import Path
from dateutil.relativedelta import relativedelta
from models.category import CATEGORIES
from tools.transactions import (
    TransactionFilter,
    category_spending,
    filter_transactions,
    income_summary,
    spending_summary,
)
from logger import get_logger

logger = get_logger()


def _validate_dates(args):
    """Exit with an error if --start-date/--end-date aren't YYYY-MM-DD."""
    for flag, value in (("--start-date", args.start_date), ("--end-date", args.end_date)):
        if value is None:
            continue
        try:
            date.fromisoformat(value)
        except ValueError:
            logger.error(f"Invalid {flag} '{value}'. Use YYYY-MM-DD format.")
            sys.exit(1)


def _apply_months(args, today=None):
    """Turn --months N into a start date on the first of the month N-1 months back.

    --months 1 means the current calendar month. An explicit --start-date wins.
    """
    if getattr(args, "months", None) is None or args.start_date is not None:
        return
    if args.months < 1:
        logger.error("--months must be at least 1.")
        sys.exit(1)

    today = today or date.today()
    start = today + relativedelta(months=-(args.months - 1), day=1)
    args.start_date = start.isoformat()


def _log_transactions(transactions):
    for t in transactions:
        sign = "+" if t.amount >= 0 else ""
        pending = " [pending]" if t.pending else ""
        logger.info(
            f"{t.date} | {sign}${t.amount:.2f} | {t.merchant} ({t.category}) "
            f"| {t.account}{pending}"
        )


def cmd_search(args, services):
    """Search transactions with any combination of filters.

    Args:
        args: Parsed command-line arguments with filter options
        services: Services container with the transaction accessor
    """
    _validate_dates(args)

    criteria = TransactionFilter(
        category=args.category,
        merchant=args.merchant,
        start_date=args.start_date,
        end_date=args.end_date,
        min_amount=args.min_amount,
        max_amount=args.max_amount,
        account=args.account,
        limit=args.limit,
    )
    transactions = filter_transactions(
        services.accessor.resolve_transactions(args.user), criteria
    )

    if not transactions:
        logger.info("No transactions found matching your criteria.")
        return

    logger.info(f"Found {len(transactions)} transaction(s):")
    _log_transactions(transactions)


def cmd_recent(args, services):
    """Show the most recent transactions."""
    transactions = filter_transactions(
        services.accessor.resolve_transactions(args.user),
        TransactionFilter(limit=args.limit),
    )
    logger.info("Recent Transactions:")
    _log_transactions(transactions)


def cmd_spending(args, services):
    """Show spending per category, largest first."""
    _validate_dates(args)
    _apply_months(args)

    summary = spending_summary(
        services.accessor.resolve_transactions(args.user),
        args.start_date,
        args.end_date,
    )
    if not summary:
        logger.info("No spending found for the specified period.")
        return

    total = Decimal("0")
    logger.info("Spending Summary:")
    for category, data in sorted(
        summary.items(), key=lambda item: item[1]["total"], reverse=True
    ):
        logger.info(f"  {category:<15} ${data['total']:>10.2f}  ({data['count']} transactions)")
        total += data["total"]
    logger.info(f"\nTotal Spent: ${total:.2f}")


def cmd_income(args, services):
    """Show income received in a period."""
    _validate_dates(args)
    _apply_months(args)

    income = income_summary(
        filter_transactions(services.accessor.resolve_transactions(args.user)),
        args.start_date,
        args.end_date,
    )
    if income["count"] == 0:
        logger.info("No income found for the specified period.")
        return

    logger.info("Income Summary:")
    for t in income["transactions"]:
        logger.info(f"  {t.date}: ${abs(t.amount):.2f} - {t.merchant}")
    logger.info(f"\nTotal Income: ${income['total']:.2f}")


def cmd_category(args, services):
    """Show every outgoing transaction in one category."""
    data = category_spending(
        filter_transactions(services.accessor.resolve_transactions(args.user)),
        args.category,
    )
    if data["count"] == 0:
        logger.info(f"No spending found in {args.category} category.")
        return

    logger.info(f"{args.category.upper()} Spending ({data['count']} transactions):")
    for t in data["transactions"]:
        logger.info(f"  {t.date}: ${abs(t.amount):.2f} - {t.merchant}")
    logger.info(f"\nTotal: ${data['total']:.2f}")


def cmd_export(args, services):
    """Export transactions to CSV.

    Args:
        args: Parsed command-line arguments with output path and date range
        services: Services container with the transaction accessor
    """
    _validate_dates(args)

    transactions = filter_transactions(
        services.accessor.resolve_transactions(args.user),
        TransactionFilter(start_date=args.start_date, end_date=args.end_date),
    )
    if not transactions:
        logger.info("No transactions found for the specified criteria.")
        return

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(output_path, "w", newline="") as csvfile:
            writer = csv.writer(csvfile)
            writer.writerow(
                ["id", "date", "amount", "merchant", "category", "account", "pending"]
            )
            for t in transactions:
                writer.writerow(
                    [
                        t.id,
                        t.date,
                        str(t.amount),
                        t.merchant,
                        t.category,
                        t.account,
                        "" if t.pending is None else t.pending,
                    ]
                )
    except OSError as e:
        logger.error(f"Error writing CSV: {e}")
        sys.exit(1)

    logger.info(f"✓ Exported {len(transactions)} transaction(s) to {output_path}")


def _add_months_argument(parser):
    parser.add_argument(
        "--months", type=int, help="Look back N calendar months, including this one"
    )


def _add_user_argument(parser):
    parser.add_argument("--user", help="User ID (omit for demo data)")


def _add_date_arguments(parser):
    parser.add_argument("--start-date", help="Inclusive start date (YYYY-MM-DD)")
    parser.add_argument("--end-date", help="Inclusive end date (YYYY-MM-DD)")


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Search and summarize transactions",
        description="Query a user's transactions",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    search_parser = transactions_subparsers.add_parser(
        "search", help="Search transactions"
    )
    _add_user_argument(search_parser)
    _add_date_arguments(search_parser)
    search_parser.add_argument("--category", help=f"One of: {', '.join(CATEGORIES)}")
    search_parser.add_argument("--merchant", help="Merchant name (partial match)")
    search_parser.add_argument("--account", help="Account name (partial match)")
    search_parser.add_argument("--min-amount", type=Decimal, help="Minimum signed amount")
    search_parser.add_argument("--max-amount", type=Decimal, help="Maximum signed amount")
    search_parser.add_argument("--limit", type=int, help="Max number of results")
    search_parser.set_defaults(func=cmd_search)

    recent_parser = transactions_subparsers.add_parser(
        "recent", help="Show most recent transactions"
    )
    _add_user_argument(recent_parser)
    recent_parser.add_argument("--limit", type=int, default=10, help="Default 10")
    recent_parser.set_defaults(func=cmd_recent)

    spending_parser = transactions_subparsers.add_parser(
        "spending", help="Spending by category"
    )
    _add_user_argument(spending_parser)
    _add_date_arguments(spending_parser)
    _add_months_argument(spending_parser)
    spending_parser.set_defaults(func=cmd_spending)

    income_parser = transactions_subparsers.add_parser(
        "income", help="Income summary"
    )
    _add_user_argument(income_parser)
    _add_date_arguments(income_parser)
    _add_months_argument(income_parser)
    income_parser.set_defaults(func=cmd_income)

    category_parser = transactions_subparsers.add_parser(
        "category", help="Spending detail for one category"
    )
    _add_user_argument(category_parser)
    category_parser.add_argument("category", help=f"One of: {', '.join(CATEGORIES)}")
    category_parser.set_defaults(func=cmd_category)

    export_parser = transactions_subparsers.add_parser(
        "export", help="Export transactions to CSV"
    )
    _add_user_argument(export_parser)
    _add_date_arguments(export_parser)
    export_parser.add_argument(
        "--output", "-o", required=True, help="Output CSV file path"
    )
    export_parser.set_defaults(func=cmd_export)
