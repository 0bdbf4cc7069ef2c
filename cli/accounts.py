#!/usr/bin/env python3

from tools.transactions import total_balance
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List the user's accounts (demo accounts when not connected)."""
    accounts = services.accessor.resolve_accounts(args.user)

    if not services.accessor.has_connection(args.user):
        logger.info("No bank connected - showing demo accounts.")

    logger.info("\nAccounts:")
    logger.info("=" * 80)
    for account in accounts:
        logger.info(f"ID: {account.id}")
        logger.info(f"Name: {account.name}")
        logger.info(f"Type: {account.type}")
        logger.info(f"Institution: {account.institution or '-'}")
        logger.info(f"Balance: ${account.balance:.2f}")
        if account.available_balance is not None:
            logger.info(f"Available: ${account.available_balance:.2f}")
        logger.info("-" * 80)

    logger.info(f"\nTotal accounts: {len(accounts)}")


def cmd_balance(args, services):
    """Show checking total, credit owed and net worth."""
    balance = total_balance(services.accessor.resolve_accounts(args.user))

    logger.info(f"Checking:    ${balance['checking']:.2f}")
    logger.info(f"Credit Owed: ${balance['credit_owed']:.2f}")
    logger.info(f"Net Worth:   ${balance['net_worth']:.2f}")


def setup_parser(subparsers):
    """Setup accounts subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "accounts",
        help="List accounts and balances",
        description="Show a user's accounts and balance summary",
    )

    accounts_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available account commands",
        dest="subcommand",
        required=True,
    )

    list_parser = accounts_subparsers.add_parser("list", help="List all accounts")
    list_parser.add_argument("--user", help="User ID (omit for demo data)")
    list_parser.set_defaults(func=cmd_list)

    balance_parser = accounts_subparsers.add_parser(
        "balance", help="Show balance summary"
    )
    balance_parser.add_argument("--user", help="User ID (omit for demo data)")
    balance_parser.set_defaults(func=cmd_balance)
