#!/usr/bin/env python3

import sys
from banking import get_bank_client
from banking.errors import BankProviderError, NotConnectedError
from banking.sync import link_user, sync_user
from logger import get_logger

logger = get_logger()


def _require_bank_client(services):
    bank_client = get_bank_client(services.config)
    if bank_client is None:
        logger.error(
            "Plaid is not configured. Set PLAID_CLIENT_ID and PLAID_SECRET "
            "(or [plaid] in ~/.config/ledgerchat.toml)."
        )
        sys.exit(1)
    return bank_client


def cmd_link_token(args, services):
    """Issue a link token for the browser-side bank link flow."""
    bank_client = _require_bank_client(services)

    try:
        token = bank_client.create_link_token(args.user)
    except BankProviderError as e:
        logger.error(f"Could not create link token: {e}")
        sys.exit(1)

    logger.info(f"Link token for user {args.user}:")
    print(token)


def cmd_link(args, services):
    """Exchange a public token and store the resulting connection."""
    bank_client = _require_bank_client(services)

    if services.connections.exists(args.user):
        logger.info(
            "User already has a bank connected; linking again replaces it."
        )

    try:
        connection, cache = link_user(
            services, args.user, args.public_token, bank_client
        )
    except BankProviderError as e:
        logger.error(f"Bank link failed: {e}")
        sys.exit(1)

    logger.info("✓ Bank connected successfully")
    logger.info(f"  Accounts: {len(connection.accounts)}")
    logger.info(f"  Transactions: {len(cache.transactions)}")


def cmd_sync(args, services):
    """Refresh cached transactions and accounts from the bank."""
    bank_client = _require_bank_client(services)

    try:
        connection, cache = sync_user(services, args.user, bank_client)
    except NotConnectedError:
        logger.error("No bank connected. Use 'python -m cli connections link' first.")
        sys.exit(1)
    except BankProviderError as e:
        logger.error(f"Sync failed: {e}")
        sys.exit(1)

    logger.info(
        f"✓ Synced {len(cache.transactions)} transactions from "
        f"{len(connection.accounts)} account(s)"
    )


def cmd_status(args, services):
    """Show whether a user is connected and how fresh the cache is."""
    connection = services.connections.find(args.user)
    if connection is None:
        logger.info(f"User {args.user} has no bank connected (demo data in use).")
        return

    logger.info(f"User {args.user} connected since {connection.connected_at:%Y-%m-%d %H:%M}")
    logger.info(f"  Item: {connection.item_id}")
    logger.info(f"  Accounts: {len(connection.accounts)}")

    cache = services.transaction_cache.find(args.user)
    if cache is None:
        logger.info("  No transactions cached yet.")
    else:
        logger.info(
            f"  {len(cache.transactions)} transactions cached at "
            f"{cache.cached_at:%Y-%m-%d %H:%M}"
        )


def setup_parser(subparsers):
    """Setup connections subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "connections",
        help="Link a bank and sync its data",
        description="Manage the bank connection of a user",
    )

    connections_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available connection commands",
        dest="subcommand",
        required=True,
    )

    link_token_parser = connections_subparsers.add_parser(
        "link-token", help="Create a link token for the bank link flow"
    )
    link_token_parser.add_argument("--user", required=True, help="User ID")
    link_token_parser.set_defaults(func=cmd_link_token)

    link_parser = connections_subparsers.add_parser(
        "link", help="Store a connection from a public token"
    )
    link_parser.add_argument("--user", required=True, help="User ID")
    link_parser.add_argument(
        "--public-token", required=True, help="Public token from the link flow"
    )
    link_parser.set_defaults(func=cmd_link)

    sync_parser = connections_subparsers.add_parser(
        "sync", help="Refresh transactions from the bank"
    )
    sync_parser.add_argument("--user", required=True, help="User ID")
    sync_parser.set_defaults(func=cmd_sync)

    status_parser = connections_subparsers.add_parser(
        "status", help="Show connection status"
    )
    status_parser.add_argument("--user", required=True, help="User ID")
    status_parser.set_defaults(func=cmd_status)
