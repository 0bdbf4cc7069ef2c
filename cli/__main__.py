#!/usr/bin/env python3
"""
Ledgerchat CLI - Query bank transactions and chat with the finance assistant.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    accounts      List accounts and balances
    transactions  Search and summarize transactions
    connections   Link a bank and sync its data
    chat          Talk to the finance assistant
    migrate       Database migrations

Examples:
    python -m cli accounts balance --user 42
    python -m cli transactions search --user 42 --category groceries
    python -m cli transactions spending --user 42 --start-date 2026-01-01
    python -m cli connections sync --user 42
    python -m cli chat --user 42
    python -m cli migrate apply
"""

import sys
import argparse
from cli import accounts, transactions, connections, chat, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging

SERVICE_COMMANDS = ("accounts", "transactions", "connections", "chat")


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Ledgerchat - Chat with your bank transactions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    accounts.setup_parser(subparsers)
    transactions.setup_parser(subparsers)
    connections.setup_parser(subparsers)
    chat.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    args = parser.parse_args()

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config()
        # Keep the console quiet during chat; everything still goes to the log file
        setup_logging(
            config, console_level="WARNING" if args.command == "chat" else None
        )

        if args.command in SERVICE_COMMANDS:
            args.func(args, Services(config))
        elif args.command == "migrate":
            args.func(args, DatabaseManager(config))
        else:
            args.func(args)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
