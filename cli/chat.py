#!/usr/bin/env python3

import sys
from agent import process_message
from banking import get_bank_client
from llm import get_llm_provider
from logger import get_logger

logger = get_logger()

EXIT_COMMANDS = ("/quit", "/exit")


def cmd_chat(args, services):
    """Interactive chat with the finance assistant.

    Args:
        args: Parsed command-line arguments with user
        services: Services container
    """
    provider = get_llm_provider(services.config)
    if provider is None:
        logger.error("LLM chat is disabled in configuration.")
        sys.exit(1)

    bank_client = get_bank_client(services.config)
    user_id = args.user

    print("Personal Finance Assistant")
    print("=" * 80)
    if services.accessor.has_connection(user_id):
        print("Bank connected. Ask to sync to refresh your data.")
    else:
        print("Using demo data. Link a bank with 'python -m cli connections link'.")
    print("Type /clear to forget the conversation, /quit to leave.\n")

    while True:
        try:
            message = input("you> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not message:
            continue
        if message in EXIT_COMMANDS:
            break
        if message == "/clear":
            removed = services.chat_history.clear(user_id)
            print(f"Cleared {removed} message(s) of history.\n")
            continue

        reply = process_message(
            services, user_id, message, provider, bank_client=bank_client
        )
        print(f"bot> {reply}\n")


def setup_parser(subparsers):
    """Setup chat subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "chat",
        help="Chat with the finance assistant",
        description="Ask questions about your transactions in plain language",
    )
    parser.add_argument("--user", required=True, help="User ID")
    parser.set_defaults(func=cmd_chat)
