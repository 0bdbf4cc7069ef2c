"""Bank-data provider integration."""

from typing import Optional
from config import Config
from banking.base import BankClient
from logger import get_logger

logger = get_logger()


def get_bank_client(config: Config) -> Optional[BankClient]:
    """Create the bank client described by the configuration.

    Args:
        config: Application configuration.

    Returns:
        A PlaidBankClient, or None if Plaid credentials are not configured.
    """
    if not config.plaid_configured:
        logger.info("Plaid credentials not configured; bank sync disabled")
        return None

    # Imported here so the demo mode works without touching the Plaid SDK
    from banking.plaid_client import PlaidBankClient

    logger.info(f"Initializing Plaid client ({config.plaid_env})")
    return PlaidBankClient(
        client_id=config.plaid_client_id,
        secret=config.plaid_secret,
        env=config.plaid_env,
    )


__all__ = ["BankClient", "get_bank_client"]
