"""Logging configuration for Ledgerchat.

Application messages go to a dated log file and to the console. The chat
command turns the console handler down so tool chatter doesn't interleave
with the conversation.
"""

import logging
from datetime import date
from config import Config

LOGGER_NAME = "ledgerchat"

# Client libraries that log every HTTP request at INFO
_NOISY_LOGGERS = ("httpx", "openai", "urllib3", "plaid")


def setup_logging(config: Config, console_level: str = None) -> logging.Logger:
    """Set up application logging with file and console handlers.

    Args:
        config: Application configuration containing log settings.
        console_level: Optional level for the console handler. Defaults to
            the configured log level.

    Returns:
        Configured logger instance.
    """
    config.log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.log_level)

    # setup_logging may be called again by tests or the chat command
    logger.handlers.clear()

    file_handler = logging.FileHandler(
        config.log_dir / f"{LOGGER_NAME}-{date.today().isoformat()}.log"
    )
    file_handler.setLevel(config.log_level)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level or config.log_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger


def get_logger() -> logging.Logger:
    """Get the application logger."""
    return logging.getLogger(LOGGER_NAME)
