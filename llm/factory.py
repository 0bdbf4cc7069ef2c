"""Factory for creating LLM provider instances."""

from typing import Optional
from config import Config
from llm.providers.base import LLMProvider
from llm.providers.openai import OpenAIProvider
from logger import get_logger

logger = get_logger()

SUPPORTED_PROVIDERS = ("openai",)


def get_llm_provider(config: Config) -> Optional[LLMProvider]:
    """Create an LLM provider instance based on configuration.

    Args:
        config: Application configuration.

    Returns:
        LLMProvider instance, or None if chat is disabled.

    Raises:
        ValueError: If the provider is unknown or missing its API key.
    """
    if not config.llm_enabled or not config.llm_provider:
        logger.info("LLM chat is disabled")
        return None

    if config.llm_provider not in SUPPORTED_PROVIDERS:
        raise ValueError(f"Unknown LLM provider: {config.llm_provider}")

    if not config.llm_openai_api_key:
        raise ValueError(
            "OpenAI provider selected but no API key configured "
            "(set OPENAI_API_KEY or llm.openai_api_key)"
        )

    logger.info(
        f"Initializing OpenAI provider (model: {config.llm_openai_model or 'default'})"
    )
    return OpenAIProvider(
        api_key=config.llm_openai_api_key, model=config.llm_openai_model
    )
