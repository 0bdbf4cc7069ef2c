"""LLM integration module for the finance chat assistant."""

from llm.factory import get_llm_provider

__all__ = ["get_llm_provider"]
