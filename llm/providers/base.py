"""Base provider interface for LLM implementations."""

from abc import ABC, abstractmethod
from typing import Dict, List, Protocol


class ToolExecutor(Protocol):
    """Anything that can run a named tool and return its text output."""

    def call(self, name: str, arguments: dict = None) -> str: ...


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    A provider drives one conversational turn: it sends the conversation to
    the model, runs whatever tools the model asks for, feeds the results
    back, and stops once the model answers in plain text.
    """

    @abstractmethod
    def run_conversation(
        self,
        system_prompt: str,
        messages: List[Dict[str, str]],
        tools: ToolExecutor,
        tool_schemas: List[dict],
        parameters: Dict,
    ) -> str:
        """Run the model until it produces a final reply.

        Args:
            system_prompt: Rendered system prompt.
            messages: Prior conversation plus the new user message, as
                {"role": ..., "content": ...} dicts, oldest first.
            tools: Executor for tool calls requested by the model.
            tool_schemas: Function-tool definitions offered to the model.
            parameters: Prompt parameters (model, temperature, max_turns).

        Returns:
            The model's final text reply. Empty if the model never produced
            one within max_turns.

        Raises:
            Exception: If the LLM API call fails.
        """
        pass
