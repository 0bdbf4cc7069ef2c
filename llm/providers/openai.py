"""OpenAI provider implementation using chat-completions tool calling."""

import json
from typing import Dict, List, Optional
from openai import OpenAI
from llm.providers.base import LLMProvider, ToolExecutor
from logger import get_logger

logger = get_logger()

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_MAX_TURNS = 5


class OpenAIProvider(LLMProvider):
    """OpenAI implementation that loops over tool calls until a text reply."""

    def __init__(self, api_key: str, model: Optional[str] = None, client=None):
        """Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key.
            model: Model to use. If None, the prompt's default is used.
            client: Optional pre-built OpenAI client, used by tests.
        """
        self.client = client or OpenAI(api_key=api_key)
        self.model = model

    def run_conversation(
        self,
        system_prompt: str,
        messages: List[Dict[str, str]],
        tools: ToolExecutor,
        tool_schemas: List[dict],
        parameters: Dict,
    ) -> str:
        model = self.model or parameters.get("model", DEFAULT_MODEL)
        temperature = parameters.get("temperature", 0.3)
        max_turns = parameters.get("max_turns", DEFAULT_MAX_TURNS)

        conversation = [{"role": "system", "content": system_prompt}, *messages]

        for turn in range(max_turns):
            try:
                response = self.client.chat.completions.create(
                    model=model,
                    messages=conversation,
                    tools=tool_schemas,
                    temperature=temperature,
                )
            except Exception as e:
                logger.error(f"OpenAI API error: {e}")
                raise

            message = response.choices[0].message
            if not message.tool_calls:
                return message.content or ""

            conversation.append(
                {
                    "role": "assistant",
                    "content": message.content,
                    "tool_calls": [
                        {
                            "id": call.id,
                            "type": "function",
                            "function": {
                                "name": call.function.name,
                                "arguments": call.function.arguments,
                            },
                        }
                        for call in message.tool_calls
                    ],
                }
            )

            for call in message.tool_calls:
                conversation.append(
                    {
                        "role": "tool",
                        "tool_call_id": call.id,
                        "content": self._run_tool(tools, call),
                    }
                )

        logger.warning(f"Model did not finish within {max_turns} turns")
        return ""

    def _run_tool(self, tools: ToolExecutor, call) -> str:
        name = call.function.name
        try:
            arguments = json.loads(call.function.arguments or "{}")
        except json.JSONDecodeError:
            logger.warning(f"Unparseable arguments for {name}: {call.function.arguments}")
            return f"Invalid arguments for {name}: arguments must be a JSON object"

        if not isinstance(arguments, dict):
            return f"Invalid arguments for {name}: arguments must be a JSON object"

        return tools.call(name, arguments)
