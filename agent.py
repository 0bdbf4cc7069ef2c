"""Chat agent answering finance questions with the finance tools.

Each incoming message is answered by an LLM that can call the finance tools
bound to the sender's user id. The recent conversation is replayed from the
chat history so follow-up questions keep their context.
"""

from datetime import date
from typing import Optional
import openai
from llm.prompts.loader import PromptManager
from llm.providers.base import LLMProvider
from llm.tools import FinanceTools, tool_schemas
from models.category import CATEGORIES
from logger import get_logger

logger = get_logger()

PROMPT_NAME = "assistant"
FALLBACK_REPLY = "I processed your request."

_prompt_manager = PromptManager()


def process_message(
    services,
    user_id: str,
    user_message: str,
    provider: LLMProvider,
    bank_client=None,
    prompt_manager: Optional[PromptManager] = None,
) -> str:
    """Answer a user's message.

    The user and assistant turns are stored in chat history only when the
    model call succeeds. Failures never raise; they are logged and turned
    into an apologetic reply.

    Args:
        services: Services container.
        user_id: Opaque user identifier from the chat transport.
        user_message: The text the user sent.
        provider: LLM provider that runs the conversation.
        bank_client: Optional bank client enabling the sync tool.
        prompt_manager: Optional PromptManager (defaults to the shared one).

    Returns:
        The reply to send back to the user.
    """
    prompt_manager = prompt_manager or _prompt_manager
    context = "connected" if services.accessor.has_connection(user_id) else "demo"

    try:
        prompt = prompt_manager.render_system_prompt(
            PROMPT_NAME,
            {"today": date.today().isoformat(), "categories": ", ".join(CATEGORIES)},
            context=context,
        )

        history = [
            {"role": m.role, "content": m.content}
            for m in services.chat_history.find_by_user(user_id)
        ]
        messages = history + [{"role": "user", "content": user_message}]

        logger.info(
            f"Processing message for user {user_id} ({context} data, "
            f"{len(history)} history message(s), prompt v{prompt['version']})"
        )

        tools = FinanceTools(services, user_id, bank_client=bank_client)
        result = provider.run_conversation(
            prompt["system_prompt"],
            messages,
            tools,
            tool_schemas(),
            prompt["parameters"],
        )
    except openai.AuthenticationError as e:
        logger.error(f"Agent error: {e}")
        return "OpenAI API key is invalid. Please check your OPENAI_API_KEY."
    except Exception as e:
        logger.error(f"Agent error: {e}")
        return f"Sorry, I encountered an error: {e}"

    reply = result or FALLBACK_REPLY
    services.chat_history.append(user_id, "user", user_message)
    services.chat_history.append(user_id, "assistant", reply)
    return reply
