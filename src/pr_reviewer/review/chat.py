import logging
from typing import Any
from pr_reviewer.models.chat import ChatEntry
from pr_reviewer.providers.base import LLMProvider
from pr_reviewer.store.base import ChatLog
from .prompts import build_chat_prompt


logger = logging.getLogger(__name__)


class ChatAssistant:
    """Answers free-form questions about a review. Responses are not parsed."""

    def __init__(self, provider: LLMProvider, chat_log: ChatLog, model: str = "llama3"):
        self.provider = provider
        self.chat_log = chat_log
        self.model = model

    async def ask(
        self,
        message: str,
        context: dict[str, Any],
        history: list[Any] | None = None,
    ) -> str:
        prompt = build_chat_prompt(message, context, history)
        response = await self.provider.generate(prompt, model=self.model)

        self.chat_log.append(ChatEntry(
            user_message=message,
            model_response=response,
            context=context,
        ))
        return response
