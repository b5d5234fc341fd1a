# src/pr_reviewer/providers/base.py
from abc import ABC, abstractmethod


class LLMProvider(ABC):
    @abstractmethod
    async def generate(self, prompt: str, model: str | None = None) -> str:
        """Run the prompt through a model and return its full text output."""
        pass
