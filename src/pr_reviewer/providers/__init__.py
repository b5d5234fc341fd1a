from .base import LLMProvider
from .ollama import OllamaProvider

__all__ = ["LLMProvider", "OllamaProvider"]
