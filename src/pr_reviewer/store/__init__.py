from .base import ChatLog, HistoryStore
from .memory import InMemoryChatLog, InMemoryHistoryStore

__all__ = ["ChatLog", "HistoryStore", "InMemoryChatLog", "InMemoryHistoryStore"]
