"""Storage interfaces for review history and chat logs.

The pipeline talks to these abstractions only, so an in-memory store can be
replaced by a durable backend without touching the review code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pr_reviewer.models.chat import ChatEntry
    from pr_reviewer.models.review import ReviewRecord


class HistoryStore(ABC):
    """Per-identity review history, newest first, bounded by ``capacity``."""

    capacity: int

    @abstractmethod
    def append(self, identity: str, record: ReviewRecord) -> None:
        """Insert ``record`` at the head of the identity's history.

        Entries beyond ``capacity`` are dropped from the tail in the same step.
        """

    @abstractmethod
    def list_reviews(self, identity: str) -> list[ReviewRecord]:
        """Return the identity's history, or an empty list if it has none."""

    @abstractmethod
    def clear(self, identity: str) -> None:
        """Reset the identity's history to empty."""


class ChatLog(ABC):
    """Unbounded, unpartitioned log of chat exchanges."""

    @abstractmethod
    def append(self, entry: ChatEntry) -> None:
        """Record one exchange."""

    @abstractmethod
    def entries(self) -> list[ChatEntry]:
        """Return every exchange, oldest first."""
