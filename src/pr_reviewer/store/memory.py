"""Process-local stores. Contents are lost when the process exits."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import TYPE_CHECKING

from pr_reviewer.store.base import ChatLog, HistoryStore

if TYPE_CHECKING:
    from pr_reviewer.models.chat import ChatEntry
    from pr_reviewer.models.review import ReviewRecord

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_CAPACITY = 50


class InMemoryHistoryStore(HistoryStore):
    """Keeps each identity's history in a bounded deque.

    ``appendleft`` on a deque with ``maxlen`` inserts at the head and evicts
    the oldest entry as one operation; the lock keeps that atomic across
    threads as well.
    """

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._logs: dict[str, deque[ReviewRecord]] = {}
        self._lock = threading.Lock()

    def append(self, identity: str, record: ReviewRecord) -> None:
        with self._lock:
            log = self._logs.get(identity)
            if log is None:
                log = self._logs[identity] = deque(maxlen=self.capacity)
            log.appendleft(record)
        logger.info(f"Saved review {record.id} for {identity}")

    def list_reviews(self, identity: str) -> list[ReviewRecord]:
        with self._lock:
            return list(self._logs.get(identity, ()))

    def clear(self, identity: str) -> None:
        with self._lock:
            self._logs[identity] = deque(maxlen=self.capacity)
        logger.info(f"Cleared review history for {identity}")


class InMemoryChatLog(ChatLog):
    def __init__(self) -> None:
        self._entries: list[ChatEntry] = []
        self._lock = threading.Lock()

    def append(self, entry: ChatEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def entries(self) -> list[ChatEntry]:
        with self._lock:
            return list(self._entries)
