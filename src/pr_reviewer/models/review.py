import threading
import time
from datetime import datetime, timezone
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ReviewStatus(str, Enum):
    PENDING = "pending"


class ParsedReview(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    summary: str = ""
    potential_bugs: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    test_cases: list[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.summary or self.potential_bugs or self.suggestions or self.test_cases)


_id_lock = threading.Lock()
_last_id = 0


def next_record_id() -> int:
    """Millisecond timestamp, bumped when needed so ids never repeat."""
    global _last_id
    with _id_lock:
        _last_id = max(time.time_ns() // 1_000_000, _last_id + 1)
        return _last_id


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ReviewRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: int = Field(default_factory=next_record_id)
    owner: str
    repo: str
    pr_number: int
    review: ParsedReview
    timestamp: str = Field(default_factory=_utc_now_iso)
    status: ReviewStatus = ReviewStatus.PENDING
