from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FeedbackAction(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"
    COMMENT = "comment"


class FileChange(BaseModel):
    """A changed file as listed by the provider.

    Provider fields other than ``filename`` and ``patch`` are kept as-is so
    they reach the UI unchanged.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    filename: str
    patch: str | None = None
    added_lines: list[int] = Field(default_factory=list)


class DiffBundle(BaseModel):
    files: list[FileChange]
    diff_text: str


class LineInfo(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    commit_id: str
    path: str
    line: int
