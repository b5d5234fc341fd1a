from .chat import ChatEntry
from .github import DiffBundle, FeedbackAction, FileChange, LineInfo
from .review import ParsedReview, ReviewRecord, ReviewStatus

__all__ = [
    "ChatEntry",
    "DiffBundle",
    "FeedbackAction",
    "FileChange",
    "LineInfo",
    "ParsedReview",
    "ReviewRecord",
    "ReviewStatus",
]
