from .chat import ChatAssistant
from .diff import fetch_pr_diff
from .engine import EngineReviewResult, ReviewEngine
from .feedback import annotate_comment, post_feedback
from .parser import ReviewParser, parse_review_response
from .prompts import build_chat_prompt, build_review_prompt

__all__ = [
    "ChatAssistant",
    "fetch_pr_diff",
    "EngineReviewResult",
    "ReviewEngine",
    "annotate_comment",
    "post_feedback",
    "ReviewParser",
    "parse_review_response",
    "build_chat_prompt",
    "build_review_prompt",
]
