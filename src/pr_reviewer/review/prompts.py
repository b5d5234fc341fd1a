import json
from typing import Any


REVIEW_PROMPT = """You are an AI Pull Request Reviewer.
Analyze the following GitHub Pull Request diff and provide a detailed review.

Please structure your response EXACTLY as follows (do not include any JSON formatting, just plain text sections):

SUMMARY:
[Provide a brief summary of the changes in 2-3 sentences]

POTENTIAL BUGS:
- [List each potential bug or logical issue on a new line with a dash]
- [Another potential issue]

SUGGESTIONS:
- [List each suggestion for improvements (performance, style, security) on a new line with a dash]
- [Another suggestion]

TEST CASES:
- [List missing test cases or edge cases on a new line with a dash]
- [Another test case]

Diff:
"""


CHAT_PROMPT = """You are an AI assistant for code review.

User message: {message}

PR Context:
Owner: {owner}
Repo: {repo}
PR Number: {pr_number}
Review content: {review}

Previous conversation history:
{history}

Respond concisely and helpfully.
"""


def build_review_prompt(diff_text: str) -> str:
    """Build the review prompt. The diff is appended as-is."""
    return REVIEW_PROMPT + diff_text


def build_chat_prompt(
    message: str,
    context: dict[str, Any],
    history: list[Any] | None = None,
) -> str:
    pr_number = context.get("prNumber", context.get("pr_number"))
    return CHAT_PROMPT.format(
        message=message,
        owner=context.get("owner"),
        repo=context.get("repo"),
        pr_number=pr_number,
        review=json.dumps(context.get("review"), indent=2, default=str),
        history=json.dumps(history, indent=2, default=str) if history else "None",
    )
