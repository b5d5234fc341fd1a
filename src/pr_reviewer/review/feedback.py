import logging
from typing import Any
from pr_reviewer.models.github import FeedbackAction, LineInfo
from pr_reviewer.platforms.base import GitPlatform


logger = logging.getLogger(__name__)


def annotate_comment(comment: str, action: FeedbackAction | None) -> str:
    """Prefix the comment with the reviewer's decision, if there is one."""
    if action == FeedbackAction.ACCEPT:
        return f"✅ **Accepted**: {comment}"
    if action == FeedbackAction.REJECT:
        return f"❌ **Rejected**: {comment}"
    return comment


async def post_feedback(
    platform: GitPlatform,
    owner: str,
    repo: str,
    pr_number: int,
    comment: str,
    action: FeedbackAction | None = None,
    line_info: LineInfo | None = None,
) -> dict[str, Any]:
    """Post a decision as a PR comment and return the provider's response.

    With ``line_info`` the comment is anchored to that line on the new side
    of the diff; otherwise it goes to the PR conversation.
    """
    body = annotate_comment(comment, action)

    if line_info is not None:
        result = await platform.post_inline_comment(owner, repo, pr_number, body, line_info)
        logger.info(f"Posted inline comment on {owner}/{repo}#{pr_number} {line_info.path}:{line_info.line}")
    else:
        result = await platform.post_issue_comment(owner, repo, pr_number, body)
        logger.info(f"Posted comment on {owner}/{repo}#{pr_number}")

    if "id" not in result:
        logger.warning(f"Provider did not accept comment on {owner}/{repo}#{pr_number}: {result}")
    return result
