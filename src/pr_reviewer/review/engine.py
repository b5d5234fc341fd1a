import logging
from dataclasses import dataclass
from pr_reviewer.models.github import FileChange
from pr_reviewer.models.review import ParsedReview, ReviewRecord
from pr_reviewer.platforms.base import GitPlatform
from pr_reviewer.providers.base import LLMProvider
from pr_reviewer.store.base import HistoryStore
from .diff import fetch_pr_diff
from .parser import parse_review_response
from .prompts import build_review_prompt


logger = logging.getLogger(__name__)


@dataclass
class EngineReviewResult:
    """Result of reviewing a pull request."""
    review: ParsedReview
    files: list[FileChange]
    record: ReviewRecord


class ReviewEngine:
    def __init__(
        self,
        github: GitPlatform,
        provider: LLMProvider,
        history: HistoryStore,
        model: str | None = None,
    ):
        self.github = github
        self.provider = provider
        self.history = history
        self.model = model

    async def review_pr(
        self,
        identity: str,
        owner: str,
        repo: str,
        pr_number: int,
    ) -> EngineReviewResult:
        """Fetch the PR diff, ask the model for a review and save it to history."""
        bundle = await fetch_pr_diff(self.github, owner, repo, pr_number)

        prompt = build_review_prompt(bundle.diff_text)
        output = await self.provider.generate(prompt, model=self.model)

        review = parse_review_response(output)

        record = ReviewRecord(owner=owner, repo=repo, pr_number=pr_number, review=review)
        self.history.append(identity, record)

        return EngineReviewResult(review=review, files=bundle.files, record=record)
