from abc import ABC, abstractmethod
from typing import Any
from pr_reviewer.models.github import LineInfo


class GitPlatform(ABC):
    @abstractmethod
    async def get_pr_files(self, owner: str, repo: str, pr_number: int) -> Any:
        """Return the provider's decoded response for the PR's changed files."""
        pass

    @abstractmethod
    async def post_inline_comment(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        body: str,
        line_info: LineInfo,
    ) -> dict[str, Any]:
        pass

    @abstractmethod
    async def post_issue_comment(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        body: str,
    ) -> dict[str, Any]:
        pass
