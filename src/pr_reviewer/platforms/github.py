import logging
from typing import Any
import httpx
from pr_reviewer.errors import CommentPostError, FetchError, MissingCredentialError
from pr_reviewer.models.github import LineInfo
from .base import GitPlatform


logger = logging.getLogger(__name__)

# GitHub caps the files listing at 3000 entries
MAX_FILE_PAGES = 30


class GitHubClient(GitPlatform):
    def __init__(self, token: str | None, base_url: str = "https://api.github.com"):
        self.token = token
        self.api_url = base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _require_token(self) -> None:
        if not self.token:
            logger.error("GITHUB_TOKEN is not set, cannot post comments")
            raise MissingCredentialError("GITHUB_TOKEN is not set")

    async def get_pr_files(self, owner: str, repo: str, pr_number: int) -> Any:
        """Fetch the PR's file list, following ``Link: rel="next"`` pages.

        The decoded body is returned without checking the status code: GitHub
        answers errors with a JSON object, which the caller rejects.
        """
        url = f"{self.api_url}/repos/{owner}/{repo}/pulls/{pr_number}/files"
        params: dict[str, Any] | None = {"per_page": 100}
        files: list[Any] = []
        try:
            async with httpx.AsyncClient() as client:
                for _ in range(MAX_FILE_PAGES):
                    response = await client.get(url, params=params, headers=self._headers(), timeout=30.0)
                    data = response.json()
                    if not isinstance(data, list):
                        return data
                    files.extend(data)

                    next_url = response.links.get("next", {}).get("url")
                    if not next_url:
                        return files
                    # the next link already carries the query string
                    url, params = next_url, None
        except (httpx.HTTPError, ValueError) as e:
            raise FetchError(f"Failed to fetch PR details: {e}") from e

        logger.warning(f"Stopped listing files for {owner}/{repo}#{pr_number} after {MAX_FILE_PAGES} pages")
        return files

    async def _post_comment(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        self._require_token()
        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(url, headers=self._headers(), json=payload, timeout=30.0)
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise CommentPostError(f"Failed to post comment: {e}") from e

    async def post_inline_comment(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        body: str,
        line_info: LineInfo,
    ) -> dict[str, Any]:
        return await self._post_comment(
            f"{self.api_url}/repos/{owner}/{repo}/pulls/{pr_number}/comments",
            {
                "body": body,
                "commit_id": line_info.commit_id,
                "path": line_info.path,
                "line": line_info.line,
                "side": "RIGHT",
            },
        )

    async def post_issue_comment(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        body: str,
    ) -> dict[str, Any]:
        return await self._post_comment(
            f"{self.api_url}/repos/{owner}/{repo}/issues/{pr_number}/comments",
            {"body": body},
        )
