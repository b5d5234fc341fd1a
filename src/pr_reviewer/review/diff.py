# src/pr_reviewer/review/diff.py
import logging
from pydantic import ValidationError
from unidiff import PatchSet
from unidiff.errors import UnidiffParseError
from pr_reviewer.errors import FetchError
from pr_reviewer.models.github import DiffBundle, FileChange
from pr_reviewer.platforms.base import GitPlatform


logger = logging.getLogger(__name__)

NO_PATCH_PLACEHOLDER = "No patch available"


def added_lines(filename: str, patch: str | None) -> list[int]:
    """New-side line numbers added by a GitHub file patch."""
    if not patch:
        return []

    # GitHub patches start at the first hunk; unidiff needs file headers
    diff_text = f"--- a/{filename}\n+++ b/{filename}\n{patch}"
    try:
        patch_set = PatchSet(diff_text)
    except UnidiffParseError as e:
        logger.warning(f"Could not parse patch for {filename}: {e}")
        return []

    lines = []
    for patched_file in patch_set:
        for hunk in patched_file:
            for line in hunk:
                if line.is_added and line.target_line_no is not None:
                    lines.append(line.target_line_no)
    return lines


def build_diff_text(files: list[FileChange]) -> str:
    return "".join(
        f"File: {f.filename}\n{f.patch or NO_PATCH_PLACEHOLDER}\n\n" for f in files
    )


async def fetch_pr_diff(platform: GitPlatform, owner: str, repo: str, pr_number: int) -> DiffBundle:
    """Fetch a PR's changed files and render them as one diff text."""
    data = await platform.get_pr_files(owner, repo, pr_number)
    if not isinstance(data, list):
        raise FetchError("Failed to fetch PR details.")

    files = []
    for item in data:
        try:
            change = FileChange.model_validate(item)
        except ValidationError as e:
            raise FetchError("Failed to fetch PR details.") from e
        change.added_lines = added_lines(change.filename, change.patch)
        files.append(change)

    logger.info(f"Fetched {len(files)} files for {owner}/{repo}#{pr_number}")
    return DiffBundle(files=files, diff_text=build_diff_text(files))
