"""Pull request context collection.

Contains:
- collect_context: Fetch everything a run needs into a PullRequestContext
- truncate_diff: Cap the diff at a fixed size and mark it as truncated
"""

from concurrent.futures import Future, ThreadPoolExecutor

from prnote.config import DiffFailurePolicy, Settings
from prnote.github.client import GitHubClient
from prnote.github.exceptions import DiffFetchError, GitHubError, RequiredFetchError
from prnote.github.models import PullRequestContext
from prnote.logging import get_logger

logger = get_logger("github.context")

TRUNCATION_MARKER = "\n\n[Diff truncated]"


def truncate_diff(diff: str, max_chars: int) -> tuple[str, bool]:
    """Truncate the diff to max_chars.

    Args:
        diff: The raw unified diff.
        max_chars: Maximum characters kept from the diff.

    Returns:
        The possibly truncated diff and whether it was cut.
    """
    if len(diff) > max_chars:
        return diff[:max_chars] + TRUNCATION_MARKER, True
    return diff, False


def _required(future: Future, what: str, ref: str):
    """Join a required fetch, turning any GitHub failure into RequiredFetchError."""
    try:
        return future.result()
    except GitHubError as e:
        raise RequiredFetchError(f"Unable to fetch {what} for {ref}: {e}", status_code=e.status_code) from e


def _diff_or_empty(future: Future, policy: DiffFailurePolicy, ref: str) -> str:
    """Join the diff fetch; under the skip policy a failure yields an empty diff."""
    try:
        return future.result()
    except GitHubError as e:
        if policy == DiffFailurePolicy.ABORT:
            raise DiffFetchError(f"Unable to fetch diff for {ref}: {e}", status_code=e.status_code) from e
        logger.warning(f"Unable to fetch diff for {ref}, proceeding without it: {e}")
        return ""


def collect_context(client: GitHubClient, settings: Settings) -> PullRequestContext:
    """Fetch commits, files, the PR record and the diff for one pull request.

    The four reads run in parallel. Commits, files and the PR record are
    required; the diff follows settings.diff.on_failure.

    Args:
        client: GitHub client.
        settings: Run settings.

    Returns:
        The PullRequestContext for this run.

    Raises:
        RequiredFetchError: If commits, files or the PR record are unavailable.
        DiffFetchError: If the diff is unavailable and the policy is abort.
    """
    owner, repo, number = settings.owner, settings.repo, settings.pr_number
    ref = f"{owner}/{repo}#{number}"

    with ThreadPoolExecutor(max_workers=4) as pool:
        commits_future = pool.submit(client.list_commit_messages, owner, repo, number)
        files_future = pool.submit(client.list_files, owner, repo, number)
        pr_future = pool.submit(client.get_pull_request, owner, repo, number)
        diff_future = pool.submit(client.get_diff, owner, repo, number)

        commit_messages = _required(commits_future, "commits", ref)
        file_changes = _required(files_future, "changed files", ref)
        pr = _required(pr_future, "pull request", ref)
        raw_diff = _diff_or_empty(diff_future, settings.diff.on_failure, ref)

    diff, truncated = truncate_diff(raw_diff, settings.diff.max_chars)
    if truncated:
        logger.info(f"Diff for {ref} truncated to {settings.diff.max_chars} characters")

    existing_body = (pr.get("body") or "").strip()

    return PullRequestContext(
        owner=owner,
        repo=repo,
        number=number,
        branch_name=settings.branch_name,
        commit_messages=tuple(commit_messages),
        file_changes=tuple(file_changes),
        diff=diff,
        diff_truncated=truncated,
        existing_body=existing_body,
    )
