"""GitHub REST client for pull request operations.

Contains:
- GitHubClient: Thin synchronous wrapper over httpx for the five calls a run needs
"""

from typing import Any, Optional

import httpx

from prnote.config import DEFAULT_GITHUB_API_URL, DEFAULT_TIMEOUT
from prnote.github.exceptions import GitHubError, PublishError
from prnote.github.models import FileChange
from prnote.logging import get_logger

logger = get_logger("github.client")

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"
JSON_MEDIA_TYPE = "application/vnd.github+json"
PER_PAGE = 100
# GitHub stops listing files at 3000 per pull request
MAX_PAGES = 30


class GitHubClient:
    """GitHub API client for reading and updating a single pull request.

    The client is safe to share between the worker threads of one run.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            token: GitHub token with pull request read/write access.
            base_url: API root, e.g. for GitHub Enterprise.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": JSON_MEDIA_TYPE,
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "prnote",
            },
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._client.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
        accept: Optional[str] = None,
    ) -> httpx.Response:
        """Send a request and raise GitHubError on any failure."""
        headers = {"Accept": accept} if accept else None
        try:
            response = self._client.request(method, path, params=params, json=json, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = _error_message(e.response)
            raise GitHubError(f"GitHub API {method} {path} failed ({status}): {message}", status_code=status)
        except httpx.HTTPError as e:
            raise GitHubError(f"GitHub API {method} {path} failed: {e}")
        return response

    def _paginate(self, path: str) -> list[dict[str, Any]]:
        """Collect every page of a list endpoint."""
        items: list[dict[str, Any]] = []
        page = 1

        while True:
            response = self._request("GET", path, params={"per_page": PER_PAGE, "page": page})
            data = response.json()
            if not data:
                break

            items.extend(data)

            # A short page is the last page
            if len(data) < PER_PAGE:
                break

            page += 1
            if page > MAX_PAGES:
                logger.warning(f"Reached pagination limit for {path}")
                break

        return items

    def list_commit_messages(self, owner: str, repo: str, number: int) -> list[str]:
        """List the commit messages of a pull request, oldest first."""
        commits = self._paginate(f"/repos/{owner}/{repo}/pulls/{number}/commits")
        return [c["commit"]["message"] for c in commits]

    def list_files(self, owner: str, repo: str, number: int) -> list[FileChange]:
        """List the files changed by a pull request."""
        files = self._paginate(f"/repos/{owner}/{repo}/pulls/{number}/files")
        return [FileChange(path=f["filename"], status=f.get("status", "modified")) for f in files]

    def get_pull_request(self, owner: str, repo: str, number: int) -> dict[str, Any]:
        """Fetch the full pull request record."""
        response = self._request("GET", f"/repos/{owner}/{repo}/pulls/{number}")
        return response.json()

    def get_diff(self, owner: str, repo: str, number: int) -> str:
        """Fetch the unified diff of a pull request."""
        response = self._request(
            "GET",
            f"/repos/{owner}/{repo}/pulls/{number}",
            accept=DIFF_MEDIA_TYPE,
        )
        return response.text

    def update_pull_request_body(self, owner: str, repo: str, number: int, body: str) -> None:
        """Replace the pull request description.

        Raises:
            PublishError: If GitHub rejects the update.
        """
        try:
            self._request("PATCH", f"/repos/{owner}/{repo}/pulls/{number}", json={"body": body})
        except GitHubError as e:
            raise PublishError(str(e), status_code=e.status_code) from e


def _error_message(response: httpx.Response) -> str:
    """Pull the message field out of a GitHub error payload."""
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or response.reason_phrase
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.reason_phrase
