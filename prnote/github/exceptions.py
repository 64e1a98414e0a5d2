"""GitHub-related exception classes.

Contains all exception classes for GitHub operations:
- GitHubError: Base exception for GitHub API errors
- RequiredFetchError: Commits, files or the PR record could not be fetched
- DiffFetchError: The unified diff could not be fetched
- PublishError: The pull request body could not be updated
"""

from typing import Optional


class GitHubError(Exception):
    """Base exception for GitHub API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RequiredFetchError(GitHubError):
    """Raised when data the run cannot do without is unavailable."""

    pass


class DiffFetchError(GitHubError):
    """Raised when the unified diff is unavailable."""

    pass


class PublishError(GitHubError):
    """Raised when GitHub rejects the description update."""

    pass
