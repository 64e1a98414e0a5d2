"""GitHub collaborator module for prnote.

This package provides pull request access with:
- exceptions: GitHubError, RequiredFetchError, DiffFetchError, PublishError
- models: FileChange, PullRequestContext
- client: GitHubClient
- context: collect_context, truncate_diff
"""

from prnote.github.exceptions import (
    DiffFetchError,
    GitHubError,
    PublishError,
    RequiredFetchError,
)
from prnote.github.models import FileChange, PullRequestContext
from prnote.github.client import GitHubClient
from prnote.github.context import TRUNCATION_MARKER, collect_context, truncate_diff


__all__ = [
    # Exceptions
    "GitHubError",
    "RequiredFetchError",
    "DiffFetchError",
    "PublishError",
    # Models
    "FileChange",
    "PullRequestContext",
    # Client
    "GitHubClient",
    # Context
    "collect_context",
    "truncate_diff",
    "TRUNCATION_MARKER",
]
