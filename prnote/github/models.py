"""Data models for pull request context.

Contains:
- FileChange: One changed file and its change kind
- PullRequestContext: Immutable snapshot of everything fetched for a run
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FileChange:
    """A file touched by the pull request.

    Attributes:
        path: Repository-relative path.
        status: GitHub change kind (added, modified, removed, renamed, ...).
    """

    path: str
    status: str


@dataclass(frozen=True)
class PullRequestContext:
    """Snapshot of a pull request, built once per run and never mutated."""

    owner: str
    repo: str
    number: int
    branch_name: str
    commit_messages: tuple[str, ...]
    file_changes: tuple[FileChange, ...]
    diff: str
    diff_truncated: bool
    existing_body: str

    @property
    def full_name(self) -> str:
        """Return the owner/repo#number reference."""
        return f"{self.owner}/{self.repo}#{self.number}"
