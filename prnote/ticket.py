"""Ticket resolution from branch names.

Contains:
- TicketInfo: A resolved ticket id and its tracker URL
- ticket_pattern: Regex built from the configured prefixes
- resolve_ticket: Find the ticket for a branch, applying the not-found policy
"""

import re
from dataclasses import dataclass
from typing import Optional

from prnote.config import TicketPolicy, TicketSettings


@dataclass(frozen=True)
class TicketInfo:
    """A ticket referenced by the pull request.

    Attributes:
        id: Ticket key, e.g. CDB-1234.
        url: Link into the issue tracker, None when no base URL is configured.
    """

    id: str
    url: Optional[str] = None

    def as_markdown(self) -> str:
        """Render the ticket as a markdown link, or the bare id without a URL."""
        if self.url:
            return f"[{self.id}]({self.url})"
        return self.id


def ticket_pattern(prefixes: tuple[str, ...]) -> re.Pattern:
    """Build the ticket regex for the given prefixes, e.g. (CDB|DBP)-\\d+."""
    alternatives = "|".join(re.escape(p) for p in prefixes)
    return re.compile(rf"(?:{alternatives})-\d+")


def ticket_url(ticket_id: str, base_url: Optional[str]) -> Optional[str]:
    """Interpolate the ticket id into the tracker base URL."""
    if not base_url:
        return None
    return f"{base_url.rstrip('/')}/{ticket_id}"


def resolve_ticket(branch_name: str, settings: TicketSettings) -> Optional[TicketInfo]:
    """Extract the ticket for a branch.

    Args:
        branch_name: The pull request head branch, e.g. feature/CDB-1234-fix.
        settings: Ticket settings (prefixes, base URL, not-found policy).

    Returns:
        The first matching ticket. When nothing matches, None under the omit
        policy or the sentinel ticket under the sentinel policy.
    """
    match = ticket_pattern(settings.prefixes).search(branch_name or "")
    if match:
        ticket_id = match.group(0)
    elif settings.policy == TicketPolicy.SENTINEL:
        ticket_id = settings.sentinel
    else:
        return None

    return TicketInfo(id=ticket_id, url=ticket_url(ticket_id, settings.base_url))
