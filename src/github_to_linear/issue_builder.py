"""Build the Linear issue payload and comment bodies from GitHub data."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import DEFAULT_PRIORITY, ImportPayload

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from .models import SourceComment, SourceIssue

PRIORITY_NAMES: tuple[str, ...] = ("No priority", "Urgent", "High", "Medium", "Low")


def priority_label(priority: int) -> str:
    """Return the Linear name of a priority value (0-4)."""
    return PRIORITY_NAMES[priority]


def format_date(timestamp: datetime | None) -> str:
    """Format a timestamp as a date (e.g., "2024-01-15"). Returns "" if unset."""
    if timestamp is None:
        return ""
    return timestamp.date().isoformat()


def build_description(issue: SourceIssue, *, link_github: bool = True) -> str:
    """Build the Linear issue description.

    Args:
        issue: GitHub issue
        link_github: Prepend a quote line linking to the GitHub issue

    Returns:
        The description; the GitHub body unchanged when no link is requested
    """
    body = issue.body or ""
    if link_github:
        return f"> Imported from GitHub: {issue.url}\n\n{body}"
    return body


def build_payload(
    issue: SourceIssue,
    team_id: str,
    *,
    state_id: str | None = None,
    label_ids: Sequence[str] = (),
    priority: int = DEFAULT_PRIORITY,
    link_github: bool = True,
) -> ImportPayload:
    """Build the payload for creating the Linear issue."""
    return ImportPayload(
        team_id=team_id,
        title=issue.title,
        description=build_description(issue, link_github=link_github),
        priority=priority,
        state_id=state_id,
        label_ids=tuple(label_ids),
    )


def format_comment_body(comment: SourceComment) -> str:
    """Build a Linear comment body with an attribution header.

    Example: "**Comment by @octocat on 2024-01-15:**" followed by a blank line
    and the original body. Parts of the header without data are left out.
    """
    header = "**Comment"
    if comment.author:
        header += f" by @{comment.author}"
    if comment.created_at is not None:
        header += f" on {format_date(comment.created_at)}"
    header += ":**"
    return f"{header}\n\n{comment.body}"
