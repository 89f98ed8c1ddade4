"""
Create the Linear issue and replay GitHub comments on it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import LinearAPIError, WriteFailedError
from .issue_builder import format_comment_body
from .models import CommentReplay

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import DestinationIssue, ImportPayload, SourceComment
    from .protocols import IssueDestination

logger: logging.Logger = logging.getLogger(__name__)


def create_issue(client: IssueDestination, payload: ImportPayload) -> DestinationIssue:
    """Create the Linear issue.

    Raises:
        WriteFailedError: If the request fails or Linear returns no issue
    """
    logger.info("Creating issue in Linear...")
    try:
        issue = client.create_issue(payload)
    except LinearAPIError as e:
        msg = f"Failed to create issue in Linear: {e}"
        raise WriteFailedError(msg) from e

    if issue is None or not issue.id:
        msg = "Failed to create issue in Linear"
        raise WriteFailedError(msg)

    logger.info(f"Created Linear issue {issue.identifier or issue.id}: {issue.title}")
    return issue


def replay_comments(client: IssueDestination, issue_id: str, comments: Sequence[SourceComment]) -> CommentReplay:
    """Create one Linear comment per GitHub comment, in order.

    A failing comment is logged and skipped; the remaining comments are still created.
    """
    imported = 0
    failures: list[str] = []

    if comments:
        logger.info(f"Found {len(comments)} comments")

    for position, comment in enumerate(comments, start=1):
        try:
            client.create_comment(issue_id, format_comment_body(comment))
        except LinearAPIError as e:
            author = f"@{comment.author}" if comment.author else "unknown author"
            warning = f"Could not import comment {position}/{len(comments)} by {author}: {e}"
            logger.warning(warning)
            failures.append(warning)
            continue

        imported += 1
        logger.debug(f"Imported comment {position}/{len(comments)}")

    return CommentReplay(imported=imported, failures=failures)
