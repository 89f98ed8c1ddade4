"""Protocols defining the contracts for the source and destination systems.

The import pipeline separates concerns into three parts:

1. IssueSource: Reads one issue and its comments (GitHub)
2. IssueDestination: Looks up and creates data in the destination (Linear)
3. GithubToLinearImporter: Orchestrates the flow and decides which failures are fatal

This separation allows:
- Testing the pipeline with in-memory fakes instead of live services
- Clear boundaries for service-specific logic (REST vs. GraphQL, error types)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .models import (
        DestinationIssue,
        DestinationLabel,
        ImportPayload,
        SourceComment,
        SourceIssue,
        Team,
        WorkflowState,
    )


class IssueSource(Protocol):
    """Protocol for reading an issue from the source system.

    Implementations surface whatever failure the remote call produces:

    Raises:
        SourceUnavailableError: If the service is unreachable or not authenticated
        IssueNotFoundError: If the issue does not exist
    """

    def fetch_issue(self, owner: str, repo: str, number: int) -> SourceIssue:
        """Fetch a single issue with its labels."""
        ...

    def fetch_comments(self, owner: str, repo: str, number: int) -> list[SourceComment]:
        """Fetch all comments of an issue in the order the service returns them."""
        ...


class IssueDestination(Protocol):
    """Protocol for the destination system.

    All methods raise LinearAPIError when the request fails.
    """

    def list_teams(self) -> list[Team]:
        """Return all teams in the workspace."""
        ...

    def list_workflow_states(self, team_id: str) -> list[WorkflowState]:
        """Return the workflow states of one team."""
        ...

    def list_labels(self) -> list[DestinationLabel]:
        """Return the issue labels of the workspace."""
        ...

    def create_label(self, name: str, color: str) -> DestinationLabel | None:
        """Create an issue label and return it, or None if the service returned none."""
        ...

    def create_issue(self, payload: ImportPayload) -> DestinationIssue | None:
        """Create an issue and return it, or None if the service returned none."""
        ...

    def create_comment(self, issue_id: str, body: str) -> None:
        """Add a comment to an issue."""
        ...

    def close(self) -> None:
        """Release the connection to the service."""
        ...
