"""
Pytest configuration and fixtures.

Provides in-memory stand-ins for Linear and GitHub so that the import pipeline
can be tested without network access.
"""

from __future__ import annotations

import itertools
from typing import TYPE_CHECKING

import pytest

from github_to_linear.exceptions import LinearAPIError
from github_to_linear.models import (
    DestinationIssue,
    DestinationLabel,
    SourceComment,
    SourceIssue,
    Team,
    WorkflowState,
)

if TYPE_CHECKING:
    from github_to_linear.models import ImportPayload


class FakeLinearClient:
    """In-memory Linear workspace recording every call made to it."""

    def __init__(self) -> None:
        self.teams: list[Team] = [
            Team(id="team-eng", key="ENG", name="Engineering"),
            Team(id="team-prod", key="PROD", name="Product"),
        ]
        self.states: dict[str, list[WorkflowState]] = {
            "team-eng": [
                WorkflowState(id="state-backlog", name="Backlog"),
                WorkflowState(id="state-todo", name="Todo"),
                WorkflowState(id="state-progress", name="In Progress"),
                WorkflowState(id="state-done", name="Done"),
            ],
        }
        self.labels: list[DestinationLabel] = []
        self.created_labels: list[tuple[str, str]] = []
        self.created_issues: list[ImportPayload] = []
        self.comments: list[tuple[str, str]] = []
        self.calls: list[str] = []
        self.closed: bool = False

        # Failure injection
        self.fail_list_states: bool = False
        self.fail_list_labels: bool = False
        self.fail_create_label_names: set[str] = set()
        self.no_label_names: set[str] = set()
        self.fail_create_issue: bool = False
        self.return_no_issue: bool = False
        self.fail_comment_numbers: set[int] = set()

        self._ids = itertools.count(1)
        self._comment_attempts = 0

    def list_teams(self) -> list[Team]:
        self.calls.append("list_teams")
        return list(self.teams)

    def list_workflow_states(self, team_id: str) -> list[WorkflowState]:
        self.calls.append("list_workflow_states")
        if self.fail_list_states:
            msg = "workflow states unavailable"
            raise LinearAPIError(msg)
        return list(self.states.get(team_id, []))

    def list_labels(self) -> list[DestinationLabel]:
        self.calls.append("list_labels")
        if self.fail_list_labels:
            msg = "labels unavailable"
            raise LinearAPIError(msg)
        return list(self.labels)

    def create_label(self, name: str, color: str) -> DestinationLabel | None:
        self.calls.append("create_label")
        if name in self.fail_create_label_names:
            msg = f"cannot create {name}"
            raise LinearAPIError(msg)
        if name in self.no_label_names:
            return None
        label = DestinationLabel(id=f"label-{next(self._ids)}", name=name)
        self.labels.append(label)
        self.created_labels.append((name, color))
        return label

    def create_issue(self, payload: ImportPayload) -> DestinationIssue | None:
        self.calls.append("create_issue")
        if self.fail_create_issue:
            msg = "issue creation rejected"
            raise LinearAPIError(msg)
        self.created_issues.append(payload)
        if self.return_no_issue:
            return None
        return DestinationIssue(
            id="issue-1", url="https://linear.app/acme/issue/ENG-1", title=payload.title, identifier="ENG-1"
        )

    def create_comment(self, issue_id: str, body: str) -> None:
        self.calls.append("create_comment")
        self._comment_attempts += 1
        if self._comment_attempts in self.fail_comment_numbers:
            msg = "comment rejected"
            raise LinearAPIError(msg)
        self.comments.append((issue_id, body))

    def close(self) -> None:
        self.closed = True


class FakeSource:
    """GitHub stand-in returning a fixed issue and comments."""

    def __init__(self, issue: SourceIssue, comments: list[SourceComment] | None = None) -> None:
        self.issue: SourceIssue = issue
        self.comments: list[SourceComment] = comments or []
        self.fetched_comments: bool = False

    def fetch_issue(self, owner: str, repo: str, number: int) -> SourceIssue:
        return self.issue

    def fetch_comments(self, owner: str, repo: str, number: int) -> list[SourceComment]:
        self.fetched_comments = True
        return list(self.comments)


@pytest.fixture
def linear() -> FakeLinearClient:
    return FakeLinearClient()


@pytest.fixture
def open_issue() -> SourceIssue:
    return SourceIssue(
        number=42,
        title="Fix crash",
        body="See logs",
        state="open",
        url="https://github.com/acme/app/issues/42",
    )
