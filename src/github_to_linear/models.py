"""Data models exchanged between GitHub, the import pipeline, and Linear.

Source models are snapshots of what GitHub returned and are never mutated.
Destination models carry only the Linear fields the importer needs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, NamedTuple

DEFAULT_LABEL_COLOR = "000000"
DEFAULT_PRIORITY = 3
MIN_PRIORITY = 0
MAX_PRIORITY = 4


@dataclass(frozen=True)
class SourceLabel:
    """A GitHub label."""

    name: str
    color: str | None = None  # Hex color without '#' prefix (e.g., "ff0000")


@dataclass(frozen=True)
class SourceIssue:
    """A GitHub issue as fetched at the start of the import."""

    number: int
    title: str
    body: str | None
    state: Literal["open", "closed"]
    url: str
    labels: tuple[SourceLabel, ...] = ()


@dataclass(frozen=True)
class SourceComment:
    """A comment on a GitHub issue."""

    body: str
    author: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class Team:
    """A Linear team."""

    id: str
    key: str
    name: str


@dataclass(frozen=True)
class WorkflowState:
    """A workflow state of a Linear team."""

    id: str
    name: str


@dataclass(frozen=True)
class DestinationLabel:
    """A Linear issue label."""

    id: str
    name: str


@dataclass(frozen=True)
class DestinationIssue:
    """A Linear issue created by the importer."""

    id: str
    url: str
    title: str
    identifier: str = ""


@dataclass(frozen=True)
class ImportPayload:
    """Everything needed to create the Linear issue in a single mutation."""

    team_id: str
    title: str
    description: str
    priority: int = DEFAULT_PRIORITY
    state_id: str | None = None
    label_ids: tuple[str, ...] = ()

    def to_input(self) -> dict[str, Any]:
        """Build the IssueCreateInput for the Linear GraphQL API."""
        issue_input: dict[str, Any] = {
            "teamId": self.team_id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
        }
        if self.state_id:
            issue_input["stateId"] = self.state_id
        if self.label_ids:
            issue_input["labelIds"] = list(self.label_ids)
        return issue_input


@dataclass
class ImportOptions:
    """Options for a single import run."""

    owner: str
    repo: str
    issue_number: int
    team: str
    api_key: str | None = None
    priority: int = DEFAULT_PRIORITY
    with_comments: bool = False
    with_labels: bool = False
    link_github: bool = True
    skip_confirmation: bool = False

    def __post_init__(self) -> None:
        if not MIN_PRIORITY <= self.priority <= MAX_PRIORITY:
            msg = f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}, got {self.priority}"
            raise ValueError(msg)


@dataclass
class ImportResult:
    """Result of a successful import."""

    id: str
    url: str
    title: str
    comments_imported: int = 0
    warnings: list[str] = field(default_factory=list)


class StateMapping(NamedTuple):
    """Result of mapping the GitHub state to a Linear workflow state."""

    state_id: str | None
    """Linear workflow state id, or None to let Linear apply the team default."""
    warning: str | None = None
    """Set when the workflow states could not be retrieved."""


class LabelReconciliation(NamedTuple):
    """Result of matching GitHub labels against Linear labels."""

    label_ids: list[str]
    """Linear label ids, one per resolved GitHub label, in source order."""
    created: list[str]
    """Names of the labels created in Linear during this run."""
    warning: str | None = None
    """Set when a label was skipped or reconciliation stopped early; label_ids holds the partial result."""


class CommentReplay(NamedTuple):
    """Result of copying GitHub comments to the Linear issue."""

    imported: int
    failures: list[str]
    """One warning message per comment that could not be created."""
