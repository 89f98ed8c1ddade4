from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Final, Self

import requests

from .exceptions import LinearAPIError, TeamNotFoundError
from .models import DestinationIssue, DestinationLabel, ImportPayload, StateMapping, Team, WorkflowState

if TYPE_CHECKING:
    from .protocols import IssueDestination

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

LINEAR_API_URL: Final[str] = "https://api.linear.app/graphql"
REQUEST_TIMEOUT_SECONDS: Final[int] = 30
PAGE_SIZE: Final[int] = 250

_UUID_RE: Final[re.Pattern[str]] = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)

# Workflow state names (lowercase) used for each GitHub state, in order of preference
CLOSED_STATE_NAMES: Final[tuple[str, ...]] = ("done", "completed")
OPEN_STATE_NAMES: Final[tuple[str, ...]] = ("backlog", "todo")

_TEAMS_QUERY = """
query Teams($first: Int!) {
    teams(first: $first) {
        nodes { id key name }
    }
}
"""

_WORKFLOW_STATES_QUERY = """
query WorkflowStates($teamId: ID!, $first: Int!) {
    workflowStates(first: $first, filter: { team: { id: { eq: $teamId } } }) {
        nodes { id name }
    }
}
"""

_ISSUE_LABELS_QUERY = """
query IssueLabels($first: Int!) {
    issueLabels(first: $first) {
        nodes { id name }
    }
}
"""

_CREATE_LABEL_MUTATION = """
mutation IssueLabelCreate($input: IssueLabelCreateInput!) {
    issueLabelCreate(input: $input) {
        success
        issueLabel { id name }
    }
}
"""

_CREATE_ISSUE_MUTATION = """
mutation IssueCreate($input: IssueCreateInput!) {
    issueCreate(input: $input) {
        success
        issue { id identifier url title }
    }
}
"""

_CREATE_COMMENT_MUTATION = """
mutation CommentCreate($input: CommentCreateInput!) {
    commentCreate(input: $input) {
        success
        comment { id }
    }
}
"""


def is_uuid(value: str) -> bool:
    """Check if a value has the shape of a Linear internal identifier."""
    return bool(_UUID_RE.match(value))


class LinearClient:
    """Minimal client for the Linear GraphQL API."""

    def __init__(self, api_key: str, *, session: requests.Session | None = None) -> None:
        self.session: requests.Session = session or requests.Session()
        self.session.headers.update({"Authorization": api_key, "Content-Type": "application/json"})

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def _make_graphql_request(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL request and return its data section."""
        payload = {"query": query, "variables": variables or {}}
        try:
            response = self.session.post(LINEAR_API_URL, json=payload, timeout=REQUEST_TIMEOUT_SECONDS)
        except requests.RequestException as e:
            msg = f"Linear API request failed: {e}"
            raise LinearAPIError(msg) from e

        if response.status_code == 401:  # noqa: PLR2004
            msg = "Linear API rejected the API key (HTTP 401)"
            raise LinearAPIError(msg)

        try:
            body: dict[str, Any] = response.json()
        except ValueError as e:
            msg = f"Linear API returned a non-JSON response (HTTP {response.status_code})"
            raise LinearAPIError(msg) from e

        # GraphQL errors may come with a 400 status, so check them before the status code
        if body.get("errors"):
            messages = "; ".join(str(error.get("message", error)) for error in body["errors"])
            msg = f"GraphQL errors: {messages}"
            raise LinearAPIError(msg)

        if not response.ok:
            msg = f"Linear API returned HTTP {response.status_code}"
            raise LinearAPIError(msg)

        return body.get("data") or {}

    def list_teams(self) -> list[Team]:
        data = self._make_graphql_request(_TEAMS_QUERY, {"first": PAGE_SIZE})
        nodes = data.get("teams", {}).get("nodes", [])
        return [Team(id=node["id"], key=node["key"], name=node["name"]) for node in nodes]

    def list_workflow_states(self, team_id: str) -> list[WorkflowState]:
        data = self._make_graphql_request(_WORKFLOW_STATES_QUERY, {"teamId": team_id, "first": PAGE_SIZE})
        nodes = data.get("workflowStates", {}).get("nodes", [])
        return [WorkflowState(id=node["id"], name=node["name"]) for node in nodes]

    def list_labels(self) -> list[DestinationLabel]:
        data = self._make_graphql_request(_ISSUE_LABELS_QUERY, {"first": PAGE_SIZE})
        nodes = data.get("issueLabels", {}).get("nodes", [])
        return [DestinationLabel(id=node["id"], name=node["name"]) for node in nodes]

    def create_label(self, name: str, color: str) -> DestinationLabel | None:
        data = self._make_graphql_request(_CREATE_LABEL_MUTATION, {"input": {"name": name, "color": color}})
        label = (data.get("issueLabelCreate") or {}).get("issueLabel")
        if not label:
            return None
        return DestinationLabel(id=label["id"], name=label["name"])

    def create_issue(self, payload: ImportPayload) -> DestinationIssue | None:
        data = self._make_graphql_request(_CREATE_ISSUE_MUTATION, {"input": payload.to_input()})
        issue = (data.get("issueCreate") or {}).get("issue")
        if not issue or not issue.get("id"):
            return None
        return DestinationIssue(
            id=issue["id"],
            url=issue.get("url", ""),
            title=issue.get("title", payload.title),
            identifier=issue.get("identifier", ""),
        )

    def create_comment(self, issue_id: str, body: str) -> None:
        data = self._make_graphql_request(_CREATE_COMMENT_MUTATION, {"input": {"issueId": issue_id, "body": body}})
        if not (data.get("commentCreate") or {}).get("success"):
            msg = f"Linear did not confirm the comment on issue {issue_id}"
            raise LinearAPIError(msg)


def get_client(api_key: str) -> LinearClient:
    """Get a Linear client using the API key."""
    return LinearClient(api_key)


def resolve_team(client: IssueDestination, team_key: str) -> str:
    """Resolve a team key (e.g. "ENG") or team id to the Linear team id.

    Raises:
        TeamNotFoundError: If no team has the given key
        LinearAPIError: If the teams cannot be listed
    """
    if is_uuid(team_key):
        return team_key

    logger.info(f"Resolving team key: {team_key}...")
    teams = client.list_teams()

    wanted = team_key.lower()
    team = next((t for t in teams if t.key.lower() == wanted), None)
    if team is None:
        raise TeamNotFoundError(team_key, teams)

    logger.info(f"Found team: {team.name} ({team.key})")
    return team.id


def map_state(client: IssueDestination, team_id: str, source_state: str) -> StateMapping:
    """Find the Linear workflow state matching a GitHub issue state.

    Closed issues map to "Done"/"Completed", everything else to "Backlog"/"Todo".
    Without a match, the issue is created in the team's default state.
    """
    try:
        states = client.list_workflow_states(team_id)
    except LinearAPIError as e:
        warning = f"Could not fetch workflow states: {e}"
        logger.warning(warning)
        return StateMapping(state_id=None, warning=warning)

    candidates = CLOSED_STATE_NAMES if source_state == "closed" else OPEN_STATE_NAMES
    state = next((s for s in states if s.name.lower() in candidates), None)
    if state is None:
        logger.info(f"No workflow state matches {source_state!r}; using the team default")
        return StateMapping(state_id=None)

    logger.debug(f"Mapped GitHub state {source_state!r} to workflow state {state.name!r}")
    return StateMapping(state_id=state.id)
