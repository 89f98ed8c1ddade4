"""
Custom exception classes for the GitHub to Linear import tool.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import Team


class IssueImportError(Exception):
    """Base exception for import errors."""


class ConfigurationError(IssueImportError):
    """Raised when the local setup prevents an import from starting."""


class MissingCredentialError(ConfigurationError):
    """Raised when no Linear API key was supplied."""


class AccessToolError(ConfigurationError):
    """Raised when the gh CLI is missing or not working."""


class SourceUnavailableError(IssueImportError):
    """Raised when GitHub cannot be reached or the access is not authenticated."""


class IssueNotFoundError(IssueImportError):
    """Raised when the GitHub issue (or its comments) does not exist."""


class LinearAPIError(IssueImportError):
    """Raised when a request to the Linear API fails."""


class WriteFailedError(IssueImportError):
    """Raised when the Linear issue could not be created."""


class TeamNotFoundError(IssueImportError):
    """Raised when a team key does not match any team in the Linear workspace."""

    def __init__(self, team_key: str, available_teams: Sequence[Team]) -> None:
        self.team_key: str = team_key
        self.available_teams: list[Team] = list(available_teams)
        listing = "\n".join(f"  - {team.key}: {team.name}" for team in self.available_teams)
        msg = (
            f'Team not found: "{team_key}"\n\n'
            f"Available teams:\n{listing}\n\n"
            "Please use one of the team keys above."
        )
        super().__init__(msg)
