from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

import requests
from github import Auth, BadCredentialsException, Github, GithubException, UnknownObjectException

from . import utils
from .exceptions import AccessToolError, IssueNotFoundError, SourceUnavailableError
from .models import SourceComment, SourceIssue, SourceLabel

if TYPE_CHECKING:
    from github.Issue import Issue as GithubIssue

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)

GH_INSTALL_URL: Final[str] = "https://cli.github.com/"


def check_gh_cli() -> str:
    """Check that the gh CLI is installed and runs. Returns its version line."""
    try:
        output = utils.run_command(["gh", "--version"])
    except utils.CommandError as e:
        msg = f"gh CLI is not installed or not in PATH. Please install it from {GH_INSTALL_URL}"
        raise AccessToolError(msg) from e

    version = output.splitlines()[0] if output else "gh"
    logger.debug(f"Using {version}")
    return version


def get_token() -> str:
    """Get the GitHub token of the account gh is logged in with."""
    try:
        token = utils.run_command(["gh", "auth", "token"])
    except utils.CommandError as e:
        msg = f"gh CLI is not authenticated. Run 'gh auth login' first.\n{e}"
        raise SourceUnavailableError(msg) from e

    if not token:
        msg = "gh CLI returned an empty token. Run 'gh auth login' first."
        raise SourceUnavailableError(msg)
    return token


def get_client(token: str) -> Github:
    """Get a GitHub client using the token."""
    # Failures surface immediately instead of backing off
    return Github(auth=Auth.Token(token), retry=None)


class GitHubSource:
    """Reads issues and comments through the GitHub REST API."""

    def __init__(self, client: Github) -> None:
        self.client: Github = client
        # Issues already read, keyed by (owner, repo, number)
        self._issues: dict[tuple[str, str, int], GithubIssue] = {}

    def _get_issue(self, owner: str, repo: str, number: int) -> GithubIssue:
        key = (owner, repo, number)
        if key in self._issues:
            return self._issues[key]

        repo_path = f"{owner}/{repo}"
        try:
            gh_issue = self.client.get_repo(repo_path, lazy=True).get_issue(number)
        except GithubException as e:
            raise _translate_error(e, f"issue #{number} in {repo_path}") from e
        except requests.RequestException as e:
            msg = f"GitHub is not reachable: {e}"
            raise SourceUnavailableError(msg) from e

        self._issues[key] = gh_issue
        return gh_issue

    def fetch_issue(self, owner: str, repo: str, number: int) -> SourceIssue:
        """Fetch a single issue with its labels."""
        gh_issue = self._get_issue(owner, repo, number)
        labels = tuple(SourceLabel(name=label.name or "", color=label.color or None) for label in gh_issue.labels)
        issue = SourceIssue(
            number=gh_issue.number,
            title=gh_issue.title,
            body=gh_issue.body,
            state="closed" if gh_issue.state == "closed" else "open",
            url=gh_issue.html_url,
            labels=labels,
        )
        logger.debug(f"Fetched issue #{issue.number} ({issue.state}) with {len(labels)} labels")
        return issue

    def fetch_comments(self, owner: str, repo: str, number: int) -> list[SourceComment]:
        """Fetch all comments of an issue in chronological order."""
        gh_issue = self._get_issue(owner, repo, number)
        try:
            comments = [
                SourceComment(
                    body=comment.body or "",
                    author=comment.user.login if comment.user else None,
                    created_at=comment.created_at,
                )
                for comment in gh_issue.get_comments()
            ]
        except GithubException as e:
            raise _translate_error(e, f"comments of issue #{number} in {owner}/{repo}") from e
        except requests.RequestException as e:
            msg = f"GitHub is not reachable: {e}"
            raise SourceUnavailableError(msg) from e

        logger.debug(f"Fetched {len(comments)} comments for issue #{number}")
        return comments


def _translate_error(exc: GithubException, what: str) -> Exception:
    """Map a PyGithub exception to the import error taxonomy."""
    if isinstance(exc, UnknownObjectException) or exc.status == 404:  # noqa: PLR2004
        return IssueNotFoundError(f"GitHub {what} not found")
    if isinstance(exc, BadCredentialsException):
        return SourceUnavailableError(f"GitHub rejected the credentials while fetching {what}")
    return SourceUnavailableError(f"Failed to fetch GitHub {what}: {exc}")
