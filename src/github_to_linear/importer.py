"""
Import orchestrator for copying one GitHub issue to Linear.

The import proceeds in steps; only some of them can abort the run:

1. Check the gh CLI                              fatal
2. Resolve the Linear API key                    fatal
3. Resolve the team key to a team id             fatal
4. Fetch the GitHub issue                        fatal
5. Ask for confirmation (unless skipped)         declining ends the run, not an error
6. Map the GitHub state to a workflow state      best-effort
7. Find or create labels (if requested)          best-effort
8. Create the Linear issue                       fatal
9. Fetch and replay comments (if requested)      fetch fatal, each comment best-effort

Best-effort steps return a result with an optional warning; fatal steps raise an
IssueImportError subclass.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from . import github_utils as ghu
from . import linear_utils as linu
from .config import resolve_api_key
from .issue_builder import build_payload
from .labels import reconcile_labels
from .models import ImportResult
from .writer import create_issue, replay_comments

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from .models import ImportOptions, SourceIssue
    from .protocols import IssueDestination, IssueSource

    ConfirmCallback = Callable[[SourceIssue, ImportOptions], bool]

# Module-wide logger
logger: logging.Logger = logging.getLogger(__name__)


def _default_source() -> IssueSource:
    return ghu.GitHubSource(ghu.get_client(ghu.get_token()))


class GithubToLinearImporter:
    """Imports a single GitHub issue into Linear.

    Usage:
        importer = GithubToLinearImporter(options, confirm=ask_user)
        result = importer.run()  # None if the user declined

    Args:
        options: What to import and how
        confirm: Called with the fetched issue before anything is written;
            required unless options.skip_confirmation is set
        source_factory: Builds the GitHub reader (after the gh CLI check)
        client_factory: Builds the Linear client from the API key
        environ: Environment used to look up LINEAR_API_KEY (default: os.environ)
    """

    def __init__(
        self,
        options: ImportOptions,
        *,
        confirm: ConfirmCallback | None = None,
        source_factory: Callable[[], IssueSource] = _default_source,
        client_factory: Callable[[str], IssueDestination] = linu.get_client,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        if confirm is None and not options.skip_confirmation:
            msg = "A confirm callback is required unless skip_confirmation is set"
            raise ValueError(msg)

        self.options: ImportOptions = options
        self._confirm: ConfirmCallback | None = confirm
        self._source_factory: Callable[[], IssueSource] = source_factory
        self._client_factory: Callable[[str], IssueDestination] = client_factory
        self._environ: Mapping[str, str] | None = environ

        self.warnings: list[str] = []

    def run(self) -> ImportResult | None:
        """Execute the import.

        Returns:
            ImportResult for the created Linear issue, or None if the import was cancelled

        Raises:
            IssueImportError: On any fatal error
        """
        options = self.options
        self.warnings = []

        ghu.check_gh_cli()
        api_key = resolve_api_key(options.api_key, self._environ)

        client = self._client_factory(api_key)
        try:
            return self._import(client)
        finally:
            client.close()

    def _import(self, client: IssueDestination) -> ImportResult | None:
        options = self.options
        team_id = linu.resolve_team(client, options.team)

        logger.info(f"Fetching GitHub issue #{options.issue_number} from {options.owner}/{options.repo}...")
        source = self._source_factory()
        issue = source.fetch_issue(options.owner, options.repo, options.issue_number)
        logger.info(f"Issue title: {issue.title}")

        if not options.skip_confirmation and self._confirm is not None and not self._confirm(issue, options):
            logger.info("Import cancelled.")
            return None

        state = linu.map_state(client, team_id, issue.state)
        self._record(state.warning)

        label_ids: list[str] = []
        if options.with_labels and issue.labels:
            labels = reconcile_labels(client, issue.labels)
            self._record(labels.warning)
            label_ids = labels.label_ids

        payload = build_payload(
            issue,
            team_id,
            state_id=state.state_id,
            label_ids=label_ids,
            priority=options.priority,
            link_github=options.link_github,
        )
        linear_issue = create_issue(client, payload)

        comments_imported = 0
        if options.with_comments:
            logger.info("Fetching comments...")
            comments = source.fetch_comments(options.owner, options.repo, options.issue_number)
            replay = replay_comments(client, linear_issue.id, comments)
            self.warnings.extend(replay.failures)
            comments_imported = replay.imported

        return ImportResult(
            id=linear_issue.id,
            url=linear_issue.url,
            title=linear_issue.title,
            comments_imported=comments_imported,
            warnings=list(self.warnings),
        )

    def _record(self, warning: str | None) -> None:
        if warning:
            self.warnings.append(warning)


def import_issue(options: ImportOptions, *, confirm: ConfirmCallback | None = None) -> ImportResult | None:
    """Import a GitHub issue to Linear with the default GitHub and Linear clients."""
    return GithubToLinearImporter(options, confirm=confirm).run()
