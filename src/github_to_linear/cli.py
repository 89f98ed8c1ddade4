"""
Command-line interface for the GitHub to Linear import tool.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from . import __version__
from .config import load_environment
from .exceptions import IssueImportError
from .importer import GithubToLinearImporter
from .issue_builder import priority_label
from .models import DEFAULT_PRIORITY, MAX_PRIORITY, MIN_PRIORITY, ImportOptions
from .utils import setup_logging

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import ImportResult, SourceIssue

logger = logging.getLogger(__name__)

_RULE = "─" * 57


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(prog="github-to-linear", description="Import a single GitHub issue to Linear")
    _ = parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)
    import_parser = subparsers.add_parser("import", help="Import a GitHub issue to Linear")

    _ = import_parser.add_argument("--owner", "-o", required=True, help="GitHub repository owner")
    _ = import_parser.add_argument("--repo", "-r", required=True, help="GitHub repository name")
    _ = import_parser.add_argument("--issue", "-i", required=True, type=int, help="GitHub issue number")
    _ = import_parser.add_argument("--team", "-t", required=True, help="Linear team key (e.g., ENG, PROD) or team id")
    _ = import_parser.add_argument(
        "--linear-key", "-k", dest="linear_key", help="Linear API key (overrides LINEAR_API_KEY env var)"
    )
    _ = import_parser.add_argument(
        "--priority",
        "-p",
        type=int,
        choices=range(MIN_PRIORITY, MAX_PRIORITY + 1),
        default=DEFAULT_PRIORITY,
        help="Priority (0-4: No priority, Urgent, High, Medium, Low; default: 3)",
    )
    _ = import_parser.add_argument("--with-comments", action="store_true", help="Import comments as well")
    _ = import_parser.add_argument("--with-labels", action="store_true", help="Import labels as Linear labels")
    _ = import_parser.add_argument(
        "--link-github",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Link to the original GitHub issue (default: enabled)",
    )
    _ = import_parser.add_argument("--yes", "-y", action="store_true", help="Skip confirmation prompt")
    _ = import_parser.add_argument(
        "--verbose", "-v", action="count", default=0, help="Show debug output on the console"
    )

    return parser.parse_args(argv)


def _print_preview(issue: SourceIssue, options: ImportOptions) -> None:
    labels = ", ".join(label.name for label in issue.labels if label.name) or "None"
    print("\nIssue Preview:")
    print(_RULE)
    print(f"Title: {issue.title}")
    print(f"State: {issue.state}")
    print(f"URL: {issue.url}")
    print(f"Labels: {labels}")
    print(f"Priority: {priority_label(options.priority)}")
    print(f"Import comments: {'Yes' if options.with_comments else 'No'}")
    print(f"Import labels: {'Yes' if options.with_labels else 'No'}")
    print(_RULE)


def confirm_import(issue: SourceIssue, options: ImportOptions) -> bool:
    """Show a preview of the issue and ask whether to import it."""
    _print_preview(issue, options)
    try:
        answer = input("\nImport this issue to Linear? [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def _print_result(result: ImportResult) -> None:
    print("Issue imported successfully!")
    print(f"Linear URL: {result.url}")
    print(f"Linear ID: {result.id}")
    if result.warnings:
        print(f"Completed with {len(result.warnings)} warning(s):")
        for warning in result.warnings:
            print(f"  - {warning}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point."""
    args = parse_arguments(argv)

    verbosity: int = getattr(args, "verbose", 0)
    setup_logging(verbosity=verbosity)
    load_environment()

    try:
        options = ImportOptions(
            owner=args.owner,
            repo=args.repo,
            issue_number=args.issue,
            team=args.team,
            api_key=args.linear_key,
            priority=args.priority,
            with_comments=args.with_comments,
            with_labels=args.with_labels,
            link_github=args.link_github,
            skip_confirmation=args.yes,
        )
        result = GithubToLinearImporter(options, confirm=confirm_import).run()
    except IssueImportError as e:
        logger.debug("Import failed", exc_info=True)
        print(f"Error importing issue: {e}", file=sys.stderr)
        sys.exit(1)

    if result is None:
        print("Import cancelled.")
        sys.exit(0)

    _print_result(result)
    sys.exit(0)
