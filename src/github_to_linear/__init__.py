"""
GitHub to Linear Import Tool

Imports a single GitHub issue into Linear, translating its state, labels and
comments into their Linear equivalents.
"""

from __future__ import annotations

# Package version (defined before the imports below, which read it)
__version__ = "0.1.0"

from .cli import main  # noqa: E402
from .exceptions import (  # noqa: E402
    IssueImportError,
    MissingCredentialError,
    SourceUnavailableError,
    TeamNotFoundError,
    WriteFailedError,
)
from .importer import GithubToLinearImporter, import_issue  # noqa: E402
from .models import ImportOptions, ImportResult  # noqa: E402
from .utils import setup_logging  # noqa: E402

# Public API
__all__ = [
    "GithubToLinearImporter",
    "ImportOptions",
    "ImportResult",
    "IssueImportError",
    "MissingCredentialError",
    "SourceUnavailableError",
    "TeamNotFoundError",
    "WriteFailedError",
    "import_issue",
    "main",
    "setup_logging",
]
