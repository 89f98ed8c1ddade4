"""
Utility functions for the GitHub to Linear import tool.
"""

from __future__ import annotations

import logging
import subprocess
from subprocess import CompletedProcess

LOG_FILE = "github_to_linear.log"


class CommandError(Exception):
    """Raised when an external command cannot be run or exits non-zero."""

    def __init__(self, message: str, *, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode: int | None = returncode
        self.stderr: str = stderr


def setup_logging(*, verbosity: int = 0) -> None:
    """Configure logging for the import process.

    The console shows info by default and debug with any verbosity. The log
    file always receives debug output.
    """
    console_level = logging.DEBUG if verbosity else logging.INFO

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    file_handler = logging.FileHandler(LOG_FILE, mode="a")
    file_handler.setLevel(logging.DEBUG)

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[console_handler, file_handler],
    )


def run_command(args: list[str]) -> str:
    """Run an external command and return its stripped standard output."""
    try:
        result: CompletedProcess[str] = subprocess.run(  # noqa: S603
            args, capture_output=True, text=True, check=True
        )
    except FileNotFoundError as e:
        msg = f"Command not found: {args[0]}"
        raise CommandError(msg) from e
    except subprocess.CalledProcessError as e:
        msg = (
            f"Command '{' '.join(args)}' failed.\n"
            f"Output: {e.stdout.strip()}\n"
            f"Error: {e.stderr.strip()}\n"
            f"Return code: {e.returncode}"
        )
        raise CommandError(msg, returncode=e.returncode, stderr=e.stderr) from e

    return result.stdout.strip()
