"""Configuration and credential lookup for the import tool."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Final

from dotenv import load_dotenv

from .exceptions import MissingCredentialError

if TYPE_CHECKING:
    from collections.abc import Mapping

API_KEY_ENV_VAR: Final[str] = "LINEAR_API_KEY"
API_KEY_SETTINGS_URL: Final[str] = "https://linear.app/settings/api"


def load_environment() -> None:
    """Load variables from a .env file in the working directory, if present.

    Variables already set in the process environment take precedence.
    """
    load_dotenv()


def resolve_api_key(explicit: str | None, environ: Mapping[str, str] | None = None) -> str:
    """Return the Linear API key: explicit argument first, then LINEAR_API_KEY.

    Raises:
        MissingCredentialError: If neither source provides a non-empty key
    """
    if environ is None:
        environ = os.environ

    for candidate in (explicit, environ.get(API_KEY_ENV_VAR)):
        if candidate:
            return candidate

    msg = (
        "Linear API key is required. Please provide it via:\n"
        "  1. Command line: --linear-key YOUR_KEY\n"
        f"  2. Environment variable: {API_KEY_ENV_VAR}=YOUR_KEY\n"
        "\n"
        f"Get your API key from: {API_KEY_SETTINGS_URL}"
    )
    raise MissingCredentialError(msg)
