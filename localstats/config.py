"""
Configuration management for git-local-stats.

Loads settings from environment variables (and a .env file).
"""

import os
from dotenv import load_dotenv

from localstats.errors import ConfigError
from localstats.repo_scanner import EXCLUDED_DIRS

# Load .env file from project root
load_dotenv()

GITSTATS_EMAIL = os.getenv("GITSTATS_EMAIL", "")
NO_COLOR = bool(os.getenv("GITSTATS_NO_COLOR") or os.getenv("NO_COLOR"))
EXTRA_EXCLUDE_DIRS = os.getenv("GITSTATS_EXCLUDE_DIRS", "")


def get_exclude_dirs() -> set[str]:
    """Directory names the scanner skips: the defaults plus GITSTATS_EXCLUDE_DIRS."""
    extra = {name.strip() for name in EXTRA_EXCLUDE_DIRS.split(",") if name.strip()}
    return EXCLUDED_DIRS | extra


def validate_config(email: str | None) -> str:
    """
    Validate that a target author email is configured.

    Args:
        email: Email from the command line, or None to use GITSTATS_EMAIL

    Returns:
        The email to scan for
    """
    email = (email or GITSTATS_EMAIL or "").strip()

    if not email or email == "you@example.com":
        raise ConfigError(
            "Missing required configuration: GITSTATS_EMAIL\n"
            "Pass --email or copy .env.example to .env and fill in your commit email.\n"
            "Find it with: git config user.email"
        )

    return email
