"""Environment flag helpers."""

import os

TRUTHY_VALUES = ("true", "1", "yes", "y", "on")


def is_env_truthy(name: str, default: str = "false") -> bool:
    """Return True if the environment variable holds a truthy flag value."""
    return os.getenv(name, default).lower() in TRUTHY_VALUES


def is_read_only_mode() -> bool:
    """Check if the server is running in read-only mode.

    Read-only mode hides and blocks every tool tagged ``write`` (issue and
    page creation, summary updates) while leaving lookups available.

    Returns:
        True if READ_ONLY_MODE is enabled, False otherwise
    """
    return is_env_truthy("READ_ONLY_MODE")
