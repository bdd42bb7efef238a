"""Logging utilities for the Atlassian agent tools.

All package loggers live under the ``mcp-atlassian-agent`` namespace and share
a single stream handler installed on the root logger.
"""

import logging

LOGGER_NAME = "mcp-atlassian-agent"


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """
    Configure logging for the server process.

    Args:
        level: The minimum logging level to display (default: WARNING)

    Returns:
        The configured application logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Replace whatever handlers a previous call (or the MCP SDK) installed
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s - %(name)s - %(message)s"))
    root_logger.addHandler(handler)

    for logger_name in (LOGGER_NAME, "mcp.server", "mcp.server.lowlevel.server"):
        logging.getLogger(logger_name).setLevel(level)

    return logging.getLogger(LOGGER_NAME)


def mask_sensitive(value: str | None, keep_chars: int = 4) -> str:
    """Masks tokens and secrets for logging.

    Args:
        value: The string to mask
        keep_chars: Number of characters to keep visible at start and end

    Returns:
        Masked string with most characters replaced by asterisks
    """
    if not value:
        return "Not Provided"
    if len(value) <= keep_chars * 2:
        return "*" * len(value)
    return f"{value[:keep_chars]}{'*' * (len(value) - keep_chars * 2)}{value[-keep_chars:]}"


def log_config_param(
    logger: logging.Logger,
    param: str,
    value: str | None,
    sensitive: bool = False,
) -> None:
    """Logs a configuration parameter, masking it if sensitive."""
    display_value = mask_sensitive(value) if sensitive else (value or "Not Provided")
    logger.info(f"Atlassian {param}: {display_value}")
