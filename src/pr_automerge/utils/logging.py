"""Console logging helpers built on Rich.

All log output goes to stderr so that stdout stays free for
machine-readable command output.
"""

import os

from rich.console import Console
from rich.text import Text

_console: Console | None = None


def get_console() -> Console:
    """Return the shared stderr console, creating it on first use.

    Returns
    -------
    Console
        Rich console writing to stderr.

    """
    global _console  # noqa: PLW0603
    if _console is None:
        _console = Console(stderr=True, highlight=False, soft_wrap=True)
    return _console


def _log(glyph: str, style: str, message: str) -> None:
    # Message bodies carry logins and labels like "github-actions[bot]",
    # so they are never parsed as markup.
    get_console().print(Text.assemble((glyph, style), " ", message))


def is_debug_enabled() -> bool:
    """Check whether debug logging was requested via the environment."""
    return "1" in (
        os.environ.get("RUNNER_DEBUG"),
        os.environ.get("PR_AUTOMERGE_DEBUG"),
    )


def log_debug(message: str) -> None:
    """Log a debug message when debug logging is enabled."""
    if is_debug_enabled():
        _log("·", "dim", message)


def log_info(message: str) -> None:
    """Log an informational message."""
    _log("ℹ", "bold blue", message)


def log_success(message: str) -> None:
    """Log a success message."""
    _log("✓", "bold green", message)


def log_warning(message: str) -> None:
    """Log a warning message."""
    _log("⚠", "bold yellow", message)


def log_error(message: str) -> None:
    """Log an error message."""
    _log("✗", "bold red", message)
