"""Shared helpers for CLI commands."""

from importlib.metadata import PackageNotFoundError, version

import click

from ..auto_merger.events import load_event_payload, pull_request_numbers_for_event
from ..config import MergePolicy
from ..utils.logging import log_info

TOKEN_ENVVARS = ["INPUT_TOKEN", "GITHUB_TOKEN", "GH_TOKEN"]


def get_version() -> str:
    """Get the installed version of the package.

    Returns
    -------
    str
        Version string from package metadata.

    """
    try:
        return version("pr-automerge")
    except PackageNotFoundError:
        return "unknown"


def token_option(f):
    """Add the ``--token`` option read from the action or gh environment."""
    return click.option(
        "--token",
        envvar=TOKEN_ENVVARS,
        required=False,
        help="GitHub token (default: $INPUT_TOKEN, $GITHUB_TOKEN or $GH_TOKEN)",
    )(f)


def repository_option(f):
    """Add the ``--repository`` option defaulting to ``$GITHUB_REPOSITORY``."""
    return click.option(
        "--repository",
        envvar="GITHUB_REPOSITORY",
        required=False,
        help="Repository in owner/repo format (default: $GITHUB_REPOSITORY)",
    )(f)


def resolve_pull_request_numbers(
    policy: MergePolicy, event_name: str | None, event_path: str | None
) -> list[int]:
    """Determine which pull requests to process.

    An explicit ``pull-request`` input takes precedence over the
    triggering event.

    Parameters
    ----------
    policy : MergePolicy
        Parsed merge policy.
    event_name : str or None
        Name of the triggering event.
    event_path : str or None
        Path to the event payload file.

    Returns
    -------
    list[int]
        Pull request numbers to process.

    Raises
    ------
    OSError
        If the event payload file cannot be read.
    json.JSONDecodeError
        If the event payload is not valid JSON.

    """
    if policy.pull_request is not None:
        return [policy.pull_request]

    payload = load_event_payload(event_path) if event_path else {}
    numbers = pull_request_numbers_for_event(event_name, payload)
    if numbers:
        log_info(f"Pull requests from '{event_name}' event: {numbers}")
    return numbers
