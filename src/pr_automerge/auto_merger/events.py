"""Pull request numbers from GitHub Actions trigger events."""

import json
from pathlib import Path
from typing import Any

from ..utils.logging import log_debug, log_info, log_warning


def load_event_payload(path: str | Path) -> dict[str, Any]:
    """Read the webhook payload of the triggering event.

    Parameters
    ----------
    path : str or Path
        Path to the event JSON file (``GITHUB_EVENT_PATH``).

    Returns
    -------
    dict[str, Any]
        Parsed payload.

    """
    with open(path, "r") as f:
        return json.load(f)


def pull_request_numbers_for_check_run(payload: dict[str, Any]) -> list[int]:
    """Return the pull requests a successful check run belongs to."""
    log_debug("Handling check_run event.")

    action = payload.get("action")
    check_run = payload.get("check_run")
    if not action or not check_run:
        return []

    conclusion = check_run.get("conclusion")
    if conclusion != "success":
        log_info(
            f"Conclusion for check suite {check_run.get('id')} is {conclusion}, "
            "not attempting to merge."
        )
        return []

    return [
        int(pull_request["number"])
        for pull_request in check_run.get("pull_requests") or []
        if pull_request.get("number") is not None
    ]


def pull_request_numbers_for_event(
    event_name: str | None, payload: dict[str, Any]
) -> list[int]:
    """Resolve which pull requests a trigger event asks to merge.

    Parameters
    ----------
    event_name : str or None
        Name of the triggering event (``GITHUB_EVENT_NAME``).
    payload : dict[str, Any]
        Event payload.

    Returns
    -------
    list[int]
        Pull request numbers to process, possibly empty.

    """
    if event_name == "check_run":
        return pull_request_numbers_for_check_run(payload)

    log_warning(f"This action does not support the '{event_name}' event.")
    return []
