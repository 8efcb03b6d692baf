"""Tests for trigger event handling."""

import json
from unittest.mock import patch

from pr_automerge.auto_merger.events import (
    load_event_payload,
    pull_request_numbers_for_event,
)


def check_run_payload(conclusion="success", numbers=(12,)):
    """Build a check_run webhook payload."""
    return {
        "action": "completed",
        "check_run": {
            "id": 99,
            "conclusion": conclusion,
            "pull_requests": [{"number": number} for number in numbers],
        },
    }


def test_successful_check_run_yields_pull_requests():
    """Test that a successful check run queues its pull requests."""
    numbers = pull_request_numbers_for_event("check_run", check_run_payload(numbers=(12, 15)))

    assert numbers == [12, 15]


def test_unsuccessful_check_run_is_ignored():
    """Test that failed check runs do not trigger merging."""
    with patch("pr_automerge.auto_merger.events.log_info") as mock_info:
        numbers = pull_request_numbers_for_event(
            "check_run", check_run_payload(conclusion="failure")
        )

    assert numbers == []
    mock_info.assert_called_once_with(
        "Conclusion for check suite 99 is failure, not attempting to merge."
    )


def test_check_run_without_pull_requests():
    """Test a check run on a branch without pull requests."""
    assert pull_request_numbers_for_event("check_run", check_run_payload(numbers=())) == []


def test_incomplete_check_run_payload():
    """Test payloads missing the action or check run are ignored."""
    assert pull_request_numbers_for_event("check_run", {}) == []
    assert pull_request_numbers_for_event("check_run", {"action": "completed"}) == []


def test_unsupported_event_warns():
    """Test other events are rejected with a warning."""
    with patch("pr_automerge.auto_merger.events.log_warning") as mock_warning:
        numbers = pull_request_numbers_for_event("push", {"ref": "refs/heads/main"})

    assert numbers == []
    mock_warning.assert_called_once_with(
        "This action does not support the 'push' event."
    )


def test_load_event_payload(tmp_path):
    """Test reading the event payload file."""
    event_file = tmp_path / "event.json"
    event_file.write_text(json.dumps(check_run_payload()))

    assert load_event_payload(event_file) == check_run_payload()
