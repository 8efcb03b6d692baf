"""Tests for CLI functionality."""

import json
from importlib.metadata import PackageNotFoundError
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from pr_automerge._cli.main import cli
from pr_automerge._cli.utils import get_version, resolve_pull_request_numbers
from pr_automerge.auto_merger.errors import GitHubAPIError
from pr_automerge.auto_merger.models import MergeOutcome, Review
from pr_automerge.auto_merger.queue_manager import QueueResult
from pr_automerge.config import MergePolicy

ENVVARS = [
    "INPUT_TOKEN",
    "GITHUB_TOKEN",
    "GH_TOKEN",
    "GITHUB_REPOSITORY",
    "GITHUB_EVENT_NAME",
    "GITHUB_EVENT_PATH",
    "INPUT_MERGE-METHOD",
    "INPUT_SQUASH-TITLE",
    "INPUT_DO-NOT-MERGE-LABELS",
    "INPUT_PULL-REQUEST",
    "INPUT_PULL-REQUEST-AUTHOR-ASSOCIATIONS",
    "INPUT_REVIEW-AUTHOR-ASSOCIATIONS",
    "INPUT_DRY-RUN",
    "INPUT_DELETE-ON-MERGE",
    "INPUT_MAX-TRIES",
]


@pytest.fixture
def invoke():
    """Invoke the CLI with a clean GitHub Actions environment."""

    def _invoke(args, **env):
        runner = CliRunner()
        environment = {name: None for name in ENVVARS}
        environment.update({"GITHUB_TOKEN": "token", "GITHUB_REPOSITORY": "o/r"})
        environment.update(env)
        return runner.invoke(cli, args, env=environment)

    return _invoke


@pytest.fixture
def mock_manager():
    """Patch the queue manager used by the merge command."""
    with patch("pr_automerge._cli.commands.merge.QueueManager") as manager_class:
        manager = MagicMock()
        manager.automerge_pull_requests.return_value = QueueResult(
            outcomes={42: MergeOutcome.MERGED}
        )
        manager_class.return_value = manager
        yield manager_class


def test_get_version_installed():
    """Test get_version returns version string when package is installed."""
    with patch("pr_automerge._cli.utils.version") as mock_version:
        mock_version.return_value = "0.1.0"
        assert get_version() == "0.1.0"
        mock_version.assert_called_once_with("pr-automerge")


def test_get_version_not_installed():
    """Test get_version returns 'unknown' when package is not installed."""
    with patch("pr_automerge._cli.utils.version") as mock_version:
        mock_version.side_effect = PackageNotFoundError()
        assert get_version() == "unknown"


def test_cli_version_flag(invoke):
    """Test that --version outputs the version and exits."""
    result = invoke(["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == f"pr-automerge {get_version()}"


def test_cli_help_lists_commands(invoke):
    """Test that the group help lists subcommands."""
    result = invoke(["--help"])

    assert result.exit_code == 0
    assert "merge" in result.output
    assert "reviews" in result.output


class TestMergeCommand:
    """Test the merge command."""

    def test_merges_explicit_pull_request(self, invoke, mock_manager):
        """Test an explicit pull request is queued."""
        result = invoke(["merge", "--pull-request", "42"])

        assert result.exit_code == 0
        mock_manager.return_value.automerge_pull_requests.assert_called_once_with([42])
        kwargs = mock_manager.call_args.kwargs
        assert kwargs["repo"].full_name == "o/r"
        assert kwargs["policy"].pull_request == 42

    def test_reads_action_inputs_from_environment(self, invoke, mock_manager):
        """Test that INPUT_* variables configure the policy."""
        result = invoke(
            ["merge"],
            **{
                "INPUT_PULL-REQUEST": "7",
                "INPUT_MERGE-METHOD": "squash",
                "INPUT_SQUASH-TITLE": "true",
                "INPUT_DRY-RUN": "true",
            },
        )

        assert result.exit_code == 0
        policy = mock_manager.call_args.kwargs["policy"]
        assert policy.pull_request == 7
        assert policy.merge_method == "squash"
        assert policy.squash_title is True
        assert policy.dry_run is True

    def test_unknown_merge_method_fails_before_processing(self, invoke, mock_manager):
        """Test configuration errors exit 1 without processing."""
        result = invoke(["merge", "--pull-request", "42", "--merge-method", "ff"])

        assert result.exit_code == 1
        mock_manager.assert_not_called()

    def test_invalid_pull_request_number(self, invoke, mock_manager):
        """Test an unparseable pull request number exits 1."""
        result = invoke(["merge", "--pull-request", "forty-two"])

        assert result.exit_code == 1
        mock_manager.assert_not_called()

    def test_missing_token(self, invoke, mock_manager):
        """Test that a token is required."""
        result = invoke(["merge", "--pull-request", "42"], GITHUB_TOKEN=None)

        assert result.exit_code == 1
        mock_manager.assert_not_called()

    def test_pull_requests_from_check_run_event(self, invoke, mock_manager, tmp_path):
        """Test pull requests are taken from a check_run payload."""
        event_file = tmp_path / "event.json"
        event_file.write_text(
            json.dumps(
                {
                    "action": "completed",
                    "check_run": {
                        "id": 1,
                        "conclusion": "success",
                        "pull_requests": [{"number": 3}],
                    },
                }
            )
        )

        result = invoke(
            ["merge"], GITHUB_EVENT_NAME="check_run", GITHUB_EVENT_PATH=str(event_file)
        )

        assert result.exit_code == 0
        mock_manager.return_value.automerge_pull_requests.assert_called_once_with([3])

    def test_unsupported_event_does_nothing(self, invoke, mock_manager):
        """Test unsupported events exit cleanly without processing."""
        result = invoke(["merge"], GITHUB_EVENT_NAME="push")

        assert result.exit_code == 0
        mock_manager.assert_not_called()

    def test_failed_merge_exits_nonzero(self, invoke, mock_manager):
        """Test that exhausted retries surface as exit code 1."""
        mock_manager.return_value.automerge_pull_requests.return_value = QueueResult(
            outcomes={42: MergeOutcome.FAILED}
        )

        result = invoke(["merge", "--pull-request", "42"])

        assert result.exit_code == 1

    @pytest.mark.parametrize(
        "outcome", [MergeOutcome.REJECTED, MergeOutcome.DRY_RUN, MergeOutcome.MERGED]
    )
    def test_non_fatal_outcomes_exit_zero(self, invoke, mock_manager, outcome):
        """Test rejections and dry runs are not failures."""
        mock_manager.return_value.automerge_pull_requests.return_value = QueueResult(
            outcomes={42: outcome}
        )

        assert invoke(["merge", "--pull-request", "42"]).exit_code == 0

    def test_api_error_exits_nonzero(self, invoke, mock_manager):
        """Test that lookup failures exit 1."""
        mock_manager.return_value.automerge_pull_requests.side_effect = GitHubAPIError(
            "Not Found (HTTP 404)"
        )

        assert invoke(["merge", "--pull-request", "42"]).exit_code == 1


class TestResolvePullRequestNumbers:
    """Test choosing between explicit input and the triggering event."""

    def test_explicit_input_wins(self):
        """Test the pull-request input takes precedence over the event."""
        policy = MergePolicy(pull_request=5)

        assert resolve_pull_request_numbers(policy, "check_run", None) == [5]

    def test_no_event_payload(self):
        """Test a check_run without a payload file yields nothing."""
        assert resolve_pull_request_numbers(MergePolicy(), "check_run", None) == []


class TestReviewsCommand:
    """Test the reviews command."""

    def test_shows_latest_reviews(self, invoke, make_pull_request):
        """Test the consensus for the head commit is printed."""
        client = MagicMock()
        client.fetch_pull_request.return_value = make_pull_request()
        client.list_reviews.return_value = [
            Review(1, "alice", "OWNER", "CHANGES_REQUESTED", "abc123"),
            Review(2, "mallory", "NONE", "APPROVED", "abc123"),
            Review(3, "bob", "MEMBER", "APPROVED", "old-sha"),
        ]

        with patch(
            "pr_automerge._cli.commands.reviews.GitHubClient", return_value=client
        ):
            result = invoke(
                ["reviews", "--pull-request", "42", "--output-format", "json"]
            )

        assert result.exit_code == 0
        assert '"author": "alice"' in result.output
        assert "mallory" not in result.output
        assert '"id": 3' not in result.output

    def test_api_error(self, invoke):
        """Test lookup failures exit 1."""
        client = MagicMock()
        client.fetch_pull_request.side_effect = GitHubAPIError("boom")

        with patch(
            "pr_automerge._cli.commands.reviews.GitHubClient", return_value=client
        ):
            result = invoke(["reviews", "--pull-request", "42"])

        assert result.exit_code == 1
