"""Shared fixtures for pr-automerge tests."""

from dataclasses import replace
from unittest.mock import MagicMock

import pytest

from pr_automerge.auto_merger.models import (
    BranchProtection,
    CheckRun,
    PullRequestSnapshot,
    RepoMergeSettings,
)
from pr_automerge.config import RepoContext

BASE_PULL_REQUEST = PullRequestSnapshot(
    number=42,
    title="Bump requests from 2.31.0 to 2.32.0",
    state="open",
    merged=False,
    author="octocat",
    author_association="MEMBER",
    labels=(),
    mergeable_state="clean",
    base_branch="main",
    head_branch="dependabot/pip/requests-2.32.0",
    head_sha="abc123",
)


@pytest.fixture
def repo():
    """Repository context used by all calls."""
    return RepoContext(owner="octo-org", repo="octo-repo")


@pytest.fixture
def make_pull_request():
    """Build pull request snapshots with overridden fields."""

    def _make(**overrides):
        return replace(BASE_PULL_REQUEST, **overrides)

    return _make


@pytest.fixture
def client(make_pull_request):
    """Mock GitHub client for an eligible pull request with no required checks."""
    mock_client = MagicMock()
    mock_client.fetch_pull_request.return_value = make_pull_request()
    mock_client.fetch_branch_protection.return_value = BranchProtection(protected=False)
    mock_client.fetch_check_runs.return_value = [
        CheckRun(name="build", conclusion="success")
    ]
    mock_client.fetch_repo_merge_settings.return_value = RepoMergeSettings(
        allow_merge_commit=True, allow_squash=True, allow_rebase=True
    )
    return mock_client
