"""GitHub REST client for merge operations via gh CLI."""

import json
import os
import subprocess
from typing import Any
from urllib.parse import quote

from ..config import MergeMethod, RepoContext
from .errors import GitHubAPIError, NotFoundError
from .models import (
    BranchProtection,
    CheckRun,
    PullRequestSnapshot,
    RepoMergeSettings,
    Review,
)


class GitHubClient:
    """Query and merge pull requests through ``gh api``.

    Every call takes the repository context explicitly.

    Parameters
    ----------
    gh_token : str
        GitHub token with permission to merge and delete branches.

    Attributes
    ----------
    gh_token : str
        GitHub token passed to gh as ``GH_TOKEN``.

    """

    def __init__(self, gh_token: str):
        """Initialize GitHub client.

        Parameters
        ----------
        gh_token : str
            GitHub token with permission to merge and delete branches.

        """
        self.gh_token = gh_token

    def _run_gh_api(
        self,
        endpoint: str,
        method: str = "GET",
        fields: dict[str, str | None] | None = None,
        extra_args: list[str] | None = None,
    ) -> str:
        """Execute a ``gh api`` request.

        Parameters
        ----------
        endpoint : str
            REST endpoint relative to the API root.
        method : str, optional
            HTTP method (default="GET").
        fields : dict[str, str | None], optional
            String body fields. Fields set to None are omitted.
        extra_args : list[str], optional
            Additional gh arguments such as ``--paginate``.

        Returns
        -------
        str
            Stripped stdout from the command.

        Raises
        ------
        NotFoundError
            If the API responded with HTTP 404.
        GitHubAPIError
            If the command fails for any other reason.

        """
        cmd = ["gh", "api", "--method", method, endpoint]
        for key, value in (fields or {}).items():
            if value is not None:
                cmd.extend(["--raw-field", f"{key}={value}"])
        cmd.extend(extra_args or [])

        # Inherit environment and add GH_TOKEN
        env = os.environ.copy()
        env["GH_TOKEN"] = self.gh_token

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                env=env,
            )
        except subprocess.CalledProcessError as e:
            message = (e.stderr or "").strip() or str(e)
            if "HTTP 404" in message:
                raise NotFoundError(message, endpoint=endpoint) from e
            raise GitHubAPIError(message, endpoint=endpoint) from e
        return result.stdout.strip()

    def _get_json(self, endpoint: str) -> Any:
        return json.loads(self._run_gh_api(endpoint))

    def fetch_pull_request(self, repo: RepoContext, number: int) -> PullRequestSnapshot:
        """Fetch the current state of a pull request."""
        data = self._get_json(f"repos/{repo.full_name}/pulls/{number}")
        return PullRequestSnapshot.from_api(data)

    def fetch_branch_protection(
        self, repo: RepoContext, branch: str
    ) -> BranchProtection:
        """Fetch protection settings of a branch.

        Protection only counts when the branch is protected and the
        protection is enabled.
        """
        data = self._get_json(
            f"repos/{repo.full_name}/branches/{quote(branch, safe='/')}"
        )
        protection = data.get("protection") or {}

        if data.get("protected") is True and protection.get("enabled") is True:
            checks = protection.get("required_status_checks") or {}
            return BranchProtection(
                protected=True,
                required_check_names=tuple(checks.get("contexts") or []),
            )
        return BranchProtection(protected=False)

    def fetch_check_runs(self, repo: RepoContext, sha: str) -> list[CheckRun]:
        """List check runs for a commit."""
        output = self._run_gh_api(
            f"repos/{repo.full_name}/commits/{sha}/check-runs?per_page=100",
            extra_args=["--paginate", "--jq", ".check_runs[]"],
        )
        runs = [json.loads(line) for line in output.splitlines() if line]
        return [
            CheckRun(name=run["name"], conclusion=run.get("conclusion"))
            for run in runs
        ]

    def fetch_repo_merge_settings(self, repo: RepoContext) -> RepoMergeSettings:
        """Fetch which merge methods the repository allows."""
        data = self._get_json(f"repos/{repo.full_name}")
        return RepoMergeSettings(
            allow_merge_commit=data.get("allow_merge_commit") is True,
            allow_squash=data.get("allow_squash_merge") is True,
            allow_rebase=data.get("allow_rebase_merge") is True,
        )

    def list_reviews(self, repo: RepoContext, number: int) -> list[Review]:
        """List all reviews submitted on a pull request."""
        output = self._run_gh_api(
            f"repos/{repo.full_name}/pulls/{number}/reviews?per_page=100",
            extra_args=["--paginate", "--jq", ".[]"],
        )
        return [Review.from_api(json.loads(line)) for line in output.splitlines() if line]

    def merge_pull_request(
        self,
        repo: RepoContext,
        number: int,
        sha: str,
        merge_method: MergeMethod | None = None,
        commit_title: str | None = None,
        commit_message: str | None = None,
    ) -> None:
        """Merge a pull request.

        Parameters
        ----------
        repo : RepoContext
            Repository of the pull request.
        number : int
            Pull request number.
        sha : str
            Head commit SHA that must still match for the merge to succeed.
        merge_method : MergeMethod or None, optional
            Merge method. None leaves it to the API default.
        commit_title : str or None, optional
            Commit title. None leaves it to the API default.
        commit_message : str or None, optional
            Commit message body. None leaves it to the API default.

        Raises
        ------
        GitHubAPIError
            If GitHub refuses the merge.

        """
        self._run_gh_api(
            f"repos/{repo.full_name}/pulls/{number}/merge",
            method="PUT",
            fields={
                "sha": sha,
                "merge_method": merge_method,
                "commit_title": commit_title,
                "commit_message": commit_message,
            },
        )

    def delete_ref(self, repo: RepoContext, branch: str) -> None:
        """Delete a branch."""
        self._run_gh_api(
            f"repos/{repo.full_name}/git/refs/heads/{quote(branch, safe='/')}",
            method="DELETE",
        )
