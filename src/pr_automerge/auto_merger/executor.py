"""Merge execution and post-merge branch cleanup."""

from ..config import MergeMethod, MergePolicy, RepoContext
from ..utils.logging import log_error, log_info, log_success
from .errors import GitHubAPIError
from .github_client import GitHubClient
from .models import MergeOutcome, PullRequestSnapshot


class MergeExecutor:
    """Merge eligible pull requests and clean up their branches.

    Parameters
    ----------
    client : GitHubClient
        Client used for the merge and delete calls.
    policy : MergePolicy
        Policy providing dry-run, squash title and branch deletion settings.

    """

    def __init__(self, client: GitHubClient, policy: MergePolicy):
        self.client = client
        self.policy = policy

    def commit_details(
        self, pull_request: PullRequestSnapshot, merge_method: MergeMethod | None
    ) -> tuple[str | None, str | None]:
        """Return the commit title and message to merge with.

        Squash merges with ``squash_title`` enabled use the pull request
        title and an empty body. Everything else uses the API defaults.
        """
        if self.policy.squash_title and merge_method == "squash":
            return f"{pull_request.title} (#{pull_request.number})", "\n"
        return None, None

    def merge(
        self,
        repo: RepoContext,
        pull_request: PullRequestSnapshot,
        merge_method: MergeMethod | None,
        tries_left: int,
    ) -> MergeOutcome:
        """Merge a pull request that passed eligibility checks.

        Parameters
        ----------
        repo : RepoContext
            Repository of the pull request.
        pull_request : PullRequestSnapshot
            Snapshot the eligibility decision was made on.
        merge_method : MergeMethod or None
            Resolved merge method.
        tries_left : int
            Merge attempts remaining after this one.

        Returns
        -------
        MergeOutcome
            ``MERGED`` on success, ``DRY_RUN`` in dry-run mode, ``RETRY`` if
            the merge failed with attempts remaining, ``FAILED`` otherwise.

        """
        number = pull_request.number
        commit_title, commit_message = self.commit_details(pull_request, merge_method)
        title_message = f" with title '{commit_title}'" if commit_title else ""

        if self.policy.dry_run:
            log_info(f"Would try merging pull request {number}{title_message}.")
            return MergeOutcome.DRY_RUN

        outcome = self._merge(
            repo, pull_request, merge_method, commit_title, commit_message, tries_left
        )

        if outcome is MergeOutcome.MERGED and self.policy.delete_on_merge:
            self.delete_branch(repo, pull_request.head_branch)

        return outcome

    def _merge(
        self,
        repo: RepoContext,
        pull_request: PullRequestSnapshot,
        merge_method: MergeMethod | None,
        commit_title: str | None,
        commit_message: str | None,
        tries_left: int,
    ) -> MergeOutcome:
        number = pull_request.number
        title_message = f" with title '{commit_title}'" if commit_title else ""

        try:
            log_info(f"Merging pull request {number}{title_message}:")
            self.client.merge_pull_request(
                repo,
                number,
                sha=pull_request.head_sha,
                merge_method=merge_method,
                commit_title=commit_title,
                commit_message=commit_message,
            )
        except GitHubAPIError as e:
            log_error(
                f"Failed to merge pull request {number} ({tries_left} tries left): {e}"
            )
            return MergeOutcome.FAILED if tries_left <= 0 else MergeOutcome.RETRY

        log_success(f"Successfully merged pull request {number}.")
        return MergeOutcome.MERGED

    def delete_branch(self, repo: RepoContext, branch: str) -> bool:
        """Delete a merged branch.

        Failures are logged and reported through the return value only.

        Returns
        -------
        bool
            True if the branch was deleted.

        """
        log_info(f"Deleting branch {branch} after successful merge:")
        try:
            self.client.delete_ref(repo, branch)
        except GitHubAPIError as e:
            log_error(f"Could not delete branch {branch}: {e}")
            return False

        log_success(f"Successfully deleted branch {branch}.")
        return True
