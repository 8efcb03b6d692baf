"""Eligibility checks deciding whether a pull request may be merged now."""

from ..config import MergePolicy, RepoContext
from ..utils.logging import log_info, log_warning
from .github_client import GitHubClient
from .models import CheckRun, Eligibility, MergeableState, PullRequestSnapshot
from .reviews import is_author_allowed

_BLOCKING_STATES = {
    MergeableState.DRAFT: "is not mergeable because it is a draft",
    MergeableState.DIRTY: "is not mergeable because it is dirty",
    MergeableState.BLOCKED: "is blocked",
}


def passed_required_checks(
    check_runs: list[CheckRun], required_checks: tuple[str, ...]
) -> bool:
    """Check that every required check has a successful run.

    Parameters
    ----------
    check_runs : list[CheckRun]
        Check runs on the head commit.
    required_checks : tuple[str, ...]
        Names required by branch protection.

    Returns
    -------
    bool
        True if each required name has at least one run concluded with success.

    """
    return all(
        any(run.name == required and run.conclusion == "success" for run in check_runs)
        for required in required_checks
    )


class EligibilityEvaluator:
    """Evaluate a freshly fetched pull request against the merge policy.

    Checks run in a fixed order and stop at the first failure. Every
    rejection is final for the current attempt.

    Parameters
    ----------
    client : GitHubClient
        Client used to fetch pull request, branch and check state.
    policy : MergePolicy
        Policy to evaluate against.

    """

    def __init__(self, client: GitHubClient, policy: MergePolicy):
        self.client = client
        self.policy = policy

    def _reject(self, pull_request: PullRequestSnapshot, reason: str) -> Eligibility:
        log_info(f"Pull request {pull_request.number} {reason}.")
        return Eligibility(mergeable=False, reason=reason, pull_request=pull_request)

    def evaluate(self, repo: RepoContext, number: int) -> Eligibility:
        """Decide whether a pull request can be merged right now.

        Parameters
        ----------
        repo : RepoContext
            Repository of the pull request.
        number : int
            Pull request number.

        Returns
        -------
        Eligibility
            Decision with its reason and the snapshot it was based on.

        Raises
        ------
        GitHubAPIError
            If any of the lookups fail.

        """
        pull_request = self.client.fetch_pull_request(repo, number)

        if pull_request.merged:
            return self._reject(pull_request, "is already merged")

        if pull_request.state == "closed":
            return self._reject(pull_request, "is closed")

        author_associations = self.policy.pull_request_author_associations
        if author_associations and not is_author_allowed(
            pull_request.author, pull_request.author_association, author_associations
        ):
            return self._reject(
                pull_request,
                f"has author association {pull_request.author_association} "
                f"but must be one of the following: {', '.join(author_associations)}",
            )

        protection = self.client.fetch_branch_protection(repo, pull_request.base_branch)
        required_checks = protection.required_check_names if protection.protected else ()
        check_runs = self.client.fetch_check_runs(repo, pull_request.head_sha)
        if not passed_required_checks(check_runs, required_checks):
            return self._reject(
                pull_request, "does not have successful required status checks"
            )

        blocking_labels = [
            label
            for label in pull_request.labels
            if self.policy.is_do_not_merge_label(label)
        ]
        if blocking_labels:
            return self._reject(
                pull_request,
                "is not mergeable because the following labels are applied: "
                f"{', '.join(blocking_labels)}",
            )

        try:
            state = MergeableState(pull_request.mergeable_state)
        except ValueError:
            reason = f"has unknown state '{pull_request.mergeable_state}'"
            log_warning(f"Pull request {number} {reason}.")
            return Eligibility(mergeable=False, reason=reason, pull_request=pull_request)

        if state in _BLOCKING_STATES:
            return self._reject(pull_request, _BLOCKING_STATES[state])

        reason = f"is mergeable with state '{state.value}'"
        log_info(f"Pull request {number} {reason}.")
        return Eligibility(mergeable=True, reason=reason, pull_request=pull_request)
