"""Single merge attempt for one pull request."""

from ..config import MergePolicy, RepoContext
from ..utils.logging import log_info
from .evaluator import EligibilityEvaluator
from .executor import MergeExecutor
from .github_client import GitHubClient
from .merge_method import determine_merge_method
from .models import MergeOutcome


class PRProcessor:
    """Run eligibility, merge method resolution and merge for a pull request.

    Parameters
    ----------
    client : GitHubClient
        Client for GitHub operations.
    policy : MergePolicy
        Merge policy.

    Attributes
    ----------
    evaluator : EligibilityEvaluator
        Decides whether the pull request may be merged.
    executor : MergeExecutor
        Performs the merge.

    """

    def __init__(self, client: GitHubClient, policy: MergePolicy):
        self.client = client
        self.policy = policy
        self.evaluator = EligibilityEvaluator(client=client, policy=policy)
        self.executor = MergeExecutor(client=client, policy=policy)

    def process_pr(self, repo: RepoContext, number: int, tries_left: int) -> MergeOutcome:
        """Make one attempt at merging a pull request.

        Parameters
        ----------
        repo : RepoContext
            Repository of the pull request.
        number : int
            Pull request number.
        tries_left : int
            Merge attempts remaining after this one.

        Returns
        -------
        MergeOutcome
            ``REJECTED`` if not eligible, otherwise the executor's outcome.

        """
        log_info(f"Evaluating mergeability for pull request {number}:")

        eligibility = self.evaluator.evaluate(repo, number)
        if not eligibility.mergeable:
            return MergeOutcome.REJECTED

        merge_method = determine_merge_method(self.client, self.policy, repo)
        return self.executor.merge(
            repo, eligibility.pull_request, merge_method, tries_left
        )
