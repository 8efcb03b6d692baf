"""Merge method resolution."""

from ..config import MergeMethod, MergePolicy, RepoContext
from .github_client import GitHubClient


def determine_merge_method(
    client: GitHubClient, policy: MergePolicy, repo: RepoContext
) -> MergeMethod | None:
    """Resolve the merge method for a pull request.

    An explicit policy method always wins, even if the repository disallows
    it. Otherwise the first method the repository allows is used, in the
    order merge commit, squash, rebase.

    Parameters
    ----------
    client : GitHubClient
        Client used to read repository settings.
    policy : MergePolicy
        Merge policy.
    repo : RepoContext
        Repository to merge into.

    Returns
    -------
    MergeMethod or None
        Resolved method, or None if the repository allows none.

    """
    if policy.merge_method:
        return policy.merge_method

    settings = client.fetch_repo_merge_settings(repo)
    if settings.allow_merge_commit:
        return "merge"
    if settings.allow_squash:
        return "squash"
    if settings.allow_rebase:
        return "rebase"
    return None
