"""Review consensus: the latest relevant review per reviewer."""

from collections.abc import Iterable
from functools import cmp_to_key

from ..utils.logging import log_debug
from .models import Review

# Reviews and pull requests from this account bypass author association checks.
TRUSTED_BOT_LOGIN = "github-actions[bot]"


def is_approved(review: Review) -> bool:
    """Check whether a review approves the pull request."""
    return review.state.upper() == "APPROVED"


def is_changes_requested(review: Review) -> bool:
    """Check whether a review requests changes."""
    return review.state.upper() == "CHANGES_REQUESTED"


def is_author_allowed(
    author: str | None,
    author_association: str | None,
    allowed_associations: Iterable[str],
) -> bool:
    """Check whether an author may influence merging.

    Parameters
    ----------
    author : str or None
        Login of the pull request or review author.
    author_association : str or None
        Author's relationship to the repository.
    allowed_associations : Iterable[str]
        Associations that are allowed.

    Returns
    -------
    bool
        True for the trusted bot account or an allowed association.

    """
    if author == TRUSTED_BOT_LOGIN:
        return True
    if not author_association:
        return False
    return author_association in allowed_associations


def _compare_submitted_desc(a: Review, b: Review) -> int:
    # Undated reviews compare equal to everything, keeping their input order.
    if a.submitted_at is None or b.submitted_at is None:
        return 0
    if a.submitted_at > b.submitted_at:
        return -1
    if a.submitted_at < b.submitted_at:
        return 1
    return 0


def relevant_reviews_for_commit(
    reviews: Iterable[Review],
    review_author_associations: Iterable[str],
    commit: str,
) -> list[Review]:
    """Reduce reviews to the latest relevant one per reviewer.

    A review is relevant when it was submitted against ``commit``, either
    approves or requests changes, and comes from an allowed author.

    Parameters
    ----------
    reviews : Iterable[Review]
        All reviews submitted on the pull request.
    review_author_associations : Iterable[str]
        Reviewer associations that count.
    commit : str
        Head commit SHA of the pull request.

    Returns
    -------
    list[Review]
        At most one review per author, oldest first.

    """
    allowed = tuple(review_author_associations)
    relevant: list[Review] = []

    for review in reviews:
        if review.commit_id != commit:
            continue
        if not (is_approved(review) or is_changes_requested(review)):
            log_debug(f"Review {review.id} for commit {commit} is not relevant.")
            continue
        if not is_author_allowed(review.author, review.author_association, allowed):
            log_debug(
                f"Author @{review.author} ({review.author_association}) of review "
                f"{review.id} for commit {commit} is not allowed."
            )
            continue
        relevant.append(review)

    newest_first = sorted(relevant, key=cmp_to_key(_compare_submitted_desc))

    latest: list[Review] = []
    for review in newest_first:
        already_seen = any(
            seen.author and review.author and seen.author == review.author
            for seen in latest
        )
        if not already_seen:
            latest.append(review)

    latest.reverse()
    return latest
