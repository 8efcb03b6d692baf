"""Auto-merger: eligibility checks, merging and retry scheduling."""

from .errors import GitHubAPIError, NotFoundError
from .evaluator import EligibilityEvaluator
from .executor import MergeExecutor
from .github_client import GitHubClient
from .merge_method import determine_merge_method
from .models import (
    Eligibility,
    MergeableState,
    MergeOutcome,
    PullRequestSnapshot,
    RetryTask,
    Review,
)
from .queue_manager import QueueManager, QueueResult
from .reviews import relevant_reviews_for_commit

__all__ = [
    "EligibilityEvaluator",
    "Eligibility",
    "GitHubAPIError",
    "GitHubClient",
    "MergeExecutor",
    "MergeableState",
    "MergeOutcome",
    "NotFoundError",
    "PullRequestSnapshot",
    "QueueManager",
    "QueueResult",
    "RetryTask",
    "Review",
    "determine_merge_method",
    "relevant_reviews_for_commit",
]
