"""PR Automerge - merge pull requests once they satisfy a merge policy."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pr-automerge")
except PackageNotFoundError:
    # Package not installed, use fallback
    __version__ = "0.1.0.dev"

from .auto_merger import (
    EligibilityEvaluator,
    GitHubClient,
    MergeOutcome,
    QueueManager,
    relevant_reviews_for_commit,
)
from .config import ConfigurationError, MergePolicy, RepoContext

__all__ = [
    "ConfigurationError",
    "EligibilityEvaluator",
    "GitHubClient",
    "MergeOutcome",
    "MergePolicy",
    "QueueManager",
    "RepoContext",
    "relevant_reviews_for_commit",
    "__version__",
]
