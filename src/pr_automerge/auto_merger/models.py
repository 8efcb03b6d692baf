"""Data models for pull request evaluation and merging."""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any


class MergeableState(Enum):
    """Mergeability computed by GitHub for a pull request."""

    DRAFT = "draft"
    DIRTY = "dirty"
    BLOCKED = "blocked"
    CLEAN = "clean"
    HAS_HOOKS = "has_hooks"
    UNKNOWN = "unknown"
    UNSTABLE = "unstable"


class MergeOutcome(Enum):
    """Result of one attempt at merging a pull request.

    Only ``RETRY`` puts the pull request back on the queue. ``FAILED`` means
    the last allowed merge attempt failed.
    """

    MERGED = "merged"
    REJECTED = "rejected"
    DRY_RUN = "dry_run"
    RETRY = "retry"
    FAILED = "failed"


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp as returned by the GitHub API."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class PullRequestSnapshot:
    """Pull request state fetched for a single evaluation.

    Attributes
    ----------
    number : int
        Pull request number.
    title : str
        Pull request title.
    state : str
        ``open`` or ``closed``.
    merged : bool
        True if already merged.
    author : str or None
        Login of the pull request author.
    author_association : str or None
        Author's relationship to the repository (OWNER, MEMBER, ...).
    labels : tuple[str, ...]
        Applied label names.
    mergeable_state : str or None
        Raw mergeable state reported by GitHub.
    base_branch : str
        Branch the pull request merges into.
    head_branch : str
        Branch the pull request merges from.
    head_sha : str
        Head commit SHA.

    """

    number: int
    title: str
    state: str
    merged: bool
    author: str | None
    author_association: str | None
    labels: tuple[str, ...]
    mergeable_state: str | None
    base_branch: str
    head_branch: str
    head_sha: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "PullRequestSnapshot":
        """Build a snapshot from a REST ``pulls`` response."""
        user = data.get("user") or {}
        return cls(
            number=int(data["number"]),
            title=data.get("title") or "",
            state=data.get("state") or "open",
            merged=data.get("merged") is True,
            author=user.get("login"),
            author_association=data.get("author_association"),
            labels=tuple(
                label["name"]
                for label in data.get("labels") or []
                if label.get("name") is not None
            ),
            mergeable_state=data.get("mergeable_state"),
            base_branch=data["base"]["ref"],
            head_branch=data["head"]["ref"],
            head_sha=data["head"]["sha"],
        )


@dataclass(frozen=True)
class Review:
    """A review submitted on a pull request.

    Attributes
    ----------
    id : int
        Review ID.
    author : str or None
        Reviewer login.
    author_association : str or None
        Reviewer's relationship to the repository.
    state : str
        Review state such as APPROVED, CHANGES_REQUESTED or COMMENTED.
    commit_id : str or None
        Commit the review was submitted against.
    submitted_at : datetime or None
        Submission time, if known.

    """

    id: int
    author: str | None
    author_association: str | None
    state: str
    commit_id: str | None
    submitted_at: datetime | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Review":
        """Build a review from a REST ``reviews`` response item."""
        user = data.get("user") or {}
        return cls(
            id=int(data["id"]),
            author=user.get("login"),
            author_association=data.get("author_association"),
            state=data.get("state") or "",
            commit_id=data.get("commit_id"),
            submitted_at=parse_timestamp(data.get("submitted_at")),
        )


@dataclass(frozen=True)
class CheckRun:
    """A single check run on a commit."""

    name: str
    conclusion: str | None


@dataclass(frozen=True)
class BranchProtection:
    """Protection settings relevant to merging into a branch.

    Attributes
    ----------
    protected : bool
        True only if the branch is protected and protection is enabled.
    required_check_names : tuple[str, ...]
        Status checks that must succeed on the head commit.

    """

    protected: bool
    required_check_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class RepoMergeSettings:
    """Merge methods the repository allows."""

    allow_merge_commit: bool = False
    allow_squash: bool = False
    allow_rebase: bool = False


@dataclass(frozen=True)
class Eligibility:
    """Outcome of evaluating whether a pull request may be merged now.

    Attributes
    ----------
    mergeable : bool
        True if a merge should be attempted.
    reason : str
        Human-readable reason for the decision.
    pull_request : PullRequestSnapshot
        Snapshot the decision was made on.

    """

    mergeable: bool
    reason: str
    pull_request: PullRequestSnapshot


@dataclass(frozen=True)
class RetryTask:
    """A queued merge attempt for one pull request.

    Attributes
    ----------
    number : int
        Pull request number.
    tries : int
        Attempts already made.

    """

    number: int
    tries: int = 0

    def next_attempt(self) -> "RetryTask":
        """Return the task for the following attempt."""
        return replace(self, tries=self.tries + 1)
