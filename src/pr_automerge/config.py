"""Merge policy and repository context built from action inputs."""

import re
from dataclasses import dataclass
from typing import Literal

MergeMethod = Literal["merge", "squash", "rebase"]

MERGE_METHODS: tuple[str, ...] = ("merge", "squash", "rebase")

AUTHOR_ASSOCIATIONS: tuple[str, ...] = (
    "COLLABORATOR",
    "CONTRIBUTOR",
    "FIRST_TIMER",
    "FIRST_TIME_CONTRIBUTOR",
    "MANNEQUIN",
    "MEMBER",
    "NONE",
    "OWNER",
)

DEFAULT_REVIEW_AUTHOR_ASSOCIATIONS: tuple[str, ...] = (
    "COLLABORATOR",
    "MEMBER",
    "OWNER",
)

DEFAULT_MAX_TRIES = 5

_DO_NOT_MERGE_PATTERN = re.compile(r"^dono?tmerge$")
_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


class ConfigurationError(ValueError):
    """Invalid action input."""


def is_do_not_merge_label(label: str) -> bool:
    """Loosely match a "do not merge" label name.

    Case and punctuation are ignored, so ``Do-Not_Merge`` and
    ``DONTMERGE`` match while ``do not merge please`` does not.

    Parameters
    ----------
    label : str
        Label name.

    Returns
    -------
    bool
        True if the normalized label reads "do not merge" or "dont merge".

    """
    normalized = _NON_ALPHANUMERIC.sub("", label.lower())
    return _DO_NOT_MERGE_PATTERN.match(normalized) is not None


def parse_list(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated input, dropping blank entries."""
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def parse_bool(value: str | None) -> bool:
    """Interpret an input as a boolean; only ``true`` is truthy."""
    return (value or "").strip().lower() == "true"


def parse_number(name: str, value: str | None) -> int | None:
    """Parse an optional base-10 integer input.

    Parameters
    ----------
    name : str
        Input name, used in the error message.
    value : str or None
        Raw input value.

    Returns
    -------
    int or None
        Parsed number, or None when the input is empty.

    Raises
    ------
    ConfigurationError
        If the value is not an integer.

    """
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip(), 10)
    except ValueError:
        raise ConfigurationError(
            f"Failed parsing input '{name}' to number: '{value}'"
        ) from None


def parse_merge_method(value: str | None) -> MergeMethod | None:
    """Validate the merge method input.

    Raises
    ------
    ConfigurationError
        If the value is not one of merge, squash or rebase.

    """
    if value is None or not value.strip():
        return None
    method = value.strip()
    if method not in MERGE_METHODS:
        raise ConfigurationError(f"Unknown merge method: '{method}'")
    return method  # type: ignore[return-value]


def parse_associations(name: str, value: str | None) -> tuple[str, ...]:
    """Parse a comma-separated list of author associations.

    Raises
    ------
    ConfigurationError
        If any entry is not a known GitHub author association.

    """
    associations = tuple(item.upper() for item in parse_list(value))
    unknown = [item for item in associations if item not in AUTHOR_ASSOCIATIONS]
    if unknown:
        raise ConfigurationError(
            f"Unknown author association in input '{name}': {', '.join(unknown)}"
        )
    return associations


@dataclass(frozen=True)
class RepoContext:
    """Repository that every GitHub call is made against.

    Attributes
    ----------
    owner : str
        Repository owner (user or organization).
    repo : str
        Repository name.

    """

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        """Repository in ``owner/repo`` format."""
        return f"{self.owner}/{self.repo}"

    @classmethod
    def parse(cls, full_name: str | None) -> "RepoContext":
        """Build a context from an ``owner/repo`` string.

        Raises
        ------
        ConfigurationError
            If the value is missing or not in ``owner/repo`` format.

        """
        owner, _, repo = (full_name or "").strip().partition("/")
        if not owner or not repo or "/" in repo:
            raise ConfigurationError(
                f"Repository must be in owner/repo format, got: '{full_name}'"
            )
        return cls(owner=owner, repo=repo)


@dataclass(frozen=True)
class MergePolicy:
    """Policy deciding whether and how pull requests are merged.

    Attributes
    ----------
    merge_method : MergeMethod or None
        Explicit merge method. None means use the repository settings.
    squash_title : bool
        Use the pull request title as the commit title for squash merges.
    do_not_merge_labels : tuple[str, ...]
        Labels that block merging, in addition to "do not merge" variants.
    pull_request : int or None
        Pull request to merge. None means take it from the triggering event.
    pull_request_author_associations : tuple[str, ...]
        Allowed pull request author associations. Empty allows everyone.
    review_author_associations : tuple[str, ...]
        Author associations whose reviews count.
    dry_run : bool
        Log what would be merged without merging.
    delete_on_merge : bool
        Delete the head branch after a successful merge.
    max_tries : int
        Merge attempts per pull request, including the first.

    """

    merge_method: MergeMethod | None = None
    squash_title: bool = False
    do_not_merge_labels: tuple[str, ...] = ()
    pull_request: int | None = None
    pull_request_author_associations: tuple[str, ...] = ()
    review_author_associations: tuple[str, ...] = DEFAULT_REVIEW_AUTHOR_ASSOCIATIONS
    dry_run: bool = False
    delete_on_merge: bool = False
    max_tries: int = DEFAULT_MAX_TRIES

    @classmethod
    def from_inputs(
        cls,
        merge_method: str | None = None,
        squash_title: str | None = None,
        do_not_merge_labels: str | None = None,
        pull_request: str | None = None,
        pull_request_author_associations: str | None = None,
        review_author_associations: str | None = None,
        dry_run: str | None = None,
        delete_on_merge: str | None = None,
        max_tries: str | None = None,
    ) -> "MergePolicy":
        """Build a policy from raw string inputs.

        Parameters mirror the action inputs and accept the same string
        encodings GitHub Actions passes through the environment.

        Raises
        ------
        ConfigurationError
            If any input cannot be parsed.

        """
        review_associations = parse_associations(
            "review-author-associations", review_author_associations
        )
        tries = parse_number("max-tries", max_tries)
        if tries is not None and tries < 1:
            raise ConfigurationError(f"Input 'max-tries' must be at least 1: {tries}")

        return cls(
            merge_method=parse_merge_method(merge_method),
            squash_title=parse_bool(squash_title),
            do_not_merge_labels=parse_list(do_not_merge_labels),
            pull_request=parse_number("pull-request", pull_request),
            pull_request_author_associations=parse_associations(
                "pull-request-author-associations", pull_request_author_associations
            ),
            review_author_associations=review_associations
            or DEFAULT_REVIEW_AUTHOR_ASSOCIATIONS,
            dry_run=parse_bool(dry_run),
            delete_on_merge=parse_bool(delete_on_merge),
            max_tries=tries if tries is not None else DEFAULT_MAX_TRIES,
        )

    def is_do_not_merge_label(self, label: str) -> bool:
        """Check a label against the deny-list and the loose pattern."""
        return label in self.do_not_merge_labels or is_do_not_merge_label(label)
