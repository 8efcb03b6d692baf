"""CLI command for merging eligible pull requests."""

import json
import sys

import click

from ...auto_merger import GitHubAPIError, GitHubClient, QueueManager
from ...config import ConfigurationError, MergePolicy, RepoContext
from ...utils.logging import log_error, log_info, log_success
from ..utils import repository_option, resolve_pull_request_numbers, token_option


@click.command()
@token_option
@repository_option
@click.option(
    "--merge-method",
    envvar="INPUT_MERGE-METHOD",
    help="Merge method: merge, squash or rebase (default: repository settings)",
)
@click.option(
    "--squash-title",
    envvar="INPUT_SQUASH-TITLE",
    help="'true' to use the pull request title as squash commit title",
)
@click.option(
    "--do-not-merge-labels",
    envvar="INPUT_DO-NOT-MERGE-LABELS",
    help="Comma-separated labels that block merging",
)
@click.option(
    "--pull-request",
    envvar="INPUT_PULL-REQUEST",
    help="Pull request number to merge (default: from the triggering event)",
)
@click.option(
    "--pull-request-author-associations",
    envvar="INPUT_PULL-REQUEST-AUTHOR-ASSOCIATIONS",
    help="Comma-separated author associations allowed to have pull requests merged",
)
@click.option(
    "--review-author-associations",
    envvar="INPUT_REVIEW-AUTHOR-ASSOCIATIONS",
    help="Comma-separated reviewer associations (default: COLLABORATOR,MEMBER,OWNER)",
)
@click.option(
    "--dry-run",
    envvar="INPUT_DRY-RUN",
    help="'true' to only log what would be merged",
)
@click.option(
    "--delete-on-merge",
    envvar="INPUT_DELETE-ON-MERGE",
    help="'true' to delete the head branch after merging",
)
@click.option(
    "--max-tries",
    envvar="INPUT_MAX-TRIES",
    help="Merge attempts per pull request (default: 5)",
)
@click.option(
    "--event-name",
    envvar="GITHUB_EVENT_NAME",
    help="Triggering event name (default: $GITHUB_EVENT_NAME)",
)
@click.option(
    "--event-path",
    envvar="GITHUB_EVENT_PATH",
    type=click.Path(dir_okay=False),
    help="Triggering event payload file (default: $GITHUB_EVENT_PATH)",
)
def merge(
    token: str | None,
    repository: str | None,
    merge_method: str | None,
    squash_title: str | None,
    do_not_merge_labels: str | None,
    pull_request: str | None,
    pull_request_author_associations: str | None,
    review_author_associations: str | None,
    dry_run: str | None,
    delete_on_merge: str | None,
    max_tries: str | None,
    event_name: str | None,
    event_path: str | None,
) -> None:
    r"""Merge eligible pull requests, retrying failed merges.

    Options default to the GitHub Actions inputs (INPUT_*) and workflow
    environment, so the command runs unchanged inside an action step.

    Examples:
      \b
      # Merge a single pull request
      pr-automerge merge --repository owner/repo --pull-request 42

      \b
      # Show what would be merged for the current check_run event
      pr-automerge merge --dry-run true

    """
    try:
        policy = MergePolicy.from_inputs(
            merge_method=merge_method,
            squash_title=squash_title,
            do_not_merge_labels=do_not_merge_labels,
            pull_request=pull_request,
            pull_request_author_associations=pull_request_author_associations,
            review_author_associations=review_author_associations,
            dry_run=dry_run,
            delete_on_merge=delete_on_merge,
            max_tries=max_tries,
        )
        repo = RepoContext.parse(repository)
    except ConfigurationError as e:
        log_error(f"Configuration error: {e}")
        sys.exit(1)

    if not token:
        log_error("GitHub token not set (use --token or GITHUB_TOKEN)")
        sys.exit(1)

    try:
        numbers = resolve_pull_request_numbers(policy, event_name, event_path)
    except (OSError, json.JSONDecodeError) as e:
        log_error(f"Could not read event payload: {e}")
        sys.exit(1)

    if not numbers:
        log_info("No pull requests to merge.")
        return

    manager = QueueManager(client=GitHubClient(gh_token=token), policy=policy, repo=repo)

    try:
        result = manager.automerge_pull_requests(numbers)
    except GitHubAPIError as e:
        log_error(f"GitHub API error: {e}")
        sys.exit(1)

    if result.failed:
        failed = ", ".join(str(number) for number in result.failed)
        log_error(f"Failed to merge pull requests: {failed}")
        sys.exit(1)

    if result.merged:
        merged = ", ".join(str(number) for number in result.merged)
        log_success(f"Merged pull requests: {merged}")
