"""CLI command showing the latest relevant review per reviewer."""

import sys

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ...auto_merger import GitHubAPIError, GitHubClient, relevant_reviews_for_commit
from ...auto_merger.models import Review
from ...config import ConfigurationError, MergePolicy, RepoContext
from ...utils.logging import log_error, log_info
from ..utils import repository_option, token_option


def _output_reviews(reviews: list[Review], output_format: str) -> None:
    """Print reviews to stdout in the requested format."""
    stdout_console = Console(stderr=False, highlight=False)

    if output_format == "json":
        stdout_console.print_json(
            data=[
                {
                    "id": review.id,
                    "author": review.author,
                    "author_association": review.author_association,
                    "state": review.state.upper(),
                    "commit_id": review.commit_id,
                    "submitted_at": (
                        review.submitted_at.isoformat() if review.submitted_at else None
                    ),
                }
                for review in reviews
            ]
        )
        return

    table = Table(title="Latest relevant reviews")
    table.add_column("Reviewer")
    table.add_column("Association")
    table.add_column("State")
    table.add_column("Submitted")
    for review in reviews:
        table.add_row(
            Text(review.author or "-"),
            review.author_association or "-",
            review.state.upper(),
            review.submitted_at.isoformat() if review.submitted_at else "-",
        )
    stdout_console.print(table)


@click.command()
@token_option
@repository_option
@click.option(
    "--pull-request",
    required=True,
    type=int,
    help="Pull request number",
)
@click.option(
    "--review-author-associations",
    envvar="INPUT_REVIEW-AUTHOR-ASSOCIATIONS",
    help="Comma-separated reviewer associations (default: COLLABORATOR,MEMBER,OWNER)",
)
@click.option(
    "--output-format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format: 'table' for humans, 'json' for structured output",
)
def reviews(
    token: str | None,
    repository: str | None,
    pull_request: int,
    review_author_associations: str | None,
    output_format: str,
) -> None:
    r"""Show the latest approving or blocking review of each reviewer.

    Only reviews on the current head commit from allowed reviewers count.
    This is informational and does not affect merging.

    Examples:
      \b
      pr-automerge reviews --repository owner/repo --pull-request 42

    """
    try:
        policy = MergePolicy.from_inputs(
            review_author_associations=review_author_associations
        )
        repo = RepoContext.parse(repository)
    except ConfigurationError as e:
        log_error(f"Configuration error: {e}")
        sys.exit(1)

    if not token:
        log_error("GitHub token not set (use --token or GITHUB_TOKEN)")
        sys.exit(1)

    client = GitHubClient(gh_token=token)

    try:
        snapshot = client.fetch_pull_request(repo, pull_request)
        all_reviews = client.list_reviews(repo, pull_request)
    except GitHubAPIError as e:
        log_error(f"GitHub API error: {e}")
        sys.exit(1)

    latest = relevant_reviews_for_commit(
        all_reviews, policy.review_author_associations, snapshot.head_sha
    )
    log_info(
        f"{len(latest)} relevant review(s) on commit {snapshot.head_sha[:7]} "
        f"of pull request {pull_request}"
    )
    _output_reviews(latest, output_format.lower())
