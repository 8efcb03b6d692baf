"""Main CLI entry point for pr-automerge."""

import click

from .commands.merge import merge
from .commands.reviews import reviews
from .utils import get_version


@click.group()
@click.version_option(
    get_version(), prog_name="pr-automerge", message="%(prog)s %(version)s"
)
def cli() -> None:
    """Merge pull requests once they satisfy a merge policy.

    Failed merges are retried with exponential backoff.
    """


cli.add_command(merge)
cli.add_command(reviews)
