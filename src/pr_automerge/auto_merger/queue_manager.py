"""Queue manager retrying pull request merges with exponential backoff."""

import time
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..config import MergePolicy, RepoContext
from ..utils.logging import get_console, log_info
from .github_client import GitHubClient
from .models import MergeOutcome, RetryTask
from .pr_processor import PRProcessor


@dataclass
class QueueResult:
    """Final outcome of every processed pull request.

    Attributes
    ----------
    outcomes : dict[int, MergeOutcome]
        Last outcome per pull request number.

    """

    outcomes: dict[int, MergeOutcome] = field(default_factory=dict)

    @property
    def failed(self) -> list[int]:
        """Pull requests whose last merge attempt failed."""
        return [
            number
            for number, outcome in self.outcomes.items()
            if outcome is MergeOutcome.FAILED
        ]

    @property
    def merged(self) -> list[int]:
        """Pull requests that were merged."""
        return [
            number
            for number, outcome in self.outcomes.items()
            if outcome is MergeOutcome.MERGED
        ]


class QueueManager:
    """Process pull requests one at a time, retrying failed merges.

    Tasks are handled in FIFO order. A task whose merge failed goes to the
    back of the queue and waits ``2 ** tries`` seconds before its next
    attempt, which also delays every task behind it.

    Parameters
    ----------
    client : GitHubClient
        Client for GitHub operations.
    policy : MergePolicy
        Merge policy, including the maximum number of attempts.
    repo : RepoContext
        Repository the pull requests belong to.

    Attributes
    ----------
    pr_processor : PRProcessor
        Processor for individual merge attempts.

    """

    def __init__(self, client: GitHubClient, policy: MergePolicy, repo: RepoContext):
        self.repo = repo
        self.max_tries = policy.max_tries
        self.pr_processor = PRProcessor(client=client, policy=policy)

    def automerge_pull_requests(self, numbers: Iterable[int]) -> QueueResult:
        """Try to merge each pull request until it is settled.

        Parameters
        ----------
        numbers : Iterable[int]
            Pull request numbers, in processing order.

        Returns
        -------
        QueueResult
            Final outcome per pull request.

        Raises
        ------
        GitHubAPIError
            If fetching pull request, branch, check or repository state fails.

        """
        retries = self.max_tries - 1
        queue: deque[RetryTask] = deque(RetryTask(number=number) for number in numbers)
        result = QueueResult()

        while queue:
            task = queue.popleft()

            if task.tries > 0:
                delay = 2**task.tries
                log_info(
                    f"Waiting {delay}s before retrying pull request {task.number}..."
                )
                time.sleep(delay)

            outcome = self.pr_processor.process_pr(
                self.repo, task.number, tries_left=retries - task.tries
            )
            result.outcomes[task.number] = outcome

            if outcome is MergeOutcome.RETRY:
                queue.append(task.next_attempt())

            get_console().print()

        return result
