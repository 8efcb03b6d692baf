"""Exceptions raised while talking to GitHub."""


class GitHubAPIError(RuntimeError):
    """A ``gh api`` call failed.

    Parameters
    ----------
    message : str
        Error output reported by the gh CLI.
    endpoint : str, optional
        API endpoint that was requested.

    """

    def __init__(self, message: str, endpoint: str | None = None):
        super().__init__(message)
        self.endpoint = endpoint


class NotFoundError(GitHubAPIError):
    """The requested resource does not exist (HTTP 404)."""
