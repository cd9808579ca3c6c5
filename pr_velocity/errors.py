"""Error types raised by the retrieval and request layers.

The categories are disjoint so a caller can tell a retryable failure
(rate limit, connection) from one that must be surfaced (bad input,
unknown repository, bad token).
"""


class PRVelocityError(Exception):
    """Base class for all report errors."""

    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRequestError(PRVelocityError):
    """The caller supplied a missing or malformed parameter."""

    http_status = 400


class DateRangeTooLargeError(InvalidRequestError):
    """The requested window is longer than the configured maximum."""


class GitHubError(PRVelocityError):
    """A failure while talking to the GitHub API."""

    http_status = 502


class RepositoryNotFoundError(GitHubError):
    http_status = 404


class RateLimitError(GitHubError):
    http_status = 429


class AuthenticationError(GitHubError):
    http_status = 401


class GitHubAPIError(GitHubError):
    """Any other non-success status from the API."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class GitHubConnectionError(GitHubError):
    """The API could not be reached at all."""
