"""prupdater exception classes."""


class GitHubError(Exception):
    """Base exception for all prupdater errors raised by the GitHub API layer."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        request_id: str | None = None,
    ) -> None:
        self.message = message
        self.status = status
        self.request_id = request_id
        if status is None:
            super().__init__(message)
        else:
            super().__init__(f"[{status}] {message}")


class ConfigurationError(GitHubError):
    """Raised when run inputs are invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class AuthenticationError(GitHubError):
    """Raised when the credentials are rejected (401)."""

    pass


class AuthorizationError(GitHubError):
    """Raised when access is denied (403 that is not a rate limit)."""

    pass


class NotFoundError(GitHubError):
    """Raised when a resource is not found."""

    pass


class ValidationError(GitHubError):
    """Raised on unprocessable requests (422, merge conflicts) and other 4xx errors."""

    pass


class RateLimitedError(GitHubError):
    """Raised when the primary rate limit quota is exhausted."""

    def __init__(
        self,
        message: str,
        status: int,
        retry_after: float,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message, status, request_id)
        self.retry_after = retry_after


class SecondaryRateLimitError(RateLimitedError):
    """Raised when a secondary (abuse) rate limit is hit."""

    pass


class ServerError(GitHubError):
    """Raised on server errors (5xx) and connection failures."""

    pass
