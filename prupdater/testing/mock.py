"""
Mock GitHub client for testing.

Provides a MockGitHubClient that mimics the AsyncGitHubClient interface
without making actual API calls.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, TypeVar

from prupdater.types.pulls import PullRequest, PullRequestDetail, Review

T = TypeVar("T")


@dataclass
class MockResponse:
    """Configuration for a mock response."""

    data: Any
    error: Exception | None = None
    call_count: int = 0


@dataclass
class MockCall:
    """Record of a method call."""

    method: str
    args: tuple[Any, ...]
    kwargs: dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class _MockResource:
    """Response lookup shared by the mock resource clients."""

    def __init__(self, mock_client: "MockGitHubClient") -> None:
        self._mock = mock_client
        self._responses: dict[tuple[str, int | None], MockResponse] = {}

    def _configure(
        self,
        method: str,
        number: int | None,
        response: Any,
        error: Exception | None,
    ) -> None:
        self._responses[(method, number)] = MockResponse(data=response, error=error)

    def _get_response(self, method: str, number: int | None, default: T) -> T:
        """Get the response configured for this number, else for any number, else default."""
        resp = self._responses.get((method, number)) or self._responses.get((method, None))
        if resp is not None:
            resp.call_count += 1
            if resp.error:
                raise resp.error
            if resp.data is not None:
                return resp.data
        return default


class MockPullsClient(_MockResource):
    """Mock pulls client for testing."""

    def configure_list_open(
        self,
        response: list[PullRequest] | None = None,
        error: Exception | None = None,
    ) -> None:
        """Configure the response for list_open() calls."""
        self._configure("list_open", None, response, error)

    def configure_get(
        self,
        number: int | None = None,
        response: PullRequestDetail | None = None,
        error: Exception | None = None,
    ) -> None:
        """Configure the response for get() calls, for one pull request or all."""
        self._configure("get", number, response, error)

    def configure_update_branch(
        self,
        number: int | None = None,
        response: str | None = None,
        error: Exception | None = None,
    ) -> None:
        """Configure the response for update_branch() calls."""
        self._configure("update_branch", number, response, error)

    async def list_open(
        self,
        owner: str,
        repo: str,
        base: str | None = None,
    ) -> list[PullRequest]:
        """Mock list_open method."""
        self._mock._record_call("pulls.list_open", (owner, repo), {"base": base})
        return self._get_response("list_open", None, [])

    async def get(self, owner: str, repo: str, number: int) -> PullRequestDetail:
        """Mock get method; defaults to no outstanding review requests."""
        self._mock._record_call("pulls.get", (owner, repo, number), {})
        return self._get_response("get", number, PullRequestDetail(number=number))

    async def update_branch(self, owner: str, repo: str, number: int) -> str | None:
        """Mock update_branch method."""
        self._mock._record_call("pulls.update_branch", (owner, repo, number), {})
        return self._get_response("update_branch", number, "Updating pull request branch.")


class MockReviewsClient(_MockResource):
    """Mock reviews client for testing."""

    def configure_list(
        self,
        number: int | None = None,
        response: list[Review] | None = None,
        error: Exception | None = None,
    ) -> None:
        """Configure the response for list() calls, for one pull request or all."""
        self._configure("list", number, response, error)

    async def list(self, owner: str, repo: str, number: int) -> list[Review]:
        """Mock list method; defaults to no reviews."""
        self._mock._record_call("reviews.list", (owner, repo, number), {})
        return self._get_response("list", number, [])


class MockGitHubClient:
    """
    Mock GitHub client for testing.

    Provides the same interface as AsyncGitHubClient but returns configurable
    mock responses instead of making real API calls.

    Example:
        ```python
        import asyncio
        from prupdater.testing import MockGitHubClient, create_mock_pull_request

        mock = MockGitHubClient()
        mock.pulls.configure_list_open(response=[create_mock_pull_request(number=7)])

        pulls = asyncio.run(mock.pulls.list_open("octo", "repo"))
        assert pulls[0].number == 7

        assert mock.was_called("pulls.list_open")
        assert mock.call_count("pulls.list_open") == 1
        ```
    """

    def __init__(self) -> None:
        self._calls: list[MockCall] = []

        self.pulls = MockPullsClient(self)
        self.reviews = MockReviewsClient(self)

    def _record_call(
        self,
        method: str,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        """Record a method call for verification."""
        self._calls.append(MockCall(method=method, args=args, kwargs=kwargs))

    def was_called(self, method: str) -> bool:
        """
        Check if a method was called.

        Args:
            method: Method name (e.g., "pulls.get", "reviews.list")

        Returns:
            True if the method was called at least once
        """
        return any(call.method == method for call in self._calls)

    def call_count(self, method: str) -> int:
        """
        Get the number of times a method was called.

        Args:
            method: Method name (e.g., "pulls.get", "reviews.list")

        Returns:
            Number of times the method was called
        """
        return sum(1 for call in self._calls if call.method == method)

    def get_calls(self, method: str | None = None) -> list[MockCall]:
        """
        Get recorded calls, optionally filtered by method.

        Args:
            method: Optional method name to filter by

        Returns:
            List of MockCall objects
        """
        if method is None:
            return list(self._calls)
        return [call for call in self._calls if call.method == method]

    def reset(self) -> None:
        """Reset all recorded calls and configured responses."""
        self._calls.clear()
        self.pulls._responses.clear()
        self.reviews._responses.clear()

    async def close(self) -> None:
        """No-op for compatibility with real client."""
        pass

    async def __aenter__(self) -> "MockGitHubClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


__all__ = [
    "MockGitHubClient",
    "MockCall",
    "MockResponse",
]
