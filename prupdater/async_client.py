"""
prupdater async GitHub client.

Provides the async interface to the parts of the GitHub REST API the
updater needs.
"""

from typing import TYPE_CHECKING, Any

import httpx

from prupdater.async_clients import AsyncPullsClient, AsyncReviewsClient
from prupdater.async_transport import AsyncHTTPTransport
from prupdater.auth import Auth
from prupdater.transport import RateLimitPolicy, RetryConfig

if TYPE_CHECKING:
    from prupdater.config import Settings


class AsyncGitHubClient:
    """
    Async client for the GitHub REST API.

    Aggregates the resource clients and owns the transport.

    Example:
        ```python
        import asyncio
        from prupdater import AsyncGitHubClient, TokenAuth

        async def main():
            async with AsyncGitHubClient(auth=TokenAuth("ghp_...")) as client:
                pulls = await client.pulls.list_open("octo", "repo")
                for pr in pulls:
                    print(pr.number, pr.title)

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        auth: Auth | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
        rate_limit_policy: RateLimitPolicy | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the async GitHub client.

        Args:
            auth: Credential strategy (TokenAuth or AppAuth)
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
            rate_limit_policy: Rate-limit retry policy (optional)
            http_transport: httpx transport override, e.g. for tests (optional)
        """
        self.base_url = base_url
        self.timeout = timeout

        self._transport = AsyncHTTPTransport(
            base_url=base_url,
            auth=auth,
            timeout=timeout,
            retry_config=retry_config,
            rate_limit_policy=rate_limit_policy,
            http_transport=http_transport,
        )

        self.pulls = AsyncPullsClient(self._transport)
        self.reviews = AsyncReviewsClient(self._transport)

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        retry_config: RetryConfig | None = None,
    ) -> "AsyncGitHubClient":
        """
        Create a client from run settings.

        Raises:
            ConfigurationError: If the credentials are invalid
        """
        return cls(
            auth=settings.create_auth(),
            base_url=settings.api_url,
            timeout=settings.timeout,
            retry_config=retry_config,
        )

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying async HTTP transport (for advanced use cases)."""
        return self._transport

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncGitHubClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
