"""
Async HTTP Transport for prupdater.

Handles async HTTP communication with the GitHub REST API: authentication
headers, retry of transient failures, the rate-limit policy, pagination and
error parsing, using the httpx async client.
"""

import asyncio
import random
import time
from typing import TYPE_CHECKING, Any

import httpx

from prupdater import __version__
from prupdater.exceptions import (
    RateLimitedError,
    SecondaryRateLimitError,
    ServerError,
)
from prupdater.logging import log_http_request, log_http_response
from prupdater.transport import RateLimitPolicy, RetryConfig, parse_error_response

if TYPE_CHECKING:
    from prupdater.auth import Auth

API_VERSION = "2022-11-28"
PER_PAGE = 100


class AsyncHTTPTransport:
    """
    Async HTTP transport layer for the GitHub REST API.

    Handles:
    - Authorization header from the configured credential strategy
    - Exponential backoff with jitter for transient failures
    - Primary/secondary rate-limit handling via RateLimitPolicy
    - Link header pagination
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str,
        auth: "Auth | None" = None,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        rate_limit_policy: RateLimitPolicy | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            auth: Credential strategy providing the Authorization header
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
            rate_limit_policy: Policy deciding retries on rate limits
            http_transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.base_url = base_url.rstrip("/")
        self.auth = auth
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()
        self.rate_limit_policy = rate_limit_policy or RateLimitPolicy()

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=http_transport,
            headers={
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
                "User-Agent": f"prupdater/{__version__}",
            },
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        authenticate: bool = True,
    ) -> Any:
        """
        Make a request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: API path (e.g., "/repos/octo/repo/pulls/1")
            params: Query parameters
            body: JSON request body
            headers: Extra request headers
            authenticate: Add the Authorization header from ``auth``

        Returns:
            Parsed JSON response, or None for empty responses

        Raises:
            GitHubError: On API errors
        """
        response = await self._send(method, path, params, body, headers, authenticate)
        return self._decode(response)

    async def paginate(self, path: str, params: dict[str, Any] | None = None) -> list[Any]:
        """
        Fetch every page of a list endpoint.

        Follows ``Link: rel="next"`` headers until the last page, so callers
        always receive the complete collection.

        Raises:
            GitHubError: On API errors
        """
        query: dict[str, Any] | None = {"per_page": PER_PAGE, **(params or {})}
        url: str | None = path
        items: list[Any] = []

        while url:
            response = await self._send("GET", url, query)
            page = self._decode(response)
            if not isinstance(page, list):
                raise ServerError(
                    f"Expected a JSON array from {response.url}", response.status_code
                )
            items.extend(page)

            # The next link already carries the query string
            url = response.links.get("next", {}).get("url")
            query = None

        return items

    async def _send(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        authenticate: bool = True,
    ) -> httpx.Response:
        """
        Send a request, retrying transient failures and rate limits.

        Raises:
            GitHubError: On non-retryable errors or after max retries
        """
        request_headers = dict(headers or {})
        if authenticate and self.auth is not None:
            request_headers["Authorization"] = await self.auth.authorization(self)

        attempt = 0
        rate_limit_retries = 0

        while True:
            log_http_request(method, url, params, body)
            started = time.monotonic()
            try:
                response = await self._client.request(
                    method, url, params=params, json=body, headers=request_headers
                )
            except httpx.RequestError as e:
                # Network errors are retryable
                if attempt >= self.retry_config.max_retries:
                    raise ServerError(f"Connection error: {e}") from e
                await asyncio.sleep(self._get_backoff_time(attempt, None))
                attempt += 1
                continue

            log_http_response(
                response.status_code,
                str(response.url),
                elapsed_ms=(time.monotonic() - started) * 1000,
                rate_limit_remaining=response.headers.get("x-ratelimit-remaining"),
            )

            if response.status_code < 400:
                return response

            error = parse_error_response(response)

            if isinstance(error, RateLimitedError):
                if isinstance(error, SecondaryRateLimitError):
                    retry = self.rate_limit_policy.on_secondary_rate_limit(
                        error.retry_after, method, str(response.url), rate_limit_retries
                    )
                else:
                    retry = self.rate_limit_policy.on_rate_limit(
                        error.retry_after, method, str(response.url), rate_limit_retries
                    )
                if not retry:
                    raise error
                rate_limit_retries += 1
                await asyncio.sleep(error.retry_after)
                continue

            if not self._should_retry(response.status_code, attempt):
                raise error

            wait_time = self._get_backoff_time(attempt, response.headers.get("Retry-After"))
            await asyncio.sleep(wait_time)
            attempt += 1

    def _decode(self, response: httpx.Response) -> Any:
        """Decode a JSON body; empty bodies decode to None."""
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ServerError(
                f"Invalid JSON in response from {response.url}", response.status_code
            ) from e

    def _should_retry(self, status_code: int, attempt: int) -> bool:
        """
        Determine if a request should be retried.

        Args:
            status_code: HTTP status code
            attempt: Current attempt number (0-indexed)

        Returns:
            True if the request should be retried
        """
        if attempt >= self.retry_config.max_retries:
            return False

        return status_code in self.retry_config.retry_on

    def _get_backoff_time(self, attempt: int, retry_after: str | None) -> float:
        """
        Calculate backoff time for retry.

        Uses exponential backoff with jitter, respecting Retry-After header
        if present.

        Args:
            attempt: Current attempt number (0-indexed)
            retry_after: Value of Retry-After header (if present)

        Returns:
            Time to wait in seconds
        """
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return min(float(retry_after), self.retry_config.max_backoff)
            except ValueError:
                pass  # Fall through to exponential backoff

        base_wait = self.retry_config.backoff_factor ** attempt

        jitter_range = base_wait * self.retry_config.jitter
        jitter = random.uniform(-jitter_range, jitter_range)
        wait_time = base_wait + jitter

        return min(wait_time, self.retry_config.max_backoff)
