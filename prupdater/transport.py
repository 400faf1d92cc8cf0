"""
Transport building blocks for prupdater.

Retry configuration, the rate-limit policy, and parsing of GitHub error
responses into typed exceptions. Used by the async HTTP transport.
"""

import logging
import math
import re
import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from prupdater.exceptions import (
    AuthenticationError,
    AuthorizationError,
    GitHubError,
    NotFoundError,
    RateLimitedError,
    SecondaryRateLimitError,
    ServerError,
    ValidationError,
)

logger = logging.getLogger("prupdater.http")

_SECONDARY_LIMIT_PATTERN = re.compile(r"secondary rate|abuse", re.IGNORECASE)

# Wait used for secondary limits that do not announce a Retry-After
DEFAULT_SECONDARY_RETRY_AFTER = 60.0


@dataclass
class RetryConfig:
    """Configuration for automatic retry of transient failures."""

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [500, 502, 503, 504])
    respect_retry_after: bool = True
    max_backoff: float = 60.0  # Maximum backoff time in seconds
    jitter: float = 0.1  # Jitter factor (0.1 = ±10%)


@dataclass
class RateLimitPolicy:
    """
    Decides whether a rate-limited request is retried.

    Primary quota exhaustion is retried ``max_primary_retries`` times (once by
    default). Secondary (abuse) limits are only logged, so the request fails
    upward.
    """

    max_primary_retries: int = 1

    def on_rate_limit(self, retry_after: float, method: str, url: str, retry_count: int) -> bool:
        logger.warning("Request quota exhausted for request %s %s", method, url)
        if retry_count < self.max_primary_retries:
            logger.info("Retrying after %s seconds!", retry_after)
            return True
        return False

    def on_secondary_rate_limit(
        self, retry_after: float, method: str, url: str, retry_count: int
    ) -> bool:
        logger.warning("SecondaryRateLimit detected for request %s %s", method, url)
        return False


def error_message(data: Any, status_code: int) -> str:
    """
    Build an error message from a GitHub error body.

    GitHub error bodies look like ``{"message": ..., "errors": [...]}``; the
    nested error messages are appended so that details such as
    ``merge conflict`` survive.
    """
    if not isinstance(data, dict):
        return f"HTTP {status_code}"

    message = str(data.get("message") or f"HTTP {status_code}")
    details: list[str] = []
    for item in data.get("errors") or []:
        if isinstance(item, dict):
            detail = item.get("message") or item.get("code")
            if detail:
                details.append(str(detail))
        elif item:
            details.append(str(item))

    if details:
        message = f"{message} - {', '.join(details)}"
    return message


def _retry_after_seconds(headers: httpx.Headers, now: float | None = None) -> float | None:
    """Seconds to wait according to Retry-After or x-ratelimit-reset."""
    retry_after = headers.get("Retry-After")
    if retry_after:
        try:
            return max(float(retry_after), 0.0)
        except ValueError:
            pass

    reset = headers.get("x-ratelimit-reset")
    if reset:
        try:
            current = time.time() if now is None else now
            return float(max(math.ceil(float(reset) - current), 0))
        except ValueError:
            pass

    return None


def classify_rate_limit(
    status_code: int, headers: httpx.Headers, message: str, now: float | None = None
) -> tuple[str, float] | None:
    """
    Classify a response as a primary or secondary rate limit.

    Returns:
        ``("primary", retry_after)``, ``("secondary", retry_after)`` or None
        when the response is not rate limited
    """
    if status_code not in (403, 429):
        return None

    retry_after = _retry_after_seconds(headers, now)

    if headers.get("x-ratelimit-remaining") == "0":
        return "primary", retry_after if retry_after is not None else 0.0

    if (
        _SECONDARY_LIMIT_PATTERN.search(message)
        or headers.get("Retry-After") is not None
        or status_code == 429
    ):
        if retry_after is None:
            retry_after = DEFAULT_SECONDARY_RETRY_AFTER
        return "secondary", retry_after

    return None


def parse_error_response(response: httpx.Response) -> GitHubError:
    """
    Parse an error response into a typed exception.

    Args:
        response: HTTP response with error status

    Returns:
        Appropriate GitHubError subclass
    """
    try:
        data = response.json()
    except ValueError:
        data = {}

    status_code = response.status_code
    message = error_message(data, status_code)
    request_id = response.headers.get("X-GitHub-Request-Id")

    rate_limit = classify_rate_limit(status_code, response.headers, message)
    if rate_limit is not None:
        kind, retry_after = rate_limit
        if kind == "primary":
            return RateLimitedError(message, status_code, retry_after, request_id)
        return SecondaryRateLimitError(message, status_code, retry_after, request_id)

    if status_code == 401:
        return AuthenticationError(message, status_code, request_id)
    elif status_code == 403:
        return AuthorizationError(message, status_code, request_id)
    elif status_code == 404:
        return NotFoundError(message, status_code, request_id)
    elif status_code >= 500:
        return ServerError(message, status_code, request_id)
    else:
        return ValidationError(message, status_code, request_id)
