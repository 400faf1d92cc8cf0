"""prupdater async resource clients."""

from prupdater.async_clients.pulls import AsyncPullsClient
from prupdater.async_clients.reviews import AsyncReviewsClient

__all__ = [
    "AsyncPullsClient",
    "AsyncReviewsClient",
]
