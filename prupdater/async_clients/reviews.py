"""Async Reviews resource client."""

from typing import TYPE_CHECKING

from prupdater.async_clients.pulls import parse_timestamp
from prupdater.types.pulls import Review, ReviewState

if TYPE_CHECKING:
    from prupdater.async_transport import AsyncHTTPTransport


class AsyncReviewsClient:
    """Async client for pull request review operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async reviews client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def list(self, owner: str, repo: str, number: int) -> list[Review]:
        """
        List the full review history of a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Pull request number

        Returns:
            List of Review objects, in the order returned by the API
        """
        items = await self.transport.paginate(f"/repos/{owner}/{repo}/pulls/{number}/reviews")
        return [
            Review(
                reviewer=(review.get("user") or {}).get("login"),
                state=ReviewState.parse(review.get("state")),
                submitted_at=parse_timestamp(review.get("submitted_at")),
                review_id=review.get("id"),
            )
            for review in items
        ]
