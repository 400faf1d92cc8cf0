"""Async Pull requests resource client."""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from prupdater.types.pulls import PullRequest, PullRequestDetail

if TYPE_CHECKING:
    from prupdater.async_transport import AsyncHTTPTransport

logger = logging.getLogger("prupdater")


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a GitHub ISO 8601 timestamp into an aware datetime."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class AsyncPullsClient:
    """Async client for pull request operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async pulls client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def list_open(
        self,
        owner: str,
        repo: str,
        base: str | None = None,
    ) -> list[PullRequest]:
        """
        List open pull requests, oldest first.

        Args:
            owner: Repository owner
            repo: Repository name
            base: Optional filter on the base branch name

        Returns:
            Every open PullRequest (all pages), sorted by creation time ascending
        """
        params: dict[str, str] = {
            "state": "open",
            "sort": "created",
            "direction": "asc",
        }
        if base:
            params["base"] = base
            logger.info("Filtering PRs by base branch: %s", base)

        items = await self.transport.paginate(f"/repos/{owner}/{repo}/pulls", params=params)
        pull_requests = [self._parse_pull_request(item) for item in items]
        logger.info("Found %d open pull requests.", len(pull_requests))
        return pull_requests

    async def get(self, owner: str, repo: str, number: int) -> PullRequestDetail:
        """
        Get pull request detail including outstanding review requests.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Pull request number

        Returns:
            PullRequestDetail with requested reviewers and teams
        """
        data = await self.transport.request("GET", f"/repos/{owner}/{repo}/pulls/{number}")
        return PullRequestDetail(
            number=data["number"],
            requested_reviewers=tuple(
                user["login"] for user in data.get("requested_reviewers") or []
            ),
            requested_teams=tuple(
                team.get("slug") or team.get("name") for team in data.get("requested_teams") or []
            ),
        )

    async def update_branch(self, owner: str, repo: str, number: int) -> str | None:
        """
        Update a pull request branch with the latest changes from its base branch.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Pull request number

        Returns:
            The API's message (e.g. "Updating pull request branch.")

        Raises:
            ValidationError: 422, e.g. on merge conflicts
        """
        data = await self.transport.request(
            "PUT", f"/repos/{owner}/{repo}/pulls/{number}/update-branch"
        )
        return (data or {}).get("message")

    def _parse_pull_request(self, data: dict[str, Any]) -> PullRequest:
        """Parse pull request data from API response."""
        head = data.get("head") or {}
        base = data.get("base") or {}
        return PullRequest(
            number=data["number"],
            title=data.get("title", ""),
            html_url=data.get("html_url", ""),
            head_ref=head.get("ref", ""),
            head_sha=head.get("sha", ""),
            base_ref=base.get("ref", ""),
            created_at=parse_timestamp(data["created_at"]),
            draft=data.get("draft", False),
        )
