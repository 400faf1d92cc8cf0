"""
Tests for the pulls and reviews resource clients.

Feature: resource-clients
"""

import asyncio
from datetime import datetime, timezone
from typing import Any

import httpx
import pytest

from prupdater.async_client import AsyncGitHubClient
from prupdater.auth import TokenAuth
from prupdater.exceptions import ValidationError
from prupdater.transport import RetryConfig
from prupdater.types.pulls import ReviewState


def pull_payload(number: int, created_at: str = "2024-03-01T10:00:00Z", **extra: Any) -> dict[str, Any]:
    payload = {
        "number": number,
        "title": f"PR {number}",
        "html_url": f"https://github.com/octo/repo/pull/{number}",
        "created_at": created_at,
        "draft": False,
        "head": {"ref": f"feature-{number}", "sha": f"sha{number}"},
        "base": {"ref": "main", "sha": "basesha"},
        "requested_reviewers": [],
        "requested_teams": [],
    }
    payload.update(extra)
    return payload


def run_with(handler, fn):
    async def runner():
        async with AsyncGitHubClient(
            auth=TokenAuth("ghp_testtoken"),
            retry_config=RetryConfig(max_retries=0),
            http_transport=httpx.MockTransport(handler),
        ) as client:
            return await fn(client)

    return asyncio.run(runner())


class TestPullsClient:
    """AsyncPullsClient parsing and request shapes."""

    def test_list_open_parses_pull_requests(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[pull_payload(7), pull_payload(9, "2024-03-02T10:00:00Z")])

        pulls = run_with(handler, lambda c: c.pulls.list_open("octo", "repo"))

        assert [pr.number for pr in pulls] == [7, 9]
        first = pulls[0]
        assert first.title == "PR 7"
        assert first.html_url == "https://github.com/octo/repo/pull/7"
        assert first.head_ref == "feature-7"
        assert first.head_sha == "sha7"
        assert first.base_ref == "main"
        assert first.created_at == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)

        params = seen[0].url.params
        assert seen[0].url.path == "/repos/octo/repo/pulls"
        assert params["state"] == "open"
        assert params["sort"] == "created"
        assert params["direction"] == "asc"
        assert "base" not in params

    def test_list_open_with_base_filter(self, caplog) -> None:
        caplog.set_level("INFO", logger="prupdater")
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        pulls = run_with(handler, lambda c: c.pulls.list_open("octo", "repo", base="develop"))

        assert pulls == []
        assert seen[0].url.params["base"] == "develop"
        assert "Filtering PRs by base branch: develop" in caplog.text
        assert "Found 0 open pull requests." in caplog.text

    def test_get_parses_review_requests(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/repos/octo/repo/pulls/7"
            return httpx.Response(
                200,
                json=pull_payload(
                    7,
                    requested_reviewers=[{"login": "carol"}, {"login": "dave"}],
                    requested_teams=[{"slug": "core", "name": "Core"}],
                    mergeable_state="behind",
                ),
            )

        detail = run_with(handler, lambda c: c.pulls.get("octo", "repo", 7))

        assert detail.number == 7
        assert detail.requested_reviewers == ("carol", "dave")
        assert detail.requested_teams == ("core",)
        assert detail.has_pending_reviews is True

    def test_get_without_review_requests(self) -> None:
        detail = run_with(
            lambda request: httpx.Response(200, json=pull_payload(7)),
            lambda c: c.pulls.get("octo", "repo", 7),
        )

        assert detail.has_pending_reviews is False

    def test_update_branch(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                202,
                json={"message": "Updating pull request branch.", "url": "https://github.com/octo/repo/pull/7"},
            )

        message = run_with(
            handler,
            lambda c: c.pulls.update_branch("octo", "repo", 7),
        )

        assert message == "Updating pull request branch."
        assert seen[0].method == "PUT"
        assert seen[0].url.path == "/repos/octo/repo/pulls/7/update-branch"
        assert seen[0].content == b""

    def test_update_branch_conflict(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(422, json={"message": "merge conflict between base and head"})

        with pytest.raises(ValidationError) as exc_info:
            run_with(handler, lambda c: c.pulls.update_branch("octo", "repo", 7))

        assert exc_info.value.status == 422


class TestReviewsClient:
    """AsyncReviewsClient parsing."""

    def test_list_parses_reviews(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/repos/octo/repo/pulls/7/reviews"
            return httpx.Response(
                200,
                json=[
                    {"id": 1, "user": {"login": "alice"}, "state": "APPROVED", "submitted_at": "2024-03-01T10:00:00Z"},
                    {"id": 2, "user": {"login": "bob"}, "state": "CHANGES_REQUESTED", "submitted_at": "2024-03-01T11:00:00Z"},
                    {"id": 3, "user": None, "state": "COMMENTED", "submitted_at": "2024-03-01T12:00:00Z"},
                    {"id": 4, "user": {"login": "carol"}, "state": "PENDING"},
                    {"id": 5, "user": {"login": "dave"}, "state": "SOMETHING_NEW", "submitted_at": "2024-03-01T13:00:00Z"},
                ],
            )

        reviews = run_with(handler, lambda c: c.reviews.list("octo", "repo", 7))

        assert [r.review_id for r in reviews] == [1, 2, 3, 4, 5]
        assert reviews[0].reviewer == "alice"
        assert reviews[0].state == ReviewState.APPROVED
        assert reviews[0].submitted_at == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
        assert reviews[1].state == ReviewState.CHANGES_REQUESTED
        assert reviews[2].reviewer is None
        assert reviews[3].state == ReviewState.PENDING
        assert reviews[3].submitted_at is None
        assert reviews[4].state == ReviewState.COMMENTED
