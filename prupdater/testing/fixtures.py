"""
Pytest fixtures for prupdater testing.

Provides factories and fixtures for pull requests, reviews and the mock client.
"""

from collections.abc import Generator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from prupdater.outputs import MemoryOutputs
from prupdater.testing.mock import MockGitHubClient
from prupdater.types.pulls import PullRequest, PullRequestDetail, Review, ReviewState
from prupdater.types.repos import RepoRef

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


# ============================================================================
# Factories
# ============================================================================


def create_mock_pull_request(number: int = 1, **kwargs: Any) -> PullRequest:
    """
    Create a PullRequest with customizable fields.

    Args:
        number: Pull request number
        **kwargs: Additional fields to override

    Returns:
        PullRequest object; creation time grows with the number so that
        ascending numbers are oldest first
    """
    defaults = {
        "title": f"Test PR {number}",
        "html_url": f"https://github.com/octo/repo/pull/{number}",
        "head_ref": f"feature-{number}",
        "head_sha": f"{number:040x}",
        "base_ref": "main",
        "created_at": BASE_TIME + timedelta(hours=number),
        "draft": False,
    }
    defaults.update(kwargs)
    return PullRequest(number=number, **defaults)


def create_mock_detail(
    number: int = 1,
    requested_reviewers: tuple[str, ...] = (),
    requested_teams: tuple[str, ...] = (),
    **kwargs: Any,
) -> PullRequestDetail:
    """Create a PullRequestDetail with customizable review requests."""
    return PullRequestDetail(
        number=number,
        requested_reviewers=tuple(requested_reviewers),
        requested_teams=tuple(requested_teams),
        **kwargs,
    )


def create_mock_review(
    reviewer: str = "reviewer",
    state: ReviewState | str = ReviewState.APPROVED,
    at: int | datetime = 0,
    review_id: int | None = None,
) -> Review:
    """
    Create a submitted Review.

    Args:
        reviewer: Reviewer login
        state: Review state (enum or wire value)
        at: Submission time, or hours after BASE_TIME
        review_id: Optional review id
    """
    submitted_at = at if isinstance(at, datetime) else BASE_TIME + timedelta(hours=at)
    if not isinstance(state, ReviewState):
        state = ReviewState.parse(state)
    return Review(reviewer=reviewer, state=state, submitted_at=submitted_at, review_id=review_id)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_client() -> Generator[MockGitHubClient, None, None]:
    """
    Provide a MockGitHubClient for testing.

    Example:
        ```python
        def test_my_feature(mock_client):
            mock_client.pulls.configure_list_open(response=[...])
            result = asyncio.run(run(mock_client, repo, outputs))
            assert mock_client.was_called("pulls.update_branch")
        ```
    """
    client = MockGitHubClient()
    yield client
    client.reset()


@pytest.fixture
def repo_ref() -> RepoRef:
    """Provide a test repository."""
    return RepoRef(owner="octo", name="repo")


@pytest.fixture
def memory_outputs() -> MemoryOutputs:
    """Provide an in-memory output sink."""
    return MemoryOutputs()


@pytest.fixture
def sample_pull_request() -> PullRequest:
    """Provide a sample pull request."""
    return create_mock_pull_request(number=5, title="Add feature")


@pytest.fixture
def approved_reviews() -> list[Review]:
    """Provide a review history with one approval and nothing blocking."""
    return [
        create_mock_review("alice", ReviewState.COMMENTED, at=1),
        create_mock_review("alice", ReviewState.APPROVED, at=2),
    ]
