"""prupdater testing utilities.

Provides a mock client and fixtures for testing code built on prupdater.
"""

from prupdater.testing.fixtures import (
    create_mock_detail,
    create_mock_pull_request,
    create_mock_review,
)
from prupdater.testing.mock import MockCall, MockGitHubClient, MockResponse

__all__ = [
    # Mock client
    "MockGitHubClient",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_pull_request",
    "create_mock_detail",
    "create_mock_review",
]
