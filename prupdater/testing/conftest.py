"""
Pytest plugin for prupdater testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["prupdater.testing.conftest"]

Or import the fixtures directly:

    from prupdater.testing.fixtures import mock_client, repo_ref
"""

# Re-export all fixtures for pytest auto-discovery
from prupdater.testing.fixtures import (
    approved_reviews,
    memory_outputs,
    mock_client,
    repo_ref,
    sample_pull_request,
)

__all__ = [
    "mock_client",
    "repo_ref",
    "memory_outputs",
    "sample_pull_request",
    "approved_reviews",
]
