"""prupdater type definitions.

This module exports all data model types used by the package.
"""

from prupdater.types.pulls import (
    ApprovalSummary,
    PullRequest,
    PullRequestDetail,
    Readiness,
    Review,
    ReviewerVerdict,
    ReviewState,
    UpdateOutcome,
    UpdateResult,
)
from prupdater.types.repos import RepoRef

__all__ = [
    # Pull request types
    "PullRequest",
    "PullRequestDetail",
    "Review",
    "ReviewState",
    # Derived review types
    "ReviewerVerdict",
    "ApprovalSummary",
    "Readiness",
    # Update types
    "UpdateOutcome",
    "UpdateResult",
    # Repository types
    "RepoRef",
]
