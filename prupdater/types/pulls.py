"""Pull request and review data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ReviewState(str, Enum):
    """Review states as reported by the GitHub API."""

    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    COMMENTED = "COMMENTED"
    DISMISSED = "DISMISSED"
    PENDING = "PENDING"

    @classmethod
    def parse(cls, value: str | None) -> "ReviewState":
        """Parse a wire value; unknown states are treated as comments."""
        try:
            return cls((value or "").upper())
        except ValueError:
            return cls.COMMENTED


class UpdateOutcome(str, Enum):
    """Terminal state of a branch update attempt."""

    UPDATED = "updated"
    CONFLICT = "conflict"
    FAILED = "failed"


@dataclass(frozen=True)
class PullRequest:
    """Open pull request as returned by the listing endpoint."""

    number: int
    title: str
    html_url: str
    head_ref: str
    head_sha: str
    base_ref: str
    created_at: datetime
    draft: bool = False


@dataclass(frozen=True)
class PullRequestDetail:
    """Per-pull-request detail: outstanding review requests."""

    number: int
    requested_reviewers: tuple[str, ...] = ()
    requested_teams: tuple[str, ...] = ()

    @property
    def has_pending_reviews(self) -> bool:
        return bool(self.requested_reviewers or self.requested_teams)


@dataclass(frozen=True)
class Review:
    """Pull request review."""

    reviewer: str | None
    state: ReviewState
    submitted_at: datetime | None  # None for unsubmitted (PENDING) reviews
    review_id: int | None = None


@dataclass(frozen=True)
class ReviewerVerdict:
    """Latest review state of a single reviewer."""

    reviewer: str
    state: ReviewState
    submitted_at: datetime


@dataclass(frozen=True)
class ApprovalSummary:
    """Aggregate of all reviewer verdicts for one pull request."""

    approval_count: int
    has_changes_requested: bool
    verdicts: tuple[ReviewerVerdict, ...] = field(default=(), compare=False)

    @property
    def has_valid_approval(self) -> bool:
        return self.approval_count > 0 and not self.has_changes_requested


@dataclass(frozen=True)
class Readiness:
    """Readiness verdict for a pull request, with a human-readable reason."""

    ready: bool
    reason: str


@dataclass(frozen=True)
class UpdateResult:
    """Result of acting on the first ready pull request."""

    pull_request: PullRequest
    outcome: UpdateOutcome
    message: str | None = None
