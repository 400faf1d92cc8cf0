"""
Review reconciliation.

Collapses the raw review history of a pull request into one verdict per
reviewer and an approval summary. A reviewer's opinion is their most recent
submitted review: an approval followed by a change request blocks, a change
request followed by an approval clears.
"""

from collections.abc import Iterable

from prupdater.types.pulls import ApprovalSummary, Review, ReviewerVerdict, ReviewState


def latest_verdicts(reviews: Iterable[Review]) -> list[ReviewerVerdict]:
    """
    Return the latest submitted review state of every reviewer.

    Reviews without a reviewer (deleted accounts) or without a submission
    time (unsubmitted PENDING reviews) are ignored. When two reviews of the
    same reviewer carry the same timestamp, the one seen later in the input
    wins.

    Args:
        reviews: Review history in any order

    Returns:
        One ReviewerVerdict per reviewer, in order of first appearance
    """
    latest: dict[str, ReviewerVerdict] = {}

    for review in reviews:
        if not review.reviewer or review.submitted_at is None:
            continue

        current = latest.get(review.reviewer)
        if current is None or review.submitted_at >= current.submitted_at:
            latest[review.reviewer] = ReviewerVerdict(
                reviewer=review.reviewer,
                state=review.state,
                submitted_at=review.submitted_at,
            )

    return list(latest.values())


def summarize_verdicts(verdicts: Iterable[ReviewerVerdict]) -> ApprovalSummary:
    """Aggregate reviewer verdicts into an ApprovalSummary."""
    verdicts = tuple(verdicts)
    return ApprovalSummary(
        approval_count=sum(1 for v in verdicts if v.state == ReviewState.APPROVED),
        has_changes_requested=any(v.state == ReviewState.CHANGES_REQUESTED for v in verdicts),
        verdicts=verdicts,
    )


def summarize_reviews(reviews: Iterable[Review]) -> ApprovalSummary:
    """
    Compute the approval summary of a pull request from its review history.

    ``has_valid_approval`` on the result is true iff at least one reviewer's
    latest verdict is an approval and no reviewer's latest verdict requests
    changes.
    """
    return summarize_verdicts(latest_verdicts(reviews))
