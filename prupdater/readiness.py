"""Readiness evaluation of a single pull request."""

from prupdater.types.pulls import ApprovalSummary, PullRequest, PullRequestDetail, Readiness


def evaluate_readiness(
    pull_request: PullRequest,
    detail: PullRequestDetail,
    summary: ApprovalSummary,
) -> Readiness:
    """
    Decide whether a pull request is ready for a branch update.

    First match wins:

    1. Outstanding reviewer or team requests block, even if others approved.
    2. Without a valid approval the pull request is not ready.
    3. Otherwise it is ready.

    Args:
        pull_request: The candidate pull request
        detail: Its outstanding review requests
        summary: Its reconciled approval summary

    Returns:
        Readiness with a reason suitable for logging
    """
    number = pull_request.number

    if detail.has_pending_reviews:
        return Readiness(False, f"PR #{number} has pending reviews. Skipping.")

    if not summary.has_valid_approval:
        if summary.approval_count > 0 and summary.has_changes_requested:
            return Readiness(
                False,
                f"PR #{number} has approval(s) but also has pending change requests. Skipping.",
            )
        return Readiness(False, f"PR #{number} does not have required approvals. Skipping.")

    return Readiness(
        True,
        f"Found approved PR #{number}: {pull_request.title} with "
        f"{summary.approval_count} approval(s), no pending change requests, "
        "and no pending reviews",
    )
