"""
Find the oldest approved pull request and update its branch.

The run scans open pull requests oldest first, stops at the first one that is
ready, publishes its outputs and asks GitHub to update its branch exactly
once. Branch update failures are reported, never raised.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING

from prupdater.outputs import OutputSink
from prupdater.readiness import evaluate_readiness
from prupdater.reconcile import summarize_reviews
from prupdater.types.pulls import (
    ApprovalSummary,
    PullRequest,
    Readiness,
    UpdateOutcome,
    UpdateResult,
)
from prupdater.types.repos import RepoRef

if TYPE_CHECKING:
    from prupdater.async_client import AsyncGitHubClient

logger = logging.getLogger("prupdater")

MERGE_CONFLICT_STATUS = 422
MERGE_CONFLICT_MARKER = "merge conflict"


def classify_update_error(error: Exception) -> UpdateOutcome:
    """
    Classify a failed branch update.

    GitHub reports conflicts between head and base as a 422 whose message
    contains "merge conflict"; everything else is a plain failure.
    """
    status = getattr(error, "status", None)
    message = getattr(error, "message", None) or str(error)
    if status == MERGE_CONFLICT_STATUS and MERGE_CONFLICT_MARKER in message.lower():
        return UpdateOutcome.CONFLICT
    return UpdateOutcome.FAILED


async def find_first_ready(
    pull_requests: Iterable[PullRequest],
    check: Callable[[PullRequest], Awaitable[Readiness]],
) -> tuple[PullRequest, Readiness] | None:
    """
    Return the first pull request whose check reports ready.

    Candidates are checked one at a time in the given order; none after the
    first ready one is checked.
    """
    for pull_request in pull_requests:
        readiness = await check(pull_request)
        if readiness.ready:
            return pull_request, readiness
    return None


async def check_pull_request(
    client: "AsyncGitHubClient",
    repo: RepoRef,
    pull_request: PullRequest,
) -> Readiness:
    """
    Fetch detail and reviews of a pull request and evaluate its readiness.

    Reviews are not fetched when review requests are still outstanding,
    since those block regardless of the approvals.
    """
    logger.info("Checking PR #%d: %s...", pull_request.number, pull_request.title)

    detail = await client.pulls.get(repo.owner, repo.name, pull_request.number)
    if detail.has_pending_reviews:
        summary = ApprovalSummary(approval_count=0, has_changes_requested=False)
    else:
        reviews = await client.reviews.list(repo.owner, repo.name, pull_request.number)
        summary = summarize_reviews(reviews)
        logger.debug(
            "PR #%d verdicts: %s",
            pull_request.number,
            ", ".join(f"{v.reviewer}={v.state.value}" for v in summary.verdicts) or "none",
        )

    readiness = evaluate_readiness(pull_request, detail, summary)
    logger.info(readiness.reason)
    return readiness


def set_pull_request_outputs(pull_request: PullRequest, outputs: OutputSink) -> None:
    """Publish the identifying outputs of the selected pull request."""
    outputs.set_output("pr_number", pull_request.number)
    outputs.set_output("pr_title", pull_request.title)
    outputs.set_output("pr_url", pull_request.html_url)
    outputs.set_output("branch_name", pull_request.head_ref)


async def update_pull_request_branch(
    client: "AsyncGitHubClient",
    repo: RepoRef,
    pull_request: PullRequest,
    outputs: OutputSink,
) -> UpdateResult:
    """
    Update the branch of a pull request and report the outcome.

    Returns:
        UpdateResult; update errors are classified, logged and reported
        through outputs instead of being raised
    """
    logger.info("Updating PR branch for PR #%d...", pull_request.number)
    try:
        await client.pulls.update_branch(repo.owner, repo.name, pull_request.number)
    except Exception as e:
        message = getattr(e, "message", None) or str(e)
        logger.warning("Error updating branch: %s", message)
        outputs.set_output("branch_updated", "false")

        outcome = classify_update_error(e)
        if outcome == UpdateOutcome.CONFLICT:
            outputs.set_output("has_conflicts", "true")
            logger.warning("The PR branch has conflicts that need manual resolution")
        return UpdateResult(pull_request, outcome, message)

    logger.info("Successfully updated branch for PR #%d", pull_request.number)
    outputs.set_output("branch_updated", "true")
    return UpdateResult(pull_request, UpdateOutcome.UPDATED)


async def run(
    client: "AsyncGitHubClient",
    repo: RepoRef,
    outputs: OutputSink,
    base_branch: str | None = None,
) -> UpdateResult | None:
    """
    Update the branch of the oldest ready pull request.

    Args:
        client: GitHub API client
        repo: Repository to scan
        outputs: Sink receiving the run outputs
        base_branch: Only consider pull requests against this branch

    Returns:
        UpdateResult for the pull request acted on, or None when no pull
        request is ready

    Raises:
        GitHubError: When listing pull requests or fetching their detail
            or reviews fails
    """
    logger.info("Searching for approved PRs in %s...", repo)

    pull_requests = await client.pulls.list_open(repo.owner, repo.name, base=base_branch)

    async def check(pull_request: PullRequest) -> Readiness:
        return await check_pull_request(client, repo, pull_request)

    found = await find_first_ready(pull_requests, check)
    if found is None:
        logger.info("No approved pull requests found that meet all criteria.")
        return None

    pull_request, _ = found
    set_pull_request_outputs(pull_request, outputs)
    return await update_pull_request_branch(client, repo, pull_request, outputs)
