"""Command-line entry point for prupdater.

Inside a workflow the action inputs arrive as ``INPUT_*`` environment
variables; the flags below override them for local runs.
"""

import argparse
import asyncio
import logging
import os
from collections.abc import Mapping, Sequence

from prupdater.async_client import AsyncGitHubClient
from prupdater.config import Settings
from prupdater.exceptions import GitHubError
from prupdater.logging import configure_logging, safe_log_dict
from prupdater.outputs import GitHubOutputs, OutputSink
from prupdater.types.pulls import UpdateResult
from prupdater.updater import run

logger = logging.getLogger("prupdater")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="prupdater",
        description=(
            "Find the oldest open pull request that is approved and has no "
            "pending review requests, and update its branch from the base branch."
        ),
    )
    parser.add_argument("--repo", help="Repository as owner/name (default: INPUT_REPO or GITHUB_REPOSITORY).")
    parser.add_argument("--base-branch", help="Only consider pull requests against this base branch.")
    parser.add_argument("--api-url", help="GitHub API URL (default: https://api.github.com).")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def _environ_with_overrides(args: argparse.Namespace, environ: Mapping[str, str]) -> dict[str, str]:
    merged = dict(environ)
    if args.repo:
        merged["INPUT_REPO"] = args.repo
    if args.base_branch:
        merged["INPUT_BASE_BRANCH"] = args.base_branch
    if args.api_url:
        merged["INPUT_API_URL"] = args.api_url
    if args.debug:
        merged["RUNNER_DEBUG"] = "1"
    return merged


async def _run(settings: Settings, outputs: OutputSink) -> UpdateResult | None:
    async with AsyncGitHubClient.from_settings(settings) as client:
        return await run(client, settings.repo, outputs, base_branch=settings.base_branch)


def main(
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
    outputs: OutputSink | None = None,
) -> int:
    """
    Run the updater once.

    Returns:
        Process exit code: 0 when the run completed (whether or not a pull
        request was updated), 1 on configuration or API failures
    """
    args = parse_args(argv)
    environ = _environ_with_overrides(args, os.environ if environ is None else environ)

    configure_logging(
        level=logging.DEBUG if environ.get("RUNNER_DEBUG") == "1" else logging.INFO,
        actions=environ.get("GITHUB_ACTIONS") == "true",
    )

    try:
        settings = Settings.from_env(environ)
        logger.debug("Settings: %s", safe_log_dict(settings.describe()))

        if outputs is None:
            outputs = GitHubOutputs(environ=environ)

        asyncio.run(_run(settings, outputs))
    except GitHubError as e:
        logger.error("Action failed: %s", e.message)
        return 1
    except Exception as e:
        # Malformed API payloads and anything else unexpected
        logger.debug("Unexpected error", exc_info=True)
        logger.error("Action failed: %s: %s", type(e).__name__, e)
        return 1

    return 0
