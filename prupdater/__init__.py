"""prupdater - keep the oldest approved pull request up to date with its base branch."""

# Defined before the imports below; the transport reads it for its User-Agent
__version__ = "0.1.0"

from prupdater.async_client import AsyncGitHubClient
from prupdater.auth import AppAuth, Auth, TokenAuth
from prupdater.config import Settings
from prupdater.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    GitHubError,
    NotFoundError,
    RateLimitedError,
    SecondaryRateLimitError,
    ServerError,
    ValidationError,
)
from prupdater.logging import configure_logging, get_logger
from prupdater.outputs import GitHubOutputs, MemoryOutputs, OutputSink
from prupdater.readiness import evaluate_readiness
from prupdater.reconcile import latest_verdicts, summarize_reviews
from prupdater.signers import RS256Signer, Signer
from prupdater.transport import RateLimitPolicy, RetryConfig
from prupdater.updater import classify_update_error, find_first_ready, run

__all__ = [
    "__version__",
    # Client
    "AsyncGitHubClient",
    # Auth
    "Auth",
    "TokenAuth",
    "AppAuth",
    "Signer",
    "RS256Signer",
    # Configuration
    "Settings",
    # Exceptions
    "GitHubError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ValidationError",
    "RateLimitedError",
    "SecondaryRateLimitError",
    "ServerError",
    "ConfigurationError",
    # Transport
    "RetryConfig",
    "RateLimitPolicy",
    # Decision logic
    "latest_verdicts",
    "summarize_reviews",
    "evaluate_readiness",
    "classify_update_error",
    "find_first_ready",
    "run",
    # Outputs
    "OutputSink",
    "GitHubOutputs",
    "MemoryOutputs",
    # Logging
    "configure_logging",
    "get_logger",
]
