"""
prupdater logging utilities.

Provides configurable logging for the run, HTTP requests/responses and
credential exchange. When running inside GitHub Actions, warnings and errors
are rendered as workflow commands so they show up as annotations.
Ensures no sensitive data (tokens, JWTs, private keys) is logged.
"""

import logging
import re
from typing import Any

# Create package loggers
_root_logger = logging.getLogger("prupdater")
_http_logger = logging.getLogger("prupdater.http")
_auth_logger = logging.getLogger("prupdater.auth")

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # Private key patterns (PEM format)
    (re.compile(r"-----BEGIN[^-]*PRIVATE KEY-----.*?-----END[^-]*PRIVATE KEY-----", re.DOTALL), "[PRIVATE_KEY_REDACTED]"),
    # GitHub tokens (classic PATs, fine-grained PATs, installation and OAuth tokens)
    (re.compile(r"\b(gh[pousr]_[A-Za-z0-9]{20,}|github_pat_[A-Za-z0-9_]{20,})\b"), "[TOKEN_REDACTED]"),
    # JWTs (three base64url segments, header starts with eyJ)
    (re.compile(r"\beyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"), "[JWT_REDACTED]"),
    # Authorization header values
    (re.compile(r"Bearer\s+[A-Za-z0-9_.\-]+"), "Bearer [REDACTED]"),
    # Secret/token patterns
    (re.compile(r"(secret|token|password|private_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: [REDACTED]"),
]

_DEFAULT_SENSITIVE_KEYS = {"token", "private_key", "authorization", "secret", "password", "jwt"}

_ACTIONS_COMMANDS = {
    logging.DEBUG: "debug",
    logging.WARNING: "warning",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


class ActionsFormatter(logging.Formatter):
    """
    Formatter emitting GitHub Actions workflow commands.

    DEBUG records become ``::debug::``, WARNING ``::warning::`` and ERROR or
    CRITICAL ``::error::``. INFO records are printed as plain text.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = mask_sensitive_data(super().format(record))
        command = _ACTIONS_COMMANDS.get(record.levelno)
        if command is None:
            return message
        # Workflow command data must escape %, CR and LF
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        return f"::{command}::{escaped}"


class MaskingFormatter(logging.Formatter):
    """Plain formatter that masks sensitive data in the rendered message."""

    def format(self, record: logging.LogRecord) -> str:
        return mask_sensitive_data(super().format(record))


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    auth_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
    actions: bool = False,
) -> None:
    """
    Configure prupdater logging.

    Args:
        level: Default log level for all package loggers (default: INFO)
        http_level: Log level for HTTP request/response logging (default: same as level)
        auth_level: Log level for credential exchange logging (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)
        actions: Render records as GitHub Actions workflow commands

    Example:
        ```python
        import logging
        from prupdater.logging import configure_logging

        # Enable debug logging for HTTP requests
        configure_logging(level=logging.INFO, http_level=logging.DEBUG)

        # Running inside a workflow
        configure_logging(actions=True)
        ```
    """
    if handler is None:
        handler = logging.StreamHandler()

    if actions:
        handler.setFormatter(ActionsFormatter(format_string or "%(message)s"))
    else:
        if format_string is None:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        handler.setFormatter(MaskingFormatter(format_string))

    # Replace handlers installed by a previous call
    for existing in list(_root_logger.handlers):
        _root_logger.removeHandler(existing)

    _root_logger.setLevel(level)
    _root_logger.addHandler(handler)
    _root_logger.propagate = False

    _http_logger.setLevel(http_level if http_level is not None else level)
    _auth_logger.setLevel(auth_level if auth_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a prupdater logger.

    Args:
        name: Logger name suffix (e.g., "http", "auth"). If None, returns the package logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _root_logger
    return logging.getLogger(f"prupdater.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask sensitive data in a string.

    Replaces private keys, GitHub tokens, JWTs and other sensitive patterns
    with redacted placeholders.

    Args:
        text: Text that may contain sensitive data

    Returns:
        Text with sensitive data masked
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Args:
        data: Dictionary that may contain sensitive values
        sensitive_keys: Set of key fragments to mask
            (default: token, private_key, authorization, secret, password, jwt)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    if sensitive_keys is None:
        sensitive_keys = _DEFAULT_SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if any(sk in key_lower for sk in sensitive_keys):
            result[key] = "[REDACTED]" if value else value
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def log_http_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    body: dict[str, Any] | None = None,
) -> None:
    """
    Log an HTTP request at DEBUG level with sensitive data masked.

    Args:
        method: HTTP method (GET, PUT, etc.)
        url: Request URL
        params: Query parameters (optional)
        body: Request body (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {url}"]

    if params:
        log_parts.append(f"params={safe_log_dict(params)}")

    if body:
        log_parts.append(f"body={safe_log_dict(body)}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    elapsed_ms: float | None = None,
    rate_limit_remaining: str | None = None,
) -> None:
    """
    Log an HTTP response at DEBUG level.

    Args:
        status_code: HTTP status code
        url: Request URL
        elapsed_ms: Request duration in milliseconds (optional)
        rate_limit_remaining: Value of the x-ratelimit-remaining header (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {url}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    if rate_limit_remaining is not None:
        log_parts.append(f"ratelimit-remaining={rate_limit_remaining}")

    _http_logger.debug(" | ".join(log_parts))


# Export public API
__all__ = [
    "ActionsFormatter",
    "MaskingFormatter",
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
]
