"""Run configuration for prupdater.

GitHub Actions passes action inputs as ``INPUT_<NAME>`` environment variables;
the same variables can be exported by hand to run locally.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from prupdater.auth import AppAuth, Auth, TokenAuth
from prupdater.exceptions import ConfigurationError
from prupdater.signers import RS256Signer
from prupdater.types.repos import RepoRef

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT = 30.0


def _input(environ: Mapping[str, str], name: str) -> str:
    """Read an action input the way the Actions runner exposes it."""
    return environ.get(f"INPUT_{name.replace(' ', '_').upper()}", "").strip()


@dataclass(frozen=True)
class Settings:
    """Validated runtime settings for one run."""

    repo: RepoRef
    base_branch: str | None = None
    api_url: str = DEFAULT_API_URL
    token: str | None = None
    app_id: str | None = None
    private_key: str | None = None
    installation_id: str | None = None
    debug: bool = False
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if self.app_id and not self.private_key:
            raise ConfigurationError("github_private_key is required when github_app_id is set")
        if not self.app_id and not self.token:
            raise ConfigurationError(
                "No credentials configured. Set github_token (or GITHUB_TOKEN) "
                "or github_app_id and github_private_key."
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Load settings from action inputs and the workflow environment.

        Inputs (``INPUT_*``) take precedence over the default workflow
        variables (``GITHUB_TOKEN``, ``GITHUB_REPOSITORY``, ``GITHUB_API_URL``).

        Raises:
            ConfigurationError: If the repository or credentials are missing or invalid
        """
        if environ is None:
            environ = os.environ

        repo_input = _input(environ, "repo") or environ.get("GITHUB_REPOSITORY", "").strip()
        if not repo_input:
            raise ConfigurationError(
                "No repository configured. Set the repo input or GITHUB_REPOSITORY."
            )
        try:
            repo = RepoRef.parse(repo_input)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        return cls(
            repo=repo,
            base_branch=_input(environ, "base_branch") or None,
            api_url=(
                _input(environ, "api_url")
                or environ.get("GITHUB_API_URL", "").strip()
                or DEFAULT_API_URL
            ),
            token=_input(environ, "github_token") or environ.get("GITHUB_TOKEN") or None,
            app_id=_input(environ, "github_app_id") or None,
            private_key=_input(environ, "github_private_key") or None,
            installation_id=_input(environ, "github_installation_id") or None,
            debug=environ.get("RUNNER_DEBUG") == "1",
        )

    def create_auth(self) -> Auth:
        """
        Build the credential strategy.

        App credentials win over a token when both are present.

        Raises:
            ConfigurationError: If the private key cannot be loaded
        """
        if self.app_id:
            try:
                signer = RS256Signer.from_pem(self.private_key or "")
            except (ValueError, TypeError) as e:
                raise ConfigurationError(f"Invalid github_private_key: {e}") from e
            return AppAuth(
                app_id=self.app_id,
                signer=signer,
                installation_id=self.installation_id,
                repo=self.repo,
            )
        return TokenAuth(self.token or "")

    def describe(self) -> dict[str, Any]:
        """Settings as a dict for debug logging; mask with safe_log_dict."""
        return {
            "owner": self.repo.owner,
            "repo": self.repo.name,
            "base_branch": self.base_branch,
            "api_url": self.api_url,
            "token": self.token,
            "app_id": self.app_id,
            "private_key": self.private_key,
            "installation_id": self.installation_id,
        }
