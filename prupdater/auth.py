"""
Credential strategies for the GitHub REST API.

``TokenAuth`` uses a static token (personal access token or the workflow's
``GITHUB_TOKEN``). ``AppAuth`` authenticates as a GitHub App installation:
it signs an app JWT and exchanges it for a short-lived installation token.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from prupdater.exceptions import ConfigurationError
from prupdater.signers import Signer
from prupdater.signing import create_app_jwt
from prupdater.types.repos import RepoRef

if TYPE_CHECKING:
    from prupdater.async_transport import AsyncHTTPTransport

logger = logging.getLogger("prupdater.auth")

# Installation tokens are refreshed this long before they expire
_REFRESH_MARGIN = timedelta(minutes=1)


class Auth(ABC):
    """Provides the Authorization header for API requests."""

    @abstractmethod
    async def authorization(self, transport: "AsyncHTTPTransport") -> str:
        """Return the Authorization header value."""
        pass


class TokenAuth(Auth):
    """Static token authentication."""

    def __init__(self, token: str) -> None:
        if not token:
            raise ConfigurationError("A GitHub token is required for token authentication")
        self._token = token

    async def authorization(self, transport: "AsyncHTTPTransport") -> str:
        return f"Bearer {self._token}"

    def __repr__(self) -> str:
        return "TokenAuth(token=[REDACTED])"


class AppAuth(Auth):
    """
    GitHub App installation authentication.

    If no installation ID is configured, the installation is looked up for
    ``repo`` with the app JWT.
    """

    def __init__(
        self,
        app_id: str,
        signer: Signer,
        installation_id: str | None = None,
        repo: RepoRef | None = None,
    ) -> None:
        if not installation_id and repo is None:
            raise ConfigurationError(
                "GitHub App authentication needs an installation ID or a repository"
            )
        self.app_id = app_id
        self.signer = signer
        self.installation_id = installation_id
        self.repo = repo
        self._token: str | None = None
        self._expires_at: datetime | None = None

    async def authorization(self, transport: "AsyncHTTPTransport") -> str:
        if self._token is None or self._is_expired():
            await self._refresh(transport)
        return f"Bearer {self._token}"

    def _is_expired(self, now: datetime | None = None) -> bool:
        if self._expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now >= self._expires_at - _REFRESH_MARGIN

    async def _refresh(self, transport: "AsyncHTTPTransport") -> None:
        jwt_headers = {"Authorization": f"Bearer {create_app_jwt(self.app_id, self.signer)}"}

        if not self.installation_id:
            if self.repo is None:
                raise ConfigurationError(
                    "GitHub App authentication needs an installation ID or a repository"
                )
            logger.debug("Looking up app installation for %s", self.repo)
            installation = await transport.request(
                "GET",
                f"/repos/{self.repo.owner}/{self.repo.name}/installation",
                headers=jwt_headers,
                authenticate=False,
            )
            self.installation_id = str(installation["id"])

        logger.debug("Requesting installation token for installation %s", self.installation_id)
        data = await transport.request(
            "POST",
            f"/app/installations/{self.installation_id}/access_tokens",
            headers=jwt_headers,
            authenticate=False,
        )

        self._token = data["token"]
        expires_at = data.get("expires_at")
        self._expires_at = (
            datetime.fromisoformat(expires_at.replace("Z", "+00:00")) if expires_at else None
        )
        logger.debug("Installation token valid until %s", expires_at)

    def __repr__(self) -> str:
        return f"AppAuth(app_id={self.app_id!r}, installation_id={self.installation_id!r})"
