"""
JWT generation for GitHub App authentication.

Implements the signing flow: claims -> compact JSON -> base64url -> sign -> encode.
"""

import base64
import json
from datetime import datetime, timedelta, timezone

from prupdater.signers import Signer

# GitHub rejects app JWTs that expire more than 10 minutes in the future
JWT_LIFETIME = timedelta(minutes=9)
# Issued-at is backdated to tolerate clock drift
CLOCK_DRIFT = timedelta(seconds=60)


def base64url_encode(data: bytes) -> str:
    """Encode bytes as unpadded base64url."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _encode_segment(value: dict) -> str:
    return base64url_encode(json.dumps(value, separators=(",", ":")).encode("utf-8"))


def create_app_jwt(app_id: str, signer: Signer, now: datetime | None = None) -> str:
    """
    Create a JWT identifying a GitHub App.

    Args:
        app_id: The GitHub App ID (or client ID), used as the ``iss`` claim
        signer: Signer holding the app's private key
        now: Current time (defaults to the system clock)

    Returns:
        Compact JWT string
    """
    now = now or datetime.now(timezone.utc)
    header = {"alg": signer.algorithm, "typ": "JWT"}
    claims = {
        "iat": int((now - CLOCK_DRIFT).timestamp()),
        "exp": int((now + JWT_LIFETIME).timestamp()),
        "iss": app_id,
    }

    signing_input = f"{_encode_segment(header)}.{_encode_segment(claims)}"
    signature = signer.sign(signing_input.encode("ascii"))
    return f"{signing_input}.{base64url_encode(signature)}"
