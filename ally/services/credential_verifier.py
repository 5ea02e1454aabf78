"""
Credential Verifier - wraps Firebase Auth ID token verification.
"""

from dataclasses import dataclass
from typing import Any, Optional
import logging

from ally.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)

MISSING_TOKEN_MESSAGE = "Access denied. No authentication token provided."
INVALID_TOKEN_MESSAGE = "Authentication failed. Invalid or expired token."


@dataclass(frozen=True)
class IdentityClaim:
    """Decoded, provider-verified token payload."""
    uid: str
    phone_number: Optional[str] = None

    @property
    def user_id(self) -> str:
        """Profiles are keyed by phone number; fall back to the uid."""
        return self.phone_number or self.uid


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an "Authorization: Bearer <token>" header value.

    Returns None when the header is absent, uses another scheme, or is empty.
    """
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization[len("Bearer "):].strip()
    return token or None


class CredentialVerifier:
    """
    Verifies bearer tokens against the identity provider.

    auth_client is anything exposing verify_id_token(token) -> dict, normally
    the firebase_admin.auth module.
    """

    def __init__(self, auth_client: Any):
        self.auth_client = auth_client

    def verify(self, token: Optional[str]) -> IdentityClaim:
        """
        Verify a token and return its claim.

        Raises:
            UnauthorizedError: token missing, malformed, expired, revoked or
                rejected by the provider for any other reason
        """
        if not token:
            raise UnauthorizedError(MISSING_TOKEN_MESSAGE)

        try:
            decoded = self.auth_client.verify_id_token(token)
        except Exception as e:
            logger.warning(f"Token verification failed: {e}")
            raise UnauthorizedError(INVALID_TOKEN_MESSAGE)

        uid = decoded.get("uid") or decoded.get("sub")
        if not uid:
            logger.warning("Verified token carries no subject")
            raise UnauthorizedError(INVALID_TOKEN_MESSAGE)

        return IdentityClaim(uid=uid, phone_number=decoded.get("phone_number"))
