"""
Request Authorization Gate.

Two strategies, chosen once per route group when the app is wired:
- VerifiedGate: a valid bearer token is required; the claim is returned
- AlwaysAllowGate: demo-mode pass-through; no identity is attached

The bypass exists for demos only. It is not a security feature.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional
import logging

from ally.core.settings import Settings
from ally.services.credential_verifier import CredentialVerifier, IdentityClaim, extract_bearer_token

logger = logging.getLogger(__name__)

VERIFIED = "verified"
BYPASS = "bypass"

ROUTE_GROUPS = ("community", "location", "marketplace")


class AuthorizationGate(ABC):

    @abstractmethod
    def authorize(self, authorization: Optional[str]) -> Optional[IdentityClaim]:
        """Return the caller's claim, None when not checked, or raise UnauthorizedError."""
        raise NotImplementedError


class VerifiedGate(AuthorizationGate):

    def __init__(self, verifier: CredentialVerifier):
        self.verifier = verifier

    def authorize(self, authorization: Optional[str]) -> Optional[IdentityClaim]:
        return self.verifier.verify(extract_bearer_token(authorization))


class AlwaysAllowGate(AuthorizationGate):

    def authorize(self, authorization: Optional[str]) -> Optional[IdentityClaim]:
        return None


def build_gate(mode: str, verifier: CredentialVerifier) -> AuthorizationGate:
    mode = (mode or VERIFIED).strip().lower()
    if mode == VERIFIED:
        return VerifiedGate(verifier)
    if mode == BYPASS:
        return AlwaysAllowGate()
    raise ValueError(f"Unknown authorization mode: {mode!r} (expected '{VERIFIED}' or '{BYPASS}')")


def build_gates(settings: Settings, verifier: CredentialVerifier) -> Dict[str, AuthorizationGate]:
    """Resolve the gate for every route group from settings."""
    modes = {
        "community": settings.COMMUNITY_AUTH,
        "location": settings.LOCATION_AUTH,
        "marketplace": settings.MARKETPLACE_AUTH,
    }
    gates = {}
    for group in ROUTE_GROUPS:
        gates[group] = build_gate(modes[group], verifier)
        if isinstance(gates[group], AlwaysAllowGate):
            logger.warning(f"Authorization gate for '{group}' routes is BYPASSED (demo mode)")
    return gates


def current_user_id(identity: Optional[IdentityClaim], placeholder: str) -> str:
    """Identity for "current user" fields; the placeholder when no claim is attached."""
    return identity.user_id if identity is not None else placeholder
