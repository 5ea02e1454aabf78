"""
Dependency wiring for the FastAPI app.

Client handles are built once in create_app()/startup and kept on app.state;
these dependencies hand them to the routes.
"""

from typing import Any, Callable, Optional

from fastapi import Header, Request

from ally.core.errors import InternalError
from ally.core.settings import Settings
from ally.services.authorization_gate import current_user_id
from ally.services.credential_verifier import CredentialVerifier, IdentityClaim


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Any:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise InternalError("Database not initialized. Please check Firebase configuration.")
    return db


def get_verifier(request: Request) -> CredentialVerifier:
    return request.app.state.verifier


def require_gate(group: str) -> Callable[..., Optional[IdentityClaim]]:
    """
    Build the gate dependency for a route group.

    The gate itself was chosen at startup; this only runs it and stores the
    resulting claim (or None in bypass mode) on request.state.identity.
    """
    def gate_dependency(
        request: Request,
        authorization: Optional[str] = Header(None),
    ) -> Optional[IdentityClaim]:
        identity = request.app.state.gates[group].authorize(authorization)
        request.state.identity = identity
        return identity

    return gate_dependency


def get_current_user_id(request: Request) -> str:
    identity = getattr(request.state, "identity", None)
    return current_user_id(identity, request.app.state.settings.PLACEHOLDER_USER_ID)
