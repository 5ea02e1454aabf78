"""
Authentication endpoints - registration and login.

These routes sit outside every authorization gate.
"""

from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
import logging

from ally.core.errors import AllyError, InternalError
from ally.core.settings import Settings
from ally.dependencies import get_app_settings, get_db, get_verifier
from ally.models.base import MessageResponse
from ally.models.user import LoginRequest, LoginResponse, RegisterRequest
from ally.services.credential_verifier import CredentialVerifier
from ally.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])

LOGIN_MODE_PHONE_LOOKUP = "phone_lookup"


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
async def register(request: RegisterRequest, db: Any = Depends(get_db)):
    """
    Create a user profile keyed by phone number.

    409 if the phone number is already registered.
    """
    try:
        await run_in_threadpool(
            UserService(db).register,
            request.phone_number,
            request.name,
            request.role,
            request.disability_type,
            request.roll_number,
        )
        return MessageResponse(message="User profile created successfully. Proceed to OTP verification/login.")

    except AllyError:
        raise
    except Exception as e:
        logger.error(f"Registration error: {e}", exc_info=True)
        raise InternalError("Server error during registration.")


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    db: Any = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    verifier: CredentialVerifier = Depends(get_verifier),
):
    """
    Resolve the caller's role and name.

    Default: the idToken is verified and the phone number is taken from the
    claim. With LOGIN_MODE=phone_lookup the client-supplied phoneNumber is
    trusted as is (demo bypass).
    """
    try:
        service = UserService(db)
        if settings.LOGIN_MODE == LOGIN_MODE_PHONE_LOOKUP:
            result = await run_in_threadpool(service.login_with_phone, request.phone_number, request.id_token)
        else:
            result = await run_in_threadpool(service.login_with_token, verifier, request.id_token)

        return LoginResponse(message="Login successful.", **result)

    except AllyError:
        raise
    except Exception as e:
        logger.error(f"Login lookup error: {e}", exc_info=True)
        raise InternalError("Login failed due to an internal server issue.")
