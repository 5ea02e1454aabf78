"""
ALLY Backend - FastAPI Application Entry Point

REST API for an accessibility-assistance service: registration and login,
SOS alerts, volunteer availability, accessible places and a small
marketplace, all stored in Firestore.

DESIGN PRINCIPLES:
- Every route is a thin pass-through to the document store
- Client handles are built once and injected, never looked up globally
- Authorization bypass is a per-route-group deployment choice, off by default
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from firebase_admin import auth as firebase_auth
from starlette.exceptions import HTTPException as StarletteHTTPException

from ally.config.firebase import initialize_firebase
from ally.core.errors import AllyError
from ally.core.settings import Settings, get_settings
from ally.routes import auth, community, health, location, marketplace
from ally.services.authorization_gate import build_gates
from ally.services.credential_verifier import CredentialVerifier

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", "invalid value"))
    return "Invalid request: " + "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(AllyError)
    async def ally_error_handler(request: Request, exc: AllyError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed bodies are client errors: 400 with a readable message."""
        logger.info(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": _describe_validation_errors(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch all unhandled exceptions and log them with full traceback."""
        logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error."},
        )


def create_app(
    settings: Optional[Settings] = None,
    db: Any = None,
    auth_client: Any = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: defaults to environment-backed Settings
        db: Firestore-compatible client; when None it is created on startup
        auth_client: object exposing verify_id_token(); defaults to the handle
            returned by Firebase initialization at startup
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Accessibility assistance backend: SOS alerts, volunteers, accessible places, marketplace",
        debug=settings.DEBUG,
    )

    verifier = CredentialVerifier(auth_client if auth_client is not None else firebase_auth)
    app.state.settings = settings
    app.state.db = db
    app.state.verifier = verifier
    app.state.gates = build_gates(settings, verifier)

    register_exception_handlers(app)

    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    async def startup_event():
        """Initialize Firebase for whichever clients were not injected."""
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
        if app.state.db is not None:
            return
        try:
            clients = initialize_firebase(settings)
            app.state.db = clients.db
            if auth_client is None:
                app.state.verifier = CredentialVerifier(clients.auth_client)
                app.state.gates = build_gates(settings, app.state.verifier)
        except Exception as e:
            logger.error(f"FIREBASE INITIALIZATION ERROR: {e}")
            logger.error("The app will start but database operations will fail.")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info(f"Shutting down {settings.APP_NAME}")

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(community.router)
    app.include_router(location.router)
    app.include_router(marketplace.router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("ally.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
