"""
Health check endpoints.
Used for monitoring, deployment readiness checks, and basic connectivity tests.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse


router = APIRouter(tags=["Health"])


@router.get("/", response_class=PlainTextResponse)
async def root(request: Request):
    """Plain-text liveness line; 500 when Firestore never came up."""
    name = request.app.state.settings.APP_NAME
    if getattr(request.app.state, "db", None) is not None:
        return PlainTextResponse(f"{name} is Running and SUCCESSFULLY Connected to Firebase!")
    return PlainTextResponse(f"{name} is Running but Firebase connection failed.", status_code=500)


@router.get("/health")
async def health_check(request: Request):
    """
    Basic health check endpoint.
    Returns 200 if service is running.
    """
    settings = request.app.state.settings
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/db")
async def database_health(request: Request):
    """
    Database connectivity check.
    Lists collections to prove the client can reach the store.
    """
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise HTTPException(status_code=503, detail="Database connection failed: not initialized")

    try:
        collections = await run_in_threadpool(lambda: list(db.collections()))
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Database connection failed: {e}")

    return {
        "status": "healthy",
        "database": "firestore",
        "connected": True,
        "collections_count": len(collections),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
