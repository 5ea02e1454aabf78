"""
Location endpoints - accessible place lookup and reviews.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.concurrency import run_in_threadpool
import logging

from ally.core.errors import AllyError, InternalError
from ally.dependencies import get_current_user_id, get_db, require_gate
from ally.models.base import MessageResponse, validate_records
from ally.models.location import PlaceResponse, ReviewRequest
from ally.services.location_service import LocationService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/location",
    tags=["Location"],
    dependencies=[Depends(require_gate("location"))],
)


@router.get("/accessible", response_model=List[PlaceResponse])
async def list_accessible_places(
    disability_type: Optional[str] = Query(None, alias="disabilityType", description="Accessibility feature tag"),
    latitude: Optional[float] = Query(None, description="Accepted for clients; not used for filtering"),
    longitude: Optional[float] = Query(None, description="Accepted for clients; not used for filtering"),
    db: Any = Depends(get_db),
):
    """All places, or only those tagged with the given disability type."""
    try:
        places = await run_in_threadpool(LocationService(db).list_accessible, disability_type)
        return validate_records(PlaceResponse, places)
    except AllyError:
        raise
    except Exception as e:
        logger.error(f"Error fetching locations: {e}", exc_info=True)
        raise InternalError("Server error fetching accessible locations.")


@router.post("/review/{place_id}", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
async def submit_review(
    place_id: str,
    request: ReviewRequest,
    db: Any = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    try:
        await run_in_threadpool(
            LocationService(db).submit_review, place_id, user_id, request.rating, request.comments
        )
        return MessageResponse(message="Accessibility review submitted successfully.")
    except AllyError:
        raise
    except Exception as e:
        logger.error(f"Error submitting review: {e}", exc_info=True)
        raise InternalError("Server error submitting review.")
