"""
Community endpoints - SOS alerts and volunteer availability.
"""

from typing import Any, List

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
import logging

from ally.core.errors import AllyError, InternalError
from ally.dependencies import get_current_user_id, get_db, require_gate
from ally.models.base import MessageResponse
from ally.models.sos import SOSAlertResponse, SOSTriggerRequest, SOSTriggerResponse
from ally.models.user import VolunteerStatusRequest
from ally.services.sos_service import SOSService
from ally.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/community",
    tags=["Community"],
    dependencies=[Depends(require_gate("community"))],
)


@router.post("/sos/trigger", status_code=status.HTTP_202_ACCEPTED, response_model=SOSTriggerResponse)
async def trigger_sos(
    request: SOSTriggerRequest,
    db: Any = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Record an OPEN help request at the caller's coordinates."""
    try:
        alert_id = await run_in_threadpool(SOSService(db).trigger, user_id, request.latitude, request.longitude)
        return SOSTriggerResponse(
            message="SOS alert triggered successfully. Searching for nearby volunteer.",
            alert_id=alert_id,
        )
    except AllyError:
        raise
    except Exception as e:
        logger.error(f"Error triggering SOS: {e}", exc_info=True)
        raise InternalError("Server error triggering SOS.")


@router.get("/sos/alerts", response_model=List[SOSAlertResponse])
async def list_open_alerts(db: Any = Depends(get_db)):
    try:
        alerts = await run_in_threadpool(SOSService(db).list_open)
        return [SOSAlertResponse(**alert) for alert in alerts]
    except AllyError:
        raise
    except Exception as e:
        logger.error(f"Error fetching SOS alerts: {e}", exc_info=True)
        raise InternalError("Server error fetching alerts.")


@router.post("/volunteer/status", response_model=MessageResponse)
async def set_volunteer_status(
    request: VolunteerStatusRequest,
    db: Any = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Toggle the caller's availability.

    Going available with coordinates publishes the volunteer's location;
    going unavailable removes it.
    """
    try:
        is_available = await run_in_threadpool(
            UserService(db).set_availability,
            user_id,
            request.is_available,
            request.latitude,
            request.longitude,
        )
        return MessageResponse(
            message=f"Volunteer status set to {'available' if is_available else 'unavailable'}."
        )
    except AllyError:
        raise
    except Exception as e:
        logger.error(f"Error updating volunteer status: {e}", exc_info=True)
        raise InternalError("Server error updating status.")
