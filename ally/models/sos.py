"""
SOS alert models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from ally.models.base import CamelModel, GeoLocation


class AlertStatus(str, Enum):
    """
    Alert lifecycle: OPEN -> ASSIGNED -> CLOSED.

    Only OPEN is ever written; assignment is not implemented.
    """
    OPEN = "OPEN"
    ASSIGNED = "ASSIGNED"
    CLOSED = "CLOSED"


class SOSTriggerRequest(CamelModel):
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class SOSTriggerResponse(CamelModel):
    message: str
    alert_id: str


class SOSAlertResponse(CamelModel):
    id: str
    user_id: Optional[str] = None
    location: Optional[GeoLocation] = None
    timestamp: Optional[datetime] = None
    status: str
    assigned_to: Optional[str] = None
