"""
SOS Service - append-only log of help requests.

Matching an alert to a nearby volunteer is not implemented: alerts are
written as OPEN with no assignee and stay that way.
"""

from firebase_admin import firestore
from typing import Any, Dict, List, Optional
import logging

from ally.core.errors import BadRequestError
from ally.models.sos import AlertStatus
from ally.utils.firestore_helpers import geopoint_to_dict, to_datetime, where_filter

logger = logging.getLogger(__name__)

SOS_COLLECTION = "SOS_Alerts"
OPEN_ALERTS_LIMIT = 10


class SOSService:

    def __init__(self, db: Any):
        self.db = db

    def trigger(self, user_id: str, latitude: Optional[float], longitude: Optional[float]) -> str:
        """
        Record a new OPEN alert at the given coordinates.

        Returns:
            The generated alert id

        Raises:
            BadRequestError: either coordinate is missing
        """
        if latitude is None or longitude is None:
            raise BadRequestError("Missing location data for SOS.")

        alert_ref = self.db.collection(SOS_COLLECTION).document()
        alert_ref.set({
            "userId": user_id,
            "location": firestore.GeoPoint(latitude, longitude),
            "timestamp": firestore.SERVER_TIMESTAMP,
            "status": AlertStatus.OPEN.value,
            "assignedTo": None,
        })

        logger.info(f"SOS alert {alert_ref.id} triggered by {user_id} at ({latitude}, {longitude})")
        return alert_ref.id

    def list_open(self) -> List[Dict]:
        """Up to OPEN_ALERTS_LIMIT open alerts, in store order."""
        query = where_filter(self.db.collection(SOS_COLLECTION), "status", "==", AlertStatus.OPEN.value)

        alerts = []
        for doc in query.limit(OPEN_ALERTS_LIMIT).stream():
            data = doc.to_dict() or {}
            alerts.append({
                "id": doc.id,
                "user_id": data.get("userId"),
                "location": geopoint_to_dict(data.get("location")),
                "timestamp": to_datetime(data.get("timestamp")),
                "status": data.get("status", AlertStatus.OPEN.value),
                "assigned_to": data.get("assignedTo"),
            })
        return alerts
