"""
Firestore value helpers shared by the services.

NOTE: For the firebase_admin SDK we keep positional where() arguments, which
still work. The deprecation warning they emit does not affect behavior.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

logger = logging.getLogger(__name__)


def where_filter(query, field_path: str, op_string: str, value):
    """
    Apply a filter to a Firestore query or collection.

    Usage:
        query = where_filter(collection, "status", "==", "OPEN")
        query = where_filter(query, "accessibilityFeatures", "array-contains", "visual")
    """
    return query.where(field_path, op_string, value)


def to_datetime(value: Any) -> Optional[datetime]:
    """
    Convert a stored Firestore timestamp to a datetime.

    Firestore hands back DatetimeWithNanoseconds (a datetime subclass); older
    payloads may carry objects exposing to_datetime(). Anything else becomes None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if hasattr(value, "to_datetime"):
        try:
            return value.to_datetime()
        except Exception as e:
            logger.warning(f"Failed to convert timestamp {value!r}: {e}")
            return None
    logger.warning(f"Unknown timestamp type: {type(value)}")
    return None


def geopoint_to_dict(value: Any) -> Optional[Dict[str, float]]:
    """
    Render a stored location as {"latitude": ..., "longitude": ...}.

    Accepts Firestore GeoPoints and plain maps (seeded documents use maps).
    """
    if value is None:
        return None
    try:
        if isinstance(value, dict):
            if "latitude" in value and "longitude" in value:
                return {"latitude": float(value["latitude"]), "longitude": float(value["longitude"])}
            return None
        if hasattr(value, "latitude") and hasattr(value, "longitude"):
            return {"latitude": float(value.latitude), "longitude": float(value.longitude)}
    except (TypeError, ValueError):
        logger.warning(f"Unreadable location value: {value!r}")
    return None


def to_json_value(value: Any) -> Any:
    """
    Make a stored field value JSON-renderable for pass-through responses.

    GeoPoints become latitude/longitude maps, document references become
    their path, and anything else without a JSON form is rendered with str().
    """
    if value is None or isinstance(value, (str, bool, int, float, datetime)):
        return value
    if isinstance(value, dict):
        return {str(k): to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_value(v) for v in value]
    if hasattr(value, "latitude") and hasattr(value, "longitude"):
        return geopoint_to_dict(value)
    if hasattr(value, "path"):
        return value.path
    return str(value)


def passthrough_fields(data: Dict[str, Any], known: Iterable[str]) -> Dict[str, Any]:
    """Stored fields not in known (nor an "id" field), rendered with to_json_value."""
    skip = set(known) | {"id"}
    return {key: to_json_value(value) for key, value in data.items() if key not in skip}
