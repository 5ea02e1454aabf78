"""
Location Service - accessible places and their reviews.
"""

from firebase_admin import firestore
from typing import Any, Dict, List, Optional
import logging

from ally.core.errors import BadRequestError
from ally.utils.firestore_helpers import geopoint_to_dict, passthrough_fields, to_json_value, where_filter

logger = logging.getLogger(__name__)

PLACES_COLLECTION = "Places"
REVIEWS_COLLECTION = "Reviews"

MIN_RATING = 1
MAX_RATING = 5

PLACE_FIELDS = ("name", "address", "description", "accessibilityFeatures", "location")


def _feature_tags(value: Any) -> List[Any]:
    """A single stored tag counts as a one-element list; other scalars as none."""
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, str):
        return [value]
    return []


class LocationService:
    """
    Places are seeded externally and read-only here. Reviews are appended and
    never aggregated back onto the place.
    """

    def __init__(self, db: Any):
        self.db = db

    def list_accessible(self, disability_type: Optional[str] = None) -> List[Dict]:
        query = self.db.collection(PLACES_COLLECTION)
        if disability_type:
            query = where_filter(query, "accessibilityFeatures", "array-contains", disability_type)

        places = []
        for doc in query.stream():
            data = doc.to_dict() or {}
            places.append({
                **passthrough_fields(data, PLACE_FIELDS),
                "id": doc.id,
                "name": to_json_value(data.get("name")),
                "address": to_json_value(data.get("address")),
                "description": to_json_value(data.get("description")),
                "accessibility_features": _feature_tags(data.get("accessibilityFeatures")),
                "location": geopoint_to_dict(data.get("location")),
            })
        return places

    def submit_review(
        self,
        place_id: Optional[str],
        user_id: str,
        rating: Optional[float],
        comments: Optional[str] = None,
    ) -> str:
        """
        Append a review for a place.

        Raises:
            BadRequestError: rating or place id missing, or rating outside 1..5
        """
        if rating is None or not place_id:
            raise BadRequestError("Missing required fields (rating or placeId).")
        if not MIN_RATING <= rating <= MAX_RATING:
            raise BadRequestError(f"Rating must be between {MIN_RATING} and {MAX_RATING}.")

        review_ref = self.db.collection(REVIEWS_COLLECTION).document()
        review_ref.set({
            "placeId": place_id,
            "userId": user_id,
            "rating": rating,
            "comments": comments or None,
            "createdAt": firestore.SERVER_TIMESTAMP,
        })

        logger.info(f"Review {review_ref.id} submitted for place {place_id} by {user_id}")
        return review_ref.id
