"""
Accessible place and review models.
"""

from typing import Any, List, Optional

from pydantic import Field

from ally.models.base import CamelModel, GeoLocation, StoredDocumentModel


class PlaceResponse(StoredDocumentModel):
    id: str
    name: Any = None
    address: Any = None
    description: Any = None
    accessibility_features: List[str] = Field(default_factory=list)
    location: Optional[GeoLocation] = None


class ReviewRequest(CamelModel):
    rating: Optional[float] = Field(None, description="1 to 5")
    comments: Optional[str] = Field(None, max_length=2000)
