"""
Pydantic base models for request/response validation.

DESIGN PRINCIPLE:
- Models reflect data structure, not business logic
- JSON keys are camelCase, Python attributes snake_case
"""

import logging
from typing import Any, Dict, Iterable, List, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class CamelModel(BaseModel):
    """Base for every API model: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoredDocumentModel(CamelModel):
    """
    Response for an externally seeded, schema-less document.

    Fields the model does not name are kept and rendered under their stored key.
    """
    model_config = ConfigDict(extra="allow")


class MessageResponse(CamelModel):
    """Plain acknowledgement body."""
    message: str


class GeoLocation(CamelModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


def validate_records(model: Type[ModelT], records: Iterable[Dict[str, Any]]) -> List[ModelT]:
    """Build one model per record, logging and skipping the records that do not fit."""
    valid = []
    for record in records:
        try:
            valid.append(model(**record))
        except ValidationError as e:
            logger.warning(
                f"Skipping {model.__name__} {record.get('id')!r}: {e.error_count()} invalid field(s): {e}"
            )
    return valid
