"""
User models for registration, login and volunteer availability.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, StrictBool

from ally.models.base import CamelModel


class UserRole(str, Enum):
    PWD = "PWD"
    VOLUNTEER = "Volunteer"
    NGO = "NGO"


class RegisterRequest(CamelModel):
    """
    Registration body.

    Required fields are typed Optional so that a missing field is reported
    as a 400 with a readable message instead of a schema error.
    """
    phone_number: Optional[str] = Field(None, description="Phone number, used as the profile key")
    name: Optional[str] = Field(None, max_length=100)
    role: Optional[str] = Field(None, description="PWD, Volunteer or NGO")
    disability_type: Optional[str] = Field(None, description="Only kept for PWD profiles")
    roll_number: Optional[str] = None


class LoginRequest(CamelModel):
    id_token: Optional[str] = None
    phone_number: Optional[str] = None


class LoginResponse(CamelModel):
    message: str
    role: Optional[str] = None
    name: Optional[str] = None
    token: Optional[str] = None


class VolunteerStatusRequest(CamelModel):
    # StrictBool: "true" or 1 are rejected rather than coerced
    is_available: Optional[StrictBool] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
