"""
User Service - user profiles and volunteer availability in Firestore.
"""

from firebase_admin import firestore
from google.api_core.exceptions import Conflict, NotFound
from typing import Any, Dict, Optional
import logging

from ally.core.errors import BadRequestError, ConflictError, NotFoundError, UnauthorizedError
from ally.models.user import UserRole
from ally.services.credential_verifier import CredentialVerifier

logger = logging.getLogger(__name__)

USERS_COLLECTION = "Users"
VOLUNTEER_LOCATIONS_COLLECTION = "Volunteers_Locations"


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class UserService:
    """
    Profiles live at Users/<phoneNumber>; the phone number is the key.

    Volunteer locations live at Volunteers_Locations/<userId> and exist only
    while the volunteer is available.
    """

    def __init__(self, db: Any):
        self.db = db

    def get_profile(self, phone_number: str) -> Optional[Dict]:
        doc = self.db.collection(USERS_COLLECTION).document(phone_number).get()
        if not doc.exists:
            return None
        return doc.to_dict()

    def register(
        self,
        phone_number: Optional[str],
        name: Optional[str],
        role: Optional[str],
        disability_type: Optional[str] = None,
        roll_number: Optional[str] = None,
    ) -> Dict:
        """
        Create a new profile.

        Role-conditional fields:
        - isAvailable: False for Volunteer/NGO, None for PWD
        - disabilityType: kept for PWD only

        Raises:
            BadRequestError: phoneNumber, name or role missing, or role unknown
            ConflictError: a profile already exists for phoneNumber
        """
        if _blank(phone_number) or _blank(name) or _blank(role):
            raise BadRequestError("Missing required fields.")

        phone_number = phone_number.strip()
        if "/" in phone_number:
            raise BadRequestError("Invalid phone number.")

        try:
            user_role = UserRole(role.strip())
        except ValueError:
            allowed = ", ".join(r.value for r in UserRole)
            raise BadRequestError(f"Invalid role. Expected one of: {allowed}.")

        user_ref = self.db.collection(USERS_COLLECTION).document(phone_number)

        is_pwd = user_role == UserRole.PWD
        user_data = {
            "name": name.strip(),
            "role": user_role.value,
            "isVerified": False,
            "isAvailable": None if is_pwd else False,
            "disabilityType": disability_type if is_pwd else None,
            "rollNumber": roll_number or None,
            "createdAt": firestore.SERVER_TIMESTAMP,
        }
        try:
            user_ref.create(user_data)
        except Conflict:
            raise ConflictError("User already registered.")

        logger.info(f"User registered: {phone_number} ({user_role.value})")
        return user_data

    def login_with_token(self, verifier: CredentialVerifier, id_token: Optional[str]) -> Dict:
        """
        Verified login: the phone number comes from the verified claim only.

        Raises:
            BadRequestError: idToken missing
            UnauthorizedError: token invalid or carries no phone number
            NotFoundError: no profile for the claim's phone number
        """
        if _blank(id_token):
            raise BadRequestError("Missing idToken for login.")

        claim = verifier.verify(id_token)
        if not claim.phone_number:
            raise UnauthorizedError("Token does not carry a verified phone number.")

        profile = self.get_profile(claim.phone_number)
        if profile is None:
            raise NotFoundError("User profile not found. Please register first.")

        logger.info(f"User logged in: {claim.phone_number}")
        return {"role": profile.get("role"), "name": profile.get("name"), "token": id_token}

    def login_with_phone(self, phone_number: Optional[str], id_token: Optional[str] = None) -> Dict:
        """
        Demo bypass: role lookup from a client-supplied phone number.

        No verification happens; the client token is echoed back unchanged.
        """
        if _blank(phone_number):
            raise BadRequestError("Missing phone number for login lookup.")

        profile = self.get_profile(phone_number.strip())
        if profile is None:
            raise NotFoundError("User profile not found. Please register first.")

        logger.warning(f"Unverified phone lookup login: {phone_number}")
        return {"role": profile.get("role"), "name": profile.get("name"), "token": id_token}

    def set_availability(
        self,
        user_id: str,
        is_available: Any,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> bool:
        """
        Update a volunteer's availability and their published location.

        - available with both coordinates: location record upserted
        - available without coordinates: location record left as is
        - unavailable: location record deleted

        Raises:
            BadRequestError: is_available is not a bool (profile untouched)
            NotFoundError: no profile for user_id
        """
        if not isinstance(is_available, bool):
            raise BadRequestError("Missing or invalid isAvailable status.")

        try:
            self.db.collection(USERS_COLLECTION).document(user_id).update({"isAvailable": is_available})
        except NotFound:
            raise NotFoundError("User profile not found. Please register first.")

        location_ref = self.db.collection(VOLUNTEER_LOCATIONS_COLLECTION).document(user_id)
        if is_available and latitude is not None and longitude is not None:
            location_ref.set({
                "location": firestore.GeoPoint(latitude, longitude),
                "lastUpdated": firestore.SERVER_TIMESTAMP,
            })
        elif not is_available:
            location_ref.delete()

        logger.info(f"Volunteer {user_id} is now {'available' if is_available else 'unavailable'}")
        return is_available
