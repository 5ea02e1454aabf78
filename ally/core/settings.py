"""
Core settings and environment variables for the ALLY backend.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "ALLY Backend"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    PORT: int = 5000

    # CORS - comma separated origins, "*" allows any
    CORS_ORIGINS: str = "*"

    # Firebase/Firestore
    SERVICE_ACCOUNT_PATH: Optional[str] = None  # Path to service account JSON
    FIREBASE_PROJECT_ID: Optional[str] = None

    # Mock DB mode for local development without Firebase credentials
    USE_MOCK_DB: bool = False
    MOCK_DB_SEED_PATH: Optional[str] = None

    # Login contract:
    # - "verified": idToken is verified and the phone number comes from the claim
    # - "phone_lookup": demo bypass, role is looked up from a client-supplied phone number
    LOGIN_MODE: str = "verified"

    # Authorization gate per route group: "verified" or "bypass"
    COMMUNITY_AUTH: str = "verified"
    LOCATION_AUTH: str = "verified"
    MARKETPLACE_AUTH: str = "verified"

    # Identity used for "current user" fields when a gate is bypassed
    PLACEHOLDER_USER_ID: str = "MOCK_USER"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


def get_settings() -> Settings:
    return Settings()
