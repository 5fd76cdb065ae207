"""
Front desk settings, read from the environment or a .env file
"""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Application
    APP_NAME: str = "Hotel Front Desk"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./frontdesk.db"

    # JWT
    SECRET_KEY: str = "frontdesk-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # Billing
    # Free late-checkout window in hours. Kept at zero until the front office
    # decides on a policy.
    GRACE_PERIOD_HOURS: float = 0

    # Check-in drafts
    DRAFT_TTL_MINUTES: int = 120

    # Invoice header
    HOTEL_NAME: str = "Hotel Plaza"
    HOTEL_ADDRESS: str = "Gandhinagar, Bengaluru - 560009"
    HOTEL_PHONE: str = "080-22263101"

    model_config = ConfigDict(env_file=".env", case_sensitive=True)


# Global settings instance
settings = Settings()
