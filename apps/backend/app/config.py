"""Backend-specific configuration extending shared settings."""

from casematch import Settings as SharedSettings
from typing import List, Optional


class Settings(SharedSettings):
    """Backend application settings extending shared configuration.

    Adds the HTTP surface (host, CORS) and bearer-token verification on top
    of the shared case-matching settings.
    """

    # ===== API SETTINGS =====
    API_HOST: str = "localhost"
    """API host address."""

    API_PORT: int = 8000
    """API port number."""

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    """Origins allowed to call the API from a browser."""

    # ===== IDENTITY =====
    JWT_SECRET_KEY: str = "change-me"
    """Key used to verify bearer tokens issued by the identity service."""

    JWT_ALGORITHM: str = "HS256"
    """Signature algorithm of bearer tokens."""

    JWT_AUDIENCE: Optional[str] = None
    """Expected ``aud`` claim; not checked when unset."""

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Singleton instance
settings = Settings()
