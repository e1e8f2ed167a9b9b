"""Configuration management for Catso."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Application configuration."""

    # Application
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
    PORT: int = int(os.getenv("PORT", "7680"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    SITE_URL: str = os.getenv("SITE_URL", "https://catsoav.com").rstrip("/")

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./catso.db")

    # Media Storage
    MEDIA_ROOT: Path = Path(os.getenv("MEDIA_ROOT", "./media"))
    PLACEHOLDER_IMAGE_URL: str = os.getenv(
        "PLACEHOLDER_IMAGE_URL", "/static/placeholder-project.svg"
    )

    # Features
    FEATURE_SIGNUP_ENABLED: bool = (
        os.getenv("FEATURE_SIGNUP_ENABLED", "true").lower() == "true"
    )

    # Auth
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 1 week
    ALGORITHM: str = "HS256"
    SESSION_COOKIE_SECURE: bool = (
        os.getenv("SESSION_COOKIE_SECURE", "false").lower() == "true"
    )
    COOKIE_SAMESITE: str = os.getenv("COOKIE_SAMESITE", "lax")
    INITIAL_ADMIN_EMAIL: str | None = os.getenv("INITIAL_ADMIN_EMAIL")
    INITIAL_ADMIN_PASSWORD: str | None = os.getenv("INITIAL_ADMIN_PASSWORD")

    # Behance import
    BEHANCE_PROFILE_URL: str = os.getenv(
        "BEHANCE_PROFILE_URL", "https://www.behance.net/catsoav"
    )
    BEHANCE_API_KEY: str | None = os.getenv("BEHANCE_API_KEY") or None
    BEHANCE_TIMEOUT: float = float(os.getenv("BEHANCE_TIMEOUT", "30"))

    @classmethod
    def ensure_media_dirs(cls) -> None:
        """Ensure media directories exist."""
        cls.MEDIA_ROOT.mkdir(parents=True, exist_ok=True)
        (cls.MEDIA_ROOT / "uploads").mkdir(exist_ok=True)
        (cls.MEDIA_ROOT / "thumbnails").mkdir(exist_ok=True)


config = Config()
