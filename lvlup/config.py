import os
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """Application settings."""
    # Base settings
    DEBUG: bool = False

    # CORS settings
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",  # Frontend development server
        "http://localhost:8000",  # Backend server
    ]

    # Firebase settings (identity provider)
    FIREBASE_ENABLED: bool = os.getenv("FIREBASE_ENABLED", "false").lower() == "true"
    FIREBASE_PROJECT_ID: str = ""
    FIREBASE_SERVICE_ACCOUNT_JSON: str = os.getenv("FIREBASE_SERVICE_ACCOUNT_JSON", "./firebase-service-account.json")

    # Database settings
    DB_HOST: str = os.getenv("DB_HOST", "")
    DB_PORT: str = os.getenv("DB_PORT", "5432")
    DB_USER: str = os.getenv("DB_USER", "postgres")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "postgres")
    DB_NAME: str = os.getenv("DB_NAME", "lvlup")
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}" if DB_HOST else "sqlite:///./lvlup.db"
    )

    # Streak day boundaries are computed in this zone unless the user sets their own
    DEFAULT_TIMEZONE: str = os.getenv("DEFAULT_TIMEZONE", "UTC")

    # Redis settings (rate limit storage, empty host means in-memory)
    REDIS_HOST: str = os.getenv("REDIS_HOST", "")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", "6379"))
    RATE_LIMIT_DEFAULT: str = os.getenv("RATE_LIMIT_DEFAULT", "1000/hour")

    # Email settings
    EMAIL_PROVIDER: str = os.getenv("EMAIL_PROVIDER", "logging")  # mailgun | logging
    EMAIL_FROM: str = os.getenv("EMAIL_FROM", "noreply@lvlup.app")
    EMAIL_FROM_NAME: str = os.getenv("EMAIL_FROM_NAME", "Lvl'Up")

    # Mailgun settings
    MAILGUN_API_KEY: str = os.getenv("MAILGUN_API_KEY", "")
    MAILGUN_DOMAIN: str = os.getenv("MAILGUN_DOMAIN", "lvlup.app")
    MAILGUN_BASE_URL: str = os.getenv("MAILGUN_BASE_URL", "https://api.mailgun.net")

    # Where user suggestions are forwarded
    SUGGESTIONS_TO_EMAIL: str = os.getenv("SUGGESTIONS_TO_EMAIL", "suggestions@lvlup.app")
    SUGGESTIONS_BCC_EMAIL: str = os.getenv("SUGGESTIONS_BCC_EMAIL", "")

    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
