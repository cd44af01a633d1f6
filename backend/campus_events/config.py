"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./campus_events.db"
    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"

    # RSVP engine
    WAITLIST_SCAN_LIMIT: int = 50
    WAITLIST_STRICT_FIFO: bool = False
    RSVP_TRANSACTION_ATTEMPTS: int = 3

    class Config:
        env_file = ".env"


settings = Settings()
