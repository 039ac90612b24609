# lockerhub/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Database ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite://"      # in-memory store; any SQLAlchemy URL works

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_HOST: str = "0.0.0.0"
    BACKEND_PORT: int = 8080

    # ── Security ──────────────────────────────────────────────────────────
    API_KEY: Optional[str] = None   # Set in .env to enable auth on API endpoints

    # ── Engine behaviour ──────────────────────────────────────────────────
    SIMULATED_LATENCY_MS: int = 0            # Suspend each operation before it touches the store
    STRICT_DELIVERY_GATE: bool = False       # Only an assigned package may be marked delivered
    STRICT_ADMIN_OVERRIDES: bool = False     # Refuse locker overrides that contradict package state

    # ── Identity verification ─────────────────────────────────────────────
    FACE_VERIFICATION_STUB_RESULT: bool = True
    REQUIRE_IDENTITY_VERIFICATION: bool = False  # Reject pickups the verifier does not confirm

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True
    LOG_FILE_NAME: str = "lockerhub.log"
    LOG_FILE_MAX_MB: int = 5
    LOG_FILE_BACKUPS: int = 10

    # ── Demo data ─────────────────────────────────────────────────────────
    SEED_DEMO_DATA: bool = False   # Load demo users, lockers and packages on startup

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
