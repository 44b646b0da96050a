"""
Application configuration and settings
"""
import logging
import os
from dotenv import load_dotenv

load_dotenv()

# API Configuration
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8080").rstrip("/")
API_BASE = os.getenv("API_BASE", "/api")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "10.0"))  # seconds

# Application Configuration
APP_NAME = os.getenv("APP_NAME", "Movie Booking App")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")

# Feature flags
ENABLE_DEBUG = os.getenv("ENABLE_DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Persisted client storage (token + user)
STORAGE_PATH = os.path.expanduser(os.getenv("STORAGE_PATH", "~/.moviebook/storage.json"))
STORAGE_KEYS = {
    "TOKEN": "token",
    "USER": "user",
}

# Posters stored as relative paths are resolved against this origin
POSTER_BASE_URL = os.getenv("POSTER_BASE_URL", BACKEND_URL).rstrip("/")

# Seed target (reference)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./moviebooking.db")

API_ENDPOINTS = {
    "AUTH": {
        "LOGIN": "/auth/login",
        "REGISTER": "/auth/register",
    },
    "MOVIES": "/movies",
    "THEATRES": "/theatres",
    "SHOWTIMES": "/showtimes",
    "BOOKINGS": "/bookings",
    "HEALTH": "/health",
}

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Settings:
    PROJECT_NAME: str = APP_NAME
    VERSION: str = APP_VERSION
    BACKEND_URL = BACKEND_URL
    API_BASE = API_BASE
    REQUEST_TIMEOUT = REQUEST_TIMEOUT
    ENABLE_DEBUG = ENABLE_DEBUG
    LOG_LEVEL = LOG_LEVEL
    STORAGE_PATH = STORAGE_PATH
    POSTER_BASE_URL = POSTER_BASE_URL
    DATABASE_URL = DATABASE_URL

    @property
    def api_url(self) -> str:
        return f"{self.BACKEND_URL}{self.API_BASE}"


settings = Settings()


def setup_logging(level: str = None) -> None:
    """Configure root logging once for scripts and interactive use."""
    if level is None:
        level = "DEBUG" if ENABLE_DEBUG else LOG_LEVEL
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
