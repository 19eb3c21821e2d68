"""
Configuration settings for the User Directory Backend
"""

import os
import logging

logger = logging.getLogger(__name__)


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")  # development or production
IS_PRODUCTION = ENVIRONMENT.lower() == "production"
DATABASE_URL = os.getenv("DATABASE_URL")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 5000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

API_VERSION = "1.0.0"
API_TITLE = "User Directory API"

# Database pool configuration
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", 0))  # 0 keeps pool creation from dialing the database
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", 20))
DB_ACQUIRE_TIMEOUT = float(os.getenv("DB_ACQUIRE_TIMEOUT", 2.0))
DB_COMMAND_TIMEOUT = float(os.getenv("DB_COMMAND_TIMEOUT", 30.0))
DB_CLOSE_TIMEOUT = float(os.getenv("DB_CLOSE_TIMEOUT", 10.0))
DB_INIT_SCHEMA = _get_bool("DB_INIT_SCHEMA")

# Dashboard configuration
FRONTEND_PORT = int(os.getenv("FRONTEND_PORT", 3000))
API_BASE_URL = os.getenv("API_BASE_URL", f"http://localhost:{PORT}")

# CORS settings
ALLOWED_ORIGINS = [
    origin.strip() for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",") if origin.strip()
]

if not DATABASE_URL:
    logger.warning("DATABASE_URL not set - data endpoints will fail until it is configured")
