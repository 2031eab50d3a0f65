"""
Single place for runtime configuration.
Values come from environment variables where set; otherwise the defaults below apply.
"""

import logging
import os

# Saved state for a game lives under prefix + slug
GAME_KEY_PREFIX = "bcw-game-"

# SQLite file next to the api package unless BCW_DATABASE_URL is set
DATABASE_URL = os.environ.get("BCW_DATABASE_URL")

# Frontend dev servers allowed to call the API
CORS_ORIGINS = [
    o.strip()
    for o in os.environ.get("BCW_CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if o.strip()
]

LOG_LEVEL = os.environ.get("BCW_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Apply LOG_LEVEL (or an explicit level) to the root logger."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
