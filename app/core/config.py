# app/core/config.py

import os
import logging
from typing import List
from dotenv import load_dotenv

load_dotenv()
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# LOGGING
# ---------------------------------------------------

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE") or None

# ---------------------------------------------------
# HTTP
# ---------------------------------------------------

def _split_origins(raw: str) -> List[str]:
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]

CORS_ORIGINS = _split_origins(os.getenv("CORS_ORIGINS", "*"))

HOST = os.getenv("HOST", "127.0.0.1")
try:
    PORT = int(os.getenv("PORT", "8001"))
except ValueError:
    logger.warning(f"Ignoring invalid PORT={os.getenv('PORT')!r}")
    PORT = 8001

# ---------------------------------------------------
# ANALYTICS
# ---------------------------------------------------

DEFAULT_RECENT_ACTIVITY_LIMIT = 5

def _recent_limit(raw: str) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring invalid RECENT_ACTIVITY_LIMIT={raw!r}")
        return DEFAULT_RECENT_ACTIVITY_LIMIT
    if value < 1:
        logger.warning(f"RECENT_ACTIVITY_LIMIT must be >= 1, got {value}")
        return DEFAULT_RECENT_ACTIVITY_LIMIT
    return value

RECENT_ACTIVITY_LIMIT = _recent_limit(
    os.getenv("RECENT_ACTIVITY_LIMIT", str(DEFAULT_RECENT_ACTIVITY_LIMIT))
)

# Shown next to expense amounts in record views
CURRENCY_LABEL = os.getenv("CURRENCY_LABEL", "Taka")
