"""Environment-driven settings for the Flask app."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from fire_tracker.core.rates import DEFAULT_RATE_URL

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]


def _origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def load_config() -> Dict[str, Any]:
    """Read the process environment into ``app.config`` keys."""
    return {
        # unset means records live in memory for the life of the process
        "DATA_FILE": (os.getenv("FIRE_TRACKER_DATA_FILE") or "").strip() or None,
        "EXCHANGE_RATE_URL": os.getenv("EXCHANGE_RATE_URL", DEFAULT_RATE_URL),
        "EXCHANGE_RATE_TIMEOUT": float(os.getenv("EXCHANGE_RATE_TIMEOUT", "5")),
        "EXCHANGE_RATE_CACHE_SECONDS": float(os.getenv("EXCHANGE_RATE_CACHE_SECONDS", "300")),
        "CORS_ORIGINS": _origins(os.getenv("CORS_ORIGINS")),
        "LOG_LEVEL": os.getenv("LOG_LEVEL", "INFO").upper(),
    }
