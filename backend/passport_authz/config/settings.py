"""Environment-driven settings. ``.env`` is loaded by the app factory via python-dotenv."""
from __future__ import annotations
import os
from typing import Any, Dict, Optional

DEFAULT_LIMIT = 50
MAX_LIMIT = 200


def load_settings(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    settings = {
        'JWT_SECRET_KEY': os.getenv('JWT_SECRET_KEY', 'dev-secret'),
        'DATABASE_URL': os.getenv('DATABASE_URL', 'sqlite:///dev.db'),
        'LOG_LEVEL': os.getenv('LOG_LEVEL', 'INFO').upper(),
    }
    if overrides:
        # tests or callers may override any value
        settings.update(overrides)
    return settings


def normalize_pagination(limit_raw, offset_raw):
    try:
        limit = int(limit_raw) if limit_raw is not None else DEFAULT_LIMIT
        offset = int(offset_raw) if offset_raw is not None else 0
    except ValueError:
        raise ValueError('limit/offset must be int')
    return max(1, min(limit, MAX_LIMIT)), max(0, offset)
