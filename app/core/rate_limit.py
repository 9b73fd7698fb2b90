from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def rate_limit(limit: str | None = None):
    """Per-route limit; falls back to RATE_LIMIT. Toggle at runtime via ``limiter.enabled``."""
    return limiter.limit(limit or settings.rate_limit)
