from __future__ import annotations

import secrets
import string
import time
from datetime import datetime, timezone
from typing import Callable, Protocol

from app.core.config import settings

_ID_ALPHABET = string.ascii_lowercase + string.digits

Clock = Callable[[], datetime]


class IdGenerator(Protocol):
    def __call__(self) -> str:
        """Return a process-unique analysis identifier."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def timestamped_id(prefix: str | None = None, *, random_length: int = 9) -> str:
    """Build ``<prefix>_<epoch-ms>_<random base36>``, e.g. ``ats_1718000000000_k3j9x0a1b``."""
    head = prefix or settings.analysis_id_prefix
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(random_length))
    return f"{head}_{time.time_ns() // 1_000_000}_{suffix}"
