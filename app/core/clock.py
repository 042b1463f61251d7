from __future__ import annotations

import time
from datetime import UTC, datetime

# Captured at import; the app module is imported once per process.
_PROCESS_STARTED = time.monotonic()


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a `Z` suffix."""
    now = datetime.now(UTC).isoformat(timespec="milliseconds")
    return now.replace("+00:00", "Z")


def process_uptime_seconds() -> float:
    return time.monotonic() - _PROCESS_STARTED
