"""
Lightweight structured debug tracing.

Enabled when the DEBUG_LOG_PATH env var is set: every call appends one JSON
line to that file. Intended for diagnosing gate decisions without raising
the normal log level.
"""

from __future__ import annotations

import json
import os
import time
from typing import Any


def debug_log(
    event: str,
    location: str,
    message: str,
    data: dict[str, Any] | None = None,
    *,
    session_id: str = "gate-session",
) -> None:
    """
    Append a JSONL debug entry to DEBUG_LOG_PATH if configured.
    """
    path = os.getenv("DEBUG_LOG_PATH")
    if not path:
        return

    payload = {
        "sessionId": session_id,
        "event": event,
        "timestamp": int(time.time() * 1000),
        "location": location,
        "message": message,
        "data": data or {},
    }

    try:
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(payload, default=str) + "\n")
    except OSError:
        # Tracing must never affect command handling
        return
