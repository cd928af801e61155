"""
axle_client.utils
-----------------
Small helpers for wire timestamps (float milliseconds since the epoch), path
escaping and display JSON.
"""

from __future__ import annotations
import json, time
from datetime import datetime, timezone
from typing import Any, Optional
from urllib.parse import quote


def now_ms() -> float:
    return float(time.time_ns() // 1_000_000)


def ms_to_datetime(ms: Optional[float]) -> Optional[datetime]:
    if not ms:
        return None
    return datetime.fromtimestamp(ms / 1000.0, tz=timezone.utc)


def to_unix(dt: datetime) -> int:
    # naive datetimes are taken as local time, same as datetime.timestamp()
    return int(dt.timestamp())


def escape(identifier: str) -> str:
    return quote(identifier, safe="")


def pretty_json(obj: Any) -> str:
    return json.dumps(obj, indent=4, sort_keys=True, ensure_ascii=False)
