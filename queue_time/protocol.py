"""JSON message shapes exchanged over MQTT.

Request (client -> service):
    {"type": "queue_time", "durations": [..], "stations": n, "method": "event",
     "corr_id": "...", "reply_to": "<ns>/queue_time/responses/<client_id>"}

Result (service -> client):
    {"type": "queue_time_result", "total_time": t, "stations": n,
     "customers": len(durations), "corr_id": "..."}

Failures use the `ErrorResponse` envelope from `errors.py`.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

QUEUE_TIME = "queue_time"
QUEUE_TIME_RESULT = "queue_time_result"

METHODS = ("event", "tick")


def queue_time_request(durations: Sequence[int], stations: int, *, method: str = "event") -> dict[str, Any]:
    return {"type": QUEUE_TIME, "durations": list(durations), "stations": stations, "method": method}


def queue_time_result(*, total_time: int, stations: int, customers: int) -> dict[str, Any]:
    return {"type": QUEUE_TIME_RESULT, "total_time": total_time, "stations": stations, "customers": customers}


def encode_message(message: dict[str, Any]) -> bytes:
    return json.dumps(message, separators=(",", ":")).encode("utf-8")


def decode_payload(raw: bytes | str) -> dict[str, Any] | None:
    """Decode an MQTT payload; None for anything that is not a JSON object."""
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else str(raw)
        data = json.loads(text)
    except (ValueError, RecursionError):
        # ValueError covers bad UTF-8, bad JSON and oversized integers.
        return None
    if not isinstance(data, dict):
        return None
    return data
