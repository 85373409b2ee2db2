"""Supermarket queue time: how long until every customer has been served.

The core is a pure function over a line of service durations and a number of
open tills:
- `compute_total_time` (discrete event, min-heap of till finish times)
- `schedule` (which till served whom, and when)
- `simulate_ticks` (unit-step reference simulation)

Around it sit a CLI (`python -m queue_time.app`) and an optional MQTT
request/response service for remote callers.
"""
from __future__ import annotations

from .errors import InvalidArgument
from .simulator import Assignment, compute_total_time, schedule, simulate_ticks

__all__ = [
    "Assignment",
    "InvalidArgument",
    "compute_total_time",
    "schedule",
    "simulate_ticks",
]
