from __future__ import annotations

# Queue time simulator.
#
# Rule: every till serves one customer at a time and, as soon as it is free,
# takes the next customer from the front of the single shared line.
#
# Instead of ticking a clock minute by minute, we jump straight from one
# "till becomes free" event to the next with a min-heap of finish times. The
# minute-by-minute version is kept as `simulate_ticks` for cross-checking.

import heapq
from dataclasses import dataclass
from typing import Iterable

from .workload import validate_durations, validate_stations


@dataclass(frozen=True)
class Assignment:
    """One customer's visit to a till (0-based indexes)."""

    customer: int
    station: int
    start: int
    finish: int


def compute_total_time(durations: Iterable[int], stations: int) -> int:
    """Time units until every customer in `durations` has been served.

    Args:
        durations: service time of each customer, in line order (>= 0 each).
        stations: number of open tills (>= 1).

    Returns:
        Non-negative int. 0 for an empty line.

    Raises:
        InvalidArgument: for zero/negative tills or bad durations.
    """
    stations = validate_stations(stations)
    line = validate_durations(durations)

    if not line:
        return 0
    if stations == 1:
        # One till serializes everything.
        return sum(line)
    if len(line) <= stations:
        # Everybody starts at once; the slowest customer decides.
        return max(line)

    finish_times = line[:stations]
    heapq.heapify(finish_times)
    for d in line[stations:]:
        # The till that frees up first takes the next customer.
        heapq.heapreplace(finish_times, finish_times[0] + d)
    return max(finish_times)


def schedule(durations: Iterable[int], stations: int) -> list[Assignment]:
    """Greedy dispatch of the line, one `Assignment` per customer.

    Ties between tills that free up at the same time go to the lowest index.
    """
    stations = validate_stations(stations)
    line = validate_durations(durations)

    # Tills beyond the number of customers never take anyone.
    free_at: list[tuple[int, int]] = [(0, s) for s in range(min(stations, len(line)))]
    out: list[Assignment] = []
    for i, d in enumerate(line):
        start, station = heapq.heappop(free_at)
        finish = start + d
        out.append(Assignment(customer=i, station=station, start=start, finish=finish))
        heapq.heappush(free_at, (finish, station))
    return out


def simulate_ticks(durations: Iterable[int], stations: int) -> int:
    """Unit-step simulation of the tills; same answer as `compute_total_time`.

    Runs in time proportional to the elapsed time units, so keep it for small
    inputs and tests.
    """
    stations = validate_stations(stations)
    line = validate_durations(durations)

    remaining = [0] * min(stations, len(line))
    nxt = 0
    elapsed = 0
    while True:
        for s in range(len(remaining)):
            # A zero-length customer leaves at once and frees the till again.
            while remaining[s] == 0 and nxt < len(line):
                remaining[s] = line[nxt]
                nxt += 1

        if not any(remaining):
            return elapsed

        for s in range(len(remaining)):
            if remaining[s] > 0:
                remaining[s] -= 1
        elapsed += 1
