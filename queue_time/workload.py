from __future__ import annotations

# Workload helpers.
#
# A workload is the line of customers waiting at the tills, expressed as the
# time units each one needs:
#   [3, 1, 4, 1, 5]  -> five customers, first needs 3 units, ...
#
# Everything that reaches the simulator (CLI text, JSON request bodies,
# generated demo data) goes through the same validation here.

import json
import random
import re
from typing import Any, Iterable

from .errors import InvalidArgument

_SEPARATORS = re.compile(r"[,\s]+")


def _is_int(value: Any) -> bool:
    # bool is an int subclass, but True tills makes no sense.
    return isinstance(value, int) and not isinstance(value, bool)


def validate_stations(value: Any) -> int:
    """Check the number of open tills.

    Zero or negative tills would mean the line is never served; we reject
    that instead of returning a misleading number.
    """
    if not _is_int(value):
        raise InvalidArgument(f"stations must be an integer, got {value!r}")
    if value < 1:
        raise InvalidArgument("stations must be >= 1")
    return value


def validate_durations(values: Iterable[Any]) -> list[int]:
    """Return the durations as a fresh list of non-negative ints."""
    if isinstance(values, (str, bytes, dict)):
        raise InvalidArgument("durations must be a sequence of integers")
    try:
        items = list(values)
    except TypeError as e:
        raise InvalidArgument("durations must be a sequence of integers") from e

    for i, d in enumerate(items):
        if not _is_int(d):
            raise InvalidArgument(f"duration #{i} must be an integer, got {d!r}")
        if d < 0:
            raise InvalidArgument(f"duration #{i} must be >= 0, got {d}")
    return items


def parse_durations(text: str) -> list[int]:
    """Parse durations typed on a command line.

    Accepted forms:
        "[1, 2, 3]"   JSON array
        "1,2,3"       comma separated
        "1 2 3"       whitespace separated
        ""            no customers
    """
    text = text.strip()
    if not text:
        return []

    if text.startswith("["):
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidArgument(f"invalid JSON durations: {e.msg}") from e
        except (ValueError, RecursionError) as e:
            # Oversized integer literals or absurdly deep nesting.
            raise InvalidArgument(f"invalid JSON durations: {e}") from e
        if not isinstance(data, list):
            raise InvalidArgument("durations must be a JSON array")
        return validate_durations(data)

    out: list[int] = []
    for token in _SEPARATORS.split(text):
        if not token:
            continue
        try:
            out.append(int(token))
        except ValueError as e:
            raise InvalidArgument(f"not an integer duration: {token!r}") from e
    return validate_durations(out)


def random_durations(*, count: int, max_duration: int = 20, rng: random.Random | None = None) -> list[int]:
    """Generate a line of `count` customers with durations in [1, max_duration].

    Args:
        count: number of customers (>= 0).
        max_duration: longest possible service time (>= 1).
        rng: optional RNG (useful for deterministic tests and demos).
    """
    if not _is_int(count) or count < 0:
        raise InvalidArgument("count must be an integer >= 0")
    if not _is_int(max_duration) or max_duration < 1:
        raise InvalidArgument("max_duration must be an integer >= 1")

    r = rng or random
    return [r.randint(1, max_duration) for _ in range(count)]
