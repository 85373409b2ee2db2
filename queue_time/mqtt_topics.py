"""MQTT topic helpers.

Topic layout under a configurable namespace (default: `supermarket/queue-time`):

- `<ns>/queue_time/requests`
    Shared topic the service listens on.
- `<ns>/queue_time/responses/<client_id>`
    Each client subscribes to its own reply topic and passes it as `reply_to`.

Several services can share one broker by changing the namespace
(e.g. `--namespace demo/alice`).
"""

from __future__ import annotations

DEFAULT_NAMESPACE = "supermarket/queue-time"


def queue_time_requests(namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"{namespace}/queue_time/requests"


def queue_time_responses(client_id: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"{namespace}/queue_time/responses/{client_id}"
