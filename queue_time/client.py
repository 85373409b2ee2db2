from __future__ import annotations

# Queue time client.
#
# A client is short-lived:
# - connect to broker
# - publish one queue_time request
# - wait for the correlated response
# - print it and exit

import argparse
import time
from typing import Any, Sequence

from .mqtt_client import MqttClient
from .mqtt_topics import DEFAULT_NAMESPACE, queue_time_requests, queue_time_responses
from .protocol import queue_time_request


def request_total_time(
    *,
    mqtt_host: str,
    mqtt_port: int,
    namespace: str,
    durations: Sequence[int],
    stations: int,
    method: str = "event",
    timeout: float = 5.0,
) -> dict[str, Any]:
    """Ask a running service for the total time; returns the raw reply message."""
    client_id = f"queue-time-client-{int(time.time() * 1000)}"
    mqtt = MqttClient(client_id=client_id, host=mqtt_host, port=mqtt_port)
    mqtt.start()

    reply_topic = queue_time_responses(client_id, namespace)
    mqtt.subscribe(reply_topic)

    try:
        return mqtt.request(
            request_topic=queue_time_requests(namespace),
            response_topic=reply_topic,
            message=queue_time_request(durations, stations, method=method),
            timeout=timeout,
        )
    finally:
        mqtt.stop()


def format_reply(reply: dict[str, Any]) -> str:
    if reply.get("type") == "queue_time_result":
        return f"[client] total_time={reply['total_time']} ({reply['customers']} customers, {reply['stations']} tills)"
    return f"[client] error {reply.get('code')}: {reply.get('message')}"


def main() -> None:
    from .workload import parse_durations

    parser = argparse.ArgumentParser(description="Queue time client (MQTT)")
    parser.add_argument("--durations", required=True, help='e.g. "1,2,3" or "[1, 2, 3]"')
    parser.add_argument("--stations", type=int, required=True)
    parser.add_argument("--method", choices=["event", "tick"], default="event")
    parser.add_argument("--timeout", type=float, default=5.0)
    parser.add_argument("--mqtt-host", default="127.0.0.1")
    parser.add_argument("--mqtt-port", type=int, default=1883)
    parser.add_argument("--namespace", default=DEFAULT_NAMESPACE)
    args = parser.parse_args()

    try:
        durations = parse_durations(args.durations)
    except ValueError as e:
        parser.error(str(e))

    reply = request_total_time(
        mqtt_host=args.mqtt_host,
        mqtt_port=args.mqtt_port,
        namespace=args.namespace,
        durations=durations,
        stations=args.stations,
        method=args.method,
        timeout=args.timeout,
    )
    print(format_reply(reply))


if __name__ == "__main__":
    main()
