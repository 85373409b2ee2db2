from __future__ import annotations

# Queue time service.
#
# This file contains two layers:
# 1) `QueueTimeService` (pure request handling, easy to unit test)
# 2) `MqttQueueTimeService` + `main()` (integration with an MQTT broker)

import argparse
import time
from typing import Any, TYPE_CHECKING

from .errors import ErrorResponse, InvalidArgument
from .mqtt_topics import DEFAULT_NAMESPACE, queue_time_requests
from .protocol import METHODS, QUEUE_TIME, queue_time_result
from .simulator import compute_total_time, simulate_ticks
from .workload import validate_durations

if TYPE_CHECKING:
    from .mqtt_client import MqttClient

# Upper bound on sum(durations) for remote "tick" requests.
MAX_TICK_UNITS = 100_000


class QueueTimeService:
    """Turns request messages into reply messages (testable without MQTT)."""

    def __init__(self, *, max_tick_units: int = MAX_TICK_UNITS) -> None:
        self.max_tick_units = max_tick_units
        self.handled = 0
        self.failed = 0

    def handle(self, msg: dict[str, Any]) -> dict[str, Any] | None:
        """Answer one request.

        Returns None when there is nobody to answer (no `reply_to`); otherwise
        the reply message, with `corr_id` copied from the request.
        """
        reply_to = msg.get("reply_to")
        if not isinstance(reply_to, str) or not reply_to:
            return None
        corr_id = msg.get("corr_id") if isinstance(msg.get("corr_id"), str) else None

        mtype = msg.get("type")
        if mtype != QUEUE_TIME:
            self.failed += 1
            return ErrorResponse("bad_request", f"unknown message type: {mtype!r}").to_message(corr_id=corr_id)

        try:
            reply = self._compute(msg)
        except InvalidArgument as e:
            self.failed += 1
            return ErrorResponse.from_exception(e).to_message(corr_id=corr_id)

        self.handled += 1
        if corr_id is not None:
            reply["corr_id"] = corr_id
        return reply

    def _compute(self, msg: dict[str, Any]) -> dict[str, Any]:
        durations = msg.get("durations", [])
        stations = msg.get("stations")
        method = msg.get("method", "event")

        if method not in METHODS:
            raise InvalidArgument(f"method must be one of {', '.join(METHODS)}")
        if durations is None:
            durations = []

        if method == "tick":
            # Ticking costs one step per time unit on the network thread.
            line = validate_durations(durations)
            if sum(line) > self.max_tick_units:
                raise InvalidArgument(
                    f"tick method is limited to {self.max_tick_units} total time units; use method=event"
                )

        run = simulate_ticks if method == "tick" else compute_total_time
        total = run(durations, stations)
        return queue_time_result(total_time=total, stations=stations, customers=len(durations))


class MqttQueueTimeService:
    """MQTT adapter around the QueueTimeService logic."""

    def __init__(self, *, mqtt: MqttClient, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.mqtt = mqtt
        self.namespace = namespace
        self.service = QueueTimeService()

    def start(self) -> None:
        self.mqtt.subscribe(queue_time_requests(self.namespace))
        self.mqtt.add_handler(self._handle_message)

    def _handle_message(self, topic: str, msg: dict[str, Any]) -> None:
        if topic != queue_time_requests(self.namespace):
            return

        reply = self.service.handle(msg)
        if reply is None:
            return

        if reply.get("type") == "error":
            print(f"[service] rejected request: {reply['message']}")
        else:
            print(
                f"[service] {reply['customers']} customers, {reply['stations']} tills "
                f"-> total_time={reply['total_time']}"
            )
        self.mqtt.publish(msg["reply_to"], reply)


def main() -> None:
    # Import MQTT dependencies only when running the real service.
    from .mqtt_client import MqttClient

    parser = argparse.ArgumentParser(description="Queue time service (MQTT)")
    parser.add_argument("--mqtt-host", default="127.0.0.1")
    parser.add_argument("--mqtt-port", type=int, default=1883)
    parser.add_argument("--namespace", default=DEFAULT_NAMESPACE)
    args = parser.parse_args()

    mqtt_client = MqttClient(client_id=f"queue-time-service-{int(time.time())}", host=args.mqtt_host, port=args.mqtt_port)
    mqtt_client.start()

    service = MqttQueueTimeService(mqtt=mqtt_client, namespace=args.namespace)
    service.start()

    print(f"[service] connected to MQTT {args.mqtt_host}:{args.mqtt_port}, namespace={args.namespace}")

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        mqtt_client.stop()
        print(f"[service] stopped (handled={service.service.handled}, failed={service.service.failed})")


if __name__ == "__main__":
    main()
