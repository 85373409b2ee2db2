"""Small MQTT helper built on top of paho-mqtt.

paho-mqtt is callback-based; the queue time client wants a blocking
"ask and wait for the answer" call. `MqttClient` adds that on top:

- `publish()` sends a JSON object.
- `request()` stamps a message with `corr_id` + `reply_to` and blocks on a
  future that the network thread resolves when the matching reply arrives.
- Messages that resolve no future go to the registered handlers
  (this is how the service receives requests).

QoS stays at 0.
"""

from __future__ import annotations

import threading
import uuid
from concurrent import futures
from typing import Any, Callable

import paho.mqtt.client as mqtt

from .protocol import decode_payload, encode_message

MessageHandler = Callable[[str, dict[str, Any]], None]


class MqttClient:
    """paho-mqtt client speaking JSON, with correlated request/reply."""

    def __init__(self, *, client_id: str, host: str, port: int) -> None:
        self.client_id = client_id
        self.host = host
        self.port = port

        self._client = mqtt.Client(
            mqtt.CallbackAPIVersion.VERSION2,
            client_id=client_id,
            clean_session=True,
        )
        self._client.on_message = self._on_message

        self._handlers: list[MessageHandler] = []
        self._waiting: dict[str, futures.Future] = {}
        self._lock = threading.Lock()

    def start(self) -> None:
        self._client.connect(self.host, self.port)
        self._client.loop_start()

    def stop(self) -> None:
        self._client.loop_stop()
        self._client.disconnect()

    def add_handler(self, handler: MessageHandler) -> None:
        self._handlers.append(handler)

    def subscribe(self, topic: str) -> None:
        self._client.subscribe(topic, qos=0)

    def publish(self, topic: str, message: dict[str, Any]) -> None:
        self._client.publish(topic, payload=encode_message(message), qos=0)

    def request(
        self,
        *,
        request_topic: str,
        response_topic: str,
        message: dict[str, Any],
        timeout: float = 5.0,
    ) -> dict[str, Any]:
        """Publish `message` and return the reply carrying the same corr_id.

        The caller must already be subscribed to `response_topic`.
        Raises TimeoutError when nothing comes back in `timeout` seconds.
        """
        corr_id = uuid.uuid4().hex
        reply: futures.Future = futures.Future()
        with self._lock:
            self._waiting[corr_id] = reply

        try:
            self.publish(request_topic, {**message, "corr_id": corr_id, "reply_to": response_topic})
            return reply.result(timeout=timeout)
        except futures.TimeoutError:
            raise TimeoutError(f"{self.client_id}: no reply to {request_topic} within {timeout}s") from None
        finally:
            with self._lock:
                self._waiting.pop(corr_id, None)

    def _resolve(self, data: dict[str, Any]) -> bool:
        corr_id = data.get("corr_id")
        if not isinstance(corr_id, str):
            return False
        with self._lock:
            reply = self._waiting.pop(corr_id, None)
        if reply is None:
            return False
        reply.set_result(data)
        return True

    def _on_message(self, client: mqtt.Client, userdata: Any, msg: mqtt.MQTTMessage) -> None:
        data = decode_payload(msg.payload)
        if data is None or self._resolve(data):
            return

        for handler in list(self._handlers):
            try:
                handler(msg.topic, data)
            except Exception as e:
                # An exception here would stop paho's network thread.
                print(f"[mqtt {self.client_id}] handler failed on {msg.topic}: {e!r}")
