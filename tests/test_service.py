from queue_time.service import QueueTimeService


def _req(**fields):
    msg = {"type": "queue_time", "reply_to": "ns/queue_time/responses/c1", "corr_id": "abc"}
    msg.update(fields)
    return msg


def test_answers_queue_time_request():
    svc = QueueTimeService()
    reply = svc.handle(_req(durations=[2, 2, 3, 3, 4, 4], stations=2))
    assert reply == {
        "type": "queue_time_result",
        "total_time": 9,
        "stations": 2,
        "customers": 6,
        "corr_id": "abc",
    }
    assert svc.handled == 1


def test_tick_method_gives_same_answer():
    svc = QueueTimeService()
    reply = svc.handle(_req(durations=[43, 46, 4, 29, 19, 30, 46, 7, 33, 26, 24], stations=6, method="tick"))
    assert reply["total_time"] == 59


def test_missing_durations_means_empty_line():
    reply = QueueTimeService().handle(_req(stations=3))
    assert reply["total_time"] == 0
    assert reply["customers"] == 0


def test_zero_stations_is_invalid_argument():
    svc = QueueTimeService()
    reply = svc.handle(_req(durations=[1, 2], stations=0))
    assert reply["type"] == "error"
    assert reply["code"] == "invalid_argument"
    assert reply["corr_id"] == "abc"
    assert svc.failed == 1


def test_bad_durations_and_method_are_invalid_argument():
    svc = QueueTimeService()
    assert svc.handle(_req(durations="1,2", stations=2))["code"] == "invalid_argument"
    assert svc.handle(_req(durations=[1, -1], stations=2))["code"] == "invalid_argument"
    assert svc.handle(_req(durations=[1], stations=2, method="fast"))["code"] == "invalid_argument"


def test_unknown_type_is_bad_request():
    reply = QueueTimeService().handle(_req(type="status"))
    assert reply["type"] == "error"
    assert reply["code"] == "bad_request"


def test_no_reply_to_is_ignored():
    svc = QueueTimeService()
    assert svc.handle({"type": "queue_time", "durations": [1], "stations": 1}) is None
    assert svc.handled == 0


class FakeMqtt:
    def __init__(self):
        self.subscribed = []
        self.handlers = []
        self.published = []

    def subscribe(self, topic):
        self.subscribed.append(topic)

    def add_handler(self, handler):
        self.handlers.append(handler)

    def publish(self, topic, message):
        self.published.append((topic, message))


def test_mqtt_adapter_replies_on_reply_topic():
    from queue_time.service import MqttQueueTimeService

    mqtt = FakeMqtt()
    svc = MqttQueueTimeService(mqtt=mqtt, namespace="demo")
    svc.start()
    assert mqtt.subscribed == ["demo/queue_time/requests"]

    handler = mqtt.handlers[0]
    handler("demo/queue_time/requests", _req(durations=[1, 2, 3, 4], stations=1))
    handler("demo/queue_time/requests", _req(durations=[1], stations=0))
    handler("other/topic", _req(durations=[1], stations=1))

    assert len(mqtt.published) == 2
    topic, reply = mqtt.published[0]
    assert topic == "ns/queue_time/responses/c1"
    assert reply["total_time"] == 10
    assert mqtt.published[1][1]["code"] == "invalid_argument"


def test_tick_method_is_capped_by_total_time_units():
    svc = QueueTimeService(max_tick_units=100)
    reply = svc.handle(_req(durations=[10**12], stations=1, method="tick"))
    assert reply["code"] == "invalid_argument"
    assert "tick" in reply["message"]
    # Same line is fine with the event method.
    assert svc.handle(_req(durations=[10**12], stations=1))["total_time"] == 10**12
    assert svc.handle(_req(durations=[60, 40], stations=1, method="tick"))["total_time"] == 100


def test_tick_method_with_huge_till_count():
    reply = QueueTimeService().handle(_req(durations=[2, 5], stations=10**9, method="tick"))
    assert reply["total_time"] == 5
