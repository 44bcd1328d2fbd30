import threading
import time

from bank_sim.bank import BankController
from bank_sim.config import BankConfig
from bank_sim.publisher import MqttEventPublisher


class FakeMqtt:
    def __init__(self):
        self.published = []

    def publish(self, topic, message):
        self.published.append((topic, message))


def test_events_and_status_are_published():
    bank = BankController(BankConfig.instant(num_tellers=2, num_customers=4))
    mqtt = FakeMqtt()
    publisher = MqttEventPublisher(bank=bank, mqtt=mqtt, namespace="t")
    publisher.start(publish_status_every=0.01)
    try:
        bank.run()
    finally:
        publisher.stop()

    topics = {topic for topic, _ in mqtt.published}
    assert {"t/events/teller", "t/events/customer", "t/events/bank"} <= topics
    assert {"t/tellers/status/0", "t/tellers/status/1"} <= topics

    # stop() always sends a final snapshot.
    last_status = [m for topic, m in mqtt.published if topic == "t/status/updates"][-1]
    assert last_status["closed"] is True
    assert last_status["departed"] == 4
    assert last_status["tellers"]["0"]["state"] == "closed"


def test_publish_status_shape():
    bank = BankController(BankConfig.instant(num_tellers=1, num_customers=0))
    mqtt = FakeMqtt()
    MqttEventPublisher(bank=bank, mqtt=mqtt).publish_status()

    (topic, snapshot), (teller_topic, teller) = mqtt.published
    assert topic == "bank/v0/status/updates"
    assert snapshot["gates"]["safe"] == {"capacity": 2, "held": 0, "peak": 0}
    assert teller_topic == "bank/v0/tellers/status/0"
    assert teller["type"] == "teller_status"


class FlakyMqtt(FakeMqtt):
    """Fails the first few sends with an error paho could raise."""

    def __init__(self, failures):
        super().__init__()
        self.failures = failures

    def publish(self, topic, message):
        if self.failures > 0:
            self.failures -= 1
            raise RuntimeError("send failed")
        super().publish(topic, message)


def test_status_loop_survives_send_errors():
    bank = BankController(BankConfig.instant(num_tellers=1, num_customers=0))
    mqtt = FlakyMqtt(failures=3)
    publisher = MqttEventPublisher(bank=bank, mqtt=mqtt)
    t = threading.Thread(target=publisher._status_publisher_loop, args=(0.01,), daemon=True)
    t.start()

    deadline = time.monotonic() + 5.0
    while not mqtt.published and time.monotonic() < deadline:
        time.sleep(0.01)
    publisher._stop_event.set()
    t.join(2.0)

    assert mqtt.failures == 0
    assert any(topic == "bank/v0/status/updates" for topic, _ in mqtt.published)
