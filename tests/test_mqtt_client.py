import json

import pytest

pytest.importorskip("paho.mqtt.client")

from bank_sim.mqtt_client import MqttClient, encode  # noqa: E402


class FakePaho:
    def __init__(self):
        self.published = []

    def publish(self, topic, payload=None, qos=0):
        self.published.append((topic, payload, qos))


def test_encode_is_compact_json():
    payload = encode({"action": "enter safe", "teller_id": 1})
    assert payload == b'{"action":"enter safe","teller_id":1}'
    assert json.loads(payload) == {"action": "enter safe", "teller_id": 1}


def test_publish_sends_json_at_qos_zero():
    client = MqttClient(client_id="test", host="127.0.0.1", port=1883)
    client._client = FakePaho()

    client.publish("bank/v0/events/teller", {"action": "enter safe"})
    assert client._client.published == [("bank/v0/events/teller", b'{"action":"enter safe"}', 0)]


def test_stop_without_start_is_a_no_op():
    client = MqttClient(client_id="test", host="127.0.0.1", port=1883)
    client.stop()
    assert not client.started
