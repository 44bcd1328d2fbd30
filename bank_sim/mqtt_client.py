"""Publish-only MQTT connection built on paho-mqtt.

The simulation never listens on the broker; it only streams narration and
status snapshots out. `MqttClient` owns the paho connection and its
background network loop and turns dicts into compact JSON payloads.

QoS is kept at 0: narration is best-effort and must never slow a teller down.
"""

from __future__ import annotations

import json
from typing import Any

import paho.mqtt.client as mqtt


class MqttClient:
    """Connection + JSON publishing on top of paho-mqtt."""

    def __init__(self, *, client_id: str, host: str, port: int, keepalive: int = 30) -> None:
        self.client_id = client_id
        self.host = host
        self.port = port
        self.keepalive = keepalive

        self._client = mqtt.Client(mqtt.CallbackAPIVersion.VERSION2, client_id=client_id, clean_session=True)
        self._started = False

    @property
    def started(self) -> bool:
        return self._started

    def start(self) -> None:
        """Connect and start the background network loop."""
        if self._started:
            return
        self._client.connect(self.host, self.port, keepalive=self.keepalive)
        self._client.loop_start()
        self._started = True

    def stop(self) -> None:
        """Stop and disconnect."""
        if not self._started:
            return
        self._client.loop_stop()
        self._client.disconnect()
        self._started = False

    def publish(self, topic: str, message: dict[str, Any]) -> None:
        self._client.publish(topic, payload=encode(message), qos=0)


def encode(message: dict[str, Any]) -> bytes:
    """Compact UTF-8 JSON, the wire format of every topic."""
    return json.dumps(message, separators=(",", ":")).encode("utf-8")
