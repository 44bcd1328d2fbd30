from __future__ import annotations

# Streams a running bank to an MQTT broker.
#
# Two feeds:
# 1) every BankEvent, as it happens, on `<ns>/events/<actor>`
# 2) a background thread publishing `BankController.status()` snapshots on
#    `<ns>/status/updates` and one message per teller on
#    `<ns>/tellers/status/<id>`
#
# The publisher only needs an object with `publish(topic, dict)`, so unit
# tests can hand it a fake instead of a real `MqttClient`.

import threading
from typing import TYPE_CHECKING, Any, Protocol

from .events import BankEvent
from .mqtt_topics import DEFAULT_NAMESPACE, events, status_updates, teller_status

if TYPE_CHECKING:
    from .bank import BankController


class Publisher(Protocol):
    def publish(self, topic: str, message: dict[str, Any]) -> None: ...


class MqttEventPublisher:
    """Event handler + periodic status broadcaster for one BankController."""

    def __init__(self, *, bank: BankController, mqtt: Publisher, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.bank = bank
        self.mqtt = mqtt
        self.namespace = namespace

        # Background publisher thread control.
        self._stop_event = threading.Event()
        self._status_thread: threading.Thread | None = None

    def __call__(self, event: BankEvent) -> None:
        self.mqtt.publish(events(event.actor, self.namespace), event.to_message())

    def start(self, *, publish_status_every: float = 1.0) -> None:
        self.bank.add_handler(self)
        self._status_thread = threading.Thread(
            target=self._status_publisher_loop,
            args=(publish_status_every,),
            daemon=True,
        )
        self._status_thread.start()

    def stop(self) -> None:
        """Stop the status thread after one last snapshot."""
        self._stop_event.set()
        t = self._status_thread
        if t and t.is_alive():
            t.join(timeout=1.0)
        self.publish_status()

    def publish_status(self) -> None:
        snapshot = self.bank.status()
        self.mqtt.publish(status_updates(self.namespace), snapshot)
        for tid, teller in snapshot["tellers"].items():
            self.mqtt.publish(teller_status(tid, self.namespace), {"type": "teller_status", **teller})

    def _status_publisher_loop(self, interval: float) -> None:
        while not self._stop_event.is_set():
            try:
                self.publish_status()
            except Exception:
                # Keep publishing even if an occasional send fails.
                pass
            self._stop_event.wait(interval)
