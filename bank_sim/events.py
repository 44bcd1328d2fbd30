from __future__ import annotations

# Narration events.
#
# The controller, tellers and customers describe what they are doing by
# emitting `BankEvent`s. Handlers are plain callables registered on the
# controller; the simulation works the same with none registered.

import threading
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Callable


@dataclass(frozen=True)
class BankEvent:
    actor: str  # "teller", "customer" or "bank"
    actor_id: int | None
    action: str
    customer_id: int | None = None
    teller_id: int | None = None
    ts: float = field(default_factory=time.time)
    seq: int | None = None  # controller-wide order of creation

    def to_message(self) -> dict[str, Any]:
        msg = asdict(self)
        msg["type"] = "bank_event"
        return msg


EventHandler = Callable[[BankEvent], None]


def format_event(event: BankEvent) -> str:
    """Render an event as one narration line.

    Examples:
        Teller 0 [Customer 4]: going to safe
        Customer 4 [Teller 0]: selects teller
        Bank: all tellers ready, bank is open
    """
    if event.actor == "teller":
        who = f"Teller {event.actor_id}"
        other = f"Customer {event.customer_id}" if event.customer_id is not None else who
    elif event.actor == "customer":
        who = f"Customer {event.actor_id}"
        other = f"Teller {event.teller_id}" if event.teller_id is not None else who
    else:
        return f"Bank: {event.action}"
    return f"{who} [{other}]: {event.action}"


class ConsoleNarrator:
    """Prints events, one line each, without interleaving."""

    def __init__(self, out: Callable[[str], None] = print) -> None:
        self._out = out
        self._lock = threading.Lock()

    def __call__(self, event: BankEvent) -> None:
        line = format_event(event)
        with self._lock:
            self._out(line)


class EventRecorder:
    """Keeps every event (tests, post-run analysis).

    `events` comes back in `seq` order, which for queue and match events is
    the order they happened under the coordination lock, not the order the
    handler happened to be called in.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: list[BankEvent] = []

    def __call__(self, event: BankEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> list[BankEvent]:
        with self._lock:
            return sorted(self._events, key=lambda e: (e.seq is None, e.seq or 0))

    def actions(self, *, actor: str | None = None, actor_id: int | None = None) -> list[str]:
        return [
            e.action
            for e in self.events
            if (actor is None or e.actor == actor) and (actor_id is None or e.actor_id == actor_id)
        ]
