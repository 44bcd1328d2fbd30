from __future__ import annotations

# Customers waiting for a teller.
#
# The queue itself is not thread-safe: every method must be called with the
# controller's coordination lock held. Each entry carries its own Event so a
# teller can wake exactly the customer it just took off the front.

import threading
from collections import deque

from .models import Customer
from .station import Rendezvous


class WaitTicket:
    """Handle a queued customer blocks on until a teller picks it up."""

    def __init__(self, customer: Customer, position: int) -> None:
        self.customer = customer
        self.position = position
        self.rendezvous: Rendezvous | None = None
        self._matched = threading.Event()

    def match(self, rendezvous: Rendezvous) -> None:
        self.rendezvous = rendezvous
        self._matched.set()

    def wait(self) -> Rendezvous:
        self._matched.wait()
        assert self.rendezvous is not None
        return self.rendezvous


class WaitingQueue:
    """FIFO of wait tickets. Insertion order is service order."""

    def __init__(self) -> None:
        self._tickets: deque[WaitTicket] = deque()
        self._enqueued = 0

    def push(self, customer: Customer) -> WaitTicket:
        self._enqueued += 1
        ticket = WaitTicket(customer, position=len(self._tickets) + 1)
        self._tickets.append(ticket)
        return ticket

    def pop_oldest(self) -> WaitTicket | None:
        if not self._tickets:
            return None
        return self._tickets.popleft()

    @property
    def total_enqueued(self) -> int:
        return self._enqueued

    def customer_ids(self) -> list[int]:
        return [t.customer.customer_id for t in self._tickets]

    def __len__(self) -> int:
        return len(self._tickets)

    def __bool__(self) -> bool:
        return bool(self._tickets)
