from __future__ import annotations

# Per-teller state and the teller/customer handshake.
#
# A `Rendezvous` lives for exactly one service cycle. The controller creates
# it when it matches a customer with a teller, both sides keep a reference
# until the customer has left the counter, then it is dropped.
#
# Each direction is a one-slot queue, the same trick the request/response
# helper used for correlated replies: a put() on an empty slot never blocks
# and get() blocks until the other side has spoken.

import queue
import threading
from dataclasses import dataclass

from .models import Customer, TellerState, TransactionRequest, TransactionResult


class Rendezvous:
    """Single-use channel between one teller and one customer."""

    def __init__(self, teller_id: int, customer_id: int) -> None:
        self.teller_id = teller_id
        self.customer_id = customer_id
        self._requests: "queue.Queue[TransactionRequest]" = queue.Queue(maxsize=1)
        self._results: "queue.Queue[TransactionResult]" = queue.Queue(maxsize=1)
        self._left = threading.Event()

    # -------------------- customer side --------------------

    def submit(self, request: TransactionRequest) -> None:
        self._requests.put_nowait(request)

    def await_result(self) -> TransactionResult:
        return self._results.get()

    def leave(self) -> None:
        self._left.set()

    # -------------------- teller side --------------------

    def receive(self) -> TransactionRequest:
        return self._requests.get()

    def complete(self, result: TransactionResult) -> None:
        self._results.put_nowait(result)

    def wait_for_leave(self) -> None:
        self._left.wait()


@dataclass
class TellerStation:
    """In-memory state for one teller.

    `state` and `rendezvous` are read and written under the controller's
    coordination lock while the teller is idle or being matched. Once the
    teller owns a rendezvous, only its own thread moves `state` along.
    """

    teller_id: int
    wakeup: threading.Condition
    state: TellerState = TellerState.READY
    customer: Customer | None = None
    rendezvous: Rendezvous | None = None
    served_count: int = 0

    def snapshot(self) -> dict[str, object]:
        return {
            "teller_id": self.teller_id,
            "state": self.state.value,
            "customer_id": self.customer.customer_id if self.customer else None,
            "served_count": self.served_count,
        }
