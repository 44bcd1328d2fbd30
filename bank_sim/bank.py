from __future__ import annotations

# The BankController is the single owner of all shared state.
#
# Tellers and customers never touch the gates, the waiting queue or the
# completion counter directly; they go through the controller methods below.
#
# One coordination lock guards, as a single atomic domain:
# - which tellers are Ready / which rendezvous they hold
# - the waiting queue
# - the completion counter and the closing flag
#
# Every teller has its own Condition built on that same lock, so a customer
# claiming a Ready teller (or the shutdown broadcast) wakes exactly the
# tellers that need waking.

import itertools
import random
import threading
from dataclasses import dataclass, field
from typing import Any

from .config import BankConfig
from .customer import run_customer
from .errors import InvariantViolation
from .events import BankEvent, EventHandler
from .gate import ResourceGate
from .models import Customer, CustomerState, TellerState, TransactionKind
from .station import Rendezvous, TellerStation
from .teller import run_teller
from .waiting import WaitingQueue


@dataclass(frozen=True)
class BankReport:
    """What happened during one run."""

    total_customers: int
    departed: int
    served_by: dict[int, int]  # customer_id -> teller_id
    kinds: dict[int, TransactionKind]
    teller_served: dict[int, int]  # teller_id -> customers served
    gate_peaks: dict[str, int]
    queued: int = 0
    unmatched: list[int] = field(default_factory=list)

    @property
    def withdrawals(self) -> int:
        return sum(1 for k in self.kinds.values() if k is TransactionKind.WITHDRAWAL)

    def summary(self) -> str:
        per_teller = ", ".join(f"T{tid}={n}" for tid, n in sorted(self.teller_served.items()))
        peaks = ", ".join(f"{name}={n}" for name, n in self.gate_peaks.items())
        return (
            f"served {self.departed}/{self.total_customers} customers "
            f"({self.withdrawals} withdrawals, {self.queued} waited in line); "
            f"per teller: {per_teller or '-'}; peak occupancy: {peaks}"
        )


class BankController:
    """Owns the gates, the waiting queue and the completion counter."""

    def __init__(self, config: BankConfig | None = None, *, rng: random.Random | None = None) -> None:
        self.config = config or BankConfig()
        self.rng = rng or random.Random(self.config.seed)

        self.door = ResourceGate("door", self.config.door_capacity)
        self.safe = ResourceGate("safe", self.config.safe_capacity)
        self.manager = ResourceGate("manager", self.config.manager_capacity)

        self._lock = threading.Lock()
        self._stations = [
            TellerStation(teller_id=i, wakeup=threading.Condition(self._lock))
            for i in range(self.config.num_tellers)
        ]
        self._waiting = WaitingQueue()
        self._departed = 0
        self._closing = False
        self._opened = False
        self._served_by: dict[int, int] = {}
        self._kinds: dict[int, TransactionKind] = {}

        # Tellers plus the controller itself.
        self._startup = threading.Barrier(self.config.num_tellers + 1)
        self.closed = threading.Event()

        self._handlers: list[EventHandler] = []
        self._seq = itertools.count()
        self._ran = False

    # -------------------- events --------------------

    def add_handler(self, handler: EventHandler) -> None:
        self._handlers.append(handler)

    def event(
        self,
        actor: str,
        actor_id: int | None,
        action: str,
        *,
        customer_id: int | None = None,
        teller_id: int | None = None,
    ) -> BankEvent:
        """Build an event stamped with the next sequence number.

        Events built under the coordination lock carry that lock's order in
        `seq`, even though handlers only see them after the lock is released.
        """
        return BankEvent(
            actor=actor,
            actor_id=actor_id,
            action=action,
            customer_id=customer_id,
            teller_id=teller_id,
            seq=next(self._seq),
        )

    def emit(
        self,
        actor: str,
        actor_id: int | None,
        action: str,
        *,
        customer_id: int | None = None,
        teller_id: int | None = None,
    ) -> None:
        self.publish([self.event(actor, actor_id, action, customer_id=customer_id, teller_id=teller_id)])

    def publish(self, events: list[BankEvent]) -> None:
        """Hand events to every handler. Never call with the coordination lock held."""
        for event in events:
            for h in list(self._handlers):
                try:
                    h(event)
                except Exception:
                    # A broken observer must not strand a customer mid-transaction.
                    continue

    # -------------------- lifecycle --------------------

    def run(self) -> BankReport:
        """Open the bank, serve every customer once, close, report."""
        if self._ran:
            raise RuntimeError("a BankController can only run once")
        self._ran = True

        tellers = [
            threading.Thread(target=run_teller, args=(self, st), name=f"teller-{st.teller_id}")
            for st in self._stations
        ]
        for t in tellers:
            t.start()

        # Startup barrier: released once every teller announced readiness.
        self._startup.wait()
        with self._lock:
            self._opened = True
        self.emit("bank", None, "all tellers ready, bank is open")

        customers = [self._new_customer(i) for i in range(self.config.num_customers)]
        if not customers:
            with self._lock:
                self._broadcast_shutdown()

        workers = [
            threading.Thread(target=run_customer, args=(self, c), name=f"customer-{c.customer_id}")
            for c in customers
        ]
        for w in workers:
            w.start()
        for w in workers:
            w.join()
        for t in tellers:
            t.join()

        self.emit("bank", None, "all customers served, bank is closed")
        return self.report()

    def _new_customer(self, customer_id: int) -> Customer:
        if self.rng.random() < self.config.withdrawal_probability:
            kind = TransactionKind.WITHDRAWAL
        else:
            kind = TransactionKind.DEPOSIT
        self._kinds[customer_id] = kind
        return Customer(customer_id=customer_id, kind=kind)

    def teller_ready(self, station: TellerStation) -> None:
        """Announce that a teller is at its station."""
        with self._lock:
            station.state = TellerState.READY
        self.emit("teller", station.teller_id, "ready to serve")

    def await_opening(self) -> None:
        self._startup.wait()

    def worker_rng(self, role: str, worker_id: int) -> random.Random:
        """Private RNG for one teller or customer.

        With a seed, each worker draws the same delays run after run, whatever
        order the threads happen to be scheduled in.
        """
        if self.config.seed is None:
            return random.Random()
        return random.Random(f"{self.config.seed}:{role}:{worker_id}")

    # -------------------- teller matching --------------------

    def obtain_teller(self, customer: Customer) -> Rendezvous:
        """Claim a Ready teller, or queue up and wait for one to pull us."""
        ticket = None
        pending: list[BankEvent] = []
        with self._lock:
            customer.state = CustomerState.SEEKING_TELLER
            for st in self._stations:
                if st.state is TellerState.READY and st.rendezvous is None:
                    rendezvous = self._match(st, customer, pending)
                    st.wakeup.notify()
                    break
            else:
                ticket = self._waiting.push(customer)
                customer.state = CustomerState.QUEUED
                pending.append(self.event("customer", customer.customer_id, "waiting in line"))
        self.publish(pending)

        if ticket is not None:
            rendezvous = ticket.wait()
        customer.state = CustomerState.IN_RENDEZVOUS
        return rendezvous

    def next_customer(self, station: TellerStation) -> Rendezvous | None:
        """Block until this teller has a customer. None means the bank closed.

        A teller coming back from a customer first takes the oldest queued
        customer, if any, before it ever shows up as Ready.
        """
        pending: list[BankEvent] = []
        with self._lock:
            rendezvous = station.rendezvous
            if rendezvous is None:
                ticket = self._waiting.pop_oldest()
                if ticket is not None:
                    rendezvous = self._match(station, ticket.customer, pending)
                    ticket.match(rendezvous)
                else:
                    station.state = TellerState.READY
                    pending.append(self.event("teller", station.teller_id, "waiting for a customer"))
        self.publish(pending)
        if rendezvous is not None:
            return rendezvous

        # Ready and published: a customer may claim us, or the bank may close.
        with self._lock:
            while station.rendezvous is None and not self._closing:
                station.wakeup.wait()
            if station.rendezvous is None:
                station.state = TellerState.CLOSED
            return station.rendezvous

    def end_service(self, station: TellerStation) -> None:
        """The customer has left the counter; drop the rendezvous."""
        with self._lock:
            station.served_count += 1
            station.customer = None
            station.rendezvous = None

    def _match(self, station: TellerStation, customer: Customer, pending: list[BankEvent]) -> Rendezvous:
        # Caller holds self._lock and publishes `pending` once it lets go.
        if station.rendezvous is not None:
            raise InvariantViolation(
                "teller_busy",
                f"teller {station.teller_id} already serving customer {station.rendezvous.customer_id}",
            )
        if customer.customer_id in self._served_by:
            raise InvariantViolation(
                "double_match",
                f"customer {customer.customer_id} already matched to teller {self._served_by[customer.customer_id]}",
            )

        rendezvous = Rendezvous(teller_id=station.teller_id, customer_id=customer.customer_id)
        station.state = TellerState.SERVING
        station.customer = customer
        station.rendezvous = rendezvous
        customer.teller_id = station.teller_id
        self._served_by[customer.customer_id] = station.teller_id
        pending.append(self.event("customer", customer.customer_id, "selects teller", teller_id=station.teller_id))
        return rendezvous

    # -------------------- completion / shutdown --------------------

    def customer_departed(self, customer: Customer) -> None:
        with self._lock:
            customer.state = CustomerState.DEPARTED
            self._departed += 1
            if self._departed > self.config.num_customers:
                raise InvariantViolation("over_completion", f"{self._departed} departures for {self.config.num_customers} customers")
            if self._departed == self.config.num_customers:
                self._broadcast_shutdown()

    def _broadcast_shutdown(self) -> None:
        # Caller holds self._lock. Fires once.
        if self._closing:
            return
        self._closing = True
        for st in self._stations:
            st.wakeup.notify_all()
        self.closed.set()

    # -------------------- introspection --------------------

    @property
    def stations(self) -> tuple[TellerStation, ...]:
        return tuple(self._stations)

    @property
    def departed(self) -> int:
        with self._lock:
            return self._departed

    def status(self) -> dict[str, Any]:
        """JSON-friendly snapshot of the whole bank."""
        with self._lock:
            return {
                "type": "status_response",
                "open": self._opened and not self._closing,
                "closed": self._closing,
                "departed": self._departed,
                "total_customers": self.config.num_customers,
                "queue_len": len(self._waiting),
                "queue": self._waiting.customer_ids(),
                "tellers": {str(st.teller_id): st.snapshot() for st in self._stations},
                "gates": {g.name: g.snapshot() for g in (self.door, self.safe, self.manager)},
            }

    def report(self) -> BankReport:
        with self._lock:
            return BankReport(
                total_customers=self.config.num_customers,
                departed=self._departed,
                served_by=dict(self._served_by),
                kinds=dict(self._kinds),
                teller_served={st.teller_id: st.served_count for st in self._stations},
                gate_peaks={g.name: g.peak for g in (self.door, self.safe, self.manager)},
                queued=self._waiting.total_enqueued,
                unmatched=sorted(set(self._kinds) - set(self._served_by)),
            )
