from __future__ import annotations

# Teller worker.
#
# A teller is a long-lived thread:
# - it announces itself and waits for the bank to open
# - it repeatedly asks the controller for its next customer
# - it takes the customer's request, visits the manager (withdrawals only),
#   then the safe, and tells the customer it is done
# - when the controller broadcasts shutdown it closes its station and exits
#
# The manager is always released before the safe is requested, so a teller
# never holds two gates at once.

import random
from typing import TYPE_CHECKING

from .models import TellerState, TransactionKind, TransactionResult
from .timing import pause

if TYPE_CHECKING:
    from .bank import BankController
    from .station import Rendezvous, TellerStation


def run_teller(bank: BankController, station: TellerStation) -> None:
    tid = station.teller_id

    rng = bank.worker_rng("teller", tid)

    bank.teller_ready(station)
    bank.await_opening()

    while True:
        rendezvous = bank.next_customer(station)
        if rendezvous is None:
            break
        serve_customer(bank, station, rendezvous, rng=rng)

    bank.emit("teller", tid, "no more customers, bank is closing")


def serve_customer(
    bank: BankController,
    station: TellerStation,
    rendezvous: Rendezvous,
    *,
    rng: random.Random | None = None,
) -> TransactionResult:
    """Run one full service cycle for the customer behind `rendezvous`."""
    tid = station.teller_id
    cid = rendezvous.customer_id
    cfg = bank.config

    def say(action: str) -> None:
        bank.emit("teller", tid, action, customer_id=cid)

    say("serving customer")
    say("asks for transaction")
    request = rendezvous.receive()
    say(f"handling {request.kind.value.lower()}")

    if request.kind is TransactionKind.WITHDRAWAL:
        station.state = TellerState.AT_MANAGER
        say("going to the manager")
        with bank.manager:
            say("getting manager's permission")
            pause(cfg.manager_delay, rng=rng)
            say("got manager's permission")

    station.state = TellerState.IN_SAFE
    say("going to safe")
    with bank.safe:
        say("enter safe")
        pause(cfg.safe_delay, rng=rng)
        say("leaving safe")

    station.state = TellerState.NOTIFYING_DONE
    result = TransactionResult(customer_id=cid, teller_id=tid, kind=request.kind)
    say("informs customer transaction is done")
    rendezvous.complete(result)

    rendezvous.wait_for_leave()
    say("customer has left")
    bank.end_service(station)
    return result
