from __future__ import annotations

# Customer worker.
#
# A customer is a short-lived thread:
# - wait a random arrival delay
# - get through the door (at most `door_capacity` customers inside)
# - get a teller, either a free one or by waiting in line
# - hand over the request and wait until the teller is done
# - leave the teller, leave the bank, get counted

from typing import TYPE_CHECKING

from .models import Customer, CustomerState, TransactionRequest, TransactionResult
from .timing import pause

if TYPE_CHECKING:
    from .bank import BankController


def run_customer(bank: BankController, customer: Customer) -> TransactionResult:
    cid = customer.customer_id
    kind = customer.kind.value.lower()
    rng = bank.worker_rng("customer", cid)

    bank.emit("customer", cid, f"created ({kind})")
    pause(bank.config.arrival_delay, rng=rng)

    bank.emit("customer", cid, "waiting to enter bank")
    with bank.door:
        bank.emit("customer", cid, "entered bank")

        rendezvous = bank.obtain_teller(customer)
        tid = rendezvous.teller_id

        bank.emit("customer", cid, f"requests {kind}", teller_id=tid)
        rendezvous.submit(TransactionRequest(customer_id=cid, kind=customer.kind))

        result = rendezvous.await_result()
        customer.state = CustomerState.SERVED
        bank.emit("customer", cid, "transaction complete", teller_id=tid)

        bank.emit("customer", cid, "leaves teller", teller_id=tid)
        rendezvous.leave()

    bank.emit("customer", cid, "leaves bank")
    bank.customer_departed(customer)
    return result
