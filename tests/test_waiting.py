import threading

from bank_sim.models import Customer, TransactionKind
from bank_sim.station import Rendezvous
from bank_sim.waiting import WaitingQueue


def test_queue_is_fifo():
    q = WaitingQueue()
    for i in range(3):
        q.push(Customer(i, TransactionKind.DEPOSIT))
    assert q.customer_ids() == [0, 1, 2]
    assert [q.pop_oldest().customer.customer_id for _ in range(3)] == [0, 1, 2]
    assert q.pop_oldest() is None
    assert q.total_enqueued == 3
    assert not q


def test_ticket_wakes_its_customer():
    q = WaitingQueue()
    ticket = q.push(Customer(7, TransactionKind.WITHDRAWAL))
    assert ticket.position == 1

    got = []
    t = threading.Thread(target=lambda: got.append(ticket.wait()))
    t.start()

    rv = Rendezvous(teller_id=0, customer_id=7)
    q.pop_oldest().match(rv)
    t.join(2.0)
    assert got == [rv]
