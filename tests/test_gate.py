import threading

import pytest

from bank_sim.errors import InvariantViolation
from bank_sim.gate import ResourceGate


def test_try_acquire_respects_capacity():
    gate = ResourceGate("safe", 2)
    assert gate.try_acquire()
    assert gate.try_acquire()
    assert not gate.try_acquire()
    assert gate.held == 2

    gate.release()
    assert gate.try_acquire()
    assert gate.peak == 2
    assert gate.total_acquisitions == 3


def test_acquire_blocks_until_release():
    gate = ResourceGate("manager", 1)
    gate.acquire()

    entered = threading.Event()

    def worker():
        with gate:
            entered.set()

    t = threading.Thread(target=worker)
    t.start()
    assert not entered.wait(0.1)

    gate.release()
    assert entered.wait(2.0)
    t.join(2.0)
    assert gate.held == 0


def test_release_without_acquire_is_an_invariant_violation():
    gate = ResourceGate("door", 1)
    with pytest.raises(InvariantViolation):
        gate.release()


def test_many_threads_never_exceed_capacity():
    gate = ResourceGate("door", 3)
    start = threading.Barrier(20)

    def worker():
        start.wait()
        for _ in range(50):
            with gate:
                pass

    threads = [threading.Thread(target=worker) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(10.0)

    assert gate.held == 0
    assert 1 <= gate.peak <= 3
    assert gate.total_acquisitions == 1000


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        ResourceGate("safe", 0)
