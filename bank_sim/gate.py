from __future__ import annotations

# Capacity-limited admission control.
#
# The same gate type models the entrance door, the safe and the manager.
# It behaves like a counting semaphore but keeps its occupancy visible
# (`held`, `peak`) so the controller can report it and tests can check it.
#
# Fairness: none. When a slot frees up, whichever waiter the condition
# variable wakes gets it. Only the teller queue (see bank.py) is FIFO.

import threading

from .errors import InvariantViolation


class ResourceGate:
    """Counting gate with observable occupancy."""

    def __init__(self, name: str, capacity: int) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.name = name
        self.capacity = capacity

        self._cond = threading.Condition(threading.Lock())
        self._held = 0
        self._peak = 0
        self._acquisitions = 0

    @property
    def held(self) -> int:
        with self._cond:
            return self._held

    @property
    def peak(self) -> int:
        """Highest occupancy ever observed."""
        with self._cond:
            return self._peak

    @property
    def total_acquisitions(self) -> int:
        with self._cond:
            return self._acquisitions

    def acquire(self) -> None:
        """Block until a slot is free, then take it."""
        with self._cond:
            while self._held >= self.capacity:
                self._cond.wait()
            self._take()

    def try_acquire(self) -> bool:
        """Take a slot if one is free right now; never blocks."""
        with self._cond:
            if self._held >= self.capacity:
                return False
            self._take()
            return True

    def release(self) -> None:
        with self._cond:
            if self._held <= 0:
                raise InvariantViolation("gate_underflow", f"{self.name} released while not held")
            self._held -= 1
            self._cond.notify()

    def snapshot(self) -> dict[str, int]:
        with self._cond:
            return {"capacity": self.capacity, "held": self._held, "peak": self._peak}

    def _take(self) -> None:
        # Caller holds self._cond.
        self._held += 1
        if self._held > self.capacity:
            raise InvariantViolation("gate_overflow", f"{self.name} held {self._held}/{self.capacity}")
        self._acquisitions += 1
        self._peak = max(self._peak, self._held)

    def __enter__(self) -> ResourceGate:
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()

    def __repr__(self) -> str:
        return f"ResourceGate({self.name!r}, held={self.held}/{self.capacity})"
