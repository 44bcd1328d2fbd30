"""Bank teller simulation (threaded).

A fixed pool of tellers serves a finite stream of customers while sharing a
capacity-limited entrance, safe and manager:
- a `BankController` that owns every shared resource
- N long-lived teller threads
- M one-shot customer threads
- optional console narration and MQTT status broadcasting

See `python -m bank_sim.app run -h` for how to run.
"""

from .bank import BankController, BankReport
from .config import BankConfig, DelayRange
from .errors import InvariantViolation

__all__ = ["BankConfig", "BankController", "BankReport", "DelayRange", "InvariantViolation"]
