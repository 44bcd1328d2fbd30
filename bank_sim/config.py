from __future__ import annotations

# Simulation parameters.
#
# Everything the caller can tune lives in one frozen dataclass so a run can
# be reproduced from its config (plus seed). Values are validated up front:
# a bad config raises ValueError before any thread is started.

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DelayRange:
    """Inclusive range of milliseconds a simulated step may take."""

    min_ms: int
    max_ms: int

    def __post_init__(self) -> None:
        if self.min_ms < 0:
            raise ValueError("min_ms must be >= 0")
        if self.max_ms < self.min_ms:
            raise ValueError("max_ms must be >= min_ms")


@dataclass(frozen=True)
class BankConfig:
    num_tellers: int = 3
    num_customers: int = 50
    door_capacity: int = 2
    safe_capacity: int = 2
    manager_capacity: int = 1
    arrival_delay: DelayRange = field(default_factory=lambda: DelayRange(0, 100))
    manager_delay: DelayRange = field(default_factory=lambda: DelayRange(5, 30))
    safe_delay: DelayRange = field(default_factory=lambda: DelayRange(10, 50))
    withdrawal_probability: float = 0.5
    # Fixes the transaction kinds and each worker's own delay sequence.
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.num_tellers < 1:
            raise ValueError("num_tellers must be >= 1")
        if self.num_customers < 0:
            raise ValueError("num_customers must be >= 0")
        if self.door_capacity < 1:
            raise ValueError("door_capacity must be >= 1")
        if self.safe_capacity < 1:
            raise ValueError("safe_capacity must be >= 1")
        if self.manager_capacity < 1:
            raise ValueError("manager_capacity must be >= 1")
        if not 0.0 <= self.withdrawal_probability <= 1.0:
            raise ValueError("withdrawal_probability must be in [0, 1]")

    @classmethod
    def instant(cls, **overrides) -> BankConfig:
        """Config with every delay set to zero (handy for tests and dry runs)."""
        zero = DelayRange(0, 0)
        params = {"arrival_delay": zero, "manager_delay": zero, "safe_delay": zero}
        params.update(overrides)
        return cls(**params)
