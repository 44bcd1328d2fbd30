"""Shared error types.

Transactions never fail for business reasons, so the only error the core
raises is an invariant violation. It is fatal and never handled by the
simulation itself.
"""

from __future__ import annotations


class InvariantViolation(AssertionError):
    """A synchronization invariant was broken (gate overflow, double match...)."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
