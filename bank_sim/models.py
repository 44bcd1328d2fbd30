"""Plain data types shared by tellers, customers and the controller."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TransactionKind(str, enum.Enum):
    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"


class TellerState(str, enum.Enum):
    READY = "ready"
    SERVING = "serving"
    AT_MANAGER = "at_manager"
    IN_SAFE = "in_safe"
    NOTIFYING_DONE = "notifying_done"
    CLOSED = "closed"


class CustomerState(str, enum.Enum):
    WAITING_TO_ENTER = "waiting_to_enter"
    SEEKING_TELLER = "seeking_teller"
    QUEUED = "queued"
    IN_RENDEZVOUS = "in_rendezvous"
    SERVED = "served"
    DEPARTED = "departed"


@dataclass
class Customer:
    """One customer. `kind` is fixed at creation."""

    customer_id: int
    kind: TransactionKind
    state: CustomerState = CustomerState.WAITING_TO_ENTER
    teller_id: int | None = None


@dataclass(frozen=True)
class TransactionRequest:
    customer_id: int
    kind: TransactionKind


@dataclass(frozen=True)
class TransactionResult:
    customer_id: int
    teller_id: int
    kind: TransactionKind
