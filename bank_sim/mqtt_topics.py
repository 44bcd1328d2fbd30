"""MQTT topic helpers.

Topic construction lives in one place so publishers and dashboards agree on
naming.

Topic layout under a configurable namespace (default: `bank/v0`):

- `<ns>/events/<actor>`
    One JSON message per narration event (`teller`, `customer` or `bank`).
- `<ns>/status/updates`
    Periodic snapshot of the whole bank (gates, queue, tellers, counter).
- `<ns>/tellers/status/<teller_id>`
    Periodic snapshot of one teller.

Several runs can share a broker by giving each its own namespace
(e.g. `--namespace demo/alice`).
"""

from __future__ import annotations

DEFAULT_NAMESPACE = "bank/v0"


def events(actor: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    return f"{namespace}/events/{actor}"


def status_updates(namespace: str = DEFAULT_NAMESPACE) -> str:
    """Broadcast whole-bank status snapshots."""
    return f"{namespace}/status/updates"


def teller_status(teller_id: int | str, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Per-teller status stream."""
    return f"{namespace}/tellers/status/{teller_id}"
