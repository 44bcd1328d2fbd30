"""Delay helpers.

Every simulated step (arriving, talking to the manager, working in the safe)
takes a random whole number of milliseconds drawn uniformly from a
`DelayRange`. Callers pass their own `random.Random` so runs with a seed are
reproducible.
"""

from __future__ import annotations

import random
import time

from .config import DelayRange


def sample_delay_seconds(delay: DelayRange, *, rng: random.Random | None = None) -> float:
    """Sample how long a step takes.

    Args:
        delay: inclusive millisecond bounds.
        rng: optional RNG (useful for deterministic tests).

    Returns:
        A non-negative float in seconds.
    """
    r = rng or random
    return r.randint(delay.min_ms, delay.max_ms) / 1000.0


def pause(delay: DelayRange, *, rng: random.Random | None = None) -> float:
    """Sleep for a sampled delay and return the seconds slept."""
    seconds = sample_delay_seconds(delay, rng=rng)
    if seconds > 0:
        time.sleep(seconds)
    return seconds
