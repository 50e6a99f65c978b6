"""
Metrics — in-process counters served on /metrics.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(slots=True)
class Metrics:
    """Counters since process start. Mutated from the event loop only."""

    total_requests: int = 0
    orders_created: int = 0
    orders_paid: int = 0
    cache_hits: int = 0
    cache_misses: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


__all__ = ("Metrics",)
