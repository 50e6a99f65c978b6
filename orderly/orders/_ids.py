"""
Order numbers — ORD<unix seconds><random suffix>.
"""

from __future__ import annotations

import random
import time
from collections.abc import Callable

ORDER_NO_PREFIX = "ORD"
SUFFIX_BOUND = 100_000

type OrderNoGenerator = Callable[[], str]


def generate_order_no(
    clock: Callable[[], float] = time.time,
    rand: Callable[[int], int] = random.randrange,
) -> str:
    """
    Generate an order number from wall-clock seconds and a random suffix.

    Note: the suffix is not zero-padded, so numbers vary in length.
    Collisions are not checked here; the store's primary key rejects them.

    Example:
        generate_order_no()  # "ORD171234567842"
    """
    return f"{ORDER_NO_PREFIX}{int(clock())}{rand(SUFFIX_BOUND)}"


__all__ = ("ORDER_NO_PREFIX", "SUFFIX_BOUND", "OrderNoGenerator", "generate_order_no")
