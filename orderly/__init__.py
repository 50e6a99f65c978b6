"""
orderly — order-management HTTP service.

    from orderly import orders as O     # Order, snapshot, order numbers
    from orderly import store as S      # Durable SQLAlchemy store
    from orderly import cache as C      # Tiered cache with expiry
    from orderly.lifecycle import OrderLifecycle
    from orderly.wire import create_app
"""

from orderly import orders
from orderly import store
from orderly import cache
from orderly._types import (
    Result,
    Ok,
    Error,
    Lazy,
)

__version__ = "0.1.0"

__all__ = (
    "orders",
    "store",
    "cache",
    "Result",
    "Ok",
    "Error",
    "Lazy",
)
