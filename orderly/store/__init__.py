"""
Store — durable order storage.

    from orderly import store as S

    session_factory, engine = await S.create_database(url)
    orders = S.SQLAlchemyOrderStore(session_factory)
    result = await orders.select(order_no)
"""

from __future__ import annotations

from orderly.store._types import (
    StoreError,
    StoreErrorKind,
    OrderStore,
)
from orderly.store._sqlalchemy import (
    Base,
    OrderTable,
    create_database,
    SQLAlchemyOrderStore,
)

__all__ = (
    "StoreError",
    "StoreErrorKind",
    "OrderStore",
    "Base",
    "OrderTable",
    "create_database",
    "SQLAlchemyOrderStore",
)
