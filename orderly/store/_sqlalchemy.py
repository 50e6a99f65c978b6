"""
SQLAlchemy integration — durable order store.

Usage:
    session_factory, engine = await create_database("sqlite+aiosqlite:///orders.db")
    store = SQLAlchemyOrderStore(session_factory)

    match await store.select("ORD171234567842"):
        case Ok(order):
            ...
        case Error(e) if e.kind is StoreErrorKind.NOT_FOUND:
            ...
"""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import Float, Integer, String, delete, select, update
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from kungfu import Result, Ok, Error

from orderly.orders._types import Order, OrderStatus, UNPAID
from orderly.store._types import StoreError, StoreErrorKind


# ═══════════════════════════════════════════════════════════════════════════════
# Base
# ═══════════════════════════════════════════════════════════════════════════════


class Base(DeclarativeBase):
    pass


# ═══════════════════════════════════════════════════════════════════════════════
# Orders Table
# ═══════════════════════════════════════════════════════════════════════════════


class OrderTable(Base):
    """
    orders(order_no TEXT PRIMARY KEY, amount REAL, status TEXT,
           created_at INTEGER, paid_at INTEGER)

    Note: timestamps are unix seconds; paid_at = 0 means unpaid.
    """

    __tablename__ = "orders"

    order_no: Mapped[str] = mapped_column(String, primary_key=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[int] = mapped_column(Integer, nullable=False)
    paid_at: Mapped[int] = mapped_column(Integer, nullable=False, default=UNPAID)

    def to_order(self) -> Order:
        return Order(
            order_no=self.order_no,
            amount=self.amount,
            status=OrderStatus(self.status),
            created_at=self.created_at,
            paid_at=self.paid_at or UNPAID,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Database Setup
# ═══════════════════════════════════════════════════════════════════════════════


async def create_database(
    url: str = "sqlite+aiosqlite:///orders.db",
) -> tuple[async_sessionmaker[AsyncSession], AsyncEngine]:
    """Create tables if missing and return (session_factory, engine)."""
    engine = create_async_engine(url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    return async_sessionmaker(engine, expire_on_commit=False), engine


# ═══════════════════════════════════════════════════════════════════════════════
# SQLAlchemy Order Store
# ═══════════════════════════════════════════════════════════════════════════════


def _status_value(status: OrderStatus | str) -> str:
    return status.value if isinstance(status, OrderStatus) else status


class SQLAlchemyOrderStore:
    """
    Order store over an async SQLAlchemy session factory.

    Every call opens its own short session; nothing is shared between
    requests except the engine's connection pool.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def insert(self, order: Order) -> Result[Order, StoreError]:
        """Insert order. CONFLICT on duplicate order_no."""
        try:
            async with self._session_factory() as session:
                session.add(
                    OrderTable(
                        order_no=order.order_no,
                        amount=order.amount,
                        status=order.status.value,
                        created_at=order.created_at,
                        paid_at=order.paid_at,
                    )
                )
                await session.commit()
                return Ok(order)

        except IntegrityError as e:
            return Error(
                StoreError(StoreErrorKind.CONFLICT, f"Duplicate order_no: {order.order_no}", e)
            )
        except Exception as e:
            return Error(StoreError(StoreErrorKind.STORAGE, f"Failed to insert: {e}", e))

    async def select(self, order_no: str) -> Result[Order, StoreError]:
        """Get order by order_no."""
        try:
            async with self._session_factory() as session:
                stmt = select(OrderTable).where(OrderTable.order_no == order_no)
                row = (await session.execute(stmt)).scalar_one_or_none()

                if row is None:
                    return Error(
                        StoreError(StoreErrorKind.NOT_FOUND, f"Order not found: {order_no}")
                    )

                return Ok(row.to_order())

        except Exception as e:
            return Error(StoreError(StoreErrorKind.STORAGE, f"Failed to select: {e}", e))

    async def update_paid(self, order_no: str, paid_at: int) -> Result[None, StoreError]:
        """
        Set status=PAID and paid_at, only while the row is still PENDING.

        Concurrent payers race on this UPDATE; exactly one matches the row.
        """
        try:
            async with self._session_factory() as session:
                stmt = (
                    update(OrderTable)
                    .where(
                        OrderTable.order_no == order_no,
                        OrderTable.status == OrderStatus.PENDING.value,
                    )
                    .values(status=OrderStatus.PAID.value, paid_at=paid_at)
                )
                cursor = cast(CursorResult[Any], await session.execute(stmt))
                await session.commit()

                if cursor.rowcount == 0:
                    exists = await session.get(OrderTable, order_no)
                    if exists is None:
                        return Error(
                            StoreError(StoreErrorKind.NOT_FOUND, f"Order not found: {order_no}")
                        )
                    return Error(
                        StoreError(StoreErrorKind.CONFLICT, f"Order not pending: {order_no}")
                    )
                return Ok(None)

        except Exception as e:
            return Error(StoreError(StoreErrorKind.STORAGE, f"Failed to update: {e}", e))

    async def delete(self, order_no: str) -> Result[None, StoreError]:
        """Delete order row."""
        try:
            async with self._session_factory() as session:
                stmt = delete(OrderTable).where(OrderTable.order_no == order_no)
                cursor = cast(CursorResult[Any], await session.execute(stmt))
                await session.commit()

                if cursor.rowcount == 0:
                    return Error(
                        StoreError(StoreErrorKind.NOT_FOUND, f"Order not found: {order_no}")
                    )
                return Ok(None)

        except Exception as e:
            return Error(StoreError(StoreErrorKind.STORAGE, f"Failed to delete: {e}", e))

    async def select_all(
        self, status: OrderStatus | str | None = None
    ) -> Result[list[Order], StoreError]:
        """All orders, optionally filtered by exact status. Order unspecified."""
        try:
            async with self._session_factory() as session:
                stmt = select(OrderTable)
                if status:
                    stmt = stmt.where(OrderTable.status == _status_value(status))
                rows = (await session.execute(stmt)).scalars().all()
                return Ok([row.to_order() for row in rows])

        except Exception as e:
            return Error(StoreError(StoreErrorKind.STORAGE, f"Failed to list: {e}", e))


__all__ = (
    "Base",
    "OrderTable",
    "create_database",
    "SQLAlchemyOrderStore",
)
