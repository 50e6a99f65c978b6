"""
Pytest configuration and shared fixtures for orderly tests.
"""

import asyncio
from datetime import timedelta

import pytest

from orderly import cache as C
from orderly.lifecycle import OrderLifecycle, order_cache
from orderly.store import SQLAlchemyOrderStore, create_database


class FailingTier:
    """
    LocalTier wrapper whose selected operations raise, like an unreachable
    Redis. Operations that are not set to fail hit the in-memory tier.
    """

    def __init__(self, *, get: bool = True, set: bool = True, delete: bool = True) -> None:
        self.inner = C.LocalTier[str]()
        self.fail_get = get
        self.fail_set = set
        self.fail_delete = delete

    @property
    def name(self) -> str:
        return "failing"

    async def get(self, key: str) -> str | None:
        if self.fail_get:
            raise ConnectionError("connection refused")
        return await self.inner.get(key)

    async def set(self, key: str, value: str, ttl: timedelta | None = None) -> None:
        if self.fail_set:
            raise ConnectionError("connection refused")
        await self.inner.set(key, value, ttl)

    async def delete(self, key: str) -> bool:
        if self.fail_delete:
            raise ConnectionError("connection refused")
        return await self.inner.delete(key)


@pytest.fixture
def failing_tier():
    """Factory for FailingTier."""
    return FailingTier


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}"


@pytest.fixture
def run_with_store(db_url):
    """
    Run `scenario(store)` against a fresh SQLite file in one event loop.
    """

    def run(scenario):
        async def main():
            session_factory, engine = await create_database(db_url)
            try:
                return await scenario(SQLAlchemyOrderStore(session_factory))
            finally:
                await engine.dispose()

        return asyncio.run(main())

    return run


@pytest.fixture
def run_with_lifecycle(db_url):
    """
    Run `scenario(lifecycle)` with a real store and the given cache tiers
    (a fresh LocalTier when none are given).
    """

    def run(scenario, *tiers, **lifecycle_kwargs):
        async def main():
            session_factory, engine = await create_database(db_url)
            try:
                lifecycle = OrderLifecycle(
                    SQLAlchemyOrderStore(session_factory),
                    order_cache(*(tiers or (C.LocalTier[str](),))),
                    **lifecycle_kwargs,
                )
                return await scenario(lifecycle)
            finally:
                await engine.dispose()

        return asyncio.run(main())

    return run
