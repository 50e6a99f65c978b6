"""
Redis tier — string values with server-side expiry.
"""

from __future__ import annotations

from datetime import timedelta

from redis.asyncio import Redis


class RedisTier:
    """
    Cache tier backed by a Redis server.

    Example:
        tier = RedisTier(Redis(host="127.0.0.1", port=6379))
    """

    def __init__(self, client: Redis) -> None:
        self.client = client

    @classmethod
    def from_address(cls, host: str, port: int = 6379) -> RedisTier:
        return cls(Redis(host=host, port=port, decode_responses=True))

    @property
    def name(self) -> str:
        return "redis"

    async def get(self, key: str) -> str | None:
        data = await self.client.get(key)
        if data is None:
            return None
        return data.decode("utf-8") if isinstance(data, bytes) else data

    async def set(self, key: str, value: str, ttl: timedelta | None = None) -> None:
        await self.client.set(key, value, ex=ttl)

    async def delete(self, key: str) -> bool:
        return await self.client.delete(key) > 0

    async def close(self) -> None:
        await self.client.aclose()


__all__ = ("RedisTier",)
