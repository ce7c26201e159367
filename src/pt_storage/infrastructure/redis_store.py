"""Redis-backed BlobStore.

Each blob is a plain Redis string. ``set_many`` queues every SET inside one
MULTI/EXEC pipeline so the account snapshot and the transaction log land
together or not at all.
"""

import redis.asyncio as aioredis


class RedisBlobStore:
    def __init__(self, client: aioredis.Redis, key_prefix: str = "") -> None:
        self._redis = client
        self._prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> str | None:
        value = await self._redis.get(self._key(key))
        if value is None:
            return None
        return value if isinstance(value, str) else value.decode("utf-8")

    async def set(self, key: str, value: str) -> None:
        await self._redis.set(self._key(key), value)

    async def remove(self, key: str) -> None:
        await self._redis.delete(self._key(key))

    async def set_many(self, blobs: dict[str, str]) -> None:
        async with self._redis.pipeline(transaction=True) as pipe:
            for key, value in blobs.items():
                pipe.set(self._key(key), value)
            await pipe.execute()

    async def close(self) -> None:
        await self._redis.aclose()
