"""SQL-backed BlobStore (PostgreSQL via SQLAlchemy async).

Blobs live in the ``ledger_blobs`` table (alembic revision 001).
``set_many`` upserts every key inside a single database transaction.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

_GET_BLOB_SQL = text("""
    SELECT value FROM ledger_blobs WHERE key = :key
""")

_UPSERT_BLOB_SQL = text("""
    INSERT INTO ledger_blobs (key, value)
    VALUES (:key, :value)
    ON CONFLICT (key) DO UPDATE
        SET value = EXCLUDED.value,
            updated_at = NOW()
""")

_DELETE_BLOB_SQL = text("""
    DELETE FROM ledger_blobs WHERE key = :key
""")


class SqlBlobStore:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        engine: AsyncEngine | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._engine = engine

    async def get(self, key: str) -> str | None:
        async with self._session_factory() as session:
            result = await session.execute(_GET_BLOB_SQL, {"key": key})
            row = result.fetchone()
            return row.value if row else None

    async def set(self, key: str, value: str) -> None:
        await self.set_many({key: value})

    async def remove(self, key: str) -> None:
        async with self._session_factory() as session, session.begin():
            await session.execute(_DELETE_BLOB_SQL, {"key": key})

    async def set_many(self, blobs: dict[str, str]) -> None:
        async with self._session_factory() as session, session.begin():
            for key, value in blobs.items():
                await session.execute(_UPSERT_BLOB_SQL, {"key": key, "value": value})

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
