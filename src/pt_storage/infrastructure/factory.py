"""Select the ledger BlobStore backend once, from configuration."""

import logging

import redis.asyncio as aioredis

from config.settings import Settings
from src.pt_common.database import build_engine, build_session_factory
from src.pt_common.enums import StorageBackend
from src.pt_storage.domain.store import BlobStore
from src.pt_storage.infrastructure.memory_store import MemoryBlobStore
from src.pt_storage.infrastructure.redis_store import RedisBlobStore
from src.pt_storage.infrastructure.sql_store import SqlBlobStore

logger = logging.getLogger(__name__)


def build_blob_store(settings: Settings) -> BlobStore:
    backend = StorageBackend(settings.STORAGE_BACKEND.lower())
    logger.info("Ledger store backend: %s", backend.value)

    if backend is StorageBackend.REDIS:
        client = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
        return RedisBlobStore(client)

    if backend is StorageBackend.SQL:
        engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
        return SqlBlobStore(build_session_factory(engine), engine=engine)

    return MemoryBlobStore()
