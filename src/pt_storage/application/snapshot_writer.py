"""SnapshotWriter: the single write path into the ledger store.

Owns the process-wide ledger lock. Callers hold ``writer.lock`` across their
whole read-modify-write (compute new state, persist, install in memory), so
settlements and account-management operations never interleave.

Every store call is bounded by ``timeout_seconds``; backend failures and
timeouts surface as StorageError.
"""

import asyncio
import logging

from src.pt_common.errors import StorageError
from src.pt_storage.domain.store import BlobStore

logger = logging.getLogger(__name__)


class SnapshotWriter:
    def __init__(self, store: BlobStore, timeout_seconds: float = 5.0) -> None:
        self._store = store
        self._timeout = timeout_seconds
        self.lock = asyncio.Lock()

    async def read(self, key: str) -> str | None:
        try:
            return await asyncio.wait_for(self._store.get(key), self._timeout)
        except TimeoutError:
            logger.error("Ledger store read timed out: key=%s", key)
            raise StorageError(f"read of '{key}' timed out") from None
        except Exception as exc:
            logger.error("Ledger store read failed: key=%s error=%s", key, exc)
            raise StorageError(f"read of '{key}' failed: {exc}") from exc

    async def write(self, blobs: dict[str, str]) -> None:
        """Write all blobs atomically. Caller must hold ``lock``."""
        keys = ", ".join(blobs)
        try:
            await asyncio.wait_for(self._store.set_many(blobs), self._timeout)
        except TimeoutError:
            logger.error("Ledger store write timed out: keys=%s", keys)
            raise StorageError(f"write of {keys} timed out") from None
        except Exception as exc:
            logger.error("Ledger store write failed: keys=%s error=%s", keys, exc)
            raise StorageError(f"write of {keys} failed: {exc}") from exc

    async def close(self) -> None:
        await self._store.close()
