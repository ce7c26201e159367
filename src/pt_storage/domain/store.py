"""BlobStore Protocol: the ledger's key-value persistence contract.

The ledger is persisted as a handful of named string blobs, each rewritten in
full on every mutation. ``set_many`` must be atomic: either every key in the
mapping is written or none is. Settlement relies on it to write the account
snapshot and the transaction log together.
"""

from typing import Protocol


class BlobStore(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def remove(self, key: str) -> None: ...

    async def set_many(self, blobs: dict[str, str]) -> None: ...

    async def close(self) -> None: ...
