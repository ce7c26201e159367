"""In-process BlobStore: for local development and tests. Nothing survives a restart."""


class MemoryBlobStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._blobs: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._blobs.get(key)

    async def set(self, key: str, value: str) -> None:
        self._blobs[key] = value

    async def remove(self, key: str) -> None:
        self._blobs.pop(key, None)

    async def set_many(self, blobs: dict[str, str]) -> None:
        self._blobs.update(blobs)

    async def close(self) -> None:
        return None

    def dump(self) -> dict[str, str]:
        """Copy of every stored blob (inspection only)."""
        return dict(self._blobs)
