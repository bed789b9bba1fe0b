from typing import Dict, Optional, Protocol
from stockroom.models.state_blob import StateBlob


class BlobStore(Protocol):
    """Durable key-value storage for serialized snapshots."""

    async def get(self, key: str) -> Optional[str]: ...

    async def put(self, key: str, value: str) -> None: ...


class InMemoryBlobStore:
    """Process-local store, used in tests and when no database is wanted."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.blobs: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    async def put(self, key: str, value: str) -> None:
        self.blobs[key] = value


class TortoiseBlobStore:
    """Stores each blob as a row of the ``state_blobs`` table."""

    async def get(self, key: str) -> Optional[str]:
        row = await StateBlob.get_or_none(key=key)
        return row.value if row else None

    async def put(self, key: str, value: str) -> None:
        await StateBlob.update_or_create(key=key, defaults={"value": value})
