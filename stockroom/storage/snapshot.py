import asyncio
import json
import logging
from typing import List, Optional
from pydantic import TypeAdapter, ValidationError as SchemaValidationError
from stockroom.schemas.menu import MenuItem
from stockroom.schemas.sale import Sale
from stockroom.schemas.state import AppState, dump_state
from stockroom.schemas.stock import StockItem
from stockroom.services.seed import default_state
from stockroom.storage.blob_store import BlobStore

log = logging.getLogger(__name__)

_COLLECTIONS = {
    "stock": TypeAdapter(List[StockItem]),
    "menu": TypeAdapter(List[MenuItem]),
    "sales": TypeAdapter(List[Sale]),
}


def parse_state(raw: str) -> AppState:
    """
    Rebuilds state from a snapshot. Unreadable JSON falls back to the starter
    data; otherwise each collection is checked on its own and only a broken
    one is replaced by its starter value (sales by an empty log).
    """
    seed = default_state()
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        log.warning(f"Saved state is not valid JSON ({e}); using starter data.")
        return seed
    if not isinstance(data, dict):
        log.warning("Saved state is not an object; using starter data.")
        return seed

    restored = {}
    for name, adapter in _COLLECTIONS.items():
        value = data.get(name)
        try:
            if not isinstance(value, list):
                raise TypeError(f"expected a list, got {type(value).__name__}")
            restored[name] = adapter.validate_python(value)
        except (TypeError, SchemaValidationError) as e:
            log.warning(f"Saved '{name}' is unusable ({e}); using starter data for it.")
            restored[name] = getattr(seed, name)
    return AppState(**restored)


async def load_state(store: BlobStore, key: str) -> AppState:
    """Loads the snapshot saved under ``key``, or the starter data if there is none."""
    raw = await store.get(key)
    if raw is None:
        log.info(f"No saved state under '{key}'; using starter data.")
        return default_state()
    return parse_state(raw)


class SnapshotWriter:
    """
    Commit hook that persists the state without blocking the caller.

    The snapshot is serialized at commit time and written by a background
    task. Writes are applied in commit order; if several commits land while a
    write is in flight only the newest snapshot is written next.
    """

    def __init__(self, store: BlobStore, key: str):
        self._store = store
        self._key = key
        self._latest: Optional[str] = None
        self._task: Optional[asyncio.Task] = None

    def __call__(self, state: AppState) -> None:
        payload = dump_state(state)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            log.warning(f"No running event loop; snapshot for '{self._key}' not persisted.")
            return
        self._latest = payload
        if self._task is None or self._task.done():
            self._task = loop.create_task(self._drain())

    async def _drain(self) -> None:
        while self._latest is not None:
            payload, self._latest = self._latest, None
            try:
                await self._store.put(self._key, payload)
            except Exception as e:
                log.error(f"Failed to persist snapshot under '{self._key}': {e}")

    async def flush(self) -> None:
        """Waits for pending writes (used at shutdown)."""
        if self._task is not None:
            await self._task
