# stockroom/scripts/seed_data.py
import asyncio
import logging
from stockroom.core.config import STORAGE_KEY
from stockroom.core.db import init_db, close_db
from stockroom.schemas.state import dump_state
from stockroom.services.seed import default_state
from stockroom.storage.blob_store import TortoiseBlobStore

log = logging.getLogger(__name__)

async def seed(store=None, key: str = STORAGE_KEY):
    """Overwrites the saved snapshot with the starter stock and menu (idempotent)."""
    store = store or TortoiseBlobStore()
    state = default_state()
    await store.put(key, dump_state(state))
    log.info(f"Seeded '{key}': {len(state.stock)} stock items, {len(state.menu)} menu items.")
    return state

async def main():
    await init_db()
    try:
        await seed()
    finally:
        await close_db()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
