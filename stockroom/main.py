import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from stockroom.core.db import init_db, close_db
from stockroom.api.v1.stock import router as stock_router
from stockroom.api.v1.menu import router as menu_router
from stockroom.api.v1.sales import router as sales_router
from stockroom.api.v1.reports import router as reports_router
from stockroom.api.v1.state import router as state_router
from stockroom.core.config import LOG_LEVEL, PROJECT_NAME, STORAGE_KEY, VERSION
from stockroom.core.exception_handlers import setup_exception_handlers
from stockroom.services.engine import InventoryEngine
from stockroom.storage.blob_store import TortoiseBlobStore
from stockroom.storage.snapshot import SnapshotWriter, load_state

logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
log = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles startup and shutdown events."""
    log.info(f"Starting {PROJECT_NAME} v{VERSION}...")
    await init_db() # Connect to DB and generate schemas

    # Restore the last snapshot; every later commit is persisted in the background
    store = TortoiseBlobStore()
    writer = SnapshotWriter(store, STORAGE_KEY)
    app.state.engine = InventoryEngine(await load_state(store, STORAGE_KEY), on_commit=writer)
    yield
    await writer.flush()
    await close_db()
    log.info(f"{PROJECT_NAME} stopped.")

app = FastAPI(
    title=PROJECT_NAME,
    version=VERSION,
    lifespan=lifespan,
    # Configure API documentation and paths
    docs_url="/docs",
    redoc_url="/redoc"
)

# Include routers for modular API structure
app.include_router(stock_router, prefix="/api/v1/stock", tags=["Inventory"])
app.include_router(menu_router, prefix="/api/v1/menu", tags=["Menu & Recipes"])
app.include_router(sales_router, prefix="/api/v1/sales", tags=["Sales"])
app.include_router(reports_router, prefix="/api/v1/reports", tags=["Reports"])
app.include_router(state_router, prefix="/api/v1/state", tags=["Maintenance"])


setup_exception_handlers(app)

@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok", "app_name": PROJECT_NAME}
