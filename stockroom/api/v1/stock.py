import logging
from fastapi import APIRouter, Depends, status
from stockroom.api.deps import get_engine
from stockroom.schemas.response import SuccessResponse
from stockroom.schemas.stock import StockAdjustment, StockItemCreate, StockItemResponse
from stockroom.services.engine import InventoryEngine

log = logging.getLogger(__name__)

router = APIRouter()


def _dump(item) -> dict:
    return StockItemResponse.from_item(item).model_dump(by_alias=True)


@router.get("/", response_model=SuccessResponse)
async def list_stock(engine: InventoryEngine = Depends(get_engine)):
    """Lists every stock item with its low-stock flag."""
    return SuccessResponse(data=[_dump(item) for item in engine.stock])


@router.get("/low", response_model=SuccessResponse)
async def list_low_stock(engine: InventoryEngine = Depends(get_engine)):
    """Stock items at or below their alert threshold."""
    return SuccessResponse(data=[_dump(item) for item in engine.low_stock()])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def add_stock_item(item_data: StockItemCreate, engine: InventoryEngine = Depends(get_engine)):
    item = engine.add_stock_item(
        name=item_data.name,
        category=item_data.category,
        unit=item_data.unit,
        initial_quantity=item_data.initial_quantity,
        alert_threshold=item_data.alert_threshold,
    )
    return SuccessResponse(data=_dump(item))


@router.patch("/{stock_item_id}/quantity", response_model=SuccessResponse)
async def adjust_stock_quantity(
    stock_item_id: str, payload: StockAdjustment, engine: InventoryEngine = Depends(get_engine)
):
    """Adds or removes stock; removals never take the quantity below zero."""
    item = engine.adjust_stock_quantity(stock_item_id, payload.delta)
    return SuccessResponse(data=_dump(item))


@router.delete("/{stock_item_id}", response_model=SuccessResponse)
async def remove_stock_item(stock_item_id: str, engine: InventoryEngine = Depends(get_engine)):
    """Deletes a stock item and removes it from every recipe using it."""
    item = engine.remove_stock_item(stock_item_id)
    return SuccessResponse(data={"id": item.id, "message": f"'{item.name}' removed."})
