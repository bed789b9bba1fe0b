import logging
from fastapi import APIRouter, Depends, status
from stockroom.api.deps import get_engine
from stockroom.schemas.response import SuccessResponse
from stockroom.schemas.sale import SaleRequest
from stockroom.services.engine import InventoryEngine

log = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=SuccessResponse)
async def list_sales(engine: InventoryEngine = Depends(get_engine)):
    """Sale log, oldest first."""
    return SuccessResponse(data=[s.model_dump(by_alias=True) for s in engine.sales])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def record_sale(request_data: SaleRequest, engine: InventoryEngine = Depends(get_engine)):
    """
    Records a cart as one sale. Either every ingredient is deducted or, when
    any stock item falls short, nothing is (409 with the shortages).
    """
    sale = engine.record_sale(request_data.items)
    log.info(f"Sale {sale.id} recorded with {len(sale.items)} line(s).")
    return SuccessResponse(data=sale.model_dump(by_alias=True))
