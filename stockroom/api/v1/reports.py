from datetime import datetime
from fastapi import APIRouter, Depends, Response, status
from stockroom.api.deps import get_engine
from stockroom.schemas.response import SuccessResponse
from stockroom.services.engine import InventoryEngine
from stockroom.services.reporting import lifetime_consumption, render_csv_report, sales_summary

router = APIRouter()


@router.get("/summary", response_model=SuccessResponse)
async def get_summary(engine: InventoryEngine = Depends(get_engine)):
    """Sale counts plus the number of low-stock items."""
    data = sales_summary(engine.sales)
    data["low_stock_items"] = len(engine.low_stock())
    return SuccessResponse(data=data)


@router.get("/consumption", response_model=SuccessResponse)
async def get_consumption(engine: InventoryEngine = Depends(get_engine)):
    """Lifetime consumption per stock item, from the whole sale log."""
    state = engine.export_state()
    usage = lifetime_consumption(state)
    data = [
        {
            "stockItemId": item.id,
            "name": item.name,
            "unit": item.unit.value,
            "consumed": usage.get(item.id, 0),
            "remaining": item.remaining_quantity,
        }
        for item in state.stock
    ]
    return SuccessResponse(data=data)


@router.get("/export", status_code=status.HTTP_200_OK)
async def export_report(engine: InventoryEngine = Depends(get_engine)):
    now = datetime.now()
    body = render_csv_report(engine.export_state(), generated_at=now)
    filename = f"TDS_Report_{now.date().isoformat()}.csv"
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
