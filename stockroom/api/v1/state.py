from fastapi import APIRouter, Depends
from stockroom.api.deps import get_engine
from stockroom.schemas.response import SuccessResponse
from stockroom.services.engine import InventoryEngine

router = APIRouter()


@router.post("/reset", response_model=SuccessResponse)
async def reset_state(engine: InventoryEngine = Depends(get_engine)):
    """Restores the starter stock and menu and clears every sale."""
    engine.reset_all()
    return SuccessResponse(data={
        "stock": len(engine.stock),
        "menu": len(engine.menu),
        "sales": len(engine.sales),
    })
