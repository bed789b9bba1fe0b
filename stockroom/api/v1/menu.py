from fastapi import APIRouter, Depends, status
from stockroom.api.deps import get_engine
from stockroom.schemas.menu import MenuItemActive, MenuItemCreate, MenuItemUpdate
from stockroom.schemas.response import SuccessResponse
from stockroom.services.engine import InventoryEngine

router = APIRouter()


@router.get("/", response_model=SuccessResponse)
async def list_menu(active_only: bool = False, engine: InventoryEngine = Depends(get_engine)):
    items = [m for m in engine.menu if m.is_active or not active_only]
    return SuccessResponse(data=[m.model_dump(by_alias=True) for m in items])


@router.get("/{menu_item_id}", response_model=SuccessResponse)
async def get_menu_item(menu_item_id: str, engine: InventoryEngine = Depends(get_engine)):
    return SuccessResponse(data=engine.get_menu_item(menu_item_id).model_dump(by_alias=True))


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def add_menu_item(item_data: MenuItemCreate, engine: InventoryEngine = Depends(get_engine)):
    """Adds a menu item; each ingredient's unit is taken from its stock item."""
    item = engine.add_menu_item(item_data.name, item_data.image_url, item_data.ingredients)
    return SuccessResponse(data=item.model_dump(by_alias=True))


@router.patch("/{menu_item_id}", response_model=SuccessResponse)
async def update_menu_item(
    menu_item_id: str, payload: MenuItemUpdate, engine: InventoryEngine = Depends(get_engine)
):
    item = engine.update_menu_item(menu_item_id, payload)
    return SuccessResponse(data=item.model_dump(by_alias=True))


@router.put("/{menu_item_id}/active", response_model=SuccessResponse)
async def set_menu_item_active(
    menu_item_id: str, payload: MenuItemActive, engine: InventoryEngine = Depends(get_engine)
):
    item = engine.set_menu_item_active(menu_item_id, payload.is_active)
    return SuccessResponse(data=item.model_dump(by_alias=True))


@router.delete("/{menu_item_id}", response_model=SuccessResponse)
async def remove_menu_item(menu_item_id: str, engine: InventoryEngine = Depends(get_engine)):
    item = engine.remove_menu_item(menu_item_id)
    return SuccessResponse(data={"id": item.id, "message": f"'{item.name}' removed."})
