from typing import List, Optional
from pydantic import Field
from stockroom.schemas.base import CamelModel
from stockroom.schemas.stock import Unit


class RecipeIngredient(CamelModel):
    """One recipe line; the unit is copied from the stock item when the line is authored."""
    stock_item_id: str
    quantity: float = Field(gt=0)
    unit: Unit


class MenuItem(CamelModel):
    id: str
    name: str
    image_url: str = ""
    is_active: bool = True
    ingredients: List[RecipeIngredient] = Field(default_factory=list)


class RecipeLineInput(CamelModel):
    """Recipe line as authored by a caller: which stock item, and how much."""
    stock_item_id: str = Field(..., description="Stock item consumed by this line.")
    quantity: float = Field(..., description="Amount consumed per unit sold.")


class MenuItemCreate(CamelModel):
    name: str = Field(..., description="Name of the menu item (e.g., Cold Coffee).")
    image_url: str = Field("", description="Picture shown on the sales screen.")
    ingredients: List[RecipeLineInput] = Field(default_factory=list)


class MenuItemUpdate(CamelModel):
    """Partial update; only the fields a caller sets are merged."""
    name: Optional[str] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None
    ingredients: Optional[List[RecipeLineInput]] = None


class MenuItemActive(CamelModel):
    is_active: bool
