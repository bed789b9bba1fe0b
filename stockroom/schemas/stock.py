from enum import Enum
from typing import Dict, Optional
from pydantic import Field, computed_field
from stockroom.schemas.base import CamelModel


class StockCategory(str, Enum):
    LIQUID = "Liquid"
    POWDER = "Powder"
    SOLID = "Solid"
    PIECE = "Piece"


class Unit(str, Enum):
    ML = "ml"
    LTR = "ltr"
    GM = "gm"
    KG = "kg"
    PCS = "pcs"


# Unit picked for a new stock item when the caller does not name one
DEFAULT_UNITS: Dict[StockCategory, Unit] = {
    StockCategory.LIQUID: Unit.ML,
    StockCategory.POWDER: Unit.GM,
    StockCategory.SOLID: Unit.GM,
    StockCategory.PIECE: Unit.PCS,
}


class StockItem(CamelModel):
    """An inventory-tracked ingredient."""
    id: str
    name: str
    category: StockCategory = Field(alias="type")
    unit: Unit
    remaining_quantity: float = Field(ge=0)
    alert_threshold: float = Field(ge=0)

    @property
    def is_low_stock(self) -> bool:
        return self.remaining_quantity <= self.alert_threshold


class StockItemCreate(CamelModel):
    """Request body for adding a stock item."""
    name: str = Field(..., description="Display name of the ingredient (e.g., Whole Milk).")
    category: StockCategory = Field(..., alias="type", description="Liquid, Powder, Solid or Piece.")
    unit: Optional[Unit] = Field(None, description="Defaults to the category's usual unit.")
    initial_quantity: float = Field(0, description="Opening stock level.")
    alert_threshold: float = Field(0, description="Stock level at or below which the item is low.")


class StockAdjustment(CamelModel):
    delta: float = Field(..., description="Amount to add (positive) or remove (negative).")


class StockItemResponse(StockItem):
    """Stock item as listed by the API, with its low-stock flag."""

    @computed_field(alias="isLowStock")
    @property
    def low_stock(self) -> bool:
        return self.is_low_stock

    @classmethod
    def from_item(cls, item: StockItem) -> "StockItemResponse":
        return cls.model_validate(item.model_dump())
