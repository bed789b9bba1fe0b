from typing import List, Tuple
from pydantic import ConfigDict, Field
from stockroom.schemas.base import CamelModel


class CartLine(CamelModel):
    """A (menu item, quantity) pair of a cart, also stored verbatim on the sale."""
    model_config = ConfigDict(frozen=True)

    menu_item_id: str
    quantity: int = Field(gt=0)


class Sale(CamelModel):
    """Immutable record of a completed transaction."""
    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: int  # epoch milliseconds
    items: Tuple[CartLine, ...]


class SaleRequest(CamelModel):
    items: List[CartLine] = Field(..., description="Cart lines submitted together as one sale.")
