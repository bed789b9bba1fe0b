from typing import List
from pydantic import Field
from stockroom.schemas.base import CamelModel
from stockroom.schemas.menu import MenuItem
from stockroom.schemas.sale import Sale
from stockroom.schemas.stock import StockItem


class AppState(CamelModel):
    """The single state container: every collection the engine works on."""
    stock: List[StockItem] = Field(default_factory=list)
    menu: List[MenuItem] = Field(default_factory=list)
    sales: List[Sale] = Field(default_factory=list)


def dump_state(state: AppState) -> str:
    """Serialized snapshot as written to the blob store."""
    return state.model_dump_json(by_alias=True)
