import logging
from typing import Callable, Iterable, Optional, Tuple, Union
from stockroom.schemas.menu import MenuItem, MenuItemUpdate
from stockroom.schemas.sale import CartLine, Sale
from stockroom.schemas.state import AppState, dump_state
from stockroom.schemas.stock import StockCategory, StockItem, Unit
from stockroom.services.consistency import ConsistencyCoordinator
from stockroom.services.inventory_ledger import InventoryLedger
from stockroom.services.recipe_catalog import RecipeCatalog, RecipeLines
from stockroom.services.sale_engine import Clock, SaleEngine
from stockroom.services.seed import default_state

log = logging.getLogger(__name__)

# Called with the state after every successful mutation (e.g. to persist a snapshot)
CommitHook = Callable[[AppState], None]


class InventoryEngine:
    """
    Entry point used by the calling layer.

    Wraps one ``AppState`` container and dispatches each call to the ledger,
    catalog or sale engine. Accessors hand out copies, so callers cannot
    change state except through the mutators below. Each mutator that
    succeeds fires ``on_commit`` once; a rejected call raises before any
    change and fires nothing.
    """

    def __init__(
        self,
        state: Optional[AppState] = None,
        on_commit: Optional[CommitHook] = None,
        clock: Optional[Clock] = None,
    ):
        self._state = state if state is not None else default_state()
        self._on_commit = on_commit
        self.coordinator = ConsistencyCoordinator(self._state)
        self.ledger = InventoryLedger(self._state, self.coordinator)
        self.catalog = RecipeCatalog(self._state, self.ledger)
        self.sales_engine = SaleEngine(self._state, self.ledger, self.catalog, clock=clock)

    # ----------- State accessors -----------

    @property
    def stock(self) -> Tuple[StockItem, ...]:
        return tuple(item.model_copy(deep=True) for item in self._state.stock)

    @property
    def menu(self) -> Tuple[MenuItem, ...]:
        return tuple(item.model_copy(deep=True) for item in self._state.menu)

    @property
    def sales(self) -> Tuple[Sale, ...]:
        # Sales are frozen, no copy needed
        return tuple(self._state.sales)

    def get_stock_item(self, stock_item_id: str) -> StockItem:
        return self.ledger.get(stock_item_id).model_copy(deep=True)

    def get_menu_item(self, menu_item_id: str) -> MenuItem:
        return self.catalog.get(menu_item_id).model_copy(deep=True)

    def low_stock(self) -> Tuple[StockItem, ...]:
        return tuple(item for item in self.stock if item.is_low_stock)

    def export_state(self) -> AppState:
        """Deep copy of the whole state, for reports."""
        return self._state.model_copy(deep=True)

    def snapshot(self) -> str:
        return dump_state(self._state)

    # ----------- Mutators -----------

    def add_stock_item(
        self,
        name: str,
        category: Union[StockCategory, str],
        unit: Union[Unit, str, None] = None,
        initial_quantity: float = 0,
        alert_threshold: float = 0,
    ) -> StockItem:
        item = self.ledger.add_item(name, category, unit, initial_quantity, alert_threshold)
        return self._committed(item)

    def adjust_stock_quantity(self, stock_item_id: str, delta: float) -> StockItem:
        return self._committed(self.ledger.adjust_quantity(stock_item_id, delta))

    def remove_stock_item(self, stock_item_id: str) -> StockItem:
        return self._committed(self.ledger.remove_item(stock_item_id))

    def add_menu_item(self, name: str, image_url: str = "", ingredients: RecipeLines = ()) -> MenuItem:
        return self._committed(self.catalog.add_menu_item(name, image_url, ingredients))

    def update_menu_item(self, menu_item_id: str, update: MenuItemUpdate) -> MenuItem:
        return self._committed(self.catalog.update_menu_item(menu_item_id, update))

    def set_menu_item_active(self, menu_item_id: str, is_active: bool) -> MenuItem:
        return self._committed(self.catalog.set_active(menu_item_id, is_active))

    def remove_menu_item(self, menu_item_id: str) -> MenuItem:
        return self._committed(self.catalog.remove_menu_item(menu_item_id))

    def record_sale(self, cart_lines: Iterable[Union[CartLine, dict]]) -> Sale:
        return self._committed(self.sales_engine.record_sale(cart_lines))

    def reset_all(self) -> None:
        """Replaces stock and menu with the starter data and clears the sale log."""
        fresh = default_state()
        self._state.stock = fresh.stock
        self._state.menu = fresh.menu
        self._state.sales = fresh.sales
        log.info("State reset to starter data.")
        self._committed(None)

    def _committed(self, result):
        if self._on_commit is not None:
            self._on_commit(self._state)
        if isinstance(result, (StockItem, MenuItem)):
            return result.model_copy(deep=True)
        return result
