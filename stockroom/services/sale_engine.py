import logging
import time
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Union
from pydantic import ValidationError as SchemaValidationError
from stockroom.core.errors import InsufficientStockError, StockShortage, ValidationError
from stockroom.core.ids import new_id
from stockroom.schemas.menu import MenuItem
from stockroom.schemas.sale import CartLine, Sale
from stockroom.schemas.state import AppState
from stockroom.services.inventory_ledger import InventoryLedger
from stockroom.services.recipe_catalog import RecipeCatalog

log = logging.getLogger(__name__)

Clock = Callable[[], int]

# Demand summed from fractional recipe lines may overshoot stock by float noise
SHORTAGE_TOLERANCE = 1e-9


def epoch_millis() -> int:
    return int(time.time() * 1000)


def aggregate_demand(lines: Iterable[CartLine], menu: Mapping[str, MenuItem]) -> Dict[str, float]:
    """
    Total quantity required per stock item for a set of cart lines.

    Every recipe line counts, so a stock item listed twice in one recipe, or
    used by several items of the cart, is summed. Lines whose menu item no
    longer exists contribute nothing.
    """
    demand: Dict[str, float] = {}
    for line in lines:
        menu_item = menu.get(line.menu_item_id)
        if menu_item is None:
            continue
        for ing in menu_item.ingredients:
            demand[ing.stock_item_id] = demand.get(ing.stock_item_id, 0) + ing.quantity * line.quantity
    return demand


class SaleEngine:
    """
    Records sales against the inventory ledger.

    A sale runs in two phases: the whole cart's ingredient demand is computed
    and checked against stock first, then every deduction and the sale record
    are committed together. A cart that cannot be fully served changes nothing.
    """

    def __init__(
        self,
        state: AppState,
        ledger: InventoryLedger,
        catalog: RecipeCatalog,
        clock: Optional[Clock] = None,
    ):
        self._state = state
        self._ledger = ledger
        self._catalog = catalog
        self._clock = clock or epoch_millis

    def record_sale(self, cart_lines: Iterable[Union[CartLine, dict]]) -> Sale:
        lines = self._validate_cart(cart_lines)

        # --- 1. Demand for the whole cart ---
        menu = {m.id: m for m in self._state.menu}
        demand = aggregate_demand(lines, menu)

        # --- 2. All-or-nothing availability check ---
        shortages = self.find_shortages(demand)
        if shortages:
            log.warning(
                "Sale rejected: " + "; ".join(
                    f"{s.name} needs {s.required}, has {s.available}" for s in shortages
                )
            )
            raise InsufficientStockError(shortages)

        # --- 3. Commit deductions and the sale record together ---
        self._ledger.deduct(demand)
        sale = Sale(id=new_id("sl"), timestamp=self._next_timestamp(), items=tuple(lines))
        self._state.sales.append(sale)
        log.info(f"Recorded sale {sale.id}: {len(lines)} line(s), {len(demand)} stock item(s) deducted")
        return sale

    def find_shortages(self, demand: Mapping[str, float]) -> List[StockShortage]:
        """Every stock item whose remaining quantity cannot cover its demand."""
        shortages = []
        for stock_item_id, required in demand.items():
            item = self._ledger.find(stock_item_id)
            available = item.remaining_quantity if item else 0
            if required - available > SHORTAGE_TOLERANCE:
                shortages.append(StockShortage(
                    stock_item_id=stock_item_id,
                    name=item.name if item else "unknown item",
                    required=required,
                    available=available,
                ))
        return shortages

    def _validate_cart(self, cart_lines) -> List[CartLine]:
        try:
            lines = [CartLine.model_validate(line) for line in cart_lines or ()]
        except SchemaValidationError as e:
            raise ValidationError(f"Malformed cart line: {e.errors()[0]['msg']}")
        if not lines:
            raise ValidationError("Cart is empty.")
        for line in lines:
            menu_item = self._catalog.find(line.menu_item_id)
            if menu_item is not None and not menu_item.is_active:
                raise ValidationError(f"{menu_item.name} is not on sale.")
        return lines

    def _next_timestamp(self) -> int:
        # Never earlier than the last sale, so listings keep insertion order
        now = self._clock()
        if self._state.sales:
            now = max(now, self._state.sales[-1].timestamp)
        return now
