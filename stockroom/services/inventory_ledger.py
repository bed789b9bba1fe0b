import logging
from typing import Mapping, Optional, Union
from stockroom.core.checks import require_finite, require_name, require_number
from stockroom.core.errors import NotFoundError, ValidationError
from stockroom.core.ids import new_id
from stockroom.schemas.state import AppState
from stockroom.schemas.stock import DEFAULT_UNITS, StockCategory, StockItem, Unit
from stockroom.services.consistency import ConsistencyCoordinator

log = logging.getLogger(__name__)


class InventoryLedger:
    """Owns the stock items of the state container and their remaining quantities."""

    def __init__(self, state: AppState, coordinator: ConsistencyCoordinator):
        self._state = state
        self._coordinator = coordinator

    def find(self, stock_item_id: str) -> Optional[StockItem]:
        return next((s for s in self._state.stock if s.id == stock_item_id), None)

    def get(self, stock_item_id: str) -> StockItem:
        item = self.find(stock_item_id)
        if item is None:
            raise NotFoundError("Stock item", stock_item_id)
        return item

    def add_item(
        self,
        name: str,
        category: Union[StockCategory, str],
        unit: Union[Unit, str, None] = None,
        initial_quantity: float = 0,
        alert_threshold: float = 0,
    ) -> StockItem:
        name = require_name(name, "Stock item")
        try:
            category = StockCategory(category)
        except ValueError:
            raise ValidationError(f"Unknown stock category: {category}.")
        if unit is None:
            unit = DEFAULT_UNITS[category]
        try:
            unit = Unit(unit)
        except ValueError:
            raise ValidationError(f"Unknown unit: {unit}.")
        initial_quantity = require_number(initial_quantity, "Initial quantity")
        alert_threshold = require_number(alert_threshold, "Alert threshold")

        item = StockItem(
            id=new_id("s"),
            name=name,
            category=category,
            unit=unit,
            remaining_quantity=initial_quantity,
            alert_threshold=alert_threshold,
        )
        self._state.stock.append(item)
        log.info(f"Added stock item {item.id} ({item.name}): {initial_quantity} {unit.value}")
        return item

    def adjust_quantity(self, stock_item_id: str, delta: float) -> StockItem:
        """
        Adds ``delta`` to the remaining quantity. A removal larger than what is
        left lands the item at exactly zero; the excess is absorbed, not an error.
        """
        delta = require_finite(delta, "Quantity adjustment")
        item = self.get(stock_item_id)
        item.remaining_quantity = max(0.0, item.remaining_quantity + delta)
        log.info(f"Adjusted stock item {item.id} by {delta}: now {item.remaining_quantity}")
        return item

    def deduct(self, demand: Mapping[str, float]) -> None:
        """Subtracts an already validated demand map, one stock item per entry."""
        resolved = [(self.get(stock_item_id), amount) for stock_item_id, amount in demand.items()]
        for item, amount in resolved:
            was_low = item.is_low_stock
            item.remaining_quantity = max(0.0, item.remaining_quantity - amount)
            if item.is_low_stock and not was_low:
                log.warning(
                    f"ALERT: Low stock for {item.name} ({item.id}): "
                    f"{item.remaining_quantity} {item.unit.value} left"
                )

    def remove_item(self, stock_item_id: str) -> StockItem:
        """Deletes the stock item and prunes it from every recipe in the same step."""
        item = self.get(stock_item_id)
        plan = self._coordinator.plan_cascade(stock_item_id)
        self._state.stock = [s for s in self._state.stock if s.id != stock_item_id]
        self._coordinator.apply_cascade(stock_item_id, plan)
        log.info(f"Removed stock item {item.id} ({item.name})")
        return item
