import logging
from typing import List, Tuple
from stockroom.schemas.menu import MenuItem, RecipeIngredient
from stockroom.schemas.state import AppState

log = logging.getLogger(__name__)

# (menu item, its ingredient list once the deleted stock item is pruned)
PrunePlan = List[Tuple[MenuItem, List[RecipeIngredient]]]


class ConsistencyCoordinator:
    """
    Keeps recipes free of dangling stock references.

    The inventory ledger calls ``plan_cascade`` before it deletes a stock item
    and ``apply_cascade`` right after, with nothing in between that can fail,
    so the deletion and the pruning land together.
    """

    def __init__(self, state: AppState):
        self._state = state

    def plan_cascade(self, stock_item_id: str) -> PrunePlan:
        """Computes the pruned ingredient list of every recipe using the stock item."""
        plan = []
        for menu_item in self._state.menu:
            kept = [ing for ing in menu_item.ingredients if ing.stock_item_id != stock_item_id]
            if len(kept) != len(menu_item.ingredients):
                plan.append((menu_item, kept))
        return plan

    def apply_cascade(self, stock_item_id: str, plan: PrunePlan) -> None:
        for menu_item, kept in plan:
            menu_item.ingredients = kept
            if not kept:
                # Tolerated: the item stays listed but cannot be re-saved as is.
                log.warning(f"Menu item {menu_item.id} ({menu_item.name}) has no ingredients left.")
        if plan:
            log.info(f"Pruned stock item {stock_item_id} from {len(plan)} recipe(s).")

    def dangling_references(self) -> List[Tuple[str, str]]:
        """(menu item id, stock item id) pairs whose stock item no longer exists."""
        known = {item.id for item in self._state.stock}
        return [
            (menu_item.id, ing.stock_item_id)
            for menu_item in self._state.menu
            for ing in menu_item.ingredients
            if ing.stock_item_id not in known
        ]
