import logging
from typing import Iterable, List, Optional, Union
from pydantic import ValidationError as SchemaValidationError
from stockroom.core.checks import require_name, require_number
from stockroom.core.errors import NotFoundError, ValidationError
from stockroom.core.ids import new_id
from stockroom.schemas.menu import MenuItem, MenuItemUpdate, RecipeIngredient, RecipeLineInput
from stockroom.schemas.state import AppState
from stockroom.services.inventory_ledger import InventoryLedger

log = logging.getLogger(__name__)

RecipeLines = Iterable[Union[RecipeLineInput, dict]]


class RecipeCatalog:
    """Owns the menu items; recipes hold stock item ids, never stock item copies."""

    def __init__(self, state: AppState, ledger: InventoryLedger):
        self._state = state
        self._ledger = ledger

    def find(self, menu_item_id: str) -> Optional[MenuItem]:
        return next((m for m in self._state.menu if m.id == menu_item_id), None)

    def get(self, menu_item_id: str) -> MenuItem:
        item = self.find(menu_item_id)
        if item is None:
            raise NotFoundError("Menu item", menu_item_id)
        return item

    def build_recipe(self, lines: RecipeLines) -> List[RecipeIngredient]:
        """
        Validates authored recipe lines and resolves each line's unit from the
        stock item it points to. Duplicate stock items are kept as separate lines.
        """
        try:
            lines = [RecipeLineInput.model_validate(line) for line in lines or ()]
        except SchemaValidationError as e:
            raise ValidationError(f"Malformed recipe line: {e.errors()[0]['msg']}")
        if not lines:
            raise ValidationError("A recipe needs at least one ingredient.")

        recipe = []
        for position, line in enumerate(lines, start=1):
            require_number(line.quantity, f"Ingredient {position} quantity", allow_zero=False)
            stock_item = self._ledger.find(line.stock_item_id)
            if stock_item is None:
                raise ValidationError(f"Ingredient {position} references unknown stock item {line.stock_item_id}.")
            recipe.append(RecipeIngredient(
                stock_item_id=stock_item.id,
                quantity=line.quantity,
                unit=stock_item.unit,
            ))
        return recipe

    def add_menu_item(self, name: str, image_url: str = "", ingredients: RecipeLines = ()) -> MenuItem:
        name = require_name(name, "Menu item")
        recipe = self.build_recipe(ingredients)
        item = MenuItem(
            id=new_id("m"),
            name=name,
            image_url=image_url or "",
            is_active=True,
            ingredients=recipe,
        )
        self._state.menu.append(item)
        log.info(f"Added menu item {item.id} ({item.name}) with {len(recipe)} ingredient line(s)")
        return item

    def update_menu_item(self, menu_item_id: str, update: MenuItemUpdate) -> MenuItem:
        """Merges the fields set on ``update``; a new ingredient list replaces the old one."""
        item = self.get(menu_item_id)
        changes = update.model_dump(exclude_unset=True, exclude_none=True)

        if "name" in changes:
            changes["name"] = require_name(changes["name"], "Menu item")
        if "ingredients" in changes:
            changes["ingredients"] = self.build_recipe(update.ingredients)

        # Everything is validated before the record is touched
        for field, value in changes.items():
            setattr(item, field, value)
        log.info(f"Updated menu item {item.id}: {', '.join(sorted(changes)) or 'no changes'}")
        return item

    def set_active(self, menu_item_id: str, is_active: bool) -> MenuItem:
        item = self.get(menu_item_id)
        item.is_active = bool(is_active)
        log.info(f"Menu item {item.id} is now {'active' if item.is_active else 'inactive'}")
        return item

    def remove_menu_item(self, menu_item_id: str) -> MenuItem:
        """Deletes the menu item; recorded sales keep its id."""
        item = self.get(menu_item_id)
        self._state.menu = [m for m in self._state.menu if m.id != menu_item_id]
        log.info(f"Removed menu item {item.id} ({item.name})")
        return item
