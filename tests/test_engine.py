import pytest
from unittest.mock import MagicMock
from stockroom.core.errors import InsufficientStockError, NotFoundError, ValidationError
from stockroom.schemas.menu import MenuItemUpdate, RecipeLineInput
from stockroom.schemas.sale import CartLine
from stockroom.schemas.state import AppState
from stockroom.services.engine import InventoryEngine


@pytest.fixture
def hook():
    return MagicMock()


@pytest.fixture
def hooked(state, clock, hook):
    return InventoryEngine(state, on_commit=hook, clock=clock)


def test_default_engine_starts_from_starter_data():
    engine = InventoryEngine()
    assert len(engine.stock) == 6
    assert [m.name for m in engine.menu] == ["Cold Coffee", "Iced Chocolate"]
    assert engine.sales == ()


def test_commit_hook_fires_once_per_successful_mutation(hooked, hook, state):
    item = hooked.add_stock_item("Cup", "Piece", None, 10, 2)
    hooked.adjust_stock_quantity(item.id, -1)
    menu_item = hooked.add_menu_item("Cup of Milk", ingredients=[RecipeLineInput(stock_item_id="s1", quantity=10)])
    hooked.update_menu_item(menu_item.id, MenuItemUpdate(name="Glass of Milk"))
    hooked.set_menu_item_active(menu_item.id, False)
    hooked.record_sale([CartLine(menu_item_id="m1", quantity=1)])
    hooked.remove_menu_item(menu_item.id)
    hooked.remove_stock_item(item.id)
    hooked.reset_all()

    assert hook.call_count == 9
    hook.assert_called_with(state)


def test_rejected_calls_do_not_fire_hook(hooked, hook):
    with pytest.raises(ValidationError):
        hooked.add_stock_item("", "Piece")
    with pytest.raises(NotFoundError):
        hooked.adjust_stock_quantity("ghost", 1)
    with pytest.raises(InsufficientStockError):
        hooked.record_sale([CartLine(menu_item_id="m1", quantity=50)])
    with pytest.raises(ValidationError):
        hooked.record_sale([])

    hook.assert_not_called()


def test_accessors_return_copies(engine, remaining):
    engine.stock[0].remaining_quantity = -1
    engine.menu[0].ingredients.clear()
    returned = engine.adjust_stock_quantity("s1", 0)
    returned.remaining_quantity = 999

    assert remaining("s1") == 200
    assert len(engine.get_menu_item("m1").ingredients) == 1


def test_reset_all_restores_starter_data(engine):
    engine.record_sale([CartLine(menu_item_id="m1", quantity=1)])
    engine.remove_stock_item("s2")

    engine.reset_all()

    assert [s.id for s in engine.stock] == ["s1", "s2", "s3", "s4", "s5", "s6"]
    assert engine.get_stock_item("s1").name == "Whole Milk"
    assert engine.get_stock_item("s1").remaining_quantity == 5000
    assert [m.id for m in engine.menu] == ["m1", "m2"]
    assert engine.sales == ()
    # the engine keeps working on the reset state
    engine.record_sale([CartLine(menu_item_id="m2", quantity=2)])
    assert engine.get_stock_item("s3").remaining_quantity == 920


def test_export_state_is_detached(engine):
    exported = engine.export_state()
    assert isinstance(exported, AppState)
    exported.stock.clear()
    assert len(engine.stock) == 2
