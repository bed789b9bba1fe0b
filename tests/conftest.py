import itertools
import pytest
from stockroom.schemas.menu import MenuItem, RecipeIngredient
from stockroom.schemas.state import AppState
from stockroom.schemas.stock import StockCategory, StockItem, Unit
from stockroom.services.engine import InventoryEngine

# 2023-11-14T22:13:20Z, one second apart per sale
BASE_TS = 1_700_000_000_000


@pytest.fixture
def state():
    """Whole Milk (s1, 200 ml) and Ice Cubes (s2, 1000 gm); Cold Coffee (m1) uses 50 ml milk."""
    return AppState(
        stock=[
            StockItem(id="s1", name="Whole Milk", category=StockCategory.LIQUID, unit=Unit.ML,
                      remaining_quantity=200, alert_threshold=20),
            StockItem(id="s2", name="Ice Cubes", category=StockCategory.SOLID, unit=Unit.GM,
                      remaining_quantity=1000, alert_threshold=100),
        ],
        menu=[
            MenuItem(id="m1", name="Cold Coffee", image_url="coffee.png", is_active=True,
                     ingredients=[RecipeIngredient(stock_item_id="s1", quantity=50, unit=Unit.ML)]),
        ],
        sales=[],
    )


@pytest.fixture
def clock():
    ticks = itertools.count(BASE_TS, 1000)
    return lambda: next(ticks)


@pytest.fixture
def engine(state, clock):
    return InventoryEngine(state, clock=clock)


@pytest.fixture
def remaining(engine):
    """Looks up the current remaining quantity of a stock item."""
    return lambda stock_item_id: engine.get_stock_item(stock_item_id).remaining_quantity
