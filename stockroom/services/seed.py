from stockroom.schemas.menu import MenuItem, RecipeIngredient
from stockroom.schemas.state import AppState
from stockroom.schemas.stock import StockCategory, StockItem, Unit

COLD_COFFEE_IMAGE = "https://images.unsplash.com/photo-1517701604599-bb29b565090c?auto=format&fit=crop&q=80&w=400"
ICED_CHOCOLATE_IMAGE = "https://images.unsplash.com/photo-1544145945-f904253d0c71?auto=format&fit=crop&q=80&w=400"


def _stock(id, name, category, unit, remaining, threshold):
    return StockItem(
        id=id, name=name, category=category, unit=unit,
        remaining_quantity=remaining, alert_threshold=threshold,
    )


def _line(stock_item_id, quantity, unit):
    return RecipeIngredient(stock_item_id=stock_item_id, quantity=quantity, unit=unit)


def default_state() -> AppState:
    """Fresh copy of the starter stock and menu, with no sales."""
    stock = [
        _stock("s1", "Whole Milk", StockCategory.LIQUID, Unit.ML, 5000, 1000),
        _stock("s2", "Coffee Syrup", StockCategory.LIQUID, Unit.ML, 2500, 500),
        _stock("s3", "Chocolate Powder", StockCategory.POWDER, Unit.GM, 1000, 200),
        _stock("s4", "Ice Cubes", StockCategory.SOLID, Unit.GM, 10000, 2000),
        _stock("s5", "Standard Cup", StockCategory.PIECE, Unit.PCS, 100, 20),
        _stock("s6", "Paper Straw", StockCategory.PIECE, Unit.PCS, 150, 30),
    ]
    menu = [
        MenuItem(
            id="m1", name="Cold Coffee", image_url=COLD_COFFEE_IMAGE, is_active=True,
            ingredients=[
                _line("s1", 200, Unit.ML),
                _line("s2", 30, Unit.ML),
                _line("s4", 150, Unit.GM),
                _line("s5", 1, Unit.PCS),
                _line("s6", 1, Unit.PCS),
            ],
        ),
        MenuItem(
            id="m2", name="Iced Chocolate", image_url=ICED_CHOCOLATE_IMAGE, is_active=True,
            ingredients=[
                _line("s1", 250, Unit.ML),
                _line("s3", 40, Unit.GM),
                _line("s4", 120, Unit.GM),
                _line("s5", 1, Unit.PCS),
                _line("s6", 1, Unit.PCS),
            ],
        ),
    ]
    return AppState(stock=stock, menu=menu, sales=[])
