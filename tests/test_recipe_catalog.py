import pytest
from stockroom.core.errors import NotFoundError, ValidationError
from stockroom.schemas.menu import MenuItemUpdate, RecipeLineInput
from stockroom.schemas.stock import Unit


def line(stock_item_id, quantity):
    return RecipeLineInput(stock_item_id=stock_item_id, quantity=quantity)


class TestAddMenuItem:
    def test_copies_unit_from_stock_and_defaults_active(self, engine):
        item = engine.add_menu_item("Iced Latte", "latte.png", [line("s1", 150), line("s2", 80)])

        assert item.id.startswith("m")
        assert item.is_active is True
        assert [(i.stock_item_id, i.quantity, i.unit) for i in item.ingredients] == [
            ("s1", 150, Unit.ML),
            ("s2", 80, Unit.GM),
        ]

    def test_accepts_dict_lines(self, engine):
        item = engine.add_menu_item("Milk", ingredients=[{"stockItemId": "s1", "quantity": 100}])
        assert item.ingredients[0].stock_item_id == "s1"

    def test_keeps_duplicate_lines(self, engine):
        item = engine.add_menu_item("Double Milk", ingredients=[line("s1", 10), line("s1", 5)])
        assert [i.quantity for i in item.ingredients] == [10, 5]

    @pytest.mark.parametrize("name, lines", [
        ("", [line("s1", 10)]),
        ("Empty", []),
        ("Zero", [line("s1", 0)]),
        ("Negative", [line("s1", 10), line("s2", -3)]),
        ("Dangling", [line("s1", 10), line("s404", 1)]),
    ])
    def test_rejects_invalid_input(self, engine, name, lines):
        with pytest.raises(ValidationError):
            engine.add_menu_item(name, ingredients=lines)
        assert [m.id for m in engine.menu] == ["m1"]


class TestUpdateMenuItem:
    def test_merges_only_given_fields(self, engine):
        item = engine.update_menu_item("m1", MenuItemUpdate(name="Cold Brew"))

        assert item.name == "Cold Brew"
        assert item.image_url == "coffee.png"
        assert item.ingredients[0].quantity == 50

    def test_ingredients_fully_replaced(self, engine):
        item = engine.update_menu_item("m1", MenuItemUpdate(ingredients=[line("s2", 30)]))
        assert [(i.stock_item_id, i.unit) for i in item.ingredients] == [("s2", Unit.GM)]

    def test_failed_update_changes_nothing(self, engine):
        before = engine.get_menu_item("m1")
        with pytest.raises(ValidationError):
            engine.update_menu_item("m1", MenuItemUpdate(name="Renamed", ingredients=[]))
        assert engine.get_menu_item("m1") == before

    def test_blank_name_rejected(self, engine):
        with pytest.raises(ValidationError):
            engine.update_menu_item("m1", MenuItemUpdate(name=" "))

    def test_unknown_id(self, engine):
        with pytest.raises(NotFoundError):
            engine.update_menu_item("m9", MenuItemUpdate(name="x"))


class TestActiveAndRemove:
    def test_set_active_keeps_recipe(self, engine):
        item = engine.set_menu_item_active("m1", False)
        assert item.is_active is False
        assert len(item.ingredients) == 1
        assert engine.set_menu_item_active("m1", True).is_active is True

    def test_update_can_toggle_active(self, engine):
        assert engine.update_menu_item("m1", MenuItemUpdate(is_active=False)).is_active is False

    def test_remove(self, engine):
        engine.remove_menu_item("m1")
        assert engine.menu == ()
        with pytest.raises(NotFoundError):
            engine.remove_menu_item("m1")
