import pytest
from stockroom.core.errors import NotFoundError, ValidationError
from stockroom.schemas.menu import MenuItemUpdate, RecipeLineInput
from stockroom.schemas.sale import CartLine


def lines(*pairs):
    return [RecipeLineInput(stock_item_id=s, quantity=q) for s, q in pairs]


@pytest.fixture
def straw(engine):
    return engine.add_stock_item("Paper Straw", "Piece", None, 150, 30)


class TestCascade:
    def test_prunes_every_recipe_using_the_item(self, engine, straw):
        latte = engine.add_menu_item("Latte", ingredients=lines(("s2", 10), ("s1", 100), (straw.id, 1), ("s1", 5)))
        shake = engine.add_menu_item("Shake", ingredients=lines((straw.id, 1), ("s1", 300)))

        engine.remove_stock_item("s1")

        assert [i.stock_item_id for i in engine.get_menu_item(latte.id).ingredients] == ["s2", straw.id]
        assert [i.stock_item_id for i in engine.get_menu_item(shake.id).ingredients] == [straw.id]
        assert all(
            ing.stock_item_id != "s1" for item in engine.menu for ing in item.ingredients
        )
        assert engine.coordinator.dangling_references() == []

    def test_recipe_left_empty_is_kept(self, engine):
        engine.remove_stock_item("s1")

        cold_coffee = engine.get_menu_item("m1")
        assert cold_coffee.ingredients == []
        assert cold_coffee.is_active is True

    def test_emptied_recipe_cannot_be_resaved_unchanged(self, engine):
        """Known tolerated state: emptied by a cascade, but an empty list is never accepted on save."""
        engine.remove_stock_item("s1")
        with pytest.raises(ValidationError):
            engine.update_menu_item("m1", MenuItemUpdate(ingredients=[]))
        # other fields can still be edited
        assert engine.update_menu_item("m1", MenuItemUpdate(name="Retired")).name == "Retired"

    def test_unknown_item_leaves_recipes_alone(self, engine):
        before = engine.snapshot()
        with pytest.raises(NotFoundError):
            engine.remove_stock_item("s99")
        assert engine.snapshot() == before

    def test_recorded_sales_are_not_rewritten(self, engine):
        sale = engine.record_sale([CartLine(menu_item_id="m1", quantity=2)])
        engine.remove_stock_item("s1")
        assert engine.sales == (sale,)

    def test_plan_has_no_side_effects(self, engine):
        plan = engine.coordinator.plan_cascade("s1")
        assert [(item.id, kept) for item, kept in plan] == [("m1", [])]
        assert len(engine.get_menu_item("m1").ingredients) == 1
