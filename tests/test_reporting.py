from datetime import datetime, timedelta
from stockroom.schemas.menu import RecipeLineInput
from stockroom.schemas.sale import CartLine, Sale
from stockroom.services.reporting import lifetime_consumption, render_csv_report, sales_summary


def sell(engine, menu_item_id, quantity):
    return engine.record_sale([CartLine(menu_item_id=menu_item_id, quantity=quantity)])


def test_consumption_sums_the_whole_log(engine):
    frappe = engine.add_menu_item("Frappe", ingredients=[
        RecipeLineInput(stock_item_id="s1", quantity=10),
        RecipeLineInput(stock_item_id="s2", quantity=100),
        RecipeLineInput(stock_item_id="s1", quantity=5),
    ])
    sell(engine, "m1", 2)
    sell(engine, frappe.id, 3)

    assert lifetime_consumption(engine.export_state()) == {"s1": 145, "s2": 300}


def test_consumption_skips_deleted_menu_items(engine):
    sell(engine, "m1", 1)
    engine.remove_menu_item("m1")
    assert lifetime_consumption(engine.export_state()) == {}


def test_sales_summary_windows():
    now = datetime(2026, 10, 19, 12, 0, 0)

    def at(moment, quantity=1):
        return Sale(id=f"sl{moment:%j%H}", timestamp=int(moment.timestamp() * 1000),
                    items=(CartLine(menu_item_id="m1", quantity=quantity),))

    sales = [
        at(now - timedelta(days=30)),
        at(now - timedelta(days=3), quantity=5),
        at(now.replace(hour=0, minute=0) + timedelta(minutes=1)),
        at(now - timedelta(hours=1), quantity=3),
    ]
    assert sales_summary(sales, now=now) == {
        "total_sales": 4, "today_sales": 2, "week_sales": 3, "items_sold_today": 4,
    }


def test_items_sold_today_counts_every_cart_line(engine):
    engine.record_sale([CartLine(menu_item_id="m1", quantity=1), CartLine(menu_item_id="gone", quantity=2)])
    sale = engine.sales[0]
    now = datetime.fromtimestamp(sale.timestamp / 1000)
    assert sales_summary(engine.sales, now=now)["items_sold_today"] == 3


def test_csv_report(engine):
    sell(engine, "m1", 3)
    engine.remove_menu_item("m1")

    report = render_csv_report(engine.export_state(), generated_at=datetime(2026, 10, 19, 9, 30))
    rows = report.splitlines()

    assert rows[0] == "TDS STOCK MANAGEMENT REPORT"
    assert rows[1] == "Generated at: 2026-10-19 09:30:00"
    assert "Timestamp,Drink Name,Quantity" in rows
    sales_row = rows[rows.index("Timestamp,Drink Name,Quantity") + 1]
    assert sales_row.endswith(",Deleted Item,3")
    assert "Item Name,Type,Unit,Remaining,Alert Threshold,Consumption" in rows
    assert "Whole Milk,Liquid,ml,50,20,0" in rows
    assert "Ice Cubes,Solid,gm,1000,100,0" in rows
