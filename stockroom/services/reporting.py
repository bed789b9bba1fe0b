import csv
import io
from datetime import datetime, timedelta
from typing import Dict, Iterable, Optional
from stockroom.schemas.sale import Sale
from stockroom.schemas.state import AppState
from stockroom.services.sale_engine import aggregate_demand


def lifetime_consumption(state: AppState) -> Dict[str, float]:
    """
    Stock used by every recorded sale, per stock item id.

    Same aggregation as a single sale, run over the whole log against the
    current recipes; lines whose menu item was deleted are left out.
    """
    menu = {m.id: m for m in state.menu}
    return aggregate_demand((line for sale in state.sales for line in sale.items), menu)


def sales_summary(sales: Iterable[Sale], now: Optional[datetime] = None) -> Dict[str, int]:
    """
    Sale counts overall, since local midnight, and over the last 7 days,
    plus the number of units sold since midnight.
    """
    now = now or datetime.now()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    today_ms = int(midnight.timestamp() * 1000)
    week_ms = int((now - timedelta(days=7)).timestamp() * 1000)

    sales = list(sales)
    today = [s for s in sales if s.timestamp >= today_ms]
    return {
        "total_sales": len(sales),
        "today_sales": len(today),
        "week_sales": sum(1 for s in sales if s.timestamp >= week_ms),
        "items_sold_today": sum(line.quantity for s in today for line in s.items),
    }


def _fmt_time(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d %H:%M:%S")


def _fmt_qty(value: float):
    return int(value) if float(value).is_integer() else value


def render_csv_report(state: AppState, generated_at: Optional[datetime] = None) -> str:
    """Sales log followed by the inventory status, as one CSV document."""
    generated_at = generated_at or datetime.now()
    names = {m.id: m.name for m in state.menu}
    consumption = lifetime_consumption(state)

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(["TDS STOCK MANAGEMENT REPORT"])
    writer.writerow([f"Generated at: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}"])
    writer.writerow([])

    writer.writerow(["SALES LOG"])
    writer.writerow(["Timestamp", "Drink Name", "Quantity"])
    for sale in state.sales:
        for line in sale.items:
            writer.writerow([
                _fmt_time(sale.timestamp),
                names.get(line.menu_item_id, "Deleted Item"),
                line.quantity,
            ])
    writer.writerow([])

    writer.writerow(["INVENTORY STATUS"])
    writer.writerow(["Item Name", "Type", "Unit", "Remaining", "Alert Threshold", "Consumption"])
    for item in state.stock:
        writer.writerow([
            item.name,
            item.category.value,
            item.unit.value,
            _fmt_qty(item.remaining_quantity),
            _fmt_qty(item.alert_threshold),
            _fmt_qty(consumption.get(item.id, 0)),
        ])
    return out.getvalue()
