from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional


class InventoryError(Exception):
    """Base class for every rejection raised by the engine."""
    code = "inventory_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def details(self) -> Optional[Any]:
        return None


class ValidationError(InventoryError):
    """Malformed input: empty name, non-positive quantity, empty recipe, unknown reference."""
    code = "validation_error"


class NotFoundError(InventoryError):
    code = "not_found"

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found.")

    def details(self) -> Dict[str, str]:
        return {"entity": self.entity, "id": self.entity_id}


@dataclass(frozen=True)
class StockShortage:
    """One deficient stock item in a rejected sale."""
    stock_item_id: str
    name: str
    required: float
    available: float

    @property
    def shortfall(self) -> float:
        return self.required - self.available

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["shortfall"] = self.shortfall
        return data


class InsufficientStockError(InventoryError):
    code = "insufficient_stock"

    def __init__(self, shortages: List[StockShortage]):
        self.shortages = list(shortages)
        names = ", ".join(s.name for s in self.shortages)
        super().__init__(f"Insufficient stock for {names}!")

    def details(self) -> List[Dict[str, Any]]:
        return [s.to_dict() for s in self.shortages]
