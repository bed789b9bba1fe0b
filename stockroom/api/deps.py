from fastapi import Request
from stockroom.services.engine import InventoryEngine


def get_engine(request: Request) -> InventoryEngine:
    """The engine built at startup (see ``stockroom.main.lifespan``)."""
    return request.app.state.engine
