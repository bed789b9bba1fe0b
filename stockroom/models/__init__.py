# stockroom/models/__init__.py
from .state_blob import StateBlob

# Export all models
__all__ = [
    "StateBlob",
]
