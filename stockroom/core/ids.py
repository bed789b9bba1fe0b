import uuid


def new_id(prefix: str) -> str:
    """Fresh record id, e.g. ``s3f9c0a1b2d4e`` for a stock item."""
    return f"{prefix}{uuid.uuid4().hex[:12]}"
