import uuid


def new_id(prefix: str) -> str:
    """Short random record id, e.g. `b3f9c2a1d04e7`."""
    return f"{prefix}{uuid.uuid4().hex[:12]}"
