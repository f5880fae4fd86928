from __future__ import annotations

import uuid


def new_id() -> str:
    """Short random identifier used for every record the engine creates."""
    return uuid.uuid4().hex[:16]
